"""
Lexical contexts the segmenter can be in.

Each context is its own frozen class, so a scanner position is always in
exactly one of them.  Only :class:`InDollarQuote` carries data (its tag).
"""
from __future__ import annotations

import dataclasses
import typing as t


@dataclasses.dataclass(frozen=True)
class Normal:
    """Plain SQL text – the only context in which ``;`` ends a statement."""


@dataclasses.dataclass(frozen=True)
class InLineComment:
    """``-- …`` up to (and including) the next newline."""


@dataclasses.dataclass(frozen=True)
class InBlockComment:
    """``/* … */`` (not nested)."""


@dataclasses.dataclass(frozen=True)
class InSingleQuotedLiteral:
    """``'…'`` with ``''`` as the escaped quote."""


@dataclasses.dataclass(frozen=True)
class InDoubleQuotedIdentifier:
    """``"…"`` with ``""`` as the escaped quote."""


@dataclasses.dataclass(frozen=True)
class InDollarQuote:
    """``$tag$ … $tag$`` body; closed only by the exact same tag."""

    tag: str


LexicalState = t.Union[
    Normal,
    InLineComment,
    InBlockComment,
    InSingleQuotedLiteral,
    InDoubleQuotedIdentifier,
    InDollarQuote,
]

NORMAL = Normal()
LINE_COMMENT = InLineComment()
BLOCK_COMMENT = InBlockComment()
SINGLE_QUOTED = InSingleQuotedLiteral()
DOUBLE_QUOTED = InDoubleQuotedIdentifier()


def describe(state: LexicalState) -> str:
    """Human‑readable name used in warnings."""
    if isinstance(state, InDollarQuote):
        return f"dollar-quoted block {state.tag}"
    return {
        Normal: "plain SQL",
        InLineComment: "line comment",
        InBlockComment: "block comment",
        InSingleQuotedLiteral: "single-quoted literal",
        InDoubleQuotedIdentifier: "double-quoted identifier",
    }[type(state)]
