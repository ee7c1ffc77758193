"""
Single‑pass statement splitter.

The scanner walks the script once, copying every character into the
statement being built and switching lexical context as it goes.  Only a
``;`` seen in plain SQL ends a statement; semicolons inside literals,
quoted identifiers, comments and dollar‑quoted bodies are kept as text.
"""
from __future__ import annotations

import dataclasses
import logging

from stmtguard.constants import STATEMENT_TERMINATOR
from stmtguard.segment.states import (
    BLOCK_COMMENT,
    DOUBLE_QUOTED,
    LINE_COMMENT,
    NORMAL,
    SINGLE_QUOTED,
    InBlockComment,
    InDollarQuote,
    InLineComment,
    LexicalState,
    Normal,
    describe,
)
from stmtguard.segment.tags import read_dollar_tag

logger = logging.getLogger(__name__)

_QUOTE_STATES: dict[str, LexicalState] = {"'": SINGLE_QUOTED, '"': DOUBLE_QUOTED}
_QUOTE_CHARS: dict[LexicalState, str] = {v: k for k, v in _QUOTE_STATES.items()}


@dataclasses.dataclass
class Segmentation:
    """Statements found in one script plus the context the scan ended in."""

    statements: list[str]
    open_state: LexicalState = NORMAL

    @property
    def unterminated(self) -> bool:
        # A trailing line comment is closed by end of input.
        return not isinstance(self.open_state, (Normal, InLineComment))


def segment(sql: str) -> Segmentation:
    """
    Split *sql* into trimmed, ``;``‑terminated statements.

    Never raises on malformed quoting: whatever is still open at the end of
    the text is folded into the last statement and reported through
    :attr:`Segmentation.open_state`.  Segments holding nothing but
    whitespace or closed comments are dropped.
    """
    statements: list[str] = []
    buf: list[str] = []
    has_code = False
    state: LexicalState = NORMAL
    i, n = 0, len(sql)

    while i < n:
        ch = sql[i]
        pair = sql[i:i + 2]

        if isinstance(state, InLineComment):
            buf.append(ch)
            i += 1
            if ch == "\n":
                state = NORMAL
            continue

        if isinstance(state, InBlockComment):
            if pair == "*/":
                buf.append(pair)
                i += 2
                state = NORMAL
            else:
                buf.append(ch)
                i += 1
            continue

        if isinstance(state, InDollarQuote):
            if sql.startswith(state.tag, i):
                buf.append(state.tag)
                i += len(state.tag)
                state = NORMAL
            else:
                buf.append(ch)
                i += 1
            continue

        quote = _QUOTE_CHARS.get(state)
        if quote is not None:
            if pair == quote * 2:
                buf.append(pair)
                i += 2
                continue
            buf.append(ch)
            i += 1
            if ch == quote:
                state = NORMAL
            continue

        # ---- plain SQL -------------------------------------------------- #
        if pair == "--" or pair == "/*":
            state = LINE_COMMENT if pair == "--" else BLOCK_COMMENT
            buf.append(pair)
            i += 2
            continue

        if ch == STATEMENT_TERMINATOR:
            if has_code:
                buf.append(ch)
                statements.append("".join(buf).strip())
            buf = []
            has_code = False
            i += 1
            continue

        if not ch.isspace():
            has_code = True

        if ch == "$":
            tag = read_dollar_tag(sql, i)
            if tag is not None:
                state = InDollarQuote(tag)
                buf.append(tag)
                i += len(tag)
                continue
        elif ch in _QUOTE_STATES:
            state = _QUOTE_STATES[ch]

        buf.append(ch)
        i += 1

    result = Segmentation(statements, state)
    tail = "".join(buf).strip()
    # An open block comment counts as content so its text is not lost.
    if tail and (has_code or result.unterminated):
        if not tail.endswith(STATEMENT_TERMINATOR):
            tail += STATEMENT_TERMINATOR
        statements.append(tail)

    return result


def split_sql(sql: str) -> list[str]:
    """
    Return the statements of *sql*; logs a warning when the script ends
    inside a literal, identifier, block comment or dollar‑quoted body.
    """
    result = segment(sql)
    if result.unterminated:
        logger.warning(
            "SQL text ends inside an unterminated %s; the remainder was kept "
            "in the last statement",
            describe(result.open_state),
        )
    return result.statements
