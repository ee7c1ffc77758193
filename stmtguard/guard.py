"""
Destructive‑statement guard.

A deliberately blunt check: each statement is upper‑cased and searched for
every forbidden phrase as a plain substring.  Hits inside string literals,
quoted identifiers or comments count too.
"""
from __future__ import annotations

import typing as t

from stmtguard.constants import FORBIDDEN_KEYWORDS


class BatchError(RuntimeError):
    """Raised when a statement batch must not be executed."""


class GuardViolation(BatchError):
    """A statement in the batch contains a forbidden keyword."""

    def __init__(self, statement: str, keyword: str) -> None:
        super().__init__(f"Blocked potentially destructive statement: {statement}")
        self.statement: str = statement
        self.keyword: str = keyword


def blocked_keyword(
    statement: str, keywords: t.Sequence[str] = FORBIDDEN_KEYWORDS
) -> str | None:
    """Return the first keyword found in *statement*, else ``None``."""
    normalized = statement.upper()
    for kw in keywords:
        if kw.upper() in normalized:
            return kw
    return None


def should_block_statement(
    statement: str, keywords: t.Sequence[str] = FORBIDDEN_KEYWORDS
) -> bool:
    return blocked_keyword(statement, keywords) is not None


def enforce_guards(
    statements: t.Iterable[str], keywords: t.Sequence[str] = FORBIDDEN_KEYWORDS
) -> None:
    """Raise :class:`GuardViolation` for the first offending statement."""
    for stmt in statements:
        kw = blocked_keyword(stmt, keywords)
        if kw is not None:
            raise GuardViolation(stmt, kw)
