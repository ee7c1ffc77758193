from __future__ import annotations

import typing as t

from stmtguard.constants import STATEMENT_TERMINATOR


def normalize_statement(stmt: str) -> str | None:
    """
    Trim *stmt* and make it end with ``;``.  Returns ``None`` when nothing
    but whitespace and semicolons is left, so a bare ``;`` is dropped too.
    """
    text = stmt.strip()
    if not text.rstrip(STATEMENT_TERMINATOR).strip():
        return None
    if not text.endswith(STATEMENT_TERMINATOR):
        text += STATEMENT_TERMINATOR
    return text


def normalize_statements(statements: t.Iterable[str]) -> list[str]:
    """
    Normalise every statement in order, dropping empty ones.  Running it on
    its own output returns the same list.
    """
    out: list[str] = []
    for stmt in statements:
        norm = normalize_statement(stmt)
        if norm is not None:
            out.append(norm)
    return out
