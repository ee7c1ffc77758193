"""
Turn a caller payload (raw ``sql`` text or a ``statements`` list) into the
list of statements that may be handed to the executor.
"""
from __future__ import annotations

import typing as t

from stmtguard.constants import FORBIDDEN_KEYWORDS
from stmtguard.guard import BatchError, enforce_guards
from stmtguard.normalize import normalize_statements
from stmtguard.segment import split_sql


class EmptyBatchError(BatchError):
    """The payload contained no statements at all."""


def coerce_statements(
    statements: t.Sequence[str] | str | None = None,
    sql: str | None = None,
) -> list:
    """
    Pick the statement source: non‑blank *sql* text wins, then a non‑empty
    *statements* list, then *statements* given as one string.  Any other
    payload type yields an empty list.
    """
    if isinstance(sql, str) and sql.strip():
        return split_sql(sql)

    if isinstance(statements, str):
        return split_sql(statements) if statements.strip() else []

    if isinstance(statements, (list, tuple)):
        return list(statements)

    return []


def validate_statements(statements: t.Sequence) -> None:
    if not statements:
        raise EmptyBatchError("No SQL statements were provided for execution.")

    for stmt in statements:
        if not isinstance(stmt, str) or not stmt.strip():
            raise BatchError("Statements must be non-empty strings.")


def prepare_batch(
    statements: t.Sequence[str] | str | None = None,
    sql: str | None = None,
    *,
    keywords: t.Sequence[str] = FORBIDDEN_KEYWORDS,
    allow_destructive: bool = False,
) -> list[str]:
    """
    Coerce, validate, normalise and guard a payload.  Either the complete
    list comes back or an exception is raised; nothing is executed here.
    """
    batch = coerce_statements(statements, sql)
    validate_statements(batch)
    batch = normalize_statements(batch)
    if not batch:
        raise EmptyBatchError("No SQL statements were provided for execution.")

    if not allow_destructive:
        enforce_guards(batch, keywords)

    return batch
