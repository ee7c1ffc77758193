"""
Run an already prepared batch on one connection and collect what the server
reports for every statement: command tag, rows, timing and notices.
"""
from __future__ import annotations

import dataclasses
import logging
import time
import typing as t

logger = logging.getLogger(__name__)


@dataclasses.dataclass
class StatementResult:
    statement: str
    command: str | None
    row_count: int
    duration_ms: float
    fields: list[dict[str, t.Any]]
    rows: list[tuple]
    text: str = ""


@dataclasses.dataclass
class ExecutionReport:
    statements: list[str]
    notices: list[str] = dataclasses.field(default_factory=list)
    results: list[StatementResult] = dataclasses.field(default_factory=list)
    execution_time_ms: float = 0.0

    def as_dict(self) -> dict[str, t.Any]:
        return dataclasses.asdict(self)


def _command(status: str | None) -> str | None:
    # "INSERT 0 3" -> "INSERT", "CREATE TABLE" -> "CREATE"
    return status.split()[0] if status else None


def execute_statements(conn, statements: t.Sequence[str]) -> ExecutionReport:
    """
    Execute *statements* sequentially on *conn* (a psycopg connection).

    Database errors propagate; the notice handler is detached either way.
    Transaction handling is left to the caller.
    """
    report = ExecutionReport(statements=list(statements))
    bucket: list[str] = []

    def on_notice(diag) -> None:
        msg = diag.message_primary
        if msg:
            report.notices.append(msg)
            bucket.append(msg)

    conn.add_notice_handler(on_notice)
    batch_start = time.perf_counter()
    try:
        for stmt in statements:
            trimmed = stmt.strip() if isinstance(stmt, str) else ""
            if not trimmed:
                continue

            bucket.clear()
            logger.debug("Executing %s", trimmed)
            start = time.perf_counter()
            with conn.cursor() as cur:
                cur.execute(trimmed)
                rows = cur.fetchall() if cur.description else []
                fields = [
                    {"name": col.name, "type_code": col.type_code}
                    for col in (cur.description or [])
                ]
                status = cur.statusmessage
                row_count = max(cur.rowcount, 0)
            duration_ms = (time.perf_counter() - start) * 1000

            report.results.append(
                StatementResult(
                    statement=trimmed,
                    command=_command(status),
                    row_count=row_count,
                    duration_ms=duration_ms,
                    fields=fields,
                    rows=rows,
                    text="\n".join(bucket),
                )
            )
    finally:
        conn.remove_notice_handler(on_notice)
        report.execution_time_ms = (time.perf_counter() - batch_start) * 1000

    return report
