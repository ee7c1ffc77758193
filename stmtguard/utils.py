"""
Generic helpers that are reused across sub‑modules.
"""
from __future__ import annotations
import sqlparse


def statement_type(stmt: str) -> str:
    """
    Return the statement kind sqlparse recognises (``SELECT``, ``INSERT``,
    ``CREATE`` …) or ``UNKNOWN``.
    """
    parsed = sqlparse.parse(stmt)
    if not parsed:
        return "UNKNOWN"
    return parsed[0].get_type()
