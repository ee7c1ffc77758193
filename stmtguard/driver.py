from __future__ import annotations
from contextlib import contextmanager
import typing as t

import psycopg

from stmtguard.config import Environment


@contextmanager
def connection(env: Environment) -> t.Iterator[psycopg.Connection]:
    """
    Context‑manager that yields an open connection to *env*.  The work done
    inside the block is committed on success and rolled back on error.
    """
    conn = psycopg.connect(**env.dsn())
    try:
        yield conn
        conn.commit()
    except BaseException:
        conn.rollback()
        raise
    finally:
        conn.close()
