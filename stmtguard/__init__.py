"""
stmtguard – split raw SQL / PL/pgSQL text into executable statements and
refuse destructive batches before anything runs.
"""
from __future__ import annotations

__version__ = "0.1.0"
