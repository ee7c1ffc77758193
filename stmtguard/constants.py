from __future__ import annotations

# Checked in this order against the upper‑cased statement text.
FORBIDDEN_KEYWORDS: tuple[str, ...] = (
    "DROP TABLE",
    "DROP DATABASE",
    "TRUNCATE",
    "ALTER SYSTEM",
    "ALTER DATABASE",
    "DROP SCHEMA",
)

STATEMENT_TERMINATOR = ";"

DEFAULT_CONFIG_FILE = "stmtguard.config.yml"
DEFAULT_PORT = 5432
DEFAULT_CONNECT_TIMEOUT = 10  # seconds
