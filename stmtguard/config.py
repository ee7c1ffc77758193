from __future__ import annotations
import os
import pathlib
import re
import typing as t
import yaml

from stmtguard.constants import DEFAULT_CONFIG_FILE, DEFAULT_CONNECT_TIMEOUT, DEFAULT_PORT

_DEFAULT_PATH = pathlib.Path(DEFAULT_CONFIG_FILE)
_LOCAL_HOST_RE = re.compile(r"localhost|127\.0\.0\.1")


class ConfigError(RuntimeError):
    """Raised for any user‑visible configuration problem."""


def _expand(raw: t.Any) -> t.Any:
    """Resolve ``${ENV_VAR}`` values; anything else is returned unchanged."""
    if isinstance(raw, str) and raw.startswith("${") and raw.endswith("}"):
        name = raw[2:-1]
        value = os.getenv(name)
        if value is None:
            raise ConfigError(f"Environment variable {name} is not set")
        return value
    return raw


def _default_sslmode(target: str) -> str:
    if os.getenv("DATABASE_SSL", "").lower() == "false":
        return "disable"
    return "disable" if _LOCAL_HOST_RE.search(target or "") else "require"


class Environment:
    """
    A thin value‑object holding the attributes required to open a
    PostgreSQL connection.  Nothing here talks to the database.
    """

    def __init__(self, name: str, d: dict[str, t.Any]) -> None:
        self.name: str = name
        try:
            self.url: str | None = _expand(d["url"]) if d.get("url") else None
            if self.url is None:
                self.host: str | None = d["host"]
                self.port: int = int(d.get("port", DEFAULT_PORT))
                self.database: str | None = d["database"]
                self.user: str | None = d["user"]
                self.password: str | None = (
                    str(_expand(d["password"])) if d.get("password") is not None else None
                )
            else:
                self.host = self.database = self.user = self.password = None
                self.port = DEFAULT_PORT
        except KeyError as exc:
            raise ConfigError(
                f"Environment {name!r} is missing required key {exc.args[0]!r}"
            ) from exc

        self.sslmode: str = d.get("sslmode") or _default_sslmode(self.url or self.host or "")
        self.connect_timeout: int = int(d.get("connect_timeout", DEFAULT_CONNECT_TIMEOUT))
        self.autocommit: bool = bool(d.get("autocommit", False))

        # Lets the destructive‑keyword guard be switched off for scratch boxes
        self.allow_destructive: bool = bool(d.get("allow_destructive", False))

    def dsn(self) -> dict[str, t.Any]:
        """Return kwargs that ``psycopg.connect`` understands."""
        opts: dict[str, t.Any] = {
            "sslmode": self.sslmode,
            "connect_timeout": self.connect_timeout,
            "autocommit": self.autocommit,
        }
        if self.url:
            return {"conninfo": self.url, **opts}
        opts.update(
            host=self.host,
            port=self.port,
            dbname=self.database,
            user=self.user,
        )
        if self.password is not None:
            opts["password"] = self.password
        return opts


def from_env() -> Environment:
    """Build the ``default`` environment from ``DATABASE_URL``."""
    url = os.getenv("DATABASE_URL")
    if not url:
        raise ConfigError("DATABASE_URL is not set and no config file was found.")
    d: dict[str, t.Any] = {"url": url}
    timeout_ms = os.getenv("PG_CONNECTION_TIMEOUT")
    if timeout_ms:
        d["connect_timeout"] = max(1, int(timeout_ms) // 1000)
    return Environment("default", d)


def load(path: pathlib.Path | str | None = None, env: str | None = None) -> Environment:
    """
    Parse *path* (or the default YAML) and return an :class:`Environment`.
    Without a config file the connection comes from ``DATABASE_URL``.
    """
    cfg_file = pathlib.Path(path) if path else _DEFAULT_PATH
    if not cfg_file.exists():
        if path is None and env in (None, "default"):
            return from_env()
        raise ConfigError(f"Config file {cfg_file} not found.")

    with cfg_file.open() as fh:
        raw = yaml.safe_load(fh) or {}

    env_name = env or raw.get("default_env")
    if not env_name:
        raise ConfigError("No environment specified and no default_env in config")

    try:
        return Environment(env_name, raw["environments"][env_name])
    except (KeyError, TypeError) as exc:
        raise ConfigError(f"Environment {env_name!r} not found in config") from exc
