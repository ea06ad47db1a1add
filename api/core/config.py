"""
Application settings.

All configuration is read from the process environment once, when the app
is built. A `.env` file in the working directory is loaded first when it
exists; variables already present in the environment take precedence.

Database connection:
- `DATABASE_URL` wins when set.
- otherwise `DB_USER`, `DB_PASSWORD`, `DB_HOST`, `DB_PORT`, `DB_DATABASE`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping
from urllib.parse import parse_qsl, quote, urlencode, urlsplit, urlunsplit

from dotenv import find_dotenv, load_dotenv

from .errors import ConfigError

DEFAULT_CORS_ORIGIN = "https://internship-profile.vercel.app"
DEFAULT_PORT = 8080
DEFAULT_DB_PORT = 5432


def _env_str(environ: Mapping[str, str], name: str, default: str = "") -> str:
    return (environ.get(name) or "").strip() or default


def _env_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = (environ.get(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_list(environ: Mapping[str, str], name: str, default: list[str]) -> list[str]:
    raw = (environ.get(name) or "").strip()
    if not raw:
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


@dataclass(frozen=True)
class Settings:
    db_user: str = ""
    db_password: str = ""
    db_host: str = ""
    db_port: int = DEFAULT_DB_PORT
    db_name: str = ""
    database_url: str = ""

    cors_origins: list[str] = field(default_factory=lambda: [DEFAULT_CORS_ORIGIN])

    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    log_level: str = "INFO"

    pool_min_size: int = 1
    pool_max_size: int = 5
    command_timeout: float = 30

    def dsn(self) -> str:
        """
        Build the asyncpg connection string.

        Raises ConfigError when the connection parameters are incomplete.
        """
        if self.database_url:
            return _sanitize_database_url(self.database_url)

        missing = [
            env_name
            for env_name, value in (
                ("DB_USER", self.db_user),
                ("DB_HOST", self.db_host),
                ("DB_DATABASE", self.db_name),
            )
            if not value
        ]
        if missing:
            raise ConfigError(
                "Database is not configured. Set DATABASE_URL or "
                + ", ".join(missing)
                + "."
            )

        credentials = quote(self.db_user, safe="")
        if self.db_password:
            credentials += ":" + quote(self.db_password, safe="")
        return f"postgresql://{credentials}@{self.db_host}:{self.db_port}/{quote(self.db_name, safe='')}"


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """
    Read settings from `environ` (defaults to os.environ plus `.env`).
    """
    if environ is None:
        load_dotenv(find_dotenv(usecwd=True), override=False)
        environ = os.environ

    return Settings(
        db_user=_env_str(environ, "DB_USER"),
        db_password=environ.get("DB_PASSWORD") or "",
        db_host=_env_str(environ, "DB_HOST"),
        db_port=_env_int(environ, "DB_PORT", DEFAULT_DB_PORT),
        db_name=_env_str(environ, "DB_DATABASE"),
        database_url=_env_str(environ, "DATABASE_URL"),
        cors_origins=_env_list(environ, "CORS_ORIGINS", [DEFAULT_CORS_ORIGIN]),
        host=_env_str(environ, "HOST", "0.0.0.0"),
        port=_env_int(environ, "PORT", DEFAULT_PORT),
        log_level=_env_str(environ, "LOG_LEVEL", "INFO").upper(),
        pool_min_size=_env_int(environ, "DB_POOL_MIN_SIZE", 1),
        pool_max_size=_env_int(environ, "DB_POOL_MAX_SIZE", 5),
        command_timeout=_env_int(environ, "DB_COMMAND_TIMEOUT", 30),
    )
