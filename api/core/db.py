"""
Async database access helpers (raw SQL) using asyncpg.

`Database` owns the connection pool. The app builds one instance per
process, connects it on startup and closes it on shutdown (see
`api/main.py`). Route handlers receive it through the `get_db`
dependency instead of reaching for a module global.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import logging
from typing import Any

import asyncpg
from fastapi import Request

from .config import Settings

logger = logging.getLogger(__name__)


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


class Database:
    def __init__(
        self,
        dsn: str,
        *,
        min_size: int = 1,
        max_size: int = 5,
        command_timeout: float = 30,
    ) -> None:
        self.dsn = dsn
        self.min_size = min_size
        self.max_size = max_size
        self.command_timeout = command_timeout
        self._pool: asyncpg.Pool | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            settings.dsn(),
            min_size=settings.pool_min_size,
            max_size=settings.pool_max_size,
            command_timeout=settings.command_timeout,
        )

    @property
    def is_connected(self) -> bool:
        return self._pool is not None

    async def connect(self) -> None:
        """
        Create the pool and verify the server answers.

        Any failure propagates: callers treat it as fatal.
        """
        if self._pool is not None:
            return None
        self._pool = await asyncpg.create_pool(
            dsn=self.dsn,
            min_size=self.min_size,
            max_size=self.max_size,
            command_timeout=self.command_timeout,
        )
        try:
            await self.ping()
        except Exception:
            await self.close()
            raise
        logger.info("db_pool_ready min_size=%s max_size=%s", self.min_size, self.max_size)

    async def close(self) -> None:
        if self._pool is None:
            return None
        pool, self._pool = self._pool, None
        await pool.close()

    def pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise RuntimeError("DB pool is not initialized. Call connect() on startup.")
        return self._pool

    async def ping(self) -> None:
        await self.pool().fetchval("SELECT 1")

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        """
        Run a query and return a single row as a dict (or None).
        """
        row = await self.pool().fetchrow(sql, *args)
        return _record_to_dict(row) if row is not None else None

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        rows = await self.pool().fetch(sql, *args)
        return [_record_to_dict(r) for r in rows]

    async def execute(self, sql: str, *args: Any) -> str:
        """
        Run a statement (INSERT/UPDATE/DELETE/DDL) and return its status tag, e.g. "DELETE 1".
        """
        return await self.pool().execute(sql, *args)


def get_db(request: Request) -> Database:
    return request.app.state.db
