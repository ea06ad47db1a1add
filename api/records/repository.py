"""
`data` table persistence (raw SQL). One statement per operation.
"""

from __future__ import annotations

from core.db import Database


async def list_records(db: Database) -> list[dict]:
    return await db.fetch_all(
        """
        SELECT "date", day, tasks
        FROM data
        """
    )


async def get_record(db: Database, date: int) -> dict | None:
    return await db.fetch_one(
        """
        SELECT "date", day, tasks
        FROM data
        WHERE "date" = $1
        """,
        date,
    )


async def insert_record(db: Database, *, day: str, tasks: str) -> int:
    """
    Insert a row and return the key the store generated for it.
    """
    row = await db.fetch_one(
        """
        INSERT INTO data (day, tasks)
        VALUES ($1, $2)
        RETURNING "date"
        """,
        day,
        tasks,
    )
    if row is None or "date" not in row:
        raise RuntimeError("Failed to insert data row.")
    return int(row["date"])


async def update_record(db: Database, date: int, *, day: str, tasks: str) -> bool:
    """
    Returns False when no row matched `date`.
    """
    row = await db.fetch_one(
        """
        UPDATE data
        SET day = $1,
            tasks = $2
        WHERE "date" = $3
        RETURNING "date"
        """,
        day,
        tasks,
        date,
    )
    return row is not None


async def delete_record(db: Database, date: int) -> bool:
    row = await db.fetch_one(
        """
        DELETE FROM data
        WHERE "date" = $1
        RETURNING "date"
        """,
        date,
    )
    return row is not None
