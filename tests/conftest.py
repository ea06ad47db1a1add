from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from core.config import Settings
from records import repository

ALLOWED_ORIGIN = "https://internship-profile.vercel.app"


class FakeDatabase:
    """Stands in for core.db.Database where no server is available."""

    def __init__(self, ping_error: Exception | None = None, connect_error: Exception | None = None):
        self.ping_error = ping_error
        self.connect_error = connect_error
        self.connected = False
        self.closed = False

    async def connect(self) -> None:
        if self.connect_error is not None:
            raise self.connect_error
        self.connected = True

    async def close(self) -> None:
        self.closed = True

    async def ping(self) -> None:
        if self.ping_error is not None:
            raise self.ping_error


class MemoryStore:
    """In-memory replacement for the functions in records.repository."""

    def __init__(self, first_key: int = 100):
        self.rows: dict[int, dict] = {}
        self.next_key = first_key
        self.calls: list[str] = []

    def add(self, day: str, tasks: str) -> int:
        key = self.next_key
        self.next_key += 1
        self.rows[key] = {"date": key, "day": day, "tasks": tasks}
        return key

    async def list_records(self, db) -> list[dict]:
        self.calls.append("list")
        return [dict(row) for row in self.rows.values()]

    async def get_record(self, db, date: int) -> dict | None:
        self.calls.append("get")
        row = self.rows.get(date)
        return dict(row) if row is not None else None

    async def insert_record(self, db, *, day: str, tasks: str) -> int:
        self.calls.append("insert")
        return self.add(day, tasks)

    async def update_record(self, db, date: int, *, day: str, tasks: str) -> bool:
        self.calls.append("update")
        if date not in self.rows:
            return False
        self.rows[date].update(day=day, tasks=tasks)
        return True

    async def delete_record(self, db, date: int) -> bool:
        self.calls.append("delete")
        return self.rows.pop(date, None) is not None


@pytest.fixture()
def settings() -> Settings:
    return Settings(db_user="tasks", db_host="localhost", db_name="tasks", cors_origins=[ALLOWED_ORIGIN])


@pytest.fixture()
def fake_db() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture()
def store(monkeypatch) -> MemoryStore:
    memory = MemoryStore()
    for name in ("list_records", "get_record", "insert_record", "update_record", "delete_record"):
        monkeypatch.setattr(repository, name, getattr(memory, name))
    return memory


@pytest.fixture()
def client(settings, fake_db, store):
    from main import create_app

    app = create_app(settings, database=fake_db)
    # Entering the context runs the lifespan (startup/shutdown).
    with TestClient(app) as test_client:
        yield test_client
