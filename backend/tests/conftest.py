"""
Shared fixtures: an in-memory stand-in for the Supabase query builder and
a FastAPI test client with authentication overridden.
"""

import copy
import uuid
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from typing import Any, Dict, List

import pytest

from config import SupabaseConfig
from services import database


def _lookup(row: Dict[str, Any], column: str) -> Any:
    """Resolve plain columns and PostgREST json paths like properties->>numero_cnj."""
    if "->>" in column:
        outer, inner = column.split("->>", 1)
        return (row.get(outer) or {}).get(inner)
    return row.get(column)


class FakeQuery:
    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table = table
        self._op = "select"
        self._payload = None
        self._filters = []
        self._order = None

    def select(self, *columns, count=None):
        self._op = "select"
        return self

    def insert(self, row):
        self._op = "insert"
        self._payload = row
        return self

    def update(self, values):
        self._op = "update"
        self._payload = values
        return self

    def eq(self, column, value):
        self._filters.append(lambda row: _lookup(row, column) == value)
        return self

    def in_(self, column, values):
        self._filters.append(lambda row: _lookup(row, column) in values)
        return self

    def order(self, column, desc=False):
        self._order = (column, desc)
        return self

    def _matches(self, row):
        return all(check(row) for check in self._filters)

    def execute(self):
        self.db.calls.append((self.table, self._op, copy.deepcopy(self._payload)))
        rows = self.db.tables.setdefault(self.table, [])

        if self._op != "select" and self.table in self.db.failing_tables:
            raise RuntimeError(f"write to {self.table} rejected")

        if self._op == "insert":
            row = copy.deepcopy(self._payload)
            row.setdefault("id", str(uuid.uuid4()))
            stamp = self.db.next_timestamp()
            row.setdefault("created_at", stamp)
            row.setdefault("updated_at", stamp)
            rows.append(row)
            return SimpleNamespace(data=[copy.deepcopy(row)], count=None)

        if self._op == "update":
            updated = []
            for row in rows:
                if self._matches(row):
                    row.update(copy.deepcopy(self._payload))
                    updated.append(copy.deepcopy(row))
            return SimpleNamespace(data=updated, count=None)

        selected = [copy.deepcopy(row) for row in rows if self._matches(row)]
        if self._order:
            column, desc = self._order
            selected.sort(key=lambda row: _lookup(row, column) or "", reverse=desc)
        return SimpleNamespace(data=selected, count=len(selected))


class FakeSchema:
    def __init__(self, db: "FakeSupabase", name: str):
        self.db = db
        self.name = name

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self.db, f"{self.name}.{name}")


class FakeSupabase:
    """Records every executed query; writes to failing_tables raise."""

    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = {}
        self.calls: List[tuple] = []
        self.failing_tables = set()
        self._clock = datetime(2024, 3, 1, 12, 0, 0, tzinfo=timezone.utc)

    def next_timestamp(self) -> str:
        self._clock += timedelta(seconds=1)
        return self._clock.isoformat()

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def schema(self, name: str) -> FakeSchema:
        return FakeSchema(self, name)

    def rows(self, table: str) -> List[Dict[str, Any]]:
        return self.tables.get(table, [])


@pytest.fixture
def fake_db(monkeypatch):
    db = FakeSupabase()
    monkeypatch.setattr(database, "get_supabase", lambda: db)
    monkeypatch.setattr(
        database,
        "get_config",
        lambda: SupabaseConfig(url="http://localhost:54321", service_key="test-key")
    )
    return db


@pytest.fixture
def api_client(fake_db):
    from fastapi.testclient import TestClient
    from main import app
    from middleware.auth import require_auth
    from services.tool_client import ToolsClient, get_tools_client

    app.dependency_overrides[require_auth] = lambda: {"user_id": "user-1", "email": "adv@example.com"}
    app.dependency_overrides[get_tools_client] = lambda: ToolsClient("https://tools.test/v1", "secret-key")
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
