from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pytest


@dataclass
class FakeResponse:
    data: list[dict[str, Any]]
    count: int | None = None


@dataclass
class FakeQuery:
    """Just enough of the PostgREST builder chain for the persistence layer."""

    db: "FakeSupabase"
    table_name: str
    action: str = "select"
    payload: Any = None
    filters: list[tuple[str, Any]] = field(default_factory=list)
    limit_value: int | None = None
    order_key: str | None = None
    order_desc: bool = False

    def select(self, *_columns, **_kwargs) -> "FakeQuery":
        self.action = "select"
        return self

    def update(self, payload: dict[str, Any]) -> "FakeQuery":
        self.action, self.payload = "update", payload
        return self

    def insert(self, payload: dict[str, Any]) -> "FakeQuery":
        self.action, self.payload = "insert", payload
        return self

    def eq(self, column: str, value: Any) -> "FakeQuery":
        self.filters.append((column, value))
        return self

    def order(self, column: str, desc: bool = False) -> "FakeQuery":
        self.order_key, self.order_desc = column, desc
        return self

    def limit(self, value: int) -> "FakeQuery":
        self.limit_value = value
        return self

    def _matches(self, row: dict[str, Any]) -> bool:
        return all(row.get(column) == value for column, value in self.filters)

    def execute(self) -> FakeResponse:
        if self.table_name in self.db.failing_tables:
            raise RuntimeError(f"{self.table_name} unavailable")
        rows = self.db.tables.setdefault(self.table_name, [])
        if self.action == "insert":
            row = dict(self.payload)
            rows.append(row)
            return FakeResponse(data=[row])
        matched = [row for row in rows if self._matches(row)]
        if self.action == "update":
            for row in matched:
                row.update(self.payload)
            return FakeResponse(data=[dict(row) for row in matched])
        if self.order_key:
            matched.sort(key=lambda row: row.get(self.order_key), reverse=self.order_desc)
        if self.limit_value is not None:
            matched = matched[: self.limit_value]
        return FakeResponse(data=[dict(row) for row in matched], count=len(matched))


class FakeSupabase:
    def __init__(self) -> None:
        self.tables: dict[str, list[dict[str, Any]]] = {}
        self.failing_tables: set[str] = set()

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(db=self, table_name=name)


@pytest.fixture
def fake_db(monkeypatch: pytest.MonkeyPatch) -> FakeSupabase:
    """Route every persistence module to an in-memory Supabase stand-in."""
    from scrapyard.persistence import drivers, pickups

    db = FakeSupabase()
    monkeypatch.setattr(pickups, "get_supabase_client", lambda: db)
    monkeypatch.setattr(drivers, "get_supabase_client", lambda: db)
    monkeypatch.setattr("scrapyard.db.supabase.get_supabase_client", lambda: db)
    return db


@pytest.fixture
def no_db(monkeypatch: pytest.MonkeyPatch) -> None:
    from scrapyard.persistence import drivers, pickups

    monkeypatch.setattr(pickups, "get_supabase_client", lambda: None)
    monkeypatch.setattr(drivers, "get_supabase_client", lambda: None)
    monkeypatch.setattr("scrapyard.db.supabase.get_supabase_client", lambda: None)
