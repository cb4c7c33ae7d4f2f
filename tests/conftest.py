"""Shared fixtures: an in-memory stand-in for the Supabase query builder."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any, Dict, List, Optional, Tuple
from uuid import uuid4

import pytest


class FakeQuery:
    """Records builder calls and evaluates them against in-memory rows."""

    def __init__(self, client: "FakeSupabaseClient", table: str) -> None:
        self.client = client
        self.table = table
        self.columns: Optional[str] = None
        self.count_mode: Optional[str] = None
        self.head = False
        self.filters: List[Tuple[str, Any]] = []
        self.ilike_filter: Optional[Tuple[str, str]] = None
        self.order_field: Optional[str] = None
        self.order_desc = False
        self.window: Optional[Tuple[int, int]] = None
        self.limit_value: Optional[int] = None
        self.payload: Optional[Dict[str, Any]] = None

    def select(self, *columns: str, count: Optional[str] = None, head: Optional[bool] = None) -> "FakeQuery":
        self.columns = ", ".join(columns)
        self.count_mode = count
        self.head = bool(head)
        return self

    def eq(self, column: str, value: Any) -> "FakeQuery":
        self.filters.append((column, value))
        return self

    def ilike(self, column: str, pattern: str) -> "FakeQuery":
        self.ilike_filter = (column, pattern.strip("%").lower())
        return self

    def order(self, column: str, desc: bool = False) -> "FakeQuery":
        self.order_field = column
        self.order_desc = desc
        return self

    def range(self, start: int, end: int) -> "FakeQuery":
        self.window = (start, end)
        return self

    def limit(self, size: int) -> "FakeQuery":
        self.limit_value = size
        return self

    def insert(self, payload: Dict[str, Any]) -> "FakeQuery":
        self.payload = payload
        return self

    @property
    def operation(self) -> str:
        if self.payload is not None:
            return "insert"
        if self.head:
            return "count"
        return "select"

    def execute(self) -> SimpleNamespace:
        self.client.executed.append(self)
        failure = self.client.failures.get((self.table, self.operation))
        if failure is not None:
            raise failure

        table_rows = self.client.tables.setdefault(self.table, [])
        if self.payload is not None:
            row = {"id": str(uuid4()), **self.payload}
            table_rows.append(row)
            return SimpleNamespace(data=[row], count=None)

        rows = [row for row in table_rows if all(row.get(column) == value for column, value in self.filters)]
        if self.ilike_filter is not None:
            column, needle = self.ilike_filter
            rows = [row for row in rows if needle in str(row.get(column, "")).lower()]
        if self.order_field is not None:
            rows = sorted(rows, key=lambda row: str(row.get(self.order_field) or ""), reverse=self.order_desc)

        count = len(rows) if self.count_mode else None
        if self.head:
            return SimpleNamespace(data=[], count=count)
        if self.window is not None:
            start, end = self.window
            rows = rows[start : end + 1]
        if self.limit_value is not None:
            rows = rows[: self.limit_value]
        return SimpleNamespace(data=rows, count=count)


class FakeAuth:
    def __init__(self) -> None:
        self.users: Dict[str, Tuple[str, str]] = {}
        self.signed_out = False

    def sign_in_with_password(self, credentials: Dict[str, str]) -> SimpleNamespace:
        entry = self.users.get(credentials["email"])
        if entry is None or entry[1] != credentials["password"]:
            return SimpleNamespace(user=None, session=None)
        return SimpleNamespace(user=SimpleNamespace(id=entry[0], email=credentials["email"]), session=object())

    def sign_out(self) -> None:
        self.signed_out = True


class FakeSupabaseClient:
    def __init__(self) -> None:
        self.tables: Dict[str, List[Dict[str, Any]]] = {}
        self.failures: Dict[Tuple[str, str], Exception] = {}
        self.executed: List[FakeQuery] = []
        self.auth = FakeAuth()

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)


def make_rows(count: int, **extra: Any) -> List[Dict[str, Any]]:
    """Rows with increasing created_at so descending order is predictable."""
    return [
        {"id": f"row-{index:04d}", "codigo": f"C{index:04d}", "created_at": f"2026-01-01T00:00:{index:04d}", **extra}
        for index in range(count)
    ]


@pytest.fixture
def fake_client() -> FakeSupabaseClient:
    return FakeSupabaseClient()
