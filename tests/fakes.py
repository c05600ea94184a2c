"""In-memory stand-ins for the Supabase client."""

from __future__ import annotations

import copy
import itertools
from types import SimpleNamespace


class FakeQuery:
    def __init__(self, client: "FakeSupabase", table: str) -> None:
        self.client = client
        self.table = table
        self.filters = []
        self.order_by = None
        self.limit_to = None
        self.action = "select"
        self.payload = None

    def select(self, columns="*"):
        self.action = "select"
        return self

    def insert(self, payload):
        self.action = "insert"
        self.payload = payload
        return self

    def update(self, payload):
        self.action = "update"
        self.payload = payload
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def order(self, column, desc=False):
        self.order_by = (column, desc)
        return self

    def limit(self, count):
        self.limit_to = count
        return self

    def _matching(self):
        rows = self.client.tables.setdefault(self.table, [])
        return [row for row in rows if all(row.get(col) == val for col, val in self.filters)]

    def execute(self):
        self.client.calls.append((self.table, self.action, copy.deepcopy(self.payload), list(self.filters)))
        if self.client.error is not None:
            raise self.client.error

        if self.action == "insert":
            row = {**self.payload, "id": next(self.client.ids), "created_at": next(self.client.clock)}
            self.client.tables.setdefault(self.table, []).append(row)
            return SimpleNamespace(data=[copy.deepcopy(row)])

        if self.action == "update":
            updated = []
            for row in self._matching():
                row.update(self.payload)
                updated.append(copy.deepcopy(row))
            return SimpleNamespace(data=updated)

        rows = self._matching()
        if self.order_by:
            column, desc = self.order_by
            rows = sorted(rows, key=lambda row: row.get(column), reverse=desc)
        if self.limit_to is not None:
            rows = rows[: self.limit_to]
        return SimpleNamespace(data=copy.deepcopy(rows))


class FakeSupabase:
    """Chainable ``table().select().eq()...execute()`` over dict rows."""

    def __init__(self, tables=None, error: Exception | None = None) -> None:
        self.tables = tables or {}
        self.error = error
        self.calls = []
        self.ids = itertools.count(100)
        self.clock = (f"2026-01-01T00:00:{second:02d}" for second in itertools.count(10))

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def actions(self):
        return [action for _, action, _, _ in self.calls]
