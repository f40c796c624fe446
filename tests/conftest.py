"""Shared fixtures: an in-memory stand-in for the Supabase client."""
import itertools
import os
import uuid
from datetime import date
from decimal import Decimal

import pytest

# Pages import the app module; never hit the network at import time
os.environ.setdefault("SANAVI_SKIP_INITIAL_LOAD", "1")

from sanavi_dashboard.models import InventoryEntry, Transaction


class FakeResponse:
    def __init__(self, data, count=None):
        self.data = data
        self.count = count


class FakeQuery:
    """Just enough of the postgrest request builder for supabase_gateway."""

    def __init__(self, db, table):
        self.db = db
        self.table = table
        self.op = "select"
        self.payload = None
        self.filters = []
        self.orders = []
        self.bounds = None
        self.max_rows = None

    def select(self, *columns, **kwargs):
        self.op = "select"
        return self

    def order(self, column, desc=False):
        self.orders.append((column, desc))
        return self

    def range(self, start, end):
        self.bounds = (start, end)
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def limit(self, n):
        self.max_rows = n
        return self

    def insert(self, row):
        self.op, self.payload = "insert", row
        return self

    def upsert(self, row):
        self.op, self.payload = "upsert", row
        return self

    def delete(self):
        self.op = "delete"
        return self

    def _matches(self, row):
        return all(row.get(col) == val for col, val in self.filters)

    def execute(self):
        self.db.calls.append((self.table, self.op))
        if self.db.fail is not None:
            raise self.db.fail
        rows = self.db.tables.setdefault(self.table, [])

        if self.op == "insert":
            row = dict(self.payload)
            row.setdefault("id", str(uuid.uuid4()))
            row.setdefault("created_at", self.db.next_timestamp())
            rows.append(row)
            return FakeResponse([dict(row)])

        if self.op == "upsert":
            row = dict(self.payload)
            rows[:] = [r for r in rows if r.get("id") != row["id"]]
            rows.append(row)
            return FakeResponse([dict(row)])

        if self.op == "delete":
            gone = [r for r in rows if self._matches(r)]
            rows[:] = [r for r in rows if not self._matches(r)]
            return FakeResponse(gone)

        result = [dict(r) for r in rows if self._matches(r)]
        for column, desc in reversed(self.orders):
            result.sort(key=lambda r: r.get(column) or "", reverse=desc)
        if self.bounds is not None:
            result = result[self.bounds[0]:self.bounds[1] + 1]
        if self.max_rows is not None:
            result = result[:self.max_rows]
        return FakeResponse(result, count=len(result))


class FakeSupabase:
    def __init__(self, tables=None):
        self.tables = tables or {}
        self.calls = []
        self.fail = None
        self._clock = itertools.count(1)

    def next_timestamp(self):
        return f"2025-01-01T00:00:{next(self._clock):02d}+00:00"

    def table(self, name):
        return FakeQuery(self, name)


@pytest.fixture
def fake_db():
    return FakeSupabase()


@pytest.fixture
def seeded_db():
    """Two months of cash movements and a stock history for 'Paquete Standard'."""
    return FakeSupabase({
        "transactions": [
            {"id": "t1", "created_at": "2025-03-05T10:00:00+00:00", "date": "2025-03-05",
             "detail": "sale", "amount": 100.0, "type": "ingreso"},
            {"id": "t2", "created_at": "2025-04-01T10:00:00+00:00", "date": "2025-04-01",
             "detail": "rent", "amount": "50.00", "type": "egreso"},
            {"id": "t3", "created_at": "2025-03-20T10:00:00+00:00", "date": "2025-03-20",
             "detail": "agent fee", "amount": 12.5, "type": "comision"},
        ],
        "inventory": [
            {"id": "i1", "created_at": "2025-01-10T10:00:00+00:00", "date": "2025-01-10",
             "product": "Paquete Standard", "quantity": 20, "type": "entrada",
             "reason": None, "order_number": None, "detail": None},
            {"id": "i2", "created_at": "2025-02-15T10:00:00+00:00", "date": "2025-02-15",
             "product": "Paquete Standard", "quantity": 5, "type": "salida",
             "reason": "venta", "order_number": "ORD-001", "detail": "online"},
        ],
    })


def txn(day, amount, kind="ingreso", detail="x", record_id=None):
    return Transaction(date=day, detail=detail, amount=Decimal(str(amount)), kind=kind, id=record_id)


def entry(day, quantity, movement="entrada", product="Paquete Standard", reason=None,
          order_number=None, record_id=None):
    return InventoryEntry(date=day, product=product, quantity=quantity, movement=movement,
                          reason=reason, order_number=order_number, id=record_id)


@pytest.fixture
def march_cash():
    return [
        txn(date(2025, 3, 31), "10.00", "egreso", "late"),
        txn(date(2025, 2, 28), "5.00", "ingreso", "before"),
        txn(date(2025, 3, 1), "100.00", "ingreso", "first"),
        txn(date(2025, 4, 1), "7.00", "egreso", "after"),
        txn(date(2025, 3, 15), "3.25", "comision", "fee"),
    ]
