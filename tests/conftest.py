"""
Shared fixtures: an in-memory stand-in for the Supabase client and seeded data
"""
import os
import uuid
from datetime import date, datetime
from types import SimpleNamespace

os.environ.setdefault("LOG_DIR", "")

import pytest

from schemas.auth import CurrentUser
from services.query_cache import QueryCache

TODAY = date(2026, 10, 18)

TABLE_DEFAULTS = {
    "tenants": {"is_active": True, "leaving_date": None, "occupation": None},
    "payments": {"amount_paid": 0, "status": "pending", "paid_date": None, "marked_by": None},
    "rooms": {"room_type": "shared", "capacity": 1},
    "buildings": {"address": None, "total_rooms": 0},
}


# ==================== Select parsing ====================

def _split_top_level(text):
    parts, depth, current = [], 0, ""
    for ch in text:
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
        if ch == "," and depth == 0:
            parts.append(current.strip())
            current = ""
        else:
            current += ch
    if current.strip():
        parts.append(current.strip())
    return parts


def _parse_columns(text):
    """'*, room:rooms(*, building:buildings(*))' -> (['*'], [('room', 'rooms', '*, building:...')])"""
    columns, embeds = [], []
    for part in _split_top_level(text):
        if "(" in part:
            name, inner = part.split("(", 1)
            alias, _, table = name.partition(":")
            embeds.append((alias.strip(), (table or alias).strip(), inner[:-1]))
        else:
            columns.append(part)
    return columns, embeds


def _plain(value):
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


# ==================== Fake client ====================

class FakeQuery:
    """Fluent builder mirroring the subset of postgrest the services use"""

    def __init__(self, db, table):
        self.db = db
        self.table = table
        self.operation = "select"
        self.columns = "*"
        self.count = None
        self.head = False
        self.payload = None
        self.filters = []
        self.orders = []
        self.limit_n = None

    def select(self, columns="*", count=None, head=False):
        self.columns, self.count, self.head = columns, count, head
        return self

    def insert(self, payload):
        self.operation, self.payload = "insert", payload
        return self

    def update(self, payload):
        self.operation, self.payload = "update", payload
        return self

    def delete(self):
        self.operation = "delete"
        return self

    def eq(self, column, value):
        self.filters.append(lambda row: row.get(column) == _plain(value))
        return self

    def lt(self, column, value):
        value = _plain(value)
        self.filters.append(lambda row: row.get(column) is not None and row.get(column) < value)
        return self

    def in_(self, column, values):
        values = [_plain(v) for v in values]
        self.filters.append(lambda row: row.get(column) in values)
        return self

    def order(self, column, desc=False):
        self.orders.append((column, desc))
        return self

    def limit(self, n):
        self.limit_n = n
        return self

    def _matching(self):
        return [row for row in self.db.tables.setdefault(self.table, [])
                if all(f(row) for f in self.filters)]

    def execute(self):
        self.db.executed.append((self.table, self.operation))
        if self.table in self.db.failures:
            raise self.db.failures[self.table]

        if self.operation == "insert":
            return SimpleNamespace(data=self.db.insert(self.table, self.payload), count=None)

        if self.operation == "update":
            rows = self._matching()
            for row in rows:
                row.update({k: _plain(v) for k, v in self.payload.items()})
            return SimpleNamespace(data=[dict(r) for r in rows], count=None)

        if self.operation == "delete":
            rows = self._matching()
            self.db.tables[self.table] = [r for r in self.db.tables[self.table] if r not in rows]
            return SimpleNamespace(data=[dict(r) for r in rows], count=None)

        rows = self._matching()
        for column, desc in reversed(self.orders):
            rows = sorted(rows, key=lambda r: (r.get(column) is None, r.get(column)), reverse=desc)
        total = len(rows)
        if self.limit_n is not None:
            rows = rows[:self.limit_n]

        data = [] if self.head else [self.db.project(self.columns, row) for row in rows]
        return SimpleNamespace(data=data, count=total if self.count else None)


class FakeAuth:
    def __init__(self):
        self.users = {}   # token -> user
        self.passwords = {}  # email -> (password, token)
        self.signed_out = False

    def add_user(self, user_id, email, password, token):
        user = SimpleNamespace(id=user_id, email=email)
        self.users[token] = user
        self.passwords[email] = (password, token)
        return user

    def sign_in_with_password(self, credentials):
        entry = self.passwords.get(credentials["email"])
        if not entry or entry[0] != credentials["password"]:
            raise RuntimeError("Invalid login credentials")
        token = entry[1]
        return SimpleNamespace(
            user=self.users[token],
            session=SimpleNamespace(access_token=token, refresh_token=f"refresh-{token}"),
        )

    def get_user(self, token):
        if token not in self.users:
            raise RuntimeError("invalid JWT")
        return SimpleNamespace(user=self.users[token])

    def sign_out(self):
        self.signed_out = True


class FakeSupabase:
    """In-memory tables behind the supabase-py table() builder"""

    def __init__(self):
        self.tables = {}
        self.executed = []
        self.failures = {}
        self.auth = FakeAuth()

    def table(self, name):
        return FakeQuery(self, name)

    def fail(self, table, error=None):
        self.failures[table] = error or RuntimeError(f"connection to {table} refused")

    def insert(self, table, payload):
        rows = payload if isinstance(payload, list) else [payload]
        inserted = []
        for data in rows:
            row = dict(TABLE_DEFAULTS.get(table, {}))
            row.update({k: _plain(v) for k, v in data.items()})
            row.setdefault("id", str(uuid.uuid4()))
            row.setdefault("created_at", datetime(2026, 10, 1, 9, 0).isoformat())
            self.tables.setdefault(table, []).append(row)
            inserted.append(dict(row))
        return inserted

    def seed(self, table, **fields):
        return self.insert(table, fields)[0]

    def project(self, columns, row):
        names, embeds = _parse_columns(columns)
        if "*" in names:
            out = dict(row)
        else:
            out = {name: row.get(name) for name in names}
        for alias, table, inner in embeds:
            target_id = row.get(f"{alias}_id")
            target = next((r for r in self.tables.get(table, []) if r["id"] == target_id), None)
            out[alias] = self.project(inner, target) if target else None
        return out

    def rows(self, table):
        return self.tables.get(table, [])

    def reads(self, table=None):
        return [e for e in self.executed if e[1] == "select" and (table is None or e[0] == table)]


# ==================== Fixtures ====================

@pytest.fixture
def db():
    return FakeSupabase()


@pytest.fixture
def cache():
    return QueryCache()


@pytest.fixture
def owner():
    return CurrentUser(id="owner-1", email="owner@example.com", role="owner")


@pytest.fixture
def staff():
    return CurrentUser(id="staff-1", email="staff@example.com", role="staff")


@pytest.fixture
def seeded(db):
    """One building, one two-bed room, one tenant on 6000 a month"""
    building = db.seed("buildings", name="Sunrise PG", address="12 MG Road", total_rooms=10)
    room = db.seed("rooms", building_id=building["id"], room_number="101",
                   room_type="double", capacity=2, rent_amount=6000)
    tenant = db.seed("tenants", name="Asha", phone="9876543210", room_id=room["id"],
                     monthly_rent=6000, joining_date="2026-01-01")
    return SimpleNamespace(building=building, room=room, tenant=tenant)
