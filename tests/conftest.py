"""Shared fixtures: an in-memory stand-in for the Supabase client and a TestClient wired to it."""

from __future__ import annotations

import copy
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from pagecast.core.rate_limit import limiter
from pagecast.database.supabase_client import get_service_supabase, get_supabase
from pagecast.main import app
from pagecast.modules.auth.service import clear_auth_cache

PRIMARY_KEYS = {
    "profiles": "id",
    "user_preferences": "user_id",
    "webhooks": "id",
    "voices": "id",
}
UNIQUE_COLUMNS = {
    "voices": ["voice_id"],
}


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class FakeQuery:
    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table = table
        self.op = "select"
        self.payload: Any = None
        self.filters: List[tuple] = []
        self.order_by: Optional[tuple] = None
        self.limit_n: Optional[int] = None
        self.on_conflict = ""
        self.ignore_duplicates = False

    def select(self, columns: str = "*"):
        self.op = "select"
        return self

    def insert(self, payload):
        self.op = "insert"
        self.payload = payload
        return self

    def upsert(self, payload, on_conflict: str = "", ignore_duplicates: bool = False, **kwargs):
        self.op = "upsert"
        self.payload = payload
        self.on_conflict = on_conflict
        self.ignore_duplicates = ignore_duplicates
        return self

    def update(self, payload):
        self.op = "update"
        self.payload = payload
        return self

    def delete(self):
        self.op = "delete"
        return self

    def eq(self, column, value):
        self.filters.append(("eq", column, value))
        return self

    def in_(self, column, values):
        self.filters.append(("in", column, list(values)))
        return self

    def order(self, column, desc: bool = False):
        self.order_by = (column, desc)
        return self

    def limit(self, n):
        self.limit_n = n
        return self

    def _matches(self, row):
        for kind, column, value in self.filters:
            if kind == "eq" and row.get(column) != value:
                return False
            if kind == "in" and row.get(column) not in value:
                return False
        return True

    def execute(self):
        self.db.maybe_fail(f"{self.table}.{self.op}")
        rows = self.db.tables.setdefault(self.table, [])
        handler = getattr(self, f"_execute_{self.op}")
        return SimpleNamespace(data=copy.deepcopy(handler(rows)))

    def _execute_select(self, rows):
        selected = [r for r in rows if self._matches(r)]
        if self.order_by:
            column, desc = self.order_by
            selected.sort(key=lambda r: (r.get(column) is None, str(r.get(column))), reverse=desc)
        if self.limit_n is not None:
            selected = selected[: self.limit_n]
        return selected

    def _execute_insert(self, rows):
        payload = self.payload if isinstance(self.payload, list) else [self.payload]
        inserted = []
        for item in payload:
            row = self.db.with_defaults(self.table, item)
            self.db.check_unique(self.table, row)
            rows.append(row)
            inserted.append(row)
        return inserted

    def _execute_upsert(self, rows):
        key = self.on_conflict or PRIMARY_KEYS[self.table]
        payload = self.payload if isinstance(self.payload, list) else [self.payload]
        written = []
        for item in payload:
            existing = next((r for r in rows if r.get(key) == item.get(key)), None)
            if existing is not None:
                if self.ignore_duplicates:
                    continue
                existing.update(item)
                written.append(existing)
            else:
                row = self.db.with_defaults(self.table, item)
                rows.append(row)
                written.append(row)
        return written

    def _execute_update(self, rows):
        updated = []
        for row in rows:
            if self._matches(row):
                candidate = {**row, **self.payload}
                self.db.check_unique(self.table, candidate, ignore=row)
                row.update(self.payload)
                updated.append(row)
        return updated

    def _execute_delete(self, rows):
        removed = [r for r in rows if self._matches(r)]
        self.db.tables[self.table] = [r for r in rows if not self._matches(r)]
        return removed


class FakeRpc:
    def __init__(self, db: "FakeSupabase", name: str, params: Dict[str, Any]):
        self.db = db
        self.name = name
        self.params = params

    def execute(self):
        self.db.maybe_fail(f"rpc.{self.name}")
        if self.name == "activate_webhook":
            target = self.params["webhook_id"]
            for row in self.db.tables.setdefault("webhooks", []):
                row["active"] = row["id"] == target
            return SimpleNamespace(data=None)
        raise Exception(f"Could not find the function public.{self.name}")


class FakeAuthAdmin:
    def __init__(self, db: "FakeSupabase"):
        self.db = db
        self.create_calls = 0

    def create_user(self, attributes: Dict[str, Any]):
        self.db.maybe_fail("auth.admin.create_user")
        self.create_calls += 1
        email = attributes["email"]
        if any(u.email == email for u in self.db.users.values()):
            raise Exception("A user with this email address has already been registered")
        user = self.db.new_user(email, attributes.get("password"))
        if self.db.profile_trigger:
            self.db.tables.setdefault("profiles", []).append(
                self.db.with_defaults("profiles", {"id": user.id, "email": email, "role": "user"})
            )
        return SimpleNamespace(user=user)

    def delete_user(self, user_id: str):
        self.db.maybe_fail("auth.admin.delete_user")
        if user_id not in self.db.users:
            raise Exception("User not found")
        del self.db.users[user_id]
        # ON DELETE CASCADE
        self.db.tables["profiles"] = [r for r in self.db.tables.get("profiles", []) if r["id"] != user_id]
        self.db.tables["user_preferences"] = [
            r for r in self.db.tables.get("user_preferences", []) if r["user_id"] != user_id
        ]


class FakeAuth:
    def __init__(self, db: "FakeSupabase"):
        self.db = db
        self.admin = FakeAuthAdmin(db)
        self.signed_out = False

    def get_user(self, jwt: str = None):
        user_id = self.db.tokens.get(jwt)
        if user_id is None or user_id not in self.db.users:
            raise Exception("invalid JWT: unable to parse or verify signature")
        return SimpleNamespace(user=self.db.users[user_id])

    def sign_in_with_password(self, credentials: Dict[str, str]):
        user = next((u for u in self.db.users.values() if u.email == credentials["email"]), None)
        if user is None or self.db.passwords.get(user.id) != credentials["password"]:
            raise Exception("Invalid login credentials")
        token = f"token-{user.id}"
        self.db.tokens[token] = user.id
        return SimpleNamespace(user=user, session=SimpleNamespace(access_token=token))

    def sign_out(self):
        self.signed_out = True


class FakeSupabase:
    """Just enough of supabase.Client for the services under test."""

    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = {}
        self.users: Dict[str, SimpleNamespace] = {}
        self.passwords: Dict[str, str] = {}
        self.tokens: Dict[str, str] = {}
        self.failures: Dict[str, Exception] = {}
        self.profile_trigger = True
        self.auth = FakeAuth(self)

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def rpc(self, name: str, params: Dict[str, Any]) -> FakeRpc:
        return FakeRpc(self, name, params)

    def fail_next(self, operation: str, error: Exception) -> None:
        """Make the next `operation` (e.g. "profiles.update") raise `error` once."""
        self.failures[operation] = error

    def maybe_fail(self, operation: str) -> None:
        error = self.failures.pop(operation, None)
        if error is not None:
            raise error

    def with_defaults(self, table: str, item: Dict[str, Any]) -> Dict[str, Any]:
        row = dict(item)
        if PRIMARY_KEYS.get(table) == "id":
            row.setdefault("id", str(uuid.uuid4()))
        row.setdefault("created_at", _now())
        row.setdefault("updated_at", _now())
        if table == "profiles":
            row.setdefault("role", "user")
            row.setdefault("last_sign_in_at", None)
        if table == "webhooks":
            row.setdefault("active", False)
        return row

    def check_unique(self, table: str, row: Dict[str, Any], ignore: Optional[Dict] = None) -> None:
        for column in UNIQUE_COLUMNS.get(table, []):
            for other in self.tables.get(table, []):
                if other is not ignore and other.get(column) == row.get(column):
                    raise Exception(
                        f'duplicate key value violates unique constraint "{table}_{column}_key"'
                    )

    def new_user(self, email: str, password: Optional[str]) -> SimpleNamespace:
        user = SimpleNamespace(
            id=str(uuid.uuid4()),
            email=email,
            user_metadata={},
            app_metadata={},
            last_sign_in_at=None,
        )
        self.users[user.id] = user
        self.passwords[user.id] = password
        return user

    def profile(self, user_id: str) -> Optional[Dict[str, Any]]:
        return next((r for r in self.tables.get("profiles", []) if r["id"] == user_id), None)

    def add_account(self, email: str, role: str = "user", password: str = "secret123",
                    created_at: Optional[str] = None) -> "Account":
        user = self.new_user(email, password)
        row = {"id": user.id, "email": email, "role": role,
               "updated_at": "2024-01-01T00:00:00+00:00"}
        if created_at:
            row["created_at"] = created_at
        self.tables.setdefault("profiles", []).append(self.with_defaults("profiles", row))
        token = f"token-{user.id}"
        self.tokens[token] = user.id
        return Account(id=user.id, email=email, token=token)


@dataclass
class Account:
    id: str
    email: str
    token: str

    @property
    def headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


@pytest.fixture(autouse=True)
def reset_shared_state():
    clear_auth_cache()
    limiter.reset()
    yield
    app.dependency_overrides.clear()
    clear_auth_cache()


@pytest.fixture
def fake_supabase():
    return FakeSupabase()


@pytest.fixture
def client(fake_supabase):
    app.dependency_overrides[get_supabase] = lambda: fake_supabase
    app.dependency_overrides[get_service_supabase] = lambda: fake_supabase
    return TestClient(app)


@pytest.fixture
def owner(fake_supabase):
    return fake_supabase.add_account("owner@example.com", "owner", created_at="2024-01-01T00:00:00+00:00")


@pytest.fixture
def admin(fake_supabase):
    return fake_supabase.add_account("admin@example.com", "admin", created_at="2024-02-01T00:00:00+00:00")


@pytest.fixture
def member(fake_supabase):
    return fake_supabase.add_account("member@example.com", "user", created_at="2024-03-01T00:00:00+00:00")
