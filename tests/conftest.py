"""Shared test fixtures for pytest.

Environment defaults are set before the application is imported so settings
load without a .env file. The Supabase client is replaced by an in-memory fake
query builder through FastAPI dependency overrides.
"""

import copy
import os
import re
import uuid
from collections import defaultdict
from typing import Any, Callable, Dict, List, Optional
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from postgrest.exceptions import APIError


os.environ.setdefault("SUPABASE_URL", "https://project.supabase.test")
os.environ.setdefault("SUPABASE_KEY", "anon-key")
os.environ.setdefault("CRON_SECRET_KEY", "test-cron-secret")
os.environ.setdefault("RATE_LIMIT", "10000/minute")

from savorycircle.core.dependencies import get_current_user_id, get_user_supabase
from savorycircle.database.supabase_client import get_service_supabase, get_supabase
from savorycircle.main import app
from savorycircle.modules.auth.service import clear_auth_cache
from savorycircle.modules.recipes.service import clear_recipe_cache


DEFAULT_CREATED_AT = "2024-01-01T12:00:00+00:00"
_AND_GROUP = re.compile(r"and\(([^)]*)\)")


class FakeResponse:
    def __init__(self, data: Any):
        self.data = data


class FakeQuery:
    """Records a PostgREST-style query chain and runs it against in-memory rows."""

    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table_name = table
        self.action = "select"
        self.payload: Any = None
        self.filters: List[Callable[[Dict[str, Any]], bool]] = []
        self._order: Optional[tuple] = None
        self._limit: Optional[int] = None
        self._single = False
        self._conflict = ["id"]

    def select(self, *columns, **kwargs):
        return self

    def insert(self, payload):
        self.action, self.payload = "insert", payload
        return self

    def upsert(self, payload, on_conflict: str = "", **kwargs):
        self.action, self.payload = "upsert", payload
        self._conflict = [column.strip() for column in on_conflict.split(",") if column.strip()] or ["id"]
        return self

    def update(self, payload):
        self.action, self.payload = "update", payload
        return self

    def delete(self):
        self.action = "delete"
        return self

    def eq(self, column, value):
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def match(self, query: Dict[str, Any]):
        for column, value in query.items():
            self.eq(column, value)
        return self

    def in_(self, column, values):
        values = list(values)
        self.filters.append(lambda row: row.get(column) in values)
        return self

    def contains(self, column, values):
        self.filters.append(lambda row: all(v in (row.get(column) or []) for v in values))
        return self

    def ilike(self, column, pattern):
        needle = pattern.strip("%").lower()
        self.filters.append(lambda row: needle in str(row.get(column) or "").lower())
        return self

    def or_(self, expression):
        groups = []
        for group in _AND_GROUP.findall(expression):
            conditions = []
            for condition in group.split(","):
                column, _, value = condition.split(".", 2)
                conditions.append((column, value))
            groups.append(conditions)
        self.filters.append(
            lambda row: any(all(str(row.get(c)) == v for c, v in conds) for conds in groups)
        )
        return self

    def order(self, column, desc=False):
        self._order = (column, desc)
        return self

    def limit(self, count):
        self._limit = count
        return self

    def maybe_single(self):
        self._single = True
        return self

    def _matches(self, row):
        return all(check(row) for check in self.filters)

    def execute(self):
        self.db.queries.append(self)
        error = self.db.errors.get((self.table_name, self.action))
        if error is not None:
            raise error

        rows = self.db.tables[self.table_name]

        if self.action in ("insert", "upsert"):
            payload = self.payload if isinstance(self.payload, list) else [self.payload]
            written = []
            for item in payload:
                record = dict(item)
                record.setdefault("id", str(uuid.uuid4()))
                record.setdefault("created_at", DEFAULT_CREATED_AT)
                existing = next(
                    (r for r in rows if all(r.get(c) == record.get(c) for c in self._conflict)), None
                )
                if self.action == "upsert" and existing is not None:
                    existing.update(record)
                    written.append(existing)
                else:
                    rows.append(record)
                    written.append(record)
            return FakeResponse(copy.deepcopy(written))

        matched = [row for row in rows if self._matches(row)]

        if self.action == "update":
            for row in matched:
                row.update(copy.deepcopy(self.payload))
            return FakeResponse(copy.deepcopy(matched))

        if self.action == "delete":
            self.db.tables[self.table_name] = [row for row in rows if not self._matches(row)]
            return FakeResponse(copy.deepcopy(matched))

        if self._order:
            column, desc = self._order
            matched = sorted(matched, key=lambda row: str(row.get(column) or ""), reverse=desc)
        if self._limit is not None:
            matched = matched[: self._limit]
        if self._single:
            if len(matched) > 1:
                raise APIError({"code": "PGRST116", "message": "JSON object requested, multiple (or no) rows returned"})
            # supabase-py returns None rather than a response when nothing matched
            return FakeResponse(copy.deepcopy(matched[0])) if matched else None
        return FakeResponse(copy.deepcopy(matched))


class FakeRpc:
    def __init__(self, db: "FakeSupabase", name: str, params: Dict[str, Any]):
        self.db = db
        self.name = name
        self.params = params

    def execute(self):
        error = self.db.errors.get(("rpc", self.name))
        if error is not None:
            raise error
        result = self.db.rpc_results.get(self.name, [])
        if callable(result):
            result = result(self.params)
        return FakeResponse(copy.deepcopy(result))


class FakeBucket:
    def __init__(self, storage: "FakeStorage", name: str):
        self.storage = storage
        self.name = name

    def upload(self, path, file, file_options=None):
        if self.storage.fail is not None:
            raise self.storage.fail
        self.storage.uploads.append((self.name, path, file, file_options))
        return {"Key": f"{self.name}/{path}"}

    def get_public_url(self, path):
        return f"https://storage.test/{self.name}/{path}"

    def remove(self, paths):
        self.storage.removed.extend((self.name, p) for p in paths)
        return []


class FakeStorage:
    def __init__(self):
        self.uploads: List[tuple] = []
        self.removed: List[tuple] = []
        self.fail: Optional[Exception] = None

    def from_(self, bucket):
        return FakeBucket(self, bucket)


class FakeSupabase:
    """In-memory stand-in for supabase.Client covering the calls the services make."""

    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = defaultdict(list)
        self.rpc_results: Dict[str, Any] = {}
        self.rpc_calls: List[tuple] = []
        self.errors: Dict[tuple, Exception] = {}
        self.queries: List[FakeQuery] = []
        self.storage = FakeStorage()
        self.auth = MagicMock()

    def table(self, name):
        return FakeQuery(self, name)

    from_ = table

    def rpc(self, name, params=None):
        self.rpc_calls.append((name, params or {}))
        return FakeRpc(self, name, params or {})


def make_food(food_id: str, user_id: str = "user-1", **fields) -> Dict[str, Any]:
    food = {
        "id": food_id,
        "user_id": user_id,
        "name": fields.pop("name", f"Food {food_id}"),
        "ingredients": fields.pop("ingredients", []),
        "recipe": fields.pop("recipe", []),
        "rating": fields.pop("rating", None),
        "meal_types": fields.pop("meal_types", []),
        "visibility": fields.pop("visibility", "private"),
        "image_url": None,
        "created_at": fields.pop("created_at", DEFAULT_CREATED_AT),
    }
    food.update(fields)
    return food


@pytest.fixture
def fake_db() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def user() -> Dict[str, Any]:
    return {
        "id": "user-1",
        "email": "cook@example.com",
        "user_metadata": {"username": "cook"},
        "access_token": "token-1",
    }


@pytest.fixture(autouse=True)
def _reset_caches():
    clear_auth_cache()
    clear_recipe_cache()
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client(fake_db, user):
    """Authenticated client: every Supabase dependency resolves to the fake."""
    app.dependency_overrides[get_current_user_id] = lambda: user
    app.dependency_overrides[get_user_supabase] = lambda: fake_db
    app.dependency_overrides[get_supabase] = lambda: fake_db
    app.dependency_overrides[get_service_supabase] = lambda: fake_db
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def anon_client(fake_db):
    """Client without an auth override; the bearer token is checked against the fake auth API."""
    app.dependency_overrides[get_supabase] = lambda: fake_db
    app.dependency_overrides[get_user_supabase] = lambda: fake_db
    app.dependency_overrides[get_service_supabase] = lambda: fake_db
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def mock_http(monkeypatch):
    """Route every httpx.AsyncClient created by the code under test through a handler."""
    import httpx

    real_async_client = httpx.AsyncClient

    def install(handler):
        def factory(*args, **kwargs):
            kwargs["transport"] = httpx.MockTransport(handler)
            return real_async_client(*args, **kwargs)

        monkeypatch.setattr(httpx, "AsyncClient", factory)

    return install
