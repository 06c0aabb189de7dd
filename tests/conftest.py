# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - An in-memory stand-in for the Supabase client (no network)
# - A factory for Supabase-style access tokens signed with the test secret
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret-with-enough-length")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import time
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from app.config import settings
from app.dependencies import get_supabase_client
from app.main import app


# =============================================================================
# Fake Supabase client
# =============================================================================

class FakeQuery:
    """Mimics the postgrest query builder for the calls the app makes."""

    def __init__(self, store: "FakeSupabase", table: str):
        self.store = store
        self.table = table
        self.operation = "select"
        self.payload: list[dict] = []
        self.order_by: tuple[str, bool] | None = None
        self.row_limit: int | None = None

    def select(self, columns: str = "*"):
        self.operation = "select"
        return self

    def order(self, column: str, desc: bool = False):
        self.order_by = (column, desc)
        return self

    def limit(self, count: int):
        self.row_limit = count
        return self

    def insert(self, rows):
        self.operation = "insert"
        self.payload = rows if isinstance(rows, list) else [rows]
        return self

    def execute(self):
        self.store.executed.append((self.table, self.operation))
        if self.store.fail_with is not None:
            raise self.store.fail_with

        rows = self.store.tables.setdefault(self.table, [])

        if self.operation == "insert":
            self.store.insert_payloads.append(self.payload)
            inserted = [self.store.assign_defaults(row) for row in self.payload]
            rows.extend(inserted)
            return SimpleNamespace(data=[dict(row) for row in inserted])

        result = [dict(row) for row in rows]
        if self.order_by is not None:
            column, desc = self.order_by
            result.sort(key=lambda row: row.get(column) or "", reverse=desc)
        if self.row_limit is not None:
            result = result[: self.row_limit]
        return SimpleNamespace(data=result)


class FakeSupabase:
    """
    In-memory stand-in for supabase.Client.

    Assigns id and created_at on insert the way the real table does.
    Set `fail_with` to an exception to make every query raise it.
    """

    BASE_TIME = datetime(2025, 1, 1, tzinfo=timezone.utc)

    def __init__(self):
        self.tables: dict[str, list[dict]] = {"entries": []}
        self.accessed_tables: list[str] = []
        self.executed: list[tuple[str, str]] = []
        self.insert_payloads: list[list[dict]] = []
        self.fail_with: Exception | None = None
        self._next_id = 1

    def table(self, name: str) -> FakeQuery:
        self.accessed_tables.append(name)
        return FakeQuery(self, name)

    def assign_defaults(self, row: dict) -> dict:
        stored = dict(row)
        stored["id"] = self._next_id
        stored["created_at"] = (self.BASE_TIME + timedelta(seconds=self._next_id)).isoformat()
        self._next_id += 1
        return stored

    def seed(self, *rows: dict) -> None:
        for row in rows:
            self.tables["entries"].append(self.assign_defaults(row))


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def fake_store():
    """Fresh in-memory store per test."""
    return FakeSupabase()


@pytest.fixture
def make_token():
    """Factory for Supabase-style HS256 access tokens."""

    def _make_token(
        sub: str | None = None,
        email: str | None = "ada@example.com",
        expires_in: int = 3600,
        audience: str = "authenticated",
        secret: str | None = None,
    ) -> str:
        claims = {
            "sub": sub if sub is not None else str(uuid4()),
            "aud": audience,
            "exp": int(time.time()) + expires_in,
            "iat": int(time.time()),
            "role": "authenticated",
        }
        if email is not None:
            claims["email"] = email
        return jwt.encode(claims, secret or settings.SUPABASE_JWT_SECRET, algorithm="HS256")

    return _make_token


@pytest.fixture
def auth_headers(make_token):
    """Authorization header carrying a valid session."""
    return {"Authorization": f"Bearer {make_token()}"}


@pytest.fixture
def client(fake_store):
    """TestClient wired to the in-memory store."""
    app.dependency_overrides[get_supabase_client] = lambda: fake_store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def sample_entry():
    """Sample write payload."""
    return {"name": "A", "email": "a@x.com", "message": "hi"}
