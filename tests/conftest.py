"""Shared test fixtures for users-api."""

import sqlite3

import pytest
from starlette.testclient import TestClient

from users_api.exceptions import StorageError
from users_api.persistence import UserDB, UserStore
from users_api.server.app import create_app

PREFIX = "/api/py"


class FailingStore(UserStore):
    """Store double whose chosen operations raise StorageError."""

    def __init__(self, db: UserDB, failing: set[str]) -> None:
        super().__init__(db)
        self.failing = failing
        self.calls: list[str] = []

    def _maybe_fail(self, operation: str, user_id=None) -> None:
        self.calls.append(operation)
        if operation in self.failing:
            raise StorageError(
                operation, sqlite3.OperationalError("database is locked"), user_id=user_id
            )

    def list_users(self):
        self._maybe_fail("list_users")
        return super().list_users()

    def find_user(self, user_id):
        self._maybe_fail("find_user", user_id)
        return super().find_user(user_id)

    def create_user(self, name, email):
        self._maybe_fail("create_user")
        return super().create_user(name, email)

    def update_user(self, user_id, name, email):
        self._maybe_fail("update_user", user_id)
        return super().update_user(user_id, name, email)

    def delete_user(self, user_id):
        self._maybe_fail("delete_user", user_id)
        return super().delete_user(user_id)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """No DATABASE_URL / USERS_API_* leaking in, and an empty cwd."""
    monkeypatch.delenv("DATABASE_URL", raising=False)
    for key in ("DATABASE_URL", "HOST", "PORT", "API_PREFIX", "VERBOSITY", "LOG_FILE"):
        monkeypatch.delenv(f"USERS_API_{key}", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def db():
    """Connected in-memory users database."""
    with UserDB("sqlite://") as database:
        yield database


@pytest.fixture
def store(db):
    return UserStore(db)


@pytest.fixture
def client(store):
    """HTTP client against the app wired to the in-memory store."""
    with TestClient(create_app(store, api_prefix=PREFIX)) as test_client:
        yield test_client


@pytest.fixture
def make_failing_client(db):
    """Factory: client whose store fails on the named operations."""

    def _make(*failing: str):
        failing_store = FailingStore(db, set(failing))
        return TestClient(create_app(failing_store, api_prefix=PREFIX)), failing_store

    return _make
