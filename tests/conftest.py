"""Pytest configuration and shared fixtures."""

from collections.abc import AsyncIterator

import pytest

from src.core.db_client import Database
from src.core.schema import init_db
from src.modules.tasks.service import TaskService
from src.modules.tasks.store import SqliteTaskStore
from src.services.auth_service import AuthProvider
from tests.unit.mocks import FakeClock


TEST_SECRET_KEY = "test_secret_key"


@pytest.fixture
async def db() -> AsyncIterator[Database]:
    """Open in-memory database with the schema applied."""
    database = Database(":memory:")
    await database.open()
    await init_db(database)
    yield database
    await database.close()


@pytest.fixture
def store(db: Database) -> SqliteTaskStore:
    """Task store over the in-memory database."""
    return SqliteTaskStore(db)


@pytest.fixture
def clock() -> FakeClock:
    """Deterministic clock advancing one second per call."""
    return FakeClock()


@pytest.fixture
def task_service(store: SqliteTaskStore, clock: FakeClock) -> TaskService:
    """Task service wired to the in-memory store and the fake clock."""
    return TaskService(store, clock=clock)


@pytest.fixture
def auth_provider() -> AuthProvider:
    """Auth provider with a fixed test secret."""
    return AuthProvider(TEST_SECRET_KEY, max_age_seconds=3600)
