"""Shared fixtures: in-memory SQLite database, sessions and an HTTP client."""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool

from main import create_app
from me_api.config import Settings
from me_api.database import Database

TEST_DATABASE_URL = "sqlite+aiosqlite://"


def make_database() -> Database:
    # StaticPool keeps one connection so the in-memory database survives
    return Database(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        database_url=TEST_DATABASE_URL,
        environment="test",
        rate_limit_enabled=False,
        log_level="WARNING",
        log_json=False,
        log_dir=None,
    )


@pytest.fixture
async def database():
    database = make_database()
    await database.init()
    yield database
    await database.close()


@pytest.fixture
async def db(database):
    """Session for repository-level tests (committed on exit)."""
    async with database.session() as session:
        yield session


@pytest.fixture
def app(settings, database):
    return create_app(settings, database)


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
