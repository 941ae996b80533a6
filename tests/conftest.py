"""Root test fixtures shared across all test types.

Every database-backed test gets its own SQLite file under tmp_path, so tests
need no database server and never share state.
"""

import os

# Set APP_ENV to testing before any app imports to disable rate limiting
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-that-is-at-least-32-chars")

# ruff: noqa: E402 - Imports must be after env var setup
from collections.abc import AsyncGenerator, Callable
from contextlib import AbstractAsyncContextManager
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlmodel import SQLModel

from src.projecthub.core import db
from src.projecthub.core.config import get_settings
from src.projecthub.core.db import get_session
from src.projecthub.main import create_app

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()


@pytest.fixture
def database_url(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> str:
    """Point the application settings at a fresh SQLite file."""
    url = f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"
    monkeypatch.setenv("DATABASE_URL", url)
    get_settings.cache_clear()
    return url


@pytest.fixture
async def engine(database_url: str) -> AsyncGenerator[AsyncEngine]:
    """Create the test engine and all tables."""
    await db.dispose_engine()

    test_engine = create_async_engine(database_url)
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield test_engine

    await test_engine.dispose()
    await db.dispose_engine()
    get_settings.cache_clear()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Provide an async session for arranging and inspecting data.

    The session never commits on its own; call `await db_session.commit()`
    after adding rows the code under test must see.
    """
    async with get_session(engine) as session:
        yield session


@pytest.fixture
async def service_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """A second session for the code under test.

    Services roll back their session on errors, which expires every object
    loaded in it; keeping arranged rows in db_session leaves them usable.
    """
    async with get_session(engine) as session:
        yield session


@pytest.fixture
def session_factory(
    engine: AsyncEngine,
) -> Callable[[], AbstractAsyncContextManager[AsyncSession]]:
    """Open additional independent sessions, e.g. to simulate concurrent requests."""
    return lambda: get_session(engine)


@pytest.fixture
async def client(engine: AsyncEngine) -> AsyncGenerator[AsyncClient]:
    """Create an HTTP client bound to the app and the per-test database."""
    app = create_app()
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
