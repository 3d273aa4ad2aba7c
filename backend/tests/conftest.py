"""
Freshrack Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── db_engine:        aiosqlite engine on a fresh file with all tables created
    ├── session_factory:  async_sessionmaker bound to db_engine
    ├── db_session:       one AsyncSession for service-level tests
    ├── mock_db_session:  AsyncMock session for failure injection
    ├── fixed_now:        the pinned "now" used by every service clock
    └── test_client:      HTTPX AsyncClient against the app, sessions overridden
"""

import os
import tempfile
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

# Override settings BEFORE any freshrack import builds the engine
_TEST_DIR = tempfile.mkdtemp(prefix="freshrack_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DIR}/freshrack.db"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine  # noqa: E402

from freshrack.database import Base, get_db_session  # noqa: E402
from freshrack.models.food import Food  # noqa: E402,F401
from freshrack.models.note import Note  # noqa: E402,F401
from freshrack.services.food_service import food_service  # noqa: E402
from freshrack.services.note_service import note_service  # noqa: E402

FIXED_NOW = datetime(2025, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_now() -> datetime:
    """The instant every service clock returns during a test: 2025-01-15T12:00:00.000Z."""
    return FIXED_NOW


@pytest_asyncio.fixture
async def db_engine(tmp_path):
    """
    A SQLite database per test, schema created from the ORM metadata.

    Usage:
        async def test_something(db_engine): ...
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'freshrack.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.side_effect = OSError("connection refused")
        with pytest.raises(DatabaseError):
            await service.list_foods(mock_db_session)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def pinned_clock(monkeypatch, fixed_now):
    """Pins the module-level service singletons used by the routes."""
    monkeypatch.setattr(food_service, "clock", lambda: fixed_now)
    monkeypatch.setattr(note_service, "clock", lambda: fixed_now)


@pytest_asyncio.fixture
async def test_client(session_factory, pinned_clock):
    """
    Provides an async HTTP test client for endpoint testing.

    How:   ASGITransport routes requests straight into the app (no server,
           no lifespan); get_db_session is overridden to use the test database,
           committing after each request like the real dependency.

    Usage:
        async def test_liveness(test_client):
            response = await test_client.get("/")
            assert response.status_code == 200
    """
    from freshrack.main import app

    async def override_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
