"""
Fritter Backend: Test Configuration (conftest.py)
==================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Environment variables are set before anything from `fritter` is
       imported, so settings and the engine point at a throwaway SQLite
       file instead of PostgreSQL.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock session for service unit tests
    ├── make_user:       detached User rows for service unit tests
    ├── database:        fresh schema on the SQLite test database
    ├── client_factory:  new app + HTTPX AsyncClient (own cookie jar) per call
    ├── test_client:     one signed-out client
    └── signed_in:       registers a user and returns their signed-in client
"""

import os
import tempfile
import uuid
from datetime import datetime, timezone
from typing import AsyncGenerator, Awaitable, Callable, List
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient


# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Must run before any fritter import: settings and the engine are built at import
_TEST_DB_DIR = tempfile.mkdtemp(prefix="fritter_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DB_DIR}/fritter_test.db"
os.environ["SESSION_SECRET"] = "test-session-secret-0123456789"
os.environ["RATE_LIMIT_REQUESTS"] = "100000"
os.environ["LOG_LEVEL"] = "WARNING"

DEFAULT_PASSWORD = "hunter2"


# ══════════════════════════════════════════════════════════════════════════
# Unit-test Fixtures (no database)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_freet(mock_db_session):
            mock_db_session.execute.return_value = MagicMock(
                scalar_one_or_none=MagicMock(return_value=freet)
            )
            result = await freet_service.get_freet(mock_db_session, str(freet.id))
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.delete = AsyncMock()
    session.get = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def make_user():
    """Builds User instances that are never attached to a session."""
    from fritter.models.user import User

    def _make(username: str = "alice") -> User:
        return User(
            id=uuid.uuid4(),
            username=username,
            password_hash="not-a-real-hash",
            date_joined=datetime.now(timezone.utc),
        )

    return _make


# ══════════════════════════════════════════════════════════════════════════
# Database and HTTP Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def database():
    """Creates every table before the test and drops them afterwards."""
    import fritter.models  # noqa: F401
    from fritter.database import Base, engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture
async def client_factory(database) -> AsyncGenerator[Callable[[], Awaitable[AsyncClient]], None]:
    """
    Returns an async callable producing independent clients.

    Each client talks to its own app instance and keeps its own cookies,
    so each one can hold a different signed-in user.
    """
    from fritter.main import create_app

    clients: List[AsyncClient] = []

    async def _make() -> AsyncClient:
        transport = ASGITransport(app=create_app())
        client = AsyncClient(transport=transport, base_url="http://test")
        clients.append(client)
        return client

    yield _make

    for client in clients:
        await client.aclose()


@pytest_asyncio.fixture
async def test_client(client_factory) -> AsyncClient:
    """A client with no signed-in user."""
    return await client_factory()


@pytest_asyncio.fixture
async def signed_in(client_factory) -> Callable[..., Awaitable[AsyncClient]]:
    """
    Registers an account and returns a client signed in as it.

    Usage:
        async def test_something(signed_in):
            alice = await signed_in("alice")
            response = await alice.post("/api/freets", json={"content": "hi"})
    """

    async def _signed_in(username: str, password: str = DEFAULT_PASSWORD) -> AsyncClient:
        client = await client_factory()
        response = await client.post(
            "/api/users", json={"username": username, "password": password}
        )
        assert response.status_code == 201, response.text
        return client

    return _signed_in
