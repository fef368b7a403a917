"""
DayNotes Backend: Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock standing in for AsyncSession (unit tests)
    ├── db_engine / session_factory: fresh SQLite database per test
    ├── app: new FastAPI app wired to that database
    ├── test_client: HTTPX AsyncClient over ASGITransport (no server)
    └── auth_client: test_client already logged in as a registered user
"""

import os
import tempfile

# Must run before any daynotes import: settings and the module-level engine
# read the environment once.
_TEST_DIR = tempfile.mkdtemp(prefix="daynotes_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DIR}/module_engine.db"
os.environ["SESSION_SECRET"] = "test-secret-not-real"
os.environ["LOG_LEVEL"] = "WARNING"

from typing import AsyncGenerator  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import NullPool  # noqa: E402

from daynotes.database import Base, get_db_session  # noqa: E402
from daynotes.main import create_app  # noqa: E402
import daynotes.models  # noqa: E402,F401

DEFAULT_EMAIL = "ada@example.com"
DEFAULT_PASSWORD = "correct horse battery"


@pytest.fixture
def mock_db_session():
    """
    A MagicMock that simulates AsyncSession behavior.

    Usage:
        async def test_get(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = note
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.delete = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def db_engine(tmp_path):
    """
    A throwaway SQLite database with all tables created.

    NullPool: every session opens its own connection on the running loop, so
    nothing is shared between pytest-asyncio's per-test event loops.
    """
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'daynotes.db'}",
        poolclass=NullPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def app(session_factory):
    """A fresh app per test, with get_db_session pointed at the test database."""
    application = create_app()

    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    application.dependency_overrides[get_db_session] = override_get_db_session
    return application


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient talking to the app in-process.

    Cookies persist on the client, so logging in once authenticates every
    later request made with it.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


async def register_and_login(
    client: AsyncClient,
    email: str = DEFAULT_EMAIL,
    password: str = DEFAULT_PASSWORD,
    name: str = "Ada",
) -> dict:
    """Register `email` and log the client in. Returns the user profile."""
    response = await client.post(
        "/api/auth/register",
        json={"name": name, "email": email, "password": password},
    )
    assert response.status_code == 201, response.text
    response = await client.post(
        "/api/auth/login", json={"email": email, "password": password}
    )
    assert response.status_code == 200, response.text
    return response.json()["user"]


@pytest_asyncio.fixture
async def auth_client(test_client):
    await register_and_login(test_client)
    return test_client


@pytest_asyncio.fixture
async def second_client(app):
    """Another browser: separate cookie jar, separate user."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        await register_and_login(client, email="grace@example.com", name="Grace")
        yield client
