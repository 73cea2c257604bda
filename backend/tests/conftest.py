"""
Cash Card Service — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: Mock AsyncSession (no real DB needed)
    ├── mock_card_repository: AsyncMock standing in for CashCardRepository
    ├── database: Fresh in-memory SQLite with schema + demo data
    │   ├── db_session: AsyncSession on that database
    │   └── test_client: HTTPX AsyncClient talking to the FastAPI app
    └── sample_card / auth tuples: consistent test data
"""

import os

# Override settings for testing BEFORE any app imports
# Why: app.config builds the settings singleton (and app.database the engine) at import
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["BCRYPT_ROUNDS"] = "4"  # Minimum work factor keeps seeding fast
os.environ["SEED_DEMO_DATA"] = "true"

from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Credentials of the seeded demo users (see app/seed.py)
# ══════════════════════════════════════════════════════════════════════════

SARAH = ("sarah1", "abc123")
KUMAR = ("kumar2", "xyz789")
HANK = ("hank-owns-no-cards", "qrs456")


@pytest.fixture
def sarah():
    return SARAH


@pytest.fixture
def kumar():
    return KUMAR


@pytest.fixture
def hank():
    return HANK


# ══════════════════════════════════════════════════════════════════════════
# Mock Fixtures (no database)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = card
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def mock_card_repository():
    """AsyncMock with the CashCardRepository methods."""
    repository = MagicMock()
    repository.create = AsyncMock()
    repository.find_by_id = AsyncMock()
    repository.update = AsyncMock()
    repository.delete_by_id = AsyncMock()
    repository.find_all = AsyncMock(return_value=[])
    repository.count = AsyncMock(return_value=0)
    return repository


@pytest.fixture
def sample_card():
    """A stand-in for a loaded CashCard row."""
    card = MagicMock()
    card.id = 99
    card.amount = 123.45
    card.owner = "sarah1"
    return card


# ══════════════════════════════════════════════════════════════════════════
# Database-Backed Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def database():
    """
    A fresh in-memory database with the schema and demo data loaded.

    How:   Disposing the engine afterwards closes the single pooled
           connection, which discards the in-memory database. The next
           test starts from an empty one.
    """
    from app.database import dispose_engine
    from app.main import prepare_database

    await prepare_database()
    yield
    await dispose_engine()


@pytest_asyncio.fixture
async def db_session(database):
    """An AsyncSession on the test database; uncommitted work is rolled back."""
    from app.database import async_session_factory

    async with async_session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def test_client(database):
    """
    Provides an async HTTP test client for endpoint testing.

    Why not run the lifespan: the `database` fixture already prepared the
    store, and ASGITransport does not send lifespan events.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from app.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
