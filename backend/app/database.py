"""
Cash Card Service — Database Session Management
=================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
Why:   Centralizes all database connection logic in one place.
How:   Creates an async engine sized for the configured backend, provides a
       session dependency that auto-commits on success and auto-rolls-back
       on error.
Who:   Used by route handlers via FastAPI's dependency injection system.
When:  Engine is created at module import; sessions are created per-request.

Backends:
    sqlite+aiosqlite (default): embedded store. An in-memory database lives
    only as long as its connection, so the pool holds exactly one connection
    and never recycles it. A session keeps that connection from its first
    statement until commit or rollback; other sessions wait for it. Requests
    are therefore serialized and one request's rollback cannot discard
    another request's uncommitted writes.

    postgresql+asyncpg (optional): pooled connections
        pool_size=20, max_overflow=10, pool_pre_ping, pool_recycle=3600
"""

from typing import Any, AsyncGenerator, Dict

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import AsyncAdaptedQueuePool

from app.config import settings


def _engine_options() -> Dict[str, Any]:
    """Build create_async_engine keyword arguments for the configured URL."""
    options: Dict[str, Any] = {
        # Echo SQL queries in DEBUG mode for development visibility
        "echo": settings.log_level == "DEBUG",
    }

    if settings.is_sqlite:
        options["connect_args"] = {"check_same_thread": False}
        if settings.is_in_memory:
            # One connection, checked out exclusively per transaction
            options.update(
                poolclass=AsyncAdaptedQueuePool,
                pool_size=1,
                max_overflow=0,
                pool_timeout=settings.db_pool_timeout,
            )
        return options

    options.update(
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=settings.db_pool_pre_ping,
        pool_recycle=3600,
        pool_timeout=settings.db_pool_timeout,
    )
    return options


# ── Engine Configuration ──────────────────────────────────────────────────
engine = create_async_engine(settings.database_url, **_engine_options())

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: attributes stay readable after the request commits
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All models inherit from this class so they register with a single
    metadata object, which `init_models()` uses to create the schema.
    """
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler (the handler performs queries)
        3. On success: commits the transaction
        4. On error: rolls back the transaction
        5. Always: closes the session (returns connection to pool)

    Example usage in a route:
        @router.get("/cashcards/{card_id}")
        async def get_card(card_id: int, db: AsyncSession = Depends(get_db_session)):
            ...

    Raises:
        Any database exceptions are propagated to the global error handler.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            # Rollback for ANY failure, including non-DB errors raised after a write
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def init_models() -> None:
    """
    What:  Creates every table registered on Base.metadata that is missing.
    When:  Called during application startup (lifespan handler) and by tests.
    """
    # Registers the ORM classes on Base.metadata
    from app.models import cash_card, user  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Called during application shutdown (lifespan handler).
    Note:  For an in-memory SQLite URL this also discards the database.
    """
    await engine.dispose()
