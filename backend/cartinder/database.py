"""
Car Tinder Backend — Database Session Management
==================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
Why:   Centralizes all database connection logic in one place.
How:   Creates an async engine with connection pooling and provides a
       session dependency that rolls back on error and always closes.
Who:   Used by the store dependency (services/car_store.py).
When:  Engine is created at module import; sessions are created per-request.

Connection Pooling Strategy:
    pool_size=10:      Persistent connections for normal load
    max_overflow=10:   Temporary connections for traffic spikes
    pool_pre_ping:     Validates connections before use
    pool_recycle=3600: Stays below MySQL's default wait_timeout (8 hours)
                       and survives proxies with shorter idle limits

Transactions:
    Unlike a unit-of-work service, every request here is exactly one
    statement. CarStore commits its own writes so that a failing commit
    is reported through the same route error as a failing statement.
"""

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from cartinder.config import settings


# ── Engine Configuration ──────────────────────────────────────────────────
engine = create_async_engine(
    settings.database_url,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
    pool_pre_ping=settings.db_pool_pre_ping,
    pool_recycle=3600,

    # Echo SQL in DEBUG mode for development visibility
    echo=settings.log_level == "DEBUG",
)

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: rows are returned as plain dicts, nothing to refresh
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the store for the request's single call
        3. On error: rolls back whatever the failed call left open
        4. Always: closes the session (returns connection to pool)
    """
    async with async_session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def dispose_engine() -> None:
    """Closes all pooled connections. Called during application shutdown."""
    await engine.dispose()
