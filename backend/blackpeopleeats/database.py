"""
BlackPeopleEats Backend — Database Session Management
=======================================================

What:  Async SQLAlchemy engine, session factory, declarative base, the
       per-request session dependency and startup schema creation.
How:   One engine is opened at import and lives for the process lifetime.
       Each request receives its own AsyncSession through get_db_session(),
       committed on success and rolled back on error.

The session is the store handle every service method receives. Nothing in
the services reaches for a module-level session, so tests override
get_db_session with an in-memory SQLite store.

Drivers:
    sqlite+aiosqlite   default, single file next to the process
    postgresql+asyncpg production option; pool settings apply only here
"""

import logging
from typing import Any, AsyncGenerator, Dict

from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from blackpeopleeats.config import settings

logger = logging.getLogger(__name__)


def engine_options(database_url: str) -> Dict[str, Any]:
    """
    Keyword arguments for create_async_engine() suited to the URL's backend.

    SQLite in-memory databases use a StaticPool that rejects pool sizing
    arguments, so those are only passed for server databases.
    """
    options: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}
    if not database_url.startswith("sqlite"):
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return options


def create_engine(database_url: str) -> AsyncEngine:
    return create_async_engine(database_url, **engine_options(database_url))


# ── Engine & Session Factory ──────────────────────────────────────────────
engine = create_engine(settings.database_url)

# expire_on_commit=False: attributes stay readable after commit, which the
# routes rely on when serializing freshly inserted rows
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models (shared metadata for Alembic)."""
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler
        3. On success: commits the transaction
        4. On error: rolls back and re-raises for the global error handlers
        5. Always: closes the session (returns connection to pool)
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
@retry(
    retry=retry_if_exception_type((OperationalError, ConnectionError, OSError)),
    stop=stop_after_attempt(settings.startup_retry_attempts),
    wait=wait_fixed(settings.startup_retry_wait),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True,
)
async def create_schema(bind: AsyncEngine = engine) -> None:
    """
    What:  Creates any missing tables (CREATE TABLE IF NOT EXISTS semantics).
    When:  Application startup, before seeding.
    Retry: A database container that is still booting refuses connections
           for a few seconds; tenacity waits it out instead of crashing.
    """
    # Registers every model on Base.metadata
    from blackpeopleeats import models  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema ready")


async def dispose_engine() -> None:
    """Closes all pooled connections at shutdown."""
    await engine.dispose()
