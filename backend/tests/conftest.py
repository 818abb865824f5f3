"""
BlackPeopleEats Backend — Test Configuration (conftest.py)
============================================================

What:  Shared pytest fixtures for the entire test suite.
How:   A fresh in-memory SQLite store per test, created with the real
       models and filled by the real seed loader, is injected into the app
       by overriding get_db_session. Stripe and Gemini are forced into their
       keyless mock/fallback modes unless a test patches them.

Fixture Hierarchy:
    db_engine             in-memory aiosqlite engine with all tables
    session_factory       sessionmaker bound to it, store already seeded
    db_session            one session for service-level tests
    enforcing_db_session  seeded store with foreign keys enforced, as on PostgreSQL
    mock_db_session       AsyncMock session for error-path tests
    test_client           httpx AsyncClient over ASGITransport
"""

import os

# Override settings BEFORE any application import reads them
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["GEMINI_API_KEY"] = ""
os.environ["STRIPE_SECRET_KEY"] = ""
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["AUTO_CREATE_SCHEMA"] = "false"
os.environ["SEED_ON_STARTUP"] = "false"

from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from blackpeopleeats import models  # noqa: F401
from blackpeopleeats.database import Base, get_db_session
from blackpeopleeats.seed import seed_if_empty
from blackpeopleeats.services.gemini_service import (
    GeminiHighlightsService,
    get_highlights_provider,
    get_search_service,
)
from blackpeopleeats.services.highlights_fallback import FallbackHighlightsService
from blackpeopleeats.services.payment_service import PaymentService, get_payment_service


@pytest_asyncio.fixture
async def db_engine():
    """
    In-memory SQLite shared by every session of one test.

    Why StaticPool: each new connection to ":memory:" would otherwise be a
    brand-new empty database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(db_engine):
    """Session factory over a store holding the starter dataset."""
    factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        await seed_if_empty(session)
        await session.commit()
    return factory


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def enforcing_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Seeded in-memory store that rejects dangling foreign keys.

    SQLite only checks foreign keys with PRAGMA foreign_keys=ON, which has
    to be issued on every new connection.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine.sync_engine, "connect")
    def enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        await seed_if_empty(session)
        await session.commit()
        yield session

    await engine.dispose()


@pytest.fixture
def mock_db_session():
    """
    A MagicMock that simulates AsyncSession behavior.

    Usage:
        mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception("down"))
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.get = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def keyless_payment_service():
    return PaymentService(api_key="", app_url="http://localhost:3000")


@pytest.fixture
def keyless_gemini_service():
    return GeminiHighlightsService(api_key="")


@pytest_asyncio.fixture
async def test_client(session_factory, keyless_payment_service, keyless_gemini_service):
    """
    HTTPX AsyncClient talking to the FastAPI app in-process.

    Each request gets its own session from session_factory, committed on
    success and rolled back on error, like get_db_session.
    """
    from blackpeopleeats.main import app

    async def override_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_db_session
    app.dependency_overrides[get_payment_service] = lambda: keyless_payment_service
    app.dependency_overrides[get_highlights_provider] = (
        lambda: FallbackHighlightsService(keyless_gemini_service, default_city="Atlanta")
    )
    app.dependency_overrides[get_search_service] = lambda: keyless_gemini_service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
