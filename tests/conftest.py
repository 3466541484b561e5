"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory database session, seeded tenant records, session mocks,
API client factory
Dependencies: pytest, sqlalchemy, aiosqlite, fastapi
System role: Test infrastructure and fixture management
"""

import uuid
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

TEST_ENCRYPTION_KEY = "0123456789abcdef" * 4


@pytest.fixture(autouse=True)
def _test_environment(monkeypatch):
    """Keep settings deterministic regardless of the developer's .env."""
    from fluxori.configs import get_settings

    monkeypatch.setenv("FLUXORI_ENCRYPTION_KEY", TEST_ENCRYPTION_KEY)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
async def test_async_db():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        AsyncSession: Test database session with cleanup (lazy imported to avoid settings issues)
    """
    from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
    from sqlalchemy.pool import StaticPool

    from fluxori.boundary.db import models  # noqa: F401
    from fluxori.boundary.db.base import Base

    # Use SQLite in-memory database for tests
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()

    # Cleanup
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def organization(test_async_db):
    """Persisted organization."""
    from fluxori.boundary.db.CRUD.organization_crud import organization_crud

    return await organization_crud.create(test_async_db, name="Acme Trading", slug="acme-trading")


@pytest.fixture
async def warehouse(test_async_db, organization):
    """Persisted default warehouse of ``organization``."""
    from fluxori.boundary.db.CRUD.warehouse_crud import warehouse_crud

    return await warehouse_crud.create(
        test_async_db,
        organization_id=organization.id,
        name="Main",
        code="MAIN",
        is_default=True,
    )


@pytest.fixture
def mock_session() -> AsyncSession:
    """Provide mock async database session."""
    return AsyncMock(spec=AsyncSession)


@pytest.fixture
def sample_id() -> uuid.UUID:
    """Provide sample UUID for testing."""
    return uuid.uuid4()
