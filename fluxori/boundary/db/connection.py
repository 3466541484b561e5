"""
Async engine, session factory and the per-request session dependency.

The engine and factory are built lazily and cached so settings can be
changed (and caches cleared) before first use.

Dependencies: sqlalchemy, fluxori.configs
System role: Database connection lifecycle management
"""

import logging
from functools import lru_cache
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from fluxori.configs import get_settings

logger = logging.getLogger(__name__)


@lru_cache
def get_async_engine() -> AsyncEngine:
    """
    Shared async engine.

    SQLite URLs skip the pool arguments, which its dialect does not accept.
    PostgreSQL connections are pinged before checkout and recycled after
    ``pool_recycle`` seconds.
    """
    db_config = get_settings().database
    url = db_config.async_database_url

    if url.startswith("sqlite"):
        return create_async_engine(url, echo=db_config.echo_sql)

    engine = create_async_engine(
        url,
        echo=db_config.echo_sql,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_recycle=db_config.pool_recycle,
        pool_pre_ping=True,
    )
    logger.info(
        "Database engine created",
        extra={"host": db_config.host, "db": db_config.db, "pool_size": db_config.pool_size},
    )
    return engine


@lru_cache
def get_async_session_factory() -> async_sessionmaker[AsyncSession]:
    # Instances stay readable after commit; services return plain dicts built from them.
    return async_sessionmaker(bind=get_async_engine(), autoflush=False, expire_on_commit=False)


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency: one session (and transaction) per request.

    Services only flush. The transaction commits when the route returns and
    rolls back when anything raises.
    """
    async with get_async_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def create_tables() -> None:
    """Create all tables for local development and smoke environments."""
    from fluxori.boundary.db import models  # noqa: F401  registers mappers
    from fluxori.boundary.db.base import Base

    async with get_async_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
