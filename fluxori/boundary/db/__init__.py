"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Async connection management
  - create_tables(): Schema bootstrap for local environments

Dependencies: sqlalchemy, fluxori.configs
System role: Database adapter providing persistent storage for tenants,
catalog, inventory and accounting connector state.
"""

from fluxori.boundary.db.base import Base, TimestampMixin, UUIDMixin
from fluxori.boundary.db.connection import (
    create_tables,
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "create_tables",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
]
