"""
Generic async repository.

``BaseCRUD`` is parameterised by an ORM model and gives every entity the
same primitives: insert, primary key lookup, equality filtering with
ordering and pagination, counting, update-returning and delete. Subclasses
add the entity specific queries. Driver errors never leave this layer:
integrity violations become ``ConflictError`` and anything else raised by
SQLAlchemy becomes ``OperationFailedError``.

Dependencies: sqlalchemy, fluxori.core.exceptions
System role: Foundation for all database CRUD operations
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Generic, Sequence, TypeVar
from uuid import UUID

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from fluxori.boundary.db.base import Base
from fluxori.core.exceptions import (
    ConflictError,
    InvalidInputError,
    NotFoundError,
    OperationFailedError,
)

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """
    Repository over one model class.

    Methods take the session explicitly and only flush; committing is the
    caller's transaction boundary (see ``get_async_db``).
    """

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model

    @property
    def resource_name(self) -> str:
        return self.model.__name__.removesuffix("Model")

    def _not_found(self, id: UUID) -> NotFoundError:
        return NotFoundError(
            f"{self.resource_name} {id} not found",
            resource=self.resource_name,
            resource_id=id,
        )

    @asynccontextmanager
    async def _guard(self, operation: str) -> AsyncIterator[None]:
        """Translate SQLAlchemy errors raised inside the block."""
        try:
            yield
        except IntegrityError as e:
            raise ConflictError(
                f"{self.resource_name} violates a uniqueness or reference constraint",
                details={"operation": operation, "error": str(e.orig)},
            ) from e
        except SQLAlchemyError as e:
            raise OperationFailedError(
                f"Database error during {operation}",
                operation=f"{self.resource_name.lower()}.{operation}",
                details={"error_type": type(e).__name__},
            ) from e

    def _column(self, name: str):
        column = self.model.__table__.columns.get(name)
        if column is None:
            raise InvalidInputError(
                f"Unknown filter field '{name}' for {self.resource_name}",
                field=name,
            )
        return getattr(self.model, name)

    def _apply_filters(self, stmt, filters: dict[str, Any]):
        for name, value in filters.items():
            column = self._column(name)
            if isinstance(value, (list, tuple, set, frozenset)):
                stmt = stmt.where(column.in_(list(value)))
            elif value is None:
                stmt = stmt.where(column.is_(None))
            else:
                stmt = stmt.where(column == value)
        return stmt

    async def create(self, session: AsyncSession, **kwargs) -> ModelT:
        """Insert a row and return it refreshed with its id and timestamps."""
        instance = self.model(**kwargs)
        async with self._guard("create"):
            session.add(instance)
            await session.flush()
            await session.refresh(instance)
        return instance

    async def get_by_id(self, session: AsyncSession, id: UUID) -> ModelT | None:
        stmt = select(self.model).where(self.model.id == id)
        async with self._guard("get_by_id"):
            result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_id_or_fail(self, session: AsyncSession, id: UUID) -> ModelT:
        instance = await self.get_by_id(session, id)
        if instance is None:
            raise self._not_found(id)
        return instance

    async def get_all(
        self,
        session: AsyncSession,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[ModelT]:
        return await self.find(session, limit=limit, offset=offset)

    async def find(
        self,
        session: AsyncSession,
        limit: int | None = None,
        offset: int = 0,
        order_by: str | None = None,
        **filters,
    ) -> Sequence[ModelT]:
        """
        Records matching equality filters.

        List values become IN clauses and None becomes IS NULL.

        Args:
            limit: Page size, None for no limit
            offset: Rows to skip
            order_by: Column name, "-" prefix for descending (default created_at)
            **filters: Column name to value

        Raises:
            InvalidInputError: If a filter or order_by names an unknown column
        """
        stmt = self._apply_filters(select(self.model), filters)

        order_by = order_by or "created_at"
        descending = order_by.startswith("-")
        column = self._column(order_by.lstrip("-"))
        stmt = stmt.order_by(column.desc() if descending else column.asc())

        stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        async with self._guard("find"):
            result = await session.execute(stmt)
        return result.scalars().all()

    async def find_one(self, session: AsyncSession, **filters) -> ModelT | None:
        """Return the first record matching the filters, or None."""
        records = await self.find(session, limit=1, **filters)
        return records[0] if records else None

    async def count(self, session: AsyncSession, **filters) -> int:
        """Count records matching equality filters."""
        stmt = self._apply_filters(select(func.count()).select_from(self.model), filters)
        async with self._guard("count"):
            result = await session.execute(stmt)
        return int(result.scalar_one())

    async def update_by_id(
        self,
        session: AsyncSession,
        id: UUID,
        **kwargs,
    ) -> ModelT | None:
        """
        UPDATE ... RETURNING on one row.

        Returns:
            The updated instance (identity map synchronised), or None when
            no row has this id. With no fields the row is returned unchanged.
        """
        if not kwargs:
            return await self.get_by_id(session, id)

        stmt = (
            update(self.model)
            .where(self.model.id == id)
            .values(**kwargs)
            .returning(self.model)
        )
        async with self._guard("update"):
            result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def update_by_id_or_fail(
        self,
        session: AsyncSession,
        id: UUID,
        **kwargs,
    ) -> ModelT:
        instance = await self.update_by_id(session, id, **kwargs)
        if instance is None:
            raise self._not_found(id)
        return instance

    async def delete_by_id(self, session: AsyncSession, id: UUID) -> bool:
        """Delete one row; False when the id was unknown."""
        stmt = delete(self.model).where(self.model.id == id)
        async with self._guard("delete"):
            result = await session.execute(stmt)
        return result.rowcount > 0

    async def exists(self, session: AsyncSession, id: UUID) -> bool:
        stmt = select(self.model.id).where(self.model.id == id)
        async with self._guard("exists"):
            result = await session.execute(stmt)
        return result.scalar_one_or_none() is not None
