"""
Warehouse CRUD operations.

Includes the default-warehouse switch. The clear-then-set sequence runs
inside the caller's transaction, so a concurrent switch in another
transaction can still interleave; callers needing a hard guarantee should
serialize on the organization row.

Dependencies: sqlalchemy, fluxori.boundary.db.models
System role: Warehouse persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from fluxori.boundary.db.CRUD.base_crud import BaseCRUD
from fluxori.boundary.db.models.warehouse_model import WarehouseModel, WarehouseStatus
from fluxori.core.exceptions import NotFoundError


class WarehouseCRUD(BaseCRUD[WarehouseModel]):
    """
    CRUD operations for WarehouseModel.

    Extends BaseCRUD with organization scoped lookups and default
    warehouse management.
    """

    def __init__(self) -> None:
        """Initialize WarehouseCRUD with WarehouseModel."""
        super().__init__(WarehouseModel)

    async def get_by_code(
        self,
        session: AsyncSession,
        organization_id: UUID,
        code: str,
    ) -> WarehouseModel | None:
        """Retrieve a warehouse by its organization scoped code."""
        return await self.find_one(session, organization_id=organization_id, code=code)

    async def get_by_organization(
        self,
        session: AsyncSession,
        organization_id: UUID,
        status: WarehouseStatus | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[WarehouseModel]:
        """
        List warehouses of an organization.

        Args:
            session: Async database session
            organization_id: Organization UUID
            status: Optional status filter
            limit: Maximum number of warehouses to return
            offset: Number of warehouses to skip

        Returns:
            Warehouses ordered by creation time
        """
        filters = {"organization_id": organization_id}
        if status is not None:
            filters["status"] = status
        return await self.find(session, limit=limit, offset=offset, **filters)

    async def get_default(
        self,
        session: AsyncSession,
        organization_id: UUID,
    ) -> WarehouseModel | None:
        """Retrieve the organization's default warehouse, if any."""
        return await self.find_one(session, organization_id=organization_id, is_default=True)

    async def set_as_default(
        self,
        session: AsyncSession,
        organization_id: UUID,
        warehouse_id: UUID,
    ) -> WarehouseModel:
        """
        Flag one warehouse as the organization default.

        Clears is_default on every other warehouse of the organization,
        then sets it on the target, leaving exactly one default.

        Args:
            session: Async database session
            organization_id: Organization UUID
            warehouse_id: Warehouse to promote

        Returns:
            The updated default warehouse

        Raises:
            NotFoundError: If the warehouse does not belong to the organization
        """
        warehouse = await self.find_one(session, id=warehouse_id, organization_id=organization_id)
        if warehouse is None:
            raise NotFoundError(
                f"Warehouse {warehouse_id} not found in organization {organization_id}",
                resource="Warehouse",
                resource_id=warehouse_id,
            )

        clear_stmt = (
            update(WarehouseModel)
            .where(
                WarehouseModel.organization_id == organization_id,
                WarehouseModel.id != warehouse_id,
                WarehouseModel.is_default.is_(True),
            )
            .values(is_default=False)
            .execution_options(synchronize_session="fetch")
        )
        async with self._guard("set_as_default"):
            await session.execute(clear_stmt)
        return await self.update_by_id_or_fail(session, warehouse_id, is_default=True)


warehouse_crud = WarehouseCRUD()
