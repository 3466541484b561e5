"""
Stock alert CRUD operations.

Dependencies: sqlalchemy, fluxori.boundary.db.models
System role: Alert persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from fluxori.boundary.db.base import utcnow
from fluxori.boundary.db.CRUD.base_crud import BaseCRUD
from fluxori.boundary.db.models.stock_alert_model import (
    AlertStatus,
    AlertType,
    StockAlertModel,
)


class StockAlertCRUD(BaseCRUD[StockAlertModel]):
    """CRUD operations for StockAlertModel."""

    def __init__(self) -> None:
        """Initialize StockAlertCRUD with StockAlertModel."""
        super().__init__(StockAlertModel)

    async def get_active(
        self,
        session: AsyncSession,
        organization_id: UUID,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[StockAlertModel]:
        """Active alerts of an organization, newest first."""
        return await self.find(
            session,
            limit=limit,
            offset=offset,
            order_by="-created_at",
            organization_id=organization_id,
            status=AlertStatus.ACTIVE,
        )

    async def get_by_item(
        self,
        session: AsyncSession,
        inventory_item_id: UUID,
        status: AlertStatus | None = None,
    ) -> Sequence[StockAlertModel]:
        filters = {"inventory_item_id": inventory_item_id}
        if status is not None:
            filters["status"] = status
        return await self.find(session, order_by="-created_at", **filters)

    async def get_by_type(
        self,
        session: AsyncSession,
        organization_id: UUID,
        type: AlertType,
        status: AlertStatus | None = None,
    ) -> Sequence[StockAlertModel]:
        filters = {"organization_id": organization_id, "type": type}
        if status is not None:
            filters["status"] = status
        return await self.find(session, order_by="-created_at", **filters)

    async def get_by_warehouse(
        self,
        session: AsyncSession,
        warehouse_id: UUID,
        status: AlertStatus | None = None,
    ) -> Sequence[StockAlertModel]:
        filters = {"warehouse_id": warehouse_id}
        if status is not None:
            filters["status"] = status
        return await self.find(session, order_by="-created_at", **filters)

    async def get_active_for(
        self,
        session: AsyncSession,
        inventory_item_id: UUID,
        warehouse_id: UUID | None,
        type: AlertType,
    ) -> StockAlertModel | None:
        """The open alert of a type for an item/warehouse pair, if any."""
        return await self.find_one(
            session,
            inventory_item_id=inventory_item_id,
            warehouse_id=warehouse_id,
            type=type,
            status=AlertStatus.ACTIVE,
        )

    async def resolve(self, session: AsyncSession, id: UUID, user_id: UUID | None = None) -> StockAlertModel:
        """Close an alert as resolved; raises NotFoundError for unknown ids."""
        return await self.update_by_id_or_fail(
            session, id, status=AlertStatus.RESOLVED, resolved_by=user_id, resolved_at=utcnow()
        )

    async def ignore(self, session: AsyncSession, id: UUID, user_id: UUID | None = None) -> StockAlertModel:
        """Close an alert as ignored; raises NotFoundError for unknown ids."""
        return await self.update_by_id_or_fail(
            session, id, status=AlertStatus.IGNORED, resolved_by=user_id, resolved_at=utcnow()
        )


stock_alert_crud = StockAlertCRUD()
