"""
Inventory CRUD operations.

Item, level and transaction persistence. Quantity arithmetic lives in
InventoryService; these classes only read and write rows.

Dependencies: sqlalchemy, fluxori.boundary.db.models
System role: Stock persistence operations
"""

from datetime import datetime
from typing import Sequence
from uuid import UUID

from sqlalchemy import and_, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from fluxori.boundary.db.CRUD.base_crud import BaseCRUD
from fluxori.boundary.db.models.inventory_model import (
    InventoryItemModel,
    InventoryItemStatus,
    InventoryLevelModel,
    InventoryTransactionModel,
    ReferenceType,
    TransactionType,
)


class InventoryItemCRUD(BaseCRUD[InventoryItemModel]):
    """CRUD operations for InventoryItemModel."""

    def __init__(self) -> None:
        """Initialize InventoryItemCRUD with InventoryItemModel."""
        super().__init__(InventoryItemModel)

    async def get_by_sku(
        self,
        session: AsyncSession,
        organization_id: UUID,
        sku: str,
    ) -> InventoryItemModel | None:
        """Retrieve an item by its organization scoped SKU."""
        return await self.find_one(session, organization_id=organization_id, sku=sku)

    async def get_by_product(
        self, session: AsyncSession, product_id: UUID
    ) -> Sequence[InventoryItemModel]:
        return await self.find(session, product_id=product_id)

    async def get_by_product_variant(
        self, session: AsyncSession, product_variant_id: UUID
    ) -> InventoryItemModel | None:
        return await self.find_one(session, product_variant_id=product_variant_id)

    async def find_low_stock(
        self, session: AsyncSession, organization_id: UUID
    ) -> Sequence[InventoryItemModel]:
        return await self.find(
            session, organization_id=organization_id, status=InventoryItemStatus.LOW_STOCK
        )

    async def find_out_of_stock(
        self, session: AsyncSession, organization_id: UUID
    ) -> Sequence[InventoryItemModel]:
        return await self.find(
            session, organization_id=organization_id, status=InventoryItemStatus.OUT_OF_STOCK
        )

    async def update_status(
        self,
        session: AsyncSession,
        id: UUID,
        status: InventoryItemStatus,
    ) -> InventoryItemModel:
        return await self.update_by_id_or_fail(session, id, status=status)

    async def search(
        self,
        session: AsyncSession,
        organization_id: UUID,
        query: str | None = None,
        statuses: list[InventoryItemStatus] | None = None,
        limit: int | None = 100,
        offset: int = 0,
    ) -> Sequence[InventoryItemModel]:
        """
        Search items by SKU, name or barcode.

        Args:
            session: Async database session
            organization_id: Organization UUID
            query: Case-insensitive substring; None matches everything
            statuses: Optional status whitelist
            limit: Maximum number of items
            offset: Number of items to skip

        Returns:
            Matching items ordered by SKU
        """
        stmt = select(InventoryItemModel).where(InventoryItemModel.organization_id == organization_id)
        if query:
            pattern = f"%{query.strip()}%"
            stmt = stmt.where(
                or_(
                    InventoryItemModel.sku.ilike(pattern),
                    InventoryItemModel.name.ilike(pattern),
                    InventoryItemModel.barcode.ilike(pattern),
                )
            )
        if statuses:
            stmt = stmt.where(InventoryItemModel.status.in_(statuses))
        stmt = stmt.order_by(InventoryItemModel.sku).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        async with self._guard("search"):
            result = await session.execute(stmt)
        return result.scalars().all()


class InventoryLevelCRUD(BaseCRUD[InventoryLevelModel]):
    """CRUD operations for InventoryLevelModel."""

    def __init__(self) -> None:
        """Initialize InventoryLevelCRUD with InventoryLevelModel."""
        super().__init__(InventoryLevelModel)

    async def get_by_item_and_warehouse(
        self,
        session: AsyncSession,
        inventory_item_id: UUID,
        warehouse_id: UUID,
    ) -> InventoryLevelModel | None:
        return await self.find_one(
            session, inventory_item_id=inventory_item_id, warehouse_id=warehouse_id
        )

    async def get_levels_for_item(
        self, session: AsyncSession, inventory_item_id: UUID
    ) -> Sequence[InventoryLevelModel]:
        return await self.find(session, inventory_item_id=inventory_item_id)

    async def get_levels_for_warehouse(
        self, session: AsyncSession, warehouse_id: UUID
    ) -> Sequence[InventoryLevelModel]:
        return await self.find(session, warehouse_id=warehouse_id)

    async def get_levels_for_organization(
        self,
        session: AsyncSession,
        organization_id: UUID,
        warehouse_id: UUID | None = None,
    ) -> Sequence[tuple[InventoryLevelModel, InventoryItemModel]]:
        """
        Levels joined with their items for one organization.

        Returns:
            (level, item) pairs
        """
        stmt = (
            select(InventoryLevelModel, InventoryItemModel)
            .join(InventoryItemModel, InventoryItemModel.id == InventoryLevelModel.inventory_item_id)
            .where(InventoryItemModel.organization_id == organization_id)
        )
        if warehouse_id is not None:
            stmt = stmt.where(InventoryLevelModel.warehouse_id == warehouse_id)
        async with self._guard("get_levels_for_organization"):
            result = await session.execute(stmt)
        return [(level, item) for level, item in result.all()]

    async def find_low_stock_levels(
        self,
        session: AsyncSession,
        organization_id: UUID,
    ) -> Sequence[tuple[InventoryLevelModel, InventoryItemModel]]:
        """
        Levels at or below their reorder point.

        The level's own reorder_point wins over the item's when set.
        """
        reorder_point = func.coalesce(InventoryLevelModel.reorder_point, InventoryItemModel.reorder_point)
        stmt = (
            select(InventoryLevelModel, InventoryItemModel)
            .join(InventoryItemModel, InventoryItemModel.id == InventoryLevelModel.inventory_item_id)
            .where(
                InventoryItemModel.organization_id == organization_id,
                or_(
                    InventoryLevelModel.available <= 0,
                    and_(reorder_point > 0, InventoryLevelModel.available <= reorder_point),
                ),
            )
        )
        async with self._guard("find_low_stock_levels"):
            result = await session.execute(stmt)
        return [(level, item) for level, item in result.all()]


class InventoryTransactionCRUD(BaseCRUD[InventoryTransactionModel]):
    """CRUD operations for InventoryTransactionModel (append-only ledger)."""

    def __init__(self) -> None:
        """Initialize InventoryTransactionCRUD with InventoryTransactionModel."""
        super().__init__(InventoryTransactionModel)

    async def get_by_item(
        self,
        session: AsyncSession,
        inventory_item_id: UUID,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[InventoryTransactionModel]:
        """Newest first."""
        return await self.find(
            session,
            limit=limit,
            offset=offset,
            order_by="-created_at",
            inventory_item_id=inventory_item_id,
        )

    async def get_by_warehouse(
        self, session: AsyncSession, warehouse_id: UUID
    ) -> Sequence[InventoryTransactionModel]:
        return await self.find(session, order_by="-created_at", warehouse_id=warehouse_id)

    async def get_by_type(
        self, session: AsyncSession, inventory_item_id: UUID, type: TransactionType
    ) -> Sequence[InventoryTransactionModel]:
        return await self.find(
            session, order_by="-created_at", inventory_item_id=inventory_item_id, type=type
        )

    async def get_by_reference(
        self,
        session: AsyncSession,
        reference_type: ReferenceType,
        reference_id: str,
    ) -> Sequence[InventoryTransactionModel]:
        return await self.find(session, reference_type=reference_type, reference_id=reference_id)

    async def get_by_date_range(
        self,
        session: AsyncSession,
        inventory_item_id: UUID,
        start: datetime,
        end: datetime,
    ) -> Sequence[InventoryTransactionModel]:
        """Transactions created within [start, end]."""
        stmt = (
            select(InventoryTransactionModel)
            .where(
                InventoryTransactionModel.inventory_item_id == inventory_item_id,
                InventoryTransactionModel.created_at >= start,
                InventoryTransactionModel.created_at <= end,
            )
            .order_by(InventoryTransactionModel.created_at)
        )
        async with self._guard("get_by_date_range"):
            result = await session.execute(stmt)
        return result.scalars().all()


inventory_item_crud = InventoryItemCRUD()
inventory_level_crud = InventoryLevelCRUD()
inventory_transaction_crud = InventoryTransactionCRUD()
