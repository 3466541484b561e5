"""
Inventory service orchestrator.

Inventory items, per-warehouse levels and the stock movement ledger.
Every movement writes an InventoryTransaction, refreshes the item's
derived status and runs the low-stock check for the touched warehouse.

Level arithmetic:
    available = on_hand - reserved

Dependencies: fluxori.boundary.db.CRUD, fluxori.application.services.stock_alert_service
System role: Inventory use case orchestration
"""

import logging
from collections import defaultdict
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from fluxori.application.services.stock_alert_service import StockAlertService
from fluxori.boundary.db.CRUD.inventory_crud import (
    inventory_item_crud,
    inventory_level_crud,
    inventory_transaction_crud,
)
from fluxori.boundary.db.CRUD.organization_crud import organization_crud
from fluxori.boundary.db.CRUD.warehouse_crud import warehouse_crud
from fluxori.boundary.db.models.inventory_model import (
    InventoryItemModel,
    InventoryItemStatus,
    InventoryLevelModel,
    InventoryTransactionModel,
    ReferenceType,
    TrackingMethod,
    TransactionType,
)
from fluxori.boundary.db.models.warehouse_model import WarehouseModel
from fluxori.core.exceptions import ConflictError, InvalidInputError, NotFoundError

logger = logging.getLogger(__name__)


def item_to_dict(item: InventoryItemModel) -> dict[str, Any]:
    return {
        "id": item.id,
        "organization_id": item.organization_id,
        "product_id": item.product_id,
        "product_variant_id": item.product_variant_id,
        "sku": item.sku,
        "name": item.name,
        "barcode": item.barcode,
        "status": item.status,
        "default_warehouse_id": item.default_warehouse_id,
        "reorder_point": item.reorder_point,
        "reorder_quantity": item.reorder_quantity,
        "lead_time_days": item.lead_time_days,
        "cost": item.cost,
        "cost_currency": item.cost_currency,
        "tracking_method": item.tracking_method,
        "created_at": item.created_at,
        "updated_at": item.updated_at,
    }


def level_to_dict(level: InventoryLevelModel) -> dict[str, Any]:
    return {
        "id": level.id,
        "inventory_item_id": level.inventory_item_id,
        "warehouse_id": level.warehouse_id,
        "on_hand": level.on_hand,
        "available": level.available,
        "reserved": level.reserved,
        "incoming": level.incoming,
        "outgoing": level.outgoing,
        "reorder_point": level.reorder_point,
        "last_counted_at": level.last_counted_at,
        "updated_at": level.updated_at,
    }


def transaction_to_dict(transaction: InventoryTransactionModel) -> dict[str, Any]:
    return {
        "id": transaction.id,
        "inventory_item_id": transaction.inventory_item_id,
        "warehouse_id": transaction.warehouse_id,
        "type": transaction.type,
        "quantity": transaction.quantity,
        "previous_quantity": transaction.previous_quantity,
        "new_quantity": transaction.new_quantity,
        "reference_type": transaction.reference_type,
        "reference_id": transaction.reference_id,
        "user_id": transaction.user_id,
        "notes": transaction.notes,
        "created_at": transaction.created_at,
    }


def derive_item_status(
    current: InventoryItemStatus,
    total_on_hand: int,
    total_available: int,
    reorder_point: int,
) -> InventoryItemStatus:
    """
    Stock status from aggregated levels.

    Discontinued items keep their status.
    """
    if current == InventoryItemStatus.DISCONTINUED:
        return current
    if total_on_hand <= 0:
        return InventoryItemStatus.OUT_OF_STOCK
    if total_available <= reorder_point:
        return InventoryItemStatus.LOW_STOCK
    return InventoryItemStatus.IN_STOCK


class InventoryService:
    """Inventory service orchestrator."""

    def __init__(self, db: AsyncSession, alerts: StockAlertService | None = None) -> None:
        """
        Initialize inventory service with async database session.

        Args:
            db: Async SQLAlchemy session
            alerts: Stock alert service (built from db when omitted)
        """
        self.db = db
        self.alerts = alerts or StockAlertService(db)

    # Items

    async def create_item(
        self,
        organization_id: UUID,
        sku: str,
        name: str,
        product_id: UUID | None = None,
        product_variant_id: UUID | None = None,
        barcode: str | None = None,
        default_warehouse_id: UUID | None = None,
        reorder_point: int = 0,
        reorder_quantity: int = 0,
        lead_time_days: int | None = None,
        cost: float = 0.0,
        cost_currency: str = "USD",
        tracking_method: TrackingMethod = TrackingMethod.FIFO,
    ) -> dict[str, Any]:
        """
        Create an inventory item and an empty level in its default warehouse.

        The warehouse falls back to the organization's default; when the
        organization has none the item is created without a level.

        Raises:
            NotFoundError: Unknown organization or warehouse
            ConflictError: SKU already used in the organization
        """
        if not sku or not name:
            raise InvalidInputError("Inventory item SKU and name are required", field="sku" if not sku else "name")

        await organization_crud.get_by_id_or_fail(self.db, organization_id)
        if await inventory_item_crud.get_by_sku(self.db, organization_id, sku):
            raise ConflictError(f"Inventory item with SKU {sku} already exists", field="sku")

        if default_warehouse_id is not None:
            warehouse = await self._get_warehouse(organization_id, default_warehouse_id)
        else:
            warehouse = await warehouse_crud.get_default(self.db, organization_id)

        item = await inventory_item_crud.create(
            self.db,
            organization_id=organization_id,
            sku=sku,
            name=name,
            product_id=product_id,
            product_variant_id=product_variant_id,
            barcode=barcode,
            default_warehouse_id=warehouse.id if warehouse else None,
            reorder_point=reorder_point,
            reorder_quantity=reorder_quantity,
            lead_time_days=lead_time_days,
            cost=cost,
            cost_currency=cost_currency,
            tracking_method=tracking_method,
            status=InventoryItemStatus.OUT_OF_STOCK,
        )
        if warehouse is not None:
            await self._create_level(item.id, warehouse.id)

        logger.info(
            "Inventory item created",
            extra={"item_id": str(item.id), "organization_id": str(organization_id), "sku": sku},
        )
        return item_to_dict(item)

    async def get_item(self, item_id: UUID) -> dict[str, Any]:
        return item_to_dict(await inventory_item_crud.get_by_id_or_fail(self.db, item_id))

    async def get_item_by_sku(self, organization_id: UUID, sku: str) -> dict[str, Any]:
        item = await inventory_item_crud.get_by_sku(self.db, organization_id, sku)
        if item is None:
            raise NotFoundError(f"Inventory item {sku} does not exist", resource="InventoryItem")
        return item_to_dict(item)

    async def update_item(self, item_id: UUID, **fields) -> dict[str, Any]:
        item = await inventory_item_crud.get_by_id_or_fail(self.db, item_id)
        fields = {k: v for k, v in fields.items() if v is not None}

        if "sku" in fields and fields["sku"] != item.sku:
            if await inventory_item_crud.get_by_sku(self.db, item.organization_id, fields["sku"]):
                raise ConflictError(f"Inventory item with SKU {fields['sku']} already exists", field="sku")
        if "default_warehouse_id" in fields:
            await self._get_warehouse(item.organization_id, fields["default_warehouse_id"])

        updated = await inventory_item_crud.update_by_id_or_fail(self.db, item_id, **fields)
        if "reorder_point" in fields:
            await self._refresh_item_status(updated)
        return item_to_dict(updated)

    async def delete_item(self, item_id: UUID) -> None:
        if not await inventory_item_crud.delete_by_id(self.db, item_id):
            raise NotFoundError(
                f"Inventory item {item_id} does not exist", resource="InventoryItem", resource_id=item_id
            )
        logger.info("Inventory item deleted", extra={"item_id": str(item_id)})

    async def search_items(
        self,
        organization_id: UUID,
        query: str | None = None,
        statuses: list[InventoryItemStatus] | None = None,
        limit: int | None = 100,
        offset: int = 0,
    ) -> list[dict[str, Any]]:
        items = await inventory_item_crud.search(
            self.db, organization_id, query=query, statuses=statuses, limit=limit, offset=offset
        )
        return [item_to_dict(i) for i in items]

    # Levels

    async def _get_warehouse(self, organization_id: UUID, warehouse_id: UUID) -> WarehouseModel:
        warehouse = await warehouse_crud.find_one(self.db, id=warehouse_id, organization_id=organization_id)
        if warehouse is None:
            raise NotFoundError(
                f"Warehouse {warehouse_id} not found in organization {organization_id}",
                resource="Warehouse",
                resource_id=warehouse_id,
            )
        return warehouse

    async def _create_level(self, item_id: UUID, warehouse_id: UUID) -> InventoryLevelModel:
        return await inventory_level_crud.create(
            self.db,
            inventory_item_id=item_id,
            warehouse_id=warehouse_id,
            on_hand=0,
            available=0,
            reserved=0,
            incoming=0,
            outgoing=0,
        )

    async def _level_or_fail(self, item_id: UUID, warehouse_id: UUID) -> InventoryLevelModel:
        level = await inventory_level_crud.get_by_item_and_warehouse(self.db, item_id, warehouse_id)
        if level is None:
            raise NotFoundError(
                f"Inventory level not found for item: {item_id} and warehouse: {warehouse_id}",
                resource="InventoryLevel",
            )
        return level

    async def get_or_create_level(self, item_id: UUID, warehouse_id: UUID) -> dict[str, Any]:
        item = await inventory_item_crud.get_by_id_or_fail(self.db, item_id)
        level = await self._get_or_create_level(item, warehouse_id)
        return level_to_dict(level)

    async def _get_or_create_level(self, item: InventoryItemModel, warehouse_id: UUID) -> InventoryLevelModel:
        level = await inventory_level_crud.get_by_item_and_warehouse(self.db, item.id, warehouse_id)
        if level is not None:
            return level
        await self._get_warehouse(item.organization_id, warehouse_id)
        return await self._create_level(item.id, warehouse_id)

    async def get_levels(self, item_id: UUID) -> list[dict[str, Any]]:
        await inventory_item_crud.get_by_id_or_fail(self.db, item_id)
        levels = await inventory_level_crud.get_levels_for_item(self.db, item_id)
        return [level_to_dict(level) for level in levels]

    async def _refresh_item_status(self, item: InventoryItemModel) -> InventoryItemStatus:
        levels = await inventory_level_crud.get_levels_for_item(self.db, item.id)
        status = derive_item_status(
            item.status,
            total_on_hand=sum(level.on_hand for level in levels),
            total_available=sum(level.available for level in levels),
            reorder_point=item.reorder_point or 0,
        )
        if status != item.status:
            await inventory_item_crud.update_status(self.db, item.id, status)
            logger.info(
                "Inventory item status changed",
                extra={"item_id": str(item.id), "status": status.value},
            )
        return status

    async def _record(
        self,
        item_id: UUID,
        warehouse_id: UUID,
        type: TransactionType,
        quantity: int,
        previous_quantity: int,
        new_quantity: int,
        user_id: UUID | None,
        notes: str | None,
        reference_type: ReferenceType | None = None,
        reference_id: str | None = None,
    ) -> InventoryTransactionModel:
        return await inventory_transaction_crud.create(
            self.db,
            inventory_item_id=item_id,
            warehouse_id=warehouse_id,
            type=type,
            quantity=quantity,
            previous_quantity=previous_quantity,
            new_quantity=new_quantity,
            user_id=user_id,
            notes=notes,
            reference_type=reference_type,
            reference_id=reference_id,
        )

    # Stock movements

    async def adjust_stock(
        self,
        item_id: UUID,
        warehouse_id: UUID,
        quantity: int,
        reason: str,
        user_id: UUID | None = None,
    ) -> dict[str, Any]:
        """
        Add (positive) or remove (negative) stock at one warehouse.

        Args:
            item_id: Inventory item
            warehouse_id: Warehouse whose level changes (level created if missing)
            quantity: Signed quantity delta
            reason: Stored as the transaction notes
            user_id: Acting user

        Returns:
            dict: The adjustment transaction

        Raises:
            InvalidInputError: Zero quantity, or on_hand would go negative in
                a warehouse that does not allow negative inventory
            NotFoundError: Unknown item or warehouse
        """
        if quantity == 0:
            raise InvalidInputError("Quantity must not be zero", field="quantity")

        item = await inventory_item_crud.get_by_id_or_fail(self.db, item_id)
        warehouse = await self._get_warehouse(item.organization_id, warehouse_id)
        level = await self._get_or_create_level(item, warehouse_id)

        previous = level.on_hand
        new_on_hand = previous + quantity
        if new_on_hand < 0 and not warehouse.allows_negative_inventory:
            raise InvalidInputError(
                f"Adjustment would leave negative stock. On hand: {previous}, Adjustment: {quantity}",
                field="quantity",
            )

        transaction = await self._record(
            item_id, warehouse_id, TransactionType.ADJUSTMENT, quantity, previous, new_on_hand, user_id, reason
        )
        level = await inventory_level_crud.update_by_id_or_fail(
            self.db,
            level.id,
            on_hand=new_on_hand,
            available=new_on_hand - (level.reserved or 0),
        )

        await self._refresh_item_status(item)
        await self.alerts.check_level(item, level)

        logger.info(
            "Stock adjusted",
            extra={
                "item_id": str(item_id),
                "warehouse_id": str(warehouse_id),
                "quantity": quantity,
                "on_hand": new_on_hand,
            },
        )
        return transaction_to_dict(transaction)

    async def transfer_stock(
        self,
        item_id: UUID,
        from_warehouse_id: UUID,
        to_warehouse_id: UUID,
        quantity: int,
        user_id: UUID | None = None,
        notes: str | None = None,
    ) -> list[dict[str, Any]]:
        """
        Move available stock between two warehouses of the same organization.

        Returns:
            list[dict]: [outgoing transaction, incoming transaction]

        Raises:
            InvalidInputError: Non-positive quantity, same warehouse, or not
                enough available stock at the source
            NotFoundError: Unknown item, warehouse or source level
        """
        if quantity <= 0:
            raise InvalidInputError("Quantity must be greater than zero", field="quantity")
        if from_warehouse_id == to_warehouse_id:
            raise InvalidInputError(
                "Source and destination warehouses must be different", field="to_warehouse_id"
            )

        item = await inventory_item_crud.get_by_id_or_fail(self.db, item_id)
        source = await self._level_or_fail(item_id, from_warehouse_id)
        if source.available < quantity:
            raise InvalidInputError(
                f"Not enough available stock in source warehouse. "
                f"Available: {source.available}, Requested: {quantity}",
                field="quantity",
            )
        destination = await self._get_or_create_level(item, to_warehouse_id)

        outgoing = await self._record(
            item_id,
            from_warehouse_id,
            TransactionType.TRANSFER,
            -quantity,
            source.on_hand,
            source.on_hand - quantity,
            user_id,
            notes or "Stock transfer to another warehouse",
            reference_type=ReferenceType.TRANSFER,
            reference_id=str(to_warehouse_id),
        )
        incoming = await self._record(
            item_id,
            to_warehouse_id,
            TransactionType.TRANSFER,
            quantity,
            destination.on_hand,
            destination.on_hand + quantity,
            user_id,
            notes or "Stock transfer from another warehouse",
            reference_type=ReferenceType.TRANSFER,
            reference_id=str(from_warehouse_id),
        )

        source = await inventory_level_crud.update_by_id_or_fail(
            self.db,
            source.id,
            on_hand=source.on_hand - quantity,
            available=source.available - quantity,
        )
        await inventory_level_crud.update_by_id_or_fail(
            self.db,
            destination.id,
            on_hand=destination.on_hand + quantity,
            available=destination.available + quantity,
        )

        await self._refresh_item_status(item)
        await self.alerts.check_level(item, source)

        logger.info(
            "Stock transferred",
            extra={
                "item_id": str(item_id),
                "from_warehouse_id": str(from_warehouse_id),
                "to_warehouse_id": str(to_warehouse_id),
                "quantity": quantity,
            },
        )
        return [transaction_to_dict(outgoing), transaction_to_dict(incoming)]

    async def reserve_stock(
        self,
        item_id: UUID,
        warehouse_id: UUID,
        quantity: int,
        reference_id: str | None = None,
        user_id: UUID | None = None,
        notes: str | None = None,
    ) -> dict[str, Any]:
        """
        Hold available stock, e.g. for a sales order.

        Raises:
            InvalidInputError: Non-positive quantity or not enough available stock
            NotFoundError: Unknown item or level
        """
        if quantity <= 0:
            raise InvalidInputError("Quantity must be greater than zero", field="quantity")

        item = await inventory_item_crud.get_by_id_or_fail(self.db, item_id)
        level = await self._level_or_fail(item_id, warehouse_id)
        if level.available < quantity:
            raise InvalidInputError(
                f"Not enough available stock. Available: {level.available}, Requested: {quantity}",
                field="quantity",
            )

        transaction = await self._record(
            item_id,
            warehouse_id,
            TransactionType.RESERVE,
            quantity,
            level.on_hand,
            level.on_hand,
            user_id,
            notes,
            reference_type=ReferenceType.SALES_ORDER if reference_id else None,
            reference_id=reference_id,
        )
        level = await inventory_level_crud.update_by_id_or_fail(
            self.db,
            level.id,
            reserved=(level.reserved or 0) + quantity,
            available=level.available - quantity,
        )

        await self._refresh_item_status(item)
        await self.alerts.check_level(item, level)
        return transaction_to_dict(transaction)

    async def release_reservation(
        self,
        item_id: UUID,
        warehouse_id: UUID,
        quantity: int,
        reference_id: str | None = None,
        user_id: UUID | None = None,
        notes: str | None = None,
    ) -> dict[str, Any]:
        """
        Return reserved stock to available.

        Raises:
            InvalidInputError: Non-positive quantity or more than is reserved
            NotFoundError: Unknown item or level
        """
        if quantity <= 0:
            raise InvalidInputError("Quantity must be greater than zero", field="quantity")

        item = await inventory_item_crud.get_by_id_or_fail(self.db, item_id)
        level = await self._level_or_fail(item_id, warehouse_id)
        reserved = level.reserved or 0
        if reserved < quantity:
            raise InvalidInputError(
                f"Not enough reserved stock. Reserved: {reserved}, Requested: {quantity}",
                field="quantity",
            )

        transaction = await self._record(
            item_id,
            warehouse_id,
            TransactionType.UNRESERVE,
            quantity,
            level.on_hand,
            level.on_hand,
            user_id,
            notes,
            reference_type=ReferenceType.SALES_ORDER if reference_id else None,
            reference_id=reference_id,
        )
        await inventory_level_crud.update_by_id_or_fail(
            self.db,
            level.id,
            reserved=reserved - quantity,
            available=level.available + quantity,
        )
        await self._refresh_item_status(item)
        return transaction_to_dict(transaction)

    # Reporting

    async def get_transactions(
        self, item_id: UUID, limit: int | None = 100, offset: int = 0
    ) -> list[dict[str, Any]]:
        await inventory_item_crud.get_by_id_or_fail(self.db, item_id)
        transactions = await inventory_transaction_crud.get_by_item(
            self.db, item_id, limit=limit, offset=offset
        )
        return [transaction_to_dict(t) for t in transactions]

    async def get_inventory_summary(
        self,
        organization_id: UUID,
        warehouse_id: UUID | None = None,
    ) -> dict[str, Any]:
        """
        Stock totals for an organization.

        Args:
            organization_id: Organization UUID
            warehouse_id: Restrict to one warehouse; the per-warehouse
                breakdown is only returned without it

        Returns:
            dict: total_items, total_value, low_stock_items,
            out_of_stock_items and by_warehouse
        """
        pairs = await inventory_level_crud.get_levels_for_organization(
            self.db, organization_id, warehouse_id=warehouse_id
        )

        items: dict[UUID, InventoryItemModel] = {}
        total_value = 0.0
        by_warehouse: dict[str, dict[str, float]] = defaultdict(lambda: {"items": 0, "value": 0.0})
        for level, item in pairs:
            items[item.id] = item
            value = (item.cost or 0.0) * level.on_hand
            total_value += value
            if level.on_hand > 0:
                bucket = by_warehouse[str(level.warehouse_id)]
                bucket["items"] += 1
                bucket["value"] += value

        if warehouse_id is None:
            for item in await inventory_item_crud.find(self.db, organization_id=organization_id):
                items.setdefault(item.id, item)

        statuses = [item.status for item in items.values()]
        return {
            "organization_id": organization_id,
            "warehouse_id": warehouse_id,
            "total_items": len(items),
            "total_value": round(total_value, 2),
            "low_stock_items": statuses.count(InventoryItemStatus.LOW_STOCK),
            "out_of_stock_items": statuses.count(InventoryItemStatus.OUT_OF_STOCK),
            "by_warehouse": dict(by_warehouse) if warehouse_id is None else None,
        }
