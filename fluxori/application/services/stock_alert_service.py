"""
Stock alert service orchestrator.

Raises reorder-point and out-of-stock alerts from inventory levels and
manages their lifecycle. At most one active alert of each type exists per
item/warehouse pair.

Dependencies: fluxori.boundary.db.CRUD
System role: Stock alert use case orchestration
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from fluxori.boundary.db.CRUD.inventory_crud import inventory_level_crud
from fluxori.boundary.db.CRUD.stock_alert_crud import stock_alert_crud
from fluxori.boundary.db.models.inventory_model import InventoryItemModel, InventoryLevelModel
from fluxori.boundary.db.models.stock_alert_model import (
    AlertPriority,
    AlertStatus,
    AlertType,
    StockAlertModel,
)
from fluxori.core.exceptions import FluxoriError

logger = logging.getLogger(__name__)


def alert_to_dict(alert: StockAlertModel) -> dict[str, Any]:
    return {
        "id": alert.id,
        "organization_id": alert.organization_id,
        "inventory_item_id": alert.inventory_item_id,
        "warehouse_id": alert.warehouse_id,
        "type": alert.type,
        "status": alert.status,
        "priority": alert.priority,
        "message": alert.message,
        "data": alert.data or {},
        "resolved_by": alert.resolved_by,
        "resolved_at": alert.resolved_at,
        "created_at": alert.created_at,
    }


def effective_reorder_point(level: InventoryLevelModel, item: InventoryItemModel) -> int:
    """Level override first, then the item's reorder point."""
    if level.reorder_point is not None:
        return level.reorder_point
    return item.reorder_point or 0


class StockAlertService:
    """Stock alert service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def create_alert(
        self,
        organization_id: UUID,
        inventory_item_id: UUID,
        type: AlertType,
        message: str,
        priority: AlertPriority = AlertPriority.MEDIUM,
        warehouse_id: UUID | None = None,
        data: dict | None = None,
    ) -> dict[str, Any]:
        alert = await stock_alert_crud.create(
            self.db,
            organization_id=organization_id,
            inventory_item_id=inventory_item_id,
            warehouse_id=warehouse_id,
            type=type,
            priority=priority,
            message=message,
            data=data or {},
        )
        logger.info(
            "Stock alert raised",
            extra={"alert_id": str(alert.id), "type": type.value, "item_id": str(inventory_item_id)},
        )
        return alert_to_dict(alert)

    async def list_active(
        self, organization_id: UUID, limit: int | None = None, offset: int = 0
    ) -> list[dict[str, Any]]:
        alerts = await stock_alert_crud.get_active(self.db, organization_id, limit=limit, offset=offset)
        return [alert_to_dict(a) for a in alerts]

    async def list_for_item(
        self, inventory_item_id: UUID, status: AlertStatus | None = None
    ) -> list[dict[str, Any]]:
        alerts = await stock_alert_crud.get_by_item(self.db, inventory_item_id, status=status)
        return [alert_to_dict(a) for a in alerts]

    async def list_for_warehouse(
        self, warehouse_id: UUID, status: AlertStatus | None = None
    ) -> list[dict[str, Any]]:
        alerts = await stock_alert_crud.get_by_warehouse(self.db, warehouse_id, status=status)
        return [alert_to_dict(a) for a in alerts]

    async def resolve_alert(self, alert_id: UUID, user_id: UUID | None = None) -> dict[str, Any]:
        alert = await stock_alert_crud.resolve(self.db, alert_id, user_id)
        logger.info("Stock alert resolved", extra={"alert_id": str(alert_id)})
        return alert_to_dict(alert)

    async def ignore_alert(self, alert_id: UUID, user_id: UUID | None = None) -> dict[str, Any]:
        alert = await stock_alert_crud.ignore(self.db, alert_id, user_id)
        logger.info("Stock alert ignored", extra={"alert_id": str(alert_id)})
        return alert_to_dict(alert)

    async def _raise_once(
        self,
        item: InventoryItemModel,
        level: InventoryLevelModel,
        type: AlertType,
        priority: AlertPriority,
        message: str,
        data: dict,
    ) -> dict[str, Any] | None:
        existing = await stock_alert_crud.get_active_for(self.db, item.id, level.warehouse_id, type)
        if existing is not None:
            return None
        return await self.create_alert(
            organization_id=item.organization_id,
            inventory_item_id=item.id,
            warehouse_id=level.warehouse_id,
            type=type,
            priority=priority,
            message=message,
            data=data,
        )

    async def check_level(
        self,
        item: InventoryItemModel,
        level: InventoryLevelModel,
    ) -> list[dict[str, Any]]:
        """
        Raise alerts for one level.

        A medium reorder_point alert fires when the reorder point is set
        and available stock is at or below it; a high out_of_stock alert
        fires when nothing is available. Failures are logged and do not
        propagate to the stock movement that triggered the check.

        Returns:
            list[dict]: Alerts created by this check
        """
        created = []
        reorder_point = effective_reorder_point(level, item)
        data = {
            "sku": item.sku,
            "available": level.available,
            "on_hand": level.on_hand,
            "reorder_point": reorder_point,
        }
        try:
            if reorder_point > 0 and level.available <= reorder_point:
                alert = await self._raise_once(
                    item,
                    level,
                    AlertType.REORDER_POINT,
                    AlertPriority.MEDIUM,
                    f"{item.name} ({item.sku}) is at or below its reorder point "
                    f"({level.available} available, reorder point {reorder_point})",
                    data,
                )
                if alert:
                    created.append(alert)

            if level.available <= 0:
                alert = await self._raise_once(
                    item,
                    level,
                    AlertType.OUT_OF_STOCK,
                    AlertPriority.HIGH,
                    f"{item.name} ({item.sku}) is out of stock",
                    data,
                )
                if alert:
                    created.append(alert)
        except FluxoriError as e:
            logger.error(
                "Failed to check stock level",
                extra={"item_id": str(item.id), "warehouse_id": str(level.warehouse_id), "error": str(e)},
            )
        return created

    async def check_all_levels(self, organization_id: UUID) -> dict[str, Any]:
        """
        Scan every low or empty level of an organization.

        Returns:
            dict: {"checked": levels scanned, "alerts_created": new alerts}
        """
        pairs = await inventory_level_crud.find_low_stock_levels(self.db, organization_id)
        created = []
        for level, item in pairs:
            created.extend(await self.check_level(item, level))
        logger.info(
            "Stock levels checked",
            extra={"organization_id": str(organization_id), "checked": len(pairs), "created": len(created)},
        )
        return {"checked": len(pairs), "alerts_created": len(created), "alerts": created}
