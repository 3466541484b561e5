"""
Integration tests for inventory stock movements.

Drives InventoryService and StockAlertService against in-memory SQLite:
level bookkeeping, derived item status, transaction ledger, alert
deduplication and the organization summary.

System role: Verification of inventory use cases end to end
"""

import pytest

from fluxori.application.services.inventory_service import InventoryService
from fluxori.application.services.stock_alert_service import StockAlertService
from fluxori.boundary.db.CRUD.warehouse_crud import warehouse_crud
from fluxori.boundary.db.models.inventory_model import InventoryItemStatus, TransactionType
from fluxori.boundary.db.models.stock_alert_model import AlertPriority, AlertStatus, AlertType
from fluxori.core.exceptions import ConflictError, InvalidInputError, NotFoundError


@pytest.fixture
def inventory_service(test_async_db) -> InventoryService:
    return InventoryService(test_async_db)


@pytest.fixture
async def item(inventory_service, organization, warehouse):
    return await inventory_service.create_item(
        organization_id=organization.id,
        sku="MUG-01",
        name="Enamel mug",
        reorder_point=5,
        cost=2.5,
    )


@pytest.fixture
async def second_warehouse(test_async_db, organization):
    return await warehouse_crud.create(test_async_db, organization_id=organization.id, name="Overflow", code="OVF")


class TestItemLifecycle:
    """Test suite for item creation and lookup."""

    @pytest.mark.asyncio
    async def test_create_item_should_seed_level_in_default_warehouse(
        self, inventory_service, item, warehouse
    ) -> None:
        # Act
        levels = await inventory_service.get_levels(item["id"])

        # Assert
        assert item["status"] == InventoryItemStatus.OUT_OF_STOCK
        assert item["default_warehouse_id"] == warehouse.id
        assert len(levels) == 1
        assert levels[0]["warehouse_id"] == warehouse.id
        assert levels[0]["on_hand"] == 0

    @pytest.mark.asyncio
    async def test_duplicate_sku_should_conflict(self, inventory_service, organization, item) -> None:
        with pytest.raises(ConflictError):
            await inventory_service.create_item(organization_id=organization.id, sku="MUG-01", name="Copy")

    @pytest.mark.asyncio
    async def test_get_item_by_unknown_sku_should_raise(self, inventory_service, organization) -> None:
        with pytest.raises(NotFoundError):
            await inventory_service.get_item_by_sku(organization.id, "NOPE")

    @pytest.mark.asyncio
    async def test_search_should_filter_by_text_and_status(self, inventory_service, organization, item) -> None:
        # Arrange
        await inventory_service.create_item(organization_id=organization.id, sku="BOWL-01", name="Bowl")

        # Act
        by_text = await inventory_service.search_items(organization.id, query="mug")
        by_status = await inventory_service.search_items(
            organization.id, statuses=[InventoryItemStatus.IN_STOCK]
        )

        # Assert
        assert [i["sku"] for i in by_text] == ["MUG-01"]
        assert by_status == []


class TestStockMovements:
    """Test suite for adjust, reserve, release and transfer."""

    @pytest.mark.asyncio
    async def test_adjust_stock_should_update_level_and_status(self, inventory_service, item, warehouse) -> None:
        # Act
        transaction = await inventory_service.adjust_stock(item["id"], warehouse.id, 10, "Initial count")

        # Assert
        level = (await inventory_service.get_levels(item["id"]))[0]
        refreshed = await inventory_service.get_item(item["id"])
        assert transaction["type"] == TransactionType.ADJUSTMENT
        assert transaction["previous_quantity"] == 0
        assert transaction["new_quantity"] == 10
        assert transaction["notes"] == "Initial count"
        assert (level["on_hand"], level["available"]) == (10, 10)
        assert refreshed["status"] == InventoryItemStatus.IN_STOCK

    @pytest.mark.asyncio
    async def test_adjust_below_zero_should_be_rejected(self, inventory_service, item, warehouse) -> None:
        # Arrange
        await inventory_service.adjust_stock(item["id"], warehouse.id, 3, "Receive")

        # Act / Assert
        with pytest.raises(InvalidInputError) as exc_info:
            await inventory_service.adjust_stock(item["id"], warehouse.id, -4, "Shrinkage")
        assert exc_info.value.details["field"] == "quantity"

    @pytest.mark.asyncio
    async def test_adjust_below_zero_allowed_when_warehouse_permits(
        self, test_async_db, inventory_service, organization, item
    ) -> None:
        # Arrange
        dropship = await warehouse_crud.create(
            test_async_db,
            organization_id=organization.id,
            name="Dropship",
            code="DS",
            settings={"allow_negative_inventory": True},
        )

        # Act
        transaction = await inventory_service.adjust_stock(item["id"], dropship.id, -2, "Oversold")

        # Assert
        assert transaction["new_quantity"] == -2

    @pytest.mark.asyncio
    async def test_zero_adjustment_should_be_rejected(self, inventory_service, item, warehouse) -> None:
        with pytest.raises(InvalidInputError):
            await inventory_service.adjust_stock(item["id"], warehouse.id, 0, "Nothing")

    @pytest.mark.asyncio
    async def test_reserve_and_release_should_move_available(self, inventory_service, item, warehouse) -> None:
        # Arrange
        await inventory_service.adjust_stock(item["id"], warehouse.id, 10, "Receive")

        # Act
        reserve = await inventory_service.reserve_stock(item["id"], warehouse.id, 6, reference_id="SO-1")
        after_reserve = (await inventory_service.get_levels(item["id"]))[0]
        await inventory_service.release_reservation(item["id"], warehouse.id, 2)
        after_release = (await inventory_service.get_levels(item["id"]))[0]

        # Assert
        assert reserve["type"] == TransactionType.RESERVE
        assert reserve["reference_id"] == "SO-1"
        assert (after_reserve["on_hand"], after_reserve["reserved"], after_reserve["available"]) == (10, 6, 4)
        assert (after_release["reserved"], after_release["available"]) == (4, 6)

    @pytest.mark.asyncio
    async def test_reserve_more_than_available_should_be_rejected(self, inventory_service, item, warehouse) -> None:
        # Arrange
        await inventory_service.adjust_stock(item["id"], warehouse.id, 2, "Receive")

        # Act / Assert
        with pytest.raises(InvalidInputError):
            await inventory_service.reserve_stock(item["id"], warehouse.id, 3)

    @pytest.mark.asyncio
    async def test_release_more_than_reserved_should_be_rejected(self, inventory_service, item, warehouse) -> None:
        with pytest.raises(InvalidInputError):
            await inventory_service.release_reservation(item["id"], warehouse.id, 1)

    @pytest.mark.asyncio
    async def test_transfer_should_record_both_sides(
        self, inventory_service, item, warehouse, second_warehouse
    ) -> None:
        # Arrange
        await inventory_service.adjust_stock(item["id"], warehouse.id, 10, "Receive")

        # Act
        outgoing, incoming = await inventory_service.transfer_stock(
            item["id"], warehouse.id, second_warehouse.id, 4
        )

        # Assert
        levels = {lvl["warehouse_id"]: lvl for lvl in await inventory_service.get_levels(item["id"])}
        assert outgoing["quantity"] == -4
        assert incoming["quantity"] == 4
        assert outgoing["reference_id"] == str(second_warehouse.id)
        assert levels[warehouse.id]["on_hand"] == 6
        assert levels[second_warehouse.id]["on_hand"] == 4
        assert len(await inventory_service.get_transactions(item["id"])) == 3

    @pytest.mark.asyncio
    async def test_transfer_without_source_level_should_raise(
        self, inventory_service, item, warehouse, second_warehouse
    ) -> None:
        with pytest.raises(NotFoundError):
            await inventory_service.transfer_stock(item["id"], second_warehouse.id, warehouse.id, 1)


class TestStockAlerts:
    """Test suite for alerts raised by stock movements."""

    @pytest.mark.asyncio
    async def test_falling_to_reorder_point_should_raise_one_alert(
        self, test_async_db, inventory_service, item, warehouse
    ) -> None:
        # Arrange
        await inventory_service.adjust_stock(item["id"], warehouse.id, 8, "Receive")

        # Act
        await inventory_service.adjust_stock(item["id"], warehouse.id, -4, "Sale")
        await inventory_service.adjust_stock(item["id"], warehouse.id, -1, "Sale")

        # Assert
        alerts = await StockAlertService(test_async_db).list_for_item(item["id"])
        assert len(alerts) == 1
        assert alerts[0]["type"] == AlertType.REORDER_POINT
        assert alerts[0]["priority"] == AlertPriority.MEDIUM
        assert (await inventory_service.get_item(item["id"]))["status"] == InventoryItemStatus.LOW_STOCK

    @pytest.mark.asyncio
    async def test_selling_out_should_raise_out_of_stock_alert(
        self, test_async_db, inventory_service, item, warehouse
    ) -> None:
        # Arrange
        await inventory_service.adjust_stock(item["id"], warehouse.id, 2, "Receive")

        # Act
        await inventory_service.adjust_stock(item["id"], warehouse.id, -2, "Sale")

        # Assert
        alerts = await StockAlertService(test_async_db).list_for_warehouse(warehouse.id)
        types = {a["type"] for a in alerts}
        assert types == {AlertType.REORDER_POINT, AlertType.OUT_OF_STOCK}
        assert (await inventory_service.get_item(item["id"]))["status"] == InventoryItemStatus.OUT_OF_STOCK

    @pytest.mark.asyncio
    async def test_resolved_alert_leaves_active_list(
        self, test_async_db, inventory_service, organization, item, warehouse, sample_id
    ) -> None:
        # Arrange
        alerts = StockAlertService(test_async_db)
        await inventory_service.adjust_stock(item["id"], warehouse.id, 3, "Receive")
        [active] = await alerts.list_active(organization.id)

        # Act
        resolved = await alerts.resolve_alert(active["id"], sample_id)

        # Assert
        assert resolved["status"] == AlertStatus.RESOLVED
        assert resolved["resolved_by"] == sample_id
        assert await alerts.list_active(organization.id) == []

    @pytest.mark.asyncio
    async def test_check_all_levels_should_not_duplicate(
        self, test_async_db, inventory_service, organization, item, warehouse
    ) -> None:
        # Arrange
        alerts = StockAlertService(test_async_db)

        # Act
        first = await alerts.check_all_levels(organization.id)
        second = await alerts.check_all_levels(organization.id)

        # Assert
        assert first["checked"] == 1
        # empty level is both below reorder point and out of stock
        assert first["alerts_created"] == 2
        assert second["alerts_created"] == 0


class TestInventorySummary:
    """Test suite for get_inventory_summary."""

    @pytest.mark.asyncio
    async def test_summary_should_total_value_per_warehouse(
        self, inventory_service, organization, item, warehouse, second_warehouse
    ) -> None:
        # Arrange
        await inventory_service.create_item(organization_id=organization.id, sku="BOWL-01", name="Bowl")
        await inventory_service.adjust_stock(item["id"], warehouse.id, 10, "Receive")
        await inventory_service.transfer_stock(item["id"], warehouse.id, second_warehouse.id, 4)

        # Act
        summary = await inventory_service.get_inventory_summary(organization.id)
        scoped = await inventory_service.get_inventory_summary(organization.id, warehouse_id=second_warehouse.id)

        # Assert
        assert summary["total_items"] == 2
        assert summary["total_value"] == 25.0
        assert summary["out_of_stock_items"] == 1
        assert summary["by_warehouse"][str(warehouse.id)] == {"items": 1, "value": 15.0}
        assert summary["by_warehouse"][str(second_warehouse.id)] == {"items": 1, "value": 10.0}
        assert scoped["total_value"] == 10.0
        assert scoped["by_warehouse"] is None
