from datetime import datetime, timezone
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from fluxori.api.deps import get_inventory_service, get_stock_alert_service
from fluxori.application.services import InventoryService, StockAlertService
from fluxori.core.exceptions import InvalidInputError


@pytest.fixture
def mock_inventory_service():
    return AsyncMock(spec=InventoryService)


@pytest.fixture
def mock_alert_service():
    return AsyncMock(spec=StockAlertService)


def test_adjust_stock(client, mock_inventory_service):
    item_id, warehouse_id = uuid4(), uuid4()
    mock_inventory_service.adjust_stock.return_value = {
        "id": uuid4(),
        "inventory_item_id": item_id,
        "warehouse_id": warehouse_id,
        "type": "adjustment",
        "quantity": -3,
        "previous_quantity": 10,
        "new_quantity": 7,
        "reference_type": "adjustment",
        "reference_id": None,
        "user_id": None,
        "notes": "Damaged in transit",
        "created_at": datetime.now(timezone.utc),
    }
    client.app.dependency_overrides[get_inventory_service] = lambda: mock_inventory_service

    response = client.post(
        f"/api/v1/inventory/{item_id}/adjust",
        json={"warehouse_id": str(warehouse_id), "quantity": -3, "reason": "Damaged in transit"},
    )

    assert response.status_code == 200
    assert response.json()["new_quantity"] == 7
    mock_inventory_service.adjust_stock.assert_awaited_once_with(
        item_id, warehouse_id, -3, "Damaged in transit", user_id=None
    )


def test_adjust_stock_below_zero_is_rejected(client, mock_inventory_service):
    mock_inventory_service.adjust_stock.side_effect = InvalidInputError(
        "Insufficient stock: 2 on hand, adjustment of -3", field="quantity"
    )
    client.app.dependency_overrides[get_inventory_service] = lambda: mock_inventory_service

    response = client.post(
        f"/api/v1/inventory/{uuid4()}/adjust",
        json={"warehouse_id": str(uuid4()), "quantity": -3, "reason": "Count correction"},
    )

    assert response.status_code == 400
    assert response.json()["detail"]["details"] == {"field": "quantity"}


def test_adjust_stock_requires_reason(client, mock_inventory_service):
    client.app.dependency_overrides[get_inventory_service] = lambda: mock_inventory_service

    response = client.post(
        f"/api/v1/inventory/{uuid4()}/adjust",
        json={"warehouse_id": str(uuid4()), "quantity": 5},
    )

    assert response.status_code == 422
    mock_inventory_service.adjust_stock.assert_not_called()


def test_transfer_to_same_warehouse_is_rejected(client, mock_inventory_service):
    warehouse_id = uuid4()
    client.app.dependency_overrides[get_inventory_service] = lambda: mock_inventory_service

    response = client.post(
        f"/api/v1/inventory/{uuid4()}/transfer",
        json={"from_warehouse_id": str(warehouse_id), "to_warehouse_id": str(warehouse_id), "quantity": 1},
    )

    assert response.status_code == 422
    mock_inventory_service.transfer_stock.assert_not_called()


def test_delete_item(client, mock_inventory_service):
    item_id = uuid4()
    client.app.dependency_overrides[get_inventory_service] = lambda: mock_inventory_service

    response = client.delete(f"/api/v1/inventory/{item_id}")

    assert response.status_code == 204
    mock_inventory_service.delete_item.assert_awaited_once_with(item_id)


def test_check_stock_levels(client, mock_alert_service):
    organization_id = uuid4()
    mock_alert_service.check_all_levels.return_value = {"checked": 4, "alerts_created": 0, "alerts": []}
    client.app.dependency_overrides[get_stock_alert_service] = lambda: mock_alert_service

    response = client.post(f"/api/v1/organizations/{organization_id}/stock-alerts/check")

    assert response.status_code == 200
    assert response.json() == {"checked": 4, "alerts_created": 0, "alerts": []}
    mock_alert_service.check_all_levels.assert_awaited_once_with(organization_id)
