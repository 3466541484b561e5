"""
Inventory API endpoints.

Routes:
- POST /organizations/{org_id}/inventory - Create inventory item
- GET /organizations/{org_id}/inventory - Search inventory items
- GET /organizations/{org_id}/inventory/by-sku/{sku} - Get item by SKU
- GET /organizations/{org_id}/inventory-summary - Stock totals
- GET /inventory/{id} - Get item
- PUT /inventory/{id} - Update item
- DELETE /inventory/{id} - Delete item
- GET /inventory/{id}/levels - Per-warehouse levels
- GET /inventory/{id}/transactions - Movement history
- POST /inventory/{id}/adjust - Adjust on-hand stock
- POST /inventory/{id}/transfer - Move stock between warehouses
- POST /inventory/{id}/reserve - Reserve available stock
- POST /inventory/{id}/release - Release a reservation

Dependencies: fluxori.application.services, fluxori.models
System role: Inventory HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from fluxori.api.deps import get_inventory_service
from fluxori.api.error_handling import handle_service_errors
from fluxori.application.services import InventoryService
from fluxori.boundary.db.models.inventory_model import InventoryItemStatus
from fluxori.core.exceptions import InvalidInputError
from fluxori.models.common import ERROR_RESPONSES
from fluxori.models.inventory import (
    AdjustStockRequest,
    CreateInventoryItemRequest,
    InventoryItemResponse,
    InventoryLevelResponse,
    InventorySummaryResponse,
    InventoryTransactionResponse,
    ReservationRequest,
    TransferStockRequest,
    UpdateInventoryItemRequest,
)

from .inventory_responses import (
    map_item_to_response,
    map_items_to_response,
    map_levels_to_response,
    map_transaction_to_response,
    map_transactions_to_response,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["inventory"], responses=ERROR_RESPONSES)


@router.post(
    "/organizations/{organization_id}/inventory",
    response_model=InventoryItemResponse,
    status_code=201,
)
@handle_service_errors
async def create_inventory_item(
    organization_id: UUID,
    request: CreateInventoryItemRequest,
    inventory_service: InventoryService = Depends(get_inventory_service),
) -> InventoryItemResponse:
    """
    Create an inventory item with an empty level in its default warehouse.

    Raises:
        HTTPException(404): Organization or warehouse not found
        HTTPException(409): SKU already used in the organization
    """
    logger.info(
        "Creating inventory item",
        extra={"organization_id": str(organization_id), "sku": request.sku},
    )
    item = await inventory_service.create_item(organization_id, **request.model_dump())
    return map_item_to_response(item)


@router.get("/organizations/{organization_id}/inventory", response_model=list[InventoryItemResponse])
@handle_service_errors
async def search_inventory_items(
    organization_id: UUID,
    q: str | None = Query(None, description="Matches SKU, name or barcode"),
    status: list[InventoryItemStatus] | None = Query(None),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    inventory_service: InventoryService = Depends(get_inventory_service),
) -> list[InventoryItemResponse]:
    items = await inventory_service.search_items(
        organization_id, query=q, statuses=status, limit=limit, offset=offset
    )
    return map_items_to_response(items)


@router.get(
    "/organizations/{organization_id}/inventory/by-sku/{sku}",
    response_model=InventoryItemResponse,
)
@handle_service_errors
async def get_inventory_item_by_sku(
    organization_id: UUID,
    sku: str,
    inventory_service: InventoryService = Depends(get_inventory_service),
) -> InventoryItemResponse:
    return map_item_to_response(await inventory_service.get_item_by_sku(organization_id, sku))


@router.get(
    "/organizations/{organization_id}/inventory-summary",
    response_model=InventorySummaryResponse,
)
@handle_service_errors
async def get_inventory_summary(
    organization_id: UUID,
    warehouse_id: UUID | None = None,
    inventory_service: InventoryService = Depends(get_inventory_service),
) -> InventorySummaryResponse:
    summary = await inventory_service.get_inventory_summary(organization_id, warehouse_id=warehouse_id)
    return InventorySummaryResponse(**summary)


@router.get("/inventory/{item_id}", response_model=InventoryItemResponse)
@handle_service_errors
async def get_inventory_item(
    item_id: UUID,
    inventory_service: InventoryService = Depends(get_inventory_service),
) -> InventoryItemResponse:
    return map_item_to_response(await inventory_service.get_item(item_id))


@router.put("/inventory/{item_id}", response_model=InventoryItemResponse)
@handle_service_errors
async def update_inventory_item(
    item_id: UUID,
    request: UpdateInventoryItemRequest,
    inventory_service: InventoryService = Depends(get_inventory_service),
) -> InventoryItemResponse:
    fields = request.model_dump(exclude_none=True)
    if not fields:
        raise InvalidInputError("At least one field must be provided for update")
    return map_item_to_response(await inventory_service.update_item(item_id, **fields))


@router.delete("/inventory/{item_id}", status_code=204)
@handle_service_errors
async def delete_inventory_item(
    item_id: UUID,
    inventory_service: InventoryService = Depends(get_inventory_service),
) -> None:
    await inventory_service.delete_item(item_id)


@router.get("/inventory/{item_id}/levels", response_model=list[InventoryLevelResponse])
@handle_service_errors
async def get_inventory_levels(
    item_id: UUID,
    inventory_service: InventoryService = Depends(get_inventory_service),
) -> list[InventoryLevelResponse]:
    return map_levels_to_response(await inventory_service.get_levels(item_id))


@router.get("/inventory/{item_id}/transactions", response_model=list[InventoryTransactionResponse])
@handle_service_errors
async def get_inventory_transactions(
    item_id: UUID,
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    inventory_service: InventoryService = Depends(get_inventory_service),
) -> list[InventoryTransactionResponse]:
    transactions = await inventory_service.get_transactions(item_id, limit=limit, offset=offset)
    return map_transactions_to_response(transactions)


@router.post("/inventory/{item_id}/adjust", response_model=InventoryTransactionResponse)
@handle_service_errors
async def adjust_stock(
    item_id: UUID,
    request: AdjustStockRequest,
    inventory_service: InventoryService = Depends(get_inventory_service),
) -> InventoryTransactionResponse:
    """
    Add or remove on-hand stock in one warehouse.

    Raises:
        HTTPException(400): Zero quantity, or stock would go negative in a
            warehouse that does not allow it
        HTTPException(404): Item or warehouse not found
    """
    logger.info(
        "Adjusting stock",
        extra={"item_id": str(item_id), "warehouse_id": str(request.warehouse_id), "quantity": request.quantity},
    )
    transaction = await inventory_service.adjust_stock(
        item_id,
        request.warehouse_id,
        request.quantity,
        request.reason,
        user_id=request.user_id,
    )
    return map_transaction_to_response(transaction)


@router.post("/inventory/{item_id}/transfer", response_model=list[InventoryTransactionResponse])
@handle_service_errors
async def transfer_stock(
    item_id: UUID,
    request: TransferStockRequest,
    inventory_service: InventoryService = Depends(get_inventory_service),
) -> list[InventoryTransactionResponse]:
    """
    Move stock between two warehouses.

    Returns:
        list[InventoryTransactionResponse]: Outgoing then incoming transaction

    Raises:
        HTTPException(400): Not enough available stock at the source
        HTTPException(404): Item, warehouse or source level not found
    """
    transactions = await inventory_service.transfer_stock(
        item_id,
        request.from_warehouse_id,
        request.to_warehouse_id,
        request.quantity,
        user_id=request.user_id,
        notes=request.notes,
    )
    return map_transactions_to_response(transactions)


@router.post("/inventory/{item_id}/reserve", response_model=InventoryTransactionResponse)
@handle_service_errors
async def reserve_stock(
    item_id: UUID,
    request: ReservationRequest,
    inventory_service: InventoryService = Depends(get_inventory_service),
) -> InventoryTransactionResponse:
    transaction = await inventory_service.reserve_stock(item_id, **request.model_dump())
    return map_transaction_to_response(transaction)


@router.post("/inventory/{item_id}/release", response_model=InventoryTransactionResponse)
@handle_service_errors
async def release_reservation(
    item_id: UUID,
    request: ReservationRequest,
    inventory_service: InventoryService = Depends(get_inventory_service),
) -> InventoryTransactionResponse:
    transaction = await inventory_service.release_reservation(item_id, **request.model_dump())
    return map_transaction_to_response(transaction)
