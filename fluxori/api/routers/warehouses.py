"""
Warehouse API endpoints.

Routes:
- POST /organizations/{org_id}/warehouses - Create warehouse
- GET /organizations/{org_id}/warehouses - List warehouses
- GET /organizations/{org_id}/warehouses/default - Get default warehouse
- GET /warehouses/{id} - Get warehouse
- PUT /warehouses/{id} - Update warehouse
- DELETE /warehouses/{id} - Delete warehouse
- POST /warehouses/{id}/default - Make warehouse the organization default

Dependencies: fluxori.application.services, fluxori.models
System role: Warehouse management HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from fluxori.api.deps import get_warehouse_service
from fluxori.api.error_handling import handle_service_errors
from fluxori.application.services import WarehouseService
from fluxori.boundary.db.models.warehouse_model import WarehouseStatus
from fluxori.core.exceptions import InvalidInputError
from fluxori.models.common import ERROR_RESPONSES
from fluxori.models.warehouse import (
    CreateWarehouseRequest,
    UpdateWarehouseRequest,
    WarehouseResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["warehouses"], responses=ERROR_RESPONSES)


@router.post(
    "/organizations/{organization_id}/warehouses",
    response_model=WarehouseResponse,
    status_code=201,
)
@handle_service_errors
async def create_warehouse(
    organization_id: UUID,
    request: CreateWarehouseRequest,
    warehouse_service: WarehouseService = Depends(get_warehouse_service),
) -> WarehouseResponse:
    """
    Create a warehouse.

    The organization's first warehouse becomes its default, as does one
    created with is_default set.

    Raises:
        HTTPException(404): Organization not found
        HTTPException(409): Code already used in the organization
    """
    logger.info(
        "Creating warehouse",
        extra={"organization_id": str(organization_id), "code": request.code},
    )
    warehouse = await warehouse_service.create_warehouse(organization_id, **request.model_dump())
    return WarehouseResponse(**warehouse)


@router.get("/organizations/{organization_id}/warehouses", response_model=list[WarehouseResponse])
@handle_service_errors
async def list_warehouses(
    organization_id: UUID,
    status: WarehouseStatus | None = None,
    limit: int | None = Query(None, ge=1, le=500),
    offset: int = Query(0, ge=0),
    warehouse_service: WarehouseService = Depends(get_warehouse_service),
) -> list[WarehouseResponse]:
    warehouses = await warehouse_service.list_warehouses(
        organization_id, status=status, limit=limit, offset=offset
    )
    return [WarehouseResponse(**w) for w in warehouses]


@router.get("/organizations/{organization_id}/warehouses/default", response_model=WarehouseResponse)
@handle_service_errors
async def get_default_warehouse(
    organization_id: UUID,
    warehouse_service: WarehouseService = Depends(get_warehouse_service),
) -> WarehouseResponse:
    return WarehouseResponse(**await warehouse_service.get_default_warehouse(organization_id))


@router.get("/warehouses/{warehouse_id}", response_model=WarehouseResponse)
@handle_service_errors
async def get_warehouse(
    warehouse_id: UUID,
    warehouse_service: WarehouseService = Depends(get_warehouse_service),
) -> WarehouseResponse:
    return WarehouseResponse(**await warehouse_service.get_warehouse(warehouse_id))


@router.put("/warehouses/{warehouse_id}", response_model=WarehouseResponse)
@handle_service_errors
async def update_warehouse(
    warehouse_id: UUID,
    request: UpdateWarehouseRequest,
    warehouse_service: WarehouseService = Depends(get_warehouse_service),
) -> WarehouseResponse:
    fields = request.model_dump(exclude_none=True)
    if not fields:
        raise InvalidInputError("At least one field must be provided for update")
    return WarehouseResponse(**await warehouse_service.update_warehouse(warehouse_id, **fields))


@router.delete("/warehouses/{warehouse_id}", status_code=204)
@handle_service_errors
async def delete_warehouse(
    warehouse_id: UUID,
    warehouse_service: WarehouseService = Depends(get_warehouse_service),
) -> None:
    """Delete a warehouse; deleting the default promotes the oldest remaining one."""
    await warehouse_service.delete_warehouse(warehouse_id)


@router.post("/warehouses/{warehouse_id}/default", response_model=WarehouseResponse)
@handle_service_errors
async def set_default_warehouse(
    warehouse_id: UUID,
    warehouse_service: WarehouseService = Depends(get_warehouse_service),
) -> WarehouseResponse:
    warehouse = await warehouse_service.get_warehouse(warehouse_id)
    updated = await warehouse_service.set_as_default(warehouse["organization_id"], warehouse_id)
    return WarehouseResponse(**updated)
