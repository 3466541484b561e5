"""
Stock alert API endpoints.

Routes:
- GET /organizations/{org_id}/stock-alerts - Active alerts
- POST /organizations/{org_id}/stock-alerts/check - Scan levels and raise alerts
- GET /inventory/{id}/stock-alerts - Alerts for one item
- GET /warehouses/{id}/stock-alerts - Alerts for one warehouse
- POST /stock-alerts/{id}/resolve - Resolve alert
- POST /stock-alerts/{id}/ignore - Ignore alert

Dependencies: fluxori.application.services, fluxori.models
System role: Stock alert HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from fluxori.api.deps import get_stock_alert_service
from fluxori.api.error_handling import handle_service_errors
from fluxori.application.services import StockAlertService
from fluxori.boundary.db.models.stock_alert_model import AlertStatus
from fluxori.models.common import ERROR_RESPONSES
from fluxori.models.stock_alert import AlertActionRequest, AlertCheckResponse, StockAlertResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["stock-alerts"], responses=ERROR_RESPONSES)


@router.get("/organizations/{organization_id}/stock-alerts", response_model=list[StockAlertResponse])
@handle_service_errors
async def list_active_alerts(
    organization_id: UUID,
    limit: int | None = Query(None, ge=1, le=500),
    offset: int = Query(0, ge=0),
    alert_service: StockAlertService = Depends(get_stock_alert_service),
) -> list[StockAlertResponse]:
    alerts = await alert_service.list_active(organization_id, limit=limit, offset=offset)
    return [StockAlertResponse(**a) for a in alerts]


@router.post("/organizations/{organization_id}/stock-alerts/check", response_model=AlertCheckResponse)
@handle_service_errors
async def check_stock_levels(
    organization_id: UUID,
    alert_service: StockAlertService = Depends(get_stock_alert_service),
) -> AlertCheckResponse:
    """
    Scan every inventory level of the organization.

    Items at or below their reorder point get a reorder alert and items
    with nothing available get an out-of-stock alert, unless an active
    alert of that type already exists.
    """
    logger.info("Checking stock levels", extra={"organization_id": str(organization_id)})
    result = await alert_service.check_all_levels(organization_id)
    return AlertCheckResponse(**result)


@router.get("/inventory/{item_id}/stock-alerts", response_model=list[StockAlertResponse])
@handle_service_errors
async def list_item_alerts(
    item_id: UUID,
    status: AlertStatus | None = None,
    alert_service: StockAlertService = Depends(get_stock_alert_service),
) -> list[StockAlertResponse]:
    return [StockAlertResponse(**a) for a in await alert_service.list_for_item(item_id, status=status)]


@router.get("/warehouses/{warehouse_id}/stock-alerts", response_model=list[StockAlertResponse])
@handle_service_errors
async def list_warehouse_alerts(
    warehouse_id: UUID,
    status: AlertStatus | None = None,
    alert_service: StockAlertService = Depends(get_stock_alert_service),
) -> list[StockAlertResponse]:
    return [StockAlertResponse(**a) for a in await alert_service.list_for_warehouse(warehouse_id, status=status)]


@router.post("/stock-alerts/{alert_id}/resolve", response_model=StockAlertResponse)
@handle_service_errors
async def resolve_alert(
    alert_id: UUID,
    request: AlertActionRequest | None = None,
    alert_service: StockAlertService = Depends(get_stock_alert_service),
) -> StockAlertResponse:
    user_id = request.user_id if request else None
    return StockAlertResponse(**await alert_service.resolve_alert(alert_id, user_id=user_id))


@router.post("/stock-alerts/{alert_id}/ignore", response_model=StockAlertResponse)
@handle_service_errors
async def ignore_alert(
    alert_id: UUID,
    request: AlertActionRequest | None = None,
    alert_service: StockAlertService = Depends(get_stock_alert_service),
) -> StockAlertResponse:
    user_id = request.user_id if request else None
    return StockAlertResponse(**await alert_service.ignore_alert(alert_id, user_id=user_id))
