"""
Xero sync endpoints.

Routes:
- POST /xero/sync - Run a contacts, invoices, accounts or full sync
- GET /xero/sync/status/{sync_id} - One sync run
- GET /xero/sync/recent - Recent runs for a user
- GET /xero/reports/reconciliation - Linked vs unlinked record counts

Dependencies: fluxori.application.services.xero_sync_service, fluxori.models.xero
System role: Xero batch sync HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from fluxori.api.deps import get_xero_credentials, get_xero_sync_service
from fluxori.api.error_handling import handle_service_errors
from fluxori.application.services import XeroSyncService
from fluxori.boundary.xero import XeroCredentials
from fluxori.core.exceptions import NotFoundError
from fluxori.models.common import ERROR_RESPONSES
from fluxori.models.xero import (
    ReconciliationResponse,
    StartSyncRequest,
    SyncRunResponse,
    SyncStatusResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["xero-sync"], responses=ERROR_RESPONSES)


@router.post("/sync", response_model=SyncRunResponse)
@handle_service_errors
async def run_sync(
    request: StartSyncRequest,
    credentials: XeroCredentials = Depends(get_xero_credentials),
    sync_service: XeroSyncService = Depends(get_xero_sync_service),
) -> SyncRunResponse:
    """
    Run a sync to completion within the request.

    Item failures are reported in the result and do not fail the request.
    """
    logger.info(
        "Xero sync requested",
        extra={"organization_id": str(credentials.organization_id), "sync_type": request.sync_type.value},
    )
    result = await sync_service.run_sync(credentials, request.sync_type)
    return SyncRunResponse(**result)


@router.get("/sync/status/{sync_id}", response_model=SyncStatusResponse)
@handle_service_errors
async def get_sync_status(
    sync_id: UUID,
    sync_service: XeroSyncService = Depends(get_xero_sync_service),
) -> SyncStatusResponse:
    result = await sync_service.get_sync_status(sync_id)
    if not result["success"]:
        raise NotFoundError(result["error"], resource="XeroSyncStatus", resource_id=sync_id)
    return SyncStatusResponse(**result["status"])


@router.get("/sync/recent", response_model=list[SyncStatusResponse])
@handle_service_errors
async def get_recent_syncs(
    user_id: UUID,
    limit: int = Query(10, ge=1, le=100),
    sync_service: XeroSyncService = Depends(get_xero_sync_service),
) -> list[SyncStatusResponse]:
    return [SyncStatusResponse(**s) for s in await sync_service.get_recent_syncs(user_id, limit=limit)]


@router.get("/reports/reconciliation", response_model=ReconciliationResponse)
@handle_service_errors
async def get_reconciliation(
    credentials: XeroCredentials = Depends(get_xero_credentials),
    sync_service: XeroSyncService = Depends(get_xero_sync_service),
) -> ReconciliationResponse:
    return ReconciliationResponse(**await sync_service.get_reconciliation_status(credentials))
