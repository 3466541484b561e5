"""
Xero OAuth endpoints.

Routes:
- GET /xero/auth/connect - Redirect to Xero's consent screen
- GET /xero/auth/callback - Complete the code exchange and redirect back
- GET /xero/auth/success - Static page shown after connecting
- POST /xero/auth/disconnect - Revoke and deactivate the connection
- GET /xero/connection - Connection status for a user and organization

Dependencies: fluxori.application.services.xero_auth_service, fluxori.models.xero
System role: Xero connection lifecycle HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse, RedirectResponse

from fluxori.api.deps import get_settings_dependency, get_xero_auth_service
from fluxori.api.error_handling import handle_service_errors
from fluxori.application.services import XeroAuthService
from fluxori.configs import Settings
from fluxori.models.xero import ConnectionStatusResponse, DisconnectRequest, DisconnectResponse

from .xero_responses import SUCCESS_PAGE

logger = logging.getLogger(__name__)

router = APIRouter(tags=["xero-auth"])


@router.get("/auth/connect", response_class=RedirectResponse, status_code=302)
@handle_service_errors
async def connect(
    user_id: UUID,
    organization_id: UUID,
    redirect_url: str | None = Query(None, description="Where to send the user after connecting"),
    auth_service: XeroAuthService = Depends(get_xero_auth_service),
) -> RedirectResponse:
    """Start the authorization-code flow by redirecting to Xero."""
    url = await auth_service.get_authorization_url(user_id, organization_id, redirect_url)
    logger.info(
        "Redirecting to Xero authorization",
        extra={"user_id": str(user_id), "organization_id": str(organization_id)},
    )
    return RedirectResponse(url, status_code=302)


@router.get("/auth/callback", response_class=RedirectResponse, status_code=302)
@handle_service_errors
async def callback(
    code: str = Query(..., min_length=1),
    state: str = Query(..., min_length=1),
    auth_service: XeroAuthService = Depends(get_xero_auth_service),
    settings: Settings = Depends(get_settings_dependency),
) -> RedirectResponse:
    """
    Exchange the authorization code and store the connection.

    Raises:
        HTTPException(400): Malformed state
        HTTPException(401): Code rejected or no organisation authorised
    """
    decoded = await auth_service.handle_callback(code, state)
    return RedirectResponse(decoded.redirect_url or settings.xero.success_redirect_url, status_code=302)


@router.get("/auth/success", response_class=HTMLResponse)
async def success() -> HTMLResponse:
    return HTMLResponse(SUCCESS_PAGE)


@router.post("/auth/disconnect", response_model=DisconnectResponse)
@handle_service_errors
async def disconnect(
    request: DisconnectRequest,
    auth_service: XeroAuthService = Depends(get_xero_auth_service),
) -> DisconnectResponse:
    disconnected = await auth_service.disconnect(request.user_id, request.organization_id)
    return DisconnectResponse(
        success=disconnected,
        message="Xero disconnected successfully" if disconnected else "No active Xero connection found",
    )


@router.get("/connection", response_model=ConnectionStatusResponse)
@handle_service_errors
async def connection_status(
    user_id: UUID,
    organization_id: UUID,
    auth_service: XeroAuthService = Depends(get_xero_auth_service),
) -> ConnectionStatusResponse:
    status = await auth_service.get_connection_status(user_id, organization_id)
    return ConnectionStatusResponse(**status)
