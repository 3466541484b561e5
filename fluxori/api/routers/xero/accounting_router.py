"""
Xero accounting endpoints.

Routes (all under /xero; Xero-calling routes take user_id and
organization_id query parameters):
- GET /invoices, POST /invoices, POST /invoices/sync/{order_id}
- GET /contacts, GET /contacts/{contact_id}, POST /contacts,
  PUT /contacts/{contact_id}, POST /contacts/sync/{customer_id}
- GET /accounts, GET /tax-rates
- POST /mappings/accounts, GET /mappings/accounts,
  DELETE /mappings/accounts/{mapping_id}
- GET /config, PUT /config, POST /config/test

Dependencies: fluxori.application.services, fluxori.models.xero
System role: Xero accounting HTTP API
"""

import logging
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from fluxori.api.deps import (
    get_xero_account_service,
    get_xero_config_service,
    get_xero_contact_service,
    get_xero_credentials,
    get_xero_invoice_service,
)
from fluxori.api.error_handling import handle_service_errors
from fluxori.application.services import (
    XeroAccountService,
    XeroConfigService,
    XeroContactService,
    XeroInvoiceService,
)
from fluxori.boundary.xero import XeroCredentials
from fluxori.core.exceptions import InvalidInputError
from fluxori.models.common import ERROR_RESPONSES
from fluxori.models.xero import (
    AccountMappingResponse,
    ContactRequest,
    CreateAccountMappingRequest,
    CreateInvoiceRequest,
    SyncResult,
    UpdateXeroConfigRequest,
    XeroConfigResponse,
)

from .xero_responses import map_sync_result

logger = logging.getLogger(__name__)

router = APIRouter(tags=["xero"], responses=ERROR_RESPONSES)


# Invoices


@router.get("/invoices")
@handle_service_errors
async def list_invoices(
    page: int = Query(1, ge=1),
    where: str | None = Query(None, description="Xero filter expression"),
    status: list[str] | None = Query(None),
    credentials: XeroCredentials = Depends(get_xero_credentials),
    invoice_service: XeroInvoiceService = Depends(get_xero_invoice_service),
) -> list[dict[str, Any]]:
    return await invoice_service.get_invoices(credentials, page=page, where=where, statuses=status)


@router.post("/invoices", status_code=201)
@handle_service_errors
async def create_invoice(
    request: CreateInvoiceRequest,
    credentials: XeroCredentials = Depends(get_xero_credentials),
    invoice_service: XeroInvoiceService = Depends(get_xero_invoice_service),
) -> dict[str, Any]:
    """
    Create a sales invoice for an existing Xero contact.

    Lines without an account code fall back to the organization's default
    sales account.
    """
    return await invoice_service.create_invoice(credentials, request.model_dump(mode="json", exclude_none=True))


@router.post("/invoices/sync/{order_id}", response_model=SyncResult)
@handle_service_errors
async def sync_order(
    order_id: UUID,
    credentials: XeroCredentials = Depends(get_xero_credentials),
    invoice_service: XeroInvoiceService = Depends(get_xero_invoice_service),
) -> SyncResult:
    """Push one order, creating its customer's contact first when needed."""
    return map_sync_result(await invoice_service.sync_order_to_xero(credentials, order_id))


# Contacts


@router.get("/contacts")
@handle_service_errors
async def list_contacts(
    page: int = Query(1, ge=1),
    where: str | None = Query(None, description="Xero filter expression"),
    credentials: XeroCredentials = Depends(get_xero_credentials),
    contact_service: XeroContactService = Depends(get_xero_contact_service),
) -> list[dict[str, Any]]:
    return await contact_service.get_contacts(credentials, page=page, where=where)


@router.get("/contacts/{contact_id}")
@handle_service_errors
async def get_contact(
    contact_id: str,
    credentials: XeroCredentials = Depends(get_xero_credentials),
    contact_service: XeroContactService = Depends(get_xero_contact_service),
) -> dict[str, Any]:
    return await contact_service.get_contact(credentials, contact_id)


@router.post("/contacts", status_code=201)
@handle_service_errors
async def create_contact(
    request: ContactRequest,
    credentials: XeroCredentials = Depends(get_xero_credentials),
    contact_service: XeroContactService = Depends(get_xero_contact_service),
) -> dict[str, Any]:
    if not request.contact.get("Name"):
        raise InvalidInputError("Contact Name is required", field="Name")
    return await contact_service.create_contact(credentials, request.contact)


@router.put("/contacts/{contact_id}")
@handle_service_errors
async def update_contact(
    contact_id: str,
    request: ContactRequest,
    credentials: XeroCredentials = Depends(get_xero_credentials),
    contact_service: XeroContactService = Depends(get_xero_contact_service),
) -> dict[str, Any]:
    return await contact_service.update_contact(credentials, contact_id, request.contact)


@router.post("/contacts/sync/{customer_id}", response_model=SyncResult)
@handle_service_errors
async def sync_customer(
    customer_id: UUID,
    credentials: XeroCredentials = Depends(get_xero_credentials),
    contact_service: XeroContactService = Depends(get_xero_contact_service),
) -> SyncResult:
    return map_sync_result(await contact_service.sync_customer_to_xero(credentials, customer_id))


# Chart of accounts


@router.get("/accounts")
@handle_service_errors
async def list_accounts(
    where: str | None = Query(None, description="Xero filter expression"),
    credentials: XeroCredentials = Depends(get_xero_credentials),
    account_service: XeroAccountService = Depends(get_xero_account_service),
) -> list[dict[str, Any]]:
    return await account_service.get_accounts(credentials, where=where)


@router.get("/tax-rates")
@handle_service_errors
async def list_tax_rates(
    credentials: XeroCredentials = Depends(get_xero_credentials),
    account_service: XeroAccountService = Depends(get_xero_account_service),
) -> list[dict[str, Any]]:
    return await account_service.get_tax_rates(credentials)


@router.post("/mappings/accounts", response_model=AccountMappingResponse, status_code=201)
@handle_service_errors
async def create_account_mapping(
    request: CreateAccountMappingRequest,
    organization_id: UUID = Query(...),
    account_service: XeroAccountService = Depends(get_xero_account_service),
) -> AccountMappingResponse:
    mapping = await account_service.create_mapping(organization_id, **request.model_dump())
    return AccountMappingResponse(**mapping)


@router.get("/mappings/accounts", response_model=list[AccountMappingResponse])
@handle_service_errors
async def list_account_mappings(
    organization_id: UUID = Query(...),
    account_service: XeroAccountService = Depends(get_xero_account_service),
) -> list[AccountMappingResponse]:
    return [AccountMappingResponse(**m) for m in await account_service.list_mappings(organization_id)]


@router.delete("/mappings/accounts/{mapping_id}", status_code=204)
@handle_service_errors
async def delete_account_mapping(
    mapping_id: UUID,
    organization_id: UUID = Query(...),
    account_service: XeroAccountService = Depends(get_xero_account_service),
) -> None:
    await account_service.delete_mapping(organization_id, mapping_id)


# Configuration


@router.get("/config", response_model=XeroConfigResponse)
@handle_service_errors
async def get_config(
    organization_id: UUID = Query(...),
    config_service: XeroConfigService = Depends(get_xero_config_service),
) -> XeroConfigResponse:
    return XeroConfigResponse(**await config_service.get_config(organization_id))


@router.put("/config", response_model=XeroConfigResponse)
@handle_service_errors
async def update_config(
    request: UpdateXeroConfigRequest,
    organization_id: UUID = Query(...),
    config_service: XeroConfigService = Depends(get_xero_config_service),
) -> XeroConfigResponse:
    fields = request.model_dump(exclude_none=True)
    if not fields:
        raise InvalidInputError("At least one field must be provided for update")
    return XeroConfigResponse(**await config_service.update_config(organization_id, **fields))


@router.post("/config/test")
@handle_service_errors
async def test_connection(
    credentials: XeroCredentials = Depends(get_xero_credentials),
    config_service: XeroConfigService = Depends(get_xero_config_service),
) -> dict[str, Any]:
    """Fetch the Xero organisation to prove the stored connection works."""
    return await config_service.test_connection(credentials)
