"""
Xero connector schemas.

Request/response schemas for the Xero OAuth flow, contact and invoice
passthrough, account mappings, connector configuration and sync runs.
Xero resources themselves are passed through as dicts in Xero's own
PascalCase shape.

Dependencies: pydantic
System role: Xero API contracts
"""

import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from fluxori.boundary.db.models.xero_model import (
    SyncFrequency,
    SyncState,
    SyncType,
    XeroInvoiceStatus,
)


class DisconnectRequest(BaseModel):
    """User and organization whose connection is removed."""

    user_id: uuid.UUID
    organization_id: uuid.UUID


class DisconnectResponse(BaseModel):
    success: bool
    message: str


class ConnectionStatusResponse(BaseModel):
    connected: bool
    tenant_id: str | None = None
    tenant_name: str | None = None
    token_expires_at: datetime | None = None
    last_refreshed_at: datetime | None = None
    scopes: str | None = None


class InvoiceLineRequest(BaseModel):
    description: str | None = None
    quantity: float = Field(default=1, gt=0)
    unit_price: float = Field(default=0, ge=0)
    account_code: str | None = Field(None, description="Overrides mapped and default account codes")
    tax_type: str | None = None
    tax_amount: float | None = None
    sku: str | None = None
    category: str | None = None


class CreateInvoiceRequest(BaseModel):
    """Invoice for an existing Xero contact."""

    contact_id: str = Field(..., min_length=1, description="Xero ContactID")
    line_items: list[InvoiceLineRequest] = Field(..., min_length=1)
    date: str | None = Field(None, description="YYYY-MM-DD")
    due_date: str | None = Field(None, description="YYYY-MM-DD")
    reference: str | None = None
    currency_code: str | None = Field(None, min_length=3, max_length=3)
    status: XeroInvoiceStatus | None = None


class ContactRequest(BaseModel):
    contact: dict[str, Any] = Field(description="Xero contact in PascalCase form")


class SyncResult(BaseModel):
    """Outcome of pushing one Fluxori record to Xero."""

    success: bool
    message: str | None = None
    error: str | None = None
    contact_id: str | None = None
    invoice_id: str | None = None
    invoice_number: str | None = None


class CreateAccountMappingRequest(BaseModel):
    category: str = Field(..., min_length=1, max_length=100, description="Product category to map")
    xero_account_code: str = Field(..., min_length=1, max_length=20)
    xero_account_id: str | None = None
    tax_type: str | None = None
    description: str | None = None


class AccountMappingResponse(BaseModel):
    id: uuid.UUID
    organization_id: uuid.UUID
    category: str
    xero_account_code: str
    xero_account_id: str | None
    tax_type: str | None
    description: str | None
    created_at: datetime


class XeroConfigResponse(BaseModel):
    organization_id: uuid.UUID
    default_sales_account_code: str
    default_tax_type: str | None
    invoice_prefix: str | None
    invoice_status: XeroInvoiceStatus
    branding_theme_id: str | None
    auto_sync_contacts: bool
    auto_sync_invoices: bool
    sync_frequency: SyncFrequency
    is_default: bool = Field(description="True when no configuration has been saved yet")


class UpdateXeroConfigRequest(BaseModel):
    """Partial configuration update; unset fields are left unchanged."""

    default_sales_account_code: str | None = Field(None, min_length=1, max_length=20)
    default_tax_type: str | None = None
    invoice_prefix: str | None = Field(None, max_length=20)
    invoice_status: XeroInvoiceStatus | None = None
    branding_theme_id: str | None = None
    auto_sync_contacts: bool | None = None
    auto_sync_invoices: bool | None = None
    sync_frequency: SyncFrequency | None = None


class StartSyncRequest(BaseModel):
    sync_type: SyncType = SyncType.FULL


class SyncStatusResponse(BaseModel):
    id: uuid.UUID
    organization_id: uuid.UUID
    user_id: uuid.UUID
    sync_type: SyncType
    status: SyncState
    progress: int
    total_items: int
    processed_items: int
    error: str | None
    started_at: datetime
    completed_at: datetime | None


class ReconciliationCounts(BaseModel):
    total: int
    synced: int
    unsynced: int


class ReconciliationResponse(BaseModel):
    customers: ReconciliationCounts
    orders: ReconciliationCounts


class SyncRunResponse(BaseModel):
    """Result of a sync request; per-item counts depend on the sync type."""

    success: bool
    sync_id: uuid.UUID | None = None
    error: str | None = None
    contacts_result: dict[str, Any] | None = None
    invoices_result: dict[str, Any] | None = None
    synced_contacts: int | None = None
    failed_contacts: int | None = None
    synced_invoices: int | None = None
    failed_invoices: int | None = None
    total_accounts: int | None = None
    active_accounts: int | None = None
    errors: list[dict[str, Any]] = Field(default_factory=list)
