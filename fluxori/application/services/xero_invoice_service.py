"""
Xero invoice service.

Builds ACCREC invoices from Fluxori orders. Line items resolve their
account code from the line itself, then the mapping for the line's
``category``, then the organization's default sales account. Without an
account code, a line with no category or an unmapped one takes the default.

Dependencies: fluxori.boundary.xero, fluxori.boundary.db.CRUD
System role: Xero invoice synchronization
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from fluxori.application.services.xero_contact_service import XeroContactService
from fluxori.boundary.db.CRUD.customer_crud import customer_crud, order_crud
from fluxori.boundary.db.CRUD.xero_crud import xero_account_mapping_crud, xero_config_crud
from fluxori.boundary.db.models.order_model import OrderModel
from fluxori.boundary.db.models.xero_model import (
    XeroAccountMappingModel,
    XeroConfigModel,
    XeroInvoiceStatus,
)
from fluxori.boundary.xero.api_client import XeroApiClient, XeroClientFactory, XeroCredentials, require_id
from fluxori.core.exceptions import FluxoriError, InvalidInputError

logger = logging.getLogger(__name__)

DEFAULT_ACCOUNT_CODE = "200"


def build_line_items(
    line_items: list[dict[str, Any]],
    config: XeroConfigModel | None,
    mappings: dict[str, XeroAccountMappingModel],
) -> list[dict[str, Any]]:
    """
    Xero LineItems for Fluxori order lines.

    Args:
        line_items: Order lines; ``account_code`` and ``category`` are optional
        config: Organization config, None for the defaults
        mappings: Account mappings keyed by category
    """
    default_account = (config.default_sales_account_code if config else None) or DEFAULT_ACCOUNT_CODE
    default_tax = config.default_tax_type if config else None

    xero_lines = []
    for line in line_items:
        category = line.get("category")
        mapping = mappings.get(category) if category else None
        xero_line: dict[str, Any] = {
            "Description": line.get("description") or line.get("sku") or "Item",
            "Quantity": line.get("quantity", 1),
            "UnitAmount": line.get("unit_price", 0),
            "AccountCode": line.get("account_code")
            or (mapping.xero_account_code if mapping else None)
            or default_account,
        }
        tax_type = (mapping.tax_type if mapping else None) or default_tax
        if tax_type:
            xero_line["TaxType"] = tax_type
        if line.get("tax_amount") is not None:
            xero_line["TaxAmount"] = line["tax_amount"]
        if line.get("sku"):
            xero_line["ItemCode"] = line["sku"]
        xero_lines.append(xero_line)
    return xero_lines


def build_invoice(
    order: OrderModel,
    contact_id: str,
    config: XeroConfigModel | None,
    mappings: dict[str, XeroAccountMappingModel],
) -> dict[str, Any]:
    status = config.invoice_status if config else XeroInvoiceStatus.DRAFT
    invoice: dict[str, Any] = {
        "Type": "ACCREC",
        "Contact": {"ContactID": contact_id},
        "Date": order.order_date.date().isoformat(),
        "Reference": order.order_number,
        "CurrencyCode": order.currency,
        "Status": status.value,
        "LineAmountTypes": "Exclusive",
        "LineItems": build_line_items(order.line_items or [], config, mappings),
    }
    if config and config.invoice_prefix:
        invoice["InvoiceNumber"] = f"{config.invoice_prefix}{order.order_number}"
    if config and config.branding_theme_id:
        invoice["BrandingThemeID"] = config.branding_theme_id
    return invoice


class XeroInvoiceService:
    """Xero invoice operations."""

    def __init__(
        self,
        db: AsyncSession,
        client_factory: XeroClientFactory = XeroApiClient.from_credentials,
        contact_service: XeroContactService | None = None,
    ) -> None:
        self.db = db
        self._client = client_factory
        self.contacts = contact_service or XeroContactService(db, client_factory)

    async def get_invoices(
        self,
        credentials: XeroCredentials,
        page: int = 1,
        where: str | None = None,
        statuses: list[str] | None = None,
    ) -> list[dict[str, Any]]:
        async with self._client(credentials) as client:
            return await client.get_invoices(page=page, where=where, statuses=statuses)

    async def create_invoice(self, credentials: XeroCredentials, invoice_data: dict[str, Any]) -> dict[str, Any]:
        """
        Create an invoice from a Fluxori-shaped payload.

        Args:
            credentials: Tenant credentials
            invoice_data: contact_id, line_items (description, quantity,
                unit_price, account_code, tax_type, sku) and optional
                date, due_date, reference, currency_code, status

        Returns:
            dict: The Xero invoice
        """
        if not invoice_data.get("contact_id"):
            raise InvalidInputError("contact_id is required", field="contact_id")
        if not invoice_data.get("line_items"):
            raise InvalidInputError("At least one line item is required", field="line_items")

        config = await xero_config_crud.get_by_organization(self.db, credentials.organization_id)
        invoice: dict[str, Any] = {
            "Type": "ACCREC",
            "Contact": {"ContactID": invoice_data["contact_id"]},
            "LineItems": build_line_items(invoice_data["line_items"], config, {}),
            "Status": invoice_data.get("status")
            or (config.invoice_status.value if config else XeroInvoiceStatus.DRAFT.value),
            "LineAmountTypes": "Exclusive",
        }
        for key, xero_key in (
            ("date", "Date"),
            ("due_date", "DueDate"),
            ("reference", "Reference"),
            ("currency_code", "CurrencyCode"),
        ):
            if invoice_data.get(key):
                invoice[xero_key] = str(invoice_data[key])
        for line, source in zip(invoice["LineItems"], invoice_data["line_items"]):
            if source.get("tax_type"):
                line["TaxType"] = source["tax_type"]

        async with self._client(credentials) as client:
            created = await client.create_invoice(invoice)
        logger.info("Xero invoice created", extra={"invoice_id": created.get("InvoiceID")})
        return created

    async def sync_order_to_xero(self, credentials: XeroCredentials, order_id: UUID) -> dict[str, Any]:
        """
        Push an order to Xero as an invoice.

        The order's customer is synced to a Xero contact first when it has
        none. Orders that already carry a Xero invoice id are skipped.

        Returns:
            dict: {success, invoice_id, invoice_number, message} or
            {success: False, message, error}
        """
        order = await order_crud.get_by_id(self.db, order_id)
        if order is None or order.organization_id != credentials.organization_id:
            return {"success": False, "message": "Sync failed", "error": "Order not found"}
        if order.xero_invoice_id:
            return {
                "success": True,
                "invoice_id": order.xero_invoice_id,
                "message": "Order already synced",
            }
        if order.customer_id is None:
            return {"success": False, "message": "Sync failed", "error": "Order has no customer"}

        customer = await customer_crud.get_by_id(self.db, order.customer_id)
        if customer is None:
            return {"success": False, "message": "Sync failed", "error": "Customer not found"}

        contact_id = customer.xero_contact_id
        if not contact_id:
            contact_result = await self.contacts.sync_customer_to_xero(credentials, customer.id)
            if not contact_result["success"]:
                return {
                    "success": False,
                    "message": "Customer sync failed",
                    "error": contact_result.get("error"),
                }
            contact_id = contact_result["contact_id"]

        config = await xero_config_crud.get_by_organization(self.db, credentials.organization_id)
        mappings = {
            m.category: m
            for m in await xero_account_mapping_crud.get_by_organization(self.db, credentials.organization_id)
        }

        try:
            async with self._client(credentials) as client:
                invoice = await client.create_invoice(build_invoice(order, contact_id, config, mappings))
            invoice_id = require_id(invoice, "InvoiceID", "invoices.create")
            await order_crud.set_xero_invoice_id(self.db, order.id, invoice_id)
        except FluxoriError as e:
            logger.warning("Order sync to Xero failed", extra={"order_id": str(order_id), "error": str(e)})
            return {"success": False, "message": "Sync failed", "error": e.message}

        logger.info(
            "Order synced to Xero",
            extra={"order_id": str(order_id), "invoice_id": invoice_id},
        )
        return {
            "success": True,
            "invoice_id": invoice_id,
            "invoice_number": invoice.get("InvoiceNumber"),
            "message": "Order synced successfully",
        }
