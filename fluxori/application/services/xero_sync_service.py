"""
Xero sync service.

Tracks sync runs in XeroSyncStatus and pushes customers and orders to
Xero item by item. A failing item is counted and reported; it never
aborts the batch. Failures loading the batch itself are returned as
{"success": False, "error": ...} rather than raised, so the sync endpoint
can always report a result.

Dependencies: fluxori.application.services.xero_contact_service,
    fluxori.application.services.xero_invoice_service, fluxori.boundary.db.CRUD
System role: Xero batch synchronization
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from fluxori.application.services.xero_account_service import XeroAccountService
from fluxori.application.services.xero_contact_service import XeroContactService
from fluxori.application.services.xero_invoice_service import XeroInvoiceService
from fluxori.boundary.db.CRUD.customer_crud import customer_crud, order_crud
from fluxori.boundary.db.CRUD.xero_crud import xero_sync_status_crud
from fluxori.boundary.db.models.xero_model import SyncType, XeroSyncStatusModel
from fluxori.boundary.xero.api_client import XeroCredentials
from fluxori.core.exceptions import FluxoriError, InvalidInputError, map_exception

logger = logging.getLogger(__name__)


def sync_status_to_dict(status: XeroSyncStatusModel) -> dict[str, Any]:
    return {
        "id": status.id,
        "organization_id": status.organization_id,
        "user_id": status.user_id,
        "sync_type": status.sync_type,
        "status": status.status,
        "progress": status.progress,
        "total_items": status.total_items,
        "processed_items": status.processed_items,
        "error": status.error,
        "started_at": status.started_at,
        "completed_at": status.completed_at,
    }


class XeroSyncService:
    """Xero sync service."""

    def __init__(
        self,
        db: AsyncSession,
        contact_service: XeroContactService,
        invoice_service: XeroInvoiceService,
        account_service: XeroAccountService | None = None,
    ) -> None:
        """
        Args:
            db: Async SQLAlchemy session
            contact_service: Per-customer sync
            invoice_service: Per-order sync
            account_service: Chart of accounts lookups; accounts syncs fail without it
        """
        self.db = db
        self.contacts = contact_service
        self.invoices = invoice_service
        self.accounts = account_service

    async def start_sync(self, credentials: XeroCredentials, sync_type: SyncType | str) -> dict[str, Any]:
        """
        Record a new running sync.

        Returns:
            dict: {success, sync_id, status} or {success: False, error}

        Raises:
            InvalidInputError: Unknown sync type
        """
        try:
            sync_type = SyncType(sync_type)
        except ValueError as e:
            raise InvalidInputError(f"Unknown sync type: {sync_type}", field="sync_type") from e

        try:
            status = await xero_sync_status_crud.create(
                self.db,
                organization_id=credentials.organization_id,
                user_id=credentials.user_id,
                sync_type=sync_type,
            )
        except FluxoriError as e:
            logger.error("Failed to start Xero sync", extra={"sync_type": sync_type.value, "error": str(e)})
            return {"success": False, "error": f"Failed to start sync: {e.message}"}

        logger.info("Xero sync started", extra={"sync_id": str(status.id), "sync_type": sync_type.value})
        return {"success": True, "sync_id": status.id, "status": status.status.value}

    @staticmethod
    def _item_failure(exc: Exception, operation: str, **context: str) -> dict[str, Any]:
        error = map_exception(exc, operation=operation)
        logger.warning(
            "Xero sync item failed",
            extra={**context, "error_type": type(exc).__name__, "error": error.message},
        )
        return {"success": False, "error": error.message}

    async def sync_contacts(self, credentials: XeroCredentials, sync_id: UUID) -> dict[str, Any]:
        """
        Push every customer of the organization to Xero.

        Returns:
            dict: {success, synced_contacts, failed_contacts, errors}; success
            stays True with partial failures
        """
        try:
            customers = await customer_crud.get_by_organization(self.db, credentials.organization_id)
        except FluxoriError as e:
            logger.error("Failed to load customers for Xero sync", extra={"sync_id": str(sync_id), "error": str(e)})
            return {"success": False, "error": e.message}

        synced, failed, errors = 0, 0, []
        total = len(customers)
        for index, customer in enumerate(customers, start=1):
            try:
                result = await self.contacts.sync_customer_to_xero(credentials, customer.id)
            except Exception as e:
                result = self._item_failure(e, "xero.sync_contacts", customer_id=str(customer.id))
            if result.get("success"):
                synced += 1
            else:
                failed += 1
                errors.append({"customer_id": str(customer.id), "error": result.get("error")})
            await self.update_sync_progress(sync_id, int(index * 100 / total), total, index)

        logger.info(
            "Xero contact sync finished",
            extra={"sync_id": str(sync_id), "synced": synced, "failed": failed},
        )
        return {"success": True, "synced_contacts": synced, "failed_contacts": failed, "errors": errors}

    async def sync_invoices(self, credentials: XeroCredentials, sync_id: UUID) -> dict[str, Any]:
        """
        Push every order without a Xero invoice id to Xero.

        Returns:
            dict: {success, synced_invoices, failed_invoices, errors}
        """
        try:
            orders = await order_crud.find(
                self.db,
                order_by="order_date",
                organization_id=credentials.organization_id,
                xero_invoice_id=None,
            )
        except FluxoriError as e:
            logger.error("Failed to load orders for Xero sync", extra={"sync_id": str(sync_id), "error": str(e)})
            return {"success": False, "error": e.message}

        synced, failed, errors = 0, 0, []
        total = len(orders)
        for index, order in enumerate(orders, start=1):
            try:
                result = await self.invoices.sync_order_to_xero(credentials, order.id)
            except Exception as e:
                result = self._item_failure(e, "xero.sync_invoices", order_id=str(order.id))
            if result.get("success"):
                synced += 1
            else:
                failed += 1
                errors.append({"order_id": str(order.id), "error": result.get("error")})
            await self.update_sync_progress(sync_id, int(index * 100 / total), total, index)

        logger.info(
            "Xero invoice sync finished",
            extra={"sync_id": str(sync_id), "synced": synced, "failed": failed},
        )
        return {"success": True, "synced_invoices": synced, "failed_invoices": failed, "errors": errors}

    async def sync_accounts(self, credentials: XeroCredentials, sync_id: UUID) -> dict[str, Any]:
        """Pull the chart of accounts and report how many are active."""
        if self.accounts is None:
            return {"success": False, "error": "Account sync is not configured"}
        try:
            accounts = await self.accounts.get_accounts(credentials)
        except FluxoriError as e:
            logger.error("Xero account sync failed", extra={"sync_id": str(sync_id), "error": str(e)})
            return {"success": False, "error": e.message}

        active = sum(1 for a in accounts if a.get("Status") == "ACTIVE")
        await self.update_sync_progress(sync_id, 100, len(accounts), len(accounts))
        return {"success": True, "total_accounts": len(accounts), "active_accounts": active}

    async def perform_full_sync(self, credentials: XeroCredentials, sync_id: UUID) -> dict[str, Any]:
        """
        Contacts first, then invoices. Invoices are skipped when the
        contact sync fails because they depend on linked contacts.
        """
        contacts_result = await self.sync_contacts(credentials, sync_id)
        if not contacts_result.get("success"):
            error = f"Contact sync failed: {contacts_result.get('error')}"
            await self.fail_sync_operation(sync_id, error)
            return {"success": False, "error": error, "contacts_result": contacts_result}

        invoices_result = await self.sync_invoices(credentials, sync_id)
        if not invoices_result.get("success"):
            error = f"Invoice sync failed: {invoices_result.get('error')}"
            await self.fail_sync_operation(sync_id, error)
            return {
                "success": False,
                "error": error,
                "contacts_result": contacts_result,
                "invoices_result": invoices_result,
            }

        await self.complete_sync_operation(sync_id)
        return {"success": True, "contacts_result": contacts_result, "invoices_result": invoices_result}

    async def run_sync(self, credentials: XeroCredentials, sync_type: SyncType | str) -> dict[str, Any]:
        """Start a sync and run it to completion."""
        started = await self.start_sync(credentials, sync_type)
        if not started["success"]:
            return started
        sync_id = started["sync_id"]
        sync_type = SyncType(sync_type)

        if sync_type == SyncType.FULL:
            result = await self.perform_full_sync(credentials, sync_id)
        elif sync_type == SyncType.CONTACTS:
            result = await self._finish(sync_id, await self.sync_contacts(credentials, sync_id))
        elif sync_type == SyncType.INVOICES:
            result = await self._finish(sync_id, await self.sync_invoices(credentials, sync_id))
        else:
            result = await self._finish(sync_id, await self.sync_accounts(credentials, sync_id))
        return {"sync_id": sync_id, **result}

    async def _finish(self, sync_id: UUID, result: dict[str, Any]) -> dict[str, Any]:
        if result.get("success"):
            await self.complete_sync_operation(sync_id)
        else:
            await self.fail_sync_operation(sync_id, result.get("error") or "Sync failed")
        return result

    async def get_sync_status(self, sync_id: UUID) -> dict[str, Any]:
        status = await xero_sync_status_crud.get_by_id(self.db, sync_id)
        if status is None:
            return {"success": False, "error": "Sync operation not found"}
        return {"success": True, "status": sync_status_to_dict(status)}

    async def get_recent_syncs(self, user_id: UUID, limit: int = 10) -> list[dict[str, Any]]:
        statuses = await xero_sync_status_crud.get_recent(self.db, user_id, limit=limit)
        return [sync_status_to_dict(s) for s in statuses]

    async def update_sync_progress(
        self,
        sync_id: UUID,
        progress: int,
        total_items: int = 0,
        processed_items: int = 0,
    ) -> dict[str, Any]:
        updated = await xero_sync_status_crud.update_progress(
            self.db, sync_id, progress, total_items, processed_items
        )
        if not updated:
            return {"success": False, "error": "No sync operation updated"}
        return {"success": True}

    async def complete_sync_operation(self, sync_id: UUID) -> dict[str, Any]:
        if not await xero_sync_status_crud.complete(self.db, sync_id):
            return {"success": False, "error": "No sync operation completed"}
        logger.info("Xero sync completed", extra={"sync_id": str(sync_id)})
        return {"success": True}

    async def fail_sync_operation(self, sync_id: UUID, error: str) -> dict[str, Any]:
        if not await xero_sync_status_crud.fail(self.db, sync_id, error):
            return {"success": False, "error": "No sync operation failed"}
        logger.warning("Xero sync failed", extra={"sync_id": str(sync_id), "error": error})
        return {"success": True}

    async def get_reconciliation_status(self, credentials: XeroCredentials) -> dict[str, Any]:
        """Counts of customers and orders linked / not yet linked to Xero."""
        organization_id = credentials.organization_id
        total_customers = await customer_crud.count(self.db, organization_id=organization_id)
        unsynced_customers = await customer_crud.count(
            self.db, organization_id=organization_id, xero_contact_id=None
        )
        total_orders = await order_crud.count(self.db, organization_id=organization_id)
        unsynced_orders = await order_crud.count(
            self.db, organization_id=organization_id, xero_invoice_id=None
        )
        return {
            "customers": {
                "total": total_customers,
                "synced": total_customers - unsynced_customers,
                "unsynced": unsynced_customers,
            },
            "orders": {
                "total": total_orders,
                "synced": total_orders - unsynced_orders,
                "unsynced": unsynced_orders,
            },
        }
