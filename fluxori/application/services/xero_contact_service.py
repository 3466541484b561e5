"""
Xero contact service.

Contact passthroughs plus the customer -> Xero contact sync that links
Fluxori customers to Xero contacts via xero_contact_id.

Dependencies: fluxori.boundary.xero, fluxori.boundary.db.CRUD
System role: Xero contact synchronization
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from fluxori.boundary.db.CRUD.customer_crud import customer_crud
from fluxori.boundary.db.models.customer_model import CustomerModel
from fluxori.boundary.xero.api_client import XeroApiClient, XeroClientFactory, XeroCredentials, require_id
from fluxori.core.exceptions import FluxoriError

logger = logging.getLogger(__name__)

ADDRESS_FIELDS = {
    "line1": "AddressLine1",
    "line2": "AddressLine2",
    "city": "City",
    "region": "Region",
    "postal_code": "PostalCode",
    "country": "Country",
}


def customer_to_contact(customer: CustomerModel) -> dict[str, Any]:
    """Xero Contact payload for a Fluxori customer."""
    contact: dict[str, Any] = {"Name": customer.display_name}
    if customer.contact_name:
        first, _, last = customer.contact_name.strip().partition(" ")
        contact["FirstName"] = first
        if last:
            contact["LastName"] = last
    if customer.email:
        contact["EmailAddress"] = customer.email
    if customer.phone:
        contact["Phones"] = [{"PhoneType": "DEFAULT", "PhoneNumber": customer.phone}]
    address = {
        xero_key: customer.address[key]
        for key, xero_key in ADDRESS_FIELDS.items()
        if (customer.address or {}).get(key)
    }
    if address:
        contact["Addresses"] = [{"AddressType": "STREET", **address}]
    return contact


def _quote(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


class XeroContactService:
    """Xero contact operations for one organization's connection."""

    def __init__(
        self,
        db: AsyncSession,
        client_factory: XeroClientFactory = XeroApiClient.from_credentials,
    ) -> None:
        self.db = db
        self._client = client_factory

    async def get_contacts(
        self,
        credentials: XeroCredentials,
        page: int = 1,
        where: str | None = None,
    ) -> list[dict[str, Any]]:
        async with self._client(credentials) as client:
            return await client.get_contacts(page=page, where=where)

    async def get_contact(self, credentials: XeroCredentials, contact_id: str) -> dict[str, Any]:
        async with self._client(credentials) as client:
            return await client.get_contact(contact_id)

    async def create_contact(self, credentials: XeroCredentials, contact: dict[str, Any]) -> dict[str, Any]:
        async with self._client(credentials) as client:
            created = await client.create_contact(contact)
        logger.info("Xero contact created", extra={"contact_id": created.get("ContactID")})
        return created

    async def update_contact(
        self,
        credentials: XeroCredentials,
        contact_id: str,
        contact: dict[str, Any],
    ) -> dict[str, Any]:
        async with self._client(credentials) as client:
            return await client.update_contact(contact_id, contact)

    async def _push_customer(self, client: XeroApiClient, customer: CustomerModel) -> str:
        payload = customer_to_contact(customer)
        if customer.xero_contact_id:
            contact = await client.update_contact(customer.xero_contact_id, payload)
            return require_id(contact, "ContactID", "contacts.update")

        matches = await client.get_contacts(where=f'Name=="{_quote(payload["Name"])}"')
        if matches:
            existing_id = require_id(matches[0], "ContactID", "contacts.list")
            contact = await client.update_contact(existing_id, payload)
            return require_id(contact, "ContactID", "contacts.update")
        contact = await client.create_contact(payload)
        return require_id(contact, "ContactID", "contacts.create")

    async def sync_customer_to_xero(self, credentials: XeroCredentials, customer_id: UUID) -> dict[str, Any]:
        """
        Create or update the Xero contact for a customer.

        An existing Xero contact with the same name is reused so repeated
        syncs do not duplicate contacts.

        Returns:
            dict: {success, contact_id, message} or {success: False, message, error}
        """
        customer = await customer_crud.get_by_id(self.db, customer_id)
        if customer is None or customer.organization_id != credentials.organization_id:
            return {"success": False, "message": "Sync failed", "error": "Customer not found"}

        try:
            async with self._client(credentials) as client:
                contact_id = await self._push_customer(client, customer)
            if contact_id != customer.xero_contact_id:
                await customer_crud.set_xero_contact_id(self.db, customer.id, contact_id)
        except FluxoriError as e:
            logger.warning(
                "Customer sync to Xero failed",
                extra={"customer_id": str(customer_id), "error": str(e)},
            )
            return {"success": False, "message": "Sync failed", "error": e.message}

        logger.info("Customer synced to Xero", extra={"customer_id": str(customer_id), "contact_id": contact_id})
        return {"success": True, "contact_id": contact_id, "message": "Customer synced successfully"}
