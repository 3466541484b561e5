"""
Xero configuration service.

Dependencies: fluxori.boundary.db.CRUD, fluxori.boundary.xero
System role: Per-organization Xero preferences
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from fluxori.boundary.db.CRUD.xero_crud import xero_config_crud
from fluxori.boundary.db.models.xero_model import SyncFrequency, XeroConfigModel, XeroInvoiceStatus
from fluxori.boundary.xero.api_client import XeroApiClient, XeroClientFactory, XeroCredentials
from fluxori.core.exceptions import FluxoriError, InvalidInputError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "default_sales_account_code": "200",
    "default_tax_type": None,
    "invoice_prefix": None,
    "invoice_status": XeroInvoiceStatus.DRAFT,
    "branding_theme_id": None,
    "auto_sync_contacts": False,
    "auto_sync_invoices": False,
    "sync_frequency": SyncFrequency.MANUAL,
}

ENUM_FIELDS = {"invoice_status": XeroInvoiceStatus, "sync_frequency": SyncFrequency}


def config_to_dict(organization_id: UUID, config: XeroConfigModel | None) -> dict[str, Any]:
    if config is None:
        return {"organization_id": organization_id, **DEFAULT_CONFIG, "is_default": True}
    return {
        "organization_id": organization_id,
        **{name: getattr(config, name) for name in DEFAULT_CONFIG},
        "is_default": False,
    }


class XeroConfigService:
    """Xero configuration service."""

    def __init__(
        self,
        db: AsyncSession,
        client_factory: XeroClientFactory = XeroApiClient.from_credentials,
    ) -> None:
        self.db = db
        self._client = client_factory

    async def get_config(self, organization_id: UUID) -> dict[str, Any]:
        """Stored configuration, or the defaults when none is saved."""
        config = await xero_config_crud.get_by_organization(self.db, organization_id)
        return config_to_dict(organization_id, config)

    async def update_config(self, organization_id: UUID, **fields) -> dict[str, Any]:
        """
        Create or update the organization's configuration.

        Raises:
            InvalidInputError: Unknown field or invalid enum value
        """
        unknown = set(fields) - set(DEFAULT_CONFIG)
        if unknown:
            raise InvalidInputError(f"Unknown config fields: {', '.join(sorted(unknown))}")

        updates = {k: v for k, v in fields.items() if v is not None}
        for name, enum_type in ENUM_FIELDS.items():
            if name in updates and not isinstance(updates[name], enum_type):
                try:
                    updates[name] = enum_type(updates[name])
                except ValueError as e:
                    allowed = ", ".join(member.value for member in enum_type)
                    raise InvalidInputError(
                        f"Invalid {name}: {updates[name]}. Allowed: {allowed}", field=name
                    ) from e

        config = await xero_config_crud.upsert(self.db, organization_id, **updates)
        logger.info(
            "Xero config updated",
            extra={"organization_id": str(organization_id), "fields": sorted(updates)},
        )
        return config_to_dict(organization_id, config)

    async def test_connection(self, credentials: XeroCredentials) -> dict[str, Any]:
        """Fetch the Xero organisation to prove the connection works."""
        try:
            async with self._client(credentials) as client:
                organisation = await client.get_organisation()
        except FluxoriError as e:
            logger.warning(
                "Xero connection test failed",
                extra={"organization_id": str(credentials.organization_id), "error": str(e)},
            )
            return {"success": False, "error": e.message}
        return {
            "success": True,
            "tenant_id": credentials.tenant_id,
            "organisation_name": organisation.get("Name"),
            "base_currency": organisation.get("BaseCurrency"),
            "country_code": organisation.get("CountryCode"),
        }
