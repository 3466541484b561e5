"""
Xero account service.

Chart of accounts and tax rate lookups, and the category -> account code
mappings used when building invoice lines.

Dependencies: fluxori.boundary.xero, fluxori.boundary.db.CRUD
System role: Xero account mapping management
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from fluxori.boundary.db.CRUD.xero_crud import xero_account_mapping_crud
from fluxori.boundary.db.models.xero_model import XeroAccountMappingModel
from fluxori.boundary.xero.api_client import XeroApiClient, XeroClientFactory, XeroCredentials
from fluxori.core.exceptions import ConflictError, InvalidInputError, NotFoundError

logger = logging.getLogger(__name__)


def mapping_to_dict(mapping: XeroAccountMappingModel) -> dict[str, Any]:
    return {
        "id": mapping.id,
        "organization_id": mapping.organization_id,
        "category": mapping.category,
        "xero_account_code": mapping.xero_account_code,
        "xero_account_id": mapping.xero_account_id,
        "tax_type": mapping.tax_type,
        "description": mapping.description,
        "created_at": mapping.created_at,
    }


class XeroAccountService:
    """Xero accounts, tax rates and account mappings."""

    def __init__(
        self,
        db: AsyncSession,
        client_factory: XeroClientFactory = XeroApiClient.from_credentials,
    ) -> None:
        self.db = db
        self._client = client_factory

    async def get_accounts(self, credentials: XeroCredentials, where: str | None = None) -> list[dict[str, Any]]:
        async with self._client(credentials) as client:
            return await client.get_accounts(where=where)

    async def get_tax_rates(self, credentials: XeroCredentials) -> list[dict[str, Any]]:
        async with self._client(credentials) as client:
            return await client.get_tax_rates()

    async def create_mapping(
        self,
        organization_id: UUID,
        category: str,
        xero_account_code: str,
        xero_account_id: str | None = None,
        tax_type: str | None = None,
        description: str | None = None,
    ) -> dict[str, Any]:
        """
        Map a revenue category to a Xero account code.

        Raises:
            InvalidInputError: Missing category or account code
            ConflictError: Category already mapped
        """
        if not category or not xero_account_code:
            raise InvalidInputError(
                "Category and Xero account code are required",
                field="category" if not category else "xero_account_code",
            )
        if await xero_account_mapping_crud.get_by_category(self.db, organization_id, category):
            raise ConflictError(f"Category {category} is already mapped", field="category")

        mapping = await xero_account_mapping_crud.create(
            self.db,
            organization_id=organization_id,
            category=category,
            xero_account_code=xero_account_code,
            xero_account_id=xero_account_id,
            tax_type=tax_type,
            description=description,
        )
        logger.info(
            "Xero account mapping created",
            extra={"organization_id": str(organization_id), "category": category},
        )
        return mapping_to_dict(mapping)

    async def list_mappings(self, organization_id: UUID) -> list[dict[str, Any]]:
        mappings = await xero_account_mapping_crud.get_by_organization(self.db, organization_id)
        return [mapping_to_dict(m) for m in mappings]

    async def delete_mapping(self, organization_id: UUID, mapping_id: UUID) -> None:
        mapping = await xero_account_mapping_crud.find_one(
            self.db, id=mapping_id, organization_id=organization_id
        )
        if mapping is None:
            raise NotFoundError(
                f"Account mapping {mapping_id} not found",
                resource="XeroAccountMapping",
                resource_id=mapping_id,
            )
        await xero_account_mapping_crud.delete_by_id(self.db, mapping_id)
