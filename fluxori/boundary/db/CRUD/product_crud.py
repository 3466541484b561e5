"""
Product and variant CRUD operations.

Dependencies: sqlalchemy, fluxori.boundary.db.models
System role: Catalog persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from fluxori.boundary.db.CRUD.base_crud import BaseCRUD
from fluxori.boundary.db.models.product_model import (
    ProductModel,
    ProductStatus,
    ProductVariantModel,
)


class ProductCRUD(BaseCRUD[ProductModel]):
    """CRUD operations for ProductModel."""

    def __init__(self) -> None:
        """Initialize ProductCRUD with ProductModel."""
        super().__init__(ProductModel)

    async def get_by_sku(
        self, session: AsyncSession, organization_id: UUID, sku: str
    ) -> ProductModel | None:
        return await self.find_one(session, organization_id=organization_id, sku=sku)

    async def get_by_slug(
        self, session: AsyncSession, organization_id: UUID, slug: str
    ) -> ProductModel | None:
        return await self.find_one(session, organization_id=organization_id, slug=slug)

    async def get_by_organization(
        self,
        session: AsyncSession,
        organization_id: UUID,
        status: ProductStatus | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[ProductModel]:
        """List products of an organization, optionally filtered by status."""
        filters = {"organization_id": organization_id}
        if status is not None:
            filters["status"] = status
        return await self.find(session, limit=limit, offset=offset, order_by="title", **filters)


class ProductVariantCRUD(BaseCRUD[ProductVariantModel]):
    """CRUD operations for ProductVariantModel."""

    def __init__(self) -> None:
        """Initialize ProductVariantCRUD with ProductVariantModel."""
        super().__init__(ProductVariantModel)

    async def get_by_product(
        self, session: AsyncSession, product_id: UUID
    ) -> Sequence[ProductVariantModel]:
        return await self.find(session, product_id=product_id)

    async def get_by_sku(self, session: AsyncSession, sku: str) -> ProductVariantModel | None:
        return await self.find_one(session, sku=sku)


product_crud = ProductCRUD()
product_variant_crud = ProductVariantCRUD()
