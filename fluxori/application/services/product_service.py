"""
Product service orchestrator.

Catalog products and their variants. SKUs and slugs are unique per
organization.

Dependencies: fluxori.boundary.db.CRUD, fluxori.core
System role: Product catalog use case orchestration
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from fluxori.boundary.db.CRUD.organization_crud import organization_crud
from fluxori.boundary.db.CRUD.product_crud import product_crud, product_variant_crud
from fluxori.boundary.db.models.product_model import (
    ProductModel,
    ProductStatus,
    ProductType,
    ProductVariantModel,
)
from fluxori.core.exceptions import ConflictError, InvalidInputError, NotFoundError
from fluxori.core.text import slugify

logger = logging.getLogger(__name__)


def product_to_dict(product: ProductModel) -> dict[str, Any]:
    return {
        "id": product.id,
        "organization_id": product.organization_id,
        "title": product.title,
        "slug": product.slug,
        "sku": product.sku,
        "barcode": product.barcode,
        "description": product.description,
        "status": product.status,
        "type": product.type,
        "prices": product.prices or {},
        "attributes": product.attributes or {},
        "created_at": product.created_at,
        "updated_at": product.updated_at,
    }


def variant_to_dict(variant: ProductVariantModel) -> dict[str, Any]:
    return {
        "id": variant.id,
        "product_id": variant.product_id,
        "sku": variant.sku,
        "title": variant.title,
        "status": variant.status,
        "prices": variant.prices or {},
        "attributes": variant.attributes or {},
        "created_at": variant.created_at,
    }


class ProductService:
    """Product service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize product service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def create_product(
        self,
        organization_id: UUID,
        title: str,
        sku: str,
        slug: str | None = None,
        barcode: str | None = None,
        description: str | None = None,
        status: ProductStatus = ProductStatus.DRAFT,
        type: ProductType = ProductType.SIMPLE,
        prices: dict | None = None,
        attributes: dict | None = None,
    ) -> dict[str, Any]:
        """
        Create a product.

        Raises:
            NotFoundError: Unknown organization
            InvalidInputError: Missing title or SKU
            ConflictError: SKU or slug already used in the organization
        """
        if not title or not sku:
            raise InvalidInputError("Product title and SKU are required", field="title" if not title else "sku")

        await organization_crud.get_by_id_or_fail(self.db, organization_id)

        resolved_slug = slugify(slug or title)
        if await product_crud.get_by_sku(self.db, organization_id, sku):
            raise ConflictError(f"Product with SKU {sku} already exists", field="sku")
        if await product_crud.get_by_slug(self.db, organization_id, resolved_slug):
            raise ConflictError(f"Product with slug {resolved_slug} already exists", field="slug")

        product = await product_crud.create(
            self.db,
            organization_id=organization_id,
            title=title,
            slug=resolved_slug,
            sku=sku,
            barcode=barcode,
            description=description,
            status=status,
            type=type,
            prices=prices or {},
            attributes=attributes or {},
        )
        logger.info(
            "Product created",
            extra={"product_id": str(product.id), "organization_id": str(organization_id), "sku": sku},
        )
        return product_to_dict(product)

    async def get_product(self, product_id: UUID) -> dict[str, Any]:
        return product_to_dict(await product_crud.get_by_id_or_fail(self.db, product_id))

    async def list_products(
        self,
        organization_id: UUID,
        status: ProductStatus | None = None,
        limit: int | None = 100,
        offset: int = 0,
    ) -> list[dict[str, Any]]:
        products = await product_crud.get_by_organization(
            self.db, organization_id, status=status, limit=limit, offset=offset
        )
        return [product_to_dict(p) for p in products]

    async def update_product(self, product_id: UUID, **fields) -> dict[str, Any]:
        """
        Update a product; SKU and slug changes are checked for uniqueness.

        Raises:
            NotFoundError: Unknown product
            ConflictError: SKU or slug collides with another product
        """
        product = await product_crud.get_by_id_or_fail(self.db, product_id)
        fields = {k: v for k, v in fields.items() if v is not None}

        if "sku" in fields and fields["sku"] != product.sku:
            if await product_crud.get_by_sku(self.db, product.organization_id, fields["sku"]):
                raise ConflictError(f"Product with SKU {fields['sku']} already exists", field="sku")
        if "slug" in fields:
            fields["slug"] = slugify(fields["slug"])
            existing = await product_crud.get_by_slug(self.db, product.organization_id, fields["slug"])
            if existing is not None and existing.id != product_id:
                raise ConflictError(f"Product with slug {fields['slug']} already exists", field="slug")

        updated = await product_crud.update_by_id_or_fail(self.db, product_id, **fields)
        return product_to_dict(updated)

    async def delete_product(self, product_id: UUID) -> None:
        if not await product_crud.delete_by_id(self.db, product_id):
            raise NotFoundError(
                f"Product {product_id} does not exist", resource="Product", resource_id=product_id
            )
        logger.info("Product deleted", extra={"product_id": str(product_id)})

    async def add_variant(
        self,
        product_id: UUID,
        sku: str,
        title: str,
        prices: dict | None = None,
        attributes: dict | None = None,
    ) -> dict[str, Any]:
        """
        Add a variant to a product; the product becomes "variable".

        Raises:
            NotFoundError: Unknown product
            ConflictError: Variant SKU already exists
        """
        product = await product_crud.get_by_id_or_fail(self.db, product_id)
        if await product_variant_crud.get_by_sku(self.db, sku):
            raise ConflictError(f"Product variant with SKU {sku} already exists", field="sku")

        variant = await product_variant_crud.create(
            self.db,
            product_id=product_id,
            sku=sku,
            title=title,
            status=product.status,
            prices=prices or {},
            attributes=attributes or {},
        )
        if product.type == ProductType.SIMPLE:
            await product_crud.update_by_id(self.db, product_id, type=ProductType.VARIABLE)
        return variant_to_dict(variant)

    async def list_variants(self, product_id: UUID) -> list[dict[str, Any]]:
        await product_crud.get_by_id_or_fail(self.db, product_id)
        variants = await product_variant_crud.get_by_product(self.db, product_id)
        return [variant_to_dict(v) for v in variants]
