"""
Product API endpoints.

Routes:
- POST /organizations/{org_id}/products - Create product
- GET /organizations/{org_id}/products - List products
- GET /products/{id} - Get product
- PUT /products/{id} - Update product
- DELETE /products/{id} - Delete product
- POST /products/{id}/variants - Add variant
- GET /products/{id}/variants - List variants

Dependencies: fluxori.application.services, fluxori.models
System role: Product catalog HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from fluxori.api.deps import get_product_service
from fluxori.api.error_handling import handle_service_errors
from fluxori.application.services import ProductService
from fluxori.boundary.db.models.product_model import ProductStatus
from fluxori.core.exceptions import InvalidInputError
from fluxori.models.common import ERROR_RESPONSES
from fluxori.models.product import (
    CreateProductRequest,
    CreateVariantRequest,
    ProductResponse,
    UpdateProductRequest,
    VariantResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["products"], responses=ERROR_RESPONSES)


@router.post("/organizations/{organization_id}/products", response_model=ProductResponse, status_code=201)
@handle_service_errors
async def create_product(
    organization_id: UUID,
    request: CreateProductRequest,
    product_service: ProductService = Depends(get_product_service),
) -> ProductResponse:
    """
    Create a product in the organization's catalog.

    Raises:
        HTTPException(404): Organization not found
        HTTPException(409): SKU or slug already used in the organization
    """
    logger.info(
        "Creating product",
        extra={"organization_id": str(organization_id), "sku": request.sku},
    )
    product = await product_service.create_product(organization_id, **request.model_dump())
    return ProductResponse(**product)


@router.get("/organizations/{organization_id}/products", response_model=list[ProductResponse])
@handle_service_errors
async def list_products(
    organization_id: UUID,
    status: ProductStatus | None = None,
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    product_service: ProductService = Depends(get_product_service),
) -> list[ProductResponse]:
    products = await product_service.list_products(organization_id, status=status, limit=limit, offset=offset)
    return [ProductResponse(**p) for p in products]


@router.get("/products/{product_id}", response_model=ProductResponse)
@handle_service_errors
async def get_product(
    product_id: UUID,
    product_service: ProductService = Depends(get_product_service),
) -> ProductResponse:
    return ProductResponse(**await product_service.get_product(product_id))


@router.put("/products/{product_id}", response_model=ProductResponse)
@handle_service_errors
async def update_product(
    product_id: UUID,
    request: UpdateProductRequest,
    product_service: ProductService = Depends(get_product_service),
) -> ProductResponse:
    fields = request.model_dump(exclude_none=True)
    if not fields:
        raise InvalidInputError("At least one field must be provided for update")
    return ProductResponse(**await product_service.update_product(product_id, **fields))


@router.delete("/products/{product_id}", status_code=204)
@handle_service_errors
async def delete_product(
    product_id: UUID,
    product_service: ProductService = Depends(get_product_service),
) -> None:
    await product_service.delete_product(product_id)


@router.post("/products/{product_id}/variants", response_model=VariantResponse, status_code=201)
@handle_service_errors
async def add_variant(
    product_id: UUID,
    request: CreateVariantRequest,
    product_service: ProductService = Depends(get_product_service),
) -> VariantResponse:
    """Add a variant; a simple product becomes variable."""
    variant = await product_service.add_variant(product_id, **request.model_dump())
    return VariantResponse(**variant)


@router.get("/products/{product_id}/variants", response_model=list[VariantResponse])
@handle_service_errors
async def list_variants(
    product_id: UUID,
    product_service: ProductService = Depends(get_product_service),
) -> list[VariantResponse]:
    return [VariantResponse(**v) for v in await product_service.list_variants(product_id)]
