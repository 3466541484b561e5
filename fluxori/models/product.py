"""
Product domain models and schemas.

Request/response schemas for product catalog operations.

Dependencies: pydantic
System role: Product API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from fluxori.boundary.db.models.product_model import ProductStatus, ProductType


class CreateProductRequest(BaseModel):
    """Request schema for creating a product."""

    title: str = Field(..., min_length=1, max_length=500)
    sku: str = Field(..., min_length=1, max_length=100)
    slug: str | None = Field(None, max_length=500, description="Derived from the title when omitted")
    barcode: str | None = Field(None, max_length=100)
    description: str | None = None
    status: ProductStatus = ProductStatus.DRAFT
    type: ProductType = ProductType.SIMPLE
    prices: dict = Field(default_factory=dict, description="Price amounts keyed by currency")
    attributes: dict = Field(default_factory=dict)


class UpdateProductRequest(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=500)
    sku: str | None = Field(None, min_length=1, max_length=100)
    slug: str | None = Field(None, min_length=1, max_length=500)
    barcode: str | None = None
    description: str | None = None
    status: ProductStatus | None = None
    type: ProductType | None = None
    prices: dict | None = None
    attributes: dict | None = None


class ProductResponse(BaseModel):
    """Response schema for product operations."""

    id: uuid.UUID
    organization_id: uuid.UUID
    title: str
    slug: str
    sku: str
    barcode: str | None
    description: str | None
    status: ProductStatus
    type: ProductType
    prices: dict
    attributes: dict
    created_at: datetime
    updated_at: datetime


class CreateVariantRequest(BaseModel):
    sku: str = Field(..., min_length=1, max_length=100)
    title: str = Field(..., min_length=1, max_length=500)
    prices: dict = Field(default_factory=dict)
    attributes: dict = Field(default_factory=dict)


class VariantResponse(BaseModel):
    id: uuid.UUID
    product_id: uuid.UUID
    sku: str
    title: str
    status: ProductStatus
    prices: dict
    attributes: dict
    created_at: datetime
