"""
Product catalog ORM models.

Dependencies: sqlalchemy, fluxori.boundary.db.base
System role: Product catalog persistence
"""

import enum
import uuid

from sqlalchemy import JSON, Enum, ForeignKey, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from fluxori.boundary.db.base import Base, UUIDMixin, TimestampMixin


class ProductStatus(str, enum.Enum):
    """Catalog visibility states."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    DRAFT = "draft"
    ARCHIVED = "archived"
    DISCONTINUED = "discontinued"


class ProductType(str, enum.Enum):
    """Product structure."""

    SIMPLE = "simple"
    VARIABLE = "variable"
    GROUPED = "grouped"
    BUNDLE = "bundle"


class ProductModel(Base, UUIDMixin, TimestampMixin):
    """
    Product ORM model.

    SKU and slug are unique within an organization. Prices are kept as a
    JSON object ({"base": 10.0, "sale": 8.5, "currency": "USD"}) since the
    shape varies per channel.
    """

    __tablename__ = "products"
    __table_args__ = (
        UniqueConstraint("organization_id", "sku", name="uq_product_org_sku"),
        UniqueConstraint("organization_id", "slug", name="uq_product_org_slug"),
    )

    organization_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    slug: Mapped[str] = mapped_column(String(500), nullable=False)
    sku: Mapped[str] = mapped_column(String(120), nullable=False)
    barcode: Mapped[str | None] = mapped_column(String(120), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[ProductStatus] = mapped_column(
        Enum(ProductStatus, native_enum=False),
        nullable=False,
        default=ProductStatus.DRAFT,
    )
    type: Mapped[ProductType] = mapped_column(
        Enum(ProductType, native_enum=False),
        nullable=False,
        default=ProductType.SIMPLE,
    )
    prices: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    attributes: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)


class ProductVariantModel(Base, UUIDMixin, TimestampMixin):
    """Sellable variant of a variable product (size, colour, ...)."""

    __tablename__ = "product_variants"

    product_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    sku: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    status: Mapped[ProductStatus] = mapped_column(
        Enum(ProductStatus, native_enum=False),
        nullable=False,
        default=ProductStatus.ACTIVE,
    )
    prices: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    attributes: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
