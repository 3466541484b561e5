"""
Inventory ORM models.

InventoryItemModel is the stock-keeping record for a product or variant.
InventoryLevelModel holds quantities per (item, warehouse). Every quantity
change writes an InventoryTransactionModel row.

Quantity relationships maintained by InventoryService:
    available = on_hand - reserved

Dependencies: sqlalchemy, fluxori.boundary.db.base
System role: Stock persistence
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import (
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column

from fluxori.boundary.db.base import Base, UUIDMixin, TimestampMixin


class InventoryItemStatus(str, enum.Enum):
    """Derived stock status of an item across all warehouses."""

    IN_STOCK = "in_stock"
    LOW_STOCK = "low_stock"
    OUT_OF_STOCK = "out_of_stock"
    DISCONTINUED = "discontinued"
    BACKORDERED = "backordered"


class TrackingMethod(str, enum.Enum):
    """Cost flow assumption."""

    FIFO = "fifo"
    LIFO = "lifo"
    FEFO = "fefo"
    STANDARD = "standard"


class TransactionType(str, enum.Enum):
    """Kinds of stock movement."""

    PURCHASE = "purchase"
    SALE = "sale"
    RETURN = "return"
    ADJUSTMENT = "adjustment"
    TRANSFER = "transfer"
    COUNT = "count"
    RESERVE = "reserve"
    UNRESERVE = "unreserve"


class ReferenceType(str, enum.Enum):
    """Documents a transaction can point back to."""

    PURCHASE_ORDER = "purchase_order"
    SALES_ORDER = "sales_order"
    TRANSFER = "transfer"
    ADJUSTMENT = "adjustment"
    STOCK_COUNT = "stock_count"


class InventoryItemModel(Base, UUIDMixin, TimestampMixin):
    """
    Inventory item ORM model.

    Attributes:
        organization_id: Owning tenant
        product_id: Catalog product
        product_variant_id: Optional variant of the product
        sku: Stock keeping unit (unique within the organization)
        name: Display name
        barcode: Optional GTIN/EAN
        status: Derived stock status
        default_warehouse_id: Warehouse that receives new stock
        reorder_point: Available quantity at or below which stock is low
        reorder_quantity: Suggested replenishment quantity
        lead_time_days: Supplier lead time
        cost: Unit cost
        cost_currency: ISO currency of cost
        tracking_method: Cost flow assumption
    """

    __tablename__ = "inventory_items"
    __table_args__ = (
        UniqueConstraint("organization_id", "sku", name="uq_inventory_item_org_sku"),
    )

    organization_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    product_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("products.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    product_variant_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("product_variants.id", ondelete="SET NULL"),
        nullable=True,
    )
    sku: Mapped[str] = mapped_column(String(120), nullable=False)
    name: Mapped[str] = mapped_column(String(500), nullable=False)
    barcode: Mapped[str | None] = mapped_column(String(120), nullable=True)
    status: Mapped[InventoryItemStatus] = mapped_column(
        Enum(InventoryItemStatus, native_enum=False),
        nullable=False,
        default=InventoryItemStatus.OUT_OF_STOCK,
    )
    default_warehouse_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("warehouses.id", ondelete="SET NULL"),
        nullable=True,
    )
    reorder_point: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    reorder_quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    lead_time_days: Mapped[int | None] = mapped_column(Integer, nullable=True)
    cost: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    cost_currency: Mapped[str] = mapped_column(String(3), nullable=False, default="USD")
    tracking_method: Mapped[TrackingMethod] = mapped_column(
        Enum(TrackingMethod, native_enum=False),
        nullable=False,
        default=TrackingMethod.FIFO,
    )


class InventoryLevelModel(Base, UUIDMixin, TimestampMixin):
    """
    Stock quantities for one item in one warehouse.

    Attributes:
        on_hand: Physically present units
        available: Units that can be sold (on_hand - reserved)
        reserved: Units held for open orders
        incoming: Units on inbound purchase orders
        outgoing: Units picked but not shipped
        minimum_level / maximum_level: Optional stocking band
        reorder_point / reorder_quantity: Per-warehouse overrides of the item values
        last_counted_at: Last physical count
    """

    __tablename__ = "inventory_levels"
    __table_args__ = (
        UniqueConstraint("inventory_item_id", "warehouse_id", name="uq_level_item_warehouse"),
    )

    inventory_item_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("inventory_items.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    warehouse_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("warehouses.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    on_hand: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    available: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    reserved: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    incoming: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    outgoing: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    minimum_level: Mapped[int | None] = mapped_column(Integer, nullable=True)
    maximum_level: Mapped[int | None] = mapped_column(Integer, nullable=True)
    reorder_point: Mapped[int | None] = mapped_column(Integer, nullable=True)
    reorder_quantity: Mapped[int | None] = mapped_column(Integer, nullable=True)
    last_counted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)


class InventoryTransactionModel(Base, UUIDMixin, TimestampMixin):
    """Append-only ledger of stock movements."""

    __tablename__ = "inventory_transactions"

    inventory_item_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("inventory_items.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    warehouse_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("warehouses.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    type: Mapped[TransactionType] = mapped_column(
        Enum(TransactionType, native_enum=False),
        nullable=False,
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    previous_quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    new_quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    reference_type: Mapped[ReferenceType | None] = mapped_column(
        Enum(ReferenceType, native_enum=False),
        nullable=True,
    )
    reference_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    cost: Mapped[float | None] = mapped_column(Float, nullable=True)
    user_id: Mapped[uuid.UUID | None] = mapped_column(Uuid(as_uuid=True), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
