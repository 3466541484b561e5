"""
Inventory domain models and schemas.

Request/response schemas for inventory items, per-warehouse levels and
stock movements.

Dependencies: pydantic
System role: Inventory API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field, model_validator

from fluxori.boundary.db.models.inventory_model import (
    InventoryItemStatus,
    ReferenceType,
    TrackingMethod,
    TransactionType,
)


class CreateInventoryItemRequest(BaseModel):
    """Request schema for creating an inventory item."""

    sku: str = Field(..., min_length=1, max_length=100)
    name: str = Field(..., min_length=1, max_length=500)
    product_id: uuid.UUID | None = None
    product_variant_id: uuid.UUID | None = None
    barcode: str | None = Field(None, max_length=100)
    default_warehouse_id: uuid.UUID | None = Field(
        None, description="Falls back to the organization's default warehouse"
    )
    reorder_point: int = Field(default=0, ge=0)
    reorder_quantity: int = Field(default=0, ge=0)
    lead_time_days: int | None = Field(None, ge=0)
    cost: float = Field(default=0.0, ge=0)
    cost_currency: str = Field(default="USD", min_length=3, max_length=3)
    tracking_method: TrackingMethod = TrackingMethod.FIFO


class UpdateInventoryItemRequest(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=500)
    barcode: str | None = None
    status: InventoryItemStatus | None = None
    default_warehouse_id: uuid.UUID | None = None
    reorder_point: int | None = Field(None, ge=0)
    reorder_quantity: int | None = Field(None, ge=0)
    lead_time_days: int | None = Field(None, ge=0)
    cost: float | None = Field(None, ge=0)
    cost_currency: str | None = Field(None, min_length=3, max_length=3)
    tracking_method: TrackingMethod | None = None


class InventoryItemResponse(BaseModel):
    """Response schema for inventory item operations."""

    id: uuid.UUID
    organization_id: uuid.UUID
    product_id: uuid.UUID | None
    product_variant_id: uuid.UUID | None
    sku: str
    name: str
    barcode: str | None
    status: InventoryItemStatus
    default_warehouse_id: uuid.UUID | None
    reorder_point: int
    reorder_quantity: int
    lead_time_days: int | None
    cost: float
    cost_currency: str
    tracking_method: TrackingMethod
    created_at: datetime
    updated_at: datetime


class InventoryLevelResponse(BaseModel):
    id: uuid.UUID
    inventory_item_id: uuid.UUID
    warehouse_id: uuid.UUID
    on_hand: int
    available: int
    reserved: int
    incoming: int
    outgoing: int
    reorder_point: int | None
    last_counted_at: datetime | None
    updated_at: datetime


class InventoryTransactionResponse(BaseModel):
    id: uuid.UUID
    inventory_item_id: uuid.UUID
    warehouse_id: uuid.UUID
    type: TransactionType
    quantity: int
    previous_quantity: int
    new_quantity: int
    reference_type: ReferenceType | None
    reference_id: str | None
    user_id: uuid.UUID | None
    notes: str | None
    created_at: datetime


class AdjustStockRequest(BaseModel):
    """Signed on-hand adjustment in one warehouse."""

    warehouse_id: uuid.UUID
    quantity: int = Field(description="Positive adds stock, negative removes it; zero is rejected")
    reason: str = Field(..., min_length=1, max_length=500)
    user_id: uuid.UUID | None = None


class TransferStockRequest(BaseModel):
    from_warehouse_id: uuid.UUID
    to_warehouse_id: uuid.UUID
    quantity: int = Field(..., gt=0)
    user_id: uuid.UUID | None = None
    notes: str | None = None

    @model_validator(mode="after")
    def _different_warehouses(self) -> "TransferStockRequest":
        if self.from_warehouse_id == self.to_warehouse_id:
            raise ValueError("Source and destination warehouses must be different")
        return self


class ReservationRequest(BaseModel):
    """Reserve or release stock against an external reference."""

    warehouse_id: uuid.UUID
    quantity: int = Field(..., gt=0)
    reference_id: str | None = Field(None, description="Sales order or cart identifier")
    user_id: uuid.UUID | None = None
    notes: str | None = None


class WarehouseTotals(BaseModel):
    items: int = Field(description="Levels with stock on hand")
    value: float


class InventorySummaryResponse(BaseModel):
    organization_id: uuid.UUID
    warehouse_id: uuid.UUID | None
    total_items: int
    total_value: float
    low_stock_items: int
    out_of_stock_items: int
    by_warehouse: dict[str, WarehouseTotals] | None = Field(
        None, description="Keyed by warehouse id; omitted when filtered to one warehouse"
    )
