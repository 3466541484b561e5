"""
Stock alert ORM model.

Alerts are raised by the low-stock check and closed by a user
(resolved or ignored). At most one active alert of each type exists per
item and warehouse.

Dependencies: sqlalchemy, fluxori.boundary.db.base
System role: Inventory alert persistence
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import JSON, DateTime, Enum, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from fluxori.boundary.db.base import Base, UUIDMixin, TimestampMixin


class AlertType(str, enum.Enum):
    LOW_STOCK = "low_stock"
    OUT_OF_STOCK = "out_of_stock"
    REORDER_POINT = "reorder_point"
    OVERSTOCK = "overstock"


class AlertStatus(str, enum.Enum):
    ACTIVE = "active"
    RESOLVED = "resolved"
    IGNORED = "ignored"


class AlertPriority(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class StockAlertModel(Base, UUIDMixin, TimestampMixin):
    """Stock alert ORM model."""

    __tablename__ = "stock_alerts"

    organization_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    inventory_item_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("inventory_items.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    warehouse_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("warehouses.id", ondelete="CASCADE"),
        nullable=True,
    )
    type: Mapped[AlertType] = mapped_column(Enum(AlertType, native_enum=False), nullable=False)
    status: Mapped[AlertStatus] = mapped_column(
        Enum(AlertStatus, native_enum=False),
        nullable=False,
        default=AlertStatus.ACTIVE,
    )
    priority: Mapped[AlertPriority] = mapped_column(
        Enum(AlertPriority, native_enum=False),
        nullable=False,
        default=AlertPriority.MEDIUM,
    )
    message: Mapped[str] = mapped_column(String(1000), nullable=False)
    data: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    resolved_by: Mapped[uuid.UUID | None] = mapped_column(Uuid(as_uuid=True), nullable=True)
    resolved_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
