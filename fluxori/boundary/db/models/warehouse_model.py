"""
Warehouse ORM model.

Physical or virtual stock locations. Exactly one warehouse per
organization is flagged as the default; WarehouseCRUD.set_as_default
keeps that true.

Dependencies: sqlalchemy, fluxori.boundary.db.base
System role: Stock location persistence
"""

import enum
import uuid

from sqlalchemy import JSON, Boolean, Enum, ForeignKey, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from fluxori.boundary.db.base import Base, UUIDMixin, TimestampMixin


class WarehouseStatus(str, enum.Enum):
    """Warehouse lifecycle states."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    ARCHIVED = "archived"


class WarehouseModel(Base, UUIDMixin, TimestampMixin):
    """
    Warehouse ORM model.

    Attributes:
        organization_id: Owning tenant
        name: Display name
        code: Short code, unique within the organization
        description: Optional notes
        is_default: Receives new inventory items by default
        status: Lifecycle state
        address: JSON postal address
        contact: JSON contact person details
        settings: JSON flags; allow_negative_inventory permits on_hand < 0
    """

    __tablename__ = "warehouses"
    __table_args__ = (
        UniqueConstraint("organization_id", "code", name="uq_warehouse_org_code"),
    )

    organization_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    code: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[str | None] = mapped_column(String(2000), nullable=True)
    is_default: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    status: Mapped[WarehouseStatus] = mapped_column(
        Enum(WarehouseStatus, native_enum=False),
        nullable=False,
        default=WarehouseStatus.ACTIVE,
    )
    address: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    contact: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    settings: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)

    @property
    def allows_negative_inventory(self) -> bool:
        return bool((self.settings or {}).get("allow_negative_inventory", False))
