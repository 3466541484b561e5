"""
Organization ORM models.

Organizations are the tenant boundary: products, warehouses, inventory,
customers and Xero connections all belong to exactly one organization.

Dependencies: sqlalchemy, fluxori.boundary.db.base
System role: Tenant persistence
"""

import enum
import uuid

from sqlalchemy import JSON, Boolean, Enum, ForeignKey, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from fluxori.boundary.db.base import Base, UUIDMixin, TimestampMixin


class OrganizationStatus(str, enum.Enum):
    """Organization lifecycle states."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"
    PENDING = "pending"


class OrganizationModel(Base, UUIDMixin, TimestampMixin):
    """
    Organization ORM model.

    Attributes:
        name: Display name
        slug: URL-safe identifier (unique across the platform)
        status: Lifecycle state
        type: Free-form classification (merchant, agency, ...)
        owner_id: User who created the organization
        settings: JSON bag of tenant preferences
    """

    __tablename__ = "organizations"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    status: Mapped[OrganizationStatus] = mapped_column(
        Enum(OrganizationStatus, native_enum=False),
        nullable=False,
        default=OrganizationStatus.ACTIVE,
    )
    type: Mapped[str] = mapped_column(String(50), nullable=False, default="merchant")
    owner_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    settings: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)


class OrganizationMembershipModel(Base, UUIDMixin, TimestampMixin):
    """
    Link between a user and an organization.

    A user has at most one default membership, which selects the
    organization shown after sign-in.
    """

    __tablename__ = "organization_memberships"
    __table_args__ = (
        UniqueConstraint("user_id", "organization_id", name="uq_membership_user_org"),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    organization_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    role: Mapped[str] = mapped_column(String(50), nullable=False, default="member")
    is_default: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
