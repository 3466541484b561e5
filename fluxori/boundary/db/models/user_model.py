"""
User ORM model.

Represents a person who signs in to Fluxori. Organization access is
granted through OrganizationMembershipModel rows.

Dependencies: sqlalchemy, fluxori.boundary.db.base
System role: Identity persistence
"""

import enum
from datetime import datetime

from sqlalchemy import DateTime, Enum, String
from sqlalchemy.orm import Mapped, mapped_column

from fluxori.boundary.db.base import Base, UUIDMixin, TimestampMixin


class UserStatus(str, enum.Enum):
    """Account lifecycle states."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"
    LOCKED = "locked"


class UserModel(Base, UUIDMixin, TimestampMixin):
    """
    User ORM model.

    Attributes:
        email: Login email, stored lower-cased (unique)
        first_name: Given name
        last_name: Family name
        status: Account state enum
        role: Platform role (user, admin)
        last_login_at: Last successful sign-in (UTC)
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True, index=True)
    first_name: Mapped[str | None] = mapped_column(String(120), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(120), nullable=True)
    status: Mapped[UserStatus] = mapped_column(
        Enum(UserStatus, native_enum=False),
        nullable=False,
        default=UserStatus.ACTIVE,
    )
    role: Mapped[str] = mapped_column(String(50), nullable=False, default="user")
    last_login_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
