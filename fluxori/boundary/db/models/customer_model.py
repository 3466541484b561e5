"""
Customer ORM model.

Fluxori-side customer record. xero_contact_id is filled in once the
customer has been pushed to Xero as a contact.

Dependencies: sqlalchemy, fluxori.boundary.db.base
System role: Customer persistence for accounting sync
"""

import uuid

from sqlalchemy import JSON, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from fluxori.boundary.db.base import Base, UUIDMixin, TimestampMixin


class CustomerModel(Base, UUIDMixin, TimestampMixin):
    """Customer ORM model."""

    __tablename__ = "customers"

    organization_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    company_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    contact_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    address: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    xero_contact_id: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)

    @property
    def display_name(self) -> str:
        return self.company_name or self.contact_name or self.email or str(self.id)
