"""
Xero connector ORM models.

XeroConnectionModel stores one OAuth grant per (organization, Xero tenant).
The refresh token is never stored in clear text; see
fluxori.core.token_crypto.

Dependencies: sqlalchemy, fluxori.boundary.db.base
System role: Accounting connector persistence
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column

from fluxori.boundary.db.base import Base, UUIDMixin, TimestampMixin, utcnow


class XeroInvoiceStatus(str, enum.Enum):
    """Status new invoices are created with in Xero."""

    DRAFT = "DRAFT"
    SUBMITTED = "SUBMITTED"
    AUTHORISED = "AUTHORISED"


class SyncFrequency(str, enum.Enum):
    MANUAL = "manual"
    HOURLY = "hourly"
    DAILY = "daily"


class SyncType(str, enum.Enum):
    FULL = "full"
    CONTACTS = "contacts"
    INVOICES = "invoices"
    ACCOUNTS = "accounts"


class SyncState(str, enum.Enum):
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class XeroConnectionModel(Base, UUIDMixin, TimestampMixin):
    """
    OAuth connection between a Fluxori organization and a Xero tenant.

    Attributes:
        user_id: User who authorized the connection
        organization_id: Fluxori tenant
        tenant_id: Xero tenant (organisation) id, unique per organization
        tenant_name: Xero organisation name
        access_token: Short-lived bearer token
        encrypted_refresh_token: "iv:ciphertext" produced by TokenCipher
        token_expires_at: Access token expiry (UTC)
        scopes: Granted scopes, space separated
        is_active: False once disconnected
        last_refreshed_at: Last successful token refresh
    """

    __tablename__ = "xero_connections"
    __table_args__ = (
        UniqueConstraint("organization_id", "tenant_id", name="uq_xero_connection_org_tenant"),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, index=True)
    organization_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    tenant_id: Mapped[str] = mapped_column(String(64), nullable=False)
    tenant_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    access_token: Mapped[str] = mapped_column(Text, nullable=False)
    encrypted_refresh_token: Mapped[str] = mapped_column(Text, nullable=False)
    token_expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    scopes: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    last_refreshed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)


class XeroConfigModel(Base, UUIDMixin, TimestampMixin):
    """Per-organization invoice and sync preferences."""

    __tablename__ = "xero_configs"

    organization_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    default_sales_account_code: Mapped[str] = mapped_column(String(20), nullable=False, default="200")
    default_tax_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    invoice_prefix: Mapped[str | None] = mapped_column(String(20), nullable=True)
    invoice_status: Mapped[XeroInvoiceStatus] = mapped_column(
        Enum(XeroInvoiceStatus, native_enum=False),
        nullable=False,
        default=XeroInvoiceStatus.DRAFT,
    )
    branding_theme_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    auto_sync_contacts: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    auto_sync_invoices: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    sync_frequency: Mapped[SyncFrequency] = mapped_column(
        Enum(SyncFrequency, native_enum=False),
        nullable=False,
        default=SyncFrequency.MANUAL,
    )


class XeroAccountMappingModel(Base, UUIDMixin, TimestampMixin):
    """
    Maps a Fluxori revenue category to a Xero account code.

    Invoice line items whose category matches use the mapped account and
    tax type instead of the configured defaults.
    """

    __tablename__ = "xero_account_mappings"
    __table_args__ = (
        UniqueConstraint("organization_id", "category", name="uq_xero_mapping_org_category"),
    )

    organization_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    xero_account_code: Mapped[str] = mapped_column(String(20), nullable=False)
    xero_account_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    tax_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)


class XeroSyncStatusModel(Base, UUIDMixin, TimestampMixin):
    """
    Progress record for one sync run.

    Attributes:
        sync_type: What is being synced
        status: running until completed or failed
        progress: Percentage complete (0-100)
        total_items / processed_items: Counters driving progress
        error: Failure reason when status is failed
    """

    __tablename__ = "xero_sync_statuses"

    organization_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, index=True)
    sync_type: Mapped[SyncType] = mapped_column(Enum(SyncType, native_enum=False), nullable=False)
    status: Mapped[SyncState] = mapped_column(
        Enum(SyncState, native_enum=False),
        nullable=False,
        default=SyncState.RUNNING,
    )
    progress: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_items: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    processed_items: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    error: Mapped[str | None] = mapped_column(Text, nullable=True)
    started_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
