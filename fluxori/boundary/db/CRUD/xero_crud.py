"""
Xero connector CRUD operations.

Dependencies: sqlalchemy, fluxori.boundary.db.models
System role: Accounting connector persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from fluxori.boundary.db.base import utcnow
from fluxori.boundary.db.CRUD.base_crud import BaseCRUD
from fluxori.boundary.db.models.xero_model import (
    SyncState,
    XeroAccountMappingModel,
    XeroConfigModel,
    XeroConnectionModel,
    XeroSyncStatusModel,
)


class XeroConnectionCRUD(BaseCRUD[XeroConnectionModel]):
    """CRUD operations for XeroConnectionModel."""

    def __init__(self) -> None:
        """Initialize XeroConnectionCRUD with XeroConnectionModel."""
        super().__init__(XeroConnectionModel)

    async def get_active(
        self,
        session: AsyncSession,
        user_id: UUID,
        organization_id: UUID,
    ) -> XeroConnectionModel | None:
        """Most recently updated active connection for a user in an organization."""
        return await self.find_one(
            session,
            order_by="-updated_at",
            user_id=user_id,
            organization_id=organization_id,
            is_active=True,
        )

    async def get_by_tenant(
        self,
        session: AsyncSession,
        organization_id: UUID,
        tenant_id: str,
    ) -> XeroConnectionModel | None:
        return await self.find_one(session, organization_id=organization_id, tenant_id=tenant_id)

    async def deactivate(
        self,
        session: AsyncSession,
        user_id: UUID,
        organization_id: UUID,
    ) -> int:
        """
        Mark every active connection of the user in the organization inactive.

        Returns:
            int: Number of connections deactivated
        """
        stmt = (
            update(XeroConnectionModel)
            .where(
                XeroConnectionModel.user_id == user_id,
                XeroConnectionModel.organization_id == organization_id,
                XeroConnectionModel.is_active.is_(True),
            )
            .values(is_active=False)
            .execution_options(synchronize_session="fetch")
        )
        async with self._guard("deactivate"):
            result = await session.execute(stmt)
        return result.rowcount


class XeroConfigCRUD(BaseCRUD[XeroConfigModel]):
    """CRUD operations for XeroConfigModel."""

    def __init__(self) -> None:
        """Initialize XeroConfigCRUD with XeroConfigModel."""
        super().__init__(XeroConfigModel)

    async def get_by_organization(
        self, session: AsyncSession, organization_id: UUID
    ) -> XeroConfigModel | None:
        return await self.find_one(session, organization_id=organization_id)

    async def upsert(
        self,
        session: AsyncSession,
        organization_id: UUID,
        **fields,
    ) -> XeroConfigModel:
        """Create the organization's config or update the existing row."""
        existing = await self.get_by_organization(session, organization_id)
        if existing is None:
            return await self.create(session, organization_id=organization_id, **fields)
        return await self.update_by_id_or_fail(session, existing.id, **fields)


class XeroAccountMappingCRUD(BaseCRUD[XeroAccountMappingModel]):
    """CRUD operations for XeroAccountMappingModel."""

    def __init__(self) -> None:
        """Initialize XeroAccountMappingCRUD with XeroAccountMappingModel."""
        super().__init__(XeroAccountMappingModel)

    async def get_by_organization(
        self, session: AsyncSession, organization_id: UUID
    ) -> Sequence[XeroAccountMappingModel]:
        return await self.find(session, order_by="category", organization_id=organization_id)

    async def get_by_category(
        self, session: AsyncSession, organization_id: UUID, category: str
    ) -> XeroAccountMappingModel | None:
        return await self.find_one(session, organization_id=organization_id, category=category)


class XeroSyncStatusCRUD(BaseCRUD[XeroSyncStatusModel]):
    """
    CRUD operations for XeroSyncStatusModel.

    The progress/complete/fail helpers only touch rows that are still
    running and report whether a row changed.
    """

    def __init__(self) -> None:
        """Initialize XeroSyncStatusCRUD with XeroSyncStatusModel."""
        super().__init__(XeroSyncStatusModel)

    async def get_recent(
        self,
        session: AsyncSession,
        user_id: UUID,
        limit: int = 10,
    ) -> Sequence[XeroSyncStatusModel]:
        return await self.find(session, limit=limit, order_by="-started_at", user_id=user_id)

    async def _update_running(self, session: AsyncSession, id: UUID, operation: str, **values) -> bool:
        stmt = (
            update(XeroSyncStatusModel)
            .where(
                XeroSyncStatusModel.id == id,
                XeroSyncStatusModel.status == SyncState.RUNNING,
            )
            .values(**values)
            .execution_options(synchronize_session="fetch")
        )
        async with self._guard(operation):
            result = await session.execute(stmt)
        return result.rowcount > 0

    async def update_progress(
        self,
        session: AsyncSession,
        id: UUID,
        progress: int,
        total_items: int,
        processed_items: int,
    ) -> bool:
        progress = max(0, min(100, progress))
        return await self._update_running(
            session,
            id,
            "update_progress",
            progress=progress,
            total_items=total_items,
            processed_items=processed_items,
        )

    async def complete(self, session: AsyncSession, id: UUID) -> bool:
        return await self._update_running(
            session, id, "complete", status=SyncState.COMPLETED, progress=100, completed_at=utcnow()
        )

    async def fail(self, session: AsyncSession, id: UUID, error: str) -> bool:
        return await self._update_running(
            session, id, "fail", status=SyncState.FAILED, error=error, completed_at=utcnow()
        )


xero_connection_crud = XeroConnectionCRUD()
xero_config_crud = XeroConfigCRUD()
xero_account_mapping_crud = XeroAccountMappingCRUD()
xero_sync_status_crud = XeroSyncStatusCRUD()
