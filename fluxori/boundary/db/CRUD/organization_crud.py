"""
Organization and membership CRUD operations.

Dependencies: sqlalchemy, fluxori.boundary.db.models
System role: Tenant persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from fluxori.boundary.db.CRUD.base_crud import BaseCRUD
from fluxori.boundary.db.models.organization_model import (
    OrganizationMembershipModel,
    OrganizationModel,
    OrganizationStatus,
)
from fluxori.core.exceptions import NotFoundError


class OrganizationCRUD(BaseCRUD[OrganizationModel]):
    """CRUD operations for OrganizationModel."""

    def __init__(self) -> None:
        """Initialize OrganizationCRUD with OrganizationModel."""
        super().__init__(OrganizationModel)

    async def get_by_slug(self, session: AsyncSession, slug: str) -> OrganizationModel | None:
        """Retrieve organization by its unique slug."""
        return await self.find_one(session, slug=slug)

    async def search(
        self,
        session: AsyncSession,
        query: str,
        limit: int | None = 50,
        offset: int = 0,
    ) -> Sequence[OrganizationModel]:
        """
        Case-insensitive substring search over name and slug.

        Args:
            session: Async database session
            query: Text to look for
            limit: Maximum number of results
            offset: Number of results to skip

        Returns:
            Matching organizations ordered by name
        """
        pattern = f"%{query.strip()}%"
        stmt = (
            select(OrganizationModel)
            .where(or_(OrganizationModel.name.ilike(pattern), OrganizationModel.slug.ilike(pattern)))
            .order_by(OrganizationModel.name)
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        async with self._guard("search"):
            result = await session.execute(stmt)
        return result.scalars().all()

    async def update_status(
        self,
        session: AsyncSession,
        id: UUID,
        status: OrganizationStatus,
    ) -> OrganizationModel:
        """Set lifecycle status; raises NotFoundError for unknown ids."""
        return await self.update_by_id_or_fail(session, id, status=status)


class MembershipCRUD(BaseCRUD[OrganizationMembershipModel]):
    """CRUD operations for OrganizationMembershipModel."""

    def __init__(self) -> None:
        """Initialize MembershipCRUD with OrganizationMembershipModel."""
        super().__init__(OrganizationMembershipModel)

    async def get_for_user(
        self,
        session: AsyncSession,
        user_id: UUID,
    ) -> Sequence[OrganizationMembershipModel]:
        """All memberships of a user, default first."""
        stmt = (
            select(OrganizationMembershipModel)
            .where(OrganizationMembershipModel.user_id == user_id)
            .order_by(
                OrganizationMembershipModel.is_default.desc(),
                OrganizationMembershipModel.created_at,
            )
        )
        async with self._guard("get_for_user"):
            result = await session.execute(stmt)
        return result.scalars().all()

    async def get_membership(
        self,
        session: AsyncSession,
        user_id: UUID,
        organization_id: UUID,
    ) -> OrganizationMembershipModel | None:
        return await self.find_one(session, user_id=user_id, organization_id=organization_id)

    async def set_as_default(
        self,
        session: AsyncSession,
        user_id: UUID,
        membership_id: UUID,
    ) -> OrganizationMembershipModel:
        """
        Make one membership the user's default and clear the flag on the rest.

        Args:
            session: Async database session
            user_id: Owner of the memberships
            membership_id: Membership to flag

        Returns:
            The updated membership

        Raises:
            NotFoundError: If the membership does not belong to the user
        """
        membership = await self.find_one(session, id=membership_id, user_id=user_id)
        if membership is None:
            raise NotFoundError(
                f"Membership {membership_id} not found for user {user_id}",
                resource="OrganizationMembership",
                resource_id=membership_id,
            )

        clear_stmt = (
            update(OrganizationMembershipModel)
            .where(
                OrganizationMembershipModel.user_id == user_id,
                OrganizationMembershipModel.id != membership_id,
            )
            .values(is_default=False)
            .execution_options(synchronize_session="fetch")
        )
        async with self._guard("set_as_default"):
            await session.execute(clear_stmt)
        return await self.update_by_id_or_fail(session, membership_id, is_default=True)


organization_crud = OrganizationCRUD()
membership_crud = MembershipCRUD()
