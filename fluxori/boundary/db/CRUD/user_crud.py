"""
User CRUD operations.

Dependencies: sqlalchemy, fluxori.boundary.db.models
System role: User persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from fluxori.boundary.db.CRUD.base_crud import BaseCRUD
from fluxori.boundary.db.models.organization_model import OrganizationMembershipModel
from fluxori.boundary.db.models.user_model import UserModel


class UserCRUD(BaseCRUD[UserModel]):
    """CRUD operations for UserModel."""

    def __init__(self) -> None:
        """Initialize UserCRUD with UserModel."""
        super().__init__(UserModel)

    async def get_by_email(self, session: AsyncSession, email: str) -> UserModel | None:
        """Case-insensitive lookup by email."""
        stmt = select(UserModel).where(func.lower(UserModel.email) == email.strip().lower())
        async with self._guard("get_by_email"):
            result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_organization(
        self,
        session: AsyncSession,
        organization_id: UUID,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[UserModel]:
        """
        Retrieve members of an organization.

        Args:
            session: Async database session
            organization_id: Organization UUID
            limit: Maximum number of users to return
            offset: Number of users to skip

        Returns:
            Sequence of UserModel rows ordered by email
        """
        stmt = (
            select(UserModel)
            .join(OrganizationMembershipModel, OrganizationMembershipModel.user_id == UserModel.id)
            .where(OrganizationMembershipModel.organization_id == organization_id)
            .order_by(UserModel.email)
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        async with self._guard("get_by_organization"):
            result = await session.execute(stmt)
        return result.scalars().all()


user_crud = UserCRUD()
