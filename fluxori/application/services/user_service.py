"""
User service orchestrator.

Dependencies: fluxori.boundary.db.CRUD
System role: User use case orchestration
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from fluxori.boundary.db.CRUD.user_crud import user_crud
from fluxori.boundary.db.models.user_model import UserModel, UserStatus
from fluxori.core.exceptions import ConflictError, InvalidInputError, NotFoundError

logger = logging.getLogger(__name__)


def user_to_dict(user: UserModel) -> dict[str, Any]:
    return {
        "id": user.id,
        "email": user.email,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "status": user.status,
        "role": user.role,
        "last_login_at": user.last_login_at,
        "created_at": user.created_at,
        "updated_at": user.updated_at,
    }


class UserService:
    """User service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def create_user(
        self,
        email: str,
        first_name: str | None = None,
        last_name: str | None = None,
        role: str = "user",
    ) -> dict[str, Any]:
        """
        Create a user with a unique, lower-cased email.

        Raises:
            InvalidInputError: If email is blank
            ConflictError: If the email is already registered
        """
        if not email or "@" not in email:
            raise InvalidInputError("A valid email is required", field="email")
        normalized = email.strip().lower()

        if await user_crud.get_by_email(self.db, normalized):
            raise ConflictError(f"User with email {normalized} already exists", field="email")

        user = await user_crud.create(
            self.db,
            email=normalized,
            first_name=first_name,
            last_name=last_name,
            role=role,
        )
        logger.info("User created", extra={"user_id": str(user.id)})
        return user_to_dict(user)

    async def get_user(self, user_id: UUID) -> dict[str, Any]:
        return user_to_dict(await user_crud.get_by_id_or_fail(self.db, user_id))

    async def get_user_by_email(self, email: str) -> dict[str, Any]:
        user = await user_crud.get_by_email(self.db, email)
        if user is None:
            raise NotFoundError(f"User {email} does not exist", resource="User")
        return user_to_dict(user)

    async def update_user(self, user_id: UUID, **fields) -> dict[str, Any]:
        fields = {k: v for k, v in fields.items() if v is not None}
        if "email" in fields:
            fields["email"] = fields["email"].strip().lower()
            existing = await user_crud.get_by_email(self.db, fields["email"])
            if existing is not None and existing.id != user_id:
                raise ConflictError(f"User with email {fields['email']} already exists", field="email")
        user = await user_crud.update_by_id_or_fail(self.db, user_id, **fields)
        return user_to_dict(user)

    async def update_status(self, user_id: UUID, status: UserStatus) -> dict[str, Any]:
        user = await user_crud.update_by_id_or_fail(self.db, user_id, status=status)
        logger.info("User status changed", extra={"user_id": str(user_id), "status": status.value})
        return user_to_dict(user)

    async def delete_user(self, user_id: UUID) -> None:
        if not await user_crud.delete_by_id(self.db, user_id):
            raise NotFoundError(f"User {user_id} does not exist", resource="User", resource_id=user_id)

    async def list_organization_users(
        self, organization_id: UUID, limit: int | None = None, offset: int = 0
    ) -> list[dict[str, Any]]:
        users = await user_crud.get_by_organization(self.db, organization_id, limit=limit, offset=offset)
        return [user_to_dict(u) for u in users]
