"""
Organization service orchestrator.

Coordinates tenant lifecycle: creation with slug uniqueness, status
changes, membership and the user's default organization.

Dependencies: fluxori.boundary.db.CRUD, fluxori.core
System role: Organization use case orchestration
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from fluxori.boundary.db.CRUD.organization_crud import membership_crud, organization_crud
from fluxori.boundary.db.CRUD.user_crud import user_crud
from fluxori.boundary.db.models.organization_model import (
    OrganizationMembershipModel,
    OrganizationModel,
    OrganizationStatus,
)
from fluxori.core.exceptions import ConflictError, InvalidInputError, NotFoundError
from fluxori.core.text import slugify

logger = logging.getLogger(__name__)


def organization_to_dict(org: OrganizationModel) -> dict[str, Any]:
    return {
        "id": org.id,
        "name": org.name,
        "slug": org.slug,
        "status": org.status,
        "type": org.type,
        "owner_id": org.owner_id,
        "settings": org.settings or {},
        "created_at": org.created_at,
        "updated_at": org.updated_at,
    }


def membership_to_dict(membership: OrganizationMembershipModel) -> dict[str, Any]:
    return {
        "id": membership.id,
        "user_id": membership.user_id,
        "organization_id": membership.organization_id,
        "role": membership.role,
        "is_default": membership.is_default,
        "created_at": membership.created_at,
    }


class OrganizationService:
    """Organization service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize organization service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def _ensure_slug_free(self, slug: str, exclude_id: UUID | None = None) -> None:
        existing = await organization_crud.get_by_slug(self.db, slug)
        if existing is not None and existing.id != exclude_id:
            raise ConflictError(f"Organization with slug {slug} already exists", field="slug")

    async def create_organization(
        self,
        name: str,
        owner_id: UUID | None = None,
        slug: str | None = None,
        type: str = "business",
        settings: dict | None = None,
    ) -> dict[str, Any]:
        """
        Create an organization.

        The slug defaults to a slugified name. When an owner is given, an
        owner membership is created as well.

        Args:
            name: Display name
            owner_id: Owning user (optional)
            slug: Explicit URL slug (optional)
            type: Organization type label
            settings: Free-form settings dict

        Returns:
            dict: Created organization

        Raises:
            InvalidInputError: If name is blank or yields an empty slug
            ConflictError: If the slug is taken
        """
        if not name or not name.strip():
            raise InvalidInputError("Organization name is required", field="name")
        resolved_slug = slugify(slug or name)
        if not resolved_slug:
            raise InvalidInputError("Organization slug cannot be empty", field="slug")

        await self._ensure_slug_free(resolved_slug)

        org = await organization_crud.create(
            self.db,
            name=name.strip(),
            slug=resolved_slug,
            type=type,
            owner_id=owner_id,
            settings=settings or {},
        )
        if owner_id is not None:
            await self.add_member(org.id, owner_id, role="owner")

        logger.info(
            "Organization created",
            extra={"organization_id": str(org.id), "slug": resolved_slug},
        )
        return organization_to_dict(org)

    async def get_organization(self, organization_id: UUID) -> dict[str, Any]:
        org = await organization_crud.get_by_id_or_fail(self.db, organization_id)
        return organization_to_dict(org)

    async def get_organization_by_slug(self, slug: str) -> dict[str, Any]:
        org = await organization_crud.get_by_slug(self.db, slug)
        if org is None:
            raise NotFoundError(f"Organization {slug} does not exist", resource="Organization")
        return organization_to_dict(org)

    async def list_organizations(self, limit: int | None = 50, offset: int = 0) -> list[dict[str, Any]]:
        orgs = await organization_crud.find(self.db, limit=limit, offset=offset, order_by="name")
        return [organization_to_dict(o) for o in orgs]

    async def search_organizations(
        self, query: str, limit: int | None = 50, offset: int = 0
    ) -> list[dict[str, Any]]:
        orgs = await organization_crud.search(self.db, query, limit=limit, offset=offset)
        return [organization_to_dict(o) for o in orgs]

    async def update_organization(self, organization_id: UUID, **fields) -> dict[str, Any]:
        """
        Update mutable fields.

        Raises:
            NotFoundError: Unknown organization
            ConflictError: New slug already used by another organization
        """
        fields = {k: v for k, v in fields.items() if v is not None}
        if "slug" in fields:
            fields["slug"] = slugify(fields["slug"])
            await self._ensure_slug_free(fields["slug"], exclude_id=organization_id)

        org = await organization_crud.update_by_id_or_fail(self.db, organization_id, **fields)
        logger.info(
            "Organization updated",
            extra={"organization_id": str(organization_id), "fields": sorted(fields)},
        )
        return organization_to_dict(org)

    async def update_status(self, organization_id: UUID, status: OrganizationStatus) -> dict[str, Any]:
        org = await organization_crud.update_status(self.db, organization_id, status)
        logger.info(
            "Organization status changed",
            extra={"organization_id": str(organization_id), "status": status.value},
        )
        return organization_to_dict(org)

    async def delete_organization(self, organization_id: UUID) -> None:
        deleted = await organization_crud.delete_by_id(self.db, organization_id)
        if not deleted:
            raise NotFoundError(
                f"Organization {organization_id} does not exist",
                resource="Organization",
                resource_id=organization_id,
            )
        logger.info("Organization deleted", extra={"organization_id": str(organization_id)})

    async def add_member(
        self,
        organization_id: UUID,
        user_id: UUID,
        role: str = "member",
    ) -> dict[str, Any]:
        """
        Add a user to an organization.

        The user's first membership becomes their default.

        Raises:
            NotFoundError: Unknown organization or user
            ConflictError: User already a member
        """
        await organization_crud.get_by_id_or_fail(self.db, organization_id)
        await user_crud.get_by_id_or_fail(self.db, user_id)

        if await membership_crud.get_membership(self.db, user_id, organization_id):
            raise ConflictError(
                f"User {user_id} is already a member of organization {organization_id}",
                field="user_id",
            )

        is_first = await membership_crud.count(self.db, user_id=user_id) == 0
        membership = await membership_crud.create(
            self.db,
            user_id=user_id,
            organization_id=organization_id,
            role=role,
            is_default=is_first,
        )
        return membership_to_dict(membership)

    async def list_user_organizations(self, user_id: UUID) -> list[dict[str, Any]]:
        """Organizations the user belongs to, default first."""
        memberships = await membership_crud.get_for_user(self.db, user_id)
        organizations = []
        for membership in memberships:
            org = await organization_crud.get_by_id(self.db, membership.organization_id)
            if org is None:
                continue
            organizations.append(
                {
                    **organization_to_dict(org),
                    "role": membership.role,
                    "is_default": membership.is_default,
                }
            )
        return organizations

    async def set_default_organization(self, user_id: UUID, organization_id: UUID) -> dict[str, Any]:
        membership = await membership_crud.get_membership(self.db, user_id, organization_id)
        if membership is None:
            raise NotFoundError(
                f"User {user_id} is not a member of organization {organization_id}",
                resource="OrganizationMembership",
            )
        updated = await membership_crud.set_as_default(self.db, user_id, membership.id)
        return membership_to_dict(updated)
