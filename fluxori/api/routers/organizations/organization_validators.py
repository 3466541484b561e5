"""
Organization validation utilities.

Business rules not covered by the Pydantic models.

Dependencies: fluxori.models.organization, fluxori.core.exceptions
System role: Organization request validation
"""

import re

from fluxori.core.exceptions import InvalidInputError
from fluxori.models.organization import CreateOrganizationRequest, UpdateOrganizationRequest

_SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")

ROLES = ("owner", "admin", "member", "viewer")


def _validate_slug(slug: str) -> None:
    if not _SLUG_PATTERN.match(slug):
        raise InvalidInputError(
            "Slug may only contain lowercase letters, digits and single dashes",
            field="slug",
        )


def validate_organization_creation(request: CreateOrganizationRequest) -> None:
    """
    Validate organization creation request with business rules.

    Raises:
        InvalidInputError: Blank name or malformed slug
    """
    if not request.name.strip():
        raise InvalidInputError("Organization name cannot be empty or whitespace-only", field="name")
    if request.slug is not None:
        _validate_slug(request.slug)


def validate_organization_update(request: UpdateOrganizationRequest) -> None:
    # At least one field should be provided for update
    if all(value is None for value in request.model_dump().values()):
        raise InvalidInputError("At least one field must be provided for update")
    if request.name is not None and not request.name.strip():
        raise InvalidInputError("Organization name cannot be empty or whitespace-only", field="name")
    if request.slug is not None:
        _validate_slug(request.slug)


def validate_member_role(role: str) -> None:
    if role not in ROLES:
        raise InvalidInputError(
            f"Invalid role: {role}. Allowed: {', '.join(ROLES)}",
            field="role",
        )
