"""
Organization response mapping utilities.

Transforms service dictionaries into Pydantic response models.

Dependencies: fluxori.models.organization
System role: Organization response transformation
"""

from typing import Any

from fluxori.models.organization import MembershipResponse, OrganizationResponse, UserResponse


def map_organization_to_response(data: dict[str, Any]) -> OrganizationResponse:
    return OrganizationResponse(**data)


def map_organizations_to_response(items: list[dict[str, Any]]) -> list[OrganizationResponse]:
    return [map_organization_to_response(item) for item in items]


def map_membership_to_response(data: dict[str, Any]) -> MembershipResponse:
    return MembershipResponse(**data)


def map_users_to_response(items: list[dict[str, Any]]) -> list[UserResponse]:
    return [UserResponse(**item) for item in items]
