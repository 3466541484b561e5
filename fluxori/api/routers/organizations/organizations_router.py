"""
Organization API endpoints.

Routes:
- POST /organizations - Create organization
- GET /organizations - List or search organizations
- GET /organizations/by-slug/{slug} - Get organization by slug
- GET /organizations/{id} - Get single organization
- PUT /organizations/{id} - Update organization
- PUT /organizations/{id}/status - Change organization status
- DELETE /organizations/{id} - Delete organization
- POST /organizations/{id}/members - Add a member
- GET /organizations/{id}/users - List members

Dependencies: fluxori.application.services, fluxori.models
System role: Tenant management HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from fluxori.api.deps import get_organization_service, get_user_service
from fluxori.api.error_handling import handle_service_errors
from fluxori.application.services import OrganizationService, UserService
from fluxori.models.common import ERROR_RESPONSES
from fluxori.models.organization import (
    AddMemberRequest,
    CreateOrganizationRequest,
    MembershipResponse,
    OrganizationResponse,
    UpdateOrganizationRequest,
    UpdateOrganizationStatusRequest,
    UserResponse,
)

from .organization_responses import (
    map_membership_to_response,
    map_organization_to_response,
    map_organizations_to_response,
    map_users_to_response,
)
from .organization_validators import (
    validate_member_role,
    validate_organization_creation,
    validate_organization_update,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/organizations", tags=["organizations"], responses=ERROR_RESPONSES)


@router.post("", response_model=OrganizationResponse, status_code=201)
@handle_service_errors
async def create_organization(
    request: CreateOrganizationRequest,
    organization_service: OrganizationService = Depends(get_organization_service),
) -> OrganizationResponse:
    """
    Create an organization; the owner, when given, becomes its first member.

    Raises:
        HTTPException(400): Invalid name or slug
        HTTPException(404): Owner does not exist
        HTTPException(409): Slug already taken
    """
    validate_organization_creation(request)

    logger.info("Creating organization", extra={"organization_name": request.name})

    organization = await organization_service.create_organization(
        name=request.name,
        owner_id=request.owner_id,
        slug=request.slug,
        type=request.type,
        settings=request.settings,
    )
    return map_organization_to_response(organization)


@router.get("", response_model=list[OrganizationResponse])
@handle_service_errors
async def list_organizations(
    q: str | None = Query(None, description="Search by name or slug"),
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    organization_service: OrganizationService = Depends(get_organization_service),
) -> list[OrganizationResponse]:
    if q:
        organizations = await organization_service.search_organizations(q, limit=limit, offset=offset)
    else:
        organizations = await organization_service.list_organizations(limit=limit, offset=offset)
    return map_organizations_to_response(organizations)


@router.get("/by-slug/{slug}", response_model=OrganizationResponse)
@handle_service_errors
async def get_organization_by_slug(
    slug: str,
    organization_service: OrganizationService = Depends(get_organization_service),
) -> OrganizationResponse:
    return map_organization_to_response(await organization_service.get_organization_by_slug(slug))


@router.get("/{organization_id}", response_model=OrganizationResponse)
@handle_service_errors
async def get_organization(
    organization_id: UUID,
    organization_service: OrganizationService = Depends(get_organization_service),
) -> OrganizationResponse:
    return map_organization_to_response(await organization_service.get_organization(organization_id))


@router.put("/{organization_id}", response_model=OrganizationResponse)
@handle_service_errors
async def update_organization(
    organization_id: UUID,
    request: UpdateOrganizationRequest,
    organization_service: OrganizationService = Depends(get_organization_service),
) -> OrganizationResponse:
    """
    Update organization fields that are set in the request.

    Raises:
        HTTPException(400): Nothing to update or invalid slug
        HTTPException(404): Organization not found
        HTTPException(409): Slug already taken
    """
    validate_organization_update(request)

    logger.info(
        "Updating organization",
        extra={"organization_id": str(organization_id), "fields": sorted(request.model_dump(exclude_none=True))},
    )

    organization = await organization_service.update_organization(
        organization_id, **request.model_dump(exclude_none=True)
    )
    return map_organization_to_response(organization)


@router.put("/{organization_id}/status", response_model=OrganizationResponse)
@handle_service_errors
async def update_organization_status(
    organization_id: UUID,
    request: UpdateOrganizationStatusRequest,
    organization_service: OrganizationService = Depends(get_organization_service),
) -> OrganizationResponse:
    organization = await organization_service.update_status(organization_id, request.status)
    return map_organization_to_response(organization)


@router.delete("/{organization_id}", status_code=204)
@handle_service_errors
async def delete_organization(
    organization_id: UUID,
    organization_service: OrganizationService = Depends(get_organization_service),
) -> None:
    await organization_service.delete_organization(organization_id)


@router.post("/{organization_id}/members", response_model=MembershipResponse, status_code=201)
@handle_service_errors
async def add_member(
    organization_id: UUID,
    request: AddMemberRequest,
    organization_service: OrganizationService = Depends(get_organization_service),
) -> MembershipResponse:
    """
    Add an existing user to the organization.

    Raises:
        HTTPException(400): Unknown role
        HTTPException(404): Organization or user not found
        HTTPException(409): Already a member
    """
    validate_member_role(request.role)
    membership = await organization_service.add_member(organization_id, request.user_id, request.role)
    return map_membership_to_response(membership)


@router.get("/{organization_id}/users", response_model=list[UserResponse])
@handle_service_errors
async def list_organization_users(
    organization_id: UUID,
    limit: int | None = Query(None, ge=1, le=500),
    offset: int = Query(0, ge=0),
    user_service: UserService = Depends(get_user_service),
) -> list[UserResponse]:
    users = await user_service.list_organization_users(organization_id, limit=limit, offset=offset)
    return map_users_to_response(users)
