"""
User API endpoints.

Routes:
- POST /users - Register user
- GET /users/{id} - Get user
- DELETE /users/{id} - Delete user
- GET /users/{id}/organizations - Organizations the user belongs to
- PUT /users/{id}/default-organization/{organization_id} - Switch default organization

Dependencies: fluxori.application.services, fluxori.models
System role: User management HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from fluxori.api.deps import get_organization_service, get_user_service
from fluxori.api.error_handling import handle_service_errors
from fluxori.application.services import OrganizationService, UserService
from fluxori.models.common import ERROR_RESPONSES
from fluxori.models.organization import (
    CreateUserRequest,
    MembershipResponse,
    UserOrganizationResponse,
    UserResponse,
)

router = APIRouter(prefix="/users", tags=["users"], responses=ERROR_RESPONSES)


@router.post("", response_model=UserResponse, status_code=201)
@handle_service_errors
async def create_user(
    request: CreateUserRequest,
    user_service: UserService = Depends(get_user_service),
) -> UserResponse:
    """
    Register a user; the email is stored lower-cased.

    Raises:
        HTTPException(400): Malformed email
        HTTPException(409): Email already registered
    """
    user = await user_service.create_user(
        email=request.email,
        first_name=request.first_name,
        last_name=request.last_name,
        role=request.role,
    )
    return UserResponse(**user)


@router.get("/{user_id}", response_model=UserResponse)
@handle_service_errors
async def get_user(
    user_id: UUID,
    user_service: UserService = Depends(get_user_service),
) -> UserResponse:
    return UserResponse(**await user_service.get_user(user_id))


@router.delete("/{user_id}", status_code=204)
@handle_service_errors
async def delete_user(
    user_id: UUID,
    user_service: UserService = Depends(get_user_service),
) -> None:
    await user_service.delete_user(user_id)


@router.get("/{user_id}/organizations", response_model=list[UserOrganizationResponse])
@handle_service_errors
async def list_user_organizations(
    user_id: UUID,
    organization_service: OrganizationService = Depends(get_organization_service),
) -> list[UserOrganizationResponse]:
    organizations = await organization_service.list_user_organizations(user_id)
    return [UserOrganizationResponse(**org) for org in organizations]


@router.put("/{user_id}/default-organization/{organization_id}", response_model=MembershipResponse)
@handle_service_errors
async def set_default_organization(
    user_id: UUID,
    organization_id: UUID,
    organization_service: OrganizationService = Depends(get_organization_service),
) -> MembershipResponse:
    membership = await organization_service.set_default_organization(user_id, organization_id)
    return MembershipResponse(**membership)
