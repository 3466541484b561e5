"""
Organization and user schemas.

Request/response schemas for tenant and member operations.

Dependencies: pydantic
System role: Organization API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from fluxori.boundary.db.models.organization_model import OrganizationStatus
from fluxori.boundary.db.models.user_model import UserStatus


class CreateOrganizationRequest(BaseModel):
    """Request schema for creating an organization."""

    name: str = Field(..., min_length=1, max_length=255)
    slug: str | None = Field(None, max_length=255, description="Derived from the name when omitted")
    type: str = Field(default="business", max_length=50)
    owner_id: uuid.UUID | None = Field(None, description="User that becomes the owner member")
    settings: dict = Field(default_factory=dict)


class UpdateOrganizationRequest(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    slug: str | None = Field(None, min_length=1, max_length=255)
    type: str | None = Field(None, max_length=50)
    settings: dict | None = None


class UpdateOrganizationStatusRequest(BaseModel):
    status: OrganizationStatus


class OrganizationResponse(BaseModel):
    """Response schema for organization operations."""

    id: uuid.UUID
    name: str
    slug: str
    status: OrganizationStatus
    type: str
    owner_id: uuid.UUID | None
    settings: dict
    created_at: datetime
    updated_at: datetime


class UserOrganizationResponse(OrganizationResponse):
    """Organization as seen by one of its members."""

    role: str
    is_default: bool


class AddMemberRequest(BaseModel):
    user_id: uuid.UUID
    role: str = Field(default="member", max_length=50)


class MembershipResponse(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    organization_id: uuid.UUID
    role: str
    is_default: bool
    created_at: datetime


class CreateUserRequest(BaseModel):
    """Request schema for registering a user."""

    email: str = Field(..., min_length=3, max_length=320)
    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)
    role: str = Field(default="user", max_length=50)


class UserResponse(BaseModel):
    id: uuid.UUID
    email: str
    first_name: str | None
    last_name: str | None
    status: UserStatus
    role: str
    last_login_at: datetime | None
    created_at: datetime
    updated_at: datetime
