"""
Warehouse domain models and schemas.

Dependencies: pydantic
System role: Warehouse API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from fluxori.boundary.db.models.warehouse_model import WarehouseStatus


class CreateWarehouseRequest(BaseModel):
    """Request schema for creating a warehouse."""

    name: str = Field(..., min_length=1, max_length=255)
    code: str = Field(..., min_length=1, max_length=50, description="Unique within the organization")
    description: str | None = None
    is_default: bool = False
    address: dict = Field(default_factory=dict)
    contact: dict = Field(default_factory=dict)
    settings: dict = Field(
        default_factory=dict,
        description="Operational flags such as allow_negative_inventory",
    )


class UpdateWarehouseRequest(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    code: str | None = Field(None, min_length=1, max_length=50)
    description: str | None = None
    is_default: bool | None = None
    status: WarehouseStatus | None = None
    address: dict | None = None
    contact: dict | None = None
    settings: dict | None = None


class WarehouseResponse(BaseModel):
    id: uuid.UUID
    organization_id: uuid.UUID
    name: str
    code: str
    description: str | None
    is_default: bool
    status: WarehouseStatus
    address: dict
    contact: dict
    settings: dict
    created_at: datetime
    updated_at: datetime
