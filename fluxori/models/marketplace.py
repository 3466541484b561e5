"""
Marketplace schemas.

SP-API resources are returned in Amazon's own shape; only the module
catalogue and page summaries are typed here.

Dependencies: pydantic
System role: Marketplace API contracts
"""

from typing import Any

from pydantic import BaseModel, Field


class ApiVersionResponse(BaseModel):
    version: str
    default: bool
    deprecated: bool


class ModuleDefinitionResponse(BaseModel):
    name: str
    display_name: str
    description: str
    default_version: str
    versions: list[ApiVersionResponse]
    implemented: bool = Field(description="Whether a client module exists for this section")


class MarketplaceItemsResponse(BaseModel):
    """Items gathered across SP-API pages."""

    items: list[dict[str, Any]]
    count: int
