"""
Common response models and utilities.

Error schema shared by every router and a generic action result.

Dependencies: pydantic
System role: Common API response structures
"""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Error body carried under ``detail`` for every failed request."""

    error: str = Field(description="Error category, e.g. not_found or invalid_input")
    message: str = Field(description="Human-readable error message")
    details: dict | None = Field(default=None, description="Additional error context")


class ErrorEnvelope(BaseModel):
    detail: ErrorResponse


ERROR_RESPONSES = {
    400: {"model": ErrorEnvelope, "description": "Invalid input"},
    404: {"model": ErrorEnvelope, "description": "Resource not found"},
    409: {"model": ErrorEnvelope, "description": "Conflicts with an existing record"},
}
