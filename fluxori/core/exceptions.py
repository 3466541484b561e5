"""
Exception hierarchy for the Fluxori backend.

Every error carries a machine readable kind, an HTTP status and a
details dict. The API layer renders them as
``{"error": kind, "message": ..., "details": {...}}`` without inspecting
messages.

Dependencies: none
System role: Centralized exception handling across the application
"""

from typing import Any


class FluxoriError(Exception):
    """Base exception for all Fluxori application errors."""

    error_kind = "unknown"
    http_status = 500

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Serialize for API error bodies."""
        return {"error": self.error_kind, "message": self.message, "details": self.details}


class NotFoundError(FluxoriError):
    """A record or remote resource does not exist (``resource``, ``resource_id`` in details)."""

    error_kind = "not_found"
    http_status = 404

    def __init__(
        self,
        message: str,
        resource: str | None = None,
        resource_id: Any = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if resource:
            details["resource"] = resource
        if resource_id is not None:
            details["resource_id"] = str(resource_id)
        super().__init__(message, details)


class InvalidInputError(FluxoriError):
    """Bad caller input; ``field`` names the offending attribute when known."""

    error_kind = "invalid_input"
    http_status = 400

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class ConflictError(InvalidInputError):
    """Raised when a uniqueness rule would be violated."""

    error_kind = "conflict"
    http_status = 409


class AuthenticationError(FluxoriError):
    """Raised when a vendor connection is missing, expired or revoked."""

    error_kind = "unauthenticated"
    http_status = 401


class OperationFailedError(FluxoriError):
    """Raised when a store or vendor operation fails."""

    error_kind = "operation_failed"
    http_status = 500

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize operation failure.

        Args:
            message: Error message
            operation: Operation that failed (e.g. "warehouse.create")
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class UnknownError(FluxoriError):
    """Raised for failures that could not be classified."""


class MarketplaceApiError(OperationFailedError):
    """Raised when an SP-API call fails."""

    http_status = 502

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        module: str | None = None,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if status_code is not None:
            details["status_code"] = status_code
        if module:
            details["module"] = module
        self.status_code = status_code
        super().__init__(message, operation, details)


class XeroApiError(OperationFailedError):
    """Raised when a Xero API call fails."""

    http_status = 502

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if status_code is not None:
            details["status_code"] = status_code
        self.status_code = status_code
        super().__init__(message, operation, details)


def map_exception(exc: Exception, operation: str | None = None) -> FluxoriError:
    """
    Normalize any exception into the Fluxori hierarchy.

    Typed errors pass through unchanged. Anything else is wrapped
    as UnknownError with the original type recorded.

    Args:
        exc: Exception raised by a lower layer
        operation: Name of the operation that was running

    Returns:
        FluxoriError: Typed error suitable for the API layer
    """
    if isinstance(exc, FluxoriError):
        return exc
    details: dict[str, Any] = {"error_type": type(exc).__name__}
    if operation:
        details["operation"] = operation
    return UnknownError(str(exc) or type(exc).__name__, details)
