"""Core domain utilities: errors, token encryption, pagination."""

from fluxori.core.exceptions import (
    AuthenticationError,
    ConflictError,
    FluxoriError,
    InvalidInputError,
    MarketplaceApiError,
    NotFoundError,
    OperationFailedError,
    UnknownError,
    XeroApiError,
    map_exception,
)

__all__ = [
    "AuthenticationError",
    "ConflictError",
    "FluxoriError",
    "InvalidInputError",
    "MarketplaceApiError",
    "NotFoundError",
    "OperationFailedError",
    "UnknownError",
    "XeroApiError",
    "map_exception",
]
