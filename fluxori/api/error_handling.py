"""
Service error handling utilities.

Provides a decorator that turns Fluxori exceptions raised inside a route
into HTTPExceptions, and an application-level handler for the same
exceptions when they escape from dependencies.

Dependencies: fastapi, pydantic, fluxori.core.exceptions
System role: Uniform HTTP error responses
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from fluxori.core.exceptions import FluxoriError, map_exception

logger = logging.getLogger(__name__)

# Type for the decorated function
F = TypeVar("F", bound=Callable[..., Any])


def _log_error(error: FluxoriError, operation: str) -> None:
    context = {"operation": operation, "error_kind": error.error_kind, "error": str(error)}
    if error.http_status >= 500:
        logger.error("Service operation failed", extra=context)
    else:
        logger.warning("Service operation rejected", extra=context)


def to_http_exception(error: FluxoriError) -> HTTPException:
    return HTTPException(status_code=error.http_status, detail=jsonable_encoder(error.to_dict()))


def handle_service_errors(func: F) -> F:
    """
    Decorator to handle service errors and transform them into HTTPExceptions.

    This centralizes:
    - Logging of errors with the route name and error kind
    - Mapping the Fluxori hierarchy to HTTP status codes
    - Ensuring uniform error response formats
    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except HTTPException:
            raise

        except FluxoriError as e:
            _log_error(e, func.__name__)
            raise to_http_exception(e) from e

        except ValidationError as e:
            logger.warning("Pydantic validation error", extra={"error": str(e)})
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=e.errors(),
            ) from e

        except Exception as e:
            error = map_exception(e, func.__name__)
            logger.exception(
                "Unexpected failure in service operation",
                extra={"operation": func.__name__, "error": str(e)},
            )
            raise to_http_exception(error) from e

    return wrapper  # type: ignore


async def fluxori_error_handler(request: Request, exc: FluxoriError) -> JSONResponse:
    """Render errors raised outside decorated routes, e.g. in dependencies."""
    _log_error(exc, f"{request.method} {request.url.path}")
    return JSONResponse(status_code=exc.http_status, content={"detail": jsonable_encoder(exc.to_dict())})
