"""
Request context middleware.

Binds a correlation id for the lifetime of each request, echoes it on the
response and writes one access log line per request with its latency.
Server errors are logged at ERROR with the exception type; they still
propagate to FastAPI's handlers.

Dependencies: fastapi, starlette, fluxori.observability
System role: Request/response observability injection
"""

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from fluxori.observability.correlation import (
    CORRELATION_HEADER,
    clear_correlation_id,
    set_correlation_id,
)

logger = logging.getLogger("fluxori.access")


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Correlation id binding plus access logging."""

    async def dispatch(self, request: Request, call_next) -> Response:
        correlation_id = set_correlation_id(request.headers.get(CORRELATION_HEADER))
        started = time.perf_counter()
        route = f"{request.method} {request.url.path}"

        try:
            response: Response = await call_next(request)
            level = logging.WARNING if response.status_code >= 500 else logging.INFO
            logger.log(
                level,
                "%s -> %s",
                route,
                response.status_code,
                extra={"status_code": response.status_code, "duration_ms": _elapsed_ms(started)},
            )
        except Exception as e:
            logger.error(
                "%s failed",
                route,
                extra={"duration_ms": _elapsed_ms(started), "error_type": type(e).__name__},
            )
            raise
        finally:
            clear_correlation_id()

        response.headers[CORRELATION_HEADER] = correlation_id
        return response
