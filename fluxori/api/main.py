"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, fluxori.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fluxori.api.deps.dependencies import get_service_cache
from fluxori.api.error_handling import fluxori_error_handler
from fluxori.configs import get_settings
from fluxori.core.exceptions import FluxoriError
from fluxori.observability.logger import configure_logging
from fluxori.observability.middleware import RequestContextMiddleware

from .routers import (
    health_router,
    inventory_router,
    marketplace_router,
    organizations_router,
    products_router,
    stock_alerts_router,
    users_router,
    warehouses_router,
    xero_router,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events.
    """
    configure_logging(get_settings().log_level)
    logger.info("Fluxori API starting (%s)", get_settings().environment)

    yield

    # Shutdown
    await get_service_cache().aclose()
    logger.info("Service cache cleared")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = get_settings()
    app = FastAPI(
        title="Fluxori Commerce API",
        description="Multi-tenant inventory, Amazon SP-API and Xero accounting backend",
        version="0.1.0",
        debug=settings.debug,
        docs_url=None if settings.is_production else "/docs",
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(RequestContextMiddleware)

    app.add_exception_handler(FluxoriError, fluxori_error_handler)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(organizations_router, prefix="/api/v1")
    app.include_router(users_router, prefix="/api/v1")
    app.include_router(products_router, prefix="/api/v1")
    app.include_router(warehouses_router, prefix="/api/v1")
    app.include_router(inventory_router, prefix="/api/v1")
    app.include_router(stock_alerts_router, prefix="/api/v1")
    app.include_router(marketplace_router, prefix="/api/v1")
    app.include_router(xero_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "fluxori.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
