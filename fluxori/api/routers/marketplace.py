"""
Marketplace (Amazon SP-API) endpoints.

Routes:
- GET /marketplace/modules - SP-API sections and versions
- GET /marketplace/orders - Orders created or updated after a timestamp
- GET /marketplace/orders/{order_id}/items - Line items of one order
- GET /marketplace/inventory - FBA inventory summaries
- GET /marketplace/catalog/{asin} - Catalog item

Dependencies: fluxori.boundary.marketplace, fluxori.models
System role: Marketplace passthrough HTTP API
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Query

from fluxori.api.deps import get_selling_partner_factory
from fluxori.api.error_handling import handle_service_errors
from fluxori.boundary.marketplace import SP_API_MODULES, SellingPartnerFactory
from fluxori.boundary.marketplace.modules import MODULE_CLASSES
from fluxori.models.common import ERROR_RESPONSES
from fluxori.models.marketplace import (
    ApiVersionResponse,
    MarketplaceItemsResponse,
    ModuleDefinitionResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/marketplace", tags=["marketplace"], responses=ERROR_RESPONSES)


@router.get("/modules", response_model=list[ModuleDefinitionResponse])
async def list_modules() -> list[ModuleDefinitionResponse]:
    """Every SP-API section known to Fluxori, marking those with a client module."""
    return [
        ModuleDefinitionResponse(
            name=definition.name,
            display_name=definition.display_name,
            description=definition.description,
            default_version=definition.default_version,
            versions=[
                ApiVersionResponse(version=v.version, default=v.default, deprecated=v.deprecated)
                for v in definition.versions
            ],
            implemented=definition.name in MODULE_CLASSES,
        )
        for definition in SP_API_MODULES
    ]


@router.get("/orders", response_model=MarketplaceItemsResponse)
@handle_service_errors
async def list_orders(
    created_after: str | None = Query(None, description="ISO 8601 timestamp"),
    last_updated_after: str | None = Query(None, description="ISO 8601 timestamp"),
    order_status: list[str] | None = Query(None),
    max_pages: int | None = Query(None, ge=1, le=50),
    factory: SellingPartnerFactory = Depends(get_selling_partner_factory),
) -> MarketplaceItemsResponse:
    """
    Orders across pages.

    Raises:
        HTTPException(400): Neither created_after nor last_updated_after given
        HTTPException(502): SP-API rejected the request
    """
    orders = await factory.orders.get_all_orders(
        max_pages=max_pages,
        created_after=created_after,
        last_updated_after=last_updated_after,
        order_statuses=order_status,
    )
    return MarketplaceItemsResponse(items=orders, count=len(orders))


@router.get("/orders/{order_id}/items", response_model=MarketplaceItemsResponse)
@handle_service_errors
async def list_order_items(
    order_id: str,
    factory: SellingPartnerFactory = Depends(get_selling_partner_factory),
) -> MarketplaceItemsResponse:
    items = await factory.orders.get_all_order_items(order_id)
    return MarketplaceItemsResponse(items=items, count=len(items))


@router.get("/inventory", response_model=MarketplaceItemsResponse)
@handle_service_errors
async def list_inventory(
    low_stock_threshold: int | None = Query(None, ge=0, description="Only summaries at or below this quantity"),
    max_pages: int | None = Query(None, ge=1, le=50),
    factory: SellingPartnerFactory = Depends(get_selling_partner_factory),
) -> MarketplaceItemsResponse:
    if low_stock_threshold is None:
        summaries = await factory.fba_inventory.get_all_inventory_summaries(max_pages=max_pages)
    else:
        summaries = await factory.fba_inventory.get_low_stock_inventory(
            threshold=low_stock_threshold, max_pages=max_pages
        )
    return MarketplaceItemsResponse(items=summaries, count=len(summaries))


@router.get("/catalog/{asin}")
@handle_service_errors
async def get_catalog_item(
    asin: str,
    factory: SellingPartnerFactory = Depends(get_selling_partner_factory),
) -> dict[str, Any]:
    return await factory.catalog_items.get_catalog_item(asin)
