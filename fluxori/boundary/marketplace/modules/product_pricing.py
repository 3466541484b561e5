"""
Product Pricing API module.

Dependencies: fluxori.boundary.marketplace.base_module
System role: Marketplace price lookups
"""

from typing import Any

from fluxori.boundary.marketplace.base_module import BaseApiModule

MAX_ITEMS_PER_REQUEST = 20


class ProductPricingModule(BaseApiModule):
    """Product Pricing API. Uses the v0 item endpoints."""

    module_name = "productPricing"
    path_template = "/products/pricing/v0"

    async def get_pricing(
        self,
        item_type: str,
        asins: list[str] | None = None,
        skus: list[str] | None = None,
        marketplace_id: str | None = None,
        item_condition: str | None = None,
    ) -> dict[str, Any]:
        """
        Current offer prices for up to 20 ASINs or SKUs.

        Args:
            item_type: "Asin" or "Sku"
        """
        if item_type not in ("Asin", "Sku"):
            self._require(None, "Item type must be 'Asin' or 'Sku'", "item_type")
        identifiers = asins if item_type == "Asin" else skus
        self._require(identifiers, f"At least one {item_type} is required for pricing", "identifiers")
        if len(identifiers) > MAX_ITEMS_PER_REQUEST:
            self._require(
                None,
                f"At most {MAX_ITEMS_PER_REQUEST} identifiers are allowed per pricing request",
                "identifiers",
            )
        params = {
            "MarketplaceId": self._marketplace(marketplace_id, "pricing"),
            "ItemType": item_type,
            "Asins": self._join(asins) if item_type == "Asin" else None,
            "Skus": self._join(skus) if item_type == "Sku" else None,
            "ItemCondition": item_condition,
        }
        return await self._request("GET", "/price", "get_pricing", params=params)

    async def get_pricing_for_asins(
        self, asins: list[str], marketplace_id: str | None = None
    ) -> dict[str, Any]:
        return await self.get_pricing("Asin", asins=asins, marketplace_id=marketplace_id)

    async def get_pricing_for_skus(
        self, skus: list[str], marketplace_id: str | None = None
    ) -> dict[str, Any]:
        return await self.get_pricing("Sku", skus=skus, marketplace_id=marketplace_id)

    async def get_competitive_pricing(
        self,
        asins: list[str],
        marketplace_id: str | None = None,
    ) -> dict[str, Any]:
        self._require(asins, "At least one ASIN is required for competitive pricing", "asins")
        params = {
            "MarketplaceId": self._marketplace(marketplace_id, "competitive pricing"),
            "ItemType": "Asin",
            "Asins": self._join(asins),
        }
        return await self._request("GET", "/competitivePrice", "get_competitive_pricing", params=params)
