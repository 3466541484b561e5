"""
FBA Inventory API module.

Dependencies: fluxori.boundary.marketplace.base_module
System role: Amazon fulfillment stock visibility
"""

from typing import Any

from fluxori.boundary.marketplace.base_module import BaseApiModule, dig


class FbaInventoryModule(BaseApiModule):
    """FBA Inventory API. Summaries live under the v1 path for every registry version."""

    module_name = "fbaInventory"
    path_template = "/fba/inventory/v1"

    async def get_inventory_summaries(
        self,
        marketplace_id: str | None = None,
        seller_skus: list[str] | None = None,
        details: bool = True,
        start_date_time: str | None = None,
        next_token: str | None = None,
    ) -> dict[str, Any]:
        """
        Inventory summaries for the marketplace.

        Returns:
            dict: Raw response; items under payload.inventorySummaries
        """
        marketplace = self._marketplace(marketplace_id, "inventory summaries")
        params = {
            "granularityType": "Marketplace",
            "granularityId": marketplace,
            "marketplaceIds": marketplace,
            "details": "true" if details else "false",
            "sellerSkus": self._join(seller_skus),
            "startDateTime": start_date_time,
            "nextToken": next_token,
        }
        return await self._request("GET", "/summaries", "get_inventory_summaries", params=params)

    async def get_inventory_for_skus(
        self,
        seller_skus: list[str],
        marketplace_id: str | None = None,
    ) -> list[dict[str, Any]]:
        self._require(seller_skus, "At least one SKU is required", "seller_skus")
        response = await self.get_inventory_summaries(
            marketplace_id=marketplace_id, seller_skus=seller_skus
        )
        return dig(response, "payload", "inventorySummaries", default=[])

    async def get_all_inventory_summaries(
        self,
        marketplace_id: str | None = None,
        max_pages: int | None = None,
    ) -> list[dict[str, Any]]:
        async def fetch(token: str | None) -> dict[str, Any]:
            return await self.get_inventory_summaries(marketplace_id=marketplace_id, next_token=token)

        return await self._collect(
            fetch,
            lambda page: dig(page, "payload", "inventorySummaries", default=[]),
            lambda page: dig(page, "pagination", "nextToken"),
            max_pages,
        )

    async def get_low_stock_inventory(
        self,
        threshold: int = 5,
        marketplace_id: str | None = None,
        max_pages: int | None = None,
    ) -> list[dict[str, Any]]:
        """Summaries whose fulfillable quantity is at or below threshold."""
        summaries = await self.get_all_inventory_summaries(
            marketplace_id=marketplace_id, max_pages=max_pages
        )
        return [summary for summary in summaries if _fulfillable(summary) <= threshold]


def _fulfillable(summary: dict[str, Any]) -> int:
    quantity = dig(summary, "inventoryDetails", "fulfillableQuantity")
    if quantity is None:
        quantity = summary.get("totalQuantity", 0)
    return int(quantity or 0)
