"""
Sales API module.

Dependencies: fluxori.boundary.marketplace.base_module
System role: Marketplace sales metrics
"""

from typing import Any

from fluxori.boundary.marketplace.base_module import BaseApiModule

GRANULARITIES = ("Hour", "Day", "Week", "Month", "Year", "Total")


class SalesModule(BaseApiModule):
    """Sales API (version v1)."""

    module_name = "sales"
    path_template = "/sales/{version}"

    async def get_order_metrics(
        self,
        interval_start: str,
        interval_end: str,
        granularity: str,
        marketplace_ids: list[str] | None = None,
        granularity_time_zone: str | None = None,
        buyer_type: str | None = None,
        fulfillment_network: str | None = None,
        asin: str | None = None,
        sku: str | None = None,
    ) -> dict[str, Any]:
        """
        Aggregated order metrics for an interval.

        The interval is sent as "<start>--<end>" in ISO 8601.
        """
        self._require(interval_start, "Interval start is required to get order metrics", "interval_start")
        self._require(interval_end, "Interval end is required to get order metrics", "interval_end")
        self._require(granularity, "Granularity is required to get order metrics", "granularity")
        if granularity not in GRANULARITIES:
            self._require(None, f"Granularity must be one of {', '.join(GRANULARITIES)}", "granularity")

        marketplaces = marketplace_ids or [self._marketplace(None, "order metrics")]
        params = {
            "marketplaceIds": self._join(marketplaces),
            "interval": f"{interval_start}--{interval_end}",
            "granularity": granularity,
            "granularityTimeZone": granularity_time_zone,
            "buyerType": buyer_type,
            "fulfillmentNetwork": fulfillment_network,
            "asin": asin,
            "sku": sku,
        }
        return await self._request("GET", "/orderMetrics", "get_order_metrics", params=params)
