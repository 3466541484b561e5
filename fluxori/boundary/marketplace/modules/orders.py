"""
Orders API module.

Dependencies: fluxori.boundary.marketplace.base_module, fluxori.core.pagination
System role: Marketplace order retrieval
"""

from typing import Any

from fluxori.boundary.marketplace.base_module import BaseApiModule, dig
from fluxori.core.pagination import collect_pages


class OrdersModule(BaseApiModule):
    """Orders API (version v0)."""

    module_name = "orders"
    path_template = "/orders/{version}"

    async def get_orders(
        self,
        marketplace_ids: list[str] | None = None,
        created_after: str | None = None,
        created_before: str | None = None,
        last_updated_after: str | None = None,
        order_statuses: list[str] | None = None,
        fulfillment_channels: list[str] | None = None,
        max_results_per_page: int | None = None,
        next_token: str | None = None,
    ) -> dict[str, Any]:
        """
        List orders.

        Either created_after or last_updated_after is required unless
        resuming with next_token.
        """
        if not next_token and not (created_after or last_updated_after):
            self._require(
                None,
                "Either created_after or last_updated_after is required to list orders",
                "created_after",
            )
        marketplaces = marketplace_ids or [self._marketplace(None, "order listing")]
        params = {
            "MarketplaceIds": self._join(marketplaces),
            "CreatedAfter": created_after,
            "CreatedBefore": created_before,
            "LastUpdatedAfter": last_updated_after,
            "OrderStatuses": self._join(order_statuses),
            "FulfillmentChannels": self._join(fulfillment_channels),
            "MaxResultsPerPage": max_results_per_page,
            "NextToken": next_token,
        }
        return await self._request("GET", "/orders", "get_orders", params=params)

    async def get_order(self, order_id: str) -> dict[str, Any]:
        self._require(order_id, "Order ID is required", "order_id")
        return await self._request("GET", f"/orders/{order_id}", "get_order")

    async def get_order_items(self, order_id: str, next_token: str | None = None) -> dict[str, Any]:
        self._require(order_id, "Order ID is required to get order items", "order_id")
        return await self._request(
            "GET",
            f"/orders/{order_id}/orderItems",
            "get_order_items",
            params={"NextToken": next_token},
        )

    async def get_all_orders(self, max_pages: int | None = None, **filters) -> list[dict[str, Any]]:
        filters.pop("next_token", None)

        async def fetch(token: str | None) -> dict[str, Any]:
            return await self.get_orders(next_token=token, **filters)

        return await self._collect(
            fetch,
            lambda page: dig(page, "payload", "Orders", default=[]),
            lambda page: dig(page, "payload", "NextToken"),
            max_pages,
        )

    async def get_all_order_items(self, order_id: str) -> list[dict[str, Any]]:
        """All line items of an order; follows NextToken until exhausted."""
        async def fetch(token: str | None) -> dict[str, Any]:
            return await self.get_order_items(order_id, next_token=token)

        return await collect_pages(
            fetch,
            lambda page: dig(page, "payload", "OrderItems", default=[]),
            lambda page: dig(page, "payload", "NextToken"),
            max_pages=None,
        )
