"""
Fulfillment Outbound API module.

Multi-channel fulfillment orders shipped from Amazon warehouses.

Dependencies: fluxori.boundary.marketplace.base_module
System role: Marketplace outbound fulfillment
"""

from typing import Any
from urllib.parse import quote

from fluxori.boundary.marketplace.base_module import BaseApiModule, dig

REQUIRED_ORDER_FIELDS = (
    "sellerFulfillmentOrderId",
    "displayableOrderId",
    "displayableOrderDate",
    "displayableOrderComment",
    "shippingSpeedCategory",
    "destinationAddress",
    "items",
)


class FulfillmentOutboundModule(BaseApiModule):
    """Fulfillment Outbound API (default version 2020-07-01)."""

    module_name = "fulfillmentOutbound"
    path_template = "/fba/outbound/{version}"

    async def create_fulfillment_order(self, order: dict[str, Any]) -> dict[str, Any]:
        """
        Submit a fulfillment order.

        Args:
            order: Request body in SP-API shape (camelCase keys)
        """
        self._require(order, "Fulfillment order is required", "order")
        missing = [name for name in REQUIRED_ORDER_FIELDS if not order.get(name)]
        if missing:
            self._require(
                None, f"Fulfillment order is missing required fields: {', '.join(missing)}", missing[0]
            )
        return await self._request("POST", "/fulfillmentOrders", "create_fulfillment_order", json=order)

    async def get_fulfillment_order(self, seller_fulfillment_order_id: str) -> dict[str, Any]:
        self._require(seller_fulfillment_order_id, "Seller fulfillment order ID is required", "order_id")
        return await self._request(
            "GET",
            f"/fulfillmentOrders/{quote(seller_fulfillment_order_id, safe='')}",
            "get_fulfillment_order",
        )

    async def list_fulfillment_orders(
        self,
        query_start_date: str | None = None,
        next_token: str | None = None,
    ) -> dict[str, Any]:
        params = {"queryStartDate": query_start_date, "nextToken": next_token}
        return await self._request("GET", "/fulfillmentOrders", "list_fulfillment_orders", params=params)

    async def cancel_fulfillment_order(self, seller_fulfillment_order_id: str) -> dict[str, Any]:
        self._require(seller_fulfillment_order_id, "Seller fulfillment order ID is required", "order_id")
        return await self._request(
            "PUT",
            f"/fulfillmentOrders/{quote(seller_fulfillment_order_id, safe='')}/cancel",
            "cancel_fulfillment_order",
        )

    async def get_all_fulfillment_orders(
        self,
        query_start_date: str | None = None,
        max_pages: int | None = None,
    ) -> list[dict[str, Any]]:
        return await self._collect(
            lambda token: self.list_fulfillment_orders(query_start_date=query_start_date, next_token=token),
            lambda page: dig(page, "payload", "fulfillmentOrders", default=[]),
            lambda page: dig(page, "payload", "nextToken"),
            max_pages,
        )
