"""
Amazon Business (B2B) module.

Business pricing tiers, quantity discount eligibility and the order
approval workflow for business buyers.

Dependencies: fluxori.boundary.marketplace.base_module
System role: Marketplace business-buyer features
"""

from typing import Any

from fluxori.boundary.marketplace.base_module import BaseApiModule
from fluxori.core.exceptions import InvalidInputError

MAX_BULK_ASINS = 20


class B2BModule(BaseApiModule):
    """Amazon Business API."""

    module_name = "b2b"
    path_template = "/b2b/{version}"

    async def get_pricing_tiers(self, asin: str, marketplace_id: str | None = None) -> dict[str, Any]:
        self._require(asin, "ASIN is required for pricing tier lookup", "asin")
        params = {"marketplaceId": self._marketplace(marketplace_id, "pricing tier lookup")}
        return await self._request("GET", f"/products/{asin}/pricing-tiers", "get_pricing_tiers", params=params)

    async def get_quantity_discount_eligibility(
        self, asin: str, marketplace_id: str | None = None
    ) -> dict[str, Any]:
        self._require(asin, "ASIN is required for quantity discount eligibility", "asin")
        params = {"marketplaceId": self._marketplace(marketplace_id, "quantity discount eligibility")}
        return await self._request(
            "GET",
            f"/products/{asin}/quantity-discount-eligibility",
            "get_quantity_discount_eligibility",
            params=params,
        )

    async def get_restricted_buying(self, asin: str, marketplace_id: str | None = None) -> dict[str, Any]:
        self._require(asin, "ASIN is required for restricted buying lookup", "asin")
        params = {"marketplaceId": self._marketplace(marketplace_id, "restricted buying lookup")}
        return await self._request(
            "GET", f"/products/{asin}/restricted-buying", "get_restricted_buying", params=params
        )

    async def get_bulk_pricing_tiers(
        self, asins: list[str], marketplace_id: str | None = None
    ) -> dict[str, Any]:
        """
        Pricing tiers for up to 20 ASINs in one batch call.

        The batch succeeds or fails as a whole; a vendor error for the call
        is raised rather than split per ASIN.

        Returns:
            dict: ASIN to pricing tier response

        Raises:
            InvalidInputError: No ASINs, or more than 20
        """
        self._require(asins, "At least one ASIN is required for bulk pricing tier lookup", "asins")
        if len(asins) > MAX_BULK_ASINS:
            raise InvalidInputError(
                f"Maximum of {MAX_BULK_ASINS} ASINs allowed per bulk pricing tier request", field="asins"
            )
        params = {"marketplaceId": self._marketplace(marketplace_id, "bulk pricing tier lookup")}
        return await self._request(
            "POST",
            "/products/pricing-tiers/batch",
            "get_bulk_pricing_tiers",
            params=params,
            json={"asins": list(asins)},
        )

    async def get_approval_settings(self, marketplace_id: str | None = None) -> dict[str, Any]:
        params = {"marketplaceId": self._marketplace(marketplace_id, "approval settings")}
        return await self._request("GET", "/settings/approvals", "get_approval_settings", params=params)

    async def update_approval_settings(
        self, settings: dict[str, Any], marketplace_id: str | None = None
    ) -> dict[str, Any]:
        self._require(settings, "Approval settings are required", "settings")
        params = {"marketplaceId": self._marketplace(marketplace_id, "approval settings")}
        return await self._request(
            "PUT", "/settings/approvals", "update_approval_settings", params=params, json=settings
        )

    async def get_pending_approvals(
        self,
        max_results: int = 20,
        next_token: str | None = None,
        marketplace_id: str | None = None,
    ) -> dict[str, Any]:
        """
        One page of orders waiting for business approval.

        Returns:
            dict: {"items": [...], "next_token": str | None, "has_more": bool}
        """
        params = {
            "marketplaceId": self._marketplace(marketplace_id, "pending approvals"),
            "maxResults": max_results,
            "nextToken": next_token,
        }
        data = await self._request("GET", "/orders/pending-approvals", "get_pending_approvals", params=params)
        token = data.get("nextToken")
        return {"items": data.get("orders", []), "next_token": token, "has_more": bool(token)}

    async def approve_order(
        self, order_id: str, approver_notes: str | None = None, marketplace_id: str | None = None
    ) -> dict[str, bool]:
        self._require(order_id, "Order ID is required for approval", "order_id")
        params = {"marketplaceId": self._marketplace(marketplace_id, "order approval")}
        body = {"approverNotes": approver_notes} if approver_notes else {}
        await self._request("POST", f"/orders/{order_id}/approve", "approve_order", params=params, json=body)
        return {"success": True}

    async def reject_order(
        self,
        order_id: str,
        rejection_reason: str,
        approver_notes: str | None = None,
        marketplace_id: str | None = None,
    ) -> dict[str, bool]:
        self._require(order_id, "Order ID is required for rejection", "order_id")
        self._require(rejection_reason, "Rejection reason is required", "rejection_reason")
        params = {"marketplaceId": self._marketplace(marketplace_id, "order rejection")}
        body = {"rejectionReason": rejection_reason}
        if approver_notes:
            body["approverNotes"] = approver_notes
        await self._request("POST", f"/orders/{order_id}/reject", "reject_order", params=params, json=body)
        return {"success": True}
