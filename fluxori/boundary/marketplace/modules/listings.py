"""
Listings Items API module.

Dependencies: fluxori.boundary.marketplace.base_module
System role: Marketplace listing management
"""

from typing import Any
from urllib.parse import quote

from fluxori.boundary.marketplace.base_module import BaseApiModule, dig


class ListingsModule(BaseApiModule):
    """Listings Items API (default version 2021-08-01)."""

    module_name = "listingsItems"
    path_template = "/listings/{version}"

    def _item_path(self, seller_id: str, sku: str) -> str:
        return f"/items/{seller_id}/{quote(sku, safe='')}"

    async def get_listing(
        self,
        sku: str,
        marketplace_id: str | None = None,
        included_data: list[str] | None = None,
        seller_id: str | None = None,
    ) -> dict[str, Any]:
        self._require(sku, "SKU is required to get a listing", "sku")
        seller = self._seller(seller_id, "listing lookup")
        params = {
            "marketplaceIds": self._marketplace(marketplace_id, "listing lookup"),
            "includedData": self._join(included_data or ["summaries", "attributes", "offers", "issues"]),
        }
        return await self._request("GET", self._item_path(seller, sku), "get_listing", params=params)

    async def put_listing(
        self,
        sku: str,
        product_type: str,
        attributes: dict[str, Any],
        marketplace_id: str | None = None,
        requirements: str = "LISTING",
        seller_id: str | None = None,
    ) -> dict[str, Any]:
        """Create or fully replace a listing."""
        self._require(sku, "SKU is required to create a listing", "sku")
        self._require(product_type, "Product type is required to create a listing", "product_type")
        self._require(attributes, "Attributes are required to create a listing", "attributes")
        seller = self._seller(seller_id, "listing creation")
        params = {"marketplaceIds": self._marketplace(marketplace_id, "listing creation")}
        body = {"productType": product_type, "requirements": requirements, "attributes": attributes}
        return await self._request("PUT", self._item_path(seller, sku), "put_listing", params=params, json=body)

    async def patch_listing(
        self,
        sku: str,
        product_type: str,
        patches: list[dict[str, Any]],
        marketplace_id: str | None = None,
        seller_id: str | None = None,
    ) -> dict[str, Any]:
        """
        Apply JSON-patch style operations to a listing.

        Each patch is {"op": "replace"|"add"|"delete", "path": "/attributes/...", "value": [...]}.
        """
        self._require(sku, "SKU is required to update a listing", "sku")
        self._require(patches, "At least one patch operation is required", "patches")
        seller = self._seller(seller_id, "listing update")
        params = {"marketplaceIds": self._marketplace(marketplace_id, "listing update")}
        body = {"productType": product_type, "patches": patches}
        return await self._request(
            "PATCH", self._item_path(seller, sku), "patch_listing", params=params, json=body
        )

    async def delete_listing(
        self,
        sku: str,
        marketplace_id: str | None = None,
        seller_id: str | None = None,
    ) -> dict[str, Any]:
        self._require(sku, "SKU is required to delete a listing", "sku")
        seller = self._seller(seller_id, "listing deletion")
        params = {"marketplaceIds": self._marketplace(marketplace_id, "listing deletion")}
        return await self._request("DELETE", self._item_path(seller, sku), "delete_listing", params=params)

    async def search_listings(
        self,
        marketplace_id: str | None = None,
        identifiers: list[str] | None = None,
        identifiers_type: str | None = None,
        page_size: int | None = None,
        page_token: str | None = None,
        seller_id: str | None = None,
    ) -> dict[str, Any]:
        seller = self._seller(seller_id, "listing search")
        params = {
            "marketplaceIds": self._marketplace(marketplace_id, "listing search"),
            "identifiers": self._join(identifiers),
            "identifiersType": identifiers_type,
            "pageSize": page_size,
            "pageToken": page_token,
            "includedData": "summaries",
        }
        return await self._request("GET", f"/items/{seller}", "search_listings", params=params)

    async def get_all_listings(
        self,
        marketplace_id: str | None = None,
        max_pages: int | None = None,
        page_size: int = 20,
    ) -> list[dict[str, Any]]:
        async def fetch(token: str | None) -> dict[str, Any]:
            return await self.search_listings(
                marketplace_id=marketplace_id, page_size=page_size, page_token=token
            )

        return await self._collect(
            fetch,
            lambda page: page.get("items", []),
            lambda page: dig(page, "pagination", "nextToken"),
            max_pages,
        )
