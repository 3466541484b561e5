"""
Catalog Items API module.

Search and look up Amazon catalog items by ASIN, SKU, keyword or
browse classification.

Dependencies: fluxori.boundary.marketplace.base_module
System role: Marketplace catalog access
"""

from typing import Any

from fluxori.boundary.marketplace.base_module import BaseApiModule, dig

DEFAULT_INCLUDED_DATA = ("summaries", "attributes", "images", "salesRanks")


class CatalogItemsModule(BaseApiModule):
    """Catalog Items API (default version 2022-04-01)."""

    module_name = "catalogItems"
    path_template = "/catalog/{version}"

    async def search_catalog_items(
        self,
        marketplace_id: str | None = None,
        keywords: list[str] | str | None = None,
        identifiers: list[str] | None = None,
        identifiers_type: str | None = None,
        brand_names: list[str] | None = None,
        classification_ids: list[str] | None = None,
        included_data: list[str] | None = None,
        page_size: int | None = None,
        page_token: str | None = None,
        sort_by: str | None = None,
        sort_order: str = "ASC",
    ) -> dict[str, Any]:
        """
        Search the catalog.

        At least one of keywords, identifiers or classification_ids is
        required; identifiers also need identifiers_type (ASIN, SKU, UPC...).

        Returns:
            dict: Raw response with items, numberOfResults, pagination
        """
        marketplace = self._marketplace(marketplace_id, "catalog search")
        if not (keywords or identifiers or classification_ids):
            self._require(
                None,
                "Keywords, identifiers or classification IDs are required for catalog search",
                "keywords",
            )
        if identifiers:
            self._require(
                identifiers_type,
                "Identifiers type is required when searching by identifiers",
                "identifiers_type",
            )

        params = {
            "marketplaceIds": marketplace,
            "keywords": self._join(keywords),
            "identifiers": self._join(identifiers),
            "identifiersType": identifiers_type,
            "brandNames": self._join(brand_names),
            "classificationIds": self._join(classification_ids),
            "includedData": self._join(included_data or DEFAULT_INCLUDED_DATA),
            "pageSize": page_size,
            "pageToken": page_token,
            "sellerId": self.seller_id if identifiers_type == "SKU" else None,
            "sortBy": f"{sort_by}:{sort_order}" if sort_by else None,
        }
        return await self._request("GET", "/items", "search_catalog_items", params=params)

    async def get_catalog_item(
        self,
        asin: str,
        marketplace_id: str | None = None,
        included_data: list[str] | None = None,
    ) -> dict[str, Any]:
        self._require(asin, "ASIN is required to get a catalog item", "asin")
        marketplace = self._marketplace(marketplace_id, "catalog item lookup")
        params = {
            "marketplaceIds": marketplace,
            "includedData": self._join(included_data or DEFAULT_INCLUDED_DATA),
        }
        return await self._request("GET", f"/items/{asin}", "get_catalog_item", params=params)

    async def get_catalog_item_by_sku(
        self,
        sku: str,
        marketplace_id: str | None = None,
        included_data: list[str] | None = None,
    ) -> dict[str, Any] | None:
        """Resolve a seller SKU to its catalog item; None when nothing matches."""
        self._require(sku, "SKU is required to look up a catalog item", "sku")
        self._seller(None, "SKU lookup")
        response = await self.search_catalog_items(
            marketplace_id=marketplace_id,
            identifiers=[sku],
            identifiers_type="SKU",
            included_data=included_data,
        )
        items = response.get("items") or []
        return items[0] if items else None

    async def search_by_keywords(
        self,
        keywords: list[str] | str,
        marketplace_id: str | None = None,
        page_size: int = 20,
    ) -> dict[str, Any]:
        self._require(keywords, "Keywords are required for keyword search", "keywords")
        return await self.search_catalog_items(
            marketplace_id=marketplace_id, keywords=keywords, page_size=page_size
        )

    async def get_items_by_classification(
        self,
        classification_id: str,
        marketplace_id: str | None = None,
        page_size: int = 20,
    ) -> dict[str, Any]:
        self._require(classification_id, "Classification ID is required", "classification_id")
        return await self.search_catalog_items(
            marketplace_id=marketplace_id,
            classification_ids=[classification_id],
            page_size=page_size,
        )

    async def get_all_search_pages(
        self,
        max_pages: int | None = None,
        **search_params,
    ) -> list[dict[str, Any]]:
        """
        Follow pagination tokens for a search.

        Args:
            max_pages: Page cap (defaults to the module setting)
            **search_params: Arguments for search_catalog_items

        Returns:
            list: Items from every page, in page order
        """
        search_params.pop("page_token", None)

        async def fetch(token: str | None) -> dict[str, Any]:
            return await self.search_catalog_items(page_token=token, **search_params)

        return await self._collect(
            fetch,
            lambda page: page.get("items", []),
            lambda page: dig(page, "pagination", "nextToken"),
            max_pages,
        )
