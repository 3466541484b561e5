"""
Replenishment API module.

Programs, recommendations and SKU time series used for restock
planning. Accept/reject are thin wrappers over the recommendation update.

Dependencies: fluxori.boundary.marketplace.base_module
System role: Marketplace restock planning
"""

from typing import Any

from fluxori.boundary.marketplace.base_module import BaseApiModule


class ReplenishmentModule(BaseApiModule):
    """Replenishment API (default version 2022-11-07)."""

    module_name = "replenishment"
    path_template = "/replenishment/{version}"

    async def get_programs(self, next_token: str | None = None) -> dict[str, Any]:
        return await self._request("GET", "/programs", "get_programs", params={"nextToken": next_token})

    async def get_recommendations(
        self,
        seller_skus: list[str] | None = None,
        asins: list[str] | None = None,
        statuses: list[str] | None = None,
        types: list[str] | None = None,
        created_from: str | None = None,
        created_to: str | None = None,
        max_results: int | None = None,
        sort_field: str | None = None,
        sort_order: str | None = None,
        next_token: str | None = None,
    ) -> dict[str, Any]:
        params = {
            "sellerSkus": self._join(seller_skus),
            "asins": self._join(asins),
            "recommendationStatuses": self._join(statuses),
            "recommendationTypes": self._join(types),
            "recommendationCreationDateFrom": created_from,
            "recommendationCreationDateTo": created_to,
            "maxResults": max_results,
            "sortField": sort_field,
            "sortOrder": sort_order,
            "nextToken": next_token,
        }
        return await self._request("GET", "/recommendations", "get_recommendations", params=params)

    async def get_recommendation(self, recommendation_id: str) -> dict[str, Any]:
        self._require(recommendation_id, "Recommendation ID is required", "recommendation_id")
        return await self._request("GET", f"/recommendations/{recommendation_id}", "get_recommendation")

    async def update_recommendation(
        self,
        recommendation_id: str,
        status: str,
        rejection_reason: str | None = None,
        notes: str | None = None,
    ) -> dict[str, Any]:
        self._require(recommendation_id, "Recommendation ID is required", "recommendation_id")
        self._require(status, "Status is required to update a recommendation", "status")
        body = {"status": status}
        if rejection_reason:
            body["rejectionReason"] = rejection_reason
        if notes:
            body["notes"] = notes
        return await self._request(
            "PATCH", f"/recommendations/{recommendation_id}", "update_recommendation", json=body
        )

    async def accept_recommendation(self, recommendation_id: str, notes: str | None = None) -> dict[str, Any]:
        return await self.update_recommendation(recommendation_id, "ACCEPTED", notes=notes)

    async def reject_recommendation(
        self,
        recommendation_id: str,
        rejection_reason: str,
        notes: str | None = None,
    ) -> dict[str, Any]:
        self._require(rejection_reason, "Rejection reason is required", "rejection_reason")
        return await self.update_recommendation(
            recommendation_id, "REJECTED", rejection_reason=rejection_reason, notes=notes
        )

    async def get_time_series(
        self,
        seller_sku: str,
        start_date: str,
        end_date: str,
        granularity: str,
        data_type: str,
    ) -> dict[str, Any]:
        """Historic or forecast series for one SKU."""
        self._require(seller_sku, "Seller SKU is required to get time series data", "seller_sku")
        self._require(start_date, "Start date is required to get time series data", "start_date")
        self._require(end_date, "End date is required to get time series data", "end_date")
        self._require(granularity, "Granularity is required to get time series data", "granularity")
        self._require(data_type, "Data type is required to get time series data", "data_type")
        params = {
            "sellerSku": seller_sku,
            "startDate": start_date,
            "endDate": end_date,
            "granularity": granularity,
            "dataType": data_type,
        }
        return await self._request("GET", "/timeSeries", "get_time_series", params=params)

    async def get_all_programs(self, max_pages: int | None = None) -> list[dict[str, Any]]:
        return await self._collect(
            lambda token: self.get_programs(next_token=token),
            lambda page: page.get("programs", []),
            lambda page: page.get("nextToken"),
            max_pages,
        )

    async def get_all_recommendations(
        self, max_pages: int | None = None, **filters
    ) -> list[dict[str, Any]]:
        filters.pop("next_token", None)
        return await self._collect(
            lambda token: self.get_recommendations(next_token=token, **filters),
            lambda page: page.get("recommendations", []),
            lambda page: page.get("nextToken"),
            max_pages,
        )
