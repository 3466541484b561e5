"""
Reports API module.

Dependencies: fluxori.boundary.marketplace.base_module
System role: Marketplace report generation
"""

from typing import Any

from fluxori.boundary.marketplace.base_module import BaseApiModule


class ReportsModule(BaseApiModule):
    """Reports API (default version 2021-06-30)."""

    module_name = "reports"
    path_template = "/reports/{version}"

    async def create_report(
        self,
        report_type: str,
        marketplace_ids: list[str] | None = None,
        data_start_time: str | None = None,
        data_end_time: str | None = None,
        report_options: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """
        Request a report.

        Returns:
            dict: {"reportId": "..."}
        """
        self._require(report_type, "Report type is required", "report_type")
        body: dict[str, Any] = {
            "reportType": report_type,
            "marketplaceIds": marketplace_ids or [self._marketplace(None, "report creation")],
        }
        if data_start_time:
            body["dataStartTime"] = data_start_time
        if data_end_time:
            body["dataEndTime"] = data_end_time
        if report_options:
            body["reportOptions"] = report_options
        return await self._request("POST", "/reports", "create_report", json=body)

    async def get_report(self, report_id: str) -> dict[str, Any]:
        self._require(report_id, "Report ID is required", "report_id")
        return await self._request("GET", f"/reports/{report_id}", "get_report")

    async def cancel_report(self, report_id: str) -> None:
        self._require(report_id, "Report ID is required", "report_id")
        await self._request("DELETE", f"/reports/{report_id}", "cancel_report")

    async def get_reports(
        self,
        report_types: list[str] | None = None,
        processing_statuses: list[str] | None = None,
        page_size: int | None = None,
        next_token: str | None = None,
    ) -> dict[str, Any]:
        params = {
            "reportTypes": self._join(report_types),
            "processingStatuses": self._join(processing_statuses),
            "pageSize": page_size,
            "nextToken": next_token,
        }
        return await self._request("GET", "/reports", "get_reports", params=params)

    async def get_report_document(self, report_document_id: str) -> dict[str, Any]:
        """Document metadata including the pre-signed download URL."""
        self._require(report_document_id, "Report document ID is required", "report_document_id")
        return await self._request("GET", f"/documents/{report_document_id}", "get_report_document")

    async def get_all_reports(self, max_pages: int | None = None, **filters) -> list[dict[str, Any]]:
        filters.pop("next_token", None)
        return await self._collect(
            lambda token: self.get_reports(next_token=token, **filters),
            lambda page: page.get("reports", []),
            lambda page: page.get("nextToken"),
            max_pages,
        )
