"""
Data Kiosk API module.

GraphQL-style analytics queries, the documents they produce and
scheduled jobs.

Dependencies: fluxori.boundary.marketplace.base_module
System role: Marketplace analytics access
"""

from typing import Any

from fluxori.boundary.marketplace.base_module import BaseApiModule


class DataKioskModule(BaseApiModule):
    """Data Kiosk API (default version 2023-11-15)."""

    module_name = "dataKiosk"
    path_template = "/dataKiosk/{version}"

    async def execute_query(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        self._require(query, "Query expression is required", "query")
        body = {"query": query}
        if variables:
            body["variables"] = variables
        return await self._request("POST", "/query", "execute_query", json=body)

    async def create_document(self, name: str, query: str, content_type: str) -> dict[str, Any]:
        if not (name and query and content_type):
            self._require(None, "Document name, data query, and content type are required", "name")
        body = {"name": name, "dataQuery": {"query": query}, "contentType": content_type}
        return await self._request("POST", "/documents", "create_document", json=body)

    async def get_documents(self, page_size: int | None = None, next_token: str | None = None) -> dict[str, Any]:
        params = {"pageSize": page_size, "nextToken": next_token}
        return await self._request("GET", "/documents", "get_documents", params=params)

    async def get_document(self, document_id: str) -> dict[str, Any]:
        self._require(document_id, "Document ID is required", "document_id")
        return await self._request("GET", f"/documents/{document_id}", "get_document")

    async def update_document(self, document_id: str, changes: dict[str, Any]) -> dict[str, Any]:
        self._require(document_id, "Document ID is required", "document_id")
        self._require(changes, "Document changes are required", "changes")
        return await self._request("PATCH", f"/documents/{document_id}", "update_document", json=changes)

    async def delete_document(self, document_id: str) -> None:
        self._require(document_id, "Document ID is required", "document_id")
        await self._request("DELETE", f"/documents/{document_id}", "delete_document")

    async def get_document_content(self, document_id: str, format: str | None = None) -> Any:
        self._require(document_id, "Document ID is required", "document_id")
        return await self._request(
            "GET", f"/documents/{document_id}/content", "get_document_content", params={"format": format}
        )

    async def schedule_document_job(self, document_id: str, schedule: dict[str, Any]) -> dict[str, Any]:
        self._require(document_id, "Document ID is required", "document_id")
        self._require(schedule, "Schedule is required", "schedule")
        return await self._request(
            "POST", f"/documents/{document_id}/jobs", "schedule_document_job", json=schedule
        )

    async def get_jobs(self, page_size: int | None = None, next_token: str | None = None) -> dict[str, Any]:
        return await self._request(
            "GET", "/jobs", "get_jobs", params={"pageSize": page_size, "nextToken": next_token}
        )

    async def get_job(self, job_id: str) -> dict[str, Any]:
        self._require(job_id, "Job ID is required", "job_id")
        return await self._request("GET", f"/jobs/{job_id}", "get_job")

    async def cancel_job(self, job_id: str) -> None:
        self._require(job_id, "Job ID is required", "job_id")
        await self._request("DELETE", f"/jobs/{job_id}", "cancel_job")

    async def get_all_documents(self, max_pages: int | None = None) -> list[dict[str, Any]]:
        return await self._collect(
            lambda token: self.get_documents(next_token=token),
            lambda page: page.get("documents", []),
            lambda page: page.get("nextToken"),
            max_pages,
        )
