"""
Xero Accounting API client.

Async httpx wrapper for the accounting endpoints Fluxori uses: contacts,
invoices, accounts, tax rates and the organisation record. Every call
is scoped to one tenant through the xero-tenant-id header.

Dependencies: httpx, tenacity
System role: Xero accounting adapter
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable
from uuid import UUID

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
    wait_random,
)

from fluxori.core.exceptions import (
    AuthenticationError,
    InvalidInputError,
    NotFoundError,
    XeroApiError,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.xero.com/api.xro/2.0"
RETRYABLE_STATUS_CODES = frozenset({429, 503})


@dataclass(frozen=True)
class XeroCredentials:
    """Authenticated tenant context handed to Xero services."""

    user_id: UUID
    organization_id: UUID
    tenant_id: str
    access_token: str


class _Throttled(Exception):
    def __init__(self, response: httpx.Response) -> None:
        self.response = response
        super().__init__(f"Xero responded {response.status_code}")


def _validation_messages(body: Any) -> list[str]:
    """Collect ValidationErrors from a Xero 400 body."""
    if not isinstance(body, dict):
        return []
    messages = []
    for element in body.get("Elements") or []:
        for error in element.get("ValidationErrors") or []:
            if error.get("Message"):
                messages.append(error["Message"])
    return messages


def require_id(entity: Any, key: str, operation: str) -> str:
    """
    Identifier ``key`` of an entity Xero returned.

    Raises:
        XeroApiError: The response is not an object or lacks the identifier
    """
    value = entity.get(key) if isinstance(entity, dict) else None
    if not value:
        raise XeroApiError(
            f"Xero response has no {key}",
            operation=operation,
            details={"received_keys": sorted(entity) if isinstance(entity, dict) else []},
        )
    return str(value)


class XeroApiClient:
    """
    Tenant-scoped Accounting API client.

    Args:
        access_token: Valid OAuth bearer token
        tenant_id: Xero tenant id
        base_url: Accounting API root
        timeout: Per-request timeout in seconds
        max_retries: Retries on 429/503
        backoff_initial: First backoff delay in seconds
        backoff_max: Cap on a single backoff delay
        backoff_jitter: Upper bound of the random delay added to each backoff
        transport: Optional httpx transport (tests use httpx.MockTransport)
    """

    def __init__(
        self,
        access_token: str,
        tenant_id: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        max_retries: int = 2,
        backoff_initial: float = 1.0,
        backoff_max: float = 30.0,
        backoff_jitter: float = 1.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.tenant_id = tenant_id
        self.max_retries = max_retries
        self._wait = wait_exponential(multiplier=backoff_initial, max=backoff_max) + wait_random(
            0, backoff_jitter
        )
        self._http = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
            headers={
                "Authorization": f"Bearer {access_token}",
                "xero-tenant-id": tenant_id,
                "Accept": "application/json",
            },
        )

    @classmethod
    def from_credentials(cls, credentials: XeroCredentials, **kwargs) -> "XeroApiClient":
        return cls(credentials.access_token, credentials.tenant_id, **kwargs)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "XeroApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        operation: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> dict[str, Any]:
        params = {k: v for k, v in (params or {}).items() if v is not None}
        retryer = AsyncRetrying(
            retry=retry_if_exception_type(_Throttled),
            stop=stop_after_attempt(self.max_retries + 1),
            wait=self._wait,
            reraise=True,
        )
        try:
            async for attempt in retryer:
                with attempt:
                    response = await self._http.request(method, path, params=params, json=json)
                    if response.status_code in RETRYABLE_STATUS_CODES:
                        raise _Throttled(response)
        except _Throttled as e:
            response = e.response
        except httpx.HTTPError as e:
            raise XeroApiError(
                f"Network error calling Xero: {e}",
                operation=operation,
                details={"error_type": type(e).__name__},
            ) from e

        if response.is_error:
            self._raise_for_status(response, operation)
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise XeroApiError(
                "Xero returned a response that is not JSON",
                status_code=response.status_code,
                operation=operation,
                details={"content_type": response.headers.get("content-type")},
            ) from e

    def _raise_for_status(self, response: httpx.Response, operation: str) -> None:
        try:
            body = response.json()
        except ValueError:
            body = None
        message = (body or {}).get("Message") if isinstance(body, dict) else None
        message = message or response.text or response.reason_phrase
        logger.warning(
            "Xero call failed",
            extra={"operation": operation, "status_code": response.status_code, "error": message},
        )

        if response.status_code == 401:
            raise AuthenticationError("Xero rejected the access token", details={"operation": operation})
        if response.status_code == 404:
            raise NotFoundError(message, resource=operation)
        if response.status_code == 400:
            errors = _validation_messages(body)
            raise InvalidInputError(
                "; ".join(errors) if errors else message,
                details={"validation_errors": errors},
            )
        raise XeroApiError(message, status_code=response.status_code, operation=operation)

    @staticmethod
    def _first(data: dict[str, Any], key: str) -> dict[str, Any]:
        items = data.get(key) or []
        if not items:
            raise XeroApiError(f"Xero returned no {key}", operation=key)
        return items[0]

    # Contacts

    async def get_contacts(
        self,
        page: int | None = None,
        where: str | None = None,
        include_archived: bool = False,
    ) -> list[dict[str, Any]]:
        params = {
            "page": page,
            "where": where,
            "includeArchived": "true" if include_archived else None,
        }
        data = await self._request("GET", "/Contacts", "get_contacts", params=params)
        return data.get("Contacts", [])

    async def get_contact(self, contact_id: str) -> dict[str, Any]:
        data = await self._request("GET", f"/Contacts/{contact_id}", "get_contact")
        return self._first(data, "Contacts")

    async def create_contact(self, contact: dict[str, Any]) -> dict[str, Any]:
        data = await self._request("POST", "/Contacts", "create_contact", json={"Contacts": [contact]})
        return self._first(data, "Contacts")

    async def update_contact(self, contact_id: str, contact: dict[str, Any]) -> dict[str, Any]:
        body = {"Contacts": [{**contact, "ContactID": contact_id}]}
        data = await self._request("POST", f"/Contacts/{contact_id}", "update_contact", json=body)
        return self._first(data, "Contacts")

    # Invoices

    async def get_invoices(
        self,
        page: int | None = None,
        where: str | None = None,
        statuses: list[str] | None = None,
    ) -> list[dict[str, Any]]:
        params = {
            "page": page,
            "where": where,
            "Statuses": ",".join(statuses) if statuses else None,
        }
        data = await self._request("GET", "/Invoices", "get_invoices", params=params)
        return data.get("Invoices", [])

    async def get_invoice(self, invoice_id: str) -> dict[str, Any]:
        data = await self._request("GET", f"/Invoices/{invoice_id}", "get_invoice")
        return self._first(data, "Invoices")

    async def create_invoice(self, invoice: dict[str, Any]) -> dict[str, Any]:
        data = await self._request("POST", "/Invoices", "create_invoice", json={"Invoices": [invoice]})
        return self._first(data, "Invoices")

    # Settings

    async def get_accounts(self, where: str | None = None) -> list[dict[str, Any]]:
        data = await self._request("GET", "/Accounts", "get_accounts", params={"where": where})
        return data.get("Accounts", [])

    async def get_tax_rates(self) -> list[dict[str, Any]]:
        data = await self._request("GET", "/TaxRates", "get_tax_rates")
        return data.get("TaxRates", [])

    async def get_organisation(self) -> dict[str, Any]:
        data = await self._request("GET", "/Organisation", "get_organisation")
        return self._first(data, "Organisations")


XeroClientFactory = Callable[[XeroCredentials], XeroApiClient]
