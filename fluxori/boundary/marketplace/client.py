"""
Selling Partner API HTTP client.

Thin async wrapper over httpx that signs requests with the LWA access
token, retries throttled (429) and transient 5xx responses with
exponential backoff, refreshes the token once on 401/403 and translates
failures into Fluxori errors.

Dependencies: httpx, tenacity, fluxori.boundary.marketplace.lwa_auth
System role: Transport for every SP-API module
"""

import logging
from dataclasses import dataclass, field
from typing import Any

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
    wait_random,
)

from fluxori.boundary.marketplace.lwa_auth import LwaTokenProvider
from fluxori.core.exceptions import (
    InvalidInputError,
    MarketplaceApiError,
    NotFoundError,
)

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})
AUTH_STATUS_CODES = frozenset({401, 403})
RATE_LIMIT_HEADER = "x-amzn-ratelimit-limit"


@dataclass
class ApiResponse:
    """Decoded SP-API response."""

    data: Any
    status_code: int
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def rate_limit(self) -> float | None:
        value = self.headers.get(RATE_LIMIT_HEADER)
        try:
            return float(value) if value is not None else None
        except ValueError:
            return None

    @property
    def request_id(self) -> str | None:
        return self.headers.get("x-amzn-requestid")


class RetryableResponseError(Exception):
    """Internal signal for tenacity; never escapes the client."""

    def __init__(self, response: httpx.Response) -> None:
        self.response = response
        super().__init__(f"Retryable status {response.status_code}")


def _error_message(response: httpx.Response) -> tuple[str, list]:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase, []
    errors = body.get("errors") if isinstance(body, dict) else None
    if errors:
        first = errors[0]
        return first.get("message") or first.get("code") or response.reason_phrase, errors
    return response.reason_phrase, []


class SellingPartnerClient:
    """
    Async SP-API transport.

    Args:
        token_provider: LWA access token source
        endpoint: Regional base URL
        timeout: Per-request timeout in seconds
        max_retries: Extra attempts for 429/5xx/network errors
        backoff_initial: First backoff delay in seconds
        backoff_max: Cap on a single backoff delay
        backoff_jitter: Random jitter added to each delay
        transport: Optional httpx transport (tests use httpx.MockTransport)
    """

    def __init__(
        self,
        token_provider: LwaTokenProvider,
        endpoint: str,
        timeout: float = 30.0,
        max_retries: int = 3,
        backoff_initial: float = 1.0,
        backoff_max: float = 30.0,
        backoff_jitter: float = 1.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.token_provider = token_provider
        self.endpoint = endpoint.rstrip("/")
        self.max_retries = max_retries
        self._wait = wait_exponential(multiplier=backoff_initial, max=backoff_max) + wait_random(
            0, backoff_jitter
        )
        self._http = httpx.AsyncClient(
            base_url=self.endpoint,
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json", "User-Agent": "fluxori-backend/0.1"},
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "SellingPartnerClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
        operation: str | None = None,
    ) -> ApiResponse:
        """
        Send one SP-API call.

        Args:
            method: HTTP verb
            path: Path below the regional endpoint
            params: Query string parameters (None values are dropped)
            json: JSON request body
            operation: "<module>.<method>" label used in errors and logs

        Returns:
            ApiResponse: Decoded body, status and headers

        Raises:
            NotFoundError: 404
            InvalidInputError: 400 or 422
            MarketplaceApiError: Any other failure, including exhausted retries
        """
        params = {k: v for k, v in (params or {}).items() if v is not None}
        retryer = AsyncRetrying(
            retry=retry_if_exception_type((RetryableResponseError, httpx.TransportError)),
            stop=stop_after_attempt(self.max_retries + 1),
            wait=self._wait,
            before_sleep=lambda retry_state: logger.warning(
                f"{__name__}:{operation or path} - Retry {retry_state.attempt_number}/{self.max_retries}",
                extra={"operation": operation, "path": path},
            ),
            reraise=True,
        )

        try:
            async for attempt in retryer:
                with attempt:
                    response = await self._send_authenticated(method, path, params, json)
                    if response.status_code in RETRYABLE_STATUS_CODES:
                        raise RetryableResponseError(response)
        except RetryableResponseError as e:
            self._raise_for_status(e.response, operation)
        except httpx.TransportError as e:
            raise MarketplaceApiError(
                f"Network error calling SP-API: {e}",
                operation=operation,
                details={"error_type": type(e).__name__},
            ) from e

        if response.is_error:
            self._raise_for_status(response, operation)

        return ApiResponse(
            data=response.json() if response.content else {},
            status_code=response.status_code,
            headers={k.lower(): v for k, v in response.headers.items()},
        )

    async def _send_authenticated(
        self,
        method: str,
        path: str,
        params: dict[str, Any],
        json: Any,
    ) -> httpx.Response:
        token = await self.token_provider.get_access_token()
        response = await self._http.request(
            method, path, params=params, json=json, headers={"x-amz-access-token": token}
        )
        if response.status_code in AUTH_STATUS_CODES:
            logger.info("SP-API rejected access token, refreshing", extra={"path": path})
            self.token_provider.invalidate()
            token = await self.token_provider.get_access_token()
            response = await self._http.request(
                method, path, params=params, json=json, headers={"x-amz-access-token": token}
            )
        return response

    def _raise_for_status(self, response: httpx.Response, operation: str | None) -> None:
        message, errors = _error_message(response)
        details = {"status_code": response.status_code, "errors": errors}
        module = operation.split(".", 1)[0] if operation else None
        logger.warning(
            "SP-API call failed",
            extra={"operation": operation, "status_code": response.status_code, "error": message},
        )

        if response.status_code == 404:
            raise NotFoundError(message, resource=module, details=details)
        if response.status_code in (400, 422):
            raise InvalidInputError(message, details=details)
        raise MarketplaceApiError(
            message,
            status_code=response.status_code,
            module=module,
            operation=operation,
            details={"errors": errors},
        )
