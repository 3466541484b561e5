"""
Test suite for the SP-API transport and LWA token provider.

Exercises SellingPartnerClient against httpx.MockTransport: auth header,
parameter cleanup, retries on throttling, token refresh on 401 and the
mapping of failure statuses to Fluxori errors.

System role: Verification of marketplace HTTP plumbing
"""

from types import SimpleNamespace

import httpx
import pytest

from fluxori.boundary.marketplace.client import SellingPartnerClient
from fluxori.boundary.marketplace.lwa_auth import LwaTokenProvider
from fluxori.core.exceptions import (
    AuthenticationError,
    InvalidInputError,
    MarketplaceApiError,
    NotFoundError,
)


class TestSellingPartnerClient:
    """Test suite for SellingPartnerClient.request()."""

    @pytest.mark.asyncio
    async def test_request_signs_and_drops_none_params(self, sp_client, router) -> None:
        # Arrange
        router.add(200, {"payload": {"ok": True}})

        # Act
        response = await sp_client.request(
            "GET", "/orders/v0/orders", params={"MarketplaceIds": "M1", "NextToken": None}
        )

        # Assert
        [request] = router.requests
        assert response.data == {"payload": {"ok": True}}
        assert request.headers["x-amz-access-token"] == "token-1"
        assert dict(request.url.params) == {"MarketplaceIds": "M1"}

    @pytest.mark.asyncio
    async def test_throttled_request_is_retried(self, sp_client, router) -> None:
        # Arrange
        router.add(429, {"errors": [{"code": "QuotaExceeded", "message": "Slow down"}]}).add(200, {"items": []})

        # Act
        response = await sp_client.request("GET", "/catalog/2022-04-01/items")

        # Assert
        assert response.status_code == 200
        assert len(router.requests) == 2

    @pytest.mark.asyncio
    async def test_exhausted_retries_raise_marketplace_error(self, sp_client, router) -> None:
        # Arrange
        router.add(503, {"errors": [{"code": "ServiceUnavailable", "message": "Try later"}]})

        # Act
        with pytest.raises(MarketplaceApiError) as exc_info:
            await sp_client.request("GET", "/orders/v0/orders", operation="orders.get_orders")

        # Assert
        assert exc_info.value.status_code == 503
        assert exc_info.value.message == "Try later"
        assert exc_info.value.details["module"] == "orders"
        assert len(router.requests) == 3

    @pytest.mark.asyncio
    async def test_unauthorized_refreshes_token_once(self, sp_client, router, token_provider) -> None:
        # Arrange
        router.add(401, {"errors": [{"code": "Unauthorized"}]}).add(200, {"payload": {}})

        # Act
        await sp_client.request("GET", "/sales/v1/orderMetrics")

        # Assert
        assert token_provider.invalidated == 1
        assert [r.headers["x-amz-access-token"] for r in router.requests] == ["token-1", "token-2"]

    @pytest.mark.asyncio
    async def test_not_found_maps_to_not_found_error(self, sp_client, router) -> None:
        router.add(404, {"errors": [{"code": "NotFound", "message": "No such order"}]})

        with pytest.raises(NotFoundError) as exc_info:
            await sp_client.request("GET", "/orders/v0/orders/1", operation="orders.get_order")

        assert exc_info.value.details["resource"] == "orders"

    @pytest.mark.asyncio
    async def test_bad_request_maps_to_invalid_input(self, sp_client, router) -> None:
        router.add(400, {"errors": [{"code": "InvalidInput", "message": "Bad marketplace"}]})

        with pytest.raises(InvalidInputError) as exc_info:
            await sp_client.request("GET", "/orders/v0/orders")

        assert exc_info.value.message == "Bad marketplace"
        assert exc_info.value.details["status_code"] == 400

    @pytest.mark.asyncio
    async def test_network_errors_are_retried_then_wrapped(self, sp_client, router) -> None:
        # Arrange
        router.add(exc=httpx.ConnectError("refused"))

        # Act
        with pytest.raises(MarketplaceApiError) as exc_info:
            await sp_client.request("GET", "/orders/v0/orders")

        # Assert
        assert exc_info.value.details["error_type"] == "ConnectError"
        assert len(router.requests) == 3

    @pytest.mark.asyncio
    async def test_rate_limit_header_is_exposed(self, sp_client, router) -> None:
        # Arrange
        router.add(200, {}, headers={"x-amzn-RateLimit-Limit": "0.5"})

        # Act
        response = await sp_client.request("GET", "/fba/inventory/v1/summaries")

        # Assert
        assert response.rate_limit == 0.5

    @pytest.mark.parametrize(("attempt", "expected"), [(1, 2.0), (2, 4.0), (3, 8.0), (6, 30.0)])
    def test_backoff_doubles_from_initial_delay_up_to_cap(self, token_provider, attempt, expected) -> None:
        # Arrange
        client = SellingPartnerClient(
            token_provider, "https://sellingpartnerapi.test", backoff_initial=2, backoff_max=30, backoff_jitter=0
        )

        # Act
        delay = client._wait(SimpleNamespace(attempt_number=attempt))

        # Assert
        assert delay == expected


class TestLwaTokenProvider:
    """Test suite for LwaTokenProvider."""

    @pytest.mark.asyncio
    async def test_token_is_fetched_once_and_cached(self, router) -> None:
        # Arrange
        router.add(200, {"access_token": "Atza|abc", "token_type": "bearer", "expires_in": 3600})
        provider = LwaTokenProvider("client", "secret", "Atzr|refresh", transport=router.transport)

        # Act
        first = await provider.get_access_token()
        second = await provider.get_access_token()

        # Assert
        assert first == second == "Atza|abc"
        assert len(router.requests) == 1
        body = router.requests[0].content.decode()
        assert "grant_type=refresh_token" in body
        assert "client_secret=secret" in body

    @pytest.mark.asyncio
    async def test_token_near_expiry_is_refreshed(self, router) -> None:
        # Arrange
        now = [1000.0]
        router.add(200, {"access_token": "first", "token_type": "bearer", "expires_in": 120})
        router.add(200, {"access_token": "second", "token_type": "bearer", "expires_in": 3600})
        provider = LwaTokenProvider(
            "client", "secret", "refresh", transport=router.transport, clock=lambda: now[0]
        )
        await provider.get_access_token()

        # Act
        now[0] += 61
        token = await provider.get_access_token()

        # Assert
        assert token == "second"

    @pytest.mark.asyncio
    async def test_missing_credentials_raise(self) -> None:
        provider = LwaTokenProvider("", "", "")

        with pytest.raises(AuthenticationError):
            await provider.get_access_token()
