"""
Fixtures for marketplace and Xero boundary tests.

Provides: static LWA token provider, recording httpx.MockTransport and
an SP-API factory wired to it
Dependencies: httpx
System role: Offline HTTP harness for vendor clients
"""

import httpx
import pytest

from fluxori.boundary.marketplace.client import SellingPartnerClient
from fluxori.boundary.marketplace.factory import SellingPartnerFactory


class StaticTokenProvider:
    """Hands out numbered tokens and counts invalidations."""

    def __init__(self) -> None:
        self.issued = 0
        self.invalidated = 0

    async def get_access_token(self) -> str:
        self.issued += 1
        return f"token-{self.issued}"

    def invalidate(self) -> None:
        self.invalidated += 1


class Router:
    """Queue of canned responses; records every request it serves."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._responses: list = []

    def add(
        self, status_code: int = 200, json=None, exc: Exception | None = None, headers=None, text: str | None = None
    ) -> "Router":
        if exc is not None:
            self._responses.append(exc)
        elif text is not None:
            self._responses.append(httpx.Response(status_code, text=text, headers=headers))
        else:
            self._responses.append(httpx.Response(status_code, json=json, headers=headers))
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self._responses.pop(0) if len(self._responses) > 1 else self._responses[0]
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def router() -> Router:
    return Router()


@pytest.fixture
def token_provider() -> StaticTokenProvider:
    return StaticTokenProvider()


@pytest.fixture
def sp_client(router, token_provider):
    return SellingPartnerClient(
        token_provider,
        "https://sellingpartnerapi.test",
        max_retries=2,
        backoff_initial=0,
        backoff_max=0,
        backoff_jitter=0,
        transport=router.transport,
    )


@pytest.fixture
def sp_factory(sp_client) -> SellingPartnerFactory:
    return SellingPartnerFactory(sp_client, marketplace_id="ATVPDKIKX0DER", seller_id="A1SELLER", max_pages=5)
