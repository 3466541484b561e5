"""
Test suite for the Xero boundary: OAuth client, state codec and
Accounting API client.

All HTTP is served by httpx.MockTransport; no network access.
"""

import base64
import json
from urllib.parse import parse_qs, urlparse

import pytest

from fluxori.boundary.xero.api_client import XeroApiClient, XeroCredentials
from fluxori.boundary.xero.oauth_client import XeroOAuthClient
from fluxori.boundary.xero.state import OAuthState, decode_state, encode_state
from fluxori.configs.xero import XeroSettings
from fluxori.core.exceptions import (
    AuthenticationError,
    InvalidInputError,
    NotFoundError,
    XeroApiError,
)


@pytest.fixture
def xero_settings() -> XeroSettings:
    return XeroSettings(client_id="xero-client", client_secret="xero-secret")


@pytest.fixture
def api_client(router):
    return XeroApiClient(
        "access-1",
        "tenant-1",
        base_url="https://api.xero.test/api.xro/2.0",
        backoff_initial=0,
        backoff_max=0,
        backoff_jitter=0,
        transport=router.transport,
    )


class TestOAuthState:
    """Test suite for encode_state()/decode_state()."""

    def test_round_trip_keeps_context(self) -> None:
        # Act
        state = decode_state(encode_state("u-1", "o-1", "https://app.test/done"))

        # Assert
        assert state == OAuthState("u-1", "o-1", "https://app.test/done")

    def test_payload_holds_only_tenant_context(self) -> None:
        # Act
        encoded = encode_state("u-1", "o-1")

        # Assert
        payload = json.loads(base64.urlsafe_b64decode(encoded + "=" * (-len(encoded) % 4)))
        assert payload == {"user_id": "u-1", "organization_id": "o-1", "redirect_url": None}

    def test_encoded_state_is_url_safe(self) -> None:
        encoded = encode_state("u-1", "o-1")

        assert "=" not in encoded
        assert "+" not in encoded and "/" not in encoded

    @pytest.mark.parametrize("state", ["", "not base64 !!", "e30"])
    def test_invalid_state_is_rejected(self, state: str) -> None:
        with pytest.raises(InvalidInputError) as exc_info:
            decode_state(state)

        assert exc_info.value.details["field"] == "state"


class TestXeroOAuthClient:
    """Test suite for XeroOAuthClient."""

    @pytest.mark.asyncio
    async def test_authorization_url_carries_client_and_state(self, xero_settings) -> None:
        # Act
        url = await XeroOAuthClient(xero_settings).create_authorization_url("abc123")

        # Assert
        query = parse_qs(urlparse(url).query)
        assert url.startswith(xero_settings.authorize_url)
        assert query["client_id"] == ["xero-client"]
        assert query["state"] == ["abc123"]
        assert query["response_type"] == ["code"]
        assert "offline_access" in query["scope"][0]

    @pytest.mark.asyncio
    async def test_exchange_code_returns_token_set(self, xero_settings, router) -> None:
        # Arrange
        router.add(
            200,
            {"access_token": "at", "refresh_token": "rt", "expires_in": 1800, "token_type": "Bearer"},
        )
        client = XeroOAuthClient(xero_settings, transport=router.transport, clock=lambda: 1000.0)

        # Act
        tokens = await client.exchange_code("auth-code")

        # Assert
        assert (tokens.access_token, tokens.refresh_token, tokens.expires_at) == ("at", "rt", 2800.0)
        assert "code=auth-code" in router.requests[0].content.decode()

    @pytest.mark.asyncio
    async def test_rejected_code_raises_authentication_error(self, xero_settings, router) -> None:
        router.add(400, {"error": "invalid_grant"})
        client = XeroOAuthClient(xero_settings, transport=router.transport)

        with pytest.raises(AuthenticationError):
            await client.exchange_code("stale")

    @pytest.mark.asyncio
    async def test_refresh_without_rotated_token_is_rejected(self, xero_settings, router) -> None:
        router.add(200, {"access_token": "at", "expires_in": 1800, "token_type": "Bearer", "refresh_token": ""})
        client = XeroOAuthClient(xero_settings, transport=router.transport)

        with pytest.raises(AuthenticationError):
            await client.refresh("old")

    @pytest.mark.asyncio
    async def test_get_connections_parses_tenants(self, xero_settings, router) -> None:
        # Arrange
        router.add(
            200,
            [
                {"tenantId": "t-1", "tenantName": "Acme Ltd", "tenantType": "ORGANISATION"},
                {"tenantName": "no id"},
            ],
        )

        # Act
        tenants = await XeroOAuthClient(xero_settings, transport=router.transport).get_connections("at")

        # Assert
        assert [(t.tenant_id, t.tenant_name) for t in tenants] == [("t-1", "Acme Ltd")]
        assert router.requests[0].headers["Authorization"] == "Bearer at"

    @pytest.mark.asyncio
    async def test_get_connections_unauthorized(self, xero_settings, router) -> None:
        router.add(401, {})

        with pytest.raises(AuthenticationError):
            await XeroOAuthClient(xero_settings, transport=router.transport).get_connections("bad")


class TestXeroApiClient:
    """Test suite for XeroApiClient."""

    @pytest.mark.asyncio
    async def test_requests_carry_tenant_and_bearer(self, api_client, router) -> None:
        # Arrange
        router.add(200, {"Contacts": [{"ContactID": "c-1", "Name": "Jane"}]})

        # Act
        contacts = await api_client.get_contacts(where='Name=="Jane"')

        # Assert
        [request] = router.requests
        assert contacts == [{"ContactID": "c-1", "Name": "Jane"}]
        assert request.headers["xero-tenant-id"] == "tenant-1"
        assert request.headers["Authorization"] == "Bearer access-1"
        assert request.url.path == "/api.xro/2.0/Contacts"
        assert "includeArchived" not in request.url.params

    @pytest.mark.asyncio
    async def test_create_invoice_wraps_body_and_returns_first(self, api_client, router) -> None:
        # Arrange
        router.add(200, {"Invoices": [{"InvoiceID": "i-1", "InvoiceNumber": "INV-1"}]})

        # Act
        invoice = await api_client.create_invoice({"Type": "ACCREC"})

        # Assert
        assert invoice["InvoiceID"] == "i-1"
        assert json.loads(router.requests[0].content) == {"Invoices": [{"Type": "ACCREC"}]}

    @pytest.mark.asyncio
    async def test_rate_limited_call_is_retried(self, api_client, router) -> None:
        router.add(429, {}).add(200, {"Accounts": [{"Code": "200"}]})

        accounts = await api_client.get_accounts()

        assert accounts == [{"Code": "200"}]
        assert len(router.requests) == 2

    @pytest.mark.asyncio
    async def test_persistent_rate_limit_raises_xero_error(self, api_client, router) -> None:
        router.add(429, {"Message": "Rate limit exceeded"})

        with pytest.raises(XeroApiError) as exc_info:
            await api_client.get_tax_rates()

        assert exc_info.value.status_code == 429
        assert len(router.requests) == 3

    @pytest.mark.asyncio
    async def test_validation_errors_are_joined(self, api_client, router) -> None:
        # Arrange
        router.add(
            400,
            {
                "Message": "A validation exception occurred",
                "Elements": [
                    {"ValidationErrors": [{"Message": "Contact is required"}, {"Message": "Date is invalid"}]}
                ],
            },
        )

        # Act
        with pytest.raises(InvalidInputError) as exc_info:
            await api_client.create_invoice({})

        # Assert
        assert exc_info.value.message == "Contact is required; Date is invalid"
        assert exc_info.value.details["validation_errors"] == ["Contact is required", "Date is invalid"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status_code, error_type",
        [(401, AuthenticationError), (404, NotFoundError), (500, XeroApiError)],
    )
    async def test_status_mapping(self, api_client, router, status_code, error_type) -> None:
        router.add(status_code, {"Message": "nope"})

        with pytest.raises(error_type):
            await api_client.get_invoice("i-404")

    @pytest.mark.asyncio
    async def test_empty_result_raises(self, api_client, router) -> None:
        router.add(200, {"Contacts": []})

        with pytest.raises(XeroApiError):
            await api_client.get_contact("c-1")

    @pytest.mark.asyncio
    async def test_non_json_success_body_raises_xero_error(self, api_client, router) -> None:
        router.add(200, text="<html>Service maintenance</html>", headers={"content-type": "text/html"})

        with pytest.raises(XeroApiError) as exc_info:
            await api_client.get_contacts()

        assert exc_info.value.details["content_type"] == "text/html"

    def test_from_credentials(self, router) -> None:
        # Arrange
        credentials = XeroCredentials(
            user_id="u", organization_id="o", tenant_id="tenant-9", access_token="at-9"
        )

        # Act
        client = XeroApiClient.from_credentials(credentials, transport=router.transport)

        # Assert
        assert client.tenant_id == "tenant-9"
