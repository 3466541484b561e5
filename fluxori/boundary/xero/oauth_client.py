"""
Xero OAuth 2.0 client.

Authorization-code flow, token refresh and revocation through Authlib's
httpx integration, plus the tenant connections lookup that follows a
successful grant.

Dependencies: authlib, httpx, fluxori.configs
System role: Xero identity provider adapter
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable

import httpx
from authlib.common.errors import AuthlibBaseError
from authlib.integrations.httpx_client import AsyncOAuth2Client

from fluxori.configs.xero import XeroSettings
from fluxori.core.exceptions import AuthenticationError, XeroApiError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class XeroTokenSet:
    """Token endpoint response reduced to what Fluxori stores."""

    access_token: str
    refresh_token: str
    expires_at: float
    scope: str | None = None
    id_token: str | None = None


@dataclass(frozen=True)
class XeroTenant:
    tenant_id: str
    tenant_name: str | None
    tenant_type: str | None = None


class XeroOAuthClient:
    """
    Wraps the Xero identity endpoints.

    Args:
        settings: XERO_* configuration
        transport: Optional httpx transport (tests use httpx.MockTransport)
        clock: Time source used to turn expires_in into expires_at
    """

    def __init__(
        self,
        settings: XeroSettings,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.settings = settings
        self._transport = transport
        self._clock = clock

    def _session(self) -> AsyncOAuth2Client:
        client_kwargs: dict[str, Any] = {"timeout": self.settings.request_timeout}
        if self._transport is not None:
            client_kwargs["transport"] = self._transport
        return AsyncOAuth2Client(
            client_id=self.settings.client_id,
            client_secret=self.settings.client_secret,
            scope=self.settings.scopes,
            redirect_uri=self.settings.redirect_uri,
            **client_kwargs,
        )

    def _to_token_set(self, token: dict[str, Any]) -> XeroTokenSet:
        if not token.get("access_token") or not token.get("refresh_token"):
            raise AuthenticationError("Xero token response is missing tokens")
        return XeroTokenSet(
            access_token=token["access_token"],
            refresh_token=token["refresh_token"],
            expires_at=self._clock() + float(token.get("expires_in", 1800)),
            scope=token.get("scope"),
            id_token=token.get("id_token"),
        )

    async def create_authorization_url(self, state: str) -> str:
        """
        Build the Xero consent URL.

        Args:
            state: Opaque state echoed back to the callback
        """
        async with self._session() as session:
            url, _ = session.create_authorization_url(self.settings.authorize_url, state=state)
        return url

    async def exchange_code(self, code: str) -> XeroTokenSet:
        """
        Exchange an authorization code for tokens.

        Raises:
            AuthenticationError: If Xero rejects the code or is unreachable
        """
        async with self._session() as session:
            try:
                token = await session.fetch_token(
                    self.settings.token_url,
                    grant_type="authorization_code",
                    code=code,
                )
            except (AuthlibBaseError, httpx.HTTPError) as e:
                logger.error("Xero code exchange failed", extra={"error": str(e)})
                raise AuthenticationError(
                    "Failed to exchange authorization code with Xero",
                    details={"error_type": type(e).__name__},
                ) from e
        return self._to_token_set(token)

    async def refresh(self, refresh_token: str) -> XeroTokenSet:
        """
        Obtain a fresh access token. Xero rotates the refresh token too.

        Raises:
            AuthenticationError: If the refresh token was revoked or expired
        """
        async with self._session() as session:
            try:
                token = await session.refresh_token(self.settings.token_url, refresh_token=refresh_token)
            except (AuthlibBaseError, httpx.HTTPError) as e:
                logger.error("Xero token refresh failed", extra={"error": str(e)})
                raise AuthenticationError(
                    "Failed to refresh Xero access token",
                    details={"error_type": type(e).__name__},
                ) from e
        return self._to_token_set(token)

    async def revoke(self, refresh_token: str) -> None:
        async with self._session() as session:
            try:
                response = await session.revoke_token(
                    self.settings.revoke_url,
                    token=refresh_token,
                    token_type_hint="refresh_token",
                )
            except httpx.HTTPError as e:
                raise XeroApiError(
                    "Failed to revoke Xero token", operation="revoke", details={"error": str(e)}
                ) from e
        if response.is_error:
            raise XeroApiError(
                "Failed to revoke Xero token",
                status_code=response.status_code,
                operation="revoke",
            )

    async def get_connections(self, access_token: str) -> list[XeroTenant]:
        """
        List the Xero tenants this grant can access.

        Raises:
            AuthenticationError: 401 from Xero
            XeroApiError: Any other failure
        """
        client_kwargs = {"transport": self._transport} if self._transport else {}
        async with httpx.AsyncClient(timeout=self.settings.request_timeout, **client_kwargs) as client:
            try:
                response = await client.get(
                    self.settings.connections_url,
                    headers={"Authorization": f"Bearer {access_token}", "Accept": "application/json"},
                )
            except httpx.HTTPError as e:
                raise XeroApiError(
                    "Failed to reach Xero connections endpoint",
                    operation="get_connections",
                    details={"error": str(e)},
                ) from e

        if response.status_code == 401:
            raise AuthenticationError("Xero rejected the access token")
        if response.is_error:
            raise XeroApiError(
                "Failed to list Xero connections",
                status_code=response.status_code,
                operation="get_connections",
            )
        return [
            XeroTenant(
                tenant_id=item["tenantId"],
                tenant_name=item.get("tenantName"),
                tenant_type=item.get("tenantType"),
            )
            for item in response.json()
            if item.get("tenantId")
        ]
