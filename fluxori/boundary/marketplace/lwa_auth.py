"""
Login With Amazon access tokens.

Exchanges the seller's long-lived LWA refresh token for short-lived
access tokens via Authlib's httpx OAuth2 client and caches the result
until shortly before expiry.

Dependencies: authlib, httpx
System role: SP-API credential provider
"""

import asyncio
import logging
import time
from typing import Callable

import httpx
from authlib.integrations.httpx_client import AsyncOAuth2Client
from authlib.common.errors import AuthlibBaseError

from fluxori.core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

EXPIRY_MARGIN_SECONDS = 60


class LwaTokenProvider:
    """Caches an LWA access token and refreshes it on demand."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        refresh_token: str,
        token_url: str = "https://api.amazon.com/auth/o2/token",
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.client_id = client_id
        self.client_secret = client_secret
        self.refresh_token = refresh_token
        self.token_url = token_url
        self._transport = transport
        self._clock = clock
        self._access_token: str | None = None
        self._expires_at = 0.0
        self._lock = asyncio.Lock()

    @property
    def is_valid(self) -> bool:
        return bool(self._access_token) and self._clock() < self._expires_at - EXPIRY_MARGIN_SECONDS

    def invalidate(self) -> None:
        """Drop the cached token so the next call refreshes."""
        self._access_token = None
        self._expires_at = 0.0

    async def get_access_token(self) -> str:
        """
        Return a valid access token, refreshing when needed.

        Raises:
            AuthenticationError: If credentials are missing or LWA rejects them
        """
        if self.is_valid:
            return self._access_token

        async with self._lock:
            if self.is_valid:
                return self._access_token
            await self._refresh()
            return self._access_token

    async def _refresh(self) -> None:
        if not (self.client_id and self.client_secret and self.refresh_token):
            raise AuthenticationError("LWA credentials are not configured")

        client_kwargs = {"transport": self._transport} if self._transport else {}
        async with AsyncOAuth2Client(
            client_id=self.client_id,
            client_secret=self.client_secret,
            token_endpoint_auth_method="client_secret_post",
            **client_kwargs,
        ) as client:
            try:
                token = await client.refresh_token(self.token_url, refresh_token=self.refresh_token)
            except (AuthlibBaseError, httpx.HTTPError) as e:
                logger.error("LWA token refresh failed", extra={"error": str(e)})
                raise AuthenticationError(
                    "Failed to obtain LWA access token",
                    details={"error_type": type(e).__name__},
                ) from e

        self._access_token = token["access_token"]
        self._expires_at = self._clock() + float(token.get("expires_in", 3600))
        logger.info("LWA access token refreshed", extra={"expires_in": token.get("expires_in")})
