"""
Xero authentication service.

Runs the OAuth authorization-code flow, persists one connection per
(organization, Xero tenant) with the refresh token encrypted at rest,
and hands out credentials with an access token that is refreshed when it
is about to expire.

Dependencies: fluxori.boundary.xero, fluxori.boundary.db.CRUD, fluxori.core.token_crypto
System role: Xero connection lifecycle
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Callable
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from fluxori.boundary.db.base import utcnow
from fluxori.boundary.db.CRUD.xero_crud import xero_connection_crud
from fluxori.boundary.db.models.xero_model import XeroConnectionModel
from fluxori.boundary.xero.api_client import XeroCredentials
from fluxori.boundary.xero.oauth_client import XeroOAuthClient, XeroTenant, XeroTokenSet
from fluxori.boundary.xero.state import OAuthState, decode_state, encode_state
from fluxori.core.exceptions import AuthenticationError, InvalidInputError, XeroApiError
from fluxori.core.token_crypto import TokenCipher

logger = logging.getLogger(__name__)

REFRESH_WINDOW = timedelta(minutes=5)


def _as_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes; treat them as UTC."""
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def _parse_uuid(value: str, field: str) -> UUID:
    try:
        return UUID(str(value))
    except ValueError as e:
        raise InvalidInputError(f"Invalid {field}", field=field) from e


class XeroAuthService:
    """Xero connection lifecycle."""

    def __init__(
        self,
        db: AsyncSession,
        oauth_client: XeroOAuthClient,
        cipher: TokenCipher,
        clock: Callable[[], datetime] = utcnow,
        token_sessions: async_sessionmaker[AsyncSession] | None = None,
    ) -> None:
        """
        Args:
            db: Async SQLAlchemy session
            oauth_client: Xero identity client
            cipher: Refresh-token cipher
            clock: Current UTC time source
            token_sessions: Sessions for a separate transaction that commits
                refreshed tokens at once, independent of ``db``. Xero
                invalidates the previous refresh token on rotation. Without
                a factory the tokens are written through ``db``.
        """
        self.db = db
        self.oauth = oauth_client
        self.cipher = cipher
        self._now = clock
        self._token_sessions = token_sessions

    async def get_authorization_url(
        self,
        user_id: UUID,
        organization_id: UUID,
        redirect_url: str | None = None,
    ) -> str:
        state = encode_state(str(user_id), str(organization_id), redirect_url)
        return await self.oauth.create_authorization_url(state)

    async def handle_callback(self, code: str, state: str) -> OAuthState:
        """
        Complete the authorization-code flow.

        Exchanges the code, looks up the tenants the grant covers and
        stores a connection for the first one.

        Args:
            code: Authorization code from Xero
            state: State produced by get_authorization_url

        Returns:
            OAuthState: Decoded state (user, organization, redirect URL)

        Raises:
            InvalidInputError: Missing code or malformed state
            AuthenticationError: Code rejected, or no tenant authorised
        """
        if not code:
            raise InvalidInputError("Authorization code is required", field="code")
        decoded = decode_state(state)
        user_id = _parse_uuid(decoded.user_id, "user_id")
        organization_id = _parse_uuid(decoded.organization_id, "organization_id")

        tokens = await self.oauth.exchange_code(code)
        tenants = await self.oauth.get_connections(tokens.access_token)
        if not tenants:
            raise AuthenticationError("No Xero organisation was authorised")

        await self.store_connection(user_id, organization_id, tenants[0], tokens)
        return decoded

    async def store_connection(
        self,
        user_id: UUID,
        organization_id: UUID,
        tenant: XeroTenant,
        tokens: XeroTokenSet,
    ) -> XeroConnectionModel:
        """Create or refresh the connection for (organization, tenant)."""
        now = self._now()
        fields = {
            "user_id": user_id,
            "tenant_name": tenant.tenant_name,
            "access_token": tokens.access_token,
            "encrypted_refresh_token": self.cipher.encrypt(tokens.refresh_token),
            "token_expires_at": datetime.fromtimestamp(tokens.expires_at, tz=timezone.utc),
            "scopes": tokens.scope,
            "is_active": True,
            "last_refreshed_at": now,
        }
        existing = await xero_connection_crud.get_by_tenant(self.db, organization_id, tenant.tenant_id)
        if existing is None:
            connection = await xero_connection_crud.create(
                self.db, organization_id=organization_id, tenant_id=tenant.tenant_id, **fields
            )
        else:
            connection = await xero_connection_crud.update_by_id_or_fail(self.db, existing.id, **fields)

        logger.info(
            "Xero connection stored",
            extra={
                "organization_id": str(organization_id),
                "tenant_id": tenant.tenant_id,
                "connection_id": str(connection.id),
            },
        )
        return connection

    async def _require_connection(self, user_id: UUID, organization_id: UUID) -> XeroConnectionModel:
        connection = await xero_connection_crud.get_active(self.db, user_id, organization_id)
        if connection is None:
            raise AuthenticationError(
                "No active Xero connection for this organization",
                details={"user_id": str(user_id), "organization_id": str(organization_id)},
            )
        return connection

    async def get_authenticated_credentials(self, user_id: UUID, organization_id: UUID) -> XeroCredentials:
        """
        Credentials for the active connection.

        Refreshes the access token when it expires within five minutes and
        stores the rotated refresh token.

        Raises:
            AuthenticationError: No active connection, or refresh rejected
        """
        connection = await self._require_connection(user_id, organization_id)

        if _as_utc(connection.token_expires_at) - self._now() <= REFRESH_WINDOW:
            refresh_token = self.cipher.decrypt(connection.encrypted_refresh_token)
            tokens = await self.oauth.refresh(refresh_token)
            connection = await self._save_refreshed_tokens(connection, tokens)
            logger.info("Xero access token refreshed", extra={"connection_id": str(connection.id)})

        return XeroCredentials(
            user_id=user_id,
            organization_id=organization_id,
            tenant_id=connection.tenant_id,
            access_token=connection.access_token,
        )

    async def _save_refreshed_tokens(
        self, connection: XeroConnectionModel, tokens: XeroTokenSet
    ) -> XeroConnectionModel:
        fields = {
            "access_token": tokens.access_token,
            "encrypted_refresh_token": self.cipher.encrypt(tokens.refresh_token),
            "token_expires_at": datetime.fromtimestamp(tokens.expires_at, tz=timezone.utc),
            "last_refreshed_at": self._now(),
        }
        if self._token_sessions is None:
            return await xero_connection_crud.update_by_id_or_fail(self.db, connection.id, **fields)

        async with self._token_sessions() as session:
            await xero_connection_crud.update_by_id_or_fail(session, connection.id, **fields)
            await session.commit()
        await self.db.refresh(connection)
        return connection

    async def disconnect(self, user_id: UUID, organization_id: UUID) -> bool:
        """
        Revoke and deactivate the user's connections in the organization.

        Returns:
            bool: False when there was no active connection
        """
        connection = await xero_connection_crud.get_active(self.db, user_id, organization_id)
        if connection is None:
            return False

        try:
            await self.oauth.revoke(self.cipher.decrypt(connection.encrypted_refresh_token))
        except (XeroApiError, InvalidInputError) as e:
            logger.warning(
                "Xero token revocation failed; deactivating locally",
                extra={"connection_id": str(connection.id), "error": str(e)},
            )

        deactivated = await xero_connection_crud.deactivate(self.db, user_id, organization_id)
        logger.info(
            "Xero disconnected",
            extra={"organization_id": str(organization_id), "connections": deactivated},
        )
        return deactivated > 0

    async def get_connection_status(self, user_id: UUID, organization_id: UUID) -> dict[str, Any]:
        connection = await xero_connection_crud.get_active(self.db, user_id, organization_id)
        if connection is None:
            return {"connected": False}
        return {
            "connected": True,
            "tenant_id": connection.tenant_id,
            "tenant_name": connection.tenant_name,
            "token_expires_at": _as_utc(connection.token_expires_at),
            "last_refreshed_at": connection.last_refreshed_at,
            "scopes": connection.scopes,
        }
