"""
Test suite for XeroAuthService.

Runs against in-memory SQLite with a mocked XeroOAuthClient and a fixed
clock: callback handling, encrypted token storage, the refresh window
and disconnect.
"""

import uuid
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from fluxori.application.services.xero_auth_service import XeroAuthService
from fluxori.boundary.db import connection as db_connection
from fluxori.boundary.db.base import Base
from fluxori.boundary.db.CRUD.organization_crud import organization_crud
from fluxori.boundary.db.CRUD.xero_crud import xero_connection_crud
from fluxori.boundary.xero.oauth_client import XeroOAuthClient, XeroTenant, XeroTokenSet
from fluxori.boundary.xero.state import encode_state
from fluxori.core.exceptions import AuthenticationError, InvalidInputError, XeroApiError
from fluxori.core.token_crypto import TokenCipher

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def token_set(access: str, refresh: str, expires_in: timedelta) -> XeroTokenSet:
    return XeroTokenSet(
        access_token=access,
        refresh_token=refresh,
        expires_at=(NOW + expires_in).timestamp(),
        scope="accounting.transactions",
    )


@pytest.fixture
def oauth() -> AsyncMock:
    return AsyncMock(spec=XeroOAuthClient)


@pytest.fixture
def cipher() -> TokenCipher:
    return TokenCipher("k" * 32)


@pytest.fixture
def auth_service(test_async_db, oauth, cipher) -> XeroAuthService:
    return XeroAuthService(test_async_db, oauth, cipher, clock=lambda: NOW)


@pytest.fixture
async def file_sessions(tmp_path):
    """Sessions on a file-backed database, so separate sessions use separate connections."""
    from fluxori.boundary.db import models  # noqa: F401

    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'xero.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
def user_id() -> uuid.UUID:
    return uuid.uuid4()


async def connect(auth_service, oauth, user_id, organization, expires_in=timedelta(minutes=30)):
    oauth.exchange_code.return_value = token_set("access-1", "refresh-1", expires_in)
    oauth.get_connections.return_value = [XeroTenant("tenant-1", "Acme Ltd")]
    return await auth_service.handle_callback("code", encode_state(str(user_id), str(organization.id)))


class TestHandleCallback:
    """Test suite for the OAuth callback."""

    @pytest.mark.asyncio
    async def test_callback_stores_encrypted_connection(
        self, test_async_db, auth_service, oauth, cipher, user_id, organization
    ) -> None:
        # Act
        state = await connect(auth_service, oauth, user_id, organization)

        # Assert
        connection = await xero_connection_crud.get_active(test_async_db, user_id, organization.id)
        assert state.organization_id == str(organization.id)
        assert connection.tenant_id == "tenant-1"
        assert connection.tenant_name == "Acme Ltd"
        assert connection.encrypted_refresh_token != "refresh-1"
        assert cipher.decrypt(connection.encrypted_refresh_token) == "refresh-1"
        oauth.get_connections.assert_awaited_once_with("access-1")

    @pytest.mark.asyncio
    async def test_reconnecting_same_tenant_updates_row(
        self, test_async_db, auth_service, oauth, user_id, organization
    ) -> None:
        # Arrange
        await connect(auth_service, oauth, user_id, organization)

        # Act
        await connect(auth_service, oauth, user_id, organization)

        # Assert
        assert await xero_connection_crud.count(test_async_db, organization_id=organization.id) == 1

    @pytest.mark.asyncio
    async def test_missing_code_is_rejected(self, auth_service, oauth, user_id, organization) -> None:
        with pytest.raises(InvalidInputError):
            await auth_service.handle_callback("", encode_state(str(user_id), str(organization.id)))

        oauth.exchange_code.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_state_with_bad_ids_is_rejected(self, auth_service) -> None:
        with pytest.raises(InvalidInputError) as exc_info:
            await auth_service.handle_callback("code", encode_state("not-a-uuid", "also-not"))

        assert exc_info.value.details["field"] == "user_id"

    @pytest.mark.asyncio
    async def test_grant_without_tenants_fails(self, auth_service, oauth, user_id, organization) -> None:
        # Arrange
        oauth.exchange_code.return_value = token_set("a", "r", timedelta(minutes=30))
        oauth.get_connections.return_value = []

        # Act / Assert
        with pytest.raises(AuthenticationError):
            await auth_service.handle_callback("code", encode_state(str(user_id), str(organization.id)))


class TestAuthenticatedCredentials:
    """Test suite for get_authenticated_credentials()."""

    @pytest.mark.asyncio
    async def test_fresh_token_is_used_as_is(self, auth_service, oauth, user_id, organization) -> None:
        # Arrange
        await connect(auth_service, oauth, user_id, organization)

        # Act
        credentials = await auth_service.get_authenticated_credentials(user_id, organization.id)

        # Assert
        assert credentials.access_token == "access-1"
        assert credentials.tenant_id == "tenant-1"
        oauth.refresh.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_token_inside_refresh_window_is_rotated(
        self, test_async_db, auth_service, oauth, cipher, user_id, organization
    ) -> None:
        # Arrange
        await connect(auth_service, oauth, user_id, organization, expires_in=timedelta(minutes=4))
        oauth.refresh.return_value = token_set("access-2", "refresh-2", timedelta(minutes=30))

        # Act
        credentials = await auth_service.get_authenticated_credentials(user_id, organization.id)

        # Assert
        connection = await xero_connection_crud.get_active(test_async_db, user_id, organization.id)
        oauth.refresh.assert_awaited_once_with("refresh-1")
        assert credentials.access_token == "access-2"
        assert cipher.decrypt(connection.encrypted_refresh_token) == "refresh-2"

    @pytest.mark.asyncio
    async def test_without_connection_raises(self, auth_service, user_id, organization) -> None:
        with pytest.raises(AuthenticationError):
            await auth_service.get_authenticated_credentials(user_id, organization.id)


class TestRefreshSurvivesFailedRequest:
    """Test suite for committing rotated tokens outside the request transaction."""

    @pytest.mark.asyncio
    async def test_rotated_refresh_token_is_kept_when_request_rolls_back(
        self, monkeypatch, file_sessions, oauth, cipher, user_id
    ) -> None:
        # Arrange
        async with file_sessions() as session:
            organization = await organization_crud.create(session, name="Acme", slug="acme")
            await XeroAuthService(session, oauth, cipher, clock=lambda: NOW).store_connection(
                user_id,
                organization.id,
                XeroTenant("tenant-1", "Acme Ltd"),
                token_set("access-1", "refresh-1", timedelta(minutes=4)),
            )
            await session.commit()
        oauth.refresh.return_value = token_set("access-2", "refresh-2", timedelta(minutes=30))
        monkeypatch.setattr(db_connection, "get_async_session_factory", lambda: file_sessions)

        # Act
        request_db = db_connection.get_async_db()
        db = await request_db.__anext__()
        service = XeroAuthService(db, oauth, cipher, clock=lambda: NOW, token_sessions=file_sessions)
        credentials = await service.get_authenticated_credentials(user_id, organization.id)
        with pytest.raises(InvalidInputError):
            await request_db.athrow(InvalidInputError("Xero rejected the contact filter"))

        # Assert
        async with file_sessions() as session:
            stored = await xero_connection_crud.get_active(session, user_id, organization.id)
        assert credentials.access_token == "access-2"
        assert stored.access_token == "access-2"
        assert cipher.decrypt(stored.encrypted_refresh_token) == "refresh-2"


class TestDisconnect:
    """Test suite for disconnect() and get_connection_status()."""

    @pytest.mark.asyncio
    async def test_disconnect_survives_revocation_failure(self, auth_service, oauth, user_id, organization) -> None:
        # Arrange
        await connect(auth_service, oauth, user_id, organization)
        oauth.revoke.side_effect = XeroApiError("Failed to revoke Xero token", status_code=500)

        # Act
        first = await auth_service.disconnect(user_id, organization.id)
        second = await auth_service.disconnect(user_id, organization.id)

        # Assert
        assert first is True
        assert second is False
        oauth.revoke.assert_awaited_once_with("refresh-1")

    @pytest.mark.asyncio
    async def test_connection_status(self, auth_service, oauth, user_id, organization) -> None:
        # Arrange
        before = await auth_service.get_connection_status(user_id, organization.id)
        await connect(auth_service, oauth, user_id, organization)

        # Act
        after = await auth_service.get_connection_status(user_id, organization.id)

        # Assert
        assert before == {"connected": False}
        assert after["connected"] is True
        assert after["tenant_name"] == "Acme Ltd"
        assert after["token_expires_at"] == NOW + timedelta(minutes=30)
