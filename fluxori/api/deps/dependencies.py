"""
Dependency injection container.

Factory functions for FastAPI dependencies. Vendor clients that hold
connection pools (SP-API) or are stateless but costly to configure (Xero
identity, token cipher) live in a process-wide ServiceCache; database-bound
services are built per request.

Dependencies: fluxori.configs, fluxori.application, fluxori.boundary
System role: DI container for service injection
"""

from functools import lru_cache, partial
from uuid import UUID

from fastapi import Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from fluxori.application.services import (
    InventoryService,
    OrganizationService,
    ProductService,
    StockAlertService,
    UserService,
    WarehouseService,
    XeroAccountService,
    XeroAuthService,
    XeroConfigService,
    XeroContactService,
    XeroInvoiceService,
    XeroSyncService,
)
from fluxori.boundary.db import get_async_db, get_async_session_factory
from fluxori.boundary.marketplace import SellingPartnerFactory
from fluxori.boundary.xero import (
    XeroApiClient,
    XeroClientFactory,
    XeroCredentials,
    XeroOAuthClient,
)
from fluxori.configs import Settings, get_settings
from fluxori.core.token_crypto import TokenCipher, build_token_cipher


class ServiceCache:
    """Container for cached vendor clients."""

    def __init__(self):
        self._selling_partner = None
        self._xero_oauth = None
        self._token_cipher = None

    @property
    def selling_partner(self) -> SellingPartnerFactory:
        """Get cached SP-API factory (shares one HTTP pool and LWA token)."""
        if self._selling_partner is None:
            self._selling_partner = SellingPartnerFactory.from_settings(get_settings().amazon)
        return self._selling_partner

    @property
    def xero_oauth(self) -> XeroOAuthClient:
        if self._xero_oauth is None:
            self._xero_oauth = XeroOAuthClient(get_settings().xero)
        return self._xero_oauth

    @property
    def token_cipher(self) -> TokenCipher:
        if self._token_cipher is None:
            self._token_cipher = build_token_cipher()
        return self._token_cipher

    async def aclose(self) -> None:
        """Close pooled clients and clear all cached instances."""
        if self._selling_partner is not None:
            await self._selling_partner.aclose()
        self._selling_partner = None
        self._xero_oauth = None
        self._token_cipher = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_organization_service(db: AsyncSession = Depends(get_async_db)) -> OrganizationService:
    """
    Get organization service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        OrganizationService: Organization service instance
    """
    return OrganizationService(db=db)


def get_user_service(db: AsyncSession = Depends(get_async_db)) -> UserService:
    return UserService(db=db)


def get_product_service(db: AsyncSession = Depends(get_async_db)) -> ProductService:
    return ProductService(db=db)


def get_warehouse_service(db: AsyncSession = Depends(get_async_db)) -> WarehouseService:
    return WarehouseService(db=db)


def get_stock_alert_service(db: AsyncSession = Depends(get_async_db)) -> StockAlertService:
    return StockAlertService(db=db)


def get_inventory_service(db: AsyncSession = Depends(get_async_db)) -> InventoryService:
    """
    Get inventory service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        InventoryService: Inventory service whose stock checks raise alerts
        in the same session
    """
    return InventoryService(db=db, alerts=StockAlertService(db=db))


def get_selling_partner_factory() -> SellingPartnerFactory:
    return get_service_cache().selling_partner


def get_xero_oauth_client() -> XeroOAuthClient:
    return get_service_cache().xero_oauth


def get_token_cipher() -> TokenCipher:
    return get_service_cache().token_cipher


def get_xero_client_factory(
    settings: Settings = Depends(get_settings_dependency),
) -> XeroClientFactory:
    """Build per-tenant Xero API clients against the configured base URL."""
    return partial(
        XeroApiClient.from_credentials,
        base_url=settings.xero.api_base_url,
        timeout=settings.xero.request_timeout,
    )


def get_token_session_factory() -> async_sessionmaker[AsyncSession]:
    """Sessions outside the request transaction, for refreshed Xero tokens."""
    return get_async_session_factory()


def get_xero_auth_service(
    db: AsyncSession = Depends(get_async_db),
    oauth_client: XeroOAuthClient = Depends(get_xero_oauth_client),
    cipher: TokenCipher = Depends(get_token_cipher),
    token_sessions: async_sessionmaker[AsyncSession] = Depends(get_token_session_factory),
) -> XeroAuthService:
    return XeroAuthService(db=db, oauth_client=oauth_client, cipher=cipher, token_sessions=token_sessions)


def get_xero_contact_service(
    db: AsyncSession = Depends(get_async_db),
    client_factory: XeroClientFactory = Depends(get_xero_client_factory),
) -> XeroContactService:
    return XeroContactService(db=db, client_factory=client_factory)


def get_xero_invoice_service(
    db: AsyncSession = Depends(get_async_db),
    client_factory: XeroClientFactory = Depends(get_xero_client_factory),
    contact_service: XeroContactService = Depends(get_xero_contact_service),
) -> XeroInvoiceService:
    return XeroInvoiceService(db=db, client_factory=client_factory, contact_service=contact_service)


def get_xero_account_service(
    db: AsyncSession = Depends(get_async_db),
    client_factory: XeroClientFactory = Depends(get_xero_client_factory),
) -> XeroAccountService:
    return XeroAccountService(db=db, client_factory=client_factory)


def get_xero_config_service(
    db: AsyncSession = Depends(get_async_db),
    client_factory: XeroClientFactory = Depends(get_xero_client_factory),
) -> XeroConfigService:
    return XeroConfigService(db=db, client_factory=client_factory)


def get_xero_sync_service(
    db: AsyncSession = Depends(get_async_db),
    contact_service: XeroContactService = Depends(get_xero_contact_service),
    invoice_service: XeroInvoiceService = Depends(get_xero_invoice_service),
    account_service: XeroAccountService = Depends(get_xero_account_service),
) -> XeroSyncService:
    """
    Get Xero sync service instance.

    Contact, invoice and account services share the request's session so
    per-item sync writes land in the same transaction as the sync status.
    """
    return XeroSyncService(
        db=db,
        contact_service=contact_service,
        invoice_service=invoice_service,
        account_service=account_service,
    )


async def get_xero_credentials(
    user_id: UUID = Query(..., description="User that owns the Xero connection"),
    organization_id: UUID = Query(..., description="Organization the connection belongs to"),
    auth_service: XeroAuthService = Depends(get_xero_auth_service),
) -> XeroCredentials:
    """
    Resolve a valid Xero access token for the tenant in the query string.

    Raises:
        AuthenticationError: No active connection, or refresh rejected
    """
    return await auth_service.get_authenticated_credentials(user_id, organization_id)
