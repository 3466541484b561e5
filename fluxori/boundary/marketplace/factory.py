"""
SP-API module factory.

Builds versioned module instances that share one SellingPartnerClient,
resolving default versions from the module registry.

Dependencies: fluxori.boundary.marketplace.*, fluxori.configs
System role: Single entry point for marketplace API access
"""

import logging
from typing import TypeVar

import httpx

from fluxori.boundary.marketplace.base_module import BaseApiModule
from fluxori.boundary.marketplace.client import SellingPartnerClient
from fluxori.boundary.marketplace.lwa_auth import LwaTokenProvider
from fluxori.boundary.marketplace.module_definitions import get_module_definition
from fluxori.boundary.marketplace.modules import (
    MODULE_CLASSES,
    B2BModule,
    CatalogItemsModule,
    DataKioskModule,
    FbaInventoryModule,
    FulfillmentOutboundModule,
    ListingsModule,
    OrdersModule,
    ProductPricingModule,
    ReplenishmentModule,
    ReportsModule,
    SalesModule,
)
from fluxori.configs.amazon import AmazonSettings
from fluxori.core.exceptions import InvalidInputError

logger = logging.getLogger(__name__)

ModuleT = TypeVar("ModuleT", bound=BaseApiModule)


class SellingPartnerFactory:
    """
    Creates SP-API modules bound to a shared client.

    Modules are cached per (name, version) so repeated property access
    returns the same instance.
    """

    def __init__(
        self,
        client: SellingPartnerClient,
        marketplace_id: str | None = None,
        seller_id: str | None = None,
        max_pages: int = 10,
    ) -> None:
        self.client = client
        self.marketplace_id = marketplace_id
        self.seller_id = seller_id
        self.max_pages = max_pages
        self._modules: dict[tuple[str, str], BaseApiModule] = {}

    @classmethod
    def from_settings(
        cls,
        settings: AmazonSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "SellingPartnerFactory":
        """
        Build a factory from AMAZON_SP_* configuration.

        Args:
            settings: Amazon settings (LWA credentials, region, defaults)
            transport: Optional httpx transport shared by token and API calls

        Returns:
            SellingPartnerFactory: Factory with a fresh client
        """
        token_provider = LwaTokenProvider(
            client_id=settings.client_id,
            client_secret=settings.client_secret,
            refresh_token=settings.refresh_token,
            token_url=settings.token_url,
            transport=transport,
        )
        client = SellingPartnerClient(
            token_provider,
            settings.endpoint,
            timeout=settings.request_timeout,
            max_retries=settings.max_retries,
            transport=transport,
        )
        return cls(
            client,
            marketplace_id=settings.marketplace_id or None,
            seller_id=settings.seller_id or None,
            max_pages=settings.max_pages,
        )

    def create_module(self, name: str, version: str | None = None) -> BaseApiModule:
        """
        Create (or reuse) a module instance.

        Args:
            name: Registry name, e.g. "catalogItems"
            version: Explicit version; defaults to the registry default

        Returns:
            BaseApiModule: Module bound to this factory's client

        Raises:
            InvalidInputError: Unknown module, no implementation, or
                unsupported version
        """
        definition = get_module_definition(name)
        if definition is None:
            raise InvalidInputError(f"Unknown SP-API module: {name}", field="name")

        module_class = MODULE_CLASSES.get(name)
        if module_class is None:
            raise InvalidInputError(f"SP-API module '{name}' is not implemented", field="name")

        resolved = version or definition.default_version
        if not definition.supports(resolved):
            raise InvalidInputError(
                f"Version {resolved} is not supported by {name}",
                field="version",
                details={"supported": [v.version for v in definition.versions]},
            )

        key = (name, resolved)
        if key not in self._modules:
            logger.debug("Creating SP-API module", extra={"module": name, "version": resolved})
            self._modules[key] = module_class(
                self.client,
                resolved,
                marketplace_id=self.marketplace_id,
                seller_id=self.seller_id,
                max_pages=self.max_pages,
            )
        return self._modules[key]

    def _typed(self, module_class: type[ModuleT]) -> ModuleT:
        return self.create_module(module_class.module_name)  # type: ignore[return-value]

    @property
    def catalog_items(self) -> CatalogItemsModule:
        return self._typed(CatalogItemsModule)

    @property
    def listings(self) -> ListingsModule:
        return self._typed(ListingsModule)

    @property
    def fba_inventory(self) -> FbaInventoryModule:
        return self._typed(FbaInventoryModule)

    @property
    def orders(self) -> OrdersModule:
        return self._typed(OrdersModule)

    @property
    def fulfillment_outbound(self) -> FulfillmentOutboundModule:
        return self._typed(FulfillmentOutboundModule)

    @property
    def product_pricing(self) -> ProductPricingModule:
        return self._typed(ProductPricingModule)

    @property
    def replenishment(self) -> ReplenishmentModule:
        return self._typed(ReplenishmentModule)

    @property
    def reports(self) -> ReportsModule:
        return self._typed(ReportsModule)

    @property
    def sales(self) -> SalesModule:
        return self._typed(SalesModule)

    @property
    def data_kiosk(self) -> DataKioskModule:
        return self._typed(DataKioskModule)

    @property
    def b2b(self) -> B2BModule:
        return self._typed(B2BModule)

    async def aclose(self) -> None:
        await self.client.aclose()
