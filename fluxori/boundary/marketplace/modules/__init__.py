"""SP-API modules keyed by registry name."""

from fluxori.boundary.marketplace.modules.b2b import B2BModule
from fluxori.boundary.marketplace.modules.catalog_items import CatalogItemsModule
from fluxori.boundary.marketplace.modules.data_kiosk import DataKioskModule
from fluxori.boundary.marketplace.modules.fba_inventory import FbaInventoryModule
from fluxori.boundary.marketplace.modules.fulfillment_outbound import FulfillmentOutboundModule
from fluxori.boundary.marketplace.modules.listings import ListingsModule
from fluxori.boundary.marketplace.modules.orders import OrdersModule
from fluxori.boundary.marketplace.modules.product_pricing import ProductPricingModule
from fluxori.boundary.marketplace.modules.replenishment import ReplenishmentModule
from fluxori.boundary.marketplace.modules.reports import ReportsModule
from fluxori.boundary.marketplace.modules.sales import SalesModule

MODULE_CLASSES = {
    cls.module_name: cls
    for cls in (
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
}

__all__ = [
    "MODULE_CLASSES",
    "B2BModule",
    "CatalogItemsModule",
    "DataKioskModule",
    "FbaInventoryModule",
    "FulfillmentOutboundModule",
    "ListingsModule",
    "OrdersModule",
    "ProductPricingModule",
    "ReplenishmentModule",
    "ReportsModule",
    "SalesModule",
]
