"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from fluxori.boundary.db.CRUD import warehouse_crud

    warehouse = await warehouse_crud.get_by_id(db, warehouse_id)
"""

from fluxori.boundary.db.CRUD.base_crud import BaseCRUD
from fluxori.boundary.db.CRUD.user_crud import UserCRUD, user_crud
from fluxori.boundary.db.CRUD.organization_crud import (
    MembershipCRUD,
    OrganizationCRUD,
    membership_crud,
    organization_crud,
)
from fluxori.boundary.db.CRUD.product_crud import (
    ProductCRUD,
    ProductVariantCRUD,
    product_crud,
    product_variant_crud,
)
from fluxori.boundary.db.CRUD.warehouse_crud import WarehouseCRUD, warehouse_crud
from fluxori.boundary.db.CRUD.inventory_crud import (
    InventoryItemCRUD,
    InventoryLevelCRUD,
    InventoryTransactionCRUD,
    inventory_item_crud,
    inventory_level_crud,
    inventory_transaction_crud,
)
from fluxori.boundary.db.CRUD.stock_alert_crud import StockAlertCRUD, stock_alert_crud
from fluxori.boundary.db.CRUD.customer_crud import (
    CustomerCRUD,
    OrderCRUD,
    customer_crud,
    order_crud,
)
from fluxori.boundary.db.CRUD.xero_crud import (
    XeroAccountMappingCRUD,
    XeroConfigCRUD,
    XeroConnectionCRUD,
    XeroSyncStatusCRUD,
    xero_account_mapping_crud,
    xero_config_crud,
    xero_connection_crud,
    xero_sync_status_crud,
)

__all__ = [
    "BaseCRUD",
    "UserCRUD",
    "user_crud",
    "OrganizationCRUD",
    "organization_crud",
    "MembershipCRUD",
    "membership_crud",
    "ProductCRUD",
    "product_crud",
    "ProductVariantCRUD",
    "product_variant_crud",
    "WarehouseCRUD",
    "warehouse_crud",
    "InventoryItemCRUD",
    "inventory_item_crud",
    "InventoryLevelCRUD",
    "inventory_level_crud",
    "InventoryTransactionCRUD",
    "inventory_transaction_crud",
    "StockAlertCRUD",
    "stock_alert_crud",
    "CustomerCRUD",
    "customer_crud",
    "OrderCRUD",
    "order_crud",
    "XeroConnectionCRUD",
    "xero_connection_crud",
    "XeroConfigCRUD",
    "xero_config_crud",
    "XeroAccountMappingCRUD",
    "xero_account_mapping_crud",
    "XeroSyncStatusCRUD",
    "xero_sync_status_crud",
]
