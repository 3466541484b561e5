"""
Database models package.

Exports every ORM model and its enum types so importing this package
registers all tables with Base.metadata.

Dependencies: sqlalchemy, fluxori.boundary.db.base
System role: Database model definitions for domain entities
"""

from fluxori.boundary.db.models.user_model import UserModel, UserStatus
from fluxori.boundary.db.models.organization_model import (
    OrganizationMembershipModel,
    OrganizationModel,
    OrganizationStatus,
)
from fluxori.boundary.db.models.product_model import (
    ProductModel,
    ProductStatus,
    ProductType,
    ProductVariantModel,
)
from fluxori.boundary.db.models.warehouse_model import WarehouseModel, WarehouseStatus
from fluxori.boundary.db.models.inventory_model import (
    InventoryItemModel,
    InventoryItemStatus,
    InventoryLevelModel,
    InventoryTransactionModel,
    ReferenceType,
    TrackingMethod,
    TransactionType,
)
from fluxori.boundary.db.models.stock_alert_model import (
    AlertPriority,
    AlertStatus,
    AlertType,
    StockAlertModel,
)
from fluxori.boundary.db.models.customer_model import CustomerModel
from fluxori.boundary.db.models.order_model import OrderModel, OrderStatus
from fluxori.boundary.db.models.xero_model import (
    SyncFrequency,
    SyncState,
    SyncType,
    XeroAccountMappingModel,
    XeroConfigModel,
    XeroConnectionModel,
    XeroInvoiceStatus,
    XeroSyncStatusModel,
)

__all__ = [
    "UserModel",
    "UserStatus",
    "OrganizationModel",
    "OrganizationMembershipModel",
    "OrganizationStatus",
    "ProductModel",
    "ProductVariantModel",
    "ProductStatus",
    "ProductType",
    "WarehouseModel",
    "WarehouseStatus",
    "InventoryItemModel",
    "InventoryItemStatus",
    "InventoryLevelModel",
    "InventoryTransactionModel",
    "ReferenceType",
    "TrackingMethod",
    "TransactionType",
    "StockAlertModel",
    "AlertPriority",
    "AlertStatus",
    "AlertType",
    "CustomerModel",
    "OrderModel",
    "OrderStatus",
    "XeroConnectionModel",
    "XeroConfigModel",
    "XeroAccountMappingModel",
    "XeroSyncStatusModel",
    "XeroInvoiceStatus",
    "SyncFrequency",
    "SyncState",
    "SyncType",
]
