"""Service orchestrators."""

from .inventory_service import InventoryService
from .organization_service import OrganizationService
from .product_service import ProductService
from .stock_alert_service import StockAlertService
from .user_service import UserService
from .warehouse_service import WarehouseService
from .xero_account_service import XeroAccountService
from .xero_auth_service import XeroAuthService
from .xero_config_service import XeroConfigService
from .xero_contact_service import XeroContactService
from .xero_invoice_service import XeroInvoiceService
from .xero_sync_service import XeroSyncService

__all__ = [
    "InventoryService",
    "OrganizationService",
    "ProductService",
    "StockAlertService",
    "UserService",
    "WarehouseService",
    "XeroAccountService",
    "XeroAuthService",
    "XeroConfigService",
    "XeroContactService",
    "XeroInvoiceService",
    "XeroSyncService",
]
