"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    get_inventory_service,
    get_organization_service,
    get_product_service,
    get_selling_partner_factory,
    get_service_cache,
    get_settings_dependency,
    get_stock_alert_service,
    get_user_service,
    get_warehouse_service,
    get_xero_account_service,
    get_xero_auth_service,
    get_xero_config_service,
    get_xero_contact_service,
    get_xero_credentials,
    get_xero_invoice_service,
    get_xero_sync_service,
)

__all__ = [
    "get_inventory_service",
    "get_organization_service",
    "get_product_service",
    "get_selling_partner_factory",
    "get_service_cache",
    "get_settings_dependency",
    "get_stock_alert_service",
    "get_user_service",
    "get_warehouse_service",
    "get_xero_account_service",
    "get_xero_auth_service",
    "get_xero_config_service",
    "get_xero_contact_service",
    "get_xero_credentials",
    "get_xero_invoice_service",
    "get_xero_sync_service",
]
