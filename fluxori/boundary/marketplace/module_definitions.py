"""
SP-API module registry.

Static description of every Selling Partner API section Fluxori knows
about: versions (with the default marked), a short description and the
published rate limit. The factory uses this to resolve default versions.

Dependencies: None
System role: Marketplace API catalogue
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ApiVersion:
    version: str
    default: bool = False
    deprecated: bool = False


@dataclass(frozen=True)
class RateLimit:
    restore_rate_per_second: float
    burst_capacity: int
    maximum_request_quota: int | None = None


@dataclass(frozen=True)
class ModuleDefinition:
    """One SP-API section and its versions."""

    name: str
    display_name: str
    versions: tuple[ApiVersion, ...]
    description: str
    rate_limit: RateLimit | None = None
    dependencies: tuple[str, ...] = field(default_factory=tuple)

    @property
    def default_version(self) -> str:
        for version in self.versions:
            if version.default:
                return version.version
        return self.versions[0].version

    def supports(self, version: str) -> bool:
        return any(v.version == version for v in self.versions)


_STANDARD = RateLimit(0.5, 5, 200)


def _module(
    name: str,
    display_name: str,
    versions: list[str],
    description: str,
    rate_limit: RateLimit = _STANDARD,
) -> ModuleDefinition:
    """First listed version is the default."""
    return ModuleDefinition(
        name=name,
        display_name=display_name,
        versions=tuple(ApiVersion(v, default=(i == 0)) for i, v in enumerate(versions)),
        description=description,
        rate_limit=rate_limit,
    )


SP_API_MODULES: tuple[ModuleDefinition, ...] = (
    # Catalog
    _module("catalogItems", "Catalog Items API", ["2022-04-01", "2020-12-01"],
            "Provides product catalog information and management"),
    _module("listingsItems", "Listings Items API", ["2021-08-01"],
            "Create and manage product listings"),
    _module("listingsRestrictions", "Listings Restrictions API", ["2021-08-01"],
            "Check restrictions on listings"),
    _module("productTypeDefinitions", "Product Type Definitions API", ["2020-09-01"],
            "Retrieve product type definitions and requirements"),
    _module("aplus", "A+ Content API", ["2020-11-01"],
            "Create and manage A+ content", RateLimit(0.1, 5, 100)),
    # Inventory and fulfillment
    _module("fbaInventory", "FBA Inventory API", ["2022-05-01"],
            "Manage FBA inventory"),
    _module("fulfillmentInbound", "Fulfillment Inbound API", ["2024-03-20", "2020-09-01"],
            "Create and manage inbound shipments to Amazon fulfillment centers"),
    _module("warehouseAndDistribution", "Warehouse and Distribution API", ["2024-05-09"],
            "Manage warehousing and distribution operations"),
    _module("fbaInboundEligibility", "FBA Inbound Eligibility API", ["2022-05-01"],
            "Check product eligibility for fulfillment by Amazon"),
    _module("fbaSmallAndLight", "FBA Small and Light API", ["2021-08-01"],
            "Manage small and light inventory"),
    _module("replenishment", "Replenishment API", ["2022-11-07"],
            "Plan and manage inventory replenishment"),
    _module("supplySource", "Supply Source API", ["2022-11-07"],
            "Manage supply sources for inventory"),
    # Orders and shipping
    _module("orders", "Orders API", ["v0"],
            "Manage orders", RateLimit(0.0167, 20, 144)),
    _module("fulfillmentOutbound", "Fulfillment Outbound API", ["2020-07-01"],
            "Create and manage fulfillment orders"),
    _module("merchantFulfillment", "Merchant Fulfillment API", ["v0"],
            "Create and manage merchant-fulfilled shipments"),
    _module("easyShip", "Easy Ship API", ["2022-03-23"],
            "Create and manage easy ship orders"),
    _module("shipping", "Shipping API", ["v1"],
            "Create and manage shipments"),
    _module("services", "Services API", ["2022-03-01"],
            "Manage service-based offers"),
    # Pricing and finance
    _module("productPricing", "Product Pricing API", ["2022-05-01", "v0"],
            "Get pricing information", RateLimit(0.5, 10, 400)),
    _module("productFees", "Product Fees API", ["v0"],
            "Get fee estimates"),
    _module("finances", "Finances API", ["2024-06-19", "v0"],
            "Get financial information", RateLimit(0.25, 5, 100)),
    _module("invoices", "Invoices API", ["2024-06-19"],
            "Manage invoices"),
    _module("shipmentInvoicing", "Shipment Invoicing API", ["v0"],
            "Manage shipment invoices"),
    # Reporting and analytics
    _module("reports", "Reports API", ["2021-06-30"],
            "Create and manage reports", RateLimit(0.0083, 2, 60)),
    _module("feeds", "Feeds API", ["2021-06-30"],
            "Submit and manage data feeds", RateLimit(0.0083, 2, 60)),
    _module("dataKiosk", "Data Kiosk API", ["2023-11-15"],
            "Access and analyze business data", RateLimit(0.0333, 5, 100)),
    _module("sales", "Sales API", ["v1"],
            "Get sales insights and metrics"),
    _module("b2b", "Amazon Business Pricing", ["2022-05-01"],
            "Business pricing tiers and quantity discounts", RateLimit(0.5, 10, 400)),
    # Buyer communication
    _module("messaging", "Messaging API", ["v1"],
            "Send messages to buyers", RateLimit(0.1, 5, 100)),
    _module("solicitations", "Solicitations API", ["v1"],
            "Request reviews and feedback", RateLimit(0.05, 5, 75)),
    _module("notifications", "Notifications API", ["v1"],
            "Subscribe to notifications"),
    # Account and application
    _module("sellers", "Sellers API", ["v1"],
            "Get information about the seller account"),
    _module("applicationIntegrations", "Application Integrations API", ["2024-04-01"],
            "Manage application integrations"),
    _module("applicationManagement", "Application Management API", ["2023-11-30"],
            "Manage application configuration"),
    _module("tokens", "Tokens API", ["2021-03-01"],
            "Manage restricted data tokens", RateLimit(0.1, 5, 100)),
    _module("authorization", "Authorization API", ["v1"],
            "Manage authorization"),
    _module("uploads", "Uploads API", ["2020-11-01"],
            "Upload files"),
)

_BY_NAME = {definition.name: definition for definition in SP_API_MODULES}


def get_module_definition(name: str) -> ModuleDefinition | None:
    """Look up a module by its registry name (e.g. "catalogItems")."""
    return _BY_NAME.get(name)


def get_default_module_version(name: str) -> str | None:
    """Default version string for a module, or None if the module is unknown."""
    definition = get_module_definition(name)
    return definition.default_version if definition else None
