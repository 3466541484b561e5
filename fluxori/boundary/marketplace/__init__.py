"""
Amazon Selling Partner API boundary.

Exports the factory, transport and module registry helpers.
"""

from fluxori.boundary.marketplace.client import ApiResponse, SellingPartnerClient
from fluxori.boundary.marketplace.factory import SellingPartnerFactory
from fluxori.boundary.marketplace.lwa_auth import LwaTokenProvider
from fluxori.boundary.marketplace.module_definitions import (
    SP_API_MODULES,
    ModuleDefinition,
    get_default_module_version,
    get_module_definition,
)

__all__ = [
    "ApiResponse",
    "SellingPartnerClient",
    "SellingPartnerFactory",
    "LwaTokenProvider",
    "SP_API_MODULES",
    "ModuleDefinition",
    "get_default_module_version",
    "get_module_definition",
]
