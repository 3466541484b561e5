"""API routers."""

from .health import router as health_router
from .inventory import router as inventory_router
from .marketplace import router as marketplace_router
from .organizations import router as organizations_router
from .products import router as products_router
from .stock_alerts import router as stock_alerts_router
from .users import router as users_router
from .warehouses import router as warehouses_router
from .xero import router as xero_router

__all__ = [
    "health_router",
    "inventory_router",
    "marketplace_router",
    "organizations_router",
    "products_router",
    "stock_alerts_router",
    "users_router",
    "warehouses_router",
    "xero_router",
]
