"""
Inventory router package.

Exports the router for inventory item, level and stock movement endpoints.
"""

from .inventory_router import router

__all__ = ["router"]
