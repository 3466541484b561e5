"""
Organizations router package.

Exports the router for tenant and membership endpoints.
"""

from .organizations_router import router

__all__ = ["router"]
