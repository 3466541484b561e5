"""
Xero router package.

Combines the OAuth, accounting and sync endpoints under /xero.
"""

from fastapi import APIRouter

from .accounting_router import router as accounting_router
from .auth_router import router as auth_router
from .sync_router import router as sync_router

router = APIRouter(prefix="/xero")
router.include_router(auth_router)
router.include_router(accounting_router)
router.include_router(sync_router)

__all__ = ["router"]
