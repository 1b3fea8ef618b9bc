"""
API Router.

Aggregates all API endpoints.
"""

from fastapi import APIRouter
from merchmarket.app.api.v1.endpoints import auth, info, wallet, merch

router = APIRouter()

# Public login endpoint
router.include_router(auth.router)

# Bearer-protected endpoints
router.include_router(info.router)
router.include_router(wallet.router)
router.include_router(merch.router)
