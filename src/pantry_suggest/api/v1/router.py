"""API v1 router aggregating all endpoint routers.

All endpoints are mounted under /api/v1/pantry-suggest/ via the v1_prefix configuration.
"""

from __future__ import annotations

from fastapi import APIRouter

from pantry_suggest.api.v1.endpoints import admin, analytics, health, suggestions


router = APIRouter()

router.include_router(health.router)
router.include_router(suggestions.router)
router.include_router(analytics.router)
router.include_router(admin.router)
