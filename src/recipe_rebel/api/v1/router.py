"""API v1 router aggregating all endpoint routers.

All endpoints are mounted under ``api.v1_prefix`` (``/api/v1`` by default).
"""

from __future__ import annotations

from fastapi import APIRouter

from recipe_rebel.api.v1.endpoints import admin, assistant, engagement, me, recipes


router = APIRouter()

# Engagement first: /recipes/favorites must win over /recipes/{recipeId}
router.include_router(engagement.router)
router.include_router(recipes.router)
router.include_router(admin.router)
router.include_router(assistant.router)
router.include_router(me.router)
