"""API routes."""

from fastapi import APIRouter

from app.api.v1 import areas, auth, health, profile, snippets, users

router = APIRouter()
router.include_router(auth.router, tags=["auth"])
router.include_router(profile.router, tags=["profile"])
router.include_router(users.router, tags=["users"])
router.include_router(snippets.router, prefix="/snippets", tags=["snippets"])
router.include_router(areas.router, tags=["areas"])
router.include_router(health.router, prefix="/health", tags=["health"])
