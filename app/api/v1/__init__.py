"""API v1 package initialization."""

from fastapi import APIRouter

from app.api.v1 import alignment, health, subtitles

# Create v1 router
api_router = APIRouter()

# Include sub-routers
api_router.include_router(health.router, tags=["health"])
api_router.include_router(alignment.router, prefix="/alignments", tags=["alignment"])
api_router.include_router(subtitles.router, prefix="/subtitles", tags=["subtitles"])

__all__ = ["api_router"]
