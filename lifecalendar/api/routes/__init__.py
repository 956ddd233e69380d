"""API routes for Life Calendar."""

from fastapi import APIRouter

from lifecalendar.api.routes.embed import router as embed_router
from lifecalendar.api.routes.health import router as health_router

# Main API router
api_router = APIRouter()

api_router.include_router(health_router, tags=["Health"])
api_router.include_router(embed_router, tags=["Calendar"])

__all__ = ["api_router"]
