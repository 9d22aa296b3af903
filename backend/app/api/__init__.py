"""
PURPOSE: API router initialization and exports for Signal Sync.

This module aggregates all API routers (webhook, dashboard, system) into a
single api_router that is included in the main FastAPI application.
"""

from fastapi import APIRouter

from app.api.routes_webhook import router as webhook_router
from app.api.routes_dashboard import router as dashboard_router
from app.api.routes_system import router as system_router

# Create the main API router
api_router = APIRouter(prefix="/api", tags=["api"])

# Include all sub-routers
api_router.include_router(webhook_router, tags=["webhook"])
api_router.include_router(dashboard_router, tags=["dashboard"])
api_router.include_router(system_router, tags=["system"])

__all__ = ["api_router"]
