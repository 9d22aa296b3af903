"""
PURPOSE: Dashboard read API for Signal Sync.

Returns the correlated dashboard for today, served from the 60-second
cache when possible. The X-Cache response header reports HIT or MISS.

CALLED BY: Frontend dashboard (polling)
"""

from typing import Any

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse
from starlette.background import BackgroundTask

from app.api.dependencies import get_dashboard_reader, get_error_logger
from app.core.exceptions import StorageError
from app.core.rate_limit import limiter, READ_LIMIT
from app.schemas.dashboard import DashboardView
from app.services.dashboard_reader import CachedDashboardService
from app.services.error_logger import ErrorLogger
from app.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

ERROR_CONTEXT = "api-dashboard"


@router.get("", response_model=DashboardView)
@limiter.limit(READ_LIMIT)
async def get_dashboard(
    request: Request,
    response: Response,
    reader: CachedDashboardService = Depends(get_dashboard_reader),
    error_logger: ErrorLogger = Depends(get_error_logger),
) -> Any:
    """
    PURPOSE: Return today's dashboard (KPIs, live feed, logs, synced list, index panel).

    Returns:
        DashboardView, with header X-Cache: HIT | MISS

    Raises:
        HTTP 429: Rate limit exceeded.
        HTTP 500: Cache miss and the store could not be read.
    """
    try:
        view, cache_status = await reader.get_dashboard()
    except StorageError as e:
        logger.error("dashboard_route_failed", error=str(e))
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Failed to retrieve dashboard data",
                "message": "Dashboard data is temporarily unavailable",
            },
            background=BackgroundTask(error_logger.record, ERROR_CONTEXT, e, ""),
        )

    response.headers["X-Cache"] = cache_status.value
    return view
