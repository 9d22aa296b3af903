"""
PURPOSE: Health endpoint for Signal Sync.

Reports database and Redis connectivity. Always answers 200; a failing
dependency only marks the overall status as degraded.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, Request

from app.api.dependencies import get_cache_gateway, get_signal_store
from app.core.exceptions import CacheError, StorageError
from app.core.rate_limit import limiter, READ_LIMIT
from app.services.cache_gateway import RedisCacheGateway
from app.services.signal_store import SignalStore
from app.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["system"])


@router.get("/health", response_model=None, tags=["health"])
@limiter.limit(READ_LIMIT)
async def health_check(
    request: Request,
    store: SignalStore = Depends(get_signal_store),
    cache: RedisCacheGateway = Depends(get_cache_gateway),
) -> Dict[str, Any]:
    """Health check with database and cache statuses."""
    services: Dict[str, Dict[str, str]] = {}
    overall_status = "ok"

    try:
        await store.ping()
        services["database"] = {"status": "connected"}
    except StorageError as e:
        services["database"] = {"status": "disconnected", "error": str(e)}
        overall_status = "degraded"

    try:
        await cache.ping()
        services["redis"] = {"status": "connected"}
    except CacheError as e:
        services["redis"] = {"status": "disconnected", "error": str(e)}
        overall_status = "degraded"

    if overall_status != "ok":
        logger.warning("health_check_degraded", services=services)

    return {"status": overall_status, "services": services}
