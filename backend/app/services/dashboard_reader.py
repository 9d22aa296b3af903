"""
Cache-aside front for the dashboard.

PURPOSE: Serve the dashboard from Redis when a fresh copy exists and rebuild
it from the store otherwise.

Staleness contract: ingestion never evicts the cached dashboard, so a new
signal can take up to the TTL (60s by default) to appear. Concurrent misses
each rebuild and overwrite the entry; the last write wins.

CALLED BY: GET /api/dashboard
"""

from typing import Optional, Tuple

from pydantic import ValidationError as SchemaValidationError

from app.config.constants import CacheStatus
from app.core.exceptions import CacheError
from app.schemas.dashboard import DashboardView
from app.services.cache_gateway import RedisCacheGateway
from app.services.dashboard_service import DashboardService
from app.utils.logger import get_logger


logger = get_logger("services.dashboard_reader")


class CachedDashboardService:
    """
    PURPOSE: Cache-aside wrapper around DashboardService.

    Cache failures never fail a read: an unreachable cache degrades to
    rebuilding from the store on every request. Build failures are not cached.

    Attributes:
        _dashboard_service: Builder invoked on a miss.
        _cache: Redis gateway.
        _cache_key: Key holding the serialised DashboardView.
        _ttl_seconds: Lifetime of a populated entry.
    """

    def __init__(
        self,
        dashboard_service: DashboardService,
        cache: RedisCacheGateway,
        cache_key: str = "dashboardData",
        ttl_seconds: int = 60,
    ) -> None:
        self._dashboard_service = dashboard_service
        self._cache = cache
        self._cache_key = cache_key
        self._ttl_seconds = ttl_seconds

    async def get_dashboard(self) -> Tuple[DashboardView, CacheStatus]:
        """
        Return the dashboard and whether it came from the cache.

        Returns:
            tuple: (DashboardView, CacheStatus.HIT | CacheStatus.MISS)

        Raises:
            StorageError: If the cache missed and the rebuild failed
        """
        cached = await self._read_cache()
        if cached is not None:
            logger.info("dashboard_cache_hit", key=self._cache_key)
            return cached, CacheStatus.HIT

        logger.info("dashboard_cache_miss", key=self._cache_key)
        view = await self._dashboard_service.build_dashboard()
        await self._write_cache(view)
        return view, CacheStatus.MISS

    async def _read_cache(self) -> Optional[DashboardView]:
        try:
            raw = await self._cache.get(self._cache_key)
        except CacheError as e:
            logger.warning("dashboard_cache_error", operation="get", error=str(e))
            return None

        if raw is None:
            return None

        try:
            return DashboardView.model_validate_json(raw)
        except SchemaValidationError as e:
            # Unreadable entry (e.g. written by an older schema); rebuild over it
            logger.warning("dashboard_cache_corrupt", key=self._cache_key, error=str(e))
            return None

    async def _write_cache(self, view: DashboardView) -> None:
        try:
            await self._cache.set_with_ttl(
                self._cache_key,
                view.model_dump_json(),
                self._ttl_seconds,
            )
        except CacheError as e:
            logger.warning("dashboard_cache_error", operation="set", error=str(e))
