"""
Redis cache gateway for Signal Sync.

PURPOSE: Thin get / set-with-TTL access to the key-value cache. Every Redis
failure is surfaced as CacheError so callers can degrade instead of failing.
"""

from typing import Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from app.core.exceptions import CacheError
from app.utils.logger import get_logger


logger = get_logger("services.cache_gateway")

_CACHE_ERRORS = (RedisError, OSError)


class RedisCacheGateway:
    """
    PURPOSE: Wrap an async Redis client owned by the application lifespan.

    Attributes:
        _redis: Async Redis client created with decode_responses=True.
    """

    def __init__(self, client: redis.Redis) -> None:
        self._redis = client

    async def get(self, key: str) -> Optional[str]:
        """
        Return the cached value for *key*, or None when absent or expired.

        Raises:
            CacheError: If Redis cannot be reached
        """
        try:
            return await self._redis.get(key)
        except _CACHE_ERRORS as e:
            raise CacheError(f"cache get failed for {key}: {e}") from e

    async def set_with_ttl(self, key: str, value: str, seconds: int) -> None:
        """
        Store *value* under *key*, expiring after *seconds*.

        Raises:
            CacheError: If Redis cannot be reached
        """
        try:
            await self._redis.set(key, value, ex=seconds)
        except _CACHE_ERRORS as e:
            raise CacheError(f"cache set failed for {key}: {e}") from e

    async def ping(self) -> None:
        """Raise CacheError when Redis does not answer PING."""
        try:
            await self._redis.ping()
        except _CACHE_ERRORS as e:
            raise CacheError(f"cache unreachable: {e}") from e
