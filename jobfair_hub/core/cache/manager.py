"""
Cache manager and fixed-window rate limiter.

``CacheManager`` wraps a Redis-compatible async client. Values are stored as
JSON under ``{family}:{identifier}``. Every operation swallows and logs store
errors: reads degrade to a miss, writes become no-ops and the rate limiter
fails open, so an unavailable cache never takes a request down with it.
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, TypeVar

from .backend import CacheClient
from .keys import CacheKeys, CacheTTL

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RateLimitResult:
    """Outcome of one rate-limit check.

    ``reset_time`` is the epoch second at which the current window closes.
    """

    allowed: bool
    remaining: int
    reset_time: int
    limit: int


class CacheManager:
    """JSON cache, tag-based invalidation and counters over a Redis client."""

    def __init__(self, client: CacheClient) -> None:
        """Initialize the manager.

        Args:
            client: ``redis.asyncio.Redis`` (``decode_responses=True``) or ``InMemoryRedis``
        """
        self.client = client

    @staticmethod
    def generate_key(prefix: str, identifier: str) -> str:
        return f"{prefix}:{identifier}"

    @staticmethod
    def _tag_key(tag: str) -> str:
        return f"tags:{tag}"

    async def set(self, prefix: str, identifier: str, data: Any, ttl: int = CacheTTL.MEDIUM) -> None:
        """Store ``data`` as JSON with a TTL."""
        key = self.generate_key(prefix, identifier)
        try:
            await self.client.setex(key, ttl, json.dumps(data, default=str))
        except Exception as e:
            logger.error(f"Cache set error for {key}: {e}")

    async def get(self, prefix: str, identifier: str) -> Optional[Any]:
        """Return the decoded value, or ``None`` on a miss or any error."""
        key = self.generate_key(prefix, identifier)
        try:
            cached = await self.client.get(key)
            if not cached:
                return None
            return json.loads(cached)
        except Exception as e:
            logger.error(f"Cache get error for {key}: {e}")
            return None

    async def delete(self, prefix: str, identifier: str) -> None:
        key = self.generate_key(prefix, identifier)
        try:
            await self.client.delete(key)
        except Exception as e:
            logger.error(f"Cache delete error for {key}: {e}")

    async def get_or_set(
        self,
        prefix: str,
        identifier: str,
        fetch: Callable[[], Awaitable[T]],
        ttl: int = CacheTTL.MEDIUM,
        force_refresh: bool = False,
    ) -> T:
        """Read-through cache.

        Returns the cached value unless ``force_refresh`` is set or the key is
        missing; otherwise awaits ``fetch``, stores a non-``None`` result
        tagged with ``prefix`` and returns it.

        Args:
            prefix: Key family, also used as the invalidation tag
            identifier: Key identifier within the family
            fetch: Coroutine factory producing the fresh value
            ttl: Time-to-live in seconds
            force_refresh: Skip the cache read

        Returns:
            The cached or freshly fetched value
        """
        if not force_refresh:
            cached = await self.get(prefix, identifier)
            if cached is not None:
                return cached

        data = await fetch()
        if data is not None:
            await self.set(prefix, identifier, data, ttl)
            await self.tag_key(prefix, identifier, prefix)
        return data

    async def tag_key(self, prefix: str, identifier: str, tag: str) -> None:
        """Add ``{prefix}:{identifier}`` to the ``tag`` group."""
        try:
            await self.client.sadd(self._tag_key(tag), self.generate_key(prefix, identifier))
        except Exception as e:
            logger.error(f"Cache tagging error for {prefix}:{identifier}: {e}")

    async def invalidate_pattern(self, tag: str) -> None:
        """Delete every key in the ``tag`` group together with the group itself."""
        tags_key = self._tag_key(tag)
        try:
            keys = await self.client.smembers(tags_key)
            if keys:
                await self.client.delete(*keys)
                await self.client.delete(tags_key)
        except Exception as e:
            logger.error(f"Cache pattern invalidation error for {tag}: {e}")

    async def clear_all(self) -> None:
        for family in CacheKeys.all():
            await self.invalidate_pattern(family)

    async def increment(self, prefix: str, identifier: str, amount: int = 1, ttl: int = CacheTTL.SHORT) -> int:
        """Increment a counter and refresh its TTL; returns 0 on error."""
        key = self.generate_key(prefix, identifier)
        try:
            result = await self.client.incrby(key, amount)
            await self.client.expire(key, ttl)
            return int(result)
        except Exception as e:
            logger.error(f"Cache increment error for {key}: {e}")
            return 0

    async def health_check(self) -> bool:
        try:
            result = await self.client.ping()
        except Exception as e:
            logger.error(f"Cache health check failed: {e}")
            return False
        return result is True or result == "PONG"

    async def rate_limit(self, key: str, limit: int, window_seconds: int) -> RateLimitResult:
        """Count one hit against a fixed window.

        The first hit in a window creates the counter and sets its expiry;
        later hits only increment it, so the window does not slide.

        Args:
            key: Caller identity, stored as ``ratelimit:{key}``
            limit: Hits allowed per window
            window_seconds: Window length

        Returns:
            ``RateLimitResult``; allowed with full quota if the store fails
        """
        rate_key = f"ratelimit:{key}"
        now = int(time.time())
        try:
            current = int(await self.client.incr(rate_key))
            if current == 1:
                await self.client.expire(rate_key, window_seconds)
            ttl = int(await self.client.ttl(rate_key))
        except Exception as e:
            logger.error(f"Rate limit error for {key}: {e}")
            return RateLimitResult(allowed=True, remaining=limit, reset_time=now + window_seconds, limit=limit)

        return RateLimitResult(
            allowed=current <= limit,
            remaining=max(0, limit - current),
            reset_time=now + max(ttl, 0),
            limit=limit,
        )

    async def close(self) -> None:
        try:
            await self.client.aclose()
        except Exception as e:
            logger.warning(f"Error closing cache client: {e}")
