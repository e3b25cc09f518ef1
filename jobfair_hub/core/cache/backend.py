"""
Cache client construction.

Production uses ``redis.asyncio``. Local development and single-process
deployments without a Redis URL get ``InMemoryRedis``, an in-process store
that answers the subset of Redis commands the cache manager issues, with the
same return conventions as redis-py (``ttl`` returns -2 for a missing key and
-1 for a key without expiry, ``ping`` returns ``True``).
"""

from __future__ import annotations

import fnmatch
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Set, Union

import redis.asyncio as redis
from redis.exceptions import ResponseError

logger = logging.getLogger(__name__)

CacheClient = Union[redis.Redis, "InMemoryRedis"]


@dataclass
class _Entry:
    value: Any
    expires_at: Optional[float] = None


class InMemoryRedis:
    """Process-local stand-in for a Redis server."""

    def __init__(self) -> None:
        self._store: Dict[str, _Entry] = {}

    def _live(self, key: str) -> Optional[_Entry]:
        entry = self._store.get(key)
        if entry is None:
            return None
        if entry.expires_at is not None and time.monotonic() >= entry.expires_at:
            del self._store[key]
            return None
        return entry

    async def ping(self) -> bool:
        return True

    async def get(self, name: str) -> Optional[str]:
        entry = self._live(name)
        if entry is None:
            return None
        return str(entry.value)

    async def set(self, name: str, value: Any, ex: Optional[int] = None) -> bool:
        expires_at = time.monotonic() + ex if ex else None
        self._store[name] = _Entry(value=str(value), expires_at=expires_at)
        return True

    async def setex(self, name: str, time_seconds: int, value: Any) -> bool:
        return await self.set(name, value, ex=time_seconds)

    async def delete(self, *names: str) -> int:
        deleted = 0
        for name in names:
            if self._live(name) is not None:
                del self._store[name]
                deleted += 1
        return deleted

    async def incrby(self, name: str, amount: int = 1) -> int:
        entry = self._live(name)
        if entry is None:
            entry = _Entry(value=0)
            self._store[name] = entry
        try:
            current = int(entry.value)
        except (TypeError, ValueError) as exc:
            raise ResponseError("value is not an integer or out of range") from exc
        entry.value = current + amount
        return entry.value

    async def incr(self, name: str, amount: int = 1) -> int:
        return await self.incrby(name, amount)

    async def expire(self, name: str, time_seconds: int) -> bool:
        entry = self._live(name)
        if entry is None:
            return False
        entry.expires_at = time.monotonic() + time_seconds
        return True

    async def ttl(self, name: str) -> int:
        entry = self._live(name)
        if entry is None:
            return -2
        if entry.expires_at is None:
            return -1
        return max(0, int(round(entry.expires_at - time.monotonic())))

    async def sadd(self, name: str, *values: str) -> int:
        entry = self._live(name)
        if entry is None:
            entry = _Entry(value=set())
            self._store[name] = entry
        members: Set[str] = entry.value
        before = len(members)
        members.update(values)
        return len(members) - before

    async def smembers(self, name: str) -> Set[str]:
        entry = self._live(name)
        if entry is None:
            return set()
        return set(entry.value)

    async def keys(self, pattern: str = "*") -> List[str]:
        return [key for key in list(self._store) if self._live(key) is not None and fnmatch.fnmatchcase(key, pattern)]

    async def flushdb(self) -> bool:
        self._store.clear()
        return True

    async def aclose(self) -> None:
        self._store.clear()


def create_cache_client(redis_url: Optional[str]) -> CacheClient:
    """Create the cache client for the configured URL.

    Args:
        redis_url: Redis connection URL; empty or ``None`` selects the in-process store.

    Returns:
        A ``redis.asyncio.Redis`` client or an ``InMemoryRedis`` instance.
    """
    if not redis_url:
        logger.warning("REDIS_URL not configured, using in-memory cache store")
        return InMemoryRedis()
    logger.info("Using Redis cache backend")
    return redis.Redis.from_url(redis_url, decode_responses=True)
