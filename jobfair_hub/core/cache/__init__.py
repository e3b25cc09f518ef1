"""
Cache layer.

- backend: Redis client construction and the in-process fallback store
- keys: key families and TTL presets
- manager: JSON cache, tag invalidation, counters and the rate limiter
"""

from .backend import CacheClient, InMemoryRedis, create_cache_client
from .keys import CacheKeys, CacheTTL
from .manager import CacheManager, RateLimitResult

__all__ = [
    "CacheClient",
    "CacheKeys",
    "CacheManager",
    "CacheTTL",
    "InMemoryRedis",
    "RateLimitResult",
    "create_cache_client",
]
