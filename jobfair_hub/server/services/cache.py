"""
Cache manager dependency.

Provides the process-wide ``CacheManager``, created from ``REDIS_URL`` on
first use and closed on application shutdown.
"""

from __future__ import annotations

from typing import Annotated, Optional

from fastapi import Depends

from jobfair_hub.core.cache import CacheManager, create_cache_client
from jobfair_hub.server.core.config import settings

_cache_manager: Optional[CacheManager] = None


def get_cache_manager() -> CacheManager:
    global _cache_manager
    if _cache_manager is None:
        _cache_manager = CacheManager(create_cache_client(settings.redis.url))
    return _cache_manager


async def close_cache_manager() -> None:
    global _cache_manager
    if _cache_manager is not None:
        await _cache_manager.close()
        _cache_manager = None


CacheDep = Annotated[CacheManager, Depends(get_cache_manager)]
