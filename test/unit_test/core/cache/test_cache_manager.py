"""Unit tests for the cache manager and rate limiter."""

import time
from unittest.mock import AsyncMock

import pytest

from jobfair_hub.core.cache import CacheKeys, CacheManager, CacheTTL, InMemoryRedis

pytestmark = pytest.mark.asyncio


@pytest.fixture
def manager() -> CacheManager:
    return CacheManager(InMemoryRedis())


@pytest.fixture
def broken_manager() -> CacheManager:
    client = AsyncMock()
    for name in ("setex", "get", "delete", "sadd", "smembers", "incr", "incrby", "expire", "ttl", "ping"):
        getattr(client, name).side_effect = ConnectionError("redis down")
    return CacheManager(client)


async def test_set_and_get_round_trips_json(manager):
    await manager.set(CacheKeys.USERS, "1", {"id": "1", "roles": ["admin"]})
    assert await manager.get(CacheKeys.USERS, "1") == {"id": "1", "roles": ["admin"]}


async def test_get_miss_returns_none(manager):
    assert await manager.get(CacheKeys.USERS, "missing") is None


async def test_get_or_set_fetches_once(manager):
    fetch = AsyncMock(return_value={"total": 3})

    first = await manager.get_or_set(CacheKeys.DASHBOARD_STATS, "main", fetch, CacheTTL.DASHBOARD)
    second = await manager.get_or_set(CacheKeys.DASHBOARD_STATS, "main", fetch, CacheTTL.DASHBOARD)

    assert first == second == {"total": 3}
    fetch.assert_awaited_once()


async def test_get_or_set_force_refresh(manager):
    fetch = AsyncMock(side_effect=[1, 2])
    await manager.get_or_set(CacheKeys.EVENTS, "active", fetch)
    assert await manager.get_or_set(CacheKeys.EVENTS, "active", fetch, force_refresh=True) == 2


async def test_get_or_set_does_not_store_none(manager):
    fetch = AsyncMock(return_value=None)
    await manager.get_or_set(CacheKeys.EVENTS, "active", fetch)
    await manager.get_or_set(CacheKeys.EVENTS, "active", fetch)
    assert fetch.await_count == 2


async def test_invalidate_pattern_drops_tagged_keys(manager):
    await manager.get_or_set(CacheKeys.JOBSEEKERS, "a", AsyncMock(return_value=1))
    await manager.get_or_set(CacheKeys.JOBSEEKERS, "b", AsyncMock(return_value=2))
    await manager.get_or_set(CacheKeys.EMPLOYERS, "c", AsyncMock(return_value=3))

    await manager.invalidate_pattern(CacheKeys.JOBSEEKERS)

    assert await manager.get(CacheKeys.JOBSEEKERS, "a") is None
    assert await manager.get(CacheKeys.JOBSEEKERS, "b") is None
    assert await manager.get(CacheKeys.EMPLOYERS, "c") == 3


async def test_clear_all_drops_every_family(manager):
    await manager.get_or_set(CacheKeys.EMPLOYERS, "c", AsyncMock(return_value=3))
    await manager.get_or_set(CacheKeys.ANALYTICS, "d", AsyncMock(return_value=4))
    await manager.clear_all()
    assert await manager.get(CacheKeys.EMPLOYERS, "c") is None
    assert await manager.get(CacheKeys.ANALYTICS, "d") is None


async def test_increment(manager):
    assert await manager.increment("counter", "x") == 1
    assert await manager.increment("counter", "x", amount=4) == 5


async def test_health_check(manager):
    assert await manager.health_check() is True


async def test_rate_limit_fixed_window(manager):
    results = [await manager.rate_limit("1.2.3.4:admin", limit=3, window_seconds=60) for _ in range(4)]

    assert [r.allowed for r in results] == [True, True, True, False]
    assert [r.remaining for r in results] == [2, 1, 0, 0]
    assert all(r.limit == 3 for r in results)
    now = int(time.time())
    assert now < results[0].reset_time <= now + 60


async def test_rate_limit_keys_are_independent(manager):
    await manager.rate_limit("a", limit=1, window_seconds=60)
    assert (await manager.rate_limit("b", limit=1, window_seconds=60)).allowed


async def test_rate_limit_window_does_not_slide(manager):
    await manager.rate_limit("a", limit=5, window_seconds=60)
    ttl_before = await manager.client.ttl("ratelimit:a")
    manager.client._store["ratelimit:a"].expires_at -= 30
    await manager.rate_limit("a", limit=5, window_seconds=60)
    assert await manager.client.ttl("ratelimit:a") < ttl_before


async def test_store_errors_degrade_gracefully(broken_manager):
    await broken_manager.set(CacheKeys.USERS, "1", {"a": 1})
    assert await broken_manager.get(CacheKeys.USERS, "1") is None
    assert await broken_manager.increment("counter", "x") == 0
    assert await broken_manager.health_check() is False


async def test_rate_limit_fails_open(broken_manager):
    result = await broken_manager.rate_limit("a", limit=2, window_seconds=60)
    assert result.allowed
    assert result.remaining == 2


async def test_get_or_set_still_fetches_when_store_is_down(broken_manager):
    fetch = AsyncMock(return_value={"ok": True})
    assert await broken_manager.get_or_set(CacheKeys.USERS, "1", fetch) == {"ok": True}
