"""Unit tests for the in-process cache store and client construction."""

import pytest
from redis.exceptions import ResponseError

from jobfair_hub.core.cache import InMemoryRedis, create_cache_client

pytestmark = pytest.mark.asyncio


@pytest.fixture
def store() -> InMemoryRedis:
    return InMemoryRedis()


async def test_set_and_get(store):
    await store.set("k", "v")
    assert await store.get("k") == "v"


async def test_missing_key_ttl(store):
    assert await store.ttl("missing") == -2


async def test_key_without_expiry_ttl(store):
    await store.set("k", "v")
    assert await store.ttl("k") == -1


async def test_setex_sets_ttl(store):
    await store.setex("k", 60, "v")
    assert 0 < await store.ttl("k") <= 60


async def test_expired_key_is_gone(store):
    await store.setex("k", 10, "v")
    entry = store._store["k"]
    entry.expires_at = 0
    assert await store.get("k") is None


async def test_incr_counts_from_zero(store):
    assert await store.incr("counter") == 1
    assert await store.incrby("counter", 5) == 6


async def test_incr_on_text_raises(store):
    await store.set("k", "text")
    with pytest.raises(ResponseError):
        await store.incr("k")


async def test_sets_and_keys(store):
    assert await store.sadd("tags:user", "user:1", "user:2") == 2
    assert await store.sadd("tags:user", "user:1") == 0
    assert await store.smembers("tags:user") == {"user:1", "user:2"}
    await store.set("user:1", "a")
    assert await store.keys("user:*") == ["user:1"]


async def test_delete_counts_existing_keys(store):
    await store.set("a", 1)
    assert await store.delete("a", "b") == 1


async def test_ping_and_flush(store):
    await store.set("a", 1)
    assert await store.ping() is True
    await store.flushdb()
    assert await store.get("a") is None


def test_create_client_without_url_uses_memory_store():
    assert isinstance(create_cache_client(None), InMemoryRedis)
    assert isinstance(create_cache_client(""), InMemoryRedis)


def test_create_client_with_url_uses_redis():
    import redis.asyncio as redis

    client = create_cache_client("redis://localhost:6379/0")
    assert isinstance(client, redis.Redis)
