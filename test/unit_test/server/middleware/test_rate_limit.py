"""Unit tests for the rate-limit middleware."""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from jobfair_hub.core.cache import CacheManager, InMemoryRedis
from jobfair_hub.server.core.config import RateLimitConfig
from jobfair_hub.server.middleware.rate_limit import RateLimitMiddleware, client_ip, path_group

pytestmark = pytest.mark.asyncio

CONFIG = RateLimitConfig(enabled=True, requests=2, window_seconds=60, verification_requests=1)


def _build_app(cache_provider=None, config: RateLimitConfig = CONFIG) -> FastAPI:
    manager = CacheManager(InMemoryRedis())
    app = FastAPI()
    app.add_middleware(RateLimitMiddleware, cache_provider=cache_provider or (lambda: manager), config=config)

    async def endpoint():
        return {"ok": True}

    for path in ("/health", "/dashboard", "/api/v1/admin/users", "/api/v1/employer/booth", "/api/v1/security/verify/pin"):
        app.add_api_route(path, endpoint, methods=["GET", "POST"])
    return app


async def _hit(app: FastAPI, path: str, times: int, headers=None):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
        return [await client.get(path, headers=headers) for _ in range(times)]


def test_path_group():
    assert path_group("/api/v1/admin/users") == "admin"
    assert path_group("/api/v1/security/verify/qr") == "security-verify"
    assert path_group("/api/v1/security/attendance") == "security"


def test_client_ip_prefers_forwarded_for():
    class _Request:
        headers = {"x-forwarded-for": "10.0.0.1, 10.0.0.2"}
        client = None

    assert client_ip(_Request()) == "10.0.0.1"


async def test_requests_over_limit_get_429():
    responses = await _hit(_build_app(), "/api/v1/admin/users", 3)

    assert [r.status_code for r in responses] == [200, 200, 429]
    assert responses[0].headers["X-RateLimit-Limit"] == "2"
    assert responses[0].headers["X-RateLimit-Remaining"] == "1"
    blocked = responses[2]
    assert int(blocked.headers["Retry-After"]) >= 1
    assert blocked.json()["success"] is False


async def test_verification_endpoints_have_their_own_limit():
    responses = await _hit(_build_app(), "/api/v1/security/verify/pin", 2)
    assert [r.status_code for r in responses] == [200, 429]


async def test_groups_are_counted_separately():
    app = _build_app()
    await _hit(app, "/api/v1/admin/users", 2)
    responses = await _hit(app, "/api/v1/employer/booth", 1)
    assert responses[0].status_code == 200


async def test_clients_are_counted_separately():
    app = _build_app()
    await _hit(app, "/api/v1/admin/users", 2, headers={"x-forwarded-for": "10.0.0.1"})
    responses = await _hit(app, "/api/v1/admin/users", 1, headers={"x-forwarded-for": "10.0.0.2"})
    assert responses[0].status_code == 200


async def test_exempt_and_non_api_paths_are_not_limited():
    app = _build_app()
    assert all(r.status_code == 200 for r in await _hit(app, "/health", 5))
    assert all(r.status_code == 200 for r in await _hit(app, "/dashboard", 5))


async def test_disabled_limiter_lets_everything_through():
    config = RateLimitConfig(enabled=False, requests=1, window_seconds=60, verification_requests=1)
    responses = await _hit(_build_app(config=config), "/api/v1/admin/users", 3)
    assert all(r.status_code == 200 for r in responses)


async def test_cache_failure_fails_open():
    def broken_provider():
        raise ConnectionError("redis down")

    responses = await _hit(_build_app(cache_provider=broken_provider), "/api/v1/admin/users", 3)
    assert all(r.status_code == 200 for r in responses)
