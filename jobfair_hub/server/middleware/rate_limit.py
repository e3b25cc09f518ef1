"""
Fixed-window rate limiting per client IP.

Each API area is counted separately, keyed ``{ip}:{group}``; the check-in
endpoints get their own, tighter limit. Limited responses carry the
``X-RateLimit-*`` headers and a rejected request gets a 429 with
``Retry-After``. A failing cache store lets requests through.
"""

from __future__ import annotations

import time
from typing import Callable, Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from jobfair_hub.core.cache import CacheManager, RateLimitResult
from jobfair_hub.core.logging_config import get_logger
from jobfair_hub.core.monitoring import log_rate_limited
from jobfair_hub.server.core import constant
from jobfair_hub.server.core.config import RateLimitConfig, settings
from jobfair_hub.server.services.cache import get_cache_manager

logger = get_logger(__name__)

API = constant.API_V1_STR
EXEMPT_PATHS = frozenset({"/health", "/version", f"{API}/health"})
VERIFICATION_PREFIX = f"{API}/security/verify"


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def path_group(path: str) -> str:
    """The API area a path belongs to, such as ``admin`` or ``security-verify``."""
    if path.startswith(VERIFICATION_PREFIX):
        return "security-verify"
    parts = path[len(API):].strip("/").split("/")
    return parts[0] or "root"


def rate_limit_headers(result: RateLimitResult) -> dict:
    return {
        "X-RateLimit-Limit": str(result.limit),
        "X-RateLimit-Remaining": str(result.remaining),
        "X-RateLimit-Reset": str(result.reset_time),
    }


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Reject clients that exceed their request quota for the current window."""

    def __init__(
        self,
        app,
        cache_provider: Callable[[], CacheManager] = get_cache_manager,
        config: Optional[RateLimitConfig] = None,
    ):
        super().__init__(app)
        self.cache_provider = cache_provider
        self.config = config or settings.rate_limit

    def is_limited(self, path: str) -> bool:
        if not self.config.enabled or path in EXEMPT_PATHS:
            return False
        return path.startswith(API + "/")

    def limit_for(self, path: str) -> int:
        if path.startswith(VERIFICATION_PREFIX):
            return self.config.verification_requests
        return self.config.requests

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        path = request.url.path
        if request.method == "OPTIONS" or not self.is_limited(path):
            return await call_next(request)

        key = f"{client_ip(request)}:{path_group(path)}"
        limit = self.limit_for(path)
        try:
            result = await self.cache_provider().rate_limit(key, limit, self.config.window_seconds)
        except Exception as e:
            logger.warning(f"Rate limit check failed for {key}, allowing request: {e}")
            return await call_next(request)

        headers = rate_limit_headers(result)
        if not result.allowed:
            log_rate_limited(key, path, limit)
            retry_after = max(1, result.reset_time - int(time.time()))
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content={
                    "success": False,
                    "message": "Too many requests. Please try again later.",
                    "retry_after": retry_after,
                },
                headers={**headers, "Retry-After": str(retry_after)},
            )

        response = await call_next(request)
        response.headers.update(headers)
        return response
