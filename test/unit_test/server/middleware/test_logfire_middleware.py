"""
Unit tests for Logfire middleware.

This test suite covers:
- Request/response processing
- Performance metrics collection
- Error handling
- Slow request detection
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import Request
from starlette.responses import Response

from jobfair_hub.server.middleware.logfire_middleware import LogfireMiddleware

pytestmark = pytest.mark.asyncio


def _mock_request(method: str = "GET", path: str = "/api/v1/admin/dashboard"):
    request = AsyncMock(spec=Request)
    request.method = method
    request.url.path = path
    request.state = MagicMock()
    return request


async def test_middleware_reports_successful_request():
    """Test that middleware reports successful requests."""
    middleware = LogfireMiddleware(app=AsyncMock())

    async def call_next(request):
        return Response(content="ok", status_code=200)

    with patch("jobfair_hub.server.middleware.logfire_middleware.log_api_request") as mock_log:
        response = await middleware.dispatch(_mock_request(), call_next)

    assert response.status_code == 200
    mock_log.assert_called_once()
    kwargs = mock_log.call_args.kwargs
    assert kwargs["method"] == "GET"
    assert kwargs["path"] == "/api/v1/admin/dashboard"
    assert kwargs["status_code"] == 200
    assert kwargs["duration_ms"] >= 0


async def test_middleware_adds_process_time_header():
    middleware = LogfireMiddleware(app=AsyncMock())

    async def call_next(request):
        return Response(content="ok", status_code=201)

    with patch("jobfair_hub.server.middleware.logfire_middleware.log_api_request"):
        response = await middleware.dispatch(_mock_request("POST"), call_next)

    assert float(response.headers["X-Process-Time"]) >= 0


async def test_middleware_reports_and_reraises_errors():
    middleware = LogfireMiddleware(app=AsyncMock())

    async def call_next(request):
        raise RuntimeError("boom")

    with patch("jobfair_hub.server.middleware.logfire_middleware.log_api_request") as mock_log:
        with pytest.raises(RuntimeError):
            await middleware.dispatch(_mock_request(), call_next)

    assert mock_log.call_args.kwargs["status_code"] == 500


async def test_middleware_warns_on_slow_request():
    middleware = LogfireMiddleware(app=AsyncMock())

    async def call_next(request):
        return Response(content="ok", status_code=200)

    with patch("jobfair_hub.server.middleware.logfire_middleware.log_api_request"), patch(
        "jobfair_hub.server.middleware.logfire_middleware.SLOW_REQUEST_MS", -1
    ), patch("jobfair_hub.server.middleware.logfire_middleware.logger") as mock_logger:
        await middleware.dispatch(_mock_request(), call_next)

    mock_logger.warning.assert_called_once()
    assert "Slow API request" in mock_logger.warning.call_args.args[0]
