"""Fixtures for API tests.

The application runs against the per-test SQLite session and in-memory
cache; callers authenticate with real signed session tokens.
"""

from typing import AsyncGenerator, Dict

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from jobfair_hub.core.database import get_session
from jobfair_hub.core.database.entities import User
from jobfair_hub.server.core.security import create_session_token
from jobfair_hub.server.main import app
from jobfair_hub.server.services.cache import close_cache_manager, get_cache_manager


def auth_headers(user: User) -> Dict[str, str]:
    token = create_session_token(user.id, user.role, email=user.email, name=user.name)
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def client(session, cache) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to the application with test overrides."""

    async def override_session():
        yield session

    await close_cache_manager()
    app.dependency_overrides[get_session] = override_session
    app.dependency_overrides[get_cache_manager] = lambda: cache
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as ac:
        yield ac
    app.dependency_overrides.clear()
    await close_cache_manager()
