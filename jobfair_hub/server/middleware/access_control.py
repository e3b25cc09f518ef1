"""
Access control middleware.

Resolves the caller from the session token before any protected route runs
and applies the role rules of each API area. Unauthenticated callers get a
401 with a login redirect; callers with the wrong role get a 403 that points
back to the dashboard. Every response carries the security headers.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Callable, FrozenSet, Optional
from urllib.parse import quote

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from jobfair_hub.core.database.entities import UserRole
from jobfair_hub.core.logging_config import get_logger
from jobfair_hub.server.core import constant
from jobfair_hub.server.core.config import settings
from jobfair_hub.server.core.security import CurrentUser, resolve_identity

logger = get_logger(__name__)

API = constant.API_V1_STR

PUBLIC_PATHS = frozenset(
    {
        "/",
        "/health",
        "/version",
        constant.LOGIN_PATH,
        f"{API}/openapi.json",
        f"{API}/docs",
        f"{API}/redoc",
    }
)
PUBLIC_PREFIXES = (f"{API}/docs/", f"{API}/registration", f"{API}/auth", f"{API}/health")
NO_STORE_PREFIXES = (f"{API}/dashboard", f"{API}/admin")
COMPANY_ONBOARD = "company-onboard"
EMPLOYER_SETUP = f"{API}/employer/setup"

SECURITY_HEADERS = {
    "X-Frame-Options": "DENY",
    "X-Content-Type-Options": "nosniff",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "X-XSS-Protection": "1; mode=block",
}


@dataclass(frozen=True)
class AccessRule:
    """Roles allowed under a path prefix; ``None`` admits any signed-in user."""

    prefix: str
    roles: Optional[FrozenSet[UserRole]]

    def matches(self, path: str) -> bool:
        return path == self.prefix or path.startswith(self.prefix + "/")


# Most specific prefix first.
ACCESS_RULES = (
    AccessRule(f"{API}/admin", frozenset({UserRole.ADMIN})),
    AccessRule(EMPLOYER_SETUP, None),
    AccessRule(f"{API}/employer", frozenset({UserRole.EMPLOYER, UserRole.ADMIN})),
    AccessRule(f"{API}/security/setup", None),
    AccessRule(f"{API}/security", frozenset({UserRole.SECURITY, UserRole.ADMIN})),
    AccessRule(API, None),
)


def is_public_path(path: str) -> bool:
    if path in PUBLIC_PATHS or path.startswith(PUBLIC_PREFIXES):
        return True
    return not (path == API or path.startswith(API + "/"))


def find_rule(path: str) -> Optional[AccessRule]:
    return next((rule for rule in ACCESS_RULES if rule.matches(path)), None)


def login_redirect(path: str) -> str:
    return f"{constant.LOGIN_PATH}?callbackUrl={quote(path, safe='/')}"


def unauthorized(path: str, message: str = "Authentication required") -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"success": False, "message": message, "redirect": login_redirect(path)},
    )


def forbidden(message: str = "Insufficient permissions") -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_403_FORBIDDEN,
        content={"success": False, "message": message, "redirect": constant.DASHBOARD_PATH},
    )


def apply_security_headers(response: Response, path: str) -> Response:
    for name, value in SECURITY_HEADERS.items():
        response.headers[name] = value
    if path.startswith(NO_STORE_PREFIXES):
        response.headers["Cache-Control"] = "private, no-cache, no-store, must-revalidate"
    return response


class AccessControlMiddleware(BaseHTTPMiddleware):
    """Authenticate and authorize API requests by path prefix."""

    def __init__(self, app, identity_resolver: Callable = resolve_identity, timeout_seconds: Optional[float] = None):
        super().__init__(app)
        self.identity_resolver = identity_resolver
        self.timeout_seconds = timeout_seconds if timeout_seconds is not None else settings.auth.timeout_seconds

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        path = request.url.path
        try:
            denial = await self.authorize(request)
        except Exception as e:
            logger.error(f"Access control failed for {request.method} {path}: {e}", exc_info=True)
            response = await call_next(request)
            response.headers["X-Middleware-Error"] = "true"
            response.headers["X-Error-Type"] = type(e).__name__
            return apply_security_headers(response, path)

        if denial is not None:
            return apply_security_headers(denial, path)
        response = await call_next(request)
        return apply_security_headers(response, path)

    async def authorize(self, request: Request) -> Optional[Response]:
        """Return a denial response, or ``None`` when the request may proceed."""
        path = request.url.path
        if request.method == "OPTIONS" or is_public_path(path):
            return None

        try:
            user: Optional[CurrentUser] = await asyncio.wait_for(
                self.identity_resolver(request), timeout=self.timeout_seconds
            )
        except asyncio.TimeoutError:
            logger.warning(f"Identity resolution timed out after {self.timeout_seconds}s for {path}")
            return unauthorized(path, "Authentication timed out")

        if user is None:
            return unauthorized(path)
        request.state.user = user

        rule = find_rule(path)
        if rule is None:
            return None
        if rule.prefix == EMPLOYER_SETUP:
            return self._check_company_onboarding(request, user)
        if rule.roles is not None and user.role not in rule.roles:
            logger.info(f"User {user.id} with role {user.role.value} denied access to {path}")
            return forbidden()
        return None

    @staticmethod
    def _check_company_onboarding(request: Request, user: CurrentUser) -> Optional[Response]:
        if user.role in (UserRole.EMPLOYER, UserRole.ADMIN):
            return None
        if request.query_params.get("from") == COMPANY_ONBOARD:
            return None
        return forbidden("Complete company onboarding to access the employer area")
