"""
Session token handling.

Users sign in through the external identity provider, which issues a signed
JWT carrying ``sub`` (user id), ``role``, ``email`` and ``name``. The token is
sent as a bearer token or in the ``session_token`` cookie; this module
decodes it into a ``CurrentUser`` and provides the FastAPI dependencies the
routers use.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Annotated, Any, Dict, Optional

from fastapi import Depends, HTTPException, Request, status
from jose import JWTError, jwt
from pydantic import BaseModel

from jobfair_hub.core.database.entities.users import UserRole

from .config import settings
from .constant import SESSION_COOKIE_NAME


class CurrentUser(BaseModel):
    """Identity of the caller as carried by the session token."""

    id: str
    role: UserRole = UserRole.JOB_SEEKER
    email: Optional[str] = None
    name: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


def create_session_token(
    user_id: str,
    role: UserRole | str,
    email: Optional[str] = None,
    name: Optional[str] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Sign a session token for a user."""
    claims: Dict[str, Any] = {
        "sub": user_id,
        "role": UserRole(role).value,
        "email": email,
        "name": name,
        "exp": datetime.now(timezone.utc) + (expires_delta or timedelta(hours=12)),
    }
    return jwt.encode(claims, settings.auth.secret, algorithm=settings.auth.algorithm)


def decode_session_token(token: str) -> Optional[CurrentUser]:
    """Decode and verify a session token.

    Returns:
        The ``CurrentUser`` or ``None`` if the token is invalid, expired or
        lacks a subject.
    """
    try:
        payload = jwt.decode(token, settings.auth.secret, algorithms=[settings.auth.algorithm])
    except JWTError:
        return None

    user_id = payload.get("sub")
    if not user_id:
        return None
    try:
        role = UserRole(payload.get("role") or UserRole.JOB_SEEKER.value)
    except ValueError:
        return None
    return CurrentUser(id=str(user_id), role=role, email=payload.get("email"), name=payload.get("name"))


def extract_token(request: Request) -> Optional[str]:
    """Return the bearer token, falling back to the session cookie."""
    authorization = request.headers.get("authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return credentials.strip()
    return request.cookies.get(SESSION_COOKIE_NAME)


async def resolve_identity(request: Request) -> Optional[CurrentUser]:
    """Resolve the caller of ``request``, or ``None`` for an anonymous request."""
    token = extract_token(request)
    if not token:
        return None
    return decode_session_token(token)


async def get_optional_user(request: Request) -> Optional[CurrentUser]:
    """Dependency returning the caller if signed in.

    Reuses the identity resolved by the access-control middleware when present.
    """
    user = getattr(request.state, "user", None)
    if user is not None:
        return user
    return await resolve_identity(request)


async def get_current_user(user: Optional[CurrentUser] = Depends(get_optional_user)) -> CurrentUser:
    """Dependency requiring a signed-in caller."""
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


OptionalUserDep = Annotated[Optional[CurrentUser], Depends(get_optional_user)]
CurrentUserDep = Annotated[CurrentUser, Depends(get_current_user)]
