"""
Employer profile service.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, Optional
from urllib.parse import urlparse

from sqlalchemy.ext.asyncio import AsyncSession

from jobfair_hub.core.cache import CacheManager
from jobfair_hub.core.database.base import utc_now
from jobfair_hub.core.database.entities import CompanySize, Employer, UserRole
from jobfair_hub.core.database.repositories import build_sql_repos_from_session
from jobfair_hub.core.models.io import ActionResult
from jobfair_hub.core.models.io.employers import EmployerProfileInput, EmployerRead

from .cached_queries import CachedQueries
from .errors import InvalidInputError, NotFoundError, PermissionDeniedError

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("company_name", "industry", "company_size", "contact_email")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def normalize_website(website: str) -> str:
    """Prefix ``https://`` when no scheme is given and check the result parses as a URL.

    Raises:
        InvalidInputError: The value is not a usable URL
    """
    url = website if re.match(r"^[a-zA-Z][a-zA-Z0-9+.-]*://", website) else f"https://{website}"
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc or " " in parsed.netloc:
        raise InvalidInputError("Please enter a valid website URL")
    return url


def _clean(data: EmployerProfileInput) -> Dict[str, Any]:
    """Trimmed, non-empty submitted fields."""
    cleaned = {}
    for key, value in data.model_dump(exclude_unset=True).items():
        if isinstance(value, str):
            value = value.strip()
        if value not in (None, ""):
            cleaned[key] = value
    return cleaned


def _validate(fields: Dict[str, Any]) -> None:
    if "company_size" in fields and fields["company_size"] not in {size.value for size in CompanySize}:
        raise InvalidInputError("Invalid company size specified")
    if "contact_email" in fields and not EMAIL_PATTERN.match(fields["contact_email"]):
        raise InvalidInputError("Please enter a valid email address")
    if "website" in fields:
        fields["website"] = normalize_website(fields["website"])


class EmployerService:
    """Employer (company) profiles."""

    def __init__(self, session: AsyncSession, cache: CacheManager):
        self.session = session
        self.repos = build_sql_repos_from_session(session=session)
        self.cached = CachedQueries(session, cache)

    async def create_employer_profile(self, user_id: str, data: EmployerProfileInput) -> ActionResult:
        """Create the caller's employer profile, or welcome them back to an existing one.

        Raises:
            InvalidInputError: Missing required fields or an invalid value
            NotFoundError: The user does not exist
        """
        fields = _clean(data)
        missing = [name for name in REQUIRED_FIELDS if name not in fields]
        if missing:
            raise InvalidInputError(f"Missing required fields: {', '.join(missing)}")

        existing = await self.repos.employers.get_by_user_id(user_id)
        if existing is not None:
            return ActionResult.ok(
                f"Welcome back, {existing.company_name}!", EmployerRead.model_validate(existing).model_dump(mode="json")
            )

        _validate(fields)
        user = await self.repos.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")

        employer = Employer(user_id=user_id, is_verified=False, **fields)
        self.session.add(employer)
        user.role = UserRole.EMPLOYER.value
        user.updated_at = utc_now()
        self.session.add(user)
        await self.session.commit()
        await self.session.refresh(employer)

        logger.info(f"Created employer profile {employer.id} for user {user_id}")
        await self.cached.invalidate_employer(employer.id)
        await self.cached.invalidate_user(user_id, user.email)
        return ActionResult.ok(
            f"Welcome to the platform, {employer.company_name}!",
            EmployerRead.model_validate(employer).model_dump(mode="json"),
        )

    async def update_employer_profile(self, user_id: str, employer_id: str, data: EmployerProfileInput) -> ActionResult:
        employer = await self.repos.employers.get_by_id(employer_id)
        if employer is None:
            raise NotFoundError("Employer profile not found")
        if employer.user_id != user_id:
            raise PermissionDeniedError("You can only update your own company profile")

        fields = _clean(data)
        _validate(fields)
        for key, value in fields.items():
            setattr(employer, key, value)
        await self.repos.employers.update(employer)

        await self.cached.invalidate_employer(employer.id)
        return ActionResult.ok("Profile updated successfully", EmployerRead.model_validate(employer).model_dump(mode="json"))

    async def get_employer_profile(self, user_id: str) -> Optional[EmployerRead]:
        employer = await self.repos.employers.get_by_user_id(user_id)
        return EmployerRead.model_validate(employer) if employer is not None else None
