"""
Read-through cached queries.

Frequently read records and aggregates are served from the cache and
filled from the database on a miss. Values are stored as JSON-ready dicts,
so callers get the same shape whether or not the cache answered. Services
call the ``invalidate_*`` helpers after every mutation of the underlying
rows.
"""

from __future__ import annotations

import json
import logging
from datetime import timedelta
from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from jobfair_hub.core.cache import CacheKeys, CacheManager, CacheTTL
from jobfair_hub.core.database.base import utc_now
from jobfair_hub.core.database.entities import AttendanceRecord, Employer, Event, User
from jobfair_hub.core.database.repositories import build_sql_repos_from_session

logger = logging.getLogger(__name__)

ANALYTICS_PERIODS: Dict[str, int] = {"day": 1, "week": 7, "month": 30}


def _dump(entity) -> Optional[Dict[str, Any]]:
    return entity.model_dump(mode="json") if entity is not None else None


def _filters_key(filters: Optional[Dict[str, Any]]) -> str:
    return "all:" + json.dumps(filters or {}, sort_keys=True, default=str)


class CachedQueries:
    """Cached getters and invalidation helpers."""

    def __init__(self, session: AsyncSession, cache: CacheManager):
        self.session = session
        self.cache = cache
        self.repos = build_sql_repos_from_session(session=session)

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    async def get_user_by_id(self, user_id: str) -> Optional[Dict[str, Any]]:
        async def fetch():
            return _dump(await self.repos.users.get_by_id(user_id))

        return await self.cache.get_or_set(CacheKeys.USERS, user_id, fetch, CacheTTL.USER_SESSION)

    async def get_user_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        async def fetch():
            return _dump(await self.repos.users.get_by_email(email))

        return await self.cache.get_or_set(CacheKeys.USERS, f"email:{email}", fetch, CacheTTL.USER_SESSION)

    async def get_users(self, filters: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        filters = filters or {}

        async def fetch():
            users = await self.repos.users.search(
                role=filters.get("role"),
                is_active=filters.get("is_active"),
                search=filters.get("search"),
                limit=filters.get("limit"),
                offset=filters.get("offset"),
            )
            return [_dump(user) for user in users]

        return await self.cache.get_or_set(CacheKeys.USERS, _filters_key(filters), fetch, CacheTTL.SHORT)

    # ------------------------------------------------------------------
    # Job seekers
    # ------------------------------------------------------------------

    async def get_job_seeker_by_id(self, job_seeker_id: str) -> Optional[Dict[str, Any]]:
        async def fetch():
            return _dump(await self.repos.job_seekers.get_by_id(job_seeker_id))

        return await self.cache.get_or_set(CacheKeys.JOBSEEKERS, job_seeker_id, fetch, CacheTTL.MEDIUM)

    async def get_job_seeker_by_user_id(self, user_id: str) -> Optional[Dict[str, Any]]:
        async def fetch():
            return _dump(await self.repos.job_seekers.get_by_user_id(user_id))

        return await self.cache.get_or_set(CacheKeys.JOBSEEKERS, f"user:{user_id}", fetch, CacheTTL.MEDIUM)

    async def get_job_seekers(self, filters: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        filters = filters or {}

        async def fetch():
            seekers = await self.repos.job_seekers.list(
                limit=filters.get("limit"),
                offset=filters.get("offset"),
                filters={k: v for k, v in filters.items() if k not in ("limit", "offset")},
            )
            return [_dump(seeker) for seeker in seekers]

        return await self.cache.get_or_set(CacheKeys.JOBSEEKERS, _filters_key(filters), fetch, CacheTTL.SHORT)

    # ------------------------------------------------------------------
    # Employers
    # ------------------------------------------------------------------

    async def get_employer_by_id(self, employer_id: str) -> Optional[Dict[str, Any]]:
        async def fetch():
            return _dump(await self.repos.employers.get_by_id(employer_id))

        return await self.cache.get_or_set(CacheKeys.EMPLOYERS, employer_id, fetch, CacheTTL.MEDIUM)

    async def get_employers(self, filters: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        filters = filters or {}

        async def fetch():
            employers = await self.repos.employers.list(
                limit=filters.get("limit"),
                offset=filters.get("offset"),
                filters={k: v for k, v in filters.items() if k not in ("limit", "offset")},
            )
            return [_dump(employer) for employer in employers]

        return await self.cache.get_or_set(CacheKeys.EMPLOYERS, _filters_key(filters), fetch, CacheTTL.SHORT)

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    async def get_current_event(self) -> Optional[Dict[str, Any]]:
        async def fetch():
            return _dump(await self.repos.events.get_active())

        return await self.cache.get_or_set(CacheKeys.EVENTS, "current", fetch, CacheTTL.LONG)

    async def get_all_events(self) -> List[Dict[str, Any]]:
        async def fetch():
            return [_dump(event) for event in await self.repos.events.list()]

        return await self.cache.get_or_set(CacheKeys.EVENTS, "all", fetch, CacheTTL.LONG)

    # ------------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------------

    async def get_dashboard_stats(self, force_refresh: bool = False) -> Dict[str, Any]:
        """Headline counts for the admin dashboard."""

        async def fetch():
            since = utc_now() - timedelta(hours=24)
            total_users = await self._scalar(select(func.count()).select_from(User))
            new_registrations = await self._scalar(
                select(func.count()).select_from(User).where(User.created_at >= since)
            )
            verified_employers = await self._scalar(
                select(func.count()).select_from(Employer).where(Employer.is_verified == True)  # noqa: E712
            )
            active_events = await self._scalar(
                select(func.count()).select_from(Event).where(Event.is_active == True)  # noqa: E712
            )
            return {
                "total_users": total_users,
                "new_registrations": new_registrations,
                "verified_employers": verified_employers,
                "active_events": active_events,
                "last_updated": utc_now().isoformat(),
            }

        return await self.cache.get_or_set(
            CacheKeys.DASHBOARD_STATS, "main", fetch, CacheTTL.DASHBOARD, force_refresh=force_refresh
        )

    async def get_attendance_analytics(self, period: str = "day") -> List[Dict[str, Any]]:
        """Check-in counts per calendar date over the last day, week or month."""
        days = ANALYTICS_PERIODS.get(period, 1)

        async def fetch():
            since = utc_now() - timedelta(days=days)
            day = func.date(AttendanceRecord.check_in_time)
            stmt = (
                select(day.label("date"), func.count().label("count"))
                .where(AttendanceRecord.check_in_time >= since)
                .group_by(day)
                .order_by(day)
            )
            result = await self.session.execute(stmt)
            return [{"date": str(row.date), "count": int(row.count)} for row in result.all()]

        return await self.cache.get_or_set(CacheKeys.ANALYTICS, f"attendance:{period}", fetch, CacheTTL.ANALYTICS)

    async def _scalar(self, stmt) -> int:
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    # ------------------------------------------------------------------
    # Invalidation
    # ------------------------------------------------------------------

    async def invalidate_user(self, user_id: Optional[str] = None, email: Optional[str] = None) -> None:
        if user_id:
            await self.cache.delete(CacheKeys.USERS, user_id)
        if email:
            await self.cache.delete(CacheKeys.USERS, f"email:{email}")
        await self.cache.invalidate_pattern(CacheKeys.USERS)
        await self.invalidate_dashboard()

    async def invalidate_job_seeker(self, job_seeker_id: Optional[str] = None, user_id: Optional[str] = None) -> None:
        if job_seeker_id:
            await self.cache.delete(CacheKeys.JOBSEEKERS, job_seeker_id)
        if user_id:
            await self.cache.delete(CacheKeys.JOBSEEKERS, f"user:{user_id}")
        await self.cache.invalidate_pattern(CacheKeys.JOBSEEKERS)
        await self.invalidate_dashboard()

    async def invalidate_employer(self, employer_id: Optional[str] = None) -> None:
        if employer_id:
            await self.cache.delete(CacheKeys.EMPLOYERS, employer_id)
        await self.cache.invalidate_pattern(CacheKeys.EMPLOYERS)
        await self.invalidate_dashboard()

    async def invalidate_events(self) -> None:
        await self.cache.invalidate_pattern(CacheKeys.EVENTS)
        await self.invalidate_dashboard()

    async def invalidate_dashboard(self) -> None:
        await self.cache.delete(CacheKeys.DASHBOARD_STATS, "main")

    async def invalidate_attendance(self) -> None:
        await self.cache.invalidate_pattern(CacheKeys.ANALYTICS)

    async def clear_all(self) -> None:
        await self.cache.clear_all()
        logger.info("All cache families cleared")
