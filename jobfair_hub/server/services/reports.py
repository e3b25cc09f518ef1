"""
Event report for the admin back-office.

Summarises the active event: who took part, how the employers break down by
company size and industry, how many of them are verified, and a directory
of every company. The report is returned as data; rendering it into a
document is left to the client.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any, Dict, List

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from jobfair_hub.core.database.base import utc_now
from jobfair_hub.core.database.entities import AttendanceRecord, Employer, JobSeeker, User
from jobfair_hub.core.database.repositories import build_sql_repos_from_session

from .errors import NotFoundError

logger = logging.getLogger(__name__)

NOT_SPECIFIED = "Not Specified"
TOP_INDUSTRIES = 10


def _percent(part: int, whole: int) -> float:
    return round(part / whole * 100, 1) if whole else 0.0


class ReportService:
    """Builds the active event's report."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repos = build_sql_repos_from_session(session=session)

    async def generate_event_report(self) -> Dict[str, Any]:
        """Report on the active event.

        Raises:
            NotFoundError: No event is active
        """
        event = await self.repos.events.get_active()
        if event is None:
            raise NotFoundError("No active event found.")

        rows = (
            await self.session.execute(
                select(Employer, User.email).outerjoin(User, User.id == Employer.user_id).order_by(Employer.company_name)
            )
        ).all()
        employers = [employer for employer, _ in rows]

        job_seekers = int((await self.session.execute(select(func.count()).select_from(JobSeeker))).scalar_one())
        attended = int(
            (
                await self.session.execute(
                    select(func.count(func.distinct(AttendanceRecord.job_seeker_id))).where(
                        AttendanceRecord.event_id == event.id
                    )
                )
            ).scalar_one()
        )

        sizes = Counter(employer.company_size or NOT_SPECIFIED for employer in employers)
        industries = Counter(employer.industry or NOT_SPECIFIED for employer in employers)
        verified = sum(1 for employer in employers if employer.is_verified)

        directory: List[Dict[str, Any]] = [
            {
                "company_name": employer.company_name,
                "contact_person": employer.contact_person or "N/A",
                "email": email or employer.contact_email or "N/A",
                "industry": employer.industry or NOT_SPECIFIED,
                "company_size": employer.company_size or NOT_SPECIFIED,
                "is_verified": employer.is_verified,
            }
            for employer, email in rows
        ]

        logger.info(f"Event report generated for {event.id}: {len(employers)} employers, {job_seekers} job seekers")
        return {
            "event": {
                "id": event.id,
                "name": event.name,
                "venue": event.venue,
                "start_date": event.start_date.isoformat(),
                "end_date": event.end_date.isoformat(),
            },
            "generated_at": utc_now().isoformat(),
            "participation": {
                "employers": len(employers),
                "job_seekers": job_seekers,
                "attended_job_seekers": attended,
                "attendance_rate": _percent(attended, job_seekers),
            },
            "verification": {
                "verified": verified,
                "pending": len(employers) - verified,
                "verification_rate": _percent(verified, len(employers)),
            },
            "company_size_distribution": dict(sizes),
            "top_industries": [
                {"industry": industry, "count": count} for industry, count in industries.most_common(TOP_INDUSTRIES)
            ],
            "employer_directory": directory,
        }
