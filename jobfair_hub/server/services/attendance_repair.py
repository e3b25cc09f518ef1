"""
Attendance record repair.

Older check-ins could reference verifier ids that are not security
personnel. This service reports such records and, when asked, detaches
them from the bogus verifier while keeping the old id in the notes.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any, Dict

from sqlalchemy.ext.asyncio import AsyncSession

from jobfair_hub.core.database.repositories import build_sql_repos_from_session

logger = logging.getLogger(__name__)


class AttendanceRepairService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.repos = build_sql_repos_from_session(session=session)

    async def analyze_attendance_records(self) -> Dict[str, Any]:
        """Summarize records whose ``verified_by`` is not a known security personnel id."""
        valid_ids = await self.repos.security_personnel.all_ids()
        total = await self.repos.attendance.count()
        invalid = Counter(
            record.verified_by
            for record in await self.repos.attendance.list_with_verifier()
            if record.verified_by not in valid_ids
        )
        return {
            "total_attendance_records": total,
            "valid_security_personnel": len(valid_ids),
            "invalid_records": sum(invalid.values()),
            "invalid_verifiers": [
                {"verified_by": verified_by, "count": count} for verified_by, count in invalid.most_common()
            ],
        }

    async def fix_attendance_records(self, apply: bool = False) -> Dict[str, Any]:
        """Detach invalid verifiers.

        Args:
            apply: Write the fix; when false only the analysis is returned

        Returns:
            The analysis plus ``applied`` and ``fixed`` (records changed)
        """
        analysis = await self.analyze_attendance_records()
        if not apply or analysis["invalid_records"] == 0:
            return {**analysis, "applied": False, "fixed": 0}

        valid_ids = await self.repos.security_personnel.all_ids()
        fixed = 0
        for record in await self.repos.attendance.list_with_verifier():
            if record.verified_by in valid_ids:
                continue
            marker = f"[verifiedBy fixed from {record.verified_by}]"
            record.notes = f"{record.notes} {marker}" if record.notes else marker
            record.verified_by = None
            self.session.add(record)
            fixed += 1
        await self.session.commit()
        logger.info(f"Fixed {fixed} attendance records with invalid verifiers")
        return {**analysis, "applied": True, "fixed": fixed}
