"""Unit tests for attendance record repair."""

import pytest

from jobfair_hub.core.database.entities import AttendanceRecord
from jobfair_hub.server.services.attendance_repair import AttendanceRepairService

pytestmark = pytest.mark.asyncio


async def _record(session, verified_by, notes=None):
    record = AttendanceRecord(
        job_seeker_id="seeker", event_id="event", verification_method="pin", verified_by=verified_by, notes=notes
    )
    session.add(record)
    await session.commit()
    return record


async def test_analysis_counts_unknown_verifiers(session, seed):
    guard = await seed.security()
    await _record(session, guard.id)
    await _record(session, "admin-123")
    await _record(session, "admin-123")
    await _record(session, "ghost")
    await _record(session, None)

    analysis = await AttendanceRepairService(session).analyze_attendance_records()

    assert analysis["total_attendance_records"] == 5
    assert analysis["valid_security_personnel"] == 1
    assert analysis["invalid_records"] == 3
    assert analysis["invalid_verifiers"] == [
        {"verified_by": "admin-123", "count": 2},
        {"verified_by": "ghost", "count": 1},
    ]


async def test_dry_run_changes_nothing(session):
    record = await _record(session, "ghost")

    result = await AttendanceRepairService(session).fix_attendance_records(apply=False)

    assert result["applied"] is False
    assert result["fixed"] == 0
    assert record.verified_by == "ghost"


async def test_apply_detaches_and_notes_old_verifier(session, seed):
    guard = await seed.security()
    kept = await _record(session, guard.id)
    bogus = await _record(session, "ghost", notes="Duplicate check-in attempt")

    result = await AttendanceRepairService(session).fix_attendance_records(apply=True)

    assert result["applied"] is True
    assert result["fixed"] == 1
    assert kept.verified_by == guard.id
    assert bogus.verified_by is None
    assert bogus.notes == "Duplicate check-in attempt [verifiedBy fixed from ghost]"


async def test_apply_with_nothing_to_fix(session):
    result = await AttendanceRepairService(session).fix_attendance_records(apply=True)
    assert result["applied"] is False
