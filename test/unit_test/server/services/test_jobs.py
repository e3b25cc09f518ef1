"""Unit tests for employer job openings."""

import pytest
import pytest_asyncio

from jobfair_hub.core.database.entities import Shortlist, UserRole
from jobfair_hub.core.models.io.employers import InterviewSlotCreate, JobCreate, JobUpdate
from jobfair_hub.server.services.booths import BoothService
from jobfair_hub.server.services.errors import InvalidInputError, NotFoundError
from jobfair_hub.server.services.jobs import JobService
from test.unit_test.conftest import as_current_user

pytestmark = pytest.mark.asyncio


@pytest_asyncio.fixture
async def recruiter(seed):
    user = await seed.user(UserRole.EMPLOYER)
    return await seed.employer(user=user), as_current_user(user)


async def test_create_and_list_jobs(session, seed, recruiter):
    employer, user = recruiter
    fair = await seed.event()
    service = JobService(session)

    result = await service.create_job(
        user,
        JobCreate(
            event_id=fair.id,
            title="Data Engineer",
            requirements=["SQL", "Python"],
            job_type="full_time",
            experience_level="mid",
        ),
    )

    assert result.message == "Job created successfully"
    assert result.data["employer_id"] == employer.id
    (job,) = await service.list_jobs(user)
    assert job.title == "Data Engineer"
    assert job.requirements == ["SQL", "Python"]


async def test_unknown_job_type(session, seed, recruiter):
    _, user = recruiter
    fair = await seed.event()

    with pytest.raises(InvalidInputError, match="Invalid job type"):
        await JobService(session).create_job(user, JobCreate(event_id=fair.id, title="Chef", job_type="seasonal"))


async def test_unknown_event(session, recruiter):
    _, user = recruiter
    with pytest.raises(NotFoundError, match="Event not found"):
        await JobService(session).create_job(user, JobCreate(event_id="missing", title="Chef"))


async def test_deactivated_jobs_are_filtered(session, seed, recruiter):
    employer, user = recruiter
    fair = await seed.event()
    job = await seed.job(employer, fair)
    await seed.job(employer, fair)
    service = JobService(session)

    result = await service.update_job(user, job.id, JobUpdate(is_active=False, salary_range="50-60k"))

    assert result.data["is_active"] is False
    assert result.data["salary_range"] == "50-60k"
    assert len(await service.list_jobs(user)) == 2
    assert job.id not in {j.id for j in await service.list_jobs(user, active_only=True)}


async def test_other_company_cannot_edit(session, seed, recruiter):
    _, user = recruiter
    job = await seed.job(await seed.employer(), await seed.event())

    with pytest.raises(NotFoundError, match="Job not found"):
        await JobService(session).update_job(user, job.id, JobUpdate(title="Mine now"))


async def test_delete_clears_slots_and_shortlist_entries(session, seed, recruiter):
    employer, user = recruiter
    fair = await seed.event()
    job = await seed.job(employer, fair)
    slot = await seed.slot(await seed.booth(employer, fair), job_id=job.id)
    candidate = await seed.job_seeker()
    await seed._save(Shortlist(employer_id=employer.id, job_id=job.id, job_seeker_id=candidate.id, added_by=user.id))
    service = JobService(session)

    result = await service.delete_job(user, job.id)

    assert result.message == "Job deleted successfully"
    assert await service.repos.jobs.get_by_id(job.id) is None
    assert (await service.repos.interview_slots.get_by_id(slot.id)).job_id is None
    assert await service.repos.shortlists.list() == []


async def test_slot_may_only_name_the_booth_owners_job(session, cache, seed, recruiter):
    employer, user = recruiter
    fair = await seed.event()
    booth = await seed.booth(employer, fair)
    own_job = await seed.job(employer, fair)
    foreign_job = await seed.job(await seed.employer(), fair)
    service = BoothService(session, cache)

    created = await service.create_interview_slot(user, InterviewSlotCreate(booth_id=booth.id, start_time=fair.start_date, job_id=own_job.id))
    assert created.data["job_id"] == own_job.id

    with pytest.raises(NotFoundError, match="Job not found"):
        await service.create_interview_slot(
            user, InterviewSlotCreate(booth_id=booth.id, start_time=fair.end_date, job_id=foreign_job.id)
        )
