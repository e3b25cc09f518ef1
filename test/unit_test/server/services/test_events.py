"""Unit tests for event administration."""

from datetime import timedelta

import pytest
import pytest_asyncio

from jobfair_hub.core.database.base import utc_now
from jobfair_hub.core.database.entities import AttendanceRecord, UserRole
from jobfair_hub.core.database.repositories import build_sql_repos_from_session
from jobfair_hub.core.models.io.events import EventCreate, EventUpdate
from jobfair_hub.server.services.errors import ConflictError, InvalidInputError, NotFoundError
from jobfair_hub.server.services.events import DEFAULT_CHECKPOINTS, EventService
from test.unit_test.conftest import as_current_user

pytestmark = pytest.mark.asyncio

START = utc_now().replace(microsecond=0) + timedelta(days=14)


@pytest_asyncio.fixture
async def admin(seed):
    return as_current_user(await seed.user(UserRole.ADMIN))


def _event(**overrides) -> EventCreate:
    data = {
        "name": "Autumn Job Fair",
        "start_date": START,
        "end_date": START + timedelta(hours=8),
        "venue": "Expo Hall",
        "max_attendees": 500,
    }
    data.update(overrides)
    return EventCreate(**data)


class TestCreateEvent:
    async def test_job_fair_gets_default_checkpoints(self, session, cache, admin):
        service = EventService(session, cache)

        result = await service.create_event(admin, _event())

        event_id = result.data["event_id"]
        checkpoints = await service.list_checkpoints(event_id)
        by_id = {c.id: c for c in checkpoints}
        assert len(checkpoints) == len(DEFAULT_CHECKPOINTS)
        assert by_id[f"{event_id}_main_entrance"].max_capacity == 100
        assert by_id[f"{event_id}_registration"].max_capacity == 50
        assert by_id[f"{event_id}_main_hall"].max_capacity == 300
        assert by_id[f"{event_id}_main_entrance"].requires_verification is True

    async def test_capacity_caps_apply(self, session, cache, admin):
        service = EventService(session, cache)
        result = await service.create_event(admin, _event(max_attendees=5000))

        by_id = {c.id: c for c in await service.list_checkpoints(result.data["event_id"])}
        assert by_id[f"{result.data['event_id']}_main_entrance"].max_capacity == 200
        assert by_id[f"{result.data['event_id']}_registration"].max_capacity == 100

    async def test_other_event_types_get_no_checkpoints(self, session, cache, admin):
        service = EventService(session, cache)
        result = await service.create_event(admin, _event(event_type="networking"))
        assert await service.list_checkpoints(result.data["event_id"]) == []

    async def test_active_event_deactivates_others(self, session, seed, cache, admin):
        old = await seed.event(is_active=True)
        result = await EventService(session, cache).create_event(admin, _event(is_active=True))

        repos = build_sql_repos_from_session(session=session)
        active = await repos.events.get_active()
        assert active.id == result.data["event_id"]
        assert (await repos.events.get_by_id(old.id)).is_active is False

    @pytest.mark.parametrize(
        "overrides,message",
        [
            ({"end_date": START - timedelta(hours=1)}, "End date must be after start date"),
            ({"registration_deadline": START + timedelta(hours=1)}, "Registration deadline"),
            ({"event_type": "concert"}, "Invalid event type"),
        ],
    )
    async def test_validation(self, session, cache, admin, overrides, message):
        with pytest.raises(InvalidInputError, match=message):
            await EventService(session, cache).create_event(admin, _event(**overrides))

    async def test_create_is_audited(self, session, cache, admin):
        await EventService(session, cache).create_event(admin, _event())
        (entry,) = await build_sql_repos_from_session(session=session).system_logs.list()
        assert entry.action == "create_event"
        assert entry.details["checkpoints_created"] == 4


class TestManageEvent:
    async def test_update(self, session, seed, cache, admin):
        event = await seed.event()
        await EventService(session, cache).update_event(admin, event.id, EventUpdate(venue="Annex"))
        assert event.venue == "Annex"

    async def test_update_rejects_bad_dates(self, session, seed, cache, admin):
        event = await seed.event()
        with pytest.raises(InvalidInputError):
            await EventService(session, cache).update_event(
                admin, event.id, EventUpdate(end_date=event.start_date - timedelta(days=1))
            )

    async def test_toggle(self, session, seed, cache, admin):
        first = await seed.event(is_active=True)
        second = await seed.event(is_active=False)
        service = EventService(session, cache)

        result = await service.toggle_event_status(admin, second.id)

        assert result.message == "Event activated successfully"
        assert first.is_active is False
        result = await service.toggle_event_status(admin, second.id)
        assert result.data == {"is_active": False}

    async def test_delete_event_with_attendance_is_refused(self, session, seed, cache, admin):
        event = await seed.event()
        seeker = await seed.job_seeker()
        session.add(AttendanceRecord(job_seeker_id=seeker.id, event_id=event.id, verification_method="pin"))
        await session.commit()

        with pytest.raises(ConflictError):
            await EventService(session, cache).delete_event(admin, event.id)

    async def test_delete_event_removes_checkpoints(self, session, cache, admin):
        service = EventService(session, cache)
        event_id = (await service.create_event(admin, _event())).data["event_id"]

        await service.delete_event(admin, event_id)

        repos = build_sql_repos_from_session(session=session)
        assert await repos.events.get_by_id(event_id) is None
        assert await repos.checkpoints.list_by_event(event_id) == []

    async def test_unknown_event(self, session, cache, admin):
        with pytest.raises(NotFoundError):
            await EventService(session, cache).toggle_event_status(admin, "missing")

    async def test_duplicate(self, session, cache, admin):
        service = EventService(session, cache)
        original_id = (await service.create_event(admin, _event(is_active=True))).data["event_id"]

        result = await service.duplicate_event(admin, original_id, "Winter Job Fair")

        repos = build_sql_repos_from_session(session=session)
        copy = await repos.events.get_by_id(result.data["event_id"])
        assert copy.name == "Winter Job Fair"
        assert copy.is_active is False
        assert copy.start_date == START + timedelta(weeks=1)
        assert copy.registration_deadline == copy.start_date - timedelta(days=1)
        checkpoint_ids = {c.id for c in await repos.checkpoints.list_by_event(copy.id)}
        assert f"{copy.id}_main_entrance" in checkpoint_ids
        assert f"{copy.id}_networking_area" in checkpoint_ids

    async def test_stats_and_current_event(self, session, seed, cache, admin):
        event = await seed.event(is_active=True)
        employer = await seed.employer()
        await seed.booth(employer, event)
        await seed.job_seeker()
        service = EventService(session, cache)

        stats = await service.get_event_stats(event.id)
        current = await service.get_current_event()

        assert stats == {"attendance": 0, "booths": 1, "checkpoints": 0, "incidents": 0}
        assert current["id"] == event.id
        assert current["current_attendees"] == 1
        assert current["checked_in_attendees"] == 0

    async def test_no_current_event(self, session, cache):
        assert await EventService(session, cache).get_current_event() is None

    async def test_list_events_is_cached(self, session, seed, cache):
        await seed.event()
        service = EventService(session, cache)

        assert len(await service.list_events()) == 1
        await seed.event()
        assert len(await service.list_events()) == 1
