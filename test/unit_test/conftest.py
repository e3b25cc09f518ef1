"""Shared fixtures for unit tests.

Provides an in-memory SQLite database with every table created, a session
bound to it, and ``Seed``, a small helper that inserts consistent rows for
the job fair entities.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import AsyncGenerator, Optional

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel.pool import StaticPool

from jobfair_hub.core.cache import CacheManager, InMemoryRedis
from jobfair_hub.core.database.base import Base, utc_now
from jobfair_hub.core.database.entities import (
    Booth,
    Employer,
    Event,
    InterviewSlot,
    Job,
    JobSeeker,
    RegistrationStatus,
    SecurityPersonnel,
    User,
    UserRole,
)
from jobfair_hub.server.core.security import CurrentUser
from test.settings import test_settings

TEST_DATABASE_URL = test_settings.database.url


@pytest_asyncio.fixture
async def test_engine():
    """Create a fresh in-memory database for each test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(name="session")
async def session_fixture(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a new session for each test."""
    async_session_maker = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session_maker() as session:
        yield session


@pytest_asyncio.fixture
async def cache() -> AsyncGenerator[CacheManager, None]:
    """Cache manager over the in-process store."""
    manager = CacheManager(InMemoryRedis())
    yield manager
    await manager.close()


class Seed:
    """Insert rows for tests; every method commits and returns the entity."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self._counter = 0

    def _next(self) -> int:
        self._counter += 1
        return self._counter

    async def _save(self, entity):
        self.session.add(entity)
        await self.session.commit()
        await self.session.refresh(entity)
        return entity

    async def user(self, role: UserRole = UserRole.JOB_SEEKER, name: Optional[str] = None, **fields) -> User:
        n = self._next()
        return await self._save(
            User(email=f"user{n}@example.com", name=name or f"User {n}", role=role.value, **fields)
        )

    async def job_seeker(
        self,
        user: Optional[User] = None,
        pin: Optional[str] = None,
        ticket_number: Optional[str] = None,
        status: RegistrationStatus = RegistrationStatus.PENDING,
        **fields,
    ) -> JobSeeker:
        user = user or await self.user()
        n = self._next()
        return await self._save(
            JobSeeker(
                user_id=user.id,
                pin=pin or f"{100000 + n:06d}",
                ticket_number=ticket_number or f"HCS-2025-{n:08d}",
                pin_generated_at=utc_now(),
                pin_expires_at=utc_now() + timedelta(hours=24),
                registration_status=status.value,
                **fields,
            )
        )

    async def event(self, is_active: bool = True, start: Optional[datetime] = None, **fields) -> Event:
        start = start or utc_now() + timedelta(days=7)
        return await self._save(
            Event(
                name=fields.pop("name", f"Job Fair {self._next()}"),
                start_date=start,
                end_date=start + timedelta(hours=8),
                venue="Convention Center",
                is_active=is_active,
                **fields,
            )
        )

    async def employer(self, user: Optional[User] = None, is_verified: bool = True, **fields) -> Employer:
        user = user or await self.user(UserRole.EMPLOYER)
        return await self._save(
            Employer(
                user_id=user.id,
                company_name=fields.pop("company_name", f"Company {self._next()}"),
                is_verified=is_verified,
                **fields,
            )
        )

    async def booth(self, employer: Employer, event: Event, **fields) -> Booth:
        return await self._save(
            Booth(
                employer_id=employer.id,
                event_id=event.id,
                booth_number=fields.pop("booth_number", f"B{self._next()}"),
                location=fields.pop("location", "Hall A"),
                **fields,
            )
        )

    async def job(self, employer: Employer, event: Event, **fields) -> Job:
        return await self._save(
            Job(
                employer_id=employer.id,
                event_id=event.id,
                title=fields.pop("title", f"Engineer {self._next()}"),
                **fields,
            )
        )

    async def slot(self, booth: Booth, start: Optional[datetime] = None, minutes: int = 30, **fields) -> InterviewSlot:
        start = start or utc_now() + timedelta(days=7)
        return await self._save(
            InterviewSlot(
                booth_id=booth.id, start_time=start, end_time=start + timedelta(minutes=minutes), duration=minutes, **fields
            )
        )

    async def security(self, user: Optional[User] = None, badge_number: Optional[str] = None) -> SecurityPersonnel:
        user = user or await self.user(UserRole.SECURITY)
        return await self._save(
            SecurityPersonnel(user_id=user.id, badge_number=badge_number or f"SEC-{self._next():03d}")
        )


@pytest_asyncio.fixture
async def seed(session: AsyncSession) -> Seed:
    return Seed(session)


def as_current_user(user: User) -> CurrentUser:
    """The ``CurrentUser`` a session token for ``user`` would decode to."""
    return CurrentUser(id=user.id, role=UserRole(user.role), email=user.email, name=user.name)


