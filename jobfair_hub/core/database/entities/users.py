"""
User entity models.

Every person using the system has a ``users`` row. The role decides which
area of the application they can reach; role-specific data lives in the
``job_seekers``, ``employers`` and ``security_personnel`` tables.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from sqlmodel import Field

from ..base import Base, new_id, utc_now


class UserRole(str, Enum):
    """Application role of a user."""

    JOB_SEEKER = "job_seeker"
    EMPLOYER = "employer"
    ADMIN = "admin"
    SECURITY = "security"


class User(Base, table=True):
    """Entity for user accounts.

    Table: users
    """

    __tablename__ = "users"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=64)
    name: Optional[str] = Field(default=None, max_length=255)
    email: str = Field(max_length=255, unique=True, index=True)
    email_verified: Optional[datetime] = Field(default=None)
    image: Optional[str] = Field(default=None)
    role: str = Field(default=UserRole.JOB_SEEKER.value, max_length=32, index=True)
    phone_number: Optional[str] = Field(default=None, max_length=32)
    is_active: bool = Field(default=True)
    last_active: Optional[datetime] = Field(default=None)

    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)

    def __repr__(self) -> str:
        return f"User(id={self.id}, email={self.email}, role={self.role})"
