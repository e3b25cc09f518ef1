"""
Employer entity models.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from sqlmodel import Field

from ..base import Base, new_id, utc_now


class CompanySize(str, Enum):
    STARTUP = "startup"
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    ENTERPRISE = "enterprise"


class Employer(Base, table=True):
    """Entity for employer (company) profiles.

    New profiles start unverified; an admin verifies or rejects them.

    Table: employers
    """

    __tablename__ = "employers"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=64)
    user_id: str = Field(foreign_key="users.id", ondelete="CASCADE", max_length=64, index=True)

    company_name: str = Field(max_length=255)
    company_description: Optional[str] = Field(default=None)
    industry: Optional[str] = Field(default=None, max_length=128)
    company_size: Optional[str] = Field(default=None, max_length=32)
    website: Optional[str] = Field(default=None)
    logo_url: Optional[str] = Field(default=None)
    address: Optional[str] = Field(default=None)
    contact_person: Optional[str] = Field(default=None, max_length=255)
    contact_email: Optional[str] = Field(default=None, max_length=255)
    contact_phone: Optional[str] = Field(default=None, max_length=32)
    is_verified: bool = Field(default=False, index=True)

    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)

    def __repr__(self) -> str:
        return f"Employer(id={self.id}, company_name={self.company_name}, verified={self.is_verified})"
