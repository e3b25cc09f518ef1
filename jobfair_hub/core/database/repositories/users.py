"""
User repository.

Data access for user accounts, including the filtered listing used by the
admin back-office.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.users import User
from .base import QueryBuilder, SQLModelRepository


class UserRepository(SQLModelRepository[User]):
    """Repository for user data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, User)

    async def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(User.email == email)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list_by_role(self, role: str, active_only: bool = False) -> List[User]:
        stmt = select(User).where(User.role == role)
        if active_only:
            stmt = stmt.where(User.is_active == True)  # noqa: E712
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def search(
        self,
        role: Optional[str] = None,
        is_active: Optional[bool] = None,
        search: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[User]:
        """List users by role, status and a name/email substring, newest first.

        Args:
            role: Only users with this role
            is_active: Only active or only inactive users
            search: Case-insensitive substring of name or email
            limit: Maximum records to return
            offset: Records to skip

        Returns:
            Matching users
        """
        stmt = select(User).order_by(User.created_at.desc())
        stmt = QueryBuilder.apply_filters(stmt, User, {"role": role, "is_active": is_active})
        if search:
            pattern = f"%{search.lower()}%"
            stmt = stmt.where(or_(func.lower(User.name).like(pattern), func.lower(User.email).like(pattern)))
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
