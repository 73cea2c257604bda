"""Repository protocol and SQLAlchemy adapter for API users."""

from __future__ import annotations

from typing import Protocol

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User


class UserRepository(Protocol):
    async def find_by_username(self, username: str) -> User | None:
        ...

    async def create(self, username: str, password_hash: str, role: str) -> User:
        ...


class SqlUserRepository(UserRepository):
    """User repository backed by SQLAlchemy models."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_username(self, username: str) -> User | None:
        stmt = select(User).where(User.username == username)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, username: str, password_hash: str, role: str) -> User:
        user = User(username=username, password_hash=password_hash, role=role)
        self._session.add(user)
        await self._session.flush()
        return user
