"""Use cases for API principals: authentication and account creation."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.repositories.user_repository import SqlUserRepository, UserRepository
from app.security import hash_password, verify_password


class UserService:
    """Encapsulates user lookups and credential checks."""

    def __init__(self, repository: UserRepository) -> None:
        self._repository = repository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "UserService":
        return cls(SqlUserRepository(session))

    async def authenticate(self, username: str, password: str) -> User | None:
        user = await self._repository.find_by_username(username)
        if user is None:
            return None
        if not verify_password(password, user.password_hash):
            return None
        return user

    async def create_user(self, username: str, password: str, role: str) -> User:
        return await self._repository.create(
            username=username,
            password_hash=hash_password(password),
            role=role,
        )
