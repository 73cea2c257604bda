"""
Cash Card Service — HTTP Basic Authentication
===============================================

What:  Password hashing helpers and the FastAPI dependencies that resolve
       the calling principal.
Why:   Every /cashcards endpoint needs the same two answers: who is calling
       (401 if nobody valid) and may they use cash cards (403 if not).
How:   FastAPI's HTTPBasic scheme parses the Authorization header; the
       username is looked up through UserService and the password checked
       against its bcrypt hash.

Status contract:
    no header / unknown user / wrong password  → 401 + WWW-Authenticate
    valid user without the card-owner role      → 403
"""

import logging
from typing import Optional

import bcrypt
from fastapi import Depends
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import get_db_session
from app.exceptions import ForbiddenError, UnauthorizedError
from app.models.user import User

logger = logging.getLogger(__name__)

# auto_error=False: missing credentials reach our handler and get the
# standard error envelope instead of FastAPI's bare {"detail": ...}
basic_auth = HTTPBasic(realm=settings.auth_realm, auto_error=False)


def hash_password(password: str) -> str:
    """Hash plain text password using bcrypt."""
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain text password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        return False


async def get_current_user(
    credentials: Optional[HTTPBasicCredentials] = Depends(basic_auth),
    db: AsyncSession = Depends(get_db_session),
) -> User:
    """
    Resolve the authenticated user or raise UnauthorizedError.

    Runs before any path/body handling in the route, so an anonymous
    request gets 401 whether or not the card it names exists.
    """
    if credentials is None:
        raise UnauthorizedError()

    # Imported here to keep security importable from services without a cycle
    from app.services.user_service import UserService

    user = await UserService.with_session(db).authenticate(
        credentials.username, credentials.password
    )
    if user is None:
        logger.info("Rejected credentials for user '%s'", credentials.username)
        raise UnauthorizedError(message="Invalid username or password")
    return user


async def require_card_owner(user: User = Depends(get_current_user)) -> User:
    """Allow only users holding the configured card-owner role."""
    if user.role != settings.card_owner_role:
        logger.info("User '%s' with role '%s' denied cash card access", user.username, user.role)
        raise ForbiddenError(context={"required_role": settings.card_owner_role})
    return user
