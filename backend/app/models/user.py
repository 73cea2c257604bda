"""
Cash Card Service — User SQLAlchemy Model
===========================================

What:  ORM model for the `users` table holding HTTP Basic principals.
Why:   Credentials are checked against bcrypt hashes, never plain text.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class User(Base):
    """A principal that may authenticate against the API."""

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(64), primary_key=True)

    # bcrypt output is 60 chars
    password_hash: Mapped[str] = mapped_column(String(128), nullable=False)

    # CARD-OWNER may use /cashcards; anything else is forbidden there
    role: Mapped[str] = mapped_column(String(32), nullable=False)

    def __repr__(self) -> str:
        return f"<User(username='{self.username}', role='{self.role}')>"
