"""
Cash Card Service — CashCard SQLAlchemy Model
===============================================

What:  ORM model representing the `cash_cards` table.
Why:   Maps Python objects to database rows for type-safe database operations.
Who:   Used by SqlCashCardRepository for CRUD operations.

Table Design Rationale:
    - Integer primary key assigned by the store on insert, never by the client
    - AUTOINCREMENT on SQLite: ids of deleted rows are never handed out again
      (plain INTEGER PRIMARY KEY reuses max(rowid) + 1 after a delete)
    - amount: NUMERIC(12, 2), read back as float for the JSON contract
    - owner: username of the principal that created the card; every
      read/update/delete is scoped by it
"""

from sqlalchemy import ForeignKey, Index, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class CashCard(Base):
    """
    A prepaid cash card owned by exactly one user.

    Lifecycle:
        1. Created by POST /cashcards (id assigned here, owner = caller)
        2. Amount replaced by PUT /cashcards/{id}
        3. Removed by DELETE /cashcards/{id}; the id is retired for good

    Query Patterns:
        - Get single card: WHERE id = :id AND owner = :owner (primary key)
        - List a user's cards: WHERE owner = :owner ORDER BY amount
          → idx_cash_cards_owner_amount
    """

    __tablename__ = "cash_cards"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Store-assigned identifier; immutable and never reused",
    )

    amount: Mapped[float] = mapped_column(
        Numeric(12, 2, asdecimal=False),
        nullable=False,
        comment="Card balance",
    )

    owner: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("users.username"),
        nullable=False,
        comment="Username of the card owner",
    )

    __table_args__ = (
        Index("idx_cash_cards_owner_amount", "owner", "amount"),
        {"sqlite_autoincrement": True},
    )

    def __repr__(self) -> str:
        return f"<CashCard(id={self.id}, amount={self.amount}, owner='{self.owner}')>"
