"""Repository protocol and SQLAlchemy adapter for cash cards."""

from __future__ import annotations

from typing import Optional, Protocol, Sequence

from sqlalchemy import asc, delete, desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.cash_card import CashCard

# Columns a listing may be ordered by, keyed by their public name
SORTABLE_COLUMNS = {
    "id": CashCard.id,
    "amount": CashCard.amount,
}


class CashCardRepository(Protocol):
    async def create(self, amount: float, owner: str) -> CashCard:
        ...

    async def find_by_id(self, card_id: int, owner: Optional[str] = None) -> CashCard | None:
        ...

    async def update(
        self, card_id: int, amount: float, owner: Optional[str] = None
    ) -> CashCard | None:
        ...

    async def delete_by_id(self, card_id: int, owner: Optional[str] = None) -> bool:
        ...

    async def find_all(
        self,
        owner: str,
        offset: int,
        limit: int,
        order_by: str = "amount",
        descending: bool = False,
    ) -> Sequence[CashCard]:
        ...

    async def count(self, owner: str) -> int:
        ...


class SqlCashCardRepository(CashCardRepository):
    """Cash card repository backed by SQLAlchemy models.

    Every lookup takes an optional `owner`; when given, rows belonging to
    anyone else behave exactly like missing rows.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, amount: float, owner: str) -> CashCard:
        card = CashCard(amount=amount, owner=owner)
        self._session.add(card)
        # Flush assigns the id without committing the request transaction
        await self._session.flush()
        await self._session.refresh(card)
        return card

    async def find_by_id(self, card_id: int, owner: Optional[str] = None) -> CashCard | None:
        stmt = select(CashCard).where(CashCard.id == card_id)
        if owner is not None:
            stmt = stmt.where(CashCard.owner == owner)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def update(
        self, card_id: int, amount: float, owner: Optional[str] = None
    ) -> CashCard | None:
        card = await self.find_by_id(card_id, owner)
        if card is None:
            return None
        card.amount = amount
        await self._session.flush()
        return card

    async def delete_by_id(self, card_id: int, owner: Optional[str] = None) -> bool:
        stmt = delete(CashCard).where(CashCard.id == card_id)
        if owner is not None:
            stmt = stmt.where(CashCard.owner == owner)
        result = await self._session.execute(stmt)
        return result.rowcount > 0

    async def find_all(
        self,
        owner: str,
        offset: int,
        limit: int,
        order_by: str = "amount",
        descending: bool = False,
    ) -> Sequence[CashCard]:
        column = SORTABLE_COLUMNS[order_by]
        direction = desc if descending else asc
        stmt = (
            select(CashCard)
            .where(CashCard.owner == owner)
            # id as tie-breaker keeps pages stable when amounts repeat
            .order_by(direction(column), direction(CashCard.id))
            .offset(offset)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def count(self, owner: str) -> int:
        stmt = select(func.count(CashCard.id)).where(CashCard.owner == owner)
        result = await self._session.execute(stmt)
        return result.scalar() or 0
