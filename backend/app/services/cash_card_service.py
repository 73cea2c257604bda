"""
Cash Card Service — Cash Card Business Logic
==============================================

What:  Owner-scoped CRUD and paging over cash cards.
Why:   Keeps HTTP details out of the store logic and store details out of
       the routes.
How:   Wraps a CashCardRepository; converts "no row" into NotFoundError and
       any SQLAlchemyError into DatabaseError.
Who:   Called by the /cashcards route handlers.

Ownership:
    Every operation takes the caller's username. A card owned by somebody
    else is indistinguishable from a card that does not exist (404), so ids
    belonging to other users cannot be probed.
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.exceptions import DatabaseError, NotFoundError, ValidationError
from app.repositories.cash_card_repository import (
    SORTABLE_COLUMNS,
    CashCardRepository,
    SqlCashCardRepository,
)
from app.schemas.cash_card import CashCardResponse

logger = logging.getLogger(__name__)

DEFAULT_SORT = ("amount", False)

# Largest OFFSET the store can bind (signed 64-bit)
MAX_OFFSET = 2**63 - 1


def parse_sort(sort: Optional[str]) -> Tuple[str, bool]:
    """
    Parse a `field[,direction]` sort expression.

    Returns:
        (field, descending), e.g. "amount,desc" → ("amount", True)

    Raises:
        ValidationError: unknown field or direction
    """
    if not sort:
        return DEFAULT_SORT

    field, _, direction = (part.strip() for part in sort.partition(","))
    field = field.lower()
    direction = (direction or "asc").lower()

    if field not in SORTABLE_COLUMNS:
        raise ValidationError(
            message=f"Unsupported sort field '{field}'",
            field="sort",
            context={"allowed": sorted(SORTABLE_COLUMNS)},
        )
    if direction not in ("asc", "desc"):
        raise ValidationError(
            message=f"Unsupported sort direction '{direction}'",
            field="sort",
            context={"allowed": ["asc", "desc"]},
        )
    return field, direction == "desc"


class CashCardService:
    """
    Business logic layer for cash card operations.

    Responsibilities:
        - create_card(): store a new card for the caller, return its id
        - get_card(): single card retrieval with not-found handling
        - update_card(): replace the amount of an existing card
        - delete_card(): remove a card
        - list_cards(): one page of the caller's cards plus the total count
    """

    def __init__(self, repository: CashCardRepository) -> None:
        self._repository = repository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "CashCardService":
        return cls(SqlCashCardRepository(session))

    async def create_card(self, amount: float, owner: str) -> int:
        try:
            card = await self._repository.create(amount=amount, owner=owner)
        except SQLAlchemyError as e:
            logger.error("Database error creating card for %s: %s", owner, str(e))
            raise DatabaseError(
                message="Could not create the cash card. Please try again.",
                context={"owner": owner},
            )
        logger.info("Cash card %s created for %s", card.id, owner)
        return card.id

    async def get_card(self, card_id: int, owner: str) -> CashCardResponse:
        """
        Retrieve a single card owned by `owner`.

        Raises:
            NotFoundError: no such card, or it belongs to another owner (→ 404)
            DatabaseError: query execution failed (→ 500)
        """
        try:
            card = await self._repository.find_by_id(card_id, owner=owner)
        except SQLAlchemyError as e:
            logger.error("Database error fetching card %s: %s", card_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the cash card. Please try again.",
                context={"card_id": card_id},
            )

        if card is None:
            raise NotFoundError(resource="cash card", resource_id=str(card_id))
        return CashCardResponse.model_validate(card)

    async def update_card(self, card_id: int, amount: float, owner: str) -> None:
        """Replace the amount of an existing card. Never creates one."""
        try:
            card = await self._repository.update(card_id, amount, owner=owner)
        except SQLAlchemyError as e:
            logger.error("Database error updating card %s: %s", card_id, str(e))
            raise DatabaseError(
                message="Could not update the cash card. Please try again.",
                context={"card_id": card_id},
            )

        if card is None:
            raise NotFoundError(resource="cash card", resource_id=str(card_id))
        logger.info("Cash card %s updated", card_id)

    async def delete_card(self, card_id: int, owner: str) -> None:
        try:
            deleted = await self._repository.delete_by_id(card_id, owner=owner)
        except SQLAlchemyError as e:
            logger.error("Database error deleting card %s: %s", card_id, str(e))
            raise DatabaseError(
                message="Could not delete the cash card. Please try again.",
                context={"card_id": card_id},
            )

        if not deleted:
            raise NotFoundError(resource="cash card", resource_id=str(card_id))
        logger.info("Cash card %s deleted", card_id)

    async def list_cards(
        self,
        owner: str,
        page: int = 0,
        size: Optional[int] = None,
        sort: Optional[str] = None,
    ) -> Tuple[List[CashCardResponse], int]:
        """
        One page of the caller's cards.

        Args:
            owner: Caller's username
            page: Zero-based page number
            size: Page size (defaults to settings.default_page_size)
            sort: "field[,asc|desc]", field in {id, amount}; default amount,asc

        Returns:
            (cards on this page, total number of cards the owner has)
        """
        size = size or settings.default_page_size
        if size > settings.max_page_size:
            raise ValidationError(
                message=f"Page size must not exceed {settings.max_page_size}",
                field="size",
            )
        offset = page * size
        if offset > MAX_OFFSET:
            raise ValidationError(
                message="Page number is too large",
                field="page",
                context={"page": page, "size": size},
            )
        order_by, descending = parse_sort(sort)

        try:
            cards = await self._repository.find_all(
                owner,
                offset=offset,
                limit=size,
                order_by=order_by,
                descending=descending,
            )
            total = await self._repository.count(owner)
        except SQLAlchemyError as e:
            logger.error("Database error listing cards for %s: %s", owner, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve cash cards. Please try again.",
                context={"error_type": type(e).__name__},
            )

        return [CashCardResponse.model_validate(card) for card in cards], total
