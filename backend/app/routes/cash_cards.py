"""
Cash Card Service — Cash Card Route Handlers
==============================================

What:  CRUD endpoints for /cashcards.
Why:   The HTTP face of the card store: each verb maps to one service call.
How:   Routes resolve the caller (HTTP Basic), build a CashCardService over
       the request's session, and translate results into status codes and
       headers. Error statuses come from the global exception handlers.

Endpoint Contract:
    POST   /cashcards        → 201, Location header, empty body
    GET    /cashcards        → 200, JSON array, X-Total-Count header
    GET    /cashcards/{id}   → 200, {"id": ..., "amount": ...}
    PUT    /cashcards/{id}   → 204, empty body
    DELETE /cashcards/{id}   → 204, empty body

    401 without valid credentials, 403 without the card-owner role,
    404 for ids that are unknown or owned by someone else.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.models.user import User
from app.schemas.cash_card import CashCardRequest, CashCardResponse, ErrorResponse
from app.security import require_card_owner
from app.services.cash_card_service import CashCardService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cashcards", tags=["Cash Cards"])

_AUTH_ERRORS = {
    401: {"description": "Missing or invalid credentials", "model": ErrorResponse},
    403: {"description": "Caller lacks the card-owner role", "model": ErrorResponse},
}


def get_cash_card_service(db: AsyncSession = Depends(get_db_session)) -> CashCardService:
    """Build the service over an explicit SQL repository for this request."""
    return CashCardService.with_session(db)


@router.post(
    "",
    status_code=201,
    response_class=Response,
    responses={
        201: {"description": "Card created; see the Location header"},
        400: {"description": "Invalid amount", "model": ErrorResponse},
        **_AUTH_ERRORS,
    },
    summary="Create a cash card",
)
async def create_cash_card(
    payload: CashCardRequest,
    request: Request,
    user: User = Depends(require_card_owner),
    service: CashCardService = Depends(get_cash_card_service),
) -> Response:
    """
    Create a card owned by the caller.

    The id is assigned by the store; any id or owner in the body is ignored.
    The response carries no body, only the Location of the new card.
    """
    card_id = await service.create_card(amount=payload.amount, owner=user.username)
    location = str(request.url_for("get_cash_card", card_id=card_id))
    return Response(status_code=201, headers={"Location": location})


@router.get(
    "",
    response_model=List[CashCardResponse],
    responses={400: {"description": "Invalid paging parameters", "model": ErrorResponse}, **_AUTH_ERRORS},
    summary="List the caller's cash cards",
)
async def list_cash_cards(
    response: Response,
    page: int = Query(default=0, ge=0, description="Zero-based page number"),
    size: Optional[int] = Query(default=None, ge=1, description="Items per page"),
    sort: Optional[str] = Query(
        default=None,
        description="'field[,asc|desc]' with field in {id, amount}; default 'amount,asc'",
    ),
    user: User = Depends(require_card_owner),
    service: CashCardService = Depends(get_cash_card_service),
) -> List[CashCardResponse]:
    """
    One page of the caller's cards.

    Example:
        GET /cashcards?page=0&size=2&sort=amount,desc
    """
    cards, total = await service.list_cards(
        owner=user.username, page=page, size=size, sort=sort
    )
    response.headers["X-Total-Count"] = str(total)
    return cards


@router.get(
    "/{card_id}",
    response_model=CashCardResponse,
    responses={404: {"description": "Cash card not found", "model": ErrorResponse}, **_AUTH_ERRORS},
    summary="Get a single cash card",
)
async def get_cash_card(
    card_id: int,
    user: User = Depends(require_card_owner),
    service: CashCardService = Depends(get_cash_card_service),
) -> CashCardResponse:
    return await service.get_card(card_id=card_id, owner=user.username)


@router.put(
    "/{card_id}",
    status_code=204,
    response_class=Response,
    responses={
        400: {"description": "Invalid amount", "model": ErrorResponse},
        404: {"description": "Cash card not found", "model": ErrorResponse},
        **_AUTH_ERRORS,
    },
    summary="Replace a cash card's amount",
)
async def update_cash_card(
    card_id: int,
    payload: CashCardRequest,
    user: User = Depends(require_card_owner),
    service: CashCardService = Depends(get_cash_card_service),
) -> Response:
    """Update an existing card. Unknown ids are 404, never created."""
    await service.update_card(card_id=card_id, amount=payload.amount, owner=user.username)
    return Response(status_code=204)


@router.delete(
    "/{card_id}",
    status_code=204,
    response_class=Response,
    responses={404: {"description": "Cash card not found", "model": ErrorResponse}, **_AUTH_ERRORS},
    summary="Delete a cash card",
)
async def delete_cash_card(
    card_id: int,
    user: User = Depends(require_card_owner),
    service: CashCardService = Depends(get_cash_card_service),
) -> Response:
    await service.delete_card(card_id=card_id, owner=user.username)
    return Response(status_code=204)
