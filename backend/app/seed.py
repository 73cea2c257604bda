"""
Cash Card Service — Demo Data
===============================

What:  Loads demo users and cash cards into an empty database.
When:  At startup when SEED_DEMO_DATA is true (the default), and by tests.

Users:
    sarah1 / abc123               CARD-OWNER, owns cards 99, 100, 101
    kumar2 / xyz789               CARD-OWNER, owns card 102
    hank-owns-no-cards / qrs456   NON-OWNER, forbidden from /cashcards

Seeding is skipped entirely if any user already exists, so restarting
against a persistent database never duplicates or resurrects rows.
"""

import logging

from sqlalchemy import func, select, text
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.cash_card import CashCard
from app.models.user import User
from app.services.user_service import UserService

logger = logging.getLogger(__name__)

DEMO_USERS = [
    ("sarah1", "abc123", "CARD-OWNER"),
    ("kumar2", "xyz789", "CARD-OWNER"),
    ("hank-owns-no-cards", "qrs456", "NON-OWNER"),
]

# Explicit ids so the demo cards are addressable in docs and tests
DEMO_CASH_CARDS = [
    (99, 123.45, "sarah1"),
    (100, 1.00, "sarah1"),
    (101, 150.00, "sarah1"),
    (102, 200.00, "kumar2"),
]


async def seed_demo_data(session: AsyncSession) -> bool:
    """
    Insert the demo users and cards if the users table is empty.

    Returns:
        True if rows were inserted, False if the database was already populated.
    """
    existing = await session.execute(select(func.count()).select_from(User))
    if existing.scalar():
        logger.info("Users already present; skipping demo data")
        return False

    users = UserService.with_session(session)
    for username, password, role in DEMO_USERS:
        await users.create_user(username, password, role)

    for card_id, amount, owner in DEMO_CASH_CARDS:
        session.add(CashCard(id=card_id, amount=amount, owner=owner))
    await session.flush()
    await sync_card_id_sequence(session)

    logger.info(
        "Seeded %d demo users and %d cash cards (bcrypt rounds=%d)",
        len(DEMO_USERS),
        len(DEMO_CASH_CARDS),
        settings.bcrypt_rounds,
    )
    return True


async def sync_card_id_sequence(session: AsyncSession) -> None:
    """
    Move the PostgreSQL id sequence past the explicitly inserted demo ids.

    SQLite AUTOINCREMENT already continues from the largest id ever used;
    a PostgreSQL sequence does not, and would hand out 99 again later.
    """
    if session.bind.dialect.name != "postgresql":
        return
    await session.execute(
        text(
            "SELECT setval(pg_get_serial_sequence('cash_cards', 'id'), "
            "(SELECT MAX(id) FROM cash_cards))"
        )
    )
