"""
Cash Card Service — Demo Data Tests
=====================================

What:  seed_demo_data against the test database, and the id sequence
       adjustment that server databases need after explicit-id inserts.
"""

from unittest.mock import MagicMock

import pytest

from app.repositories.cash_card_repository import SqlCashCardRepository
from app.seed import DEMO_CASH_CARDS, seed_demo_data, sync_card_id_sequence


def _bound_to(session, dialect_name):
    session.bind = MagicMock()
    session.bind.dialect.name = dialect_name
    return session


class TestSyncCardIdSequence:

    @pytest.mark.asyncio
    async def test_postgresql_sequence_moves_past_demo_ids(self, mock_db_session):
        session = _bound_to(mock_db_session, "postgresql")

        await sync_card_id_sequence(session)

        session.execute.assert_awaited_once()
        statement = str(session.execute.await_args.args[0])
        assert "setval" in statement
        assert "cash_cards" in statement

    @pytest.mark.asyncio
    async def test_sqlite_needs_no_adjustment(self, mock_db_session):
        session = _bound_to(mock_db_session, "sqlite")

        await sync_card_id_sequence(session)

        session.execute.assert_not_awaited()


class TestSeedDemoData:

    @pytest.mark.asyncio
    async def test_populated_database_is_left_alone(self, db_session):
        assert await seed_demo_data(db_session) is False
        assert await SqlCashCardRepository(db_session).count("sarah1") == 3

    @pytest.mark.asyncio
    async def test_new_cards_continue_after_demo_ids(self, db_session):
        card = await SqlCashCardRepository(db_session).create(amount=2.50, owner="kumar2")

        assert card.id > max(card_id for card_id, _, _ in DEMO_CASH_CARDS)
