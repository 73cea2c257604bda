"""
Cash Card Service — CashCardService Unit Tests
================================================

What:  Tests for CashCardService business logic with the repository mocked.
Why:   Not-found translation, ownership scoping, paging maths and error
       wrapping must hold regardless of the storage backend.

What we test:
    ✅ create returns the store-assigned id and passes the owner through
    ✅ missing / foreign cards raise NotFoundError on read, update, delete
    ✅ SQLAlchemy failures become DatabaseError
    ✅ list paging offsets, sort parsing and page-size limits
"""

import pytest
from sqlalchemy.exc import OperationalError

from app.exceptions import DatabaseError, NotFoundError, ValidationError
from app.services.cash_card_service import CashCardService, parse_sort


def _db_failure():
    return OperationalError("SELECT 1", {}, Exception("database is locked"))


class TestCashCardServiceCreate:
    """Tests for create_card."""

    @pytest.fixture(autouse=True)
    def _service(self, mock_card_repository):
        self.repository = mock_card_repository
        self.service = CashCardService(mock_card_repository)

    @pytest.mark.asyncio
    async def test_create_returns_assigned_id(self, sample_card):
        """The id comes from the store, never from the caller."""
        sample_card.id = 103
        self.repository.create.return_value = sample_card

        card_id = await self.service.create_card(amount=250.0, owner="sarah1")

        assert card_id == 103
        self.repository.create.assert_awaited_once_with(amount=250.0, owner="sarah1")

    @pytest.mark.asyncio
    async def test_create_database_failure(self):
        self.repository.create.side_effect = _db_failure()

        with pytest.raises(DatabaseError):
            await self.service.create_card(amount=1.0, owner="sarah1")


class TestCashCardServiceGet:
    """Tests for get_card."""

    @pytest.fixture(autouse=True)
    def _service(self, mock_card_repository):
        self.repository = mock_card_repository
        self.service = CashCardService(mock_card_repository)

    @pytest.mark.asyncio
    async def test_get_card_found(self, sample_card):
        self.repository.find_by_id.return_value = sample_card

        result = await self.service.get_card(99, owner="sarah1")

        assert result.id == 99
        assert result.amount == 123.45
        self.repository.find_by_id.assert_awaited_once_with(99, owner="sarah1")

    @pytest.mark.asyncio
    async def test_get_card_not_found(self):
        """Unknown ids (and other owners' ids, which the store hides) → NotFoundError."""
        self.repository.find_by_id.return_value = None

        with pytest.raises(NotFoundError, match="99999"):
            await self.service.get_card(99999, owner="sarah1")

    @pytest.mark.asyncio
    async def test_get_card_response_excludes_owner(self, sample_card):
        self.repository.find_by_id.return_value = sample_card

        result = await self.service.get_card(99, owner="sarah1")

        assert result.model_dump() == {"id": 99, "amount": 123.45}

    @pytest.mark.asyncio
    async def test_get_card_database_failure(self):
        self.repository.find_by_id.side_effect = _db_failure()

        with pytest.raises(DatabaseError):
            await self.service.get_card(99, owner="sarah1")


class TestCashCardServiceUpdateDelete:
    """Tests for update_card and delete_card."""

    @pytest.fixture(autouse=True)
    def _service(self, mock_card_repository):
        self.repository = mock_card_repository
        self.service = CashCardService(mock_card_repository)

    @pytest.mark.asyncio
    async def test_update_existing_card(self, sample_card):
        self.repository.update.return_value = sample_card

        await self.service.update_card(99, amount=19.99, owner="sarah1")

        self.repository.update.assert_awaited_once_with(99, 19.99, owner="sarah1")

    @pytest.mark.asyncio
    async def test_update_missing_card(self):
        self.repository.update.return_value = None

        with pytest.raises(NotFoundError):
            await self.service.update_card(99999, amount=1.0, owner="sarah1")

    @pytest.mark.asyncio
    async def test_delete_existing_card(self):
        self.repository.delete_by_id.return_value = True

        await self.service.delete_card(99, owner="sarah1")

        self.repository.delete_by_id.assert_awaited_once_with(99, owner="sarah1")

    @pytest.mark.asyncio
    async def test_delete_missing_card(self):
        self.repository.delete_by_id.return_value = False

        with pytest.raises(NotFoundError):
            await self.service.delete_card(99999, owner="sarah1")

    @pytest.mark.asyncio
    async def test_delete_database_failure(self):
        self.repository.delete_by_id.side_effect = _db_failure()

        with pytest.raises(DatabaseError):
            await self.service.delete_card(99, owner="sarah1")


class TestCashCardServiceList:
    """Tests for list_cards paging."""

    @pytest.fixture(autouse=True)
    def _service(self, mock_card_repository):
        self.repository = mock_card_repository
        self.service = CashCardService(mock_card_repository)

    @pytest.mark.asyncio
    async def test_list_empty(self):
        cards, total = await self.service.list_cards(owner="kumar2")

        assert cards == []
        assert total == 0

    @pytest.mark.asyncio
    async def test_list_defaults(self, sample_card):
        """No paging params → first page, default size, amount ascending."""
        self.repository.find_all.return_value = [sample_card]
        self.repository.count.return_value = 1

        cards, total = await self.service.list_cards(owner="sarah1")

        assert [c.id for c in cards] == [99]
        assert total == 1
        self.repository.find_all.assert_awaited_once_with(
            "sarah1", offset=0, limit=20, order_by="amount", descending=False
        )

    @pytest.mark.asyncio
    async def test_list_page_offset(self):
        await self.service.list_cards(owner="sarah1", page=3, size=5, sort="id,desc")

        self.repository.find_all.assert_awaited_once_with(
            "sarah1", offset=15, limit=5, order_by="id", descending=True
        )

    @pytest.mark.asyncio
    async def test_list_rejects_oversized_page(self):
        with pytest.raises(ValidationError, match="Page size"):
            await self.service.list_cards(owner="sarah1", size=1000)
        self.repository.find_all.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_list_rejects_page_beyond_offset_range(self):
        with pytest.raises(ValidationError, match="Page number"):
            await self.service.list_cards(owner="sarah1", page=10**19, size=1)
        self.repository.find_all.assert_not_awaited()


class TestParseSort:
    """Tests for the `field[,direction]` sort expression parser."""

    def test_default(self):
        assert parse_sort(None) == ("amount", False)
        assert parse_sort("") == ("amount", False)

    def test_field_only_is_ascending(self):
        assert parse_sort("id") == ("id", False)

    def test_field_and_direction(self):
        assert parse_sort("amount,desc") == ("amount", True)
        assert parse_sort(" Amount , DESC ") == ("amount", True)

    def test_unknown_field(self):
        with pytest.raises(ValidationError, match="sort field"):
            parse_sort("owner,asc")

    def test_unknown_direction(self):
        with pytest.raises(ValidationError, match="sort direction"):
            parse_sort("amount,sideways")
