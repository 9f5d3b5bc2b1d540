"""
Unit tests for CreateItemUseCase.
"""
from decimal import Decimal

import pytest

from internal.domain.catalog_item import CatalogItem
from internal.domain.errors import DuplicateCodeError, RepositoryError, ValidationError
from internal.domain.events import ItemEventType
from internal.usecase.create_item import CreateItemUseCase


class TestCreateItemUseCase:
    """Tests for CreateItemUseCase."""

    @pytest.mark.asyncio
    async def test_execute_saves_and_publishes(self, store, notifier, item_data):
        """Test the happy path."""
        use_case = CreateItemUseCase(store=store, notifier=notifier)

        item = await use_case.execute(**item_data)

        assert item.id == 1
        assert item.code == "MOUSE-001"
        assert item.active is True
        assert await store.count_all() == 1

        notifier.publish.assert_awaited_once()
        event_type, published = notifier.publish.call_args.args
        assert event_type is ItemEventType.CREATED
        assert published.id == 1

    @pytest.mark.asyncio
    async def test_execute_normalizes_code_before_duplicate_check(self, mock_store):
        """Test that the existence check uses the normalized code."""
        mock_store.exists_by_code.return_value = False
        mock_store.save.side_effect = lambda item: item
        use_case = CreateItemUseCase(store=mock_store)

        item = await use_case.execute("Mouse", "  prod-001 ", None, Decimal("1.00"), None)

        mock_store.exists_by_code.assert_awaited_once_with("PROD-001")
        assert item.code == "PROD-001"

    @pytest.mark.asyncio
    async def test_duplicate_code_raises_without_save_or_publish(self, mock_store, notifier):
        """Test that an existing code stops the use case before any side effect."""
        mock_store.exists_by_code.return_value = True
        use_case = CreateItemUseCase(store=mock_store, notifier=notifier)

        with pytest.raises(DuplicateCodeError) as exc_info:
            await use_case.execute("Mouse", "PROD-001", None, Decimal("1.00"), None)

        assert exc_info.value.item_code == "PROD-001"
        mock_store.save.assert_not_called()
        notifier.publish.assert_not_called()

    @pytest.mark.asyncio
    async def test_duplicate_against_real_store(self, store, notifier, item_data):
        """Test that a second create with the same code fails."""
        use_case = CreateItemUseCase(store=store, notifier=notifier)
        await use_case.execute(**item_data)

        with pytest.raises(DuplicateCodeError):
            await use_case.execute(**{**item_data, "code": "mouse-001"})

        assert await store.count_all() == 1
        assert notifier.publish.await_count == 1

    @pytest.mark.asyncio
    async def test_validation_error_propagates_without_save(self, mock_store, notifier):
        """Test that an invalid name is rejected before saving."""
        mock_store.exists_by_code.return_value = False
        use_case = CreateItemUseCase(store=mock_store, notifier=notifier)

        with pytest.raises(ValidationError) as exc_info:
            await use_case.execute("A", "ABC-1", None, Decimal("1.00"), None)

        assert exc_info.value.field == "name"
        mock_store.save.assert_not_called()
        notifier.publish.assert_not_called()

    @pytest.mark.asyncio
    async def test_blank_code_reports_name_error_first(self, mock_store):
        """Test that rule order is kept even when the code is blank."""
        use_case = CreateItemUseCase(store=mock_store)

        with pytest.raises(ValidationError) as exc_info:
            await use_case.execute("A", "   ", None, Decimal("1.00"), None)

        assert exc_info.value.field == "name"
        mock_store.exists_by_code.assert_not_called()

    @pytest.mark.asyncio
    async def test_negative_price_rejected_zero_accepted(self, store):
        """Test the price boundary."""
        use_case = CreateItemUseCase(store=store)

        with pytest.raises(ValidationError):
            await use_case.execute("Mouse", "ABC-1", None, Decimal("-1.00"), None)

        item = await use_case.execute("Mouse", "ABC-1", None, Decimal("0.00"), None)
        assert item.price == Decimal("0.00")

    @pytest.mark.asyncio
    async def test_repository_error_propagates(self, mock_store, notifier):
        """Test that store failures reach the caller."""
        mock_store.exists_by_code.return_value = False
        mock_store.save.side_effect = RepositoryError("Failed to save item")
        use_case = CreateItemUseCase(store=mock_store, notifier=notifier)

        with pytest.raises(RepositoryError):
            await use_case.execute("Mouse", "ABC-1", None, Decimal("1.00"), None)

        notifier.publish.assert_not_called()

    @pytest.mark.asyncio
    async def test_store_conflict_surfaces_as_duplicate(self, mock_store):
        """Test a lost check-then-insert race."""
        mock_store.exists_by_code.return_value = False
        mock_store.save.side_effect = DuplicateCodeError("ABC-1")
        use_case = CreateItemUseCase(store=mock_store)

        with pytest.raises(DuplicateCodeError):
            await use_case.execute("Mouse", "ABC-1", None, Decimal("1.00"), None)

    @pytest.mark.asyncio
    async def test_failing_notifier_does_not_affect_result(self, store, failing_notifier):
        """Test that publish failures are absorbed."""
        use_case = CreateItemUseCase(store=store, notifier=failing_notifier)

        item = await use_case.execute("X Item", "ABC-1", None, Decimal("5.00"), None)

        assert isinstance(item, CatalogItem)
        assert item.id == 1
        assert await store.exists_by_code("ABC-1")
        failing_notifier.publish.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_without_notifier(self, store, item_data):
        """Test that a missing notifier skips publication."""
        use_case = CreateItemUseCase(store=store)

        item = await use_case.execute(**item_data)

        assert item.id == 1
