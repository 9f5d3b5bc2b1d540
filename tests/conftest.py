"""
Pytest configuration and fixtures.
"""
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from internal.domain.catalog_item import CatalogItem
from internal.infrastructure.memory.store import InMemoryCatalogStore


@pytest.fixture
def item_data():
    """Sample item data for tests."""
    return {
        "name": "Wireless Mouse",
        "code": "MOUSE-001",
        "description": "2.4 GHz optical mouse",
        "price": Decimal("59.90"),
        "category": "peripherals",
    }


@pytest.fixture
def item(item_data):
    """Unsaved catalog item."""
    return CatalogItem(**item_data)


@pytest.fixture
def store():
    """Empty in-memory catalog store."""
    return InMemoryCatalogStore()


@pytest.fixture
def notifier():
    """Notifier mock recording publish calls."""
    mock = MagicMock()
    mock.publish = AsyncMock(return_value=None)
    return mock


@pytest.fixture
def failing_notifier():
    """Notifier mock whose publish always fails."""
    mock = MagicMock()
    mock.publish = AsyncMock(side_effect=RuntimeError("broker unreachable"))
    return mock


@pytest.fixture
def mock_store():
    """Catalog store mock with every operation as AsyncMock."""
    mock = MagicMock()
    for operation in (
        "save",
        "find_by_id",
        "find_by_code",
        "find_all",
        "find_by_category",
        "find_active",
        "find_by_price_range",
        "exists_by_code",
        "count_all",
        "count_active",
    ):
        setattr(mock, operation, AsyncMock())
    return mock
