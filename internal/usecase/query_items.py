"""
Query Items Use Case.

Read-only lookups over the catalog. Nothing here mutates or publishes.
"""
from decimal import Decimal
from typing import Optional, Sequence

from internal.domain.catalog_item import CatalogItem
from internal.domain.errors import InvalidRangeError, NotFoundError
from internal.usecase.ports import CatalogStore
from pkg.logger.logger import get_logger

logger = get_logger(__name__)


class QueryItemsUseCase:
    """Use case for finding, listing and counting catalog items."""

    def __init__(self, store: CatalogStore) -> None:
        """
        Initialize the use case.

        Args:
            store: Catalog store to read from.
        """
        self._store = store

    async def by_id(self, item_id: int) -> CatalogItem:
        """
        Get an item by id.

        Raises:
            NotFoundError: If no item has the given id.
        """
        logger.debug("Finding item by id", item_id=item_id)
        item = await self._store.find_by_id(item_id)
        if item is None:
            raise NotFoundError("id", item_id)
        return item

    async def by_code(self, code: str) -> CatalogItem:
        """
        Get an item by code.

        The code is matched in its normalized form, so ``" abc-1 "`` finds
        ``ABC-1``.

        Raises:
            NotFoundError: If no item has the given code.
        """
        normalized = code.strip().upper()
        logger.debug("Finding item by code", code=normalized)
        item = await self._store.find_by_code(normalized)
        if item is None:
            raise NotFoundError("code", normalized)
        return item

    async def all(self) -> Sequence[CatalogItem]:
        """List every item."""
        logger.debug("Listing all items")
        return await self._store.find_all()

    async def active(self) -> Sequence[CatalogItem]:
        """List active items."""
        logger.debug("Listing active items")
        return await self._store.find_active()

    async def by_category(self, category: str) -> Sequence[CatalogItem]:
        """List active items of a category."""
        logger.debug("Listing items by category", category=category)
        return await self._store.find_by_category(category)

    async def by_price_range(
        self,
        min_price: Optional[Decimal] = None,
        max_price: Optional[Decimal] = None,
    ) -> Sequence[CatalogItem]:
        """
        List items priced within inclusive bounds.

        Args:
            min_price: Lower bound, or None for no lower bound.
            max_price: Upper bound, or None for no upper bound.

        Raises:
            InvalidRangeError: If both bounds are given and min > max.
        """
        logger.debug(
            "Listing items by price range",
            min_price=min_price,
            max_price=max_price,
        )
        if min_price is not None and max_price is not None and min_price > max_price:
            raise InvalidRangeError(min_price, max_price)
        return await self._store.find_by_price_range(min_price, max_price)

    async def count_all(self) -> int:
        """Count every item."""
        return await self._store.count_all()

    async def count_active(self) -> int:
        """Count active items."""
        return await self._store.count_active()
