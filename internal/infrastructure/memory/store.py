"""
In-memory Catalog Store.

Reference implementation of the catalog store contract. Used for local runs
(``STORAGE_BACKEND=memory``) and tests.
"""
import asyncio
import copy
from decimal import Decimal
from itertools import count
from typing import Dict, List, Optional

from internal.domain.catalog_item import CatalogItem
from internal.domain.errors import DuplicateCodeError
from pkg.logger.logger import get_logger

logger = get_logger(__name__)


class InMemoryCatalogStore:
    """
    Dictionary-backed catalog store.

    Items are copied on the way in and on the way out, so a caller mutating a
    returned item changes nothing until it saves it. Code uniqueness is
    enforced on every save, the same way a unique index would.
    """

    def __init__(self) -> None:
        self._items: Dict[int, CatalogItem] = {}
        self._ids = count(1)
        self._lock = asyncio.Lock()

    async def save(self, item: CatalogItem) -> CatalogItem:
        """
        Insert or update an item.

        Args:
            item: The item to persist.

        Returns:
            A copy of the stored item.

        Raises:
            DuplicateCodeError: If another item already uses the code.
        """
        async with self._lock:
            for stored in self._items.values():
                if stored.code == item.code and stored.id != item.id:
                    raise DuplicateCodeError(item.code)

            if item.id is None:
                item.assign_id(next(self._ids))
                logger.debug("Item inserted", item_id=item.id, code=item.code)

            self._items[item.id] = copy.deepcopy(item)
            return copy.deepcopy(item)

    async def find_by_id(self, item_id: int) -> Optional[CatalogItem]:
        item = self._items.get(item_id)
        return copy.deepcopy(item) if item is not None else None

    async def find_by_code(self, code: str) -> Optional[CatalogItem]:
        for item in self._items.values():
            if item.code == code:
                return copy.deepcopy(item)
        return None

    async def find_all(self) -> List[CatalogItem]:
        return self._select(lambda item: True)

    async def find_by_category(self, category: str) -> List[CatalogItem]:
        wanted = category.strip().lower()
        return self._select(
            lambda item: item.active
            and item.category is not None
            and item.category.lower() == wanted
        )

    async def find_active(self) -> List[CatalogItem]:
        return self._select(lambda item: item.active)

    async def find_by_price_range(
        self,
        min_price: Optional[Decimal],
        max_price: Optional[Decimal],
    ) -> List[CatalogItem]:
        return self._select(
            lambda item: (min_price is None or item.price >= min_price)
            and (max_price is None or item.price <= max_price)
        )

    async def exists_by_code(self, code: str) -> bool:
        return any(item.code == code for item in self._items.values())

    async def count_all(self) -> int:
        return len(self._items)

    async def count_active(self) -> int:
        return sum(1 for item in self._items.values() if item.active)

    def _select(self, predicate) -> List[CatalogItem]:
        return [
            copy.deepcopy(item)
            for _, item in sorted(self._items.items())
            if predicate(item)
        ]
