"""
Update Item Use Case.

Field, price and status changes of existing catalog items. Every operation
loads the item, mutates it through the entity, saves it and then publishes
its own event type.
"""
from decimal import Decimal
from typing import Callable, Optional

from internal.domain.catalog_item import CatalogItem
from internal.domain.errors import NotFoundError
from internal.domain.events import ItemEventType
from internal.infrastructure.metrics import ITEM_MUTATIONS
from internal.usecase.ports import CatalogStore, EventNotifier, publish_best_effort
from pkg.logger.logger import get_logger

logger = get_logger(__name__)


class UpdateItemUseCase:
    """
    Use case for mutating an existing catalog item.

    The item code is never changed by any operation.
    """

    def __init__(
        self,
        store: CatalogStore,
        notifier: Optional[EventNotifier] = None,
    ) -> None:
        """
        Initialize the use case.

        Args:
            store: Catalog store for persistence.
            notifier: Optional notifier for item events.
        """
        self._store = store
        self._notifier = notifier

    async def update_fields(
        self,
        item_id: int,
        name: str,
        description: Optional[str],
        price: Decimal,
        category: Optional[str],
    ) -> CatalogItem:
        """
        Replace name, description, price and category of an item.

        Raises:
            NotFoundError: If no item has the given id.
            ValidationError: If any value is invalid.
            RepositoryError: If the store cannot be accessed.
        """
        return await self._apply(
            item_id,
            lambda item: item.update_fields(name, description, price, category),
            ItemEventType.FIELDS_UPDATED,
            "update_fields",
        )

    async def update_price(self, item_id: int, new_price: Decimal) -> CatalogItem:
        """
        Replace the price of an item.

        Raises:
            NotFoundError: If no item has the given id.
            ValidationError: If the price is invalid.
            RepositoryError: If the store cannot be accessed.
        """
        return await self._apply(
            item_id,
            lambda item: item.update_price(new_price),
            ItemEventType.PRICE_UPDATED,
            "update_price",
        )

    async def activate(self, item_id: int) -> CatalogItem:
        """Mark an item as active."""
        return await self._apply(
            item_id,
            lambda item: item.activate(),
            ItemEventType.ACTIVATED,
            "activate",
        )

    async def deactivate(self, item_id: int) -> CatalogItem:
        """Mark an item as inactive."""
        return await self._apply(
            item_id,
            lambda item: item.deactivate(),
            ItemEventType.DEACTIVATED,
            "deactivate",
        )

    async def _apply(
        self,
        item_id: int,
        mutate: Callable[[CatalogItem], None],
        event_type: ItemEventType,
        operation: str,
    ) -> CatalogItem:
        """
        Load, mutate, save and publish.

        Args:
            item_id: Identifier of the item.
            mutate: Entity operation to run on the loaded item.
            event_type: Event published after the save.
            operation: Operation name for logs and metrics.

        Returns:
            The saved item.
        """
        logger.info("Updating catalog item", item_id=item_id, operation=operation)

        item = await self._store.find_by_id(item_id)
        if item is None:
            raise NotFoundError("id", item_id)

        mutate(item)

        saved = await self._store.save(item)
        ITEM_MUTATIONS.labels(operation=operation).inc()

        await publish_best_effort(self._notifier, event_type, saved)

        logger.info(
            "Catalog item updated",
            item_id=saved.id,
            operation=operation,
            active=saved.active,
        )
        return saved
