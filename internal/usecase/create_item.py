"""
Create Item Use Case.

Registers a new catalog item and broadcasts its creation.
"""
from decimal import Decimal
from typing import Optional

from internal.domain.catalog_item import CatalogItem
from internal.domain.errors import DuplicateCodeError
from internal.domain.events import ItemEventType
from internal.infrastructure.metrics import ITEM_MUTATIONS
from internal.usecase.ports import CatalogStore, EventNotifier, publish_best_effort
from pkg.logger.logger import get_logger

logger = get_logger(__name__)


class CreateItemUseCase:
    """
    Use case for creating a new catalog item.

    The code is checked for uniqueness before the entity is built. The store
    still guards against concurrent creates with its own unique constraint
    and reports a clash as ``DuplicateCodeError``.
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

    async def execute(
        self,
        name: str,
        code: str,
        description: Optional[str],
        price: Decimal,
        category: Optional[str],
    ) -> CatalogItem:
        """
        Execute the create item use case.

        This method:
        1. Normalizes the code and rejects it if already registered
        2. Builds the validated entity
        3. Saves it
        4. Publishes ``ITEM_CREATED`` on a best-effort basis

        Args:
            name: Item name.
            code: Item code (any case, surrounding blanks allowed).
            description: Optional description.
            price: Item price.
            category: Optional category.

        Returns:
            The saved item, with its id assigned.

        Raises:
            DuplicateCodeError: If the code is already registered.
            ValidationError: If any field is invalid.
            RepositoryError: If the store cannot be accessed.
        """
        normalized_code = code.strip().upper() if isinstance(code, str) else code
        logger.info("Creating catalog item", code=normalized_code)

        # Blank codes are left for the entity to reject, after the name check.
        if normalized_code and await self._store.exists_by_code(normalized_code):
            logger.warning("Item code already registered", code=normalized_code)
            raise DuplicateCodeError(normalized_code)

        item = CatalogItem(
            name=name,
            code=normalized_code,
            description=description,
            price=price,
            category=category,
        )

        saved = await self._store.save(item)
        ITEM_MUTATIONS.labels(operation="create").inc()

        await publish_best_effort(self._notifier, ItemEventType.CREATED, saved)

        logger.info("Catalog item created", item_id=saved.id, code=saved.code)
        return saved
