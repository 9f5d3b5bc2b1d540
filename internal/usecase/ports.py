"""
Collaborator contracts for the catalog use cases.

The store and the notifier are injected into every use case. Concrete
implementations live under ``internal.infrastructure``.
"""
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from internal.domain.catalog_item import CatalogItem
from internal.domain.events import ItemEventType
from internal.infrastructure.metrics import EVENTS_PUBLISHED
from pkg.logger.logger import get_logger

logger = get_logger(__name__)


class CatalogStore(Protocol):
    """
    Protocol for catalog persistence.

    Implementations raise ``RepositoryError`` on access failures and
    ``DuplicateCodeError`` when ``save`` hits the unique constraint on code.
    """

    async def save(self, item: CatalogItem) -> CatalogItem:
        """Insert or update an item; assigns its id on first insert."""
        ...

    async def find_by_id(self, item_id: int) -> Optional[CatalogItem]:
        """Get item by id."""
        ...

    async def find_by_code(self, code: str) -> Optional[CatalogItem]:
        """Get item by normalized code."""
        ...

    async def find_all(self) -> Sequence[CatalogItem]:
        """List every item."""
        ...

    async def find_by_category(self, category: str) -> Sequence[CatalogItem]:
        """List active items of a category (case-insensitive)."""
        ...

    async def find_active(self) -> Sequence[CatalogItem]:
        """List active items."""
        ...

    async def find_by_price_range(
        self,
        min_price: Optional[Decimal],
        max_price: Optional[Decimal],
    ) -> Sequence[CatalogItem]:
        """List items within inclusive bounds; a missing bound is open."""
        ...

    async def exists_by_code(self, code: str) -> bool:
        """Check whether a code is registered."""
        ...

    async def count_all(self) -> int:
        """Count every item."""
        ...

    async def count_active(self) -> int:
        """Count active items."""
        ...


class EventNotifier(Protocol):
    """Protocol for broadcasting item changes."""

    async def publish(self, event_type: ItemEventType, item: CatalogItem) -> None:
        """Publish a change of the given type for the item."""
        ...


async def publish_best_effort(
    notifier: Optional[EventNotifier],
    event_type: ItemEventType,
    item: CatalogItem,
) -> None:
    """
    Publish an item event, absorbing any failure.

    The outcome is only reported through logs and metrics; callers never see
    an exception from here and their result does not depend on it.

    Args:
        notifier: Notifier to use, or None to skip publication.
        event_type: Type of change.
        item: The saved item.
    """
    if notifier is None:
        return

    try:
        await notifier.publish(event_type, item)
    except Exception as e:
        EVENTS_PUBLISHED.labels(event_type=event_type.value, status="error").inc()
        logger.error(
            "Failed to publish item event",
            event_type=event_type.value,
            item_id=item.id,
            code=item.code,
            error=str(e),
        )
        return

    EVENTS_PUBLISHED.labels(event_type=event_type.value, status="success").inc()
    logger.debug(
        "Item event published",
        event_type=event_type.value,
        item_id=item.id,
    )
