"""
Catalog item events.

Events are snapshots of an item taken right after a successful save. They
carry enough state for a consumer to rebuild the item without re-querying.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Optional

from .catalog_item import CatalogItem


class ItemEventType(str, Enum):
    """Type of change broadcast for an item."""

    CREATED = "ITEM_CREATED"
    FIELDS_UPDATED = "ITEM_FIELDS_UPDATED"
    PRICE_UPDATED = "ITEM_PRICE_UPDATED"
    ACTIVATED = "ITEM_ACTIVATED"
    DEACTIVATED = "ITEM_DEACTIVATED"
    # Reserved for store-level deletion; never emitted by the use cases.
    DELETED = "ITEM_DELETED"


@dataclass(frozen=True)
class ItemEvent:
    """
    Item change event.

    Attributes:
        event_type: Type of change.
        item_id: Identifier of the item.
        code: Item code.
        name: Item name.
        price: Item price.
        active: Active flag after the change.
        timestamp: When the event was created.
    """
    event_type: ItemEventType
    item_id: Optional[int]
    code: str
    name: str
    price: Decimal
    active: bool
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_item(cls, event_type: ItemEventType, item: CatalogItem) -> "ItemEvent":
        """Snapshot the current state of an item."""
        return cls(
            event_type=ItemEventType(event_type),
            item_id=item.id,
            code=item.code,
            name=item.name,
            price=item.price,
            active=item.active,
        )

    @property
    def key(self) -> str:
        """Partitioning key for the event transport."""
        return self.code

    def to_dict(self) -> dict:
        """Convert to the wire payload."""
        return {
            "event_type": self.event_type.value,
            "item_id": self.item_id,
            "code": self.code,
            "name": self.name,
            "price": str(self.price),
            "active": self.active,
            "timestamp": self.timestamp.isoformat(),
        }
