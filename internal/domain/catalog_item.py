"""
Domain model for Catalog Item.

The item is the aggregate root of the catalog. Fields are read-only from the
outside; state only changes through the named mutation methods, each of which
re-runs the validation for the fields it touches before assigning anything.
"""
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Optional

from .errors import ValidationError
from .value_objects import ItemCode, Price

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 1000
CATEGORY_MAX_LENGTH = 100


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _validate_name(name: Any) -> str:
    if name is None or not isinstance(name, str) or not name.strip():
        raise ValidationError("name", "name is required")
    trimmed = name.strip()
    if len(trimmed) < NAME_MIN_LENGTH:
        raise ValidationError(
            "name", f"name must have at least {NAME_MIN_LENGTH} characters"
        )
    if len(trimmed) > NAME_MAX_LENGTH:
        raise ValidationError(
            "name", f"name must have at most {NAME_MAX_LENGTH} characters"
        )
    return trimmed


def _validate_optional_text(field: str, value: Any, max_length: int) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(field, f"{field} must be text")
    trimmed = value.strip()
    if len(trimmed) > max_length:
        raise ValidationError(
            field, f"{field} must have at most {max_length} characters"
        )
    return trimmed


class CatalogItem:
    """
    CatalogItem is the aggregate root for catalog operations.

    Attributes:
        id: Surrogate identifier, ``None`` until the item is first saved.
        name: Display name, trimmed, 2-255 characters.
        code: Unique SKU, upper-case, immutable after creation.
        description: Optional free text, at most 1000 characters.
        price: Non-negative decimal with at most two fractional digits.
        category: Optional category label, at most 100 characters.
        active: Whether the item is sellable.
        created_at: Timestamp of creation.
        updated_at: Timestamp of the last successful mutation.
    """

    def __init__(
        self,
        name: str,
        code: str,
        description: Optional[str],
        price: Decimal,
        category: Optional[str],
    ) -> None:
        """
        Create a new, unsaved and active item.

        Raises:
            ValidationError: On the first violated rule, checked in the order
                name, code, price, description, category.
        """
        self._name = _validate_name(name)
        self._code = ItemCode.parse(code)
        self._price = Price.parse(price)
        self._description = _validate_optional_text(
            "description", description, DESCRIPTION_MAX_LENGTH
        )
        self._category = _validate_optional_text(
            "category", category, CATEGORY_MAX_LENGTH
        )
        self._id: Optional[int] = None
        self._active = True
        self._created_at = _utcnow()
        self._updated_at = self._created_at

    @classmethod
    def restore(
        cls,
        id: int,
        name: str,
        code: str,
        description: Optional[str],
        price: Decimal,
        category: Optional[str],
        active: bool,
        created_at: datetime,
        updated_at: datetime,
    ) -> "CatalogItem":
        """
        Rehydrate a persisted item.

        Used by stores only. Field rules are checked exactly as on creation.

        Returns:
            The restored item.
        """
        item = cls(name, code, description, price, category)
        item._id = id
        item._active = bool(active)
        item._created_at = created_at
        item._updated_at = max(updated_at, created_at)
        return item

    # Read-only state

    @property
    def id(self) -> Optional[int]:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def code(self) -> str:
        return self._code.value

    @property
    def description(self) -> Optional[str]:
        return self._description

    @property
    def price(self) -> Decimal:
        return self._price.amount

    @property
    def category(self) -> Optional[str]:
        return self._category

    @property
    def active(self) -> bool:
        return self._active

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    # Derived views

    @property
    def formatted_price(self) -> str:
        """Price formatted for display, e.g. ``R$ 10,50``."""
        return self._price.formatted

    @property
    def category_code(self) -> str:
        """
        Code qualified by category.

        Returns:
            ``CATEGORY-CODE`` when a category is set, otherwise the code.
        """
        if self._category:
            return f"{self._category.upper()}-{self.code}"
        return self.code

    # Mutations

    def assign_id(self, item_id: int) -> None:
        """
        Set the identifier given by the store on first insert.

        Raises:
            ValidationError: If a different identifier is already assigned.
        """
        if self._id is not None and self._id != item_id:
            raise ValidationError("id", "id cannot be changed once assigned")
        self._id = item_id

    def update_price(self, new_price: Decimal) -> None:
        """
        Replace the price.

        Raises:
            ValidationError: If the price is invalid. The item is unchanged.
        """
        price = Price.parse(new_price)
        self._price = price
        self._touch()

    def update_fields(
        self,
        name: str,
        description: Optional[str],
        price: Decimal,
        category: Optional[str],
    ) -> None:
        """
        Replace name, description, price and category.

        All values are validated before any of them is assigned.

        Raises:
            ValidationError: On the first invalid value. The item is unchanged.
        """
        new_name = _validate_name(name)
        new_price = Price.parse(price)
        new_description = _validate_optional_text(
            "description", description, DESCRIPTION_MAX_LENGTH
        )
        new_category = _validate_optional_text(
            "category", category, CATEGORY_MAX_LENGTH
        )

        self._name = new_name
        self._price = new_price
        self._description = new_description
        self._category = new_category
        self._touch()

    def activate(self) -> None:
        """Mark the item as active."""
        self._active = True
        self._touch()

    def deactivate(self) -> None:
        """Mark the item as inactive."""
        self._active = False
        self._touch()

    def _touch(self) -> None:
        # Never move backwards, even if the wall clock does.
        self._updated_at = max(_utcnow(), self._updated_at)

    def to_dict(self) -> dict:
        """
        Convert to dictionary representation.

        Returns:
            Dictionary with all item data, including derived views.
        """
        return {
            "id": self._id,
            "name": self._name,
            "code": self.code,
            "description": self._description,
            "price": str(self.price),
            "category": self._category,
            "active": self._active,
            "created_at": self._created_at.isoformat(),
            "updated_at": self._updated_at.isoformat(),
            "formatted_price": self.formatted_price,
            "category_code": self.category_code,
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CatalogItem):
            return NotImplemented
        return self._id == other._id and self.code == other.code

    def __hash__(self) -> int:
        return hash((self._id, self.code))

    def __repr__(self) -> str:
        return (
            f"CatalogItem(id={self._id!r}, code={self.code!r}, name={self._name!r}, "
            f"price={self.price!r}, active={self._active!r})"
        )
