"""
Domain package for Catalog Service.

Contains the catalog item entity, value objects, events and domain errors.
"""
from .catalog_item import CatalogItem
from .events import ItemEvent, ItemEventType
from .value_objects import ItemCode, Price
from .errors import (
    DomainError,
    ValidationError,
    DuplicateCodeError,
    NotFoundError,
    InvalidRangeError,
    RepositoryError,
    EventPublishError,
)

__all__ = [
    "CatalogItem",
    "ItemEvent",
    "ItemEventType",
    "ItemCode",
    "Price",
    "DomainError",
    "ValidationError",
    "DuplicateCodeError",
    "NotFoundError",
    "InvalidRangeError",
    "RepositoryError",
    "EventPublishError",
]
