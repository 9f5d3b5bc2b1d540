"""
Use case package for Catalog Service.

Contains business logic and use cases.
"""
from .create_item import CreateItemUseCase
from .update_item import UpdateItemUseCase
from .query_items import QueryItemsUseCase
from .ports import CatalogStore, EventNotifier, publish_best_effort

__all__ = [
    "CreateItemUseCase",
    "UpdateItemUseCase",
    "QueryItemsUseCase",
    "CatalogStore",
    "EventNotifier",
    "publish_best_effort",
]
