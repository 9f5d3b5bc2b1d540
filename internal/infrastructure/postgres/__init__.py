"""
PostgreSQL infrastructure package.
"""
from .repository import PostgresCatalogStore, create_pool

__all__ = ["PostgresCatalogStore", "create_pool"]
