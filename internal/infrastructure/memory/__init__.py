"""
In-memory infrastructure package.
"""
from .store import InMemoryCatalogStore

__all__ = ["InMemoryCatalogStore"]
