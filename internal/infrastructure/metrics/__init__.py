"""
Metrics infrastructure package.
"""
from .prometheus import (
    HTTP_REQUESTS_TOTAL,
    HTTP_REQUEST_DURATION,
    ITEM_MUTATIONS,
    EVENTS_PUBLISHED,
    DB_QUERY_DURATION,
)

__all__ = [
    "HTTP_REQUESTS_TOTAL",
    "HTTP_REQUEST_DURATION",
    "ITEM_MUTATIONS",
    "EVENTS_PUBLISHED",
    "DB_QUERY_DURATION",
]
