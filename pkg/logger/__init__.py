"""
Structured JSON logging for the catalog service.
"""
from .logger import (
    setup_logging,
    get_logger,
    set_request_id,
    get_request_id,
    StructuredFormatter,
    StructuredLogger,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "set_request_id",
    "get_request_id",
    "StructuredFormatter",
    "StructuredLogger",
]
