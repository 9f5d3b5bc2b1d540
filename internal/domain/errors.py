"""
Domain-specific exceptions.

Closed family of catalog errors. Every error carries a human readable
``message`` and a stable ``code`` tag that the transport layer maps to a
response status.
"""
from decimal import Decimal
from typing import Optional


class DomainError(Exception):
    """Base exception for catalog errors."""

    code: str = "domain_error"

    def __init__(self, message: str) -> None:
        """
        Initialize domain error.

        Args:
            message: Error message describing the issue.
        """
        self.message = message
        super().__init__(self.message)


class ValidationError(DomainError):
    """Exception raised when an item field violates its rules."""

    code = "validation_error"

    def __init__(self, field: str, message: str) -> None:
        """
        Initialize validation error.

        Args:
            field: Name of the offending field.
            message: Description of the violated rule.
        """
        super().__init__(message)
        self.field = field


class DuplicateCodeError(DomainError):
    """Exception raised when an item code is already registered."""

    code = "duplicate_code"

    def __init__(self, item_code: str) -> None:
        """
        Initialize duplicate code error.

        Args:
            item_code: The code that already exists.
        """
        super().__init__(f"Item code '{item_code}' is already registered")
        self.item_code = item_code


class NotFoundError(DomainError):
    """Exception raised when no item matches the given key."""

    code = "not_found"

    def __init__(self, key: str, value: object) -> None:
        """
        Initialize not found error.

        Args:
            key: Lookup key used (``id`` or ``code``).
            value: The value that was looked up.
        """
        super().__init__(f"Item with {key} {value} not found")
        self.key = key
        self.value = value


class InvalidRangeError(DomainError):
    """Exception raised when a price range has its bounds inverted."""

    code = "invalid_range"

    def __init__(self, min_price: Decimal, max_price: Decimal) -> None:
        super().__init__(
            f"Minimum price {min_price} cannot be greater than maximum price {max_price}"
        )
        self.min_price = min_price
        self.max_price = max_price


class RepositoryError(DomainError):
    """Exception raised when the underlying store cannot be accessed."""

    code = "repository_error"

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        """
        Initialize repository error.

        Args:
            message: Description of the failed operation.
            cause: The original exception, if any.
        """
        super().__init__(message)
        self.cause = cause


class EventPublishError(DomainError):
    """Exception raised when event publishing fails."""

    code = "event_publish_error"

    def __init__(self, event_type: str, reason: str) -> None:
        """
        Initialize event publish error.

        Args:
            event_type: Type of event that failed to publish.
            reason: The reason for the failure.
        """
        super().__init__(f"Failed to publish event '{event_type}': {reason}")
        self.event_type = event_type
        self.reason = reason
