"""
Value Objects for the Catalog domain.

Value objects are immutable and defined by their attributes. They own the
format rules for item codes and prices so that the entity can re-run them on
every assignment.
"""
import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, localcontext
from typing import Any

from .errors import ValidationError

CODE_PATTERN = re.compile(r"^[A-Z0-9\-_]{3,50}$")

PRICE_MAX_SCALE = 2
PRICE_MAX_INTEGER_DIGITS = 8


@dataclass(frozen=True)
class ItemCode:
    """
    Unique stock keeping code of a catalog item.

    Attributes:
        value: Normalized code (trimmed, upper-cased).
    """
    value: str

    def __post_init__(self) -> None:
        """Validate code format."""
        if not CODE_PATTERN.match(self.value):
            raise ValidationError(
                "code",
                "code must contain only upper-case letters, digits, '-' or '_' "
                "(3-50 characters)",
            )

    @staticmethod
    def normalize(raw: Any) -> str:
        """
        Normalize raw input into canonical code form.

        Args:
            raw: Code as received from the caller.

        Returns:
            Trimmed, upper-cased code.

        Raises:
            ValidationError: If the code is missing or blank.
        """
        if raw is None or not isinstance(raw, str) or not raw.strip():
            raise ValidationError("code", "code is required")
        return raw.strip().upper()

    @classmethod
    def parse(cls, raw: Any) -> "ItemCode":
        """Normalize and validate a raw code."""
        return cls(cls.normalize(raw))

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Price:
    """
    Price value object.

    Non-negative, finite, with at most eight integer and two fractional
    digits, matching the ``NUMERIC(10,2)`` column. The scale of the
    given amount is kept as-is (``Decimal("10.5")`` stays ``10.5``).

    Attributes:
        amount: The price amount.
    """
    amount: Decimal

    def __post_init__(self) -> None:
        """Validate price constraints."""
        if not self.amount.is_finite():
            raise ValidationError("price", "price must be a finite number")
        if self.amount < 0:
            raise ValidationError("price", "price cannot be negative")
        exponent = self.amount.as_tuple().exponent
        if isinstance(exponent, int) and -exponent > PRICE_MAX_SCALE:
            raise ValidationError(
                "price", f"price must have at most {PRICE_MAX_SCALE} decimal places"
            )
        if self.amount >= Decimal(10) ** PRICE_MAX_INTEGER_DIGITS:
            raise ValidationError(
                "price",
                f"price must have at most {PRICE_MAX_INTEGER_DIGITS} integer digits",
            )

    @classmethod
    def parse(cls, raw: Any) -> "Price":
        """
        Build a price from a Decimal, int or numeric string.

        Floats are converted through their shortest string form.

        Raises:
            ValidationError: If the value is missing or not numeric.
        """
        if raw is None:
            raise ValidationError("price", "price is required")
        if isinstance(raw, bool):
            raise ValidationError("price", "price must be a decimal number")
        if isinstance(raw, Decimal):
            return cls(raw)
        try:
            amount = Decimal(str(raw).strip())
        except (InvalidOperation, ValueError):
            raise ValidationError("price", "price must be a decimal number")
        return cls(amount)

    @property
    def formatted(self) -> str:
        """
        Display form of the price.

        Returns:
            Price with two decimals and comma separator, e.g. ``R$ 10,50``.
        """
        with localcontext() as ctx:
            ctx.prec = max(ctx.prec, PRICE_MAX_INTEGER_DIGITS + PRICE_MAX_SCALE)
            quantized = self.amount.quantize(Decimal("0.01"))
        return "R$ " + str(quantized).replace(".", ",")
