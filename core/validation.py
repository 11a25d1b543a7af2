"""Input coercion shared by the service modules.

Request bodies arrive loosely typed (numbers as strings, blanks for absent
values), so services normalize them here before touching the database.
"""

import math
from decimal import Decimal, InvalidOperation
from typing import Any

from .errors import ValidationError

# courses.price is Numeric(10, 2)
MAX_PRICE = Decimal(10) ** 8


def is_blank(value: Any) -> bool:
    """True for None, empty strings and whitespace-only strings."""
    return value is None or (isinstance(value, str) and not value.strip())


def require_text(value: Any, field: str) -> str:
    """Return the stripped string value, or raise ValidationError if blank."""
    if is_blank(value):
        raise ValidationError(f"{field} is required")
    return str(value).strip()


def optional_text(value: Any) -> str | None:
    """Blank values become None; anything else is kept as a string."""
    if is_blank(value):
        return None
    return str(value)


def parse_int(value: Any) -> int | None:
    """
    Parse an integer from an int, a whole float, or a numeric string.

    Returns None when the value is absent or cannot be parsed.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def parse_positive_int(value: Any, field: str) -> int:
    """Parse a strictly positive integer or raise ValidationError."""
    parsed = parse_int(value)
    if parsed is None or parsed <= 0:
        raise ValidationError(f"{field} must be a positive integer")
    return parsed


def parse_price(value: Any) -> Decimal:
    """
    Parse a non-negative price; anything unusable falls back to 0.

    Prices at or above MAX_PRICE do not fit the price column and also
    fall back to 0.
    """
    if value is None or isinstance(value, bool):
        return Decimal("0")
    try:
        price = Decimal(str(value).strip())
        if not price.is_finite() or price < 0:
            return Decimal("0")
        price = price.quantize(Decimal("0.01"))
    except InvalidOperation:
        return Decimal("0")
    if price >= MAX_PRICE:
        return Decimal("0")
    return price
