"""Locale-invariant number formatting for JSON-LD values."""
from decimal import Decimal, ROUND_HALF_UP
from typing import Union

Number = Union[Decimal, int, float, str]


def to_decimal(value: Number) -> Decimal:
    """Convert to Decimal without picking up binary float artifacts."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


def format_decimal(value: Number, places: int) -> str:
    """
    Format a number with exactly ``places`` fractional digits.
    
    Always uses "." as decimal separator and no grouping, whatever the
    host locale. Ties round away from zero (3.25 -> "3.3").
    """
    if places < 0:
        raise ValueError("places must be non-negative")
    exponent = Decimal(1).scaleb(-places)
    quantized = to_decimal(value).quantize(exponent, rounding=ROUND_HALF_UP)
    return format(quantized, "f")
