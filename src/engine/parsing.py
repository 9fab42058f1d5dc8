"""Lenient parsing of simulator form input.

Malformed values become zero instead of raising.
"""

import math
import re
from decimal import Decimal

from src.models.simulation import RawAmount

DEFAULT_HOLDING_YEARS = 5

_NON_NUMERIC = re.compile(r"[^0-9.]")
_DECIMAL_PREFIX = re.compile(r"\d*(?:\.\d*)?")
_INTEGER_PREFIX = re.compile(r"\s*([+-]?\d+)")


def parse_amount(value: RawAmount) -> Decimal:
    """Parse a currency or percentage field.

    Text is stripped of everything but digits and decimal points, then the
    longest leading decimal is read ("AED 1,500,000" -> 1500000,
    "1.2.3" -> 1.2). Numbers are taken as-is. Anything else is zero.
    """
    if value is None or isinstance(value, bool):
        return Decimal("0")
    if isinstance(value, Decimal):
        return value if value.is_finite() else Decimal("0")
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        return Decimal(str(value)) if math.isfinite(value) else Decimal("0")

    cleaned = _NON_NUMERIC.sub("", str(value))
    prefix = _DECIMAL_PREFIX.match(cleaned).group()
    if not any(ch.isdigit() for ch in prefix):
        return Decimal("0")
    return Decimal(prefix)


def parse_years(value: RawAmount, default: int = DEFAULT_HOLDING_YEARS) -> int:
    """Parse the holding period as a leading integer.

    Zero, negative or unparseable values fall back to `default`.
    """
    if value is None or isinstance(value, bool):
        return default

    if isinstance(value, str):
        match = _INTEGER_PREFIX.match(value)
        years = int(match.group(1)) if match else 0
    else:
        try:
            years = int(value)
        except (ValueError, OverflowError):  # NaN / infinity
            years = 0

    return years if years > 0 else default
