"""Sanity checks for imported market statistics.

Advisory by default: findings are logged and returned, never raised,
unless a caller asks for strict checking.
"""

import logging
from collections.abc import Mapping
from dataclasses import asdict
from decimal import Decimal, InvalidOperation
from typing import Any

from src.models.market import MarketSnapshot

logger = logging.getLogger(__name__)

MAX_GROSS_YIELD = Decimal("30")
MIN_GROSS_YIELD = Decimal("0")
MAX_PRICE_CHANGE = Decimal("100")
MIN_PRICE_CHANGE = Decimal("-50")

# Raw import records use the client's camelCase keys.
_FIELD_ALIASES = {
    "avg_price_per_sqm": "avgPricePerSqm",
    "gross_yield": "grossYield",
    "price_change_percent": "priceChangePercent",
}


class SuspiciousMarketData(ValueError):
    def __init__(self, warnings: list[str]):
        super().__init__("; ".join(warnings))
        self.warnings = warnings


_FIELD_LABELS = {
    "avg_price_per_sqm": "Price per SQM",
    "gross_yield": "Gross Yield",
    "price_change_percent": "Price Change",
}


def _field(record: Mapping[str, Any], name: str, warnings: list[str]) -> Decimal | None:
    """Read a metric as a finite Decimal. Unreadable values add a warning and read as missing."""
    value = record.get(name)
    if value is None:
        value = record.get(_FIELD_ALIASES[name])
    if value is None:
        return None
    try:
        number = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation:
        number = None
    if number is None or not number.is_finite():
        warnings.append(f"Non-numeric {_FIELD_LABELS[name]}: {value}")
        return None
    return number


def validate_data_consistency(record: MarketSnapshot | Mapping[str, Any]) -> list[str]:
    """Return human-readable warnings for implausible values."""
    if isinstance(record, MarketSnapshot):
        record = asdict(record)

    warnings: list[str] = []

    price = _field(record, "avg_price_per_sqm", warnings)
    if price is not None and price < 0:
        warnings.append("Price per SQM cannot be negative")

    gross_yield = _field(record, "gross_yield", warnings)
    if gross_yield is not None and not MIN_GROSS_YIELD <= gross_yield <= MAX_GROSS_YIELD:
        warnings.append(f"Suspicious Gross Yield: {gross_yield}%")

    change = _field(record, "price_change_percent", warnings)
    if change is not None and not MIN_PRICE_CHANGE <= change <= MAX_PRICE_CHANGE:
        warnings.append(f"Suspicious Price Change: {change}%")

    return warnings


def check_snapshot(record: MarketSnapshot | Mapping[str, Any], strict: bool = False) -> list[str]:
    """Validate a record, logging findings. Raises SuspiciousMarketData only when strict."""
    warnings = validate_data_consistency(record)
    if warnings:
        if isinstance(record, MarketSnapshot):
            label = f"district {record.district_id} ({record.year})"
        else:
            label = f"{record.get('districtName', 'unknown district')} ({record.get('year')})"
        logger.warning("Validation warnings for %s: %s", label, warnings)
        if strict:
            raise SuspiciousMarketData(warnings)
    return warnings
