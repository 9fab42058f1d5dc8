"""District market data types."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class SupplyRiskLevel(Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class TrendRange(Enum):
    THREE_MONTHS = "3M"
    SIX_MONTHS = "6M"
    ONE_YEAR = "1Y"
    THREE_YEARS = "3Y"
    ALL = "All"


@dataclass(frozen=True)
class MarketSnapshot:
    """One district's statistics for a year (optionally a quarter)."""

    district_id: int
    year: int
    quarter: str | None = None  # "Q1".."Q4"

    avg_price_per_sqm: Decimal | None = None
    price_change_percent: Decimal | None = None  # Year over year
    avg_rent_new: Decimal | None = None
    avg_rent_renewed: Decimal | None = None
    gross_yield: Decimal | None = None  # Percent
    net_yield: Decimal | None = None  # Percent

    transaction_volume: int | None = None
    transaction_value: Decimal | None = None

    avg_price_apartment: Decimal | None = None
    avg_price_villa: Decimal | None = None
    off_plan_share: Decimal | None = None  # Percent
    ready_share: Decimal | None = None  # Percent


@dataclass(frozen=True)
class SupplyPipelineEntry:
    district_id: int
    year: int
    units_planned: int | None = None
    units_delivered: int | None = None
    supply_risk_level: SupplyRiskLevel | None = None


@dataclass(frozen=True)
class MarketMetrics:
    gross_yield: Decimal | None = None
    capital_growth: Decimal | None = None
    price_per_sqm: Decimal | None = None
    roi_5_year: Decimal | None = None


@dataclass(frozen=True)
class GlobalStats:
    year: int
    avg_price_per_sqm: Decimal = Decimal("0")
    avg_yield: Decimal = Decimal("0")
    avg_growth: Decimal = Decimal("0")
    total_transactions: int = 0
    total_value_billions: Decimal = Decimal("0")
    district_count: int = 0
