"""ROI simulator data types."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import NewType, Union

# Opaque key used by the external simulation store. Never parsed.
SessionId = NewType("SessionId", str)

# Simulator fields arrive either as numbers or as free-form form text.
RawAmount = Union[str, int, float, Decimal, None]


@dataclass(frozen=True)
class SimulationInputs:
    purchase_price: RawAmount = None
    down_payment: RawAmount = None
    annual_rent: RawAmount = None
    annual_charges: RawAmount = None  # Service charges, maintenance, fees
    vacancy_rate_pct: RawAmount = None  # 0-100
    resale_value: RawAmount = None
    holding_years: RawAmount = None


@dataclass(frozen=True)
class YearProjection:
    year: int
    cumulative_cashflow: Decimal = Decimal("0")
    estimated_value: Decimal = Decimal("0")  # Straight line from price to resale
    cumulative_total_return: Decimal = Decimal("0")


@dataclass(frozen=True)
class SimulationResult:
    # Yields (percent, 1 dp)
    gross_yield_pct: Decimal = Decimal("0")
    net_yield_pct: Decimal = Decimal("0")

    # Cash (whole currency units)
    annual_cashflow: Decimal = Decimal("0")
    total_cashflow: Decimal = Decimal("0")
    capital_gain: Decimal = Decimal("0")
    total_return: Decimal = Decimal("0")

    # Returns (percent, 1 dp)
    roi_pct: Decimal = Decimal("0")
    irr_pct: Decimal = Decimal("0")
    irr_converged: bool = True

    projections: list[YearProjection] = field(default_factory=list)
