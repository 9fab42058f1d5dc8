"""Canonical test fixtures used across all engine tests.

Simulator fixture: AED 1.5M apartment, 25% down, AED 90K rent, 5-year hold,
resold at AED 1.8M.
Market fixture: a high-yield district with two years of quarterly stats.
"""

import pytest
from decimal import Decimal

from src.models.market import MarketSnapshot, SupplyPipelineEntry, SupplyRiskLevel
from src.models.simulation import SimulationInputs


@pytest.fixture
def canonical_inputs() -> SimulationInputs:
    """Default values of the simulator screen, as typed text."""
    return SimulationInputs(
        purchase_price="1500000",
        down_payment="375000",
        annual_rent="90000",
        annual_charges="15000",
        vacancy_rate_pct="5",
        resale_value="1800000",
        holding_years="5",
    )


@pytest.fixture
def high_yield_snapshot() -> MarketSnapshot:
    """JVC-like district: 7.8% gross yield, 15.3% price growth."""
    return MarketSnapshot(
        district_id=1,
        year=2025,
        quarter="Q4",
        avg_price_per_sqm=Decimal("12500"),
        price_change_percent=Decimal("15.3"),
        avg_rent_new=Decimal("975"),
        gross_yield=Decimal("7.8"),
        transaction_volume=9800,
        transaction_value=Decimal("11200000000"),
    )


@pytest.fixture
def district_history(high_yield_snapshot) -> list[MarketSnapshot]:
    """Unordered quarterly history ending at 2025 Q4."""
    return [
        MarketSnapshot(district_id=1, year=2024, quarter="Q4", gross_yield=Decimal("7.2"),
                       price_change_percent=Decimal("18.0"), avg_price_per_sqm=Decimal("10800")),
        high_yield_snapshot,
        MarketSnapshot(district_id=1, year=2025, quarter="Q2", gross_yield=Decimal("7.5"),
                       price_change_percent=Decimal("16.1"), avg_price_per_sqm=Decimal("11900")),
        MarketSnapshot(district_id=1, year=2024, quarter="Q2", gross_yield=Decimal("7.0"),
                       price_change_percent=Decimal("20.4"), avg_price_per_sqm=Decimal("10100")),
    ]


@pytest.fixture
def district_pipeline() -> list[SupplyPipelineEntry]:
    return [
        SupplyPipelineEntry(district_id=1, year=2024, units_planned=12000,
                            units_delivered=8500, supply_risk_level=SupplyRiskLevel.MODERATE),
        SupplyPipelineEntry(district_id=1, year=2025, units_planned=15000,
                            units_delivered=9000, supply_risk_level=SupplyRiskLevel.HIGH),
    ]
