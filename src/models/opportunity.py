"""Investment opportunity scoring types."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class Recommendation(Enum):
    BUY = "Buy recommended"
    SELECTIVE = "Selective opportunity"
    CAUTION = "Caution — supply risk"
    OBSERVATION = "Observation"


class InvestorProfile(Enum):
    BUY_TO_LET = "Buy-to-Let"
    CAPITAL_GROWTH = "Capital Growth"
    EXPERIENCED = "Experienced investor"
    LONG_TERM = "Long-term only"
    ALL_PROFILES = "All profiles"


@dataclass(frozen=True)
class OpportunityScore:
    yield_score: Decimal  # 0-10
    capital_growth_score: Decimal  # Capped at 10
    supply_risk_score: Decimal  # 3 / 6 / 9, higher = safer
    attractiveness_score: Decimal  # Weighted composite, 1 dp
    recommendation: Recommendation
    investor_profile: InvestorProfile


@dataclass(frozen=True)
class RankedOpportunity:
    district_id: int
    year: int
    score: OpportunityScore
