"""District investment attractiveness scoring.

Sub-scores (capped at 10):
  Yield:          gross yield against an 8% reference
  Capital growth: YoY price change against a 15% reference
  Supply risk:    discrete, higher supply risk -> lower score

Composite = 35% yield + 35% growth + 30% supply safety, rounded to 1 dp,
then mapped to a recommendation through an ordered rule cascade.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable

from src.engine.market import latest_snapshot
from src.models.market import MarketSnapshot, SupplyPipelineEntry, SupplyRiskLevel
from src.models.opportunity import (
    InvestorProfile,
    OpportunityScore,
    RankedOpportunity,
    Recommendation,
)

logger = logging.getLogger(__name__)

ONE_PLACE = Decimal("0.1")
MAX_SUB_SCORE = Decimal("10")

YIELD_REFERENCE = Decimal("8")  # % gross yield scoring a full 10
GROWTH_REFERENCE = Decimal("15")  # % YoY price change scoring a full 10

YIELD_WEIGHT = Decimal("0.35")
GROWTH_WEIGHT = Decimal("0.35")
SUPPLY_WEIGHT = Decimal("0.30")

BUY_TO_LET_MIN_YIELD = Decimal("7")

SUPPLY_RISK_SCORES: dict[SupplyRiskLevel, Decimal] = {
    SupplyRiskLevel.HIGH: Decimal("3"),
    SupplyRiskLevel.MODERATE: Decimal("6"),
    SupplyRiskLevel.LOW: Decimal("9"),
}


@dataclass(frozen=True)
class RecommendationRule:
    applies: Callable[[Decimal], bool]  # attractiveness -> match
    recommendation: Recommendation
    profile: Callable[[Decimal], InvestorProfile]  # gross yield -> profile


# Evaluated top to bottom, first match wins.
RECOMMENDATION_RULES: tuple[RecommendationRule, ...] = (
    RecommendationRule(
        applies=lambda score: score >= Decimal("7"),
        recommendation=Recommendation.BUY,
        profile=lambda gross_yield: (
            InvestorProfile.BUY_TO_LET
            if gross_yield >= BUY_TO_LET_MIN_YIELD
            else InvestorProfile.CAPITAL_GROWTH
        ),
    ),
    RecommendationRule(
        applies=lambda score: score >= Decimal("5.5"),
        recommendation=Recommendation.SELECTIVE,
        profile=lambda _: InvestorProfile.EXPERIENCED,
    ),
    RecommendationRule(
        applies=lambda score: score < Decimal("4.5"),
        recommendation=Recommendation.CAUTION,
        profile=lambda _: InvestorProfile.LONG_TERM,
    ),
    RecommendationRule(
        applies=lambda score: True,
        recommendation=Recommendation.OBSERVATION,
        profile=lambda _: InvestorProfile.ALL_PROFILES,
    ),
)


def _yield_score(gross_yield: Decimal) -> Decimal:
    return min(MAX_SUB_SCORE, gross_yield / YIELD_REFERENCE * 10)


def _capital_growth_score(price_change_percent: Decimal) -> Decimal:
    """Capped at 10. Price falls give a negative score."""
    return min(MAX_SUB_SCORE, price_change_percent / GROWTH_REFERENCE * 10)


def to_supply_risk_level(value: SupplyRiskLevel | str | None) -> SupplyRiskLevel | None:
    if value is None or isinstance(value, SupplyRiskLevel):
        return value
    try:
        return SupplyRiskLevel(str(value).strip().lower())
    except ValueError:
        logger.warning("Unknown supply risk level %r, scoring as low risk", value)
        return None


def _supply_risk_score(level: SupplyRiskLevel | str | None) -> Decimal:
    """Unclassified districts score as low risk."""
    resolved = to_supply_risk_level(level)
    if resolved is None:
        return SUPPLY_RISK_SCORES[SupplyRiskLevel.LOW]
    return SUPPLY_RISK_SCORES[resolved]


def classify(attractiveness: Decimal, gross_yield: Decimal) -> tuple[Recommendation, InvestorProfile]:
    for rule in RECOMMENDATION_RULES:
        if rule.applies(attractiveness):
            return rule.recommendation, rule.profile(gross_yield)
    raise AssertionError("recommendation rules must end with a catch-all")


def score_opportunity(
    latest: MarketSnapshot, supply_risk: SupplyRiskLevel | str | None
) -> OpportunityScore:
    """Score a district from its most recent snapshot and same-year supply risk.

    Missing snapshot fields are treated as zero.
    """
    gross_yield = latest.gross_yield or Decimal("0")
    price_change = latest.price_change_percent or Decimal("0")

    yield_score = _yield_score(gross_yield)
    growth_score = _capital_growth_score(price_change)
    supply_score = _supply_risk_score(supply_risk)

    attractiveness = (
        yield_score * YIELD_WEIGHT
        + growth_score * GROWTH_WEIGHT
        + supply_score * SUPPLY_WEIGHT
    ).quantize(ONE_PLACE, ROUND_HALF_UP)

    recommendation, profile = classify(attractiveness, gross_yield)

    return OpportunityScore(
        yield_score=yield_score,
        capital_growth_score=growth_score,
        supply_risk_score=supply_score,
        attractiveness_score=attractiveness,
        recommendation=recommendation,
        investor_profile=profile,
    )


def supply_risk_for_year(
    pipeline: list[SupplyPipelineEntry], year: int
) -> SupplyRiskLevel | None:
    for entry in pipeline:
        if entry.year == year:
            return entry.supply_risk_level
    return None


def score_district(
    snapshots: list[MarketSnapshot], pipeline: list[SupplyPipelineEntry]
) -> RankedOpportunity | None:
    """Score a district on its latest snapshot. None when it has no statistics."""
    latest = latest_snapshot(snapshots)
    if latest is None:
        return None
    level = supply_risk_for_year(pipeline, latest.year)
    return RankedOpportunity(
        district_id=latest.district_id,
        year=latest.year,
        score=score_opportunity(latest, level),
    )


def rank_opportunities(opportunities: list[RankedOpportunity]) -> list[RankedOpportunity]:
    """Most attractive first. Ties keep input order."""
    return sorted(
        opportunities, key=lambda o: o.score.attractiveness_score, reverse=True
    )
