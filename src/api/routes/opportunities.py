"""Investment opportunity scoring routes."""

from fastapi import APIRouter

from src.api.schemas import (
    OpportunityScoreResponse,
    RankRequest,
    RankedOpportunityResponse,
    ScoreRequest,
)
from src.engine.scoring import rank_opportunities, score_district, score_opportunity
from src.models.opportunity import OpportunityScore

router = APIRouter(prefix="/api/v1/opportunities", tags=["opportunities"])


def _score_to_response(score: OpportunityScore) -> OpportunityScoreResponse:
    return OpportunityScoreResponse(
        yield_score=score.yield_score,
        capital_growth_score=score.capital_growth_score,
        supply_risk_score=score.supply_risk_score,
        attractiveness_score=score.attractiveness_score,
        recommendation=score.recommendation.value,
        investor_profile=score.investor_profile.value,
    )


@router.post("/score", response_model=OpportunityScoreResponse)
async def score(req: ScoreRequest):
    """Score one district snapshot."""
    return _score_to_response(score_opportunity(req.snapshot.to_domain(), req.supply_risk))


@router.post("/rank", response_model=list[RankedOpportunityResponse])
async def rank(req: RankRequest):
    """Score each district on its latest snapshot, most attractive first.

    Districts without statistics are left out.
    """
    scored = []
    for district in req.districts:
        opportunity = score_district(
            [s.to_domain() for s in district.snapshots],
            [p.to_domain() for p in district.supply_pipeline],
        )
        if opportunity is not None:
            scored.append(opportunity)

    return [
        RankedOpportunityResponse(
            district_id=o.district_id,
            year=o.year,
            score=_score_to_response(o.score),
        )
        for o in rank_opportunities(scored)
    ]
