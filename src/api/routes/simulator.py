"""ROI simulator routes."""

from fastapi import APIRouter, HTTPException

from src.api.schemas import (
    SimulationRequest,
    SimulationEnvelope,
    SimulationResponse,
    YearProjectionResponse,
)
from src.engine.simulator import InvalidFinancingInput, simulate
from src.models.simulation import SimulationInputs, SimulationResult

router = APIRouter(prefix="/api/v1/simulator", tags=["simulator"])


def _result_to_response(result: SimulationResult) -> SimulationResponse:
    return SimulationResponse(
        gross_yield_pct=result.gross_yield_pct,
        net_yield_pct=result.net_yield_pct,
        annual_cashflow=result.annual_cashflow,
        total_cashflow=result.total_cashflow,
        capital_gain=result.capital_gain,
        total_return=result.total_return,
        roi_pct=result.roi_pct,
        irr_pct=result.irr_pct,
        irr_converged=result.irr_converged,
        projections=[
            YearProjectionResponse(
                year=p.year,
                cumulative_cashflow=p.cumulative_cashflow,
                estimated_value=p.estimated_value,
                cumulative_total_return=p.cumulative_total_return,
            )
            for p in result.projections
        ],
    )


@router.post("/run", response_model=SimulationEnvelope)
async def run_simulation(req: SimulationRequest):
    """Compute yields, cash flow, ROI and IRR for the entered assumptions."""
    inputs = SimulationInputs(**req.model_dump())
    try:
        result = simulate(inputs)
    except InvalidFinancingInput as e:
        raise HTTPException(status_code=400, detail=str(e))

    if result is None:
        return SimulationEnvelope(result=None)
    return SimulationEnvelope(result=_result_to_response(result))
