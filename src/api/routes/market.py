"""Market data routes."""

from dataclasses import asdict
from datetime import date

from fastapi import APIRouter, HTTPException

from src.api.schemas import (
    GlobalStatsRequest,
    GlobalStatsResponse,
    MarketMetricsResponse,
    MarketSnapshotSchema,
    SnapshotsRequest,
    TrendsRequest,
    ValidateRequest,
    ValidationResponse,
)
from src.config import settings
from src.engine.market import aggregate_global_stats, calculate_market_metrics, filter_trends
from src.engine.validation import SuspiciousMarketData, check_snapshot

router = APIRouter(prefix="/api/v1/market", tags=["market"])


@router.post("/metrics", response_model=MarketMetricsResponse)
async def get_metrics(req: SnapshotsRequest):
    """Headline metrics from a district's latest snapshot."""
    metrics = calculate_market_metrics([s.to_domain() for s in req.snapshots])
    return MarketMetricsResponse(**asdict(metrics))


@router.post("/global", response_model=GlobalStatsResponse | None)
async def get_global_stats(req: GlobalStatsRequest):
    """City-wide averages for a year, falling back to the latest year with data."""
    year = req.year or settings.default_market_year
    stats = aggregate_global_stats([s.to_domain() for s in req.snapshots], year)
    if stats is None:
        return None
    return GlobalStatsResponse(**asdict(stats))


@router.post("/trends", response_model=list[MarketSnapshotSchema])
async def get_trends(req: TrendsRequest):
    """Snapshots in the requested range, oldest first for charting."""
    current_year = req.current_year or date.today().year
    selected = filter_trends([s.to_domain() for s in req.snapshots], req.range, current_year)
    return [MarketSnapshotSchema(**asdict(s)) for s in selected]


@router.post("/validate", response_model=ValidationResponse)
async def validate(req: ValidateRequest):
    """Sanity-check a raw statistics record."""
    strict = settings.strict_validation if req.strict is None else req.strict
    try:
        warnings = check_snapshot(req.record, strict=strict)
    except SuspiciousMarketData as e:
        raise HTTPException(status_code=422, detail=e.warnings)
    return ValidationResponse(warnings=warnings)
