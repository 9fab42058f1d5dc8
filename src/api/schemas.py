"""Pydantic schemas for API request/response models."""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field

from src.models.market import MarketSnapshot, SupplyPipelineEntry, SupplyRiskLevel, TrendRange


# ---- Shared ----

class MarketSnapshotSchema(BaseModel):
    district_id: int
    year: int
    quarter: str | None = None
    avg_price_per_sqm: Decimal | None = None
    price_change_percent: Decimal | None = None
    avg_rent_new: Decimal | None = None
    avg_rent_renewed: Decimal | None = None
    gross_yield: Decimal | None = None
    net_yield: Decimal | None = None
    transaction_volume: int | None = None
    transaction_value: Decimal | None = None
    avg_price_apartment: Decimal | None = None
    avg_price_villa: Decimal | None = None
    off_plan_share: Decimal | None = None
    ready_share: Decimal | None = None

    def to_domain(self) -> MarketSnapshot:
        return MarketSnapshot(**self.model_dump())


class SupplyPipelineSchema(BaseModel):
    district_id: int
    year: int
    units_planned: int | None = None
    units_delivered: int | None = None
    supply_risk_level: SupplyRiskLevel | None = None

    def to_domain(self) -> SupplyPipelineEntry:
        return SupplyPipelineEntry(**self.model_dump())


# ---- Request schemas ----

class SimulationRequest(BaseModel):
    """Simulator form fields. Text is parsed leniently, unreadable values count as 0."""
    purchase_price: str | Decimal | None = None
    down_payment: str | Decimal | None = None
    annual_rent: str | Decimal | None = None
    annual_charges: str | Decimal | None = None
    vacancy_rate_pct: str | Decimal | None = None
    resale_value: str | Decimal | None = None
    holding_years: str | Decimal | None = None


class ScoreRequest(BaseModel):
    snapshot: MarketSnapshotSchema = Field(..., description="Most recent district snapshot")
    supply_risk: str | None = Field(None, description="low / moderate / high for the same year")


class DistrictMarketData(BaseModel):
    district_id: int
    snapshots: list[MarketSnapshotSchema] = Field(default_factory=list)
    supply_pipeline: list[SupplyPipelineSchema] = Field(default_factory=list)


class RankRequest(BaseModel):
    districts: list[DistrictMarketData]


class SnapshotsRequest(BaseModel):
    snapshots: list[MarketSnapshotSchema]


class GlobalStatsRequest(SnapshotsRequest):
    year: int | None = None


class TrendsRequest(SnapshotsRequest):
    range: TrendRange = TrendRange.ALL
    current_year: int | None = None


class ValidateRequest(BaseModel):
    record: dict[str, Any]
    strict: bool | None = None


# ---- Response schemas ----

class YearProjectionResponse(BaseModel):
    year: int
    cumulative_cashflow: Decimal
    estimated_value: Decimal
    cumulative_total_return: Decimal


class SimulationResponse(BaseModel):
    gross_yield_pct: Decimal
    net_yield_pct: Decimal
    annual_cashflow: Decimal
    total_cashflow: Decimal
    capital_gain: Decimal
    total_return: Decimal
    roi_pct: Decimal
    irr_pct: Decimal
    irr_converged: bool
    projections: list[YearProjectionResponse]


class SimulationEnvelope(BaseModel):
    """`result` is null until a positive purchase price is entered."""
    result: SimulationResponse | None = None


class OpportunityScoreResponse(BaseModel):
    yield_score: Decimal
    capital_growth_score: Decimal
    supply_risk_score: Decimal
    attractiveness_score: Decimal
    recommendation: str
    investor_profile: str


class RankedOpportunityResponse(BaseModel):
    district_id: int
    year: int
    score: OpportunityScoreResponse


class MarketMetricsResponse(BaseModel):
    gross_yield: Decimal | None = None
    capital_growth: Decimal | None = None
    price_per_sqm: Decimal | None = None
    roi_5_year: Decimal | None = None


class GlobalStatsResponse(BaseModel):
    year: int
    avg_price_per_sqm: Decimal
    avg_yield: Decimal
    avg_growth: Decimal
    total_transactions: int
    total_value_billions: Decimal
    district_count: int


class ValidationResponse(BaseModel):
    warnings: list[str]
