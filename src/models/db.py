"""SQLAlchemy ORM models for PostgreSQL persistence.

The engine never touches a session; builders below turn engine results
into rows for whatever store the caller runs.
"""

import json
from dataclasses import asdict
from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    String,
    Integer,
    Numeric,
    DateTime,
    ForeignKey,
    JSON,
    Text,
    func,
)
from sqlalchemy.orm import DeclarativeBase, relationship, Mapped, mapped_column

from src.models.opportunity import RankedOpportunity
from src.models.simulation import SessionId, SimulationInputs, SimulationResult


class Base(DeclarativeBase):
    pass


class DistrictRecord(Base):
    __tablename__ = "districts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())

    name: Mapped[str] = mapped_column(String(100), unique=True)
    name_ar: Mapped[str | None] = mapped_column(String(100), nullable=True)
    category: Mapped[str] = mapped_column(String(50))
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    latitude: Mapped[Decimal | None] = mapped_column(Numeric(10, 7), nullable=True)
    longitude: Mapped[Decimal | None] = mapped_column(Numeric(10, 7), nullable=True)
    dominant_typology: Mapped[str | None] = mapped_column(String(50), nullable=True)
    market_status: Mapped[str] = mapped_column(String(50))
    status_label: Mapped[str] = mapped_column(String(50))

    market_stats: Mapped[list["MarketStatRecord"]] = relationship(back_populates="district")
    opportunities: Mapped[list["InvestmentOpportunityRecord"]] = relationship(
        back_populates="district"
    )


class MarketStatRecord(Base):
    __tablename__ = "market_stats"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())

    district_id: Mapped[int] = mapped_column(ForeignKey("districts.id"), index=True)
    year: Mapped[int] = mapped_column(Integer)
    quarter: Mapped[str | None] = mapped_column(String(2), nullable=True)

    avg_price_per_sqm: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    price_change_percent: Mapped[Decimal | None] = mapped_column(Numeric(6, 2), nullable=True)
    avg_rent_new: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    avg_rent_renewed: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    gross_yield: Mapped[Decimal | None] = mapped_column(Numeric(5, 2), nullable=True)
    net_yield: Mapped[Decimal | None] = mapped_column(Numeric(5, 2), nullable=True)
    transaction_volume: Mapped[int | None] = mapped_column(Integer, nullable=True)
    transaction_value: Mapped[Decimal | None] = mapped_column(Numeric(16, 2), nullable=True)
    avg_price_apartment: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    avg_price_villa: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    off_plan_share: Mapped[Decimal | None] = mapped_column(Numeric(5, 2), nullable=True)
    ready_share: Mapped[Decimal | None] = mapped_column(Numeric(5, 2), nullable=True)

    district: Mapped["DistrictRecord"] = relationship(back_populates="market_stats")


class SupplyPipelineRecord(Base):
    __tablename__ = "supply_pipeline"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())

    district_id: Mapped[int] = mapped_column(ForeignKey("districts.id"), index=True)
    year: Mapped[int] = mapped_column(Integer)
    units_planned: Mapped[int | None] = mapped_column(Integer, nullable=True)
    units_delivered: Mapped[int | None] = mapped_column(Integer, nullable=True)
    major_projects: Mapped[list | None] = mapped_column(JSON, nullable=True)
    supply_risk_level: Mapped[str | None] = mapped_column(String(20), nullable=True)


class InvestmentOpportunityRecord(Base):
    __tablename__ = "investment_opportunities"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())

    district_id: Mapped[int] = mapped_column(ForeignKey("districts.id"), index=True)
    year: Mapped[int] = mapped_column(Integer)
    attractiveness_score: Mapped[Decimal] = mapped_column(Numeric(4, 1))
    yield_score: Mapped[Decimal | None] = mapped_column(Numeric(8, 4), nullable=True)
    capital_growth_score: Mapped[Decimal | None] = mapped_column(Numeric(8, 4), nullable=True)
    supply_risk_score: Mapped[Decimal | None] = mapped_column(Numeric(8, 4), nullable=True)
    recommendation: Mapped[str | None] = mapped_column(String(50), nullable=True)
    investor_profile: Mapped[str | None] = mapped_column(String(50), nullable=True)

    district: Mapped["DistrictRecord"] = relationship(back_populates="opportunities")


class SimulationRecord(Base):
    __tablename__ = "simulations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())

    session_id: Mapped[str] = mapped_column(String(100), index=True)
    name: Mapped[str] = mapped_column(String(200))
    district_name: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # Snapshots (JSON for flexibility)
    inputs: Mapped[dict] = mapped_column(JSON)
    results: Mapped[dict] = mapped_column(JSON)


def _to_json(obj) -> dict:
    return json.loads(json.dumps(asdict(obj), default=str))


def opportunity_record(opportunity: RankedOpportunity) -> InvestmentOpportunityRecord:
    """One row per (district, year)."""
    score = opportunity.score
    return InvestmentOpportunityRecord(
        district_id=opportunity.district_id,
        year=opportunity.year,
        attractiveness_score=score.attractiveness_score,
        yield_score=score.yield_score,
        capital_growth_score=score.capital_growth_score,
        supply_risk_score=score.supply_risk_score,
        recommendation=score.recommendation.value,
        investor_profile=score.investor_profile.value,
    )


def simulation_record(
    session_id: SessionId,
    name: str,
    inputs: SimulationInputs,
    result: SimulationResult,
    district_name: str | None = None,
) -> SimulationRecord:
    """Saved simulation keyed by an opaque session id."""
    return SimulationRecord(
        session_id=session_id,
        name=name,
        district_name=district_name,
        inputs=_to_json(inputs),
        results=_to_json(result),
    )
