"""Tests for the HTTP adapter over the engine."""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from src.api.app import app


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def simulator_form() -> dict:
    return {
        "purchase_price": "1,500,000",
        "down_payment": "375000",
        "annual_rent": 90000,
        "annual_charges": "15000",
        "vacancy_rate_pct": "5",
        "resale_value": "1800000",
        "holding_years": "5",
    }


def _snapshot(district_id: int, year: int, quarter: str, gross_yield: float, change: float) -> dict:
    return {
        "district_id": district_id,
        "year": year,
        "quarter": quarter,
        "gross_yield": gross_yield,
        "price_change_percent": change,
        "avg_price_per_sqm": 15000,
    }


class TestHealth:
    def test_ok(self, client):
        assert client.get("/health").json() == {"status": "ok"}


class TestSimulatorRoute:
    def test_run(self, client, simulator_form):
        resp = client.post("/api/v1/simulator/run", json=simulator_form)
        assert resp.status_code == 200
        result = resp.json()["result"]
        assert Decimal(result["gross_yield_pct"]) == Decimal("6.0")
        assert Decimal(result["roi_pct"]) == Decimal("174.0")
        assert Decimal(result["total_return"]) == Decimal("652500")
        assert result["irr_converged"] is True
        assert [p["year"] for p in result["projections"]] == [1, 2, 3, 4, 5]

    def test_no_price_gives_null_result(self, client, simulator_form):
        simulator_form["purchase_price"] = ""
        resp = client.post("/api/v1/simulator/run", json=simulator_form)
        assert resp.status_code == 200
        assert resp.json() == {"result": None}

    def test_fractional_holding_years_truncated(self, client):
        resp = client.post(
            "/api/v1/simulator/run",
            json={
                "purchase_price": 1000000,
                "down_payment": 200000,
                "annual_rent": 60000,
                "holding_years": 2.5,
            },
        )
        assert resp.status_code == 200
        assert [p["year"] for p in resp.json()["result"]["projections"]] == [1, 2]

    def test_zero_down_payment_is_bad_request(self, client, simulator_form):
        simulator_form["down_payment"] = "0"
        resp = client.post("/api/v1/simulator/run", json=simulator_form)
        assert resp.status_code == 400


class TestOpportunityRoutes:
    def test_score(self, client):
        resp = client.post(
            "/api/v1/opportunities/score",
            json={"snapshot": _snapshot(1, 2025, "Q4", 7.8, 15.3), "supply_risk": "high"},
        )
        assert resp.status_code == 200
        body = resp.json()
        assert Decimal(body["attractiveness_score"]) == Decimal("7.8")
        assert body["recommendation"] == "Buy recommended"
        assert body["investor_profile"] == "Buy-to-Let"

    def test_rank(self, client):
        resp = client.post(
            "/api/v1/opportunities/rank",
            json={
                "districts": [
                    {
                        "district_id": 1,
                        "snapshots": [_snapshot(1, 2025, "Q4", 4.0, 2.0)],
                        "supply_pipeline": [
                            {"district_id": 1, "year": 2025, "supply_risk_level": "high"}
                        ],
                    },
                    {
                        "district_id": 2,
                        "snapshots": [
                            _snapshot(2, 2024, "Q4", 3.0, 1.0),
                            _snapshot(2, 2025, "Q2", 8.0, 15.0),
                        ],
                    },
                    {"district_id": 3, "snapshots": []},
                ]
            },
        )
        assert resp.status_code == 200
        ranked = resp.json()
        assert [o["district_id"] for o in ranked] == [2, 1]
        assert ranked[0]["year"] == 2025


class TestMarketRoutes:
    def test_metrics(self, client):
        resp = client.post(
            "/api/v1/market/metrics",
            json={"snapshots": [_snapshot(1, 2024, "Q4", 6.0, 10.0), _snapshot(1, 2025, "Q1", 5.0, 10.0)]},
        )
        assert resp.status_code == 200
        assert Decimal(resp.json()["gross_yield"]) == Decimal("5.00")
        assert Decimal(resp.json()["roi_5_year"]) == Decimal("86.05")

    def test_global_falls_back_to_latest_year(self, client):
        resp = client.post(
            "/api/v1/market/global",
            json={"snapshots": [_snapshot(1, 2023, "Q4", 6.0, 10.0)], "year": 2025},
        )
        assert resp.status_code == 200
        assert resp.json()["year"] == 2023

    def test_global_without_data(self, client):
        resp = client.post("/api/v1/market/global", json={"snapshots": []})
        assert resp.status_code == 200
        assert resp.json() is None

    def test_trends(self, client):
        resp = client.post(
            "/api/v1/market/trends",
            json={
                "snapshots": [_snapshot(1, 2025, "Q4", 6.0, 1.0), _snapshot(1, 2025, "Q1", 6.0, 1.0)],
                "range": "6M",
                "current_year": 2025,
            },
        )
        assert [s["quarter"] for s in resp.json()] == ["Q1", "Q4"]

    def test_validate_advisory(self, client):
        resp = client.post("/api/v1/market/validate", json={"record": {"grossYield": 42}})
        assert resp.status_code == 200
        assert resp.json() == {"warnings": ["Suspicious Gross Yield: 42%"]}

    def test_validate_non_numeric_value(self, client):
        resp = client.post("/api/v1/market/validate", json={"record": {"grossYield": "n/a"}})
        assert resp.status_code == 200
        assert resp.json() == {"warnings": ["Non-numeric Gross Yield: n/a"]}

    def test_validate_strict(self, client):
        resp = client.post(
            "/api/v1/market/validate",
            json={"record": {"priceChangePercent": 140}, "strict": True},
        )
        assert resp.status_code == 422
