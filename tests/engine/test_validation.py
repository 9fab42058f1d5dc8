"""Tests for market data sanity checks."""

import logging
from decimal import Decimal

import pytest

from src.engine.validation import (
    SuspiciousMarketData,
    check_snapshot,
    validate_data_consistency,
)
from src.models.market import MarketSnapshot


class TestValidateDataConsistency:
    def test_clean_record(self, high_yield_snapshot):
        assert validate_data_consistency(high_yield_snapshot) == []

    def test_negative_price(self):
        warnings = validate_data_consistency({"avgPricePerSqm": -10})
        assert warnings == ["Price per SQM cannot be negative"]

    @pytest.mark.parametrize("value", [-0.5, 30.5, 45])
    def test_suspicious_yield(self, value):
        warnings = validate_data_consistency({"grossYield": value})
        assert warnings == [f"Suspicious Gross Yield: {Decimal(str(value))}%"]

    @pytest.mark.parametrize("value", [0, 7.8, 30])
    def test_yield_bounds_inclusive(self, value):
        assert validate_data_consistency({"grossYield": value}) == []

    @pytest.mark.parametrize("value", [-50.1, 100.5, 250])
    def test_suspicious_price_change(self, value):
        warnings = validate_data_consistency({"price_change_percent": value})
        assert len(warnings) == 1
        assert warnings[0].startswith("Suspicious Price Change")

    @pytest.mark.parametrize("value", [-50, 0, 100])
    def test_price_change_bounds_inclusive(self, value):
        assert validate_data_consistency({"priceChangePercent": value}) == []

    @pytest.mark.parametrize("value", ["abc", "n/a", float("nan"), "NaN", "Infinity"])
    def test_non_numeric_value_is_flagged(self, value):
        warnings = validate_data_consistency({"grossYield": value})
        assert warnings == [f"Non-numeric Gross Yield: {value}"]

    def test_non_numeric_does_not_hide_other_findings(self):
        warnings = validate_data_consistency(
            {"avgPricePerSqm": "unknown", "priceChangePercent": 140}
        )
        assert warnings == [
            "Non-numeric Price per SQM: unknown",
            "Suspicious Price Change: 140%",
        ]

    def test_missing_fields_are_not_flagged(self):
        assert validate_data_consistency({}) == []

    def test_all_findings_collected(self):
        snapshot = MarketSnapshot(
            district_id=4, year=2025,
            avg_price_per_sqm=Decimal("-1"),
            gross_yield=Decimal("40"),
            price_change_percent=Decimal("-60"),
        )
        assert len(validate_data_consistency(snapshot)) == 3


class TestCheckSnapshot:
    def test_advisory_logs_and_returns(self, caplog):
        record = {"districtName": "Palm Jumeirah", "year": 2025, "grossYield": 35}
        with caplog.at_level(logging.WARNING, logger="src.engine.validation"):
            warnings = check_snapshot(record)
        assert warnings == ["Suspicious Gross Yield: 35%"]
        assert "Palm Jumeirah" in caplog.text

    def test_strict_raises(self):
        snapshot = MarketSnapshot(district_id=2, year=2025, gross_yield=Decimal("31"))
        with pytest.raises(SuspiciousMarketData) as exc_info:
            check_snapshot(snapshot, strict=True)
        assert exc_info.value.warnings == ["Suspicious Gross Yield: 31%"]

    def test_advisory_never_raises_on_unreadable_values(self):
        record = {"districtName": "Deira", "year": 2024, "grossYield": float("nan")}
        assert check_snapshot(record) == ["Non-numeric Gross Yield: nan"]

    def test_strict_passes_clean_record(self, high_yield_snapshot):
        assert check_snapshot(high_yield_snapshot, strict=True) == []
