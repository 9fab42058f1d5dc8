"""District market analytics: latest snapshot, derived metrics, city-wide stats, trends.

Pure functions over MarketSnapshot lists. No I/O.
"""

import re
from decimal import Decimal, ROUND_HALF_UP

from src.models.market import GlobalStats, MarketMetrics, MarketSnapshot, TrendRange

ONE_PLACE = Decimal("0.1")
TWO_PLACES = Decimal("0.01")
WHOLE = Decimal("1")
BILLION = Decimal("1000000000")

ROI_HORIZON_YEARS = 5

_QUARTER_NUMBER = re.compile(r"\s*(\d+)")


def quarter_number(quarter: str | None) -> int:
    """'Q3' -> 3. Missing or unreadable quarters sort as 0."""
    if not quarter:
        return 0
    match = _QUARTER_NUMBER.match(quarter.replace("Q", ""))
    return int(match.group(1)) if match else 0


def snapshot_sort_key(snapshot: MarketSnapshot) -> tuple[int, int]:
    return snapshot.year, quarter_number(snapshot.quarter)


def newest_first(snapshots: list[MarketSnapshot]) -> list[MarketSnapshot]:
    """Descending year, then descending quarter. Ties keep input order."""
    return sorted(snapshots, key=snapshot_sort_key, reverse=True)


def latest_snapshot(snapshots: list[MarketSnapshot]) -> MarketSnapshot | None:
    if not snapshots:
        return None
    return newest_first(snapshots)[0]


def effective_gross_yield(snapshot: MarketSnapshot) -> Decimal | None:
    """Reported gross yield, or annual new-lease rent / price per sqm when missing."""
    if snapshot.gross_yield is not None:
        return snapshot.gross_yield
    if snapshot.avg_rent_new and snapshot.avg_price_per_sqm:
        return snapshot.avg_rent_new / snapshot.avg_price_per_sqm * 100
    return None


def five_year_roi(gross_yield: Decimal, capital_growth: Decimal) -> Decimal:
    """Simplified 5-year ROI (%): flat rent return plus compounded appreciation."""
    rent_return = gross_yield / 100 * ROI_HORIZON_YEARS
    appreciation = (1 + capital_growth / 100) ** ROI_HORIZON_YEARS - 1
    return (rent_return + appreciation) * 100


def calculate_market_metrics(snapshots: list[MarketSnapshot]) -> MarketMetrics:
    """Headline metrics computed from a district's most recent snapshot."""
    latest = latest_snapshot(snapshots)
    if latest is None:
        return MarketMetrics()

    gross_yield = effective_gross_yield(latest)
    capital_growth = latest.price_change_percent

    roi = None
    if latest.avg_price_per_sqm and gross_yield is not None and capital_growth is not None:
        roi = five_year_roi(gross_yield, capital_growth)

    def _round(value: Decimal | None) -> Decimal | None:
        return None if value is None else value.quantize(TWO_PLACES, ROUND_HALF_UP)

    return MarketMetrics(
        gross_yield=_round(gross_yield),
        capital_growth=_round(capital_growth),
        price_per_sqm=latest.avg_price_per_sqm,
        roi_5_year=_round(roi),
    )


def aggregate_global_stats(snapshots: list[MarketSnapshot], year: int) -> GlobalStats | None:
    """City-wide averages and totals for a year.

    Falls back to the latest year with data when the requested year has none.
    Missing metrics count as zero.
    """
    year_stats = [s for s in snapshots if s.year == year]
    if not year_stats:
        if not snapshots:
            return None
        return aggregate_global_stats(snapshots, max(s.year for s in snapshots))

    count = len(year_stats)
    avg_price = sum((s.avg_price_per_sqm or Decimal("0")) for s in year_stats) / count
    avg_yield = sum((s.gross_yield or Decimal("0")) for s in year_stats) / count
    avg_growth = sum((s.price_change_percent or Decimal("0")) for s in year_stats) / count
    total_value = sum((s.transaction_value or Decimal("0")) for s in year_stats)

    return GlobalStats(
        year=year,
        avg_price_per_sqm=avg_price.quantize(WHOLE, ROUND_HALF_UP),
        avg_yield=avg_yield.quantize(ONE_PLACE, ROUND_HALF_UP),
        avg_growth=avg_growth.quantize(ONE_PLACE, ROUND_HALF_UP),
        total_transactions=sum((s.transaction_volume or 0) for s in year_stats),
        total_value_billions=(Decimal(total_value) / BILLION).quantize(ONE_PLACE, ROUND_HALF_UP),
        district_count=count,
    )


def filter_trends(
    snapshots: list[MarketSnapshot], trend_range: TrendRange, current_year: int
) -> list[MarketSnapshot]:
    """Snapshots inside a chart range, oldest first.

    Data is quarterly at best, so 3M and 6M map to the newest one and two
    snapshots.
    """
    ordered = newest_first(snapshots)

    if trend_range is TrendRange.THREE_MONTHS:
        selected = ordered[:1]
    elif trend_range is TrendRange.SIX_MONTHS:
        selected = ordered[:2]
    elif trend_range is TrendRange.ONE_YEAR:
        selected = [s for s in ordered if s.year >= current_year - 1]
    elif trend_range is TrendRange.THREE_YEARS:
        selected = [s for s in ordered if s.year >= current_year - 3]
    else:
        selected = ordered

    return list(reversed(selected))
