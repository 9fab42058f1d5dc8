"""ROI simulator: yields, cash flow, ROI and IRR over a holding period.

Pure computation. No I/O. Flat rent (no growth) and straight-line value
interpolation between purchase and resale price.
"""

from decimal import Decimal, ROUND_HALF_UP

from src.engine.irr import solve_irr
from src.engine.parsing import parse_amount, parse_years
from src.models.simulation import SimulationInputs, SimulationResult, YearProjection

ONE_PLACE = Decimal("0.1")
WHOLE = Decimal("1")
HUNDRED = Decimal("100")


class InvalidFinancingInput(ValueError):
    """Down payment must be positive to compute ROI and IRR."""


def _pct(value: Decimal) -> Decimal:
    return value.quantize(ONE_PLACE, ROUND_HALF_UP)


def _money(value: Decimal) -> Decimal:
    return value.quantize(WHOLE, ROUND_HALF_UP)


def build_cash_flows(
    down_payment: Decimal, net_annual_rent: Decimal, resale_value: Decimal, years: int
) -> list[Decimal]:
    """Equity out at t=0, flat net rent each year, resale added to the last year."""
    flows = [-down_payment] + [net_annual_rent] * years
    flows[-1] += resale_value
    return flows


def project_years(
    purchase_price: Decimal, net_annual_rent: Decimal, capital_gain: Decimal, years: int
) -> list[YearProjection]:
    projections: list[YearProjection] = []
    for year in range(1, years + 1):
        cumulative_cashflow = net_annual_rent * year
        estimated_value = purchase_price + capital_gain / years * year
        projections.append(
            YearProjection(
                year=year,
                cumulative_cashflow=_money(cumulative_cashflow),
                estimated_value=_money(estimated_value),
                cumulative_total_return=_money(
                    cumulative_cashflow + estimated_value - purchase_price
                ),
            )
        )
    return projections


def simulate(inputs: SimulationInputs) -> SimulationResult | None:
    """Run the ROI simulation.

    Returns None when the purchase price is not positive: there is nothing
    to show yet, which is not an error. Raises InvalidFinancingInput when a
    price is given but the down payment is not positive.
    """
    price = parse_amount(inputs.purchase_price)
    if price <= 0:
        return None

    down = parse_amount(inputs.down_payment)
    rent = parse_amount(inputs.annual_rent)
    charges = parse_amount(inputs.annual_charges)
    vacancy = parse_amount(inputs.vacancy_rate_pct) / HUNDRED
    resale = parse_amount(inputs.resale_value)
    years = parse_years(inputs.holding_years)

    if down <= 0:
        raise InvalidFinancingInput(
            f"Down payment must be positive to compute returns, got {down}"
        )

    effective_rent = rent * (1 - vacancy)
    net_rent = effective_rent - charges

    total_cashflow = net_rent * years
    capital_gain = resale - price
    total_return = total_cashflow + capital_gain

    irr = solve_irr(build_cash_flows(down, net_rent, resale, years))

    return SimulationResult(
        gross_yield_pct=_pct(rent / price * HUNDRED),
        net_yield_pct=_pct(net_rent / price * HUNDRED),
        annual_cashflow=_money(net_rent),
        total_cashflow=_money(total_cashflow),
        capital_gain=_money(capital_gain),
        # Must equal total_cashflow + capital_gain as displayed
        total_return=_money(total_cashflow) + _money(capital_gain),
        roi_pct=_pct(total_return / down * HUNDRED),
        irr_pct=Decimal(repr(round(irr.rate * 100, 1))),
        irr_converged=irr.converged,
        projections=project_years(price, net_rent, capital_gain, years),
    )
