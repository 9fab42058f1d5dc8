"""IRR computation by Newton-Raphson.

Pure functions. No I/O.
"""

import logging
import math
from dataclasses import dataclass
from decimal import Decimal

logger = logging.getLogger(__name__)

INITIAL_GUESS = 0.10
MAX_ITERATIONS = 100
NPV_TOLERANCE = 0.01  # Currency units


@dataclass(frozen=True)
class IrrSolution:
    rate: float  # Decimal fraction, 0.10 = 10%
    converged: bool
    iterations: int


def npv(rate: float, cash_flows: list[float]) -> float:
    """Net present value of annual cash flows, cash_flows[0] at t=0."""
    return sum(cf / (1 + rate) ** t for t, cf in enumerate(cash_flows))


def npv_derivative(rate: float, cash_flows: list[float]) -> float:
    """d(NPV)/d(rate) = sum of -t * CF_t / (1 + rate)^(t + 1)."""
    return sum(-t * cf / (1 + rate) ** (t + 1) for t, cf in enumerate(cash_flows))


def solve_irr(cash_flows: list[Decimal] | list[float]) -> IrrSolution:
    """Find the rate where NPV is within NPV_TOLERANCE of zero.

    cash_flows[0] should be negative (initial equity).
    cash_flows[-1] should include resale proceeds.

    Starts at 10% and takes up to MAX_ITERATIONS Newton steps. When the
    iteration does not converge the last iterate is returned with
    converged=False rather than raising.
    """
    if len(cash_flows) < 2:
        return IrrSolution(rate=0.0, converged=False, iterations=0)

    cf_float = [float(cf) for cf in cash_flows]
    rate = INITIAL_GUESS

    for iteration in range(MAX_ITERATIONS):
        try:
            value = npv(rate, cf_float)
            slope = npv_derivative(rate, cf_float)
        except (ZeroDivisionError, OverflowError):
            logger.debug("IRR iteration left the valid domain at rate=%s", rate)
            return IrrSolution(rate=rate, converged=False, iterations=iteration)

        if abs(value) < NPV_TOLERANCE:
            return IrrSolution(rate=rate, converged=True, iterations=iteration)

        if slope == 0 or not math.isfinite(slope):
            logger.debug("IRR derivative degenerate at rate=%s", rate)
            return IrrSolution(rate=rate, converged=False, iterations=iteration)

        next_rate = rate - value / slope
        if not math.isfinite(next_rate):
            return IrrSolution(rate=rate, converged=False, iterations=iteration)
        rate = next_rate

    logger.debug("IRR did not converge after %d iterations, rate=%s", MAX_ITERATIONS, rate)
    return IrrSolution(rate=rate, converged=False, iterations=MAX_ITERATIONS)
