"""Inversion of the purchase-cost function.

Answers "how many tokens does this budget buy" by bisection over
[0, remaining]. The iteration count is fixed, so running time is bounded
and the result never depends on a floating-point convergence test.

Correctness relies on purchase_cost being non-decreasing in the amount
for a fixed pool state.
"""

from __future__ import annotations

import decimal
from decimal import Decimal

import structlog

from bonding_curve.constants import DEFAULT_BISECTION_ITERATIONS
from bonding_curve.errors import CurveDomainError
from bonding_curve.math.curve import CURVE_CONTEXT, Number, purchase_cost, to_decimal

logger = structlog.get_logger()

__all__ = ["solve_purchase_amount"]


def solve_purchase_amount(
    budget: Number,
    remaining: Number,
    total_supply: Number,
    k: Number,
    iterations: int = DEFAULT_BISECTION_ITERATIONS,
) -> Decimal:
    """Find the largest amount whose purchase cost fits within the budget.

    The search keeps the invariant purchase_cost(low) <= budget and returns
    low, so the answer never overspends. The result is approximate
    (resolution remaining / 2^iterations); round it down before committing
    to an integer token amount.

    Args:
        budget: Collateral available, in whole collateral units
        remaining: Tokens not yet issued
        total_supply: Maximum issuable tokens
        k: Curve steepness
        iterations: Number of bisection steps

    Returns:
        Token amount in [0, remaining]

    Raises:
        CurveDomainError: If budget is negative or iterations is not positive
    """
    budget = to_decimal(budget, "budget")
    remaining = to_decimal(remaining, "remaining")
    if budget < 0:
        raise CurveDomainError(f"budget cannot be negative: {budget}")
    if iterations <= 0:
        raise CurveDomainError(f"iterations must be positive, got {iterations}")

    # Validates the pool state even when there is nothing left to buy
    purchase_cost(0, remaining, total_supply, k)
    if remaining == 0:
        return Decimal(0)

    if purchase_cost(remaining, remaining, total_supply, k) <= budget:
        logger.debug("solve_purchase_amount_exhausts_pool", remaining=str(remaining))
        return remaining

    low = Decimal(0)
    high = remaining
    with decimal.localcontext(CURVE_CONTEXT):
        for _ in range(iterations):
            mid = (low + high) / 2
            if purchase_cost(mid, remaining, total_supply, k) > budget:
                high = mid
            else:
                low = mid

    logger.debug(
        "solve_purchase_amount",
        budget=str(budget),
        remaining=str(remaining),
        amount=str(low),
    )
    return low
