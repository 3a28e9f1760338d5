"""Off-chain estimator interface.

Quotes are expressed in integer collateral units using the same rounding
helpers the validator applies, so a transaction built from a quote against
a given pool state passes validation against that state.
"""

from __future__ import annotations

import math
from decimal import Decimal

import structlog

from bonding_curve.codec.args import decode_parameters
from bonding_curve.codec.state import decode_state
from bonding_curve.config import DEFAULT_CURVE_CONFIG, CurveConfig
from bonding_curve.math.curve import purchase_cost, redemption_return
from bonding_curve.math.inverter import solve_purchase_amount as _solve
from bonding_curve.math.rounding import charge_units, payout_units, units_to_collateral
from bonding_curve.models.pool import CurveParameters, PoolState

logger = structlog.get_logger()

__all__ = [
    "quote_purchase",
    "quote_redemption",
    "solve_purchase_amount",
    "max_purchase_amount",
    "decode_parameters",
    "decode_state",
]


def quote_purchase(
    amount: int,
    state: PoolState,
    params: CurveParameters,
    config: CurveConfig = DEFAULT_CURVE_CONFIG,
) -> int:
    """Collateral units a buyer must add to the pool for `amount` tokens (rounded up).

    Raises:
        PurchaseExceedsRemaining: If amount > state.remaining
    """
    cost = purchase_cost(amount, state.remaining, params.total_supply, params.k)
    units = charge_units(cost, config.collateral_unit)
    logger.debug(
        "quote_purchase",
        amount=amount,
        remaining=state.remaining,
        cost=str(cost),
        units=units,
    )
    return units


def quote_redemption(
    amount: int,
    state: PoolState,
    params: CurveParameters,
    config: CurveConfig = DEFAULT_CURVE_CONFIG,
) -> int:
    """Collateral units the pool pays out for redeeming `amount` tokens (rounded down).

    Raises:
        RedemptionExceedsCirculating: If amount exceeds the circulating supply
    """
    ret = redemption_return(amount, state.remaining, params.total_supply, params.k)
    units = payout_units(ret, config.collateral_unit)
    logger.debug(
        "quote_redemption",
        amount=amount,
        remaining=state.remaining,
        ret=str(ret),
        units=units,
    )
    return units


def solve_purchase_amount(
    budget_units: int,
    state: PoolState,
    params: CurveParameters,
    config: CurveConfig = DEFAULT_CURVE_CONFIG,
) -> Decimal:
    """Approximate token amount a budget of collateral units buys.

    The result is fractional; round it down before use (see
    max_purchase_amount).
    """
    budget = units_to_collateral(budget_units, config.collateral_unit)
    return _solve(
        budget,
        state.remaining,
        params.total_supply,
        params.k,
        iterations=config.bisection_iterations,
    )


def max_purchase_amount(
    budget_units: int,
    state: PoolState,
    params: CurveParameters,
    config: CurveConfig = DEFAULT_CURVE_CONFIG,
) -> int:
    """Largest whole token amount whose rounded-up quote fits the budget.

    The floored bisection result is a lower bound only: its resolution is
    remaining / 2**iterations, which is many whole tokens on a large pool.
    The answer is settled by a binary search on the integer quotes between
    that bound and the remaining supply, so at most 128 quotes are taken.
    """
    low = min(math.floor(solve_purchase_amount(budget_units, state, params, config)), state.remaining)
    if quote_purchase(low, state, params, config) > budget_units:
        low = 0
    high = state.remaining

    # low is always affordable; everything above high is not
    while low < high:
        mid = (low + high + 1) // 2
        if quote_purchase(mid, state, params, config) <= budget_units:
            low = mid
        else:
            high = mid - 1

    logger.debug("max_purchase_amount", budget_units=budget_units, amount=low)
    return low
