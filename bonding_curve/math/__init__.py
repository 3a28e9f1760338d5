"""Pricing math for the bonding-curve pool.

This package provides:
- curve: closed-form purchase cost and redemption return
- rounding: charge-up / pay-down conversion to collateral units
- inverter: budget-to-amount bisection
"""

from bonding_curve.math.curve import (
    CURVE_CONTEXT,
    entropy,
    marginal_price,
    purchase_cost,
    redemption_return,
)
from bonding_curve.math.inverter import solve_purchase_amount
from bonding_curve.math.rounding import charge_units, payout_units, units_to_collateral

__all__ = [
    "CURVE_CONTEXT",
    "entropy",
    "marginal_price",
    "purchase_cost",
    "redemption_return",
    "solve_purchase_amount",
    "charge_units",
    "payout_units",
    "units_to_collateral",
]
