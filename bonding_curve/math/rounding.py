"""Conversion of curve values to integer collateral units.

One rule for every caller: collateral charged to a buyer rounds up,
collateral paid to a seller rounds down. The estimator uses these helpers
to build transactions and the validator uses them to check transactions,
so a quote built from a pool state always validates against that state.
"""

from __future__ import annotations

import decimal
from decimal import ROUND_CEILING, ROUND_FLOOR, Decimal

from bonding_curve.constants import COLLATERAL_UNIT
from bonding_curve.errors import CurveDomainError
from bonding_curve.math.curve import CURVE_CONTEXT, Number, to_decimal

__all__ = ["charge_units", "payout_units", "units_to_collateral"]


def _to_units(value: Number, collateral_unit: int, rounding: str) -> int:
    if collateral_unit <= 0:
        raise CurveDomainError(f"collateral_unit must be positive, got {collateral_unit}")
    value = to_decimal(value, "collateral")
    if value < 0:
        raise CurveDomainError(f"collateral cannot be negative: {value}")
    with decimal.localcontext(CURVE_CONTEXT):
        scaled = value * collateral_unit
        return int(scaled.to_integral_value(rounding=rounding))


def charge_units(value: Number, collateral_unit: int = COLLATERAL_UNIT) -> int:
    """Collateral units to charge for a curve cost, rounded up."""
    return _to_units(value, collateral_unit, ROUND_CEILING)


def payout_units(value: Number, collateral_unit: int = COLLATERAL_UNIT) -> int:
    """Collateral units to pay for a curve return, rounded down."""
    return _to_units(value, collateral_unit, ROUND_FLOOR)


def units_to_collateral(units: int, collateral_unit: int = COLLATERAL_UNIT) -> Decimal:
    """Whole collateral value of an integer amount of base units (exact)."""
    if collateral_unit <= 0:
        raise CurveDomainError(f"collateral_unit must be positive, got {collateral_unit}")
    with decimal.localcontext(CURVE_CONTEXT):
        return Decimal(units) / collateral_unit
