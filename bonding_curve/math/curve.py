"""Logarithmic bonding-curve pricing.

The marginal price of the s-th token is k * ln(s). Costs and returns are
the definite integral of that price between the circulating supply before
and after a trade, which has the closed form

    integral k * ln(s) ds = k * (s * ln(s) - s)

so a quote costs O(1) regardless of the trade size.

All arithmetic runs in CURVE_CONTEXT, a fixed-precision Decimal context.
Decimal.ln is correctly rounded, which makes every result a pure function
of its inputs on every platform. The estimator and the validator both
price through this module.
"""

from __future__ import annotations

import decimal
from decimal import Decimal

from bonding_curve.errors import (
    CurveDomainError,
    PurchaseExceedsRemaining,
    RedemptionExceedsCirculating,
)

__all__ = [
    "CURVE_CONTEXT",
    "Number",
    "to_decimal",
    "entropy",
    "marginal_price",
    "purchase_cost",
    "redemption_return",
]

# 80 digits: a u128 supply has 39 digits and s*ln(s) differences for a
# single token must survive the subtraction with 8 fractional digits to spare.
CURVE_CONTEXT = decimal.Context(prec=80, rounding=decimal.ROUND_HALF_EVEN)

ZERO = Decimal(0)

Number = int | Decimal | str | float


def to_decimal(value: Number, name: str = "value") -> Decimal:
    """Convert a numeric input to Decimal.

    Floats go through their shortest repr so 0.1 becomes Decimal("0.1")
    rather than the binary expansion.

    Raises:
        CurveDomainError: If the value is not a finite number
    """
    if isinstance(value, bool):
        raise CurveDomainError(f"{name} must be numeric, got bool")
    try:
        if isinstance(value, float):
            result = Decimal(repr(value))
        else:
            result = Decimal(value)
    except (decimal.InvalidOperation, TypeError, ValueError) as err:
        raise CurveDomainError(f"{name} must be numeric, got {value!r}") from err
    if not result.is_finite():
        raise CurveDomainError(f"{name} must be finite, got {value!r}")
    return result


def entropy(x: Number) -> Decimal:
    """Compute x * ln(x), with the removable singularity at 0 set to 0.

    Raises:
        CurveDomainError: If x is negative
    """
    x = to_decimal(x, "x")
    if x < 0:
        raise CurveDomainError(f"entropy undefined for negative x: {x}")
    if x == 0:
        return ZERO
    with decimal.localcontext(CURVE_CONTEXT):
        return x * x.ln()


def marginal_price(circulating: Number, k: Number) -> Decimal:
    """Instantaneous price k * ln(s) at circulating supply s (0 at s = 0)."""
    s = to_decimal(circulating, "circulating")
    k = _check_k(k)
    if s < 0:
        raise CurveDomainError(f"circulating supply cannot be negative: {s}")
    if s == 0:
        return ZERO
    with decimal.localcontext(CURVE_CONTEXT):
        return k * s.ln()


def purchase_cost(amount: Number, remaining: Number, total_supply: Number, k: Number) -> Decimal:
    """Collateral required to buy `amount` tokens from the pool.

    cost = k * (entropy(s1) - entropy(s0) - amount), where s0 is the
    circulating supply before the purchase and s1 = s0 + amount.

    Negative floating residue near amount = 0 is clamped to zero.

    Args:
        amount: Tokens to purchase, 0 <= amount <= remaining
        remaining: Tokens not yet issued
        total_supply: Maximum issuable tokens
        k: Curve steepness, k >= 0

    Returns:
        Cost in whole collateral units (not rounded)

    Raises:
        CurveDomainError: If an argument is outside its domain
        PurchaseExceedsRemaining: If amount > remaining
    """
    amount, remaining, total_supply, k = _check_args(amount, remaining, total_supply, k)
    if amount > remaining:
        raise PurchaseExceedsRemaining(f"purchase ({amount}) over remaining ({remaining})")

    with decimal.localcontext(CURVE_CONTEXT):
        s0 = total_supply - remaining
        s1 = s0 + amount
        cost = k * (entropy(s1) - entropy(s0) - amount)
    return max(ZERO, cost)


def redemption_return(
    amount: Number, remaining: Number, total_supply: Number, k: Number
) -> Decimal:
    """Collateral returned for redeeming `amount` tokens into the pool.

    ret = k * (entropy(s0) - entropy(s1) + amount), where s0 is the
    circulating supply before the redemption and s1 = s0 - amount.

    Args:
        amount: Tokens to redeem, 0 <= amount <= total_supply - remaining
        remaining: Tokens not yet issued
        total_supply: Maximum issuable tokens
        k: Curve steepness, k >= 0

    Returns:
        Return in whole collateral units (not rounded)

    Raises:
        CurveDomainError: If an argument is outside its domain
        RedemptionExceedsCirculating: If amount exceeds the circulating supply
    """
    amount, remaining, total_supply, k = _check_args(amount, remaining, total_supply, k)

    with decimal.localcontext(CURVE_CONTEXT):
        s0 = total_supply - remaining
        s1 = s0 - amount
        if s1 < 0:
            raise RedemptionExceedsCirculating(f"redemption ({amount}) over ({s0})")
        ret = k * (entropy(s0) - entropy(s1) + amount)
    return max(ZERO, ret)


def _check_k(k: Number) -> Decimal:
    k = to_decimal(k, "k")
    if k < 0:
        raise CurveDomainError(f"steepness k cannot be negative: {k}")
    return k


def _check_args(
    amount: Number, remaining: Number, total_supply: Number, k: Number
) -> tuple[Decimal, Decimal, Decimal, Decimal]:
    amount = to_decimal(amount, "amount")
    remaining = to_decimal(remaining, "remaining")
    total_supply = to_decimal(total_supply, "total_supply")
    k = _check_k(k)

    if amount < 0:
        raise CurveDomainError(f"amount cannot be negative: {amount}")
    if remaining < 0:
        raise CurveDomainError(f"remaining cannot be negative: {remaining}")
    if remaining > total_supply:
        raise CurveDomainError(f"remaining ({remaining}) exceeds total supply ({total_supply})")
    return amount, remaining, total_supply, k
