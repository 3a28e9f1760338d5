"""Logarithmic bonding-curve pricing engine and transition validator."""

from bonding_curve.codec import PoolArgs, Script, decode_parameters, decode_state
from bonding_curve.models import CurveParameters, PoolState, Transition
from bonding_curve.quote import (
    max_purchase_amount,
    quote_purchase,
    quote_redemption,
    solve_purchase_amount,
)
from bonding_curve.validator import ValidationResult, validate_transaction, validate_transition

__version__ = "0.1.0"
__all__ = [
    "CurveParameters",
    "PoolState",
    "Transition",
    "PoolArgs",
    "Script",
    "decode_parameters",
    "decode_state",
    "quote_purchase",
    "quote_redemption",
    "solve_purchase_amount",
    "max_purchase_amount",
    "validate_transition",
    "validate_transaction",
    "ValidationResult",
    "__version__",
]
