"""Error classes for the bonding-curve engine.

Codec and curve errors are raised to the caller. Validation errors are
additionally mapped to a RejectionKind so the validator can report a
single terminal outcome per transition.
"""

from __future__ import annotations

from enum import Enum


class RejectionKind(str, Enum):
    """Terminal rejection outcomes of a transition validation."""

    MALFORMED_ARGS = "malformed_args"
    MALFORMED_STATE = "malformed_state"
    POOL_CELL_NOT_FOUND = "pool_cell_not_found"
    AMBIGUOUS_POOL_CELL = "ambiguous_pool_cell"
    IMMUTABLE_PARAMETER_CHANGED = "immutable_parameter_changed"
    INVALID_POOL_CELL_DATA = "invalid_pool_cell_data"
    PRICE_EXCHANGE_NOT_MET = "price_exchange_not_met"
    REDEMPTION_EXCEEDS_ENTITLEMENT = "redemption_exceeds_entitlement"

    @property
    def code(self) -> int:
        """Stable numeric exit code reported to the verification framework."""
        return _REJECTION_CODES[self]


_REJECTION_CODES = {
    RejectionKind.MALFORMED_ARGS: 1,
    RejectionKind.MALFORMED_STATE: 2,
    RejectionKind.POOL_CELL_NOT_FOUND: 3,
    RejectionKind.AMBIGUOUS_POOL_CELL: 4,
    RejectionKind.IMMUTABLE_PARAMETER_CHANGED: 5,
    RejectionKind.INVALID_POOL_CELL_DATA: 6,
    RejectionKind.PRICE_EXCHANGE_NOT_MET: 7,
    RejectionKind.REDEMPTION_EXCEEDS_ENTITLEMENT: 8,
}


class BondingCurveError(Exception):
    """Base error for bonding-curve operations."""

    pass


# =============================================================================
# Codec errors
# =============================================================================


class CodecError(BondingCurveError, ValueError):
    """Base error for fixed-width layout decoding and encoding."""

    kind: RejectionKind = RejectionKind.MALFORMED_ARGS


class MalformedArgs(CodecError):
    """EncodedArgs payload has the wrong width or an out-of-range field."""

    kind = RejectionKind.MALFORMED_ARGS


class MalformedState(CodecError):
    """State payload has the wrong width or an out-of-range value."""

    kind = RejectionKind.MALFORMED_STATE


# =============================================================================
# Curve errors
# =============================================================================


class CurveError(BondingCurveError):
    """Base error for pricing-curve computations."""

    pass


class CurveDomainError(CurveError, ValueError):
    """An argument lies outside the domain of the pricing function."""

    pass


class PurchaseExceedsRemaining(CurveError):
    """Purchase amount is larger than the supply still available."""

    pass


class RedemptionExceedsCirculating(CurveError):
    """Redemption amount is larger than the currently circulating supply."""

    pass


# =============================================================================
# Validation errors
# =============================================================================


class ValidationError(BondingCurveError):
    """Base error for transition rejections."""

    kind: RejectionKind


class PoolCellNotFound(ValidationError):
    """No cell carries the pool identity on one side of the transaction."""

    kind = RejectionKind.POOL_CELL_NOT_FOUND


class AmbiguousPoolCell(ValidationError):
    """More than one cell carries the pool identity on one side."""

    kind = RejectionKind.AMBIGUOUS_POOL_CELL


class ImmutableParameterChanged(ValidationError):
    """Steepness or total supply differs between the two pool cells."""

    kind = RejectionKind.IMMUTABLE_PARAMETER_CHANGED


class InvalidPoolCellData(ValidationError):
    """Remaining supply is out of bounds or the pool cell is not a token cell."""

    kind = RejectionKind.INVALID_POOL_CELL_DATA


class PriceExchangeNotMet(ValidationError):
    """Issuance paid less collateral into the pool than the curve requires."""

    kind = RejectionKind.PRICE_EXCHANGE_NOT_MET


class RedemptionExceedsEntitlement(ValidationError):
    """Redemption took more collateral out of the pool than the curve allows."""

    kind = RejectionKind.REDEMPTION_EXCEEDS_ENTITLEMENT


__all__ = [
    "RejectionKind",
    "BondingCurveError",
    "CodecError",
    "MalformedArgs",
    "MalformedState",
    "CurveError",
    "CurveDomainError",
    "PurchaseExceedsRemaining",
    "RedemptionExceedsCirculating",
    "ValidationError",
    "PoolCellNotFound",
    "AmbiguousPoolCell",
    "ImmutableParameterChanged",
    "InvalidPoolCellData",
    "PriceExchangeNotMet",
    "RedemptionExceedsEntitlement",
]
