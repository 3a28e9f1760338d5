"""Authoritative accept/reject decision for pool state transitions.

A transition is checked in a fixed order, and every call ends in exactly
one outcome:

1. Locate: exactly one pool cell among the inputs and one among the outputs
2. Parameter equality: k and total supply are identical on both sides
3. Bounds: 0 <= remaining <= total supply on both sides
4. No-op: unchanged remaining is accepted without further checks
5. Issuance (remaining decreases): collateral paid in >= rounded-up cost
6. Redemption (remaining increases): collateral paid out <= rounded-down return

The validator is a pure function of its inputs.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

import structlog

from bonding_curve.codec.args import PoolArgs
from bonding_curve.codec.script import Script, script_hash
from bonding_curve.codec.state import decode_pool_state
from bonding_curve.config import DEFAULT_CURVE_CONFIG, CurveConfig
from bonding_curve.errors import (
    AmbiguousPoolCell,
    CodecError,
    ImmutableParameterChanged,
    InvalidPoolCellData,
    PoolCellNotFound,
    PriceExchangeNotMet,
    RedemptionExceedsEntitlement,
    RejectionKind,
    ValidationError,
)
from bonding_curve.math.curve import purchase_cost, redemption_return
from bonding_curve.math.rounding import charge_units, payout_units
from bonding_curve.models.transaction import Cell, TransactionView, Transition

logger = structlog.get_logger()

# Maps a lock script to its canonical identity hash
IdentityResolver = Callable[[Script], bytes]

__all__ = [
    "IdentityResolver",
    "ValidationResult",
    "locate_pool_cells",
    "check_transition",
    "validate_transition",
    "validate_transaction",
]


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one transition.

    Attributes:
        accepted: True if the transition satisfies the curve contract
        rejection: The specific rejection kind when not accepted
        detail: Human-readable reason for a rejection
    """

    accepted: bool
    rejection: RejectionKind | None = None
    detail: str | None = None

    @property
    def code(self) -> int:
        """0 on accept, otherwise the rejection's numeric code."""
        return 0 if self.rejection is None else self.rejection.code

    @classmethod
    def accept(cls) -> ValidationResult:
        return cls(accepted=True)

    @classmethod
    def reject(cls, kind: RejectionKind, detail: str | None = None) -> ValidationResult:
        return cls(accepted=False, rejection=kind, detail=detail)


def _find_single(
    cells: tuple[Cell, ...], identity: bytes, resolver: IdentityResolver, side: str
) -> Cell:
    matches = [cell for cell in cells if resolver(cell.lock) == identity]
    if not matches:
        raise PoolCellNotFound(f"No pool cell found in {side}")
    if len(matches) > 1:
        raise AmbiguousPoolCell(f"{len(matches)} pool cells found in {side}")
    return matches[0]


def locate_pool_cells(
    identity: bytes,
    tx: TransactionView,
    resolver: IdentityResolver = script_hash,
) -> tuple[Cell, Cell]:
    """Find the single input and single output cell carrying the pool identity.

    Args:
        identity: Canonical hash of the pool lock script
        tx: The proposed transaction
        resolver: Maps a lock script to its canonical hash

    Returns:
        Tuple of (input pool cell, output pool cell)

    Raises:
        PoolCellNotFound: If either side has no pool cell
        AmbiguousPoolCell: If either side has more than one pool cell
        InvalidPoolCellData: If a pool cell carries no token type script
    """
    before = _find_single(tx.inputs, identity, resolver, "inputs")
    after = _find_single(tx.outputs, identity, resolver, "outputs")

    for side, cell in (("inputs", before), ("outputs", after)):
        if cell.type is None:
            raise InvalidPoolCellData(f"Pool cell in {side} has no type script")

    logger.debug(
        "pool_cells_located",
        identity="0x" + identity.hex(),
        collateral_before=before.capacity,
        collateral_after=after.capacity,
    )
    return before, after


def check_transition(
    transition: Transition,
    config: CurveConfig = DEFAULT_CURVE_CONFIG,
) -> None:
    """Validate a transition, raising on the first violated rule.

    Raises:
        MalformedArgs: If either args payload does not decode
        MalformedState: If either state payload does not decode
        ImmutableParameterChanged: If k or total supply changed
        InvalidPoolCellData: If a remaining value exceeds total supply
        PriceExchangeNotMet: If an issuance underpays the pool
        RedemptionExceedsEntitlement: If a redemption overdraws the pool
    """
    args_before = PoolArgs.decode(transition.args_before)
    args_after = PoolArgs.decode(transition.args_after)
    params = args_before.parameters
    if args_after.parameters != params:
        raise ImmutableParameterChanged(
            f"Curve parameters changed: {params} -> {args_after.parameters}"
        )

    state_before = decode_pool_state(transition.state_before)
    state_after = decode_pool_state(transition.state_after)
    remaining_before = state_before.remaining
    remaining_after = state_after.remaining
    logger.debug(
        "transition_state",
        k=params.k,
        total_supply=params.total_supply,
        remaining_before=remaining_before,
        remaining_after=remaining_after,
    )

    if not (state_before.is_within(params) and state_after.is_within(params)):
        raise InvalidPoolCellData(
            f"Remaining ({remaining_before} -> {remaining_after}) exceeds "
            f"total supply {params.total_supply}"
        )

    if remaining_before == remaining_after:
        logger.debug("transition_noop")
        return

    if remaining_after < remaining_before:
        amount = remaining_before - remaining_after
        paid_in = transition.collateral_after - transition.collateral_before
        cost = purchase_cost(amount, remaining_before, params.total_supply, params.k)
        required = charge_units(cost, config.collateral_unit)
        logger.debug("issuance_detected", amount=amount, paid_in=paid_in, required=required)
        if paid_in < required:
            raise PriceExchangeNotMet(
                f"Insufficient collateral for issuance of {amount}: "
                f"paid {paid_in}, required {required}"
            )
    else:
        amount = remaining_after - remaining_before
        paid_out = transition.collateral_before - transition.collateral_after
        ret = redemption_return(amount, remaining_before, params.total_supply, params.k)
        entitled = payout_units(ret, config.collateral_unit)
        logger.debug("redemption_detected", amount=amount, paid_out=paid_out, entitled=entitled)
        if paid_out > entitled:
            raise RedemptionExceedsEntitlement(
                f"Excess collateral for redemption of {amount}: "
                f"paid out {paid_out}, entitled {entitled}"
            )


def _result_from_error(err: ValidationError | CodecError) -> ValidationResult:
    logger.warning("transition_rejected", kind=err.kind.value, detail=str(err))
    return ValidationResult.reject(err.kind, str(err))


def validate_transition(
    transition: Transition,
    config: CurveConfig = DEFAULT_CURVE_CONFIG,
) -> ValidationResult:
    """Validate a transition and return its terminal outcome.

    Rejections are returned, not raised. Curve errors that indicate a
    caller-side bug (e.g. a domain error) propagate.
    """
    try:
        check_transition(transition, config)
    except (ValidationError, CodecError) as err:
        return _result_from_error(err)
    return ValidationResult.accept()


def validate_transaction(
    pool_lock: Script,
    tx: TransactionView,
    resolver: IdentityResolver = script_hash,
    config: CurveConfig = DEFAULT_CURVE_CONFIG,
) -> ValidationResult:
    """Run the full state machine for one pool over a proposed transaction."""
    identity = resolver(pool_lock)
    try:
        before, after = locate_pool_cells(identity, tx, resolver)
    except ValidationError as err:
        return _result_from_error(err)
    return validate_transition(Transition.from_cells(before, after), config)
