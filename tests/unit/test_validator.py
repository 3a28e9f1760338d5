"""Tests for the pool transition validator."""

import math

import pytest

from bonding_curve.codec.script import Script, ckb_hash
from bonding_curve.errors import (
    AmbiguousPoolCell,
    ImmutableParameterChanged,
    InvalidPoolCellData,
    MalformedArgs,
    MalformedState,
    PoolCellNotFound,
    PriceExchangeNotMet,
    RedemptionExceedsEntitlement,
    RejectionKind,
)
from bonding_curve.math.curve import purchase_cost, redemption_return
from bonding_curve.models.pool import CurveParameters, PoolState
from bonding_curve.models.transaction import Cell, Transition
from bonding_curve.validator import (
    ValidationResult,
    check_transition,
    locate_pool_cells,
    validate_transaction,
    validate_transition,
)
from tests.helpers import (
    K,
    POOL_CAPACITY,
    TOTAL_SUPPLY,
    make_pool_args,
    make_pool_cell,
    make_pool_lock,
    make_transaction,
    make_transition,
    make_user_lock,
)


def required_units(amount: int, remaining: int, total_supply: int = 255, k: int = 1) -> int:
    return math.ceil(purchase_cost(amount, remaining, total_supply, k) * 10**8)


def entitled_units(amount: int, remaining: int, total_supply: int = 255, k: int = 1) -> int:
    return math.floor(redemption_return(amount, remaining, total_supply, k) * 10**8)


class TestIssuance:
    """Remaining decreases: the pool must be paid at least the curve cost."""

    def test_exact_payment_accepted(self):
        """Purchase of 2 from a fresh k=1 pool with the rounded-up cost."""
        delta = required_units(2, 255)
        transition = make_transition(255, 253, POOL_CAPACITY, POOL_CAPACITY + delta)
        result = validate_transition(transition)
        assert result.accepted
        assert result.rejection is None
        assert result.code == 0

    def test_one_unit_short_rejected(self):
        delta = required_units(2, 255) - 1
        transition = make_transition(255, 253, POOL_CAPACITY, POOL_CAPACITY + delta)
        result = validate_transition(transition)
        assert not result.accepted
        assert result.rejection is RejectionKind.PRICE_EXCHANGE_NOT_MET

    def test_priced_purchase_exact_accepted(self):
        """Purchase of 5 at s0=5, where the curve charges a positive price."""
        delta = required_units(5, 250)
        assert delta > 0
        transition = make_transition(250, 245, POOL_CAPACITY, POOL_CAPACITY + delta)
        assert validate_transition(transition).accepted

    def test_priced_purchase_short_rejected(self):
        delta = required_units(5, 250) - 1
        transition = make_transition(250, 245, POOL_CAPACITY, POOL_CAPACITY + delta)
        with pytest.raises(PriceExchangeNotMet):
            check_transition(transition)

    def test_overpayment_accepted(self):
        """Paying more than the curve requires is allowed."""
        delta = required_units(5, 250) + 10**8
        transition = make_transition(250, 245, POOL_CAPACITY, POOL_CAPACITY + delta)
        assert validate_transition(transition).accepted

    def test_collateral_leaving_pool_on_issuance_rejected(self):
        transition = make_transition(250, 245, POOL_CAPACITY, POOL_CAPACITY - 1)
        result = validate_transition(transition)
        assert result.rejection is RejectionKind.PRICE_EXCHANGE_NOT_MET

    def test_full_issuance(self):
        delta = required_units(255, 255)
        transition = make_transition(255, 0, POOL_CAPACITY, POOL_CAPACITY + delta)
        assert validate_transition(transition).accepted


class TestRedemption:
    """Remaining increases: the pool may pay out at most the curve return."""

    def test_exact_payout_accepted(self):
        """Redemption of 5 from remaining 250 back to 255."""
        payout = entitled_units(5, 250)
        transition = make_transition(250, 255, POOL_CAPACITY, POOL_CAPACITY - payout)
        result = validate_transition(transition)
        assert result.accepted

    def test_one_unit_over_rejected(self):
        payout = entitled_units(5, 250) + 1
        transition = make_transition(250, 255, POOL_CAPACITY, POOL_CAPACITY - payout)
        result = validate_transition(transition)
        assert not result.accepted
        assert result.rejection is RejectionKind.REDEMPTION_EXCEEDS_ENTITLEMENT
        assert result.code == RejectionKind.REDEMPTION_EXCEEDS_ENTITLEMENT.code

    def test_underpayment_accepted(self):
        """The pool may keep more than it has to."""
        payout = entitled_units(5, 250) // 2
        transition = make_transition(250, 255, POOL_CAPACITY, POOL_CAPACITY - payout)
        assert validate_transition(transition).accepted

    def test_pool_gaining_on_redemption_accepted(self):
        transition = make_transition(250, 255, POOL_CAPACITY, POOL_CAPACITY + 5)
        assert validate_transition(transition).accepted

    def test_raises_specific_error(self):
        payout = entitled_units(3, 240) + 1
        transition = make_transition(240, 243, POOL_CAPACITY, POOL_CAPACITY - payout)
        with pytest.raises(RedemptionExceedsEntitlement):
            check_transition(transition)


class TestNoOp:
    """Unchanged remaining is accepted whatever the collateral does."""

    @pytest.mark.parametrize("delta", [0, 1, -1, 10**9, -(10**9)])
    def test_noop_accepted(self, delta):
        transition = make_transition(200, 200, POOL_CAPACITY, POOL_CAPACITY + delta)
        assert validate_transition(transition).accepted


class TestImmutableParameters:
    """k and total supply must not change across a transition."""

    def test_k_changed(self):
        delta = required_units(5, 250)
        transition = make_transition(250, 245, POOL_CAPACITY, POOL_CAPACITY + delta, k_after=2)
        result = validate_transition(transition)
        assert result.rejection is RejectionKind.IMMUTABLE_PARAMETER_CHANGED

    def test_total_supply_changed(self):
        transition = make_transition(
            250, 245, POOL_CAPACITY, POOL_CAPACITY + 10**12, total_supply_after=256
        )
        with pytest.raises(ImmutableParameterChanged):
            check_transition(transition)

    def test_changed_on_noop_still_rejected(self):
        """Parameter equality is checked before the no-op short-circuit."""
        transition = make_transition(200, 200, k_after=3)
        assert validate_transition(transition).rejection is (
            RejectionKind.IMMUTABLE_PARAMETER_CHANGED
        )


class TestBounds:
    def test_remaining_before_above_supply(self):
        transition = make_transition(256, 250)
        result = validate_transition(transition)
        assert result.rejection is RejectionKind.INVALID_POOL_CELL_DATA

    def test_remaining_after_above_supply(self):
        transition = make_transition(250, 300)
        with pytest.raises(InvalidPoolCellData):
            check_transition(transition)

    def test_remaining_at_total_supply_is_within(self):
        """A fresh pool (remaining == total supply) passes the bounds check."""
        params = CurveParameters(k=K, total_supply=TOTAL_SUPPLY)
        assert PoolState(remaining=TOTAL_SUPPLY).is_within(params)
        assert not PoolState(remaining=TOTAL_SUPPLY + 1).is_within(params)
        assert validate_transition(make_transition(TOTAL_SUPPLY, TOTAL_SUPPLY)).accepted

    def test_out_of_bounds_noop_rejected(self):
        """Bounds are checked before the no-op short-circuit."""
        transition = make_transition(300, 300)
        assert not validate_transition(transition).accepted


class TestMalformedPayloads:
    def test_short_args(self):
        transition = Transition(
            args_before=make_pool_args()[:54],
            args_after=make_pool_args(),
            state_before=(250).to_bytes(16, "little"),
            state_after=(245).to_bytes(16, "little"),
            collateral_before=0,
            collateral_after=0,
        )
        result = validate_transition(transition)
        assert result.rejection is RejectionKind.MALFORMED_ARGS
        with pytest.raises(MalformedArgs):
            check_transition(transition)

    def test_short_state(self):
        transition = Transition(
            args_before=make_pool_args(),
            args_after=make_pool_args(),
            state_before=(250).to_bytes(16, "little"),
            state_after=(245).to_bytes(15, "little"),
            collateral_before=0,
            collateral_after=0,
        )
        result = validate_transition(transition)
        assert result.rejection is RejectionKind.MALFORMED_STATE
        with pytest.raises(MalformedState):
            check_transition(transition)


class TestLocate:
    """Locating exactly one pool cell on each side."""

    def test_locates_among_other_cells(self, pool_lock):
        before = make_pool_cell(pool_lock, 255)
        after = make_pool_cell(pool_lock, 253)
        other = Cell(capacity=10**10, lock=make_user_lock())
        tx = make_transaction([other, before], [after, other])
        assert locate_pool_cells(pool_lock.hash(), tx) == (before, after)

    def test_missing_input(self, pool_lock):
        tx = make_transaction([], [make_pool_cell(pool_lock, 253)])
        with pytest.raises(PoolCellNotFound):
            locate_pool_cells(pool_lock.hash(), tx)

    def test_missing_output(self, pool_lock):
        tx = make_transaction([make_pool_cell(pool_lock, 255)], [])
        result = validate_transaction(pool_lock, tx)
        assert result.rejection is RejectionKind.POOL_CELL_NOT_FOUND

    def test_ambiguous_inputs(self, pool_lock):
        cell = make_pool_cell(pool_lock, 255)
        tx = make_transaction([cell, cell], [make_pool_cell(pool_lock, 253)])
        with pytest.raises(AmbiguousPoolCell):
            locate_pool_cells(pool_lock.hash(), tx)

    def test_ambiguous_outputs(self, pool_lock):
        tx = make_transaction(
            [make_pool_cell(pool_lock, 255)],
            [make_pool_cell(pool_lock, 254), make_pool_cell(pool_lock, 254)],
        )
        result = validate_transaction(pool_lock, tx)
        assert result.rejection is RejectionKind.AMBIGUOUS_POOL_CELL

    def test_untyped_pool_cell(self, pool_lock):
        tx = make_transaction(
            [make_pool_cell(pool_lock, 255)],
            [make_pool_cell(pool_lock, 253, typed=False)],
        )
        result = validate_transaction(pool_lock, tx)
        assert result.rejection is RejectionKind.INVALID_POOL_CELL_DATA


class TestValidateTransaction:
    """The full state machine over a transaction."""

    def test_purchase_accepted(self, pool_lock):
        delta = required_units(5, 250)
        tx = make_transaction(
            [make_pool_cell(pool_lock, 250, POOL_CAPACITY), Cell(capacity=10**11, lock=make_user_lock())],
            [make_pool_cell(pool_lock, 245, POOL_CAPACITY + delta)],
        )
        assert validate_transaction(pool_lock, tx).accepted

    def test_redemption_over_entitlement_rejected(self, pool_lock):
        payout = entitled_units(5, 250) + 1
        tx = make_transaction(
            [make_pool_cell(pool_lock, 250, POOL_CAPACITY)],
            [make_pool_cell(pool_lock, 255, POOL_CAPACITY - payout)],
        )
        result = validate_transaction(pool_lock, tx)
        assert result.rejection is RejectionKind.REDEMPTION_EXCEEDS_ENTITLEMENT

    def test_other_pool_is_not_matched(self, pool_lock):
        other_pool = make_pool_lock(k=2)
        tx = make_transaction(
            [make_pool_cell(other_pool, 250)],
            [make_pool_cell(other_pool, 200)],
        )
        result = validate_transaction(pool_lock, tx)
        assert result.rejection is RejectionKind.POOL_CELL_NOT_FOUND

    def test_custom_resolver_detects_parameter_change(self, pool_lock):
        """A resolver that ignores args lets a tampered output be located."""

        def code_only(script: Script) -> bytes:
            return ckb_hash(script.code_hash + bytes([int(script.hash_type)]))

        tampered = make_pool_lock(k=2)
        tx = make_transaction(
            [make_pool_cell(pool_lock, 250)],
            [make_pool_cell(tampered, 245, POOL_CAPACITY + 10**12)],
        )
        result = validate_transaction(pool_lock, tx, resolver=code_only)
        assert result.rejection is RejectionKind.IMMUTABLE_PARAMETER_CHANGED


class TestValidationResult:
    def test_accept(self):
        result = ValidationResult.accept()
        assert result.accepted and result.code == 0

    def test_reject_codes_are_distinct(self):
        codes = {kind.code for kind in RejectionKind}
        assert len(codes) == len(RejectionKind)
        assert 0 not in codes

    def test_reject_carries_detail(self):
        result = ValidationResult.reject(RejectionKind.PRICE_EXCHANGE_NOT_MET, "short")
        assert not result.accepted
        assert result.detail == "short"
