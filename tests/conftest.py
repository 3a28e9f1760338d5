"""Pytest configuration and fixtures."""

import pytest

from bonding_curve.codec.script import Script
from bonding_curve.models.pool import CurveParameters, PoolState
from tests.helpers import K, TOTAL_SUPPLY, make_pool_lock


@pytest.fixture
def params() -> CurveParameters:
    """Curve parameters of the reference pool (k=1, total supply 255)."""
    return CurveParameters(k=K, total_supply=TOTAL_SUPPLY)


@pytest.fixture
def fresh_state() -> PoolState:
    """State of the reference pool before any issuance."""
    return PoolState(remaining=TOTAL_SUPPLY)


@pytest.fixture
def pool_lock() -> Script:
    """Lock script of the reference pool."""
    return make_pool_lock()
