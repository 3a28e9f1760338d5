"""Data models for pools and transactions."""

from bonding_curve.models.pool import CurveParameters, PoolState
from bonding_curve.models.transaction import Cell, TransactionView, Transition

__all__ = [
    "CurveParameters",
    "PoolState",
    "Cell",
    "TransactionView",
    "Transition",
]
