"""Transaction snapshots consumed by the validator.

These are supplied by the transaction-assembly layer and owned by the
caller for the duration of a single validation.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from bonding_curve.codec.script import Script
from bonding_curve.constants import U64_MAX


@dataclass(frozen=True)
class Cell:
    """A cell snapshot: collateral capacity, lock, optional type and data.

    Attributes:
        capacity: Collateral held by the cell, in base units (u64)
        lock: Lock script (the pool identity for pool cells)
        type: Type script (the token type for pool cells)
        data: Cell data (the state payload for pool cells)
    """

    capacity: int
    lock: Script
    type: Script | None = None
    data: bytes = b""

    def __post_init__(self) -> None:
        if not 0 <= self.capacity <= U64_MAX:
            raise ValueError(f"capacity must fit in u64, got {self.capacity}")


@dataclass(frozen=True)
class TransactionView:
    """Resolved input cells and output cells of a proposed transaction."""

    inputs: tuple[Cell, ...] = field(default_factory=tuple)
    outputs: tuple[Cell, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Transition:
    """Before/after snapshots of a single pool.

    Attributes:
        args_before: EncodedArgs of the input pool cell
        args_after: EncodedArgs of the output pool cell
        state_before: State payload of the input pool cell
        state_after: State payload of the output pool cell
        collateral_before: Capacity of the input pool cell
        collateral_after: Capacity of the output pool cell
    """

    args_before: bytes
    args_after: bytes
    state_before: bytes
    state_after: bytes
    collateral_before: int
    collateral_after: int

    @classmethod
    def from_cells(cls, before: Cell, after: Cell) -> Transition:
        """Build a transition from the input and output pool cells."""
        return cls(
            args_before=before.lock.args,
            args_after=after.lock.args,
            state_before=before.data,
            state_after=after.data,
            collateral_before=before.capacity,
            collateral_after=after.capacity,
        )
