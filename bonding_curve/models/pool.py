"""Pool parameter and state value objects."""

from __future__ import annotations

from dataclasses import dataclass

from bonding_curve.constants import U32_MAX, U128_MAX


@dataclass(frozen=True)
class CurveParameters:
    """Immutable per-pool curve parameters.

    Both values are fixed when the pool is created and must be identical
    on every pool cell of the pool.

    Attributes:
        k: Curve steepness (u32)
        total_supply: Maximum issuable token quantity (u128)
    """

    k: int
    total_supply: int

    def __post_init__(self) -> None:
        if not 0 <= self.k <= U32_MAX:
            raise ValueError(f"k must fit in u32, got {self.k}")
        if not 0 <= self.total_supply <= U128_MAX:
            raise ValueError(f"total_supply must fit in u128, got {self.total_supply}")


@dataclass(frozen=True)
class PoolState:
    """Mutable per-pool state, as recorded in the pool cell data.

    Attributes:
        remaining: Tokens not yet issued
    """

    remaining: int

    def __post_init__(self) -> None:
        if not 0 <= self.remaining <= U128_MAX:
            raise ValueError(f"remaining must fit in u128, got {self.remaining}")

    def circulating(self, params: CurveParameters) -> int:
        """Tokens issued to date (total_supply - remaining)."""
        return params.total_supply - self.remaining

    def is_within(self, params: CurveParameters) -> bool:
        """True if 0 <= remaining <= total_supply."""
        return 0 <= self.remaining <= params.total_supply
