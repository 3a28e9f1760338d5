"""State payload: the pool's remaining supply as a 16-byte u128 (LE)."""

from __future__ import annotations

from bonding_curve.codec.script import bytes_from_hex
from bonding_curve.constants import STATE_SIZE, U128_MAX
from bonding_curve.errors import MalformedState
from bonding_curve.models.pool import PoolState

__all__ = ["decode_state", "encode_state", "decode_pool_state"]


def decode_state(data: bytes | str) -> int:
    """Decode the remaining supply.

    Raises:
        MalformedState: If the payload is not exactly 16 bytes
    """
    try:
        data = bytes_from_hex(data)
    except ValueError as err:
        raise MalformedState(f"State is not valid hex: {data!r}") from err
    if len(data) != STATE_SIZE:
        raise MalformedState(f"State must be {STATE_SIZE} bytes, got {len(data)}")
    return int.from_bytes(data, "little")


def decode_pool_state(data: bytes | str) -> PoolState:
    """Decode the state payload into a PoolState.

    Raises:
        MalformedState: If the payload is not exactly 16 bytes
    """
    return PoolState(remaining=decode_state(data))


def encode_state(remaining: int) -> bytes:
    """Encode the remaining supply.

    Raises:
        MalformedState: If remaining does not fit in u128
    """
    if not 0 <= remaining <= U128_MAX:
        raise MalformedState(f"remaining overflows u128: {remaining}")
    return remaining.to_bytes(STATE_SIZE, "little")
