"""EncodedArgs: the 55-byte pool lock argument layout.

    [0..2)   reserved prefix, must be 0x0000
    [2..34)  code hash of the curve script
    [34..35) hash type tag
    [35..39) steepness k, u32 little-endian
    [39..55) total supply, u128 little-endian

The layout is wire-compatible with existing pools. Decoding is strict:
any other length, a non-zero prefix or an unknown tag is rejected, so two
distinct byte strings never decode to the same parameters.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from bonding_curve.codec.script import HashType, bytes_from_hex
from bonding_curve.constants import (
    ARGS_PREFIX,
    ARGS_SIZE,
    CODE_HASH_OFFSET,
    CODE_HASH_SIZE,
    HASH_TYPE_OFFSET,
    K_OFFSET,
    K_SIZE,
    TOTAL_SUPPLY_OFFSET,
    TOTAL_SUPPLY_SIZE,
    U32_MAX,
    U128_MAX,
)
from bonding_curve.errors import MalformedArgs
from bonding_curve.models.pool import CurveParameters

logger = structlog.get_logger()

__all__ = ["PoolArgs", "decode_parameters"]


@dataclass(frozen=True)
class PoolArgs:
    """Decoded pool lock arguments.

    Attributes:
        code_hash: Embedded reference to the curve script code
        hash_type: How code_hash is resolved
        k: Curve steepness
        total_supply: Maximum issuable tokens
    """

    code_hash: bytes
    hash_type: HashType
    k: int
    total_supply: int

    def __post_init__(self) -> None:
        if len(self.code_hash) != CODE_HASH_SIZE:
            raise MalformedArgs(
                f"code_hash must be {CODE_HASH_SIZE} bytes, got {len(self.code_hash)}"
            )
        if not isinstance(self.hash_type, HashType):
            object.__setattr__(self, "hash_type", HashType.from_byte(self.hash_type))
        if not 0 <= self.k <= U32_MAX:
            raise MalformedArgs(f"k overflows u32: {self.k}")
        if not 0 <= self.total_supply <= U128_MAX:
            raise MalformedArgs(f"total_supply overflows u128: {self.total_supply}")

    @property
    def parameters(self) -> CurveParameters:
        return CurveParameters(k=self.k, total_supply=self.total_supply)

    def encode(self) -> bytes:
        """Serialize to the 55-byte layout."""
        return (
            ARGS_PREFIX
            + self.code_hash
            + bytes([int(self.hash_type)])
            + self.k.to_bytes(K_SIZE, "little")
            + self.total_supply.to_bytes(TOTAL_SUPPLY_SIZE, "little")
        )

    @classmethod
    def decode(cls, data: bytes | str) -> PoolArgs:
        """Parse the 55-byte layout.

        Raises:
            MalformedArgs: On wrong length, non-zero prefix or unknown tag
        """
        try:
            data = bytes_from_hex(data)
        except ValueError as err:
            raise MalformedArgs(f"Args are not valid hex: {data!r}") from err

        if len(data) != ARGS_SIZE:
            logger.debug("malformed_args_length", length=len(data), expected=ARGS_SIZE)
            raise MalformedArgs(f"Args must be {ARGS_SIZE} bytes, got {len(data)}")
        if data[:CODE_HASH_OFFSET] != ARGS_PREFIX:
            raise MalformedArgs(f"Args prefix must be 0x0000, got 0x{data[:CODE_HASH_OFFSET].hex()}")

        return cls(
            code_hash=data[CODE_HASH_OFFSET:HASH_TYPE_OFFSET],
            hash_type=HashType.from_byte(data[HASH_TYPE_OFFSET]),
            k=int.from_bytes(data[K_OFFSET:TOTAL_SUPPLY_OFFSET], "little"),
            total_supply=int.from_bytes(data[TOTAL_SUPPLY_OFFSET:ARGS_SIZE], "little"),
        )


def decode_parameters(data: bytes | str) -> CurveParameters:
    """Decode CurveParameters from an EncodedArgs payload.

    Raises:
        MalformedArgs: If the payload is malformed
    """
    return PoolArgs.decode(data).parameters
