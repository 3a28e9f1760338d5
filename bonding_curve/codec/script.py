"""Lock-script value object and canonical script hashing.

A pool's on-chain identity is the hash of its lock script. The hash is
BLAKE2b-256 (personalization "ckb-default-hash") over the molecule
serialization of the script table:

    u32 total_size | u32 offset[3] | code_hash (32) | hash_type (1) | u32 len | args
"""

from __future__ import annotations

import hashlib
import struct
from dataclasses import dataclass
from enum import IntEnum

from bonding_curve.constants import CKB_HASH_PERSONALIZATION, CODE_HASH_SIZE, HASH_SIZE
from bonding_curve.errors import MalformedArgs

__all__ = [
    "HashType",
    "Script",
    "ckb_hash",
    "script_hash",
    "bytes_from_hex",
]

# Molecule table header: total size + one offset per field
_FIELD_COUNT = 3
_HEADER_SIZE = 4 * (1 + _FIELD_COUNT)


class HashType(IntEnum):
    """How a script's code hash is resolved against deployed code."""

    DATA = 0
    TYPE = 1
    DATA1 = 2
    DATA2 = 4

    @classmethod
    def from_byte(cls, value: int) -> HashType:
        """Parse a hash-type tag byte.

        Raises:
            MalformedArgs: If the tag is not a known hash type
        """
        try:
            return cls(value)
        except ValueError as err:
            raise MalformedArgs(f"Unknown hash type tag: {value:#04x}") from err


def bytes_from_hex(value: str | bytes) -> bytes:
    """Decode a 0x-prefixed (or bare) hex string; bytes pass through.

    Raises:
        ValueError: If the string is not valid hex
    """
    if isinstance(value, bytes | bytearray):
        return bytes(value)
    text = value[2:] if value.startswith(("0x", "0X")) else value
    return bytes.fromhex(text)


def ckb_hash(data: bytes) -> bytes:
    """BLAKE2b-256 with the ckb-default-hash personalization."""
    return hashlib.blake2b(data, digest_size=HASH_SIZE, person=CKB_HASH_PERSONALIZATION).digest()


@dataclass(frozen=True)
class Script:
    """A lock or type script.

    Attributes:
        code_hash: 32-byte reference to the script code
        hash_type: How code_hash is resolved
        args: Script arguments (for a pool lock, the EncodedArgs payload)
    """

    code_hash: bytes
    hash_type: HashType
    args: bytes = b""

    def __post_init__(self) -> None:
        if len(self.code_hash) != CODE_HASH_SIZE:
            raise ValueError(
                f"code_hash must be {CODE_HASH_SIZE} bytes, got {len(self.code_hash)}"
            )
        if not isinstance(self.hash_type, HashType):
            object.__setattr__(self, "hash_type", HashType(self.hash_type))

    def serialize(self) -> bytes:
        """Molecule serialization of the script table."""
        args_field = struct.pack("<I", len(self.args)) + self.args
        fields = [self.code_hash, bytes([int(self.hash_type)]), args_field]

        offsets = []
        cursor = _HEADER_SIZE
        for field in fields:
            offsets.append(cursor)
            cursor += len(field)

        header = struct.pack("<I", cursor) + b"".join(struct.pack("<I", o) for o in offsets)
        return header + b"".join(fields)

    def hash(self) -> bytes:
        """Canonical 32-byte script hash."""
        return ckb_hash(self.serialize())

    @classmethod
    def from_hex(cls, code_hash: str, hash_type: HashType | int | str, args: str = "0x") -> Script:
        """Build a script from hex strings (hash_type may be its name)."""
        if isinstance(hash_type, str):
            hash_type = HashType[hash_type.upper()]
        return cls(
            code_hash=bytes_from_hex(code_hash),
            hash_type=HashType(hash_type),
            args=bytes_from_hex(args),
        )


def script_hash(script: Script) -> bytes:
    """Default pool-identity resolver: the canonical hash of a lock script."""
    return script.hash()
