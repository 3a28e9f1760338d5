"""Fixed-width binary layouts for pool arguments, state and lock scripts."""

from .args import PoolArgs, decode_parameters
from .script import HashType, Script, bytes_from_hex, ckb_hash, script_hash
from .state import decode_pool_state, decode_state, encode_state

__all__ = [
    "PoolArgs",
    "decode_parameters",
    "decode_state",
    "decode_pool_state",
    "encode_state",
    "HashType",
    "Script",
    "bytes_from_hex",
    "ckb_hash",
    "script_hash",
]
