"""Protocol constants for the bonding-curve pool.

Centralizes wire-layout widths and numeric bounds shared by the codec,
the pricing math and the validator.
"""

# Collateral base units per whole collateral coin (1 CKB = 10^8 shannons)
COLLATERAL_UNIT = 10**8

# Fixed iteration count for the purchase-amount bisection.
# Resolution is remaining / 2^50.
DEFAULT_BISECTION_ITERATIONS = 50

U32_MAX = 2**32 - 1
U64_MAX = 2**64 - 1
U128_MAX = 2**128 - 1

# EncodedArgs layout (byte offsets, little-endian integers)
#   [0..2)   reserved prefix (must be zero)
#   [2..34)  embedded code reference (code hash)
#   [34..35) hash type tag
#   [35..39) steepness k, u32
#   [39..55) total supply, u128
ARGS_PREFIX = b"\x00\x00"
ARGS_PREFIX_SIZE = 2
CODE_HASH_SIZE = 32
HASH_TYPE_SIZE = 1
K_SIZE = 4
TOTAL_SUPPLY_SIZE = 16

CODE_HASH_OFFSET = ARGS_PREFIX_SIZE
HASH_TYPE_OFFSET = CODE_HASH_OFFSET + CODE_HASH_SIZE  # 34
K_OFFSET = HASH_TYPE_OFFSET + HASH_TYPE_SIZE  # 35
TOTAL_SUPPLY_OFFSET = K_OFFSET + K_SIZE  # 39
ARGS_SIZE = TOTAL_SUPPLY_OFFSET + TOTAL_SUPPLY_SIZE  # 55

# State payload: remaining supply, u128
STATE_SIZE = 16

# BLAKE2b personalization used for canonical script hashes
CKB_HASH_PERSONALIZATION = b"ckb-default-hash"
HASH_SIZE = 32

__all__ = [
    "COLLATERAL_UNIT",
    "DEFAULT_BISECTION_ITERATIONS",
    "U32_MAX",
    "U64_MAX",
    "U128_MAX",
    "ARGS_PREFIX",
    "ARGS_PREFIX_SIZE",
    "CODE_HASH_SIZE",
    "HASH_TYPE_SIZE",
    "K_SIZE",
    "TOTAL_SUPPLY_SIZE",
    "CODE_HASH_OFFSET",
    "HASH_TYPE_OFFSET",
    "K_OFFSET",
    "TOTAL_SUPPLY_OFFSET",
    "ARGS_SIZE",
    "STATE_SIZE",
    "CKB_HASH_PERSONALIZATION",
    "HASH_SIZE",
]
