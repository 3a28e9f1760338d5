"""Test helpers module for shared test utilities.

- constants: pool parameters and code hashes
- factories: scripts, cells, transactions and transitions
"""

from tests.helpers.constants import (
    CURVE_CODE_HASH,
    K,
    POOL_CAPACITY,
    TOTAL_SUPPLY,
    UDT_CODE_HASH,
    VM_CODE_HASH,
)
from tests.helpers.factories import (
    make_pool_args,
    make_pool_cell,
    make_pool_lock,
    make_transaction,
    make_transition,
    make_udt_type,
    make_user_lock,
)

__all__ = [
    # Constants
    "CURVE_CODE_HASH",
    "K",
    "POOL_CAPACITY",
    "TOTAL_SUPPLY",
    "UDT_CODE_HASH",
    "VM_CODE_HASH",
    # Factories
    "make_pool_args",
    "make_pool_cell",
    "make_pool_lock",
    "make_transaction",
    "make_transition",
    "make_udt_type",
    "make_user_lock",
]
