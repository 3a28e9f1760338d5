"""Command-line estimator for bonding-curve pools.

Usage:
    bonding-curve quote-buy --amount 10 --remaining 90 --total-supply 100 --k 1
    bonding-curve quote-sell --amount 10 --remaining 90 --total-supply 100 --k 1
    bonding-curve solve --budget-units 500000000 --remaining 90 --total-supply 100 --k 1
    bonding-curve decode-args 0x0000...
    bonding-curve decode-state 0x0a000000000000000000000000000000
"""

from __future__ import annotations

import argparse
import logging
import sys

import structlog

from bonding_curve.codec.args import PoolArgs
from bonding_curve.codec.state import decode_state
from bonding_curve.config import configure_logging
from bonding_curve.errors import BondingCurveError
from bonding_curve.models.pool import CurveParameters, PoolState
from bonding_curve.quote import (
    max_purchase_amount,
    quote_purchase,
    quote_redemption,
    solve_purchase_amount,
)

logger = structlog.get_logger()


def _add_pool_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--remaining", type=int, required=True, help="Tokens not yet issued")
    parser.add_argument(
        "--total-supply", type=int, required=True, help="Maximum issuable tokens"
    )
    parser.add_argument("--k", type=int, required=True, help="Curve steepness")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bonding-curve",
        description="Quote and decode logarithmic bonding-curve pools",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("quote-buy", "Collateral units required to buy tokens"),
        ("quote-sell", "Collateral units returned for redeeming tokens"),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("--amount", type=int, required=True, help="Token amount")
        _add_pool_arguments(cmd)

    solve = sub.add_parser("solve", help="Tokens purchasable with a collateral budget")
    solve.add_argument("--budget-units", type=int, required=True, help="Budget in base units")
    _add_pool_arguments(solve)

    decode_args = sub.add_parser("decode-args", help="Decode a 55-byte pool args payload")
    decode_args.add_argument("data", help="0x-prefixed hex payload")

    decode_st = sub.add_parser("decode-state", help="Decode a 16-byte pool state payload")
    decode_st.add_argument("data", help="0x-prefixed hex payload")

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        if args.command in ("quote-buy", "quote-sell", "solve"):
            params = CurveParameters(k=args.k, total_supply=args.total_supply)
            state = PoolState(remaining=args.remaining)
            if args.command == "quote-buy":
                print(quote_purchase(args.amount, state, params))
            elif args.command == "quote-sell":
                print(quote_redemption(args.amount, state, params))
            else:
                amount = solve_purchase_amount(args.budget_units, state, params)
                max_amount = max_purchase_amount(args.budget_units, state, params)
                print(f"amount={amount} max_amount={max_amount}")
        elif args.command == "decode-args":
            pool_args = PoolArgs.decode(args.data)
            print(
                f"code_hash=0x{pool_args.code_hash.hex()} "
                f"hash_type={pool_args.hash_type.name.lower()} "
                f"k={pool_args.k} total_supply={pool_args.total_supply}"
            )
        else:
            print(decode_state(args.data))
    except (BondingCurveError, ValueError) as err:
        logger.error("command_failed", command=args.command, error=str(err))
        print(f"Error: {err}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
