"""Tests for the command-line estimator."""

import math

import pytest

from bonding_curve.cli import build_parser, main
from bonding_curve.math.curve import purchase_cost, redemption_return
from tests.helpers import make_pool_args


class TestCli:
    def test_quote_buy(self, capsys):
        exit_code = main(
            ["quote-buy", "--amount", "5", "--remaining", "250", "--total-supply", "255", "--k", "1"]
        )
        assert exit_code == 0
        expected = math.ceil(purchase_cost(5, 250, 255, 1) * 10**8)
        assert capsys.readouterr().out.strip() == str(expected)

    def test_quote_sell(self, capsys):
        exit_code = main(
            ["quote-sell", "--amount", "5", "--remaining", "250", "--total-supply", "255", "--k", "1"]
        )
        assert exit_code == 0
        expected = math.floor(redemption_return(5, 250, 255, 1) * 10**8)
        assert capsys.readouterr().out.strip() == str(expected)

    def test_solve(self, capsys):
        exit_code = main(
            ["solve", "--budget-units", "1000000000", "--remaining", "250", "--total-supply", "255", "--k", "1"]
        )
        assert exit_code == 0
        assert "max_amount=" in capsys.readouterr().out

    def test_decode_args(self, capsys):
        data = "0x" + make_pool_args(k=3, total_supply=1000).hex()
        assert main(["decode-args", data]) == 0
        out = capsys.readouterr().out
        assert "k=3" in out
        assert "total_supply=1000" in out
        assert "hash_type=type" in out

    def test_decode_state(self, capsys):
        assert main(["decode-state", "0xfa000000000000000000000000000000"]) == 0
        assert capsys.readouterr().out.strip() == "250"

    def test_malformed_state_fails(self, capsys):
        assert main(["decode-state", "0xfa"]) == 1
        assert "Error" in capsys.readouterr().err

    def test_over_redemption_fails(self, capsys):
        exit_code = main(
            ["quote-sell", "--amount", "1", "--remaining", "255", "--total-supply", "255", "--k", "1"]
        )
        assert exit_code == 1

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])
