"""Tests for trading totals, token estimates, metrics and input validation."""

import pytest

from airdrop_analyzer.analyzers.calculations import (
    compute_metrics,
    compute_token_estimates,
    compute_trading_totals,
    validate_inputs,
)
from airdrop_analyzer.models import AnalyzerInputs, NormalizedPositionRow, TradingTotals


def _row(source_file, market, notional, pnl, fees):
    return NormalizedPositionRow(
        source_file=source_file,
        market_symbol=market,
        net_exposure_notional=notional,
        cumulative_pnl_realized=pnl,
        total_trading_fees=fees,
    )


ROWS = [
    _row("a.csv", "BTC", 1000.0, -80.0, 10.0),
    _row("a.csv", "ETH", -300.0, 20.0, 3.0),
    _row("b.csv", "ETH", 200.0, 10.0, 2.0),
]

INPUTS = AnalyzerInputs(points_own=1000, points_free=200, point_to_token=0.5, token_price=1.2)


class TestTradingTotals:
    def test_totals_use_absolute_notional(self):
        totals = compute_trading_totals(ROWS)
        assert totals.volume_total_usd == pytest.approx(1500.0)
        assert totals.pnl_total_usd == pytest.approx(-50.0)
        assert totals.fees_total_usd == pytest.approx(15.0)

    def test_by_market_sorted_by_volume(self):
        by_market = compute_trading_totals(ROWS).by_market
        assert [b.key for b in by_market] == ["BTC", "ETH"]
        eth = by_market[1]
        assert eth.volume_usd == pytest.approx(500.0)
        assert eth.pnl_usd == pytest.approx(30.0)
        assert eth.fees_usd == pytest.approx(5.0)
        assert eth.rows_count == 2

    def test_by_file(self):
        by_file = compute_trading_totals(ROWS).by_file
        assert [(b.key, b.rows_count) for b in by_file] == [("a.csv", 2), ("b.csv", 1)]
        assert by_file[0].volume_usd == pytest.approx(1300.0)

    def test_volume_ties_keep_first_seen_order(self):
        rows = [_row("a.csv", "SOL", 100.0, 0, 0), _row("a.csv", "ARB", -100.0, 0, 0)]
        assert [b.key for b in compute_trading_totals(rows).by_market] == ["SOL", "ARB"]

    def test_plain_python_types(self):
        item = compute_trading_totals(ROWS).by_market[0]
        assert type(item.volume_usd) is float
        assert type(item.rows_count) is int

    def test_empty(self):
        totals = compute_trading_totals([])
        assert totals.volume_total_usd == 0.0
        assert totals.pnl_total_usd == 0.0
        assert totals.by_file == []
        assert totals.by_market == []


class TestTokenEstimates:
    def test_tokens(self):
        tokens = compute_token_estimates(INPUTS)
        assert tokens.points_total == 1200
        assert tokens.tokens_total == pytest.approx(600)
        assert tokens.tokens_free == pytest.approx(100)
        assert tokens.tokens_paid == pytest.approx(500)

    def test_paid_never_negative(self):
        tokens = compute_token_estimates(AnalyzerInputs(0, 200, 0.5, 1.0))
        assert tokens.tokens_paid == 0.0


class TestMetrics:
    def test_loss_becomes_cost(self):
        metrics = compute_metrics(compute_trading_totals(ROWS), compute_token_estimates(INPUTS), 1.2)
        assert metrics.cost_usd == pytest.approx(50)
        assert metrics.value_usd == pytest.approx(720)
        assert metrics.net_profit_usd == pytest.approx(670)
        assert metrics.roi == pytest.approx(13.4)
        assert metrics.cost_per_token_total == pytest.approx(50 / 600)
        assert metrics.break_even_price == metrics.cost_per_token_total
        assert metrics.cost_per_token_paid == pytest.approx(0.1)
        assert metrics.points_per_1m_volume == pytest.approx(800_000)

    def test_profitable_trading_has_no_cost(self):
        trading = TradingTotals(volume_total_usd=100.0, pnl_total_usd=25.0, fees_total_usd=1.0)
        metrics = compute_metrics(trading, compute_token_estimates(INPUTS), 1.2)
        assert metrics.cost_usd == 0.0
        assert metrics.net_profit_usd == pytest.approx(720)
        assert metrics.roi is None
        assert metrics.cost_per_token_total == 0.0

    def test_zero_denominators_are_none(self):
        trading = TradingTotals(volume_total_usd=0.0, pnl_total_usd=-10.0, fees_total_usd=0.0)
        tokens = compute_token_estimates(AnalyzerInputs(0, 0, 0.5, 1.0))
        metrics = compute_metrics(trading, tokens, 1.0)
        assert metrics.cost_per_token_total is None
        assert metrics.cost_per_token_paid is None
        assert metrics.break_even_price is None
        assert metrics.points_per_1m_volume is None
        assert metrics.roi == pytest.approx(-1.0)


class TestValidateInputs:
    def test_valid(self):
        assert validate_inputs(INPUTS) == []

    def test_zero_points_allowed(self):
        assert validate_inputs(AnalyzerInputs(0, 0, 0.5, 1.0)) == []

    def test_all_violations_in_order(self):
        errors = validate_inputs(AnalyzerInputs(-1, -1, 0, -2))
        assert errors == [
            "points_own must be >= 0",
            "points_free must be >= 0",
            "point_to_token must be > 0",
            "token_price must be > 0",
        ]
