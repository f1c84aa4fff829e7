import pytest

from airdrop_analyzer.analyzers.farm_health import evaluate_farm_health
from airdrop_analyzer.models import AnalyzerMetrics, AnalyzerOutput, TokenEstimates, TradingTotals


def _output(tokens_total, value_usd, break_even):
    return AnalyzerOutput(
        trading=TradingTotals(volume_total_usd=0.0, pnl_total_usd=0.0, fees_total_usd=0.0),
        tokens=TokenEstimates(
            points_total=tokens_total * 2,
            tokens_total=tokens_total,
            tokens_free=0.0,
            tokens_paid=tokens_total,
        ),
        metrics=AnalyzerMetrics(
            cost_usd=0.0,
            value_usd=value_usd,
            net_profit_usd=value_usd,
            roi=None,
            cost_per_token_total=break_even,
            cost_per_token_paid=break_even,
            break_even_price=break_even,
            points_per_1m_volume=None,
        ),
        sell_plans=[],
    )


class TestFarmHealth:
    @pytest.mark.parametrize(
        "value_usd, health",
        [
            (150.0, "strong"),
            (110.0, "ok"),
            (100.0, "ok"),
            (90.0, "attention"),
            (50.0, "critical"),
        ],
    )
    def test_bands(self, value_usd, health):
        diagnosis = evaluate_farm_health(_output(100.0, value_usd, 1.0))
        assert diagnosis.health == health
        assert diagnosis.gap_to_zero == pytest.approx(value_usd / 100.0 - 1)

    def test_break_even_equal_to_price_is_ok(self):
        diagnosis = evaluate_farm_health(_output(100.0, 100.0, 1.0))
        assert diagnosis.gap_to_zero == 0.0

    def test_no_tokens_is_unknown(self):
        diagnosis = evaluate_farm_health(_output(0.0, 0.0, None))
        assert diagnosis.health == "unknown"
        assert diagnosis.gap_to_zero is None

    def test_no_cost_is_unknown(self):
        assert evaluate_farm_health(_output(100.0, 100.0, None)).health == "unknown"
        assert evaluate_farm_health(_output(100.0, 100.0, 0.0)).health == "unknown"
