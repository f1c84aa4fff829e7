"""Farm health: where today's token price sits relative to break-even."""

from __future__ import annotations

from airdrop_analyzer.models import AnalyzerOutput, FarmDiagnosis

# Lower bound of each band, checked top-down; anything below is "critical".
HEALTH_BANDS: tuple[tuple[float, str], ...] = (
    (0.2, "strong"),
    (0.0, "ok"),
    (-0.2, "attention"),
)


def evaluate_farm_health(output: AnalyzerOutput) -> FarmDiagnosis:
    """gap_to_zero = current price / break-even price - 1."""
    tokens_total = output.tokens.tokens_total
    if tokens_total <= 0:
        return FarmDiagnosis(health="unknown", gap_to_zero=None)

    break_even = output.metrics.break_even_price
    if break_even is None or break_even <= 0:
        return FarmDiagnosis(health="unknown", gap_to_zero=None)

    current_price = output.metrics.value_usd / tokens_total
    gap = current_price / break_even - 1

    for lower_bound, health in HEALTH_BANDS:
        if gap >= lower_bound:
            return FarmDiagnosis(health=health, gap_to_zero=gap)
    return FarmDiagnosis(health="critical", gap_to_zero=gap)
