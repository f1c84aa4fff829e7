"""
Trading totals, token estimates and financial metrics.

Pure functions: same inputs, same outputs, no logging, no shared state.
Ratios with a zero denominator come back as None rather than inf/0.
"""

from __future__ import annotations

from typing import Sequence

import pandas as pd

from airdrop_analyzer.models import (
    AnalyzerInputs,
    AnalyzerMetrics,
    NormalizedPositionRow,
    TokenEstimates,
    TradingBreakdown,
    TradingTotals,
)

_FRAME_COLUMNS = ["source_file", "market_symbol", "volume_usd", "pnl_usd", "fees_usd"]


# ---------------------------------------------------------------------------
# Trading totals
# ---------------------------------------------------------------------------

def _rows_frame(rows: Sequence[NormalizedPositionRow]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            (
                row.source_file,
                row.market_symbol,
                abs(row.net_exposure_notional),
                row.cumulative_pnl_realized,
                row.total_trading_fees,
            )
            for row in rows
        ],
        columns=_FRAME_COLUMNS,
    )


def _breakdown(frame: pd.DataFrame, key: str) -> list[TradingBreakdown]:
    """Per-key sums, largest volume first (ties keep first-seen order)."""
    grouped = frame.groupby(key, sort=False).agg(
        volume_usd=("volume_usd", "sum"),
        pnl_usd=("pnl_usd", "sum"),
        fees_usd=("fees_usd", "sum"),
        rows_count=("volume_usd", "size"),
    )
    grouped = grouped.sort_values("volume_usd", ascending=False, kind="stable")
    return [
        TradingBreakdown(
            key=str(item.Index),
            volume_usd=float(item.volume_usd),
            pnl_usd=float(item.pnl_usd),
            fees_usd=float(item.fees_usd),
            rows_count=int(item.rows_count),
        )
        for item in grouped.itertuples()
    ]


def compute_trading_totals(rows: Sequence[NormalizedPositionRow]) -> TradingTotals:
    """Volume is the sum of |notional|; PnL stays signed."""
    if not rows:
        return TradingTotals(volume_total_usd=0.0, pnl_total_usd=0.0, fees_total_usd=0.0)

    frame = _rows_frame(rows)
    return TradingTotals(
        volume_total_usd=float(frame["volume_usd"].sum()),
        pnl_total_usd=float(frame["pnl_usd"].sum()),
        fees_total_usd=float(frame["fees_usd"].sum()),
        by_file=_breakdown(frame, "source_file"),
        by_market=_breakdown(frame, "market_symbol"),
    )


# ---------------------------------------------------------------------------
# Tokens + metrics
# ---------------------------------------------------------------------------

def compute_token_estimates(inputs: AnalyzerInputs) -> TokenEstimates:
    points_total = inputs.points_own + inputs.points_free
    tokens_total = points_total * inputs.point_to_token
    tokens_free = inputs.points_free * inputs.point_to_token
    return TokenEstimates(
        points_total=points_total,
        tokens_total=tokens_total,
        tokens_free=tokens_free,
        tokens_paid=max(tokens_total - tokens_free, 0.0),
    )


def compute_metrics(
    trading: TradingTotals,
    tokens: TokenEstimates,
    token_price: float,
) -> AnalyzerMetrics:
    """Cost is the net realized loss only; a net profit means zero cost."""
    cost_usd = max(-trading.pnl_total_usd, 0.0)
    value_usd = tokens.tokens_total * token_price
    net_profit_usd = value_usd - cost_usd

    roi = net_profit_usd / cost_usd if cost_usd > 0 else None
    cost_per_token_total = cost_usd / tokens.tokens_total if tokens.tokens_total > 0 else None
    cost_per_token_paid = cost_usd / tokens.tokens_paid if tokens.tokens_paid > 0 else None
    points_per_1m_volume = (
        tokens.points_total / trading.volume_total_usd * 1_000_000
        if trading.volume_total_usd > 0
        else None
    )

    return AnalyzerMetrics(
        cost_usd=cost_usd,
        value_usd=value_usd,
        net_profit_usd=net_profit_usd,
        roi=roi,
        cost_per_token_total=cost_per_token_total,
        cost_per_token_paid=cost_per_token_paid,
        break_even_price=cost_per_token_total,
        points_per_1m_volume=points_per_1m_volume,
    )


def validate_inputs(inputs: AnalyzerInputs) -> list[str]:
    """Violations in a fixed order; empty list means the inputs are usable."""
    errors: list[str] = []
    if inputs.points_own < 0:
        errors.append("points_own must be >= 0")
    if inputs.points_free < 0:
        errors.append("points_free must be >= 0")
    if inputs.point_to_token <= 0:
        errors.append("point_to_token must be > 0")
    if inputs.token_price <= 0:
        errors.append("token_price must be > 0")
    return errors
