"""
Sell/hold plans for the airdropped tokens.

Each risk profile sells a fixed share now and holds the rest; the held part
is projected under three price scenarios relative to today's price.
"""

from __future__ import annotations

from typing import Optional, Sequence

from airdrop_analyzer.models import ScenarioProjection, SellPlan

# (profile, sell share, hold share)
PLAN_DEFINITIONS: tuple[tuple[str, float, float], ...] = (
    ("conservative", 0.70, 0.30),
    ("moderate", 0.60, 0.40),
    ("aggressive", 0.45, 0.55),
)

# (scenario, multiple of the current token price)
SCENARIO_MULTIPLIERS: tuple[tuple[str, float], ...] = (
    ("bear", 0.35),
    ("base", 1.0),
    ("bull", 2.0),
)


def _build_scenarios(
    tokens_hold: float,
    value_sell_now: float,
    token_price: float,
    cost_usd: float,
) -> tuple[ScenarioProjection, ...]:
    projections = []
    for key, multiplier in SCENARIO_MULTIPLIERS:
        scenario_price = token_price * multiplier
        future_value_hold = tokens_hold * scenario_price
        future_total_value = value_sell_now + future_value_hold
        projections.append(
            ScenarioProjection(
                scenario_key=key,
                scenario_price=scenario_price,
                future_value_hold=future_value_hold,
                future_total_value=future_total_value,
                # full cost, not just the share allocated to the sold tokens
                future_net_profit=future_total_value - cost_usd,
            )
        )
    return tuple(projections)


def compute_sell_plans(tokens_total: float, token_price: float, cost_usd: float) -> list[SellPlan]:
    """One plan per risk profile, in conservative -> aggressive order."""
    plans = []
    for profile, sell_pct, hold_pct in PLAN_DEFINITIONS:
        tokens_sell = tokens_total * sell_pct
        tokens_hold = tokens_total - tokens_sell
        value_sell_now = tokens_sell * token_price
        cost_allocated_to_sell = cost_usd * (tokens_sell / tokens_total) if tokens_total > 0 else 0.0

        plans.append(
            SellPlan(
                profile=profile,
                sell_pct=sell_pct,
                hold_pct=hold_pct,
                tokens_sell=tokens_sell,
                tokens_hold=tokens_hold,
                value_sell_now=value_sell_now,
                cost_allocated_to_sell=cost_allocated_to_sell,
                locked_profit=value_sell_now - cost_allocated_to_sell,
                scenarios=_build_scenarios(tokens_hold, value_sell_now, token_price, cost_usd),
            )
        )
    return plans


def select_sell_plan(plans: Sequence[SellPlan], profile: str) -> Optional[SellPlan]:
    for plan in plans:
        if plan.profile == profile:
            return plan
    return None
