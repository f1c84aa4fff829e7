"""
Analysis entry points: raw user inputs + parsed dataset -> AnalysisReport.

compute_analyzer_output() is the pure composition of the calculation stages.
run_analysis() adds the gating a caller needs: no output is produced from
invalid inputs or an empty dataset, so nothing half-computed is displayed.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Mapping, Optional

from airdrop_analyzer.analyzers.calculations import (
    compute_metrics,
    compute_token_estimates,
    compute_trading_totals,
    validate_inputs,
)
from airdrop_analyzer.analyzers.farm_health import evaluate_farm_health
from airdrop_analyzer.analyzers.sell_plans import compute_sell_plans, select_sell_plan
from airdrop_analyzer.models import (
    RISK_PROFILES,
    AnalyzerInputs,
    AnalyzerOutput,
    ExchangeParseResult,
    FarmDiagnosis,
    SellPlan,
)
from airdrop_analyzer.parsers.number import parse_locale_number

logger = logging.getLogger(__name__)


def compute_analyzer_output(dataset: ExchangeParseResult, inputs: AnalyzerInputs) -> AnalyzerOutput:
    trading = compute_trading_totals(dataset.rows)
    tokens = compute_token_estimates(inputs)
    metrics = compute_metrics(trading, tokens, inputs.token_price)
    sell_plans = compute_sell_plans(tokens.tokens_total, inputs.token_price, metrics.cost_usd)
    return AnalyzerOutput(trading=trading, tokens=tokens, metrics=metrics, sell_plans=sell_plans)


def parse_inputs(raw: Mapping[str, Any]) -> Optional[AnalyzerInputs]:
    """Build AnalyzerInputs from user-typed values ("1.234,5", "0,5", ...).

    Returns None when any number is unreadable or the risk profile is unknown.
    Range checks are left to validate_inputs().
    """
    numbers = {
        key: parse_locale_number(raw.get(key))
        for key in ("points_own", "points_free", "point_to_token", "token_price")
    }
    if any(value is None for value in numbers.values()):
        return None

    risk_profile = str(raw.get("risk_profile") or "moderate").strip().lower()
    if risk_profile not in RISK_PROFILES:
        return None

    return AnalyzerInputs(risk_profile=risk_profile, **numbers)


@dataclass
class AnalysisReport:
    inputs: Optional[AnalyzerInputs]
    input_errors: list[str] = field(default_factory=list)
    output: Optional[AnalyzerOutput] = None
    diagnosis: Optional[FarmDiagnosis] = None
    selected_plan: Optional[SellPlan] = None

    @property
    def ok(self) -> bool:
        return self.output is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "inputs": asdict(self.inputs) if self.inputs else None,
            "input_errors": list(self.input_errors),
            "output": self.output.to_dict() if self.output else None,
            "diagnosis": asdict(self.diagnosis) if self.diagnosis else None,
            "selected_plan": asdict(self.selected_plan) if self.selected_plan else None,
        }


def run_analysis(dataset: ExchangeParseResult, inputs: Optional[AnalyzerInputs]) -> AnalysisReport:
    """Validate, compute and diagnose. Parsed data is never modified."""
    if inputs is None:
        return AnalysisReport(inputs=None, input_errors=["inputs could not be parsed"])

    errors = validate_inputs(inputs)
    if errors:
        logger.info("[Analysis] Inputs rejected: %s", "; ".join(errors))
        return AnalysisReport(inputs=inputs, input_errors=errors)

    if not dataset.rows:
        logger.info("[Analysis] No rows to analyze for %s", dataset.exchange_id)
        return AnalysisReport(inputs=inputs)

    output = compute_analyzer_output(dataset, inputs)
    diagnosis = evaluate_farm_health(output)
    logger.info(
        "[Analysis] %s: %d rows, cost=%.2f value=%.2f health=%s",
        dataset.exchange_id,
        len(dataset.rows),
        output.metrics.cost_usd,
        output.metrics.value_usd,
        diagnosis.health,
    )
    return AnalysisReport(
        inputs=inputs,
        output=output,
        diagnosis=diagnosis,
        selected_plan=select_sell_plan(output.sell_plans, inputs.risk_profile),
    )
