from .calculations import compute_metrics, compute_token_estimates, compute_trading_totals, validate_inputs
from .sell_plans import compute_sell_plans, select_sell_plan
from .farm_health import evaluate_farm_health
from .engine import AnalysisReport, compute_analyzer_output, parse_inputs, run_analysis
