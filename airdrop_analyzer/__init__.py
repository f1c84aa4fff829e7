"""Exchange CSV ingestion and airdrop profitability analytics."""

from .models import (
    AnalyzerInputs,
    AnalyzerMetrics,
    AnalyzerOutput,
    ExchangeParseResult,
    FarmDiagnosis,
    FileParseResult,
    NormalizedPositionRow,
    ParseIssue,
    RawFile,
    ScenarioProjection,
    SellPlan,
    TokenEstimates,
    TradingBreakdown,
    TradingTotals,
)
from .parsers import (
    AdapterRegistry,
    ExchangeAdapter,
    IssueCode,
    UnknownExchangeError,
    default_registry,
    parse_locale_number,
    parse_monetary_value,
)
from .analyzers import (
    AnalysisReport,
    compute_analyzer_output,
    compute_metrics,
    compute_sell_plans,
    compute_token_estimates,
    compute_trading_totals,
    evaluate_farm_health,
    parse_inputs,
    run_analysis,
    validate_inputs,
)
from .ingest import InMemorySource, ParseSession, PathSource

__version__ = "0.1.0"
