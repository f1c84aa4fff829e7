"""
Canonical data model shared by the parsers and the analyzers.

Parsers produce NormalizedPositionRow / FileParseResult / ExchangeParseResult.
Analyzers consume those plus AnalyzerInputs and produce AnalyzerOutput.
Optional numeric fields use None for "not applicable" (zero denominator),
never 0.0.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Literal, Optional

RiskProfile = Literal["conservative", "moderate", "aggressive"]
FarmHealth = Literal["strong", "ok", "attention", "critical", "unknown"]
ScenarioKey = Literal["bear", "base", "bull"]
FileStatus = Literal["ok", "error"]

RISK_PROFILES: tuple[str, ...] = ("conservative", "moderate", "aggressive")


# ---------------------------------------------------------------------------
# Parsing results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class NormalizedPositionRow:
    """One exchange-agnostic trade/position entry."""

    source_file: str
    market_symbol: str
    net_exposure_notional: float  # signed
    cumulative_pnl_realized: float  # signed
    total_trading_fees: float
    opened_at: Optional[str] = None
    closed_at: Optional[str] = None
    position_id: Optional[str] = None


@dataclass(frozen=True)
class ParseIssue:
    """A file-level diagnostic: stable code plus display message."""

    code: str
    message: str


@dataclass(frozen=True)
class RawFile:
    """A file handed to an adapter. read_error is set when acquisition failed."""

    name: str
    content: Optional[str] = None
    read_error: Optional[str] = None


@dataclass
class FileParseResult:
    source_file: str
    rows_total: int = 0
    rows_valid: int = 0
    rows_invalid: int = 0
    min_opened_at: Optional[str] = None
    max_closed_at: Optional[str] = None
    status: FileStatus = "ok"
    issues: list[ParseIssue] = field(default_factory=list)
    rows: list[NormalizedPositionRow] = field(default_factory=list)

    @property
    def errors(self) -> list[str]:
        return [issue.message for issue in self.issues]

    @property
    def error_codes(self) -> list[str]:
        return [issue.code for issue in self.issues]

    @classmethod
    def failed(cls, source_file: str, issues: list[ParseIssue], rows_total: int = 0) -> FileParseResult:
        return cls(source_file=source_file, rows_total=rows_total, status="error", issues=list(issues))

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["errors"] = self.errors
        return data


@dataclass
class ExchangeParseResult:
    exchange_id: str
    files: list[FileParseResult] = field(default_factory=list)
    rows: list[NormalizedPositionRow] = field(default_factory=list)

    @classmethod
    def empty(cls, exchange_id: str) -> ExchangeParseResult:
        return cls(exchange_id=exchange_id)

    @property
    def ok_files(self) -> list[FileParseResult]:
        return [f for f in self.files if f.status == "ok"]

    def to_dict(self) -> dict[str, Any]:
        return {
            "exchange_id": self.exchange_id,
            "files": [f.to_dict() for f in self.files],
            "rows": [asdict(r) for r in self.rows],
        }


# ---------------------------------------------------------------------------
# Analyzer inputs / outputs
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AnalyzerInputs:
    points_own: float
    points_free: float
    point_to_token: float
    token_price: float
    risk_profile: RiskProfile = "moderate"


@dataclass
class TradingBreakdown:
    key: str
    volume_usd: float = 0.0
    pnl_usd: float = 0.0
    fees_usd: float = 0.0
    rows_count: int = 0


@dataclass
class TradingTotals:
    volume_total_usd: float
    pnl_total_usd: float
    fees_total_usd: float
    by_file: list[TradingBreakdown] = field(default_factory=list)
    by_market: list[TradingBreakdown] = field(default_factory=list)


@dataclass(frozen=True)
class TokenEstimates:
    points_total: float
    tokens_total: float
    tokens_free: float
    tokens_paid: float


@dataclass(frozen=True)
class AnalyzerMetrics:
    cost_usd: float
    value_usd: float
    net_profit_usd: float
    roi: Optional[float]
    cost_per_token_total: Optional[float]
    cost_per_token_paid: Optional[float]
    break_even_price: Optional[float]
    points_per_1m_volume: Optional[float]


@dataclass(frozen=True)
class ScenarioProjection:
    scenario_key: ScenarioKey
    scenario_price: float
    future_value_hold: float
    future_total_value: float
    future_net_profit: float


@dataclass(frozen=True)
class SellPlan:
    profile: RiskProfile
    sell_pct: float
    hold_pct: float
    tokens_sell: float
    tokens_hold: float
    value_sell_now: float
    cost_allocated_to_sell: float
    locked_profit: float
    scenarios: tuple[ScenarioProjection, ...] = ()


@dataclass
class AnalyzerOutput:
    trading: TradingTotals
    tokens: TokenEstimates
    metrics: AnalyzerMetrics
    sell_plans: list[SellPlan]

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class FarmDiagnosis:
    health: FarmHealth
    gap_to_zero: Optional[float] = None
