"""
Command-line analyzer: import exchange CSV exports and print the analysis.

Usage:
    airdrop-analyzer --exchange backpack --points-own 1000 --points-free 200 \\
        --point-to-token 0,5 --token-price 1.2 wallet_a.csv wallet_b.csv

    airdrop-analyzer --json --exchange pacifica trade_history.csv
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional, Sequence

from airdrop_analyzer.analyzers.engine import AnalysisReport, parse_inputs, run_analysis
from airdrop_analyzer.analyzers.formatting import (
    format_number,
    format_number_smart,
    format_percent,
    format_period,
    format_usd,
    format_usd_smart,
)
from airdrop_analyzer.config import Settings, get_settings
from airdrop_analyzer.ingest import ParseSession, PathSource
from airdrop_analyzer.models import RISK_PROFILES, ExchangeParseResult
from airdrop_analyzer.parsers.registry import AdapterRegistry, default_registry

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NO_ANALYSIS = 1


def build_parser(registry: AdapterRegistry, settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="airdrop-analyzer",
        description="Analyze exchange CSV history against an airdrop token estimate.",
    )
    parser.add_argument("files", nargs="+", type=Path, help="CSV exports to import")
    parser.add_argument(
        "--exchange",
        choices=registry.ids(),
        default=settings.default_exchange,
        help="exchange that produced the files (default: %(default)s)",
    )
    parser.add_argument("--points-own", default=settings.points_own)
    parser.add_argument("--points-free", default=settings.points_free)
    parser.add_argument("--point-to-token", default=settings.point_to_token)
    parser.add_argument("--token-price", default=settings.token_price)
    parser.add_argument("--risk-profile", choices=RISK_PROFILES, default=settings.risk_profile)
    parser.add_argument("--json", action="store_true", help="print a JSON document instead of text")
    parser.add_argument("--log-level", default=settings.log_level)
    return parser


# ---------------------------------------------------------------------------
# Text output
# ---------------------------------------------------------------------------

def _print_import(dataset: ExchangeParseResult) -> None:
    print(f"\n{'IMPORT':=^70}")
    for f in dataset.files:
        print(f"\n  {f.source_file}  [{f.status}]")
        print(f"    Rows:    {f.rows_valid} valid / {f.rows_invalid} invalid / {f.rows_total} total")
        print(f"    Period:  {format_period(f.min_opened_at, f.max_closed_at)}")
        for error in f.errors:
            print(f"    ! {error}")
    print(f"\n  Usable rows: {len(dataset.rows)}")


def _print_analysis(report: AnalysisReport) -> None:
    output = report.output
    if output is None:
        return
    trading, tokens, metrics = output.trading, output.tokens, output.metrics

    print(f"\n{'SUMMARY':=^70}")
    print(f"  Volume:              {format_usd_smart(trading.volume_total_usd)}")
    print(f"  Realized PnL:        {format_usd_smart(trading.pnl_total_usd)}")
    print(f"  Fees:                {format_usd_smart(trading.fees_total_usd)}")
    print(f"  Points total:        {format_number_smart(tokens.points_total)}")
    print(f"  Tokens (total/paid): {format_number_smart(tokens.tokens_total)} / {format_number_smart(tokens.tokens_paid)}")
    print(f"  Cost:                {format_usd(metrics.cost_usd)}")
    print(f"  Value:               {format_usd(metrics.value_usd)}")
    print(f"  Net profit:          {format_usd(metrics.net_profit_usd)}")
    print(f"  ROI:                 {format_percent(metrics.roi)}")
    print(f"  Break-even price:    {format_usd(metrics.break_even_price)}")
    print(f"  Cost/paid token:     {format_usd(metrics.cost_per_token_paid)}")
    print(f"  Points per $1M vol:  {format_number(metrics.points_per_1m_volume)}")

    print(f"\n  {'Market':<20} {'Volume':>16} {'PnL':>14} {'Fees':>12} {'Rows':>5}")
    print(f"  {'-' * 70}")
    for item in trading.by_market:
        print(
            f"  {item.key[:20]:<20} {format_usd_smart(item.volume_usd):>16} "
            f"{format_usd(item.pnl_usd):>14} {format_usd(item.fees_usd):>12} {item.rows_count:>5}"
        )

    if report.diagnosis is not None:
        print(f"\n{'FARM HEALTH':=^70}")
        print(f"  Status:       {report.diagnosis.health}")
        print(f"  Gap to zero:  {format_percent(report.diagnosis.gap_to_zero)}")

    print(f"\n{'SELL PLANS':=^70}")
    for plan in output.sell_plans:
        marker = "*" if report.selected_plan is not None and plan.profile == report.selected_plan.profile else " "
        print(
            f"\n {marker}{plan.profile:<13} sell {format_percent(plan.sell_pct)} / hold {format_percent(plan.hold_pct)}"
        )
        print(f"    Sell now:       {format_usd(plan.value_sell_now)}  (locked profit {format_usd(plan.locked_profit)})")
        for scenario in plan.scenarios:
            print(
                f"    {scenario.scenario_key:<5} @ {format_usd(scenario.scenario_price):>10}"
                f"  total {format_usd(scenario.future_total_value):>14}"
                f"  net {format_usd(scenario.future_net_profit):>14}"
            )


def _json_document(dataset: ExchangeParseResult, report: AnalysisReport) -> dict[str, Any]:
    files = []
    for f in dataset.files:
        entry = f.to_dict()
        entry.pop("rows", None)
        files.append(entry)
    return {
        "exchange_id": dataset.exchange_id,
        "files": files,
        "row_count": len(dataset.rows),
        "analysis": report.to_dict(),
    }


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main(argv: Optional[Sequence[str]] = None) -> int:
    settings = get_settings()
    registry = default_registry()
    parser = build_parser(registry, settings)
    args = parser.parse_args(argv)
    if args.exchange not in registry:
        parser.error(f"unknown exchange '{args.exchange}' (choose from {', '.join(registry.ids())})")

    level = getattr(logging, str(args.log_level).upper(), None)
    if not isinstance(level, int):
        logger.warning("Unknown log level %r, using INFO", args.log_level)
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    session = ParseSession(registry)
    sources = [PathSource(path, encoding=settings.encoding) for path in args.files]
    dataset = asyncio.run(session.parse(args.exchange, sources))
    if dataset is None:
        # only possible if another parse superseded this one
        logger.error("Parse was cancelled")
        return EXIT_NO_ANALYSIS

    inputs = parse_inputs({
        "points_own": args.points_own,
        "points_free": args.points_free,
        "point_to_token": args.point_to_token,
        "token_price": args.token_price,
        "risk_profile": args.risk_profile,
    })
    report = run_analysis(dataset, inputs)

    if args.json:
        json.dump(_json_document(dataset, report), sys.stdout, indent=2, default=str)
        sys.stdout.write("\n")
    else:
        adapter = registry.get(args.exchange)
        print("=" * 70)
        print(f"  Airdrop Analyzer - {adapter.label}")
        print("=" * 70)
        _print_import(dataset)
        for error in report.input_errors:
            print(f"\n  Input error: {error}")
        _print_analysis(report)
        print(f"\n{'=' * 70}")

    return EXIT_OK if report.ok else EXIT_NO_ANALYSIS


if __name__ == "__main__":
    sys.exit(main())
