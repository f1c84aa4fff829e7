"""
Backpack position_history CSV adapter.

Backpack exports one row per perp position with 21 fixed columns. Numbers
follow the exporting machine's locale, so every numeric cell goes through
parse_locale_number. opened_at / closed_at are kept as exported.
"""

from __future__ import annotations

from typing import Mapping, Optional

from airdrop_analyzer.models import NormalizedPositionRow
from airdrop_analyzer.parsers.csv_schema import ExchangeSchema
from airdrop_analyzer.parsers.exchange_adapter import ExchangeAdapter, cell
from airdrop_analyzer.parsers.number import parse_locale_number

POSITION_HISTORY_COLUMNS = (
    "position_id",
    "market_symbol",
    "net_quantity",
    "net_exposure_quantity",
    "net_exposure_notional",
    "net_cost",
    "mark_price",
    "entry_price",
    "cumulative_pnl_realized",
    "total_unrealized_pnl",
    "total_funding_quantity",
    "total_interest",
    "total_liquidated",
    "total_trading_fees",
    "last_event_type",
    "max_net_quantity",
    "max_net_quantity_direction",
    "closing_price",
    "account_leverage",
    "opened_at",
    "closed_at",
)

REQUIRED_COLUMNS = (
    "market_symbol",
    "net_exposure_notional",
    "cumulative_pnl_realized",
    "total_trading_fees",
)

HEADER_ALIASES: dict[str, str] = {
    "marketsymbol": "market_symbol",
    "market_symbol": "market_symbol",
    "marketsymbolperp": "market_symbol",
    "netexposurenotional": "net_exposure_notional",
    "net_exposure_notional": "net_exposure_notional",
    "cumulativepnlrealized": "cumulative_pnl_realized",
    "cumulative_pnl_realized": "cumulative_pnl_realized",
    "totaltradingfees": "total_trading_fees",
    "total_trading_fees": "total_trading_fees",
    "openedat": "opened_at",
    "opened_at": "opened_at",
    "closedat": "closed_at",
    "closed_at": "closed_at",
    "positionid": "position_id",
    "position_id": "position_id",
}

SCHEMA = ExchangeSchema(
    label="Backpack",
    export_name="position_history",
    columns=POSITION_HISTORY_COLUMNS,
    required=REQUIRED_COLUMNS,
    aliases=HEADER_ALIASES,
)


def normalize_position_row(cells: Mapping[str, str], source_file: str) -> Optional[NormalizedPositionRow]:
    market_symbol = cell(cells, "market_symbol")
    net_exposure_notional = parse_locale_number(cells.get("net_exposure_notional"))
    cumulative_pnl_realized = parse_locale_number(cells.get("cumulative_pnl_realized"))
    total_trading_fees = parse_locale_number(cells.get("total_trading_fees"))

    if (
        not market_symbol
        or net_exposure_notional is None
        or cumulative_pnl_realized is None
        or total_trading_fees is None
    ):
        return None

    return NormalizedPositionRow(
        source_file=source_file,
        market_symbol=market_symbol,
        net_exposure_notional=net_exposure_notional,
        cumulative_pnl_realized=cumulative_pnl_realized,
        total_trading_fees=total_trading_fees,
        opened_at=cell(cells, "opened_at") or None,
        closed_at=cell(cells, "closed_at") or None,
        position_id=cell(cells, "position_id") or None,
    )


ADAPTER = ExchangeAdapter(
    id="backpack",
    label="Backpack",
    schema=SCHEMA,
    normalize_row=normalize_position_row,
)
