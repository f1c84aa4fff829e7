"""
Pacifica trade_history CSV adapter.

Pacifica exports one row per fill. Money cells carry currency formatting
("$16.8", "+$0.11", "-$0.2") and are read with parse_monetary_value. There
is a single event time ("YYYY-MM-DD HH:MM:SS") which becomes both opened_at
and closed_at.
"""

from __future__ import annotations

from typing import Mapping, Optional

from airdrop_analyzer.models import NormalizedPositionRow
from airdrop_analyzer.parsers.csv_schema import ExchangeSchema
from airdrop_analyzer.parsers.exchange_adapter import ExchangeAdapter, cell
from airdrop_analyzer.parsers.number import parse_monetary_value

TRADE_HISTORY_COLUMNS = (
    "time",
    "symbol",
    "side",
    "type",
    "size",
    "price",
    "trade_value",
    "fee",
    "realized_pnl",
)

REQUIRED_COLUMNS = ("time", "symbol", "trade_value", "fee", "realized_pnl")

HEADER_ALIASES: dict[str, str] = {
    "time": "time",
    "symbol": "symbol",
    "side": "side",
    "type": "type",
    "size": "size",
    "price": "price",
    "trade_value": "trade_value",
    "tradevalue": "trade_value",
    "fee": "fee",
    "realized_pnl": "realized_pnl",
    "realizedpnl": "realized_pnl",
}

SCHEMA = ExchangeSchema(
    label="Pacifica",
    export_name="trade_history",
    columns=TRADE_HISTORY_COLUMNS,
    required=REQUIRED_COLUMNS,
    aliases=HEADER_ALIASES,
)


def normalize_event_time(raw: str) -> Optional[str]:
    """Swap the first space for 'T' so the value reads as ISO 8601."""
    value = raw.strip()
    if not value:
        return None
    return value.replace(" ", "T", 1)


def normalize_trade_row(cells: Mapping[str, str], source_file: str) -> Optional[NormalizedPositionRow]:
    market_symbol = cell(cells, "symbol")
    trade_value = parse_monetary_value(cells.get("trade_value"))
    realized_pnl = parse_monetary_value(cells.get("realized_pnl"))
    fee = parse_monetary_value(cells.get("fee"))

    if not market_symbol or trade_value is None or realized_pnl is None or fee is None:
        return None

    event_time = normalize_event_time(cells.get("time") or "")
    return NormalizedPositionRow(
        source_file=source_file,
        market_symbol=market_symbol,
        net_exposure_notional=trade_value,
        cumulative_pnl_realized=realized_pnl,
        total_trading_fees=fee,
        opened_at=event_time,
        closed_at=event_time,
        position_id=None,
    )


ADAPTER = ExchangeAdapter(
    id="pacifica",
    label="Pacifica",
    schema=SCHEMA,
    normalize_row=normalize_trade_row,
)
