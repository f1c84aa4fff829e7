"""Display helpers. None / non-finite values render as "--", never as 0."""

from __future__ import annotations

import math
from typing import Optional

from airdrop_analyzer.parsers.exchange_adapter import parse_timestamp

PLACEHOLDER = "--"

_COMPACT_SUFFIXES = ((1e12, "T"), (1e9, "B"), (1e6, "M"), (1e3, "K"))


def _missing(value: Optional[float]) -> bool:
    return value is None or not math.isfinite(value)


def _compact(value: float) -> str:
    magnitude = abs(value)
    for threshold, suffix in _COMPACT_SUFFIXES:
        if magnitude >= threshold:
            return f"{value / threshold:,.2f}{suffix}"
    return f"{value:,.2f}"


def format_usd(value: Optional[float]) -> str:
    if _missing(value):
        return PLACEHOLDER
    if value < 0:
        return f"-${abs(value):,.2f}"
    return f"${value:,.2f}"


def format_usd_smart(value: Optional[float]) -> str:
    """Compact notation ("$1.50B") from one billion up."""
    if _missing(value):
        return PLACEHOLDER
    if abs(value) >= 1e9:
        sign = "-" if value < 0 else ""
        return f"{sign}${_compact(abs(value))}"
    return format_usd(value)


def format_number(value: Optional[float], fraction_digits: int = 2) -> str:
    if _missing(value):
        return PLACEHOLDER
    text = f"{value:,.{fraction_digits}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_number_smart(value: Optional[float], fraction_digits: int = 2) -> str:
    if _missing(value):
        return PLACEHOLDER
    if abs(value) >= 1e9:
        return _compact(value)
    return format_number(value, fraction_digits)


def format_percent(value: Optional[float]) -> str:
    """0.134 -> "13.4%"."""
    if _missing(value):
        return PLACEHOLDER
    return f"{format_number(value * 100)}%"


def format_period(min_opened_at: Optional[str], max_closed_at: Optional[str]) -> str:
    """Render the range as "start -> end" in UTC, minute precision."""
    if not min_opened_at and not max_closed_at:
        return PLACEHOLDER

    def _fmt(raw: Optional[str]) -> str:
        if not raw:
            return PLACEHOLDER
        parsed = parse_timestamp(raw)
        if parsed is None:
            return PLACEHOLDER
        return parsed.strftime("%Y-%m-%d %H:%M")

    return f"{_fmt(min_opened_at)} -> {_fmt(max_closed_at)}"
