"""
Locale-tolerant number parsing for exchange CSV cells and user inputs.

Exports mix US ("1,234.56") and European ("1.234,56") conventions, sometimes
in the same file. parse_locale_number() is the single decision table used
everywhere a number is read:

    both ',' and '.'      -> the separator appearing last is the decimal
                             point; every occurrence of the other is dropped
    one kind, 0 times     -> parse as-is
    one kind, 2+ times    -> all occurrences are thousands separators
    one kind, exactly 1   -> thousands separator iff the left part has 1-3
                             digits (not all zeros) and the right part is
                             exactly 3 chars; decimal point otherwise

So "1.234" is 1234.0 but "0.566" and "12345.678" stay decimals.
"""

from __future__ import annotations

import math
import re
from typing import Any, Optional

import numpy as np

_WHITESPACE_RE = re.compile(r"\s+")
_LEADING_SIGN_RE = re.compile(r"^[+-]")
_LEADING_ZEROS_RE = re.compile(r"^0+(?=\d)")
_MONETARY_JUNK_RE = re.compile(r"[^\d.,+-]")
_SIGN_RE = re.compile(r"[+-]")


def _to_finite(text: str) -> Optional[float]:
    # float() also accepts "1_000", "inf", "nan" and non-ASCII digits; none of those are numbers here
    if "_" in text or not text.isascii():
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def _parse_single_separator(value: str, separator: str) -> Optional[float]:
    occurrences = value.count(separator)
    if occurrences == 0:
        return _to_finite(value)

    if occurrences > 1:
        return _to_finite(value.replace(separator, ""))

    left, right = value.split(separator)
    left_digits = _LEADING_SIGN_RE.sub("", left)
    normalized_left = _LEADING_ZEROS_RE.sub("", left_digits) or "0"
    is_thousands = (
        len(right) == 3
        and 0 < len(left_digits) <= 3
        and normalized_left != "0"
    )
    if is_thousands:
        return _to_finite(value.replace(separator, "", 1))

    return _to_finite(value.replace(",", ".", 1) if separator == "," else value)


def _numeric_scalar(value: Any) -> Optional[float]:
    """Accept plain and numpy numbers (pandas cells) but never booleans."""
    if isinstance(value, (bool, np.bool_)):
        return None
    if isinstance(value, (int, float, np.integer, np.floating)):
        number = float(value)
        return number if math.isfinite(number) else None
    return None


def parse_locale_number(raw: Any) -> Optional[float]:
    """Parse a locale-formatted number. Returns None instead of raising."""
    if not isinstance(raw, str):
        return _numeric_scalar(raw)

    value = _WHITESPACE_RE.sub("", raw)
    if not value:
        return None

    has_comma = "," in value
    has_dot = "." in value

    if has_comma and has_dot:
        if value.rfind(",") > value.rfind("."):
            normalized = value.replace(".", "").replace(",", ".", 1)
        else:
            normalized = value.replace(",", "")
        return _to_finite(normalized)

    if has_comma:
        return _parse_single_separator(value, ",")
    if has_dot:
        return _parse_single_separator(value, ".")
    return _to_finite(value)


def parse_monetary_value(raw: Any) -> Optional[float]:
    """Parse a currency cell like "$16.8", "+$0.11" or "-$1.234,50".

    Any '-' found in the cell makes the value negative, wherever it sits,
    so "$-0.2" and "-$0.2" agree.
    """
    if not isinstance(raw, str):
        return _numeric_scalar(raw)

    trimmed = raw.strip()
    if not trimmed:
        return None

    cleaned = _WHITESPACE_RE.sub("", trimmed).replace("$", "")
    cleaned = _MONETARY_JUNK_RE.sub("", cleaned)
    if not cleaned:
        return None

    sign = "-" if "-" in cleaned else ""
    unsigned = _SIGN_RE.sub("", cleaned)
    if not unsigned:
        return None

    return parse_locale_number(f"{sign}{unsigned}")
