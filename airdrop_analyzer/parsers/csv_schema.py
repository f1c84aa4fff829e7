"""
CSV schema contracts and the raw tokenizer shared by all exchange adapters.

A schema is the exact, ordered column list an export must carry. Headers are
canonicalized first ("Trade Value" -> "trade_value", "marketSymbol" ->
"market_symbol" via the alias table), then compared element-for-element.
"""

from __future__ import annotations

import csv
import io
import re
from dataclasses import dataclass, field
from typing import Mapping

from airdrop_analyzer.models import ParseIssue
from airdrop_analyzer.parsers import diagnostics

_SEPARATOR_RUN_RE = re.compile(r"[\s-]+")
_UNDERSCORE_RUN_RE = re.compile(r"__+")


@dataclass(frozen=True)
class ExchangeSchema:
    """Canonical header contract for one exchange export."""

    label: str  # display name, e.g. "Backpack"
    export_name: str  # e.g. "position_history"
    columns: tuple[str, ...]
    required: tuple[str, ...]
    aliases: Mapping[str, str] = field(default_factory=dict)

    def canonicalize(self, header: str) -> str:
        return canonicalize_header(header, self.aliases)

    def validate_header(self, headers: list[str]) -> list[ParseIssue]:
        """Exact-count, then exact-order check of canonical headers."""
        if len(headers) != len(self.columns):
            return [diagnostics.column_count_mismatch(len(self.columns), len(headers))]

        if tuple(headers) != self.columns:
            return diagnostics.column_sequence_mismatch(
                self.label, self.export_name, self.columns, headers,
            )
        return []

    def missing_required(self, headers: list[str]) -> list[str]:
        present = set(headers)
        return [column for column in self.required if column not in present]


def compact_header(header: str) -> str:
    """Trim, lowercase, and fold whitespace/hyphen runs into single underscores."""
    value = header.strip().lstrip("\ufeff").strip().lower()
    value = _SEPARATOR_RUN_RE.sub("_", value)
    return _UNDERSCORE_RUN_RE.sub("_", value)


def canonicalize_header(header: str, aliases: Mapping[str, str]) -> str:
    normalized = compact_header(header)
    collapsed = normalized.replace("_", "")
    if normalized in aliases:
        return aliases[normalized]
    if collapsed in aliases:
        return aliases[collapsed]
    return normalized


# ---------------------------------------------------------------------------
# Raw tokenizer
# ---------------------------------------------------------------------------

@dataclass
class CsvRecords:
    """Tokenizer output: header cells, data records, structural problems."""

    header: list[str] = field(default_factory=list)
    records: list[list[str]] = field(default_factory=list)
    problems: list[str] = field(default_factory=list)


def _is_blank(record: list[str]) -> bool:
    return not any(cell.strip() for cell in record)


def read_csv_records(text: str) -> CsvRecords:
    """Tokenize CSV text without raising.

    The first non-blank record is the header. Blank records are skipped.
    Records narrower or wider than the header are kept (padded/truncated to
    the header width) but reported as problems; a quoting error stops
    tokenizing and keeps what was read so far.
    """
    result = CsvRecords()
    reader = csv.reader(io.StringIO(text), strict=True)

    while True:
        try:
            record = next(reader)
        except StopIteration:
            break
        except csv.Error as e:
            result.problems.append(f"line {reader.line_num}: {e}")
            break

        if _is_blank(record):
            continue

        if not result.header:
            result.header = record
            continue

        width = len(result.header)
        if len(record) != width:
            result.problems.append(
                f"line {reader.line_num}: expected {width} fields, found {len(record)}"
            )
            record = (record + [""] * width)[:width]

        result.records.append(record)

    return result
