"""
Exchange adapter: CSV text -> normalized rows + per-file diagnostics.

An adapter is data, not a subclass: an ExchangeSchema (header contract) plus
a row normalizer that turns one canonical-keyed record into a
NormalizedPositionRow, or None when a required field is empty/unparseable.
Every failure is recorded on the FileParseResult; nothing here raises for
bad input, so one broken file never stops a batch.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, Iterable, Mapping, Optional, Union

import pandas as pd

from airdrop_analyzer.models import (
    ExchangeParseResult,
    FileParseResult,
    NormalizedPositionRow,
    ParseIssue,
    RawFile,
)
from airdrop_analyzer.parsers import diagnostics
from airdrop_analyzer.parsers.csv_schema import ExchangeSchema, read_csv_records

logger = logging.getLogger(__name__)

RowNormalizer = Callable[[Mapping[str, str], str], Optional[NormalizedPositionRow]]
FileInput = Union[RawFile, tuple[str, str]]

# pandas reads "now" / "today" as the current time; exported dates start with a digit
_DATE_START_RE = re.compile(r"^\s*[0-9]")


# ---------------------------------------------------------------------------
# Timestamp range tracking
# ---------------------------------------------------------------------------

def parse_timestamp(value: Optional[str]) -> Optional[pd.Timestamp]:
    """Parse an exported timestamp; None when empty or unparseable.

    Naive values are read as UTC so they compare with offset-aware ones.
    """
    if not value or not _DATE_START_RE.match(value):
        return None
    try:
        parsed = pd.to_datetime(value, utc=True, errors="coerce")
    except (ValueError, TypeError, OverflowError):
        return None
    if parsed is None or pd.isna(parsed):
        return None
    return parsed


class DateRange:
    """Running earliest opened_at / latest closed_at, keeping the raw strings."""

    def __init__(self) -> None:
        self.min_opened_at: Optional[str] = None
        self.max_closed_at: Optional[str] = None
        self._min_ts: Optional[pd.Timestamp] = None
        self._max_ts: Optional[pd.Timestamp] = None

    def update(self, opened_at: Optional[str], closed_at: Optional[str]) -> None:
        opened_ts = parse_timestamp(opened_at)
        if opened_ts is not None and (self._min_ts is None or opened_ts < self._min_ts):
            self._min_ts = opened_ts
            self.min_opened_at = opened_at

        closed_ts = parse_timestamp(closed_at)
        if closed_ts is not None and (self._max_ts is None or closed_ts > self._max_ts):
            self._max_ts = closed_ts
            self.max_closed_at = closed_at


# ---------------------------------------------------------------------------
# Adapter
# ---------------------------------------------------------------------------

def _coerce_file(item: FileInput) -> RawFile:
    if isinstance(item, RawFile):
        return item
    name, content = item
    return RawFile(name=name, content=content)


@dataclass(frozen=True)
class ExchangeAdapter:
    """Parse one exchange's CSV exports into an ExchangeParseResult."""

    id: str
    label: str
    schema: ExchangeSchema
    normalize_row: RowNormalizer

    def parse_csv_text(self, text: str, source_file: str) -> FileParseResult:
        """Parse one file's CSV text. Never raises on malformed content."""
        raw = read_csv_records(text)
        headers = [self.schema.canonicalize(h) for h in raw.header]
        rows_total = len(raw.records)

        header_issues = self.schema.validate_header(headers)
        missing = self.schema.missing_required(headers)
        if header_issues or missing:
            logger.warning(
                "[%s] %s rejected: header %s does not match %s",
                self.label, source_file, headers, self.schema.export_name,
            )
            issues: list[ParseIssue] = [
                diagnostics.schema_unrecognized(self.label, self.schema.export_name),
                *header_issues,
                *(diagnostics.missing_required_column(c) for c in missing),
            ]
            return FileParseResult.failed(source_file, issues, rows_total=rows_total)

        rows: list[NormalizedPositionRow] = []
        rows_invalid = 0
        date_range = DateRange()

        for record in raw.records:
            cells = dict(zip(headers, record))
            row = self.normalize_row(cells, source_file)
            if row is None:
                rows_invalid += 1
                continue
            rows.append(row)
            date_range.update(row.opened_at, row.closed_at)

        issues = []
        if raw.problems:
            logger.debug("[%s] %s tokenizer problems: %s", self.label, source_file, raw.problems)
            issues.append(diagnostics.raw_parse_error())
        if not rows:
            issues.append(diagnostics.no_valid_rows())

        status = "error" if issues else "ok"
        logger.info(
            "[%s] %s: %d valid / %d invalid of %d rows (%s)",
            self.label, source_file, len(rows), rows_invalid, rows_total, status,
        )
        return FileParseResult(
            source_file=source_file,
            rows_total=rows_total,
            rows_valid=len(rows),
            rows_invalid=rows_invalid,
            min_opened_at=date_range.min_opened_at,
            max_closed_at=date_range.max_closed_at,
            status=status,
            issues=issues,
            rows=rows,
        )

    def parse_file(self, item: FileInput) -> FileParseResult:
        file = _coerce_file(item)

        if not file.name.lower().endswith(".csv"):
            logger.info("[%s] %s skipped: not a .csv file", self.label, file.name)
            return FileParseResult.failed(file.name, [diagnostics.unsupported_file_type()])

        if file.read_error is not None or file.content is None:
            detail = file.read_error or "no content"
            logger.warning("[%s] %s could not be read: %s", self.label, file.name, detail)
            return FileParseResult.failed(file.name, [diagnostics.file_read_error(detail)])

        return self.parse_csv_text(file.content, file.name)

    def parse_files(self, files: Iterable[FileInput]) -> ExchangeParseResult:
        """Parse a batch in order; only files with status "ok" contribute rows."""
        result = ExchangeParseResult(exchange_id=self.id)
        for item in files:
            file_result = self.parse_file(item)
            result.files.append(file_result)
            if file_result.status == "ok":
                result.rows.extend(file_result.rows)
        return result


def cell(cells: Mapping[str, str], column: str) -> str:
    """Trimmed cell value; missing columns read as empty."""
    return (cells.get(column) or "").strip()

