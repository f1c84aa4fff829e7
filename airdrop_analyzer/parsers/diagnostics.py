"""File-level diagnostic codes and their display messages.

Codes are stable identifiers for callers that branch on the failure kind;
messages are for people and may change wording.
"""

from __future__ import annotations

from enum import Enum
from typing import Sequence

from airdrop_analyzer.models import ParseIssue


class IssueCode(str, Enum):
    UNSUPPORTED_FILE_TYPE = "unsupported_file_type"
    FILE_READ_ERROR = "file_read_error"
    SCHEMA_UNRECOGNIZED = "schema_unrecognized"
    COLUMN_COUNT_MISMATCH = "column_count_mismatch"
    COLUMN_SEQUENCE_MISMATCH = "column_sequence_mismatch"
    EXPECTED_HEADER = "expected_header"
    RECEIVED_HEADER = "received_header"
    MISSING_REQUIRED_COLUMN = "missing_required_column"
    RAW_PARSE_ERROR = "raw_parse_error"
    NO_VALID_ROWS = "no_valid_rows"


def _issue(code: IssueCode, message: str) -> ParseIssue:
    return ParseIssue(code=code.value, message=message)


def unsupported_file_type() -> ParseIssue:
    return _issue(IssueCode.UNSUPPORTED_FILE_TYPE, "Only .csv files are accepted")


def file_read_error(detail: str) -> ParseIssue:
    return _issue(IssueCode.FILE_READ_ERROR, f"Could not read file: {detail}")


def schema_unrecognized(label: str, export_name: str) -> ParseIssue:
    return _issue(
        IssueCode.SCHEMA_UNRECOGNIZED,
        f"File does not look like a {label} {export_name} export.",
    )


def column_count_mismatch(expected: int, received: int) -> ParseIssue:
    return _issue(
        IssueCode.COLUMN_COUNT_MISMATCH,
        f"Invalid column count: expected {expected}, received {received}",
    )


def column_sequence_mismatch(
    label: str,
    export_name: str,
    expected: Sequence[str],
    received: Sequence[str],
) -> list[ParseIssue]:
    return [
        _issue(
            IssueCode.COLUMN_SEQUENCE_MISMATCH,
            f"Invalid column sequence for {label} {export_name}.",
        ),
        _issue(IssueCode.EXPECTED_HEADER, f"Expected: {','.join(expected)}"),
        _issue(IssueCode.RECEIVED_HEADER, f"Received: {','.join(received)}"),
    ]


def missing_required_column(column: str) -> ParseIssue:
    return _issue(IssueCode.MISSING_REQUIRED_COLUMN, f"Missing required column: {column}")


def raw_parse_error() -> ParseIssue:
    return _issue(IssueCode.RAW_PARSE_ERROR, "Could not read CSV. Check the file format.")


def no_valid_rows() -> ParseIssue:
    return _issue(IssueCode.NO_VALID_ROWS, "No valid rows found")
