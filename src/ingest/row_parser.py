"""Sheet payload parsers.

This module decodes the gviz JSON envelope and the CSV export
into ``RawRow`` values with the fixed sheet column layout.
"""

from __future__ import annotations

import csv
from datetime import date
import io
import json
import re
from typing import Any

from core.constants import (
    FORMATTED_DATE_COLUMNS,
    GVIZ_DATE_PREFIX,
    NUMERIC_COLUMNS,
    SHEET_COLUMNS,
)
from core.errors import FitlogParseError
from core.types import CellValue, RawRow

_GVIZ_ENVELOPE_PATTERN = re.compile(
    r"google\.visualization\.Query\.setResponse\(({.*})\)", re.DOTALL
)
_LEADING_NON_BRACE_PATTERN = re.compile(r"^[^{]*")
_TRAILING_CALL_PATTERN = re.compile(r"\);?\s*$")
_LEADING_FLOAT_PATTERN = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_gviz_response(text: str) -> dict[str, Any]:
    """Extract the JSON payload from a gviz callback envelope.

    Args:
        text: Raw response body, usually
            ``google.visualization.Query.setResponse({...});``.

    Returns:
        Decoded JSON object.

    Raises:
        FitlogParseError: If the body does not contain a JSON object.
    """
    match = _GVIZ_ENVELOPE_PATTERN.search(text)
    if match:
        json_text = match.group(1)
    else:
        json_text = _TRAILING_CALL_PATTERN.sub("", _LEADING_NON_BRACE_PATTERN.sub("", text))
    try:
        payload = json.loads(json_text)
    except json.JSONDecodeError as error:
        raise FitlogParseError(
            f"Failed to decode gviz response: {error.msg} at position {error.pos}."
        ) from error
    if not isinstance(payload, dict):
        raise FitlogParseError("Failed to decode gviz response: expected a JSON object.")
    return payload


def gviz_to_rows(payload: dict[str, Any]) -> list[RawRow]:
    """Map gviz table rows onto the fixed sheet columns.

    Args:
        payload: Decoded gviz JSON object.

    Returns:
        One raw row per table row.

    Raises:
        FitlogParseError: If the payload carries no table rows.
    """
    table = payload.get("table")
    rows = table.get("rows") if isinstance(table, dict) else None
    if not isinstance(rows, list):
        status = payload.get("status", "unknown")
        raise FitlogParseError(
            f"Invalid gviz payload: missing table rows (status={status})."
        )
    return [_gviz_row_to_raw_row(row, row_index) for row_index, row in enumerate(rows)]


def parse_csv_rows(text: str) -> list[RawRow]:
    """Parse CSV export text into raw rows, skipping the header record.

    Quoted fields may span lines, so the whole body is tokenized at once.

    Args:
        text: CSV body with a header row.

    Returns:
        One raw row per non-empty data record.

    Raises:
        FitlogParseError: If the body cannot be tokenized.
    """
    reader = csv.reader(io.StringIO(text.strip()), skipinitialspace=True)
    try:
        records = list(reader)
    except csv.Error as error:
        raise FitlogParseError(f"Failed to parse CSV line {reader.line_num}: {error}") from error
    rows: list[RawRow] = []
    for values in records[1:]:
        stripped_values = [value.strip() for value in values]
        if not any(stripped_values):
            continue
        rows.append(_csv_values_to_raw_row(stripped_values))
    return rows


def parse_csv_line(line: str) -> list[str]:
    """Split one CSV line honoring double-quoted fields.

    An unterminated quoted field runs to the end of the line.

    Args:
        line: Single CSV line.

    Returns:
        Whitespace-trimmed field values.
    """
    values = next(csv.reader([line], skipinitialspace=True), [])
    return [value.strip() for value in values] or [""]


def _gviz_row_to_raw_row(row: Any, row_index: int) -> RawRow:
    """Decode one gviz row into a raw row."""
    cells = row.get("c") if isinstance(row, dict) else None
    if not isinstance(cells, list):
        raise FitlogParseError(f"Invalid gviz payload: row {row_index} has no cell list.")
    fields: dict[str, CellValue] = {}
    for column, cell in zip(SHEET_COLUMNS, cells):
        fields[column] = _decode_gviz_cell(column, cell)
    return RawRow(**fields)


def _decode_gviz_cell(column: str, cell: Any) -> CellValue:
    """Decode one gviz cell ``{v: value, f?: formatted}``."""
    if not isinstance(cell, dict) or cell.get("v") is None:
        return None
    value = cell["v"]
    if isinstance(value, str) and value.startswith(GVIZ_DATE_PREFIX):
        return _gviz_date_literal_to_iso(value)
    formatted = cell.get("f")
    if formatted and column in FORMATTED_DATE_COLUMNS:
        return str(formatted)
    return value


def _gviz_date_literal_to_iso(literal: str) -> str:
    """Convert ``Date(year,month,day[,...])`` with zero-based month to ISO.

    Args:
        literal: gviz date literal.

    Returns:
        ISO calendar date string.

    Raises:
        FitlogParseError: If the literal is malformed.
    """
    inner = literal[len(GVIZ_DATE_PREFIX) :].rstrip(")")
    try:
        year, month, day = (int(part) for part in inner.split(",")[:3])
        return date(year, month + 1, day).isoformat()
    except ValueError as error:
        raise FitlogParseError(f"Invalid gviz date literal '{literal}': {error}") from error


def _csv_values_to_raw_row(values: list[str]) -> RawRow:
    """Map positional CSV values onto sheet columns."""
    fields: dict[str, CellValue] = {}
    for index, column in enumerate(SHEET_COLUMNS):
        raw_value = values[index] if index < len(values) else ""
        if column in NUMERIC_COLUMNS:
            fields[column] = _parse_leading_float(raw_value)
        else:
            fields[column] = raw_value or None
    return RawRow(**fields)


def _parse_leading_float(raw_value: str) -> float | None:
    """Parse the leading numeric prefix of a value, or None when absent."""
    match = _LEADING_FLOAT_PATTERN.match(raw_value.strip())
    if not match:
        return None
    return float(match.group(0))
