"""Raw row normalization transform.

This module converts parsed sheet rows into typed workout records.
It resolves dates, derives week/month keys and volume, and drops rows
without an identified exercise.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
import math
from typing import Iterable

from dateutil import parser as date_parser

from core.constants import DEFAULT_WORKOUT_DAY, UNKNOWN_EXERCISE_NAME
from core.logging_config import get_logger
from core.types import CellValue, RawRow, WorkoutRecord

_LOGGER = get_logger(__name__)

_COMPLETENESS_CHECK_SHIFT = timedelta(days=400)


def normalize_rows(rows: Iterable[RawRow], now: datetime | None = None) -> list[WorkoutRecord]:
    """Normalize, filter, and order a batch of raw rows.

    Args:
        rows: Parsed raw rows from one transport.
        now: Processing instant used for unresolvable dates.

    Returns:
        Records with an identified exercise, sorted by workout date.
    """
    processing_instant = now or datetime.now()
    input_count = 0
    records: list[WorkoutRecord] = []
    for row in rows:
        input_count += 1
        record = normalize_row(row, processing_instant)
        if record.exercise_name == UNKNOWN_EXERCISE_NAME:
            continue
        records.append(record)
    records.sort(key=lambda record: record.workout_date)
    _LOGGER.info(
        "rows_normalized",
        input_count=input_count,
        output_count=len(records),
        dropped_count=input_count - len(records),
        inferred_date_count=sum(1 for record in records if record.date_inferred),
    )
    return records


def normalize_row(row: RawRow, now: datetime | None = None) -> WorkoutRecord:
    """Convert one raw row into a workout record.

    Args:
        row: Parsed raw row.
        now: Processing instant used when the row date is unreadable.

    Returns:
        Normalized record. Rows without an exercise name keep the
        ``"Unknown"`` placeholder so batch normalization can drop them.
    """
    sets = coerce_number(row.sets)
    reps = coerce_number(row.reps)
    weight = coerce_number(row.weight)
    workout_date, date_inferred = resolve_workout_date(row, now)
    return WorkoutRecord(
        date_key=workout_date.isoformat(),
        workout_date=workout_date,
        week_key=build_week_key(workout_date),
        month_key=build_month_key(workout_date),
        workout_day=_text_or_default(row.workout_day, DEFAULT_WORKOUT_DAY),
        exercise_name=_text_or_default(row.exercise_name, UNKNOWN_EXERCISE_NAME),
        sets=sets,
        reps=reps,
        weight=weight,
        duration=coerce_number(row.duration),
        distance=coerce_number(row.distance),
        notes=_text_or_default(row.notes, ""),
        volume=compute_volume(sets, reps, weight),
        date_inferred=date_inferred,
    )


def coerce_number(value: CellValue) -> float | None:
    """Coerce a cell value to float, returning None when absent or non-numeric."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    if math.isnan(number):
        return None
    return number


def compute_volume(sets: float | None, reps: float | None, weight: float | None) -> float:
    """Return sets x reps x weight when all are present and non-zero, else zero."""
    if sets and reps and weight:
        return sets * reps * weight
    return 0


def resolve_workout_date(row: RawRow, now: datetime | None = None) -> tuple[date, bool]:
    """Resolve the calendar date of a row.

    The ``date`` column wins over ``timestamp``. Unreadable values fall
    back to the processing date and are reported as inferred. Partial
    values such as ``"March"`` take their missing fields from the
    processing date and are reported as inferred too.

    Args:
        row: Parsed raw row.
        now: Processing instant for the fallback.

    Returns:
        Tuple of resolved date and whether it was inferred.
    """
    processing_instant = now or datetime.now()
    date_text = _first_present_text(row.date, row.timestamp)
    if date_text:
        general_date = _parse_general_date(date_text, processing_instant)
        if general_date is not None:
            parsed_date, complete = general_date
            if not complete:
                _LOGGER.warning(
                    "row_date_partial",
                    raw_date=date_text,
                    resolved_date=parsed_date.isoformat(),
                )
            return parsed_date, not complete
        parsed_date = _parse_month_day_year(date_text)
        if parsed_date is not None:
            return parsed_date, False
    fallback_date = processing_instant.date()
    _LOGGER.warning(
        "row_date_unresolved",
        raw_date=date_text,
        exercise_name=str(row.exercise_name) if row.exercise_name is not None else None,
        fallback_date=fallback_date.isoformat(),
    )
    return fallback_date, True


def build_week_key(workout_date: date) -> str:
    """Return the Monday on or before the date as an ISO string."""
    day_number = workout_date.isoweekday() % 7
    offset = -6 if day_number == 0 else 1 - day_number
    return (workout_date + timedelta(days=offset)).isoformat()


def build_month_key(workout_date: date) -> str:
    """Return the ``YYYY-MM`` bucket of the date."""
    return f"{workout_date.year:04d}-{workout_date.month:02d}"


def _parse_general_date(date_text: str, default: datetime) -> tuple[date, bool] | None:
    """Parse common date and date-time spellings, month first.

    Fields missing from the text are filled from ``default``.

    Returns:
        Parsed date and whether the text named year, month, and day,
        or None when the text is not a date.
    """
    try:
        parsed_date = date_parser.parse(date_text, default=default).date()
        # The shifted default differs in every calendar field.
        shifted_date = date_parser.parse(
            date_text, default=default - _COMPLETENESS_CHECK_SHIFT
        ).date()
    except (ValueError, OverflowError):
        return None
    return parsed_date, parsed_date == shifted_date


def _parse_month_day_year(date_text: str) -> date | None:
    """Parse an ``M/D/YYYY`` value."""
    parts = date_text.split("/")
    if len(parts) != 3:
        return None
    try:
        month, day, year = (int(part.strip()) for part in parts)
        return date(year, month, day)
    except ValueError:
        return None


def _first_present_text(*values: CellValue) -> str | None:
    """Return the first non-empty value as text."""
    for value in values:
        if value is None:
            continue
        text = str(value).strip()
        if text:
            return text
    return None


def _text_or_default(value: CellValue, default: str) -> str:
    """Return the value as stripped text, or the default when empty."""
    if value is None:
        return default
    text = str(value).strip()
    return text or default
