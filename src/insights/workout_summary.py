"""Headline statistics over workout records.

This module computes the dashboard summary figures: distinct workout
days, days trained this week, total volume, and the current streak.
"""

from __future__ import annotations

from datetime import date, timedelta

from core.constants import MAX_STREAK_DAYS
from core.types import WorkoutRecord, WorkoutSummary
from transforms.row_normalization import build_week_key


def summarize_records(records: list[WorkoutRecord], today: date | None = None) -> WorkoutSummary:
    """Compute summary statistics for a record set.

    Args:
        records: Records to summarize.
        today: Reference date, defaults to the current date.

    Returns:
        Summary statistics.
    """
    reference_date = today or date.today()
    date_keys = {record.date_key for record in records}
    monday_key = build_week_key(reference_date)
    return WorkoutSummary(
        total_workout_days=len(date_keys),
        workout_days_this_week=sum(1 for date_key in date_keys if date_key >= monday_key),
        total_volume=sum(record.volume for record in records),
        streak_days=compute_streak(date_keys, reference_date),
    )


def compute_streak(date_keys: set[str], today: date) -> int:
    """Count consecutive workout days ending today, or yesterday if today is empty."""
    cursor = today
    if cursor.isoformat() not in date_keys:
        cursor -= timedelta(days=1)
    streak = 0
    while streak < MAX_STREAK_DAYS and cursor.isoformat() in date_keys:
        streak += 1
        cursor -= timedelta(days=1)
    return streak


def format_volume(value: float) -> str:
    """Render a volume as ``1.2M``, ``3.4K``, or the plain number."""
    if value >= 1_000_000:
        return f"{value / 1_000_000:.1f}M"
    if value >= 1000:
        return f"{value / 1000:.1f}K"
    if float(value).is_integer():
        return str(int(value))
    return str(value)
