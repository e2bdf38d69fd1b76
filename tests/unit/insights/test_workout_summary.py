"""Unit tests for summary statistics."""

from __future__ import annotations

from datetime import date

from core.types import RawRow, WorkoutRecord
from insights.workout_summary import compute_streak, format_volume, summarize_records
from transforms.row_normalization import normalize_rows


def _records(*dates: str) -> list[WorkoutRecord]:
    return normalize_rows(
        [
            RawRow(date=date_key, exercise_name="Bench Press", sets=3, reps=10, weight=100)
            for date_key in dates
        ]
    )


def test_summarize_counts_distinct_days_and_volume() -> None:
    """Two records on one day count as one workout day."""
    records = _records("2024-03-04", "2024-03-04", "2024-03-06")

    summary = summarize_records(records, today=date(2024, 3, 6))

    assert (summary.total_workout_days, summary.total_volume) == (2, 9000)


def test_summarize_counts_days_this_week() -> None:
    """Only dates on or after this week's Monday count."""
    records = _records("2024-03-01", "2024-03-04", "2024-03-05")

    summary = summarize_records(records, today=date(2024, 3, 7))

    assert summary.workout_days_this_week == 2


def test_streak_counts_back_from_today() -> None:
    """Consecutive days ending today form the streak."""
    date_keys = {"2024-03-05", "2024-03-06", "2024-03-07", "2024-03-03"}

    assert compute_streak(date_keys, date(2024, 3, 7)) == 3


def test_streak_starts_yesterday_when_today_is_empty() -> None:
    """A rest day today does not break the streak yet."""
    date_keys = {"2024-03-05", "2024-03-06"}

    assert compute_streak(date_keys, date(2024, 3, 7)) == 2


def test_streak_is_zero_after_gap() -> None:
    """No workout today or yesterday means no streak."""
    assert compute_streak({"2024-03-01"}, date(2024, 3, 7)) == 0


def test_format_volume_uses_suffixes() -> None:
    """Large volumes are abbreviated."""
    assert [format_volume(2_500_000), format_volume(3240), format_volume(950)] == [
        "2.5M",
        "3.2K",
        "950",
    ]
