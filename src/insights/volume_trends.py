"""Aggregation series over workout records.

This module builds the week, month, exercise, and running series
that chart layers plot. It performs no rendering.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import date, timedelta

from core.constants import (
    HEATMAP_LOOKBACK_DAYS,
    HEATMAP_MAX_LEVEL,
    HEATMAP_WEEKS,
    LONG_RUN_WEEKLY_GROWTH,
    LONG_RUN_WORKOUT_DAY,
    MILEAGE_RUN_WORKOUT_DAY,
)
from core.types import ProgressPoint, RunningProgress, TargetPoint, WeeklyTrend, WorkoutRecord


def weekly_trends(records: list[WorkoutRecord]) -> list[WeeklyTrend]:
    """Return distinct workout days and volume per week, oldest first."""
    week_days: dict[str, set[str]] = defaultdict(set)
    week_volume: dict[str, float] = defaultdict(float)
    for record in records:
        week_days[record.week_key].add(record.date_key)
        week_volume[record.week_key] += record.volume
    return [
        WeeklyTrend(
            week_key=week_key,
            workout_days=len(week_days[week_key]),
            volume=week_volume[week_key],
        )
        for week_key in sorted(week_days)
    ]


def monthly_volume_by_workout_day(records: list[WorkoutRecord]) -> dict[str, dict[str, float]]:
    """Return volume per workout day for each month, months in order."""
    month_volume: dict[str, dict[str, float]] = defaultdict(lambda: defaultdict(float))
    for record in records:
        month_volume[record.month_key][record.workout_day] += record.volume
    return {month_key: dict(month_volume[month_key]) for month_key in sorted(month_volume)}


def volume_by_exercise(records: list[WorkoutRecord]) -> list[tuple[str, float]]:
    """Return total positive volume per exercise, largest first."""
    totals: dict[str, float] = defaultdict(float)
    for record in records:
        if record.volume > 0:
            totals[record.exercise_name] += record.volume
    return sorted(totals.items(), key=lambda item: item[1], reverse=True)


def workout_day_distribution(records: list[WorkoutRecord]) -> dict[str, int]:
    """Return record counts per workout day."""
    counts: dict[str, int] = defaultdict(int)
    for record in records:
        counts[record.workout_day] += 1
    return dict(counts)


def daily_workout_counts(
    records: list[WorkoutRecord],
    today: date | None = None,
) -> list[tuple[str, int]]:
    """Return per-day activity levels for a year-long calendar grid.

    The window starts on the Sunday on or before the date 364 days ago
    and spans 53 full weeks. Each level counts the distinct workout days
    logged on that date, capped at 4.

    Args:
        records: Records of any category.
        today: Reference date, defaults to the current date.

    Returns:
        ``(date_key, level)`` pairs in calendar order.
    """
    day_workouts: dict[str, set[str]] = defaultdict(set)
    for record in records:
        day_workouts[record.date_key].add(record.workout_day)
    window_start = (today or date.today()) - timedelta(days=HEATMAP_LOOKBACK_DAYS)
    window_start -= timedelta(days=window_start.isoweekday() % 7)
    counts: list[tuple[str, int]] = []
    for offset in range(HEATMAP_WEEKS * 7):
        date_key = (window_start + timedelta(days=offset)).isoformat()
        counts.append((date_key, min(len(day_workouts.get(date_key, ())), HEATMAP_MAX_LEVEL)))
    return counts


def exercise_progress(records: list[WorkoutRecord], exercise_name: str) -> list[ProgressPoint]:
    """Return dated observations for a single exercise in record order."""
    return [
        ProgressPoint(
            date_key=record.date_key,
            weight=record.weight,
            reps=record.reps,
            distance=record.distance,
            duration=record.duration,
        )
        for record in records
        if record.exercise_name == exercise_name
    ]


def running_progress(records: list[WorkoutRecord]) -> RunningProgress:
    """Split running records and project a 10% weekly long-run target.

    The target starts at the first long run's distance (1 when missing)
    and compounds per elapsed week.

    Args:
        records: Records of any category.

    Returns:
        Long runs, mileage runs, and long-run targets.
    """
    runs = sorted(
        (
            record
            for record in records
            if record.workout_day in (LONG_RUN_WORKOUT_DAY, MILEAGE_RUN_WORKOUT_DAY)
        ),
        key=lambda record: record.workout_date,
    )
    long_runs = tuple(record for record in runs if record.workout_day == LONG_RUN_WORKOUT_DAY)
    mileage_runs = tuple(record for record in runs if record.workout_day == MILEAGE_RUN_WORKOUT_DAY)
    return RunningProgress(
        long_runs=long_runs,
        mileage_runs=mileage_runs,
        long_run_targets=_long_run_targets(long_runs),
    )


def _long_run_targets(long_runs: tuple[WorkoutRecord, ...]) -> tuple[TargetPoint, ...]:
    if not long_runs:
        return ()
    first_run = long_runs[0]
    first_distance = first_run.distance or 1
    targets: list[TargetPoint] = []
    for record in long_runs:
        weeks_elapsed = max(0, (record.workout_date - first_run.workout_date).days / 7)
        targets.append(
            TargetPoint(
                date_key=record.date_key,
                distance=round(first_distance * LONG_RUN_WEEKLY_GROWTH**weeks_elapsed, 2),
            )
        )
    return tuple(targets)
