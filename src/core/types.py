"""Shared typed models.

This module defines immutable data models used by the parser,
normalizer, cache store, and insight layers to keep interfaces explicit.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Union

CellValue = Union[str, float, int, None]


@dataclass(frozen=True)
class RawRow:
    """Untyped sheet row produced by a parser.

    Fields map positionally onto the fixed sheet column order.

    Attributes:
        timestamp: Form submission timestamp text.
        date: Workout date text.
        workout_day: Workout category label.
        exercise_name: Exercise identifier.
        sets: Set count.
        reps: Repetitions per set.
        weight: Load per repetition.
        duration: Cardio duration in minutes.
        distance: Cardio distance in miles.
        notes: Free-text notes.
    """

    timestamp: CellValue = None
    date: CellValue = None
    workout_day: CellValue = None
    exercise_name: CellValue = None
    sets: CellValue = None
    reps: CellValue = None
    weight: CellValue = None
    duration: CellValue = None
    distance: CellValue = None
    notes: CellValue = None


@dataclass(frozen=True)
class WorkoutRecord:
    """Canonical normalized workout record.

    Attributes:
        date_key: ISO calendar date ``YYYY-MM-DD``.
        workout_date: Timezone-naive calendar date equal to ``date_key``.
        week_key: Monday on or before the workout date, ISO formatted.
        month_key: ``YYYY-MM`` bucket of the workout date.
        workout_day: Workout category label.
        exercise_name: Exercise identifier.
        sets: Optional set count.
        reps: Optional repetitions per set.
        weight: Optional load per repetition.
        duration: Optional cardio duration.
        distance: Optional cardio distance.
        notes: Free-text notes.
        volume: Sets x reps x weight, zero when any factor is missing.
        date_inferred: True when the source date was unreadable and the
            processing date was used instead.
    """

    date_key: str
    workout_date: date
    week_key: str
    month_key: str
    workout_day: str
    exercise_name: str
    sets: float | None
    reps: float | None
    weight: float | None
    duration: float | None
    distance: float | None
    notes: str
    volume: float
    date_inferred: bool = False


@dataclass(frozen=True)
class CacheEnvelope:
    """Persisted cache payload.

    Attributes:
        records: Cached normalized records.
        timestamp_ms: Write instant in epoch milliseconds.
    """

    records: tuple[WorkoutRecord, ...]
    timestamp_ms: int


@dataclass(frozen=True)
class RecordFilter:
    """Record filter constraints for dashboard slicing.

    Attributes:
        workout_day: Optional exact workout day match.
        exercise_name: Optional exact exercise match.
        date_from: Optional inclusive lower ISO date bound.
        date_to: Optional inclusive upper ISO date bound.
    """

    workout_day: str | None = None
    exercise_name: str | None = None
    date_from: str | None = None
    date_to: str | None = None


@dataclass(frozen=True)
class WorkoutSummary:
    """Headline statistics for a record set.

    Attributes:
        total_workout_days: Distinct dates with at least one record.
        workout_days_this_week: Distinct dates on or after this Monday.
        total_volume: Sum of record volume.
        streak_days: Consecutive days with records ending today or yesterday.
    """

    total_workout_days: int
    workout_days_this_week: int
    total_volume: float
    streak_days: int


@dataclass(frozen=True)
class WeeklyTrend:
    """One week of aggregated activity.

    Attributes:
        week_key: Monday of the week.
        workout_days: Distinct workout dates in the week.
        volume: Summed volume in the week.
    """

    week_key: str
    workout_days: int
    volume: float


@dataclass(frozen=True)
class ProgressPoint:
    """One dated observation of a single exercise.

    Attributes:
        date_key: ISO date of the observation.
        weight: Optional load.
        reps: Optional repetitions.
        distance: Optional distance.
        duration: Optional duration.
    """

    date_key: str
    weight: float | None
    reps: float | None
    distance: float | None
    duration: float | None


@dataclass(frozen=True)
class TargetPoint:
    """Projected long-run distance for one date.

    Attributes:
        date_key: ISO date of the long run.
        distance: Target distance at that date.
    """

    date_key: str
    distance: float


@dataclass(frozen=True)
class RunningProgress:
    """Running records split by category with a long-run target series.

    Attributes:
        long_runs: Long-run records in date order.
        mileage_runs: Mileage-run records in date order.
        long_run_targets: Ten-percent weekly growth targets for long runs.
    """

    long_runs: tuple[WorkoutRecord, ...]
    mileage_runs: tuple[WorkoutRecord, ...]
    long_run_targets: tuple[TargetPoint, ...]
