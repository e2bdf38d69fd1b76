"""Record filtering helpers.

This module applies dashboard filter constraints to record sets.
It keeps filtering logic reusable across the SDK and CLI.
"""

from __future__ import annotations

from core.constants import RUNNING_EXERCISE_NAMES
from core.types import RecordFilter, WorkoutRecord


def filter_records(
    records: list[WorkoutRecord],
    filter_spec: RecordFilter,
) -> list[WorkoutRecord]:
    """Filter records using workout day, exercise, and date bounds.

    Args:
        records: Input records to filter.
        filter_spec: Filter constraints.

    Returns:
        Filtered records list, in input order.
    """
    filtered: list[WorkoutRecord] = []
    for record in records:
        if filter_spec.workout_day and record.workout_day != filter_spec.workout_day:
            continue
        if filter_spec.exercise_name and record.exercise_name != filter_spec.exercise_name:
            continue
        if filter_spec.date_from and record.date_key < filter_spec.date_from:
            continue
        if filter_spec.date_to and record.date_key > filter_spec.date_to:
            continue
        filtered.append(record)
    return filtered


def distinct_workout_days(records: list[WorkoutRecord]) -> list[str]:
    """Return sorted distinct workout day labels."""
    return sorted({record.workout_day for record in records})


def distinct_exercises(records: list[WorkoutRecord]) -> list[str]:
    """Return sorted distinct exercise names."""
    return sorted({record.exercise_name for record in records})


def distinct_lift_exercises(records: list[WorkoutRecord]) -> list[str]:
    """Return sorted distinct exercise names, excluding running entries."""
    return [name for name in distinct_exercises(records) if name not in RUNNING_EXERCISE_NAMES]
