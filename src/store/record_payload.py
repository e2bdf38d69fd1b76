"""Shared JSON serialization for WorkoutRecord payloads.

This module centralizes WorkoutRecord JSON serialization logic.
Serialized payloads omit the date object; it is rebuilt from the date key.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from core.types import WorkoutRecord


def workout_record_to_payload(record: WorkoutRecord) -> dict[str, object]:
    """Serialize WorkoutRecord into JSON-safe payload.

    Args:
        record: Workout record instance.

    Returns:
        Dictionary payload for JSON encoding.
    """
    return {
        "date_key": record.date_key,
        "week_key": record.week_key,
        "month_key": record.month_key,
        "workout_day": record.workout_day,
        "exercise_name": record.exercise_name,
        "sets": record.sets,
        "reps": record.reps,
        "weight": record.weight,
        "duration": record.duration,
        "distance": record.distance,
        "notes": record.notes,
        "volume": record.volume,
        "date_inferred": record.date_inferred,
    }


def workout_record_from_payload(payload: dict[str, Any]) -> WorkoutRecord:
    """Deserialize JSON payload into WorkoutRecord.

    Args:
        payload: Serialized record payload.

    Returns:
        Parsed WorkoutRecord with ``workout_date`` rebuilt from ``date_key``.

    Raises:
        KeyError: If a required key is missing.
        ValueError: If the date key or a number is invalid.
    """
    date_key = str(payload["date_key"])
    return WorkoutRecord(
        date_key=date_key,
        workout_date=date.fromisoformat(date_key),
        week_key=str(payload["week_key"]),
        month_key=str(payload["month_key"]),
        workout_day=str(payload["workout_day"]),
        exercise_name=str(payload["exercise_name"]),
        sets=_optional_float(payload.get("sets")),
        reps=_optional_float(payload.get("reps")),
        weight=_optional_float(payload.get("weight")),
        duration=_optional_float(payload.get("duration")),
        distance=_optional_float(payload.get("distance")),
        notes=str(payload.get("notes", "")),
        volume=float(payload.get("volume", 0)),
        date_inferred=bool(payload.get("date_inferred", False)),
    )


def _optional_float(value: Any) -> float | None:
    if value is None:
        return None
    return float(value)
