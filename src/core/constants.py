"""Core constants used across fitlog modules.

This module centralizes column layout, endpoints, and defaults.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_CACHE_DIR = Path(".fitlog")
CACHE_KEY = "fitness_data_cache"
CACHE_FILE_SUFFIX = ".json"
DEFAULT_CACHE_TTL_SECONDS = 5 * 60
DEFAULT_HTTP_TIMEOUT_SECONDS = 30.0

SHEET_COLUMNS = (
    "timestamp",
    "date",
    "workout_day",
    "exercise_name",
    "sets",
    "reps",
    "weight",
    "duration",
    "distance",
    "notes",
)
NUMERIC_COLUMNS = ("sets", "reps", "weight", "duration", "distance")
FORMATTED_DATE_COLUMNS = ("date", "timestamp")

GVIZ_URL_TEMPLATE = "https://docs.google.com/spreadsheets/d/{sheet_id}/gviz/tq?tqx=out:json"
CSV_URL_TEMPLATE = "https://docs.google.com/spreadsheets/d/{sheet_id}/export?format=csv"
GVIZ_DATE_PREFIX = "Date("

DEFAULT_WORKOUT_DAY = "Other"
UNKNOWN_EXERCISE_NAME = "Unknown"
LONG_RUN_WORKOUT_DAY = "Long Run"
MILEAGE_RUN_WORKOUT_DAY = "Mileage Run"
LONG_RUN_WEEKLY_GROWTH = 1.1
MAX_STREAK_DAYS = 365
RUNNING_EXERCISE_NAMES = (LONG_RUN_WORKOUT_DAY, MILEAGE_RUN_WORKOUT_DAY)

HEATMAP_LOOKBACK_DAYS = 364
HEATMAP_WEEKS = 53
HEATMAP_MAX_LEVEL = 4
