"""fitlog CLI entry points.
This module exposes fetch, stats, and cache commands.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
import asyncio
from dataclasses import replace
import json
from pathlib import Path
import sys
from typing import Any, Sequence

from core.config import FitlogConfig
from core.errors import FitlogError
from core.types import RecordFilter, WorkoutRecord
from fitlog import FitlogClient
from insights.workout_summary import format_volume, summarize_records
from store.record_payload import workout_record_to_payload


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="fitlog", description="Workout sheet data CLI")
    parser.add_argument("--cache-dir", help="Override FITLOG_CACHE_DIR for this command")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_fetch_command(subparsers)
    _add_stats_command(subparsers)
    subparsers.add_parser("clear-cache", help="Remove the cached record set")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the fitlog CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        client = _build_client(args.cache_dir)
        if args.command == "fetch":
            return _run_fetch_command(client, args)
        if args.command == "stats":
            return _run_stats_command(client, args)
        if args.command == "clear-cache":
            client.clear_cache()
            return 0
    except FitlogError as error:
        print(f"error: {error}", file=sys.stderr)
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_client(cache_dir: str | None) -> FitlogClient:
    """Build SDK client with optional cache-dir override."""
    config = FitlogConfig.from_env()
    if cache_dir:
        config = replace(config, cache_dir=Path(cache_dir).expanduser().resolve())
    return FitlogClient(config)


def _run_fetch_command(client: FitlogClient, args: argparse.Namespace) -> int:
    """Handle fetch command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    records = _load_filtered_records(client, args)
    if args.json:
        print(json.dumps([workout_record_to_payload(record) for record in records], indent=2))
        return 0
    for record in records:
        print(
            f"{record.date_key}\t"
            f"{record.workout_day}\t"
            f"{record.exercise_name}\t"
            f"{_describe_effort(record)}\t"
            f"{format_volume(record.volume) if record.volume > 0 else '-'}\t"
            f"{record.notes}"
        )
    return 0


def _run_stats_command(client: FitlogClient, args: argparse.Namespace) -> int:
    """Handle stats command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    summary = summarize_records(_load_filtered_records(client, args))
    print(f"total_workout_days={summary.total_workout_days}")
    print(f"workout_days_this_week={summary.workout_days_this_week}")
    print(f"total_volume={format_volume(summary.total_volume)}")
    print(f"streak_days={summary.streak_days}")
    return 0


def _load_filtered_records(client: FitlogClient, args: argparse.Namespace) -> list[WorkoutRecord]:
    records = asyncio.run(client.fetch(args.sheet_id, force_refresh=args.refresh))
    filter_spec = RecordFilter(
        workout_day=args.workout_day,
        exercise_name=args.exercise,
        date_from=args.date_from,
        date_to=args.date_to,
    )
    return client.filter(records, filter_spec)


def _describe_effort(record: WorkoutRecord) -> str:
    """Render sets/reps/weight or distance/duration for one record."""
    if record.volume > 0:
        return f"{_number(record.sets)}x{_number(record.reps)} @ {_number(record.weight)}lbs"
    if record.distance:
        duration = f" / {_number(record.duration)}min" if record.duration else ""
        return f"{_number(record.distance)}mi{duration}"
    if record.duration:
        return f"{_number(record.duration)}min"
    return "-"


def _number(value: float | None) -> str:
    if value is None:
        return "-"
    return str(int(value)) if value.is_integer() else str(value)


def _add_record_arguments(parser: argparse.ArgumentParser) -> None:
    """Register source and filter arguments shared by record commands."""
    parser.add_argument("--sheet-id", help="Spreadsheet id, defaults to FITLOG_SHEET_ID")
    parser.add_argument("--refresh", action="store_true", help="Bypass the cached record set")
    parser.add_argument("--workout-day", help="Exact workout day filter")
    parser.add_argument("--exercise", help="Exact exercise name filter")
    parser.add_argument("--date-from", help="Inclusive lower date bound, YYYY-MM-DD")
    parser.add_argument("--date-to", help="Inclusive upper date bound, YYYY-MM-DD")


def _add_fetch_command(subparsers: Any) -> None:
    """Register fetch subcommand."""
    parser = subparsers.add_parser("fetch", help="Print normalized workout records")
    _add_record_arguments(parser)
    parser.add_argument("--json", action="store_true", help="Print records as JSON")


def _add_stats_command(subparsers: Any) -> None:
    """Register stats subcommand."""
    parser = subparsers.add_parser("stats", help="Print summary statistics")
    _add_record_arguments(parser)
