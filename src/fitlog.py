"""Public SDK surface for fitlog.

This module provides a stable import path for dashboard consumers.
It exposes the primary client and re-exports typed models.
"""

from __future__ import annotations

from core.config import FitlogConfig
from core.errors import FitlogConfigError, FitlogError, FitlogFetchError
from core.types import RecordFilter, WorkoutRecord, WorkoutSummary
from ingest.pipeline import WorkoutDataFetcher
from insights.workout_summary import summarize_records
from store.record_filtering import filter_records


class FitlogClient:
    """Primary SDK entry point for workout sheet data."""

    def __init__(
        self,
        config: FitlogConfig | None = None,
        fetcher: WorkoutDataFetcher | None = None,
    ) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
            fetcher: Optional pre-built fetcher, e.g. with a custom cache store.
        """
        self._config = config or FitlogConfig.from_env()
        self._fetcher = fetcher or WorkoutDataFetcher(self._config)

    async def fetch(
        self,
        sheet_id: str | None = None,
        force_refresh: bool = False,
    ) -> list[WorkoutRecord]:
        """Fetch normalized records for a sheet.

        A forced refresh clears the cache before fetching.

        Args:
            sheet_id: Spreadsheet id, defaults to the configured sheet.
            force_refresh: Bypass and replace the cached record set.

        Returns:
            Records sorted ascending by workout date.

        Raises:
            FitlogConfigError: If no sheet id is given or configured.
            FitlogFetchError: If every transport failed.
        """
        resolved_sheet_id = sheet_id or self._config.sheet_id
        if not resolved_sheet_id:
            raise FitlogConfigError(
                "No sheet id configured. Pass a sheet id or set FITLOG_SHEET_ID."
            )
        if force_refresh:
            self._fetcher.clear_cache()
        return await self._fetcher.fetch_data(resolved_sheet_id, force_refresh)

    def clear_cache(self) -> None:
        """Remove the cached record set."""
        self._fetcher.clear_cache()

    def filter(self, records: list[WorkoutRecord], filter_spec: RecordFilter) -> list[WorkoutRecord]:
        """Apply dashboard filters to a record set."""
        return filter_records(records, filter_spec)

    def summarize(self, records: list[WorkoutRecord]) -> WorkoutSummary:
        """Compute headline statistics for a record set."""
        return summarize_records(records)


__all__ = [
    "FitlogClient",
    "FitlogConfig",
    "FitlogConfigError",
    "FitlogError",
    "FitlogFetchError",
    "RecordFilter",
    "WorkoutDataFetcher",
    "WorkoutRecord",
    "WorkoutSummary",
]
