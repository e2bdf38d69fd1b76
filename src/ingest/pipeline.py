"""Fetch orchestration for sheet workout logs.

This module coordinates cache lookup, ordered transport fallback,
normalization, and cache refresh behind one async entry point.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx

from core.config import FitlogConfig
from core.errors import FitlogFetchError, FitlogParseError, FitlogTransportError
from core.logging_config import get_logger
from core.types import RawRow, WorkoutRecord
from ingest.transports import SheetTransport, default_transports
from store.cache_store import RecordCacheStore
from transforms.row_normalization import normalize_rows

_LOGGER = get_logger(__name__)

_TRANSPORT_ERRORS = (httpx.HTTPError, FitlogTransportError, FitlogParseError)


class WorkoutDataFetcher:
    """Cache-aware fetcher for one or more sheet sources."""

    def __init__(
        self,
        config: FitlogConfig,
        cache_store: RecordCacheStore | None = None,
        transports: list[SheetTransport] | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config
        self._cache_store = cache_store or RecordCacheStore(
            config.cache_dir, ttl_seconds=config.cache_ttl_seconds
        )
        self._transports = transports if transports is not None else default_transports()
        self._http_client = http_client

    async def fetch_data(
        self,
        source_id: str,
        force_refresh: bool = False,
    ) -> list[WorkoutRecord]:
        """Return normalized records for a sheet.

        Args:
            source_id: Spreadsheet identifier.
            force_refresh: Skip the cache lookup when True.

        Returns:
            Records sorted ascending by workout date.

        Raises:
            FitlogFetchError: If every transport failed.
        """
        if not force_refresh:
            cached_records = self._cache_store.read()
            if cached_records is not None:
                return cached_records
        rows = await self._fetch_rows(source_id)
        records = normalize_rows(rows)
        self._cache_store.write(records)
        _LOGGER.info(
            "fetch_completed",
            source_id=source_id,
            force_refresh=force_refresh,
            row_count=len(rows),
            record_count=len(records),
        )
        return records

    def clear_cache(self) -> None:
        """Drop the cached envelope so the next fetch hits a transport."""
        self._cache_store.clear()

    async def _fetch_rows(self, source_id: str) -> list[RawRow]:
        last_error: Exception | None = None
        async with self._client() as client:
            for transport in self._transports:
                try:
                    rows = await transport.fetch_rows(client, source_id)
                except _TRANSPORT_ERRORS as error:
                    _LOGGER.warning(
                        "transport_failed",
                        source_id=source_id,
                        transport=transport.name,
                        error=str(error),
                    )
                    last_error = error
                    continue
                _LOGGER.info(
                    "transport_succeeded",
                    source_id=source_id,
                    transport=transport.name,
                    row_count=len(rows),
                )
                return rows
        raise FitlogFetchError(
            f"Failed to load workout data for sheet '{source_id}': "
            f"{last_error or 'no transports configured'}. "
            "Check that the sheet is shared for link viewing and retry."
        ) from last_error

    @asynccontextmanager
    async def _client(self) -> AsyncIterator[httpx.AsyncClient]:
        """Yield the injected client, or a short-lived one closed afterwards."""
        if self._http_client is not None:
            yield self._http_client
            return
        async with httpx.AsyncClient(timeout=self._config.http_timeout_seconds) as client:
            yield client


async def fetch_data(
    source_id: str,
    force_refresh: bool = False,
    config: FitlogConfig | None = None,
) -> list[WorkoutRecord]:
    """Fetch normalized records with a default fetcher.

    Args:
        source_id: Spreadsheet identifier.
        force_refresh: Skip the cache lookup when True.
        config: Optional runtime configuration.

    Returns:
        Records sorted ascending by workout date.

    Raises:
        FitlogFetchError: If every transport failed.
    """
    fetcher = WorkoutDataFetcher(config or FitlogConfig.from_env())
    return await fetcher.fetch_data(source_id, force_refresh)


def clear_cache(config: FitlogConfig | None = None) -> None:
    """Drop the default cache envelope."""
    WorkoutDataFetcher(config or FitlogConfig.from_env()).clear_cache()
