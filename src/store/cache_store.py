"""Record cache persistence.

This module stores the normalized record set in a single JSON envelope
with its write timestamp. Caching is best-effort: unreadable, stale, or
unwritable envelopes behave like an empty cache.
"""

from __future__ import annotations

import json
from pathlib import Path
import time
from typing import Callable

from core.constants import CACHE_FILE_SUFFIX, CACHE_KEY, DEFAULT_CACHE_TTL_SECONDS
from core.errors import FitlogCacheError
from core.logging_config import get_logger
from core.types import CacheEnvelope, WorkoutRecord
from store.record_payload import workout_record_from_payload, workout_record_to_payload

_LOGGER = get_logger(__name__)


class RecordCacheStore:
    """Filesystem-backed single-slot record cache."""

    def __init__(
        self,
        cache_dir: Path,
        cache_key: str = CACHE_KEY,
        ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._cache_dir = cache_dir
        self._cache_key = cache_key
        self._ttl_ms = ttl_seconds * 1000
        self._clock = clock

    @property
    def cache_path(self) -> Path:
        """Path of the envelope file."""
        return self._cache_dir / f"{self._cache_key}{CACHE_FILE_SUFFIX}"

    def read(self) -> list[WorkoutRecord] | None:
        """Return cached records when a fresh envelope exists.

        Returns:
            Cached records, or None on a missing, stale, or corrupt envelope.
        """
        if not self.cache_path.exists():
            _LOGGER.debug("cache_miss", cache_key=self._cache_key)
            return None
        try:
            envelope = self._read_envelope()
        except FitlogCacheError as error:
            _LOGGER.debug("cache_read_failed", cache_key=self._cache_key, error=str(error))
            return None
        age_ms = self._now_ms() - envelope.timestamp_ms
        if age_ms > self._ttl_ms:
            _LOGGER.debug("cache_expired", cache_key=self._cache_key, age_ms=age_ms)
            return None
        _LOGGER.debug("cache_hit", cache_key=self._cache_key, record_count=len(envelope.records))
        return list(envelope.records)

    def write(self, records: list[WorkoutRecord]) -> None:
        """Persist records with the current instant; failures are logged only.

        Args:
            records: Normalized records to cache.
        """
        payload = {
            "data": [workout_record_to_payload(record) for record in records],
            "timestamp": self._now_ms(),
        }
        try:
            self._cache_dir.mkdir(parents=True, exist_ok=True)
            self.cache_path.write_text(json.dumps(payload) + "\n", encoding="utf-8")
        except OSError as error:
            _LOGGER.warning("cache_write_failed", cache_key=self._cache_key, error=str(error))

    def clear(self) -> None:
        """Remove the envelope if present."""
        try:
            self.cache_path.unlink(missing_ok=True)
        except OSError as error:
            _LOGGER.warning("cache_clear_failed", cache_key=self._cache_key, error=str(error))

    def _read_envelope(self) -> CacheEnvelope:
        """Read and validate the envelope file.

        Raises:
            FitlogCacheError: If the file is unreadable or malformed.
        """
        try:
            payload = json.loads(self.cache_path.read_text(encoding="utf-8"))
            records = tuple(workout_record_from_payload(item) for item in payload["data"])
            timestamp_ms = int(payload["timestamp"])
        except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError) as error:
            raise FitlogCacheError(
                f"Failed to read cache envelope at {self.cache_path}: {error}"
            ) from error
        return CacheEnvelope(records=records, timestamp_ms=timestamp_ms)

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)
