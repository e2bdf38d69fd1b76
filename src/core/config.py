"""Runtime configuration model for fitlog.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import math
import os
from pathlib import Path

from core.constants import (
    DEFAULT_CACHE_DIR,
    DEFAULT_CACHE_TTL_SECONDS,
    DEFAULT_HTTP_TIMEOUT_SECONDS,
)
from core.errors import FitlogConfigError


@dataclass(frozen=True)
class FitlogConfig:
    """Validated runtime configuration.

    Attributes:
        cache_dir: Local directory holding the record cache envelope.
        sheet_id: Optional default spreadsheet identifier.
        cache_ttl_seconds: Age after which a cache envelope is stale.
        http_timeout_seconds: Per-request timeout for transport calls.
    """

    cache_dir: Path
    sheet_id: str | None
    cache_ttl_seconds: float
    http_timeout_seconds: float

    @classmethod
    def from_env(cls) -> "FitlogConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            FitlogConfigError: If environment values are invalid.
        """
        cache_dir_value = os.getenv("FITLOG_CACHE_DIR", str(DEFAULT_CACHE_DIR))
        sheet_id = os.getenv("FITLOG_SHEET_ID") or None
        cache_ttl_seconds = _parse_seconds(
            "FITLOG_CACHE_TTL_SECONDS",
            os.getenv("FITLOG_CACHE_TTL_SECONDS", str(DEFAULT_CACHE_TTL_SECONDS)),
            allow_zero=True,
        )
        http_timeout_seconds = _parse_seconds(
            "FITLOG_HTTP_TIMEOUT_SECONDS",
            os.getenv("FITLOG_HTTP_TIMEOUT_SECONDS", str(DEFAULT_HTTP_TIMEOUT_SECONDS)),
            allow_zero=False,
        )
        return cls(
            cache_dir=Path(cache_dir_value).expanduser().resolve(),
            sheet_id=sheet_id,
            cache_ttl_seconds=cache_ttl_seconds,
            http_timeout_seconds=http_timeout_seconds,
        )


def _parse_seconds(variable_name: str, raw_value: str, allow_zero: bool) -> float:
    """Parse a duration environment value in seconds.

    Args:
        variable_name: Environment variable name for error context.
        raw_value: Raw string from environment.
        allow_zero: Whether zero is an accepted value.

    Returns:
        Parsed number of seconds.

    Raises:
        FitlogConfigError: If value is not a number or out of range.
    """
    try:
        seconds = float(raw_value)
    except ValueError as error:
        raise FitlogConfigError(
            f"Invalid {variable_name} value: expected number of seconds, "
            f"got '{raw_value}'. Set {variable_name} to a numeric value."
        ) from error
    if not math.isfinite(seconds):
        raise FitlogConfigError(
            f"Invalid {variable_name} value: expected a finite number of seconds, "
            f"got '{raw_value}'."
        )
    if seconds < 0 or (seconds == 0 and not allow_zero):
        bound = "non-negative" if allow_zero else "positive"
        raise FitlogConfigError(
            f"Invalid {variable_name} value: expected a {bound} number, "
            f"got '{raw_value}'."
        )
    return seconds
