"""fitlog exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class FitlogError(Exception):
    """Base exception for all fitlog failures."""


class FitlogConfigError(FitlogError):
    """Raised for invalid runtime configuration."""


class FitlogParseError(FitlogError):
    """Raised when a source payload cannot be decoded into rows."""


class FitlogTransportError(FitlogError):
    """Raised when a transport endpoint returns an unusable response."""


class FitlogFetchError(FitlogError):
    """Raised when every transport failed for a source."""


class FitlogCacheError(FitlogError):
    """Raised inside the cache store for unreadable envelopes."""
