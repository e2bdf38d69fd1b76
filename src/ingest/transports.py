"""Sheet transport strategies.

This module fetches raw sheet content over HTTP and decodes it into
raw rows. The fetch pipeline tries strategies in list order.
"""

from __future__ import annotations

from typing import Protocol

import httpx

from core.constants import CSV_URL_TEMPLATE, GVIZ_URL_TEMPLATE
from core.errors import FitlogTransportError
from core.types import RawRow
from ingest.row_parser import gviz_to_rows, parse_csv_rows, parse_gviz_response


class SheetTransport(Protocol):
    """One wire format and endpoint for retrieving sheet rows."""

    name: str

    async def fetch_rows(self, client: httpx.AsyncClient, source_id: str) -> list[RawRow]:
        """Fetch and decode rows for a sheet."""


class GvizTransport:
    """Structured gviz JSON endpoint."""

    name = "gviz"

    async def fetch_rows(self, client: httpx.AsyncClient, source_id: str) -> list[RawRow]:
        """Fetch the gviz envelope and decode its table rows.

        Args:
            client: Shared async HTTP client.
            source_id: Spreadsheet identifier.

        Returns:
            Raw rows in sheet order.

        Raises:
            httpx.HTTPError: If the request fails.
            FitlogTransportError: If the endpoint answers with an error status.
            FitlogParseError: If the body cannot be decoded.
        """
        body = await _get_text(client, build_gviz_url(source_id))
        return gviz_to_rows(parse_gviz_response(body))


class CsvTransport:
    """Delimited-text CSV export endpoint."""

    name = "csv"

    async def fetch_rows(self, client: httpx.AsyncClient, source_id: str) -> list[RawRow]:
        """Fetch the CSV export and decode its data lines."""
        body = await _get_text(client, build_csv_url(source_id))
        return parse_csv_rows(body)


def default_transports() -> list[SheetTransport]:
    """Return transports in fallback order: gviz first, then CSV."""
    return [GvizTransport(), CsvTransport()]


def build_gviz_url(sheet_id: str) -> str:
    """Return the gviz JSON endpoint for a sheet."""
    return GVIZ_URL_TEMPLATE.format(sheet_id=sheet_id)


def build_csv_url(sheet_id: str) -> str:
    """Return the CSV export endpoint for a sheet."""
    return CSV_URL_TEMPLATE.format(sheet_id=sheet_id)


async def _get_text(client: httpx.AsyncClient, url: str) -> str:
    """GET a URL and return its body text.

    Raises:
        FitlogTransportError: If the response status is not successful.
    """
    response = await client.get(url, follow_redirects=True)
    if response.is_error:
        raise FitlogTransportError(
            f"GET {url} failed with HTTP {response.status_code}."
        )
    return response.text
