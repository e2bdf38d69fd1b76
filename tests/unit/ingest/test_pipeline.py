"""Unit tests for fetch orchestration."""

from __future__ import annotations

from dataclasses import replace
from typing import Callable

import httpx
import pytest

from core.config import FitlogConfig
from core.errors import FitlogFetchError
from ingest.pipeline import WorkoutDataFetcher
from ingest.transports import build_csv_url, build_gviz_url
from store.cache_store import RecordCacheStore
from tests.fixture_paths import fixture_text


class _SheetServer:
    """Fake Google Sheets endpoints backed by httpx.MockTransport."""

    def __init__(self, gviz: Callable[[], httpx.Response], csv: Callable[[], httpx.Response]) -> None:
        self._gviz = gviz
        self._csv = csv
        self.requested_paths: list[str] = []

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requested_paths.append(request.url.path)
        if request.url.path.endswith("/gviz/tq"):
            return self._gviz()
        return self._csv()

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handle))


def _gviz_ok() -> httpx.Response:
    return httpx.Response(200, text=fixture_text("gviz_response.txt"))


def _csv_ok() -> httpx.Response:
    return httpx.Response(200, text=fixture_text("sheet_export.csv"))


def _server_error() -> httpx.Response:
    return httpx.Response(500, text="backend error")


def _connect_error() -> httpx.Response:
    raise httpx.ConnectError("connection refused")


def _config(tmp_path) -> FitlogConfig:
    return replace(FitlogConfig.from_env(), cache_dir=tmp_path)


class _FakeClock:
    def __init__(self, now: float) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_transport_urls_embed_sheet_id() -> None:
    """Endpoint templates carry the sheet id."""
    assert build_gviz_url("abc").endswith("/d/abc/gviz/tq?tqx=out:json")
    assert build_csv_url("abc").endswith("/d/abc/export?format=csv")


@pytest.mark.asyncio
async def test_fetch_data_uses_gviz_first(tmp_path) -> None:
    """A healthy gviz endpoint is the only transport used."""
    server = _SheetServer(_gviz_ok, _csv_ok)
    async with server.client() as client:
        fetcher = WorkoutDataFetcher(_config(tmp_path), http_client=client)

        records = await fetcher.fetch_data("sheet-1")

    assert [record.exercise_name for record in records] == ["Long Run", "Bench Press"]
    assert server.requested_paths == ["/spreadsheets/d/sheet-1/gviz/tq"]


@pytest.mark.asyncio
async def test_fetch_data_falls_back_to_csv_on_http_error(tmp_path) -> None:
    """A failing gviz endpoint falls through to the CSV export without error."""
    server = _SheetServer(_server_error, _csv_ok)
    async with server.client() as client:
        fetcher = WorkoutDataFetcher(_config(tmp_path), http_client=client)

        records = await fetcher.fetch_data("sheet-1")

    assert [record.date_key for record in records] == ["2024-03-03", "2024-03-05"]
    assert server.requested_paths[-1] == "/spreadsheets/d/sheet-1/export"


@pytest.mark.asyncio
async def test_fetch_data_falls_back_on_network_error(tmp_path) -> None:
    """Connection errors on gviz are recovered by the CSV transport."""
    server = _SheetServer(_connect_error, _csv_ok)
    async with server.client() as client:
        fetcher = WorkoutDataFetcher(_config(tmp_path), http_client=client)

        records = await fetcher.fetch_data("sheet-1")

    assert len(records) == 2


@pytest.mark.asyncio
async def test_fetch_data_falls_back_on_decode_error(tmp_path) -> None:
    """A gviz body that is not JSON is treated like a transport failure."""
    server = _SheetServer(lambda: httpx.Response(200, text="<html>login</html>"), _csv_ok)
    async with server.client() as client:
        fetcher = WorkoutDataFetcher(_config(tmp_path), http_client=client)

        records = await fetcher.fetch_data("sheet-1")

    assert records[1].notes == 'Paused, "tempo" reps'


@pytest.mark.asyncio
async def test_fetch_data_raises_when_all_transports_fail(tmp_path) -> None:
    """Total failure surfaces one fetch error naming the sheet."""
    server = _SheetServer(_server_error, _connect_error)
    async with server.client() as client:
        fetcher = WorkoutDataFetcher(_config(tmp_path), http_client=client)

        with pytest.raises(FitlogFetchError, match="sheet-1"):
            await fetcher.fetch_data("sheet-1")

    assert len(server.requested_paths) == 2


@pytest.mark.asyncio
async def test_second_fetch_is_served_from_cache(tmp_path) -> None:
    """Two non-forced fetches return equal records with one network call."""
    server = _SheetServer(_gviz_ok, _csv_ok)
    async with server.client() as client:
        fetcher = WorkoutDataFetcher(_config(tmp_path), http_client=client)

        first = await fetcher.fetch_data("sheet-1")
        second = await fetcher.fetch_data("sheet-1")

    assert first == second and len(server.requested_paths) == 1


@pytest.mark.asyncio
async def test_force_refresh_bypasses_cache(tmp_path) -> None:
    """Forced fetches always reach a transport."""
    server = _SheetServer(_gviz_ok, _csv_ok)
    async with server.client() as client:
        fetcher = WorkoutDataFetcher(_config(tmp_path), http_client=client)

        await fetcher.fetch_data("sheet-1")
        await fetcher.fetch_data("sheet-1", force_refresh=True)

    assert len(server.requested_paths) == 2


@pytest.mark.asyncio
async def test_clear_cache_forces_transport_attempt(tmp_path) -> None:
    """After clearing, the next fetch does not hit the cache."""
    server = _SheetServer(_gviz_ok, _csv_ok)
    async with server.client() as client:
        fetcher = WorkoutDataFetcher(_config(tmp_path), http_client=client)
        await fetcher.fetch_data("sheet-1")

        fetcher.clear_cache()
        await fetcher.fetch_data("sheet-1")

    assert len(server.requested_paths) == 2


@pytest.mark.asyncio
async def test_expired_cache_falls_through_to_transport(tmp_path) -> None:
    """Reads past the ttl behave like a fresh fetch."""
    clock = _FakeClock(1000.0)
    cache_store = RecordCacheStore(tmp_path, ttl_seconds=300, clock=clock)
    server = _SheetServer(_gviz_ok, _csv_ok)
    async with server.client() as client:
        fetcher = WorkoutDataFetcher(_config(tmp_path), cache_store=cache_store, http_client=client)
        await fetcher.fetch_data("sheet-1")
        clock.now += 301

        await fetcher.fetch_data("sheet-1")

    assert len(server.requested_paths) == 2


@pytest.mark.asyncio
async def test_cache_write_failure_does_not_fail_fetch(tmp_path) -> None:
    """An unwritable cache location still returns fetched records."""
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    server = _SheetServer(_gviz_ok, _csv_ok)
    async with server.client() as client:
        fetcher = WorkoutDataFetcher(_config(blocker / "cache"), http_client=client)

        records = await fetcher.fetch_data("sheet-1")

    assert len(records) == 2


@pytest.mark.asyncio
async def test_fetch_data_with_no_transports_raises(tmp_path) -> None:
    """An empty strategy list is a total failure."""
    fetcher = WorkoutDataFetcher(_config(tmp_path), transports=[])

    with pytest.raises(FitlogFetchError):
        await fetcher.fetch_data("sheet-1")


@pytest.mark.asyncio
async def test_csv_fallback_accepts_multiline_notes(tmp_path) -> None:
    """A quoted note with a line break does not fail the CSV transport."""
    csv_body = (
        "Timestamp,Date,Workout Day,Exercise,Sets,Reps,Weight,Duration,Distance,Notes\n"
        ',3/5/2024,Upper A (Push),Bench Press,3,8,135,,,"felt good\nnext set harder"\n'
        ",3/6/2024,Lower A (Quad),Squat,5,5,225,,,\n"
    )
    server = _SheetServer(_server_error, lambda: httpx.Response(200, text=csv_body))
    async with server.client() as client:
        fetcher = WorkoutDataFetcher(_config(tmp_path), http_client=client)

        records = await fetcher.fetch_data("sheet-1")

    assert [record.exercise_name for record in records] == ["Bench Press", "Squat"]
    assert records[0].notes == "felt good\nnext set harder"
