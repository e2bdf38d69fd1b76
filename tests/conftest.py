"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep tests independent of developer FITLOG_* settings."""
    for variable_name in (
        "FITLOG_SHEET_ID",
        "FITLOG_CACHE_TTL_SECONDS",
        "FITLOG_HTTP_TIMEOUT_SECONDS",
    ):
        monkeypatch.delenv(variable_name, raising=False)
    monkeypatch.setenv("FITLOG_CACHE_DIR", str(tmp_path / "cache"))
