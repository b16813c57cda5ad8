"""Shared fixtures: every test gets its own settings and board file."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest

from planboard.core.settings import load_settings


@pytest.fixture(autouse=True)  # type: ignore[misc]
def isolated_settings(tmp_path: Path, monkeypatch: Any) -> Iterator[Path]:
    """Point storage at a temp file and rebuild settings around each test."""
    board_path = tmp_path / "board.json"
    monkeypatch.setenv("PLANBOARD_STORAGE_PATH", str(board_path))
    monkeypatch.setenv("PLANBOARD_ENV", "test")
    monkeypatch.delenv("PLANBOARD_HISTORY_LIMIT", raising=False)
    load_settings.cache_clear()
    yield board_path
    load_settings.cache_clear()
