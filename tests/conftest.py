# tests/conftest.py

"""Shared pytest fixtures for the inventory tracker tests."""

from collections.abc import Generator
from pathlib import Path

import pytest

from inventory_tracker.config.settings import Settings


@pytest.fixture(autouse=True)
def isolated_paths(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch,
) -> Generator[None, None, None]:
    """Keep log files and the default database out of the project tree."""
    monkeypatch.setattr(Settings, "LOGS_DIR", tmp_path / "logs")
    monkeypatch.setattr(Settings, "DB_PATH", tmp_path / "inventory.db")
    yield
