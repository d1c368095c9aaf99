# tests/conftest.py

"""Shared pytest fixtures for all tradecore tests."""

from collections.abc import Generator
from pathlib import Path
from unittest.mock import patch

import pytest

from tradecore.config.settings import Settings


@pytest.fixture(autouse=True)
def isolated_paths(tmp_path: Path) -> Generator[Path, None, None]:
    """Point log and snapshot output at a per-test temp directory."""
    with (
        patch.object(Settings, "LOGS_DIR", tmp_path / "logs"),
        patch.object(Settings, "DATA_DIR", tmp_path / "data"),
        patch.object(
            Settings, "SNAPSHOT_PATH", tmp_path / "data" / "snapshot.json",
        ),
    ):
        yield tmp_path
