"""Shared pytest fixtures."""

from pathlib import Path

import pytest


@pytest.fixture
def snapshots(tmp_path: Path) -> tuple[Path, Path]:
    """Empty left (old) and right (new) snapshot directories."""
    left = tmp_path / "left"
    right = tmp_path / "right"
    left.mkdir()
    right.mkdir()
    return left, right
