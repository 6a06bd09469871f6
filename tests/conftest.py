"""Pytest configuration and shared fixtures for stocknest tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from stocknest.domain.value_objects import PartRequest, StockSheet
from stocknest.infrastructure.bin_packing import PackingConfig


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Shared fixtures
# =============================================================================


@pytest.fixture
def standard_sheet() -> StockSheet:
    """A 2000x1250 mm sheet."""
    return StockSheet(width=2000.0, height=1250.0, name="2000x1250")


@pytest.fixture
def default_packing() -> PackingConfig:
    """Kerf 5 mm, edge margin 5 mm, sheet cap 50."""
    return PackingConfig()


@pytest.fixture
def door_parts() -> list[PartRequest]:
    """Four 900x600 doors as a single BOM line."""
    return [
        PartRequest(
            id="DOOR", description="Door", quantity=4, width=900.0, height=600.0
        )
    ]


@pytest.fixture
def write_job(tmp_path: Path) -> Callable[[dict[str, Any]], Path]:
    """Write a job dictionary to a JSON file and return its path."""

    def _write(data: dict[str, Any], name: str = "job.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write
