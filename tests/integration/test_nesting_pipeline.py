"""End-to-end tests from job dictionaries to exported results.

These tests drive the same path the CLI takes (schema, adapters,
service, exporter) without the command layer, and check layout
invariants on randomly generated jobs.
"""

import json
import random
from typing import Any

import pytest

from stocknest.application import NestingService, SheetNestingReport
from stocknest.application.config import (
    config_to_estimate_config,
    config_to_linear_config,
    config_to_packing_config,
    config_to_parts,
    config_to_stock,
    load_config_from_dict,
    validate_config,
)
from stocknest.infrastructure import JsonExporter


def _run(data: dict[str, Any]) -> Any:
    config = load_config_from_dict(data)
    service = NestingService(
        packing_config=config_to_packing_config(config.packing),
        linear_config=config_to_linear_config(config.linear),
        estimate_config=config_to_estimate_config(config.estimate),
    )
    return service.calculate(
        config_to_parts(config), config_to_stock(config), config.category
    )


class TestSheetPipeline:
    """Sheet jobs through schema, service and exporter."""

    def test_mixed_cabinet_job(self) -> None:
        """A mixed carcass job nests completely with sane totals."""
        data = {
            "schema_version": "1.0",
            "parts": [
                {"id": "SIDE", "quantity": 2, "width": 720, "height": 560},
                {"id": "SHELF", "quantity": 3, "width": 764, "height": 540},
                {"id": "BACK", "quantity": 1, "width": 800, "height": 720},
                {"id": "RAIL", "quantity": 2, "width": 764, "height": 100},
            ],
            "sheet": {"width": 2440, "height": 1220, "unit_cost": 55.0},
            "packing": {"kerf": 3.2, "edge_margin": 10},
        }

        report = _run(data)
        exported = json.loads(JsonExporter().export_packing(report))

        assert isinstance(report, SheetNestingReport)
        assert report.is_complete
        assert report.violations == ()
        assert exported["total_pieces_placed"] == 8
        assert exported["costs"]["material"] == 55.0 * report.packing.total_sheets
        placed = [
            p["piece_id"]
            for layout in exported["layouts"]
            for p in layout["placements"]
        ]
        assert sorted(placed) == sorted(p.id for p in report.pieces)

    def test_validation_matches_nesting(self) -> None:
        """A part flagged by validation is the one left unplaced."""
        data = {
            "schema_version": "1.0",
            "parts": [
                {"id": "TOP", "quantity": 1, "width": 2600, "height": 650},
                {"id": "DOOR", "quantity": 2, "width": 900, "height": 600},
            ],
            "sheet": {"width": 2440, "height": 1220},
        }

        warnings = validate_config(load_config_from_dict(data)).warnings
        report = _run(data)

        assert [w.path for w in warnings] == ["parts[0]"]
        assert [p.id for p in report.packing.unplaced] == ["TOP-1"]
        assert report.packing.total_pieces_placed == 2


class TestLinearPipeline:
    """Linear jobs through schema, service and exporter."""

    @pytest.mark.parametrize("category", ["tube", "profile", "bar"])
    def test_linear_categories(self, category: str) -> None:
        """Every linear category is cut with the same packer."""
        data = {
            "schema_version": "1.0",
            "category": category,
            "parts": [
                {"id": "POST", "quantity": 4, "length": 1800},
                {"id": "BRACE", "quantity": 2, "length": 2400},
            ],
            "bar": {"length": 6000, "unit_cost": 40.0},
            "linear": {"cutting_efficiency": 100, "cost_per_cut": 1.0},
        }

        report = _run(data)
        exported = json.loads(JsonExporter().export_linear(report))

        assert exported["category"] == category
        assert exported["cut_count"] == 6
        assert exported["bar_count"] == exported["raw_bar_count"]
        assert exported["costs"]["total"] == exported["bar_count"] * 40.0 + 6.0


@pytest.mark.slow
class TestRandomSheetJobs:
    """Layouts from random jobs never overlap or leave the usable area."""

    @pytest.mark.parametrize("seed", range(20))
    def test_no_violations(self, seed: int) -> None:
        rng = random.Random(seed)
        parts = [
            {
                "id": f"P{i}",
                "quantity": rng.randint(1, 4),
                "width": rng.randint(50, 1500),
                "height": rng.randint(50, 1100),
            }
            for i in range(rng.randint(1, 8))
        ]
        data = {
            "schema_version": "1.0",
            "parts": parts,
            "sheet": {"width": 2440, "height": 1220},
        }

        report = _run(data)

        assert report.violations == ()
        assert report.is_complete
        placed = report.packing.total_pieces_placed
        assert placed == sum(p["quantity"] for p in parts)
        for layout in report.packing.layouts:
            assert 0 < layout.utilization <= 100
