"""Output formatters and exporters for nesting results."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from stocknest.domain.services import StockEstimate
from stocknest.domain.value_objects import Piece

from .bin_packing import PackingResult, Placement, SheetLayout, round_percentage
from .linear_packing import BarLayout, LinearResult

if TYPE_CHECKING:
    from stocknest.application.services import (
        BarNestingReport,
        SheetComparison,
        SheetNestingReport,
    )

__all__ = [
    "ComparisonFormatter",
    "EstimateFormatter",
    "JsonExporter",
    "LinearReportFormatter",
    "PackingReportFormatter",
]

MM2_PER_M2 = 1_000_000


def _unplaced_lines(unplaced: tuple[Piece, ...], width: int) -> list[str]:
    lines = [
        "",
        f"UNPLACED PIECES ({len(unplaced)})",
        "-" * width,
    ]
    for piece in unplaced:
        lines.append(f"  {piece.id:<20} {piece.description}")
    lines.append("Insufficient stock: split the order or use larger stock.")
    return lines


class PackingReportFormatter:
    """Formats sheet packing results as a text report."""

    def __init__(self, show_placements: bool = True) -> None:
        """Initialize formatter.

        Args:
            show_placements: Whether to list every placement per sheet.
        """
        self._show_placements = show_placements

    def format(self, result: PackingResult) -> str:
        """Format a packing result with a summary and per-sheet sections."""
        lines = [
            f"SHEET NESTING - {result.sheet.label}",
            "=" * 70,
            f"Sheets used:      {result.total_sheets}",
            f"Pieces placed:    {result.total_pieces_placed}",
            f"Mean utilization: {result.mean_utilization:.1f}%",
            f"Waste area:       {result.waste_area / MM2_PER_M2:.3f} m2",
        ]

        for layout in result.layouts:
            lines.extend(self._format_layout(layout))

        if result.unplaced:
            lines.extend(_unplaced_lines(result.unplaced, 70))

        return "\n".join(lines)

    def _format_layout(self, layout: SheetLayout) -> list[str]:
        lines = [
            "",
            f"Sheet {layout.sheet_index + 1}: {layout.piece_count} pieces, "
            f"{layout.utilization:.1f}% utilization",
        ]
        if not self._show_placements:
            return lines

        lines.append(
            f"  {'Piece':<20} {'X':>8} {'Y':>8} {'Width':>8} {'Height':>8}  Rot"
        )
        lines.append("  " + "-" * 66)
        for placement in layout.placements:
            lines.append(self._format_placement(placement))
        return lines

    def _format_placement(self, placement: Placement) -> str:
        rotated = "yes" if placement.rotated else ""
        return (
            f"  {placement.piece_id:<20} {placement.x:>8.1f} {placement.y:>8.1f} "
            f"{placement.width:>8.1f} {placement.height:>8.1f}  {rotated}"
        )


class LinearReportFormatter:
    """Formats linear packing results as a text report."""

    def format(self, result: LinearResult) -> str:
        lines = [
            f"LINEAR CUTTING - {result.bar.label}",
            "=" * 70,
            f"Bars packed:     {result.raw_bar_count}",
            f"Bars required:   {result.bar_count} (after efficiency allowance)",
            f"Cuts:            {result.cut_count}",
            f"Utilization:     {result.utilization:.1f}%",
            f"Waste:           {result.waste_length / 1000:.3f} m",
            f"Material cost:   {result.material_cost:.2f}",
            f"Cutting cost:    {result.cutting_cost:.2f}",
            f"Estimated cost:  {result.estimated_cost:.2f}",
        ]

        for bar in result.bars:
            lines.extend(self._format_bar(bar))

        if result.unplaced:
            lines.extend(_unplaced_lines(result.unplaced, 70))

        return "\n".join(lines)

    def _format_bar(self, bar: BarLayout) -> list[str]:
        cuts = ", ".join(f"{cut.length:g}" for cut in bar.cuts)
        return [
            "",
            f"Bar {bar.bar_index + 1}: {cuts} "
            f"(used {bar.used_length:g} of {bar.usable_length:g} mm)",
        ]


class EstimateFormatter:
    """Formats an arithmetic stock estimate."""

    def format(self, estimate: StockEstimate, unit: str = "sheets") -> str:
        """Format an estimate.

        Args:
            estimate: Estimate to format.
            unit: "sheets" or "bars"; selects area or length wording.
        """
        if unit == "sheets":
            required = f"{estimate.required_quantity / MM2_PER_M2:.3f} m2"
            per_unit = f"{estimate.usable_quantity_per_unit / MM2_PER_M2:.3f} m2"
            waste = f"{estimate.waste / MM2_PER_M2:.3f} m2"
        else:
            required = f"{estimate.required_quantity / 1000:.3f} m"
            per_unit = f"{estimate.usable_quantity_per_unit / 1000:.3f} m"
            waste = f"{estimate.waste / 1000:.3f} m"

        lines = [
            "STOCK ESTIMATE",
            "=" * 60,
            f"  {unit.title()} required: {estimate.required_units}",
            f"  Required:        {required}",
            f"  Usable per unit: {per_unit}",
            f"  Utilization:     {estimate.utilization:.1f}%",
            f"  Waste:           {waste}",
            "-" * 60,
            f"  Material cost:   {estimate.material_cost:.2f}",
            f"  Cutting cost:    {estimate.cutting_cost:.2f}",
            f"  Total cost:      {estimate.total_cost:.2f}",
        ]
        return "\n".join(lines)


class ComparisonFormatter:
    """Formats a candidate sheet comparison as a table."""

    def format(self, comparison: SheetComparison) -> str:
        lines = [
            "SHEET COMPARISON",
            "=" * 78,
            f"{'Sheet':<16} {'Est.':>5} {'Sheets':>7} {'Util %':>7} "
            f"{'Unplaced':>9} {'Cost':>12}   ",
            "-" * 78,
        ]
        for i, candidate in enumerate(comparison.candidates):
            marker = "<- best" if i == comparison.best_index else ""
            lines.append(
                f"{candidate.sheet.label:<16} "
                f"{candidate.estimate.required_units:>5} "
                f"{candidate.packing.total_sheets:>7} "
                f"{candidate.packing.mean_utilization:>7.1f} "
                f"{len(candidate.packing.unplaced):>9} "
                f"{candidate.total_cost:>12.2f}   {marker}"
            )
        return "\n".join(lines)


class JsonExporter:
    """Exports nesting results as JSON for pricing and visualization."""

    def export_packing(self, report: SheetNestingReport) -> str:
        """Export a sheet nesting report as a JSON string."""
        return json.dumps(self._sheet_report_data(report), indent=2)

    def export_linear(self, report: BarNestingReport) -> str:
        """Export a linear nesting report as a JSON string."""
        result = report.result
        data = {
            "category": report.category.value,
            "bar": {
                "name": report.bar.label,
                "length": report.bar.length,
                "unit_cost": report.bar.unit_cost,
            },
            "raw_bar_count": result.raw_bar_count,
            "bar_count": result.bar_count,
            "cut_count": result.cut_count,
            "utilization": round_percentage(result.utilization),
            "used_length": result.used_length,
            "waste_length": result.waste_length,
            "bars": [
                {
                    "index": bar.bar_index,
                    "used_length": bar.used_length,
                    "cuts": [
                        {"piece_id": cut.id, "length": cut.length} for cut in bar.cuts
                    ],
                }
                for bar in result.bars
            ],
            "costs": {
                "material": result.material_cost,
                "cutting": result.cutting_cost,
                "total": result.estimated_cost,
            },
            "estimate": self._estimate_data(report.estimate),
            "total_weight": report.total_weight,
            "unplaced": [piece.id for piece in result.unplaced],
            "complete": result.is_complete,
        }
        return json.dumps(data, indent=2)

    def export_comparison(self, comparison: SheetComparison) -> str:
        """Export a candidate comparison as a JSON string."""
        data = {
            "best": comparison.best.sheet.label,
            "candidates": [
                self._sheet_report_data(candidate)
                for candidate in comparison.candidates
            ],
        }
        return json.dumps(data, indent=2)

    def _sheet_report_data(self, report: SheetNestingReport) -> dict[str, Any]:
        packing = report.packing
        return {
            "sheet": {
                "name": report.sheet.label,
                "width": report.sheet.width,
                "height": report.sheet.height,
                "unit_cost": report.sheet.unit_cost,
            },
            "total_sheets": packing.total_sheets,
            "total_pieces_placed": packing.total_pieces_placed,
            "mean_utilization": packing.mean_utilization,
            "layouts": [self._layout_data(layout) for layout in packing.layouts],
            "costs": {
                "material": report.material_cost,
                "cutting": report.cutting_cost,
                "total": report.total_cost,
            },
            "estimate": self._estimate_data(report.estimate),
            "total_weight": report.total_weight,
            "unplaced": [piece.id for piece in packing.unplaced],
            "complete": packing.is_complete,
        }

    def _layout_data(self, layout: SheetLayout) -> dict[str, Any]:
        return {
            "index": layout.sheet_index,
            "utilization": layout.utilization,
            "used_area": layout.used_area,
            "usable_area": layout.usable_area,
            "placements": [
                {
                    "piece_id": p.piece_id,
                    "description": p.description,
                    "x": p.x,
                    "y": p.y,
                    "width": p.width,
                    "height": p.height,
                    "rotated": p.rotated,
                }
                for p in layout.placements
            ],
        }

    def _estimate_data(self, estimate: StockEstimate) -> dict[str, Any]:
        return {
            "required_units": estimate.required_units,
            "utilization": estimate.utilization,
            "waste": estimate.waste,
            "total_cost": estimate.total_cost,
        }
