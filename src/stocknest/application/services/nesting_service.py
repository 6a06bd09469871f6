"""Nesting use cases: expand, validate, pack, estimate and price.

The service is the single entry point the CLI (and any other caller)
uses. It never raises for pieces that do not fit; reports carry an
``is_complete`` flag and the unplaced pieces instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from stocknest.domain.services import (
    EstimateConfig,
    StockEstimate,
    UtilizationCalculator,
    expand_parts,
    total_area,
    total_weight,
    validate_compatibility,
)
from stocknest.domain.value_objects import (
    STANDARD_SHEETS,
    MaterialCategory,
    PartRequest,
    Piece,
    StockBar,
    StockSheet,
)
from stocknest.infrastructure.bin_packing import (
    PackingConfig,
    PackingResult,
    allocate_sheets,
    find_layout_violations,
)
from stocknest.infrastructure.linear_packing import (
    LinearPackingConfig,
    LinearResult,
    pack_linear,
)

logger = logging.getLogger(__name__)

__all__ = [
    "BarNestingReport",
    "CandidateEvaluation",
    "NestingService",
    "SheetComparison",
    "SheetNestingReport",
]


@dataclass(frozen=True)
class SheetNestingReport:
    """Outcome of nesting a job onto one sheet size.

    Attributes:
        sheet: Sheet nested onto.
        pieces: Validated unit pieces.
        estimate: Arithmetic estimate for the sheet.
        packing: Exact placement result.
        material_cost: Sheets used times the sheet cost.
        cutting_cost: Perimeter cutting cost of the placed pieces.
        violations: Overlap or bounds problems found in the layouts.
        total_weight: Weight in kg of all requested pieces, 0 if unknown.
    """

    sheet: StockSheet
    pieces: tuple[Piece, ...]
    estimate: StockEstimate
    packing: PackingResult
    material_cost: float
    cutting_cost: float
    violations: tuple[str, ...] = ()
    total_weight: float = 0.0

    @property
    def total_cost(self) -> float:
        return self.material_cost + self.cutting_cost

    @property
    def is_complete(self) -> bool:
        return self.packing.is_complete


@dataclass(frozen=True)
class BarNestingReport:
    """Outcome of cutting a linear job from one bar length."""

    bar: StockBar
    category: MaterialCategory
    pieces: tuple[Piece, ...]
    estimate: StockEstimate
    result: LinearResult
    total_weight: float = 0.0

    @property
    def total_cost(self) -> float:
        return self.result.estimated_cost

    @property
    def is_complete(self) -> bool:
        return self.result.is_complete


# A candidate is evaluated exactly like a single-sheet job.
CandidateEvaluation = SheetNestingReport


@dataclass(frozen=True)
class SheetComparison:
    """Evaluation of several candidate sheet sizes for one job.

    Attributes:
        candidates: One evaluation per candidate, in candidate order.
        best_index: Index of the recommended candidate.
    """

    candidates: tuple[CandidateEvaluation, ...]
    best_index: int

    @property
    def best(self) -> CandidateEvaluation:
        return self.candidates[self.best_index]


def _select_best(candidates: Sequence[CandidateEvaluation]) -> int:
    """Pick the recommended candidate.

    Complete candidates win: fewest sheets, then highest mean utilization,
    then earliest. If none is complete, fewest unplaced pieces wins.
    """
    complete = [i for i, c in enumerate(candidates) if c.is_complete]
    if complete:
        return min(
            complete,
            key=lambda i: (
                candidates[i].packing.total_sheets,
                -candidates[i].packing.mean_utilization,
                i,
            ),
        )
    return min(
        range(len(candidates)),
        key=lambda i: (len(candidates[i].packing.unplaced), i),
    )


class NestingService:
    """Runs nesting calculations for sheet and linear stock.

    Configs are immutable and shared across calls, so a single service
    instance can evaluate any number of jobs and candidates.
    """

    def __init__(
        self,
        packing_config: PackingConfig | None = None,
        linear_config: LinearPackingConfig | None = None,
        estimate_config: EstimateConfig | None = None,
    ) -> None:
        self.packing_config = packing_config or PackingConfig()
        self.linear_config = linear_config or LinearPackingConfig()
        self.calculator = UtilizationCalculator(estimate_config)

    def prepare(
        self, parts: Sequence[PartRequest], category: MaterialCategory
    ) -> list[Piece]:
        """Expand part requests and validate them against the category.

        Raises:
            IncompatiblePiecesError: If any piece lacks a required dimension.
        """
        pieces = expand_parts(parts)
        validate_compatibility(pieces, category).raise_for_errors()
        logger.info(
            "Prepared %d %s pieces from %d part lines",
            len(pieces),
            category.value,
            len(parts),
        )
        return pieces

    def _evaluate_sheet(
        self, pieces: Sequence[Piece], sheet: StockSheet, weight: float
    ) -> SheetNestingReport:
        estimate = self.calculator.estimate_sheets(pieces, sheet)
        packing = allocate_sheets(pieces, sheet, self.packing_config)
        material_cost, cutting_cost = self.calculator.sheet_costs(packing)

        violations: list[str] = []
        for layout in packing.layouts:
            violations.extend(
                find_layout_violations(layout, sheet, self.packing_config)
            )
        for violation in violations:
            logger.error("Layout defect on %s: %s", sheet.label, violation)

        if not packing.is_complete:
            logger.warning(
                "%d piece(s) could not be placed on %s sheets",
                len(packing.unplaced),
                sheet.label,
            )

        return SheetNestingReport(
            sheet=sheet,
            pieces=tuple(pieces),
            estimate=estimate,
            packing=packing,
            material_cost=material_cost,
            cutting_cost=cutting_cost,
            violations=tuple(violations),
            total_weight=weight,
        )

    def nest_sheets(
        self, parts: Sequence[PartRequest], sheet: StockSheet
    ) -> SheetNestingReport:
        """Nest sheet parts onto one sheet size.

        Args:
            parts: BOM part requests with width and height.
            sheet: Sheet to nest onto.

        Returns:
            SheetNestingReport with the estimate, the layouts and costs.
        """
        pieces = self.prepare(parts, MaterialCategory.SHEET)
        report = self._evaluate_sheet(pieces, sheet, total_weight(parts))
        logger.info(
            "Nested %d pieces (%.0f mm2) onto %d %s sheets, %.1f%% mean utilization",
            report.packing.total_pieces_placed,
            total_area(parts),
            report.packing.total_sheets,
            sheet.label,
            report.packing.mean_utilization,
        )
        return report

    def nest_bars(
        self,
        parts: Sequence[PartRequest],
        bar: StockBar,
        category: MaterialCategory = MaterialCategory.BAR,
    ) -> BarNestingReport:
        """Cut linear parts from one bar length.

        Raises:
            ValueError: If category is not a linear category.
            IncompatiblePiecesError: If any piece lacks a length.
        """
        if not category.is_linear:
            raise ValueError(f"Category '{category.value}' is not linear stock")

        pieces = self.prepare(parts, category)
        estimate = self.calculator.estimate_bars(pieces, bar)
        result = pack_linear(pieces, bar, self.linear_config)

        logger.info(
            "Cut %d segments from %d %s bars, %.1f%% utilization",
            result.cut_count,
            result.bar_count,
            bar.label,
            result.utilization,
        )
        return BarNestingReport(
            bar=bar,
            category=category,
            pieces=tuple(pieces),
            estimate=estimate,
            result=result,
            total_weight=total_weight(parts),
        )

    def compare_sheets(
        self,
        parts: Sequence[PartRequest],
        candidates: Sequence[StockSheet] = STANDARD_SHEETS,
    ) -> SheetComparison:
        """Nest the same parts onto each candidate sheet and pick the best.

        Raises:
            ValueError: If no candidates are given.
        """
        if not candidates:
            raise ValueError("At least one candidate sheet is required")

        pieces = self.prepare(parts, MaterialCategory.SHEET)
        weight = total_weight(parts)
        evaluations = tuple(
            self._evaluate_sheet(pieces, sheet, weight) for sheet in candidates
        )
        best_index = _select_best(evaluations)

        logger.info(
            "Best of %d candidates: %s",
            len(evaluations),
            evaluations[best_index].sheet.label,
        )
        return SheetComparison(candidates=evaluations, best_index=best_index)

    def calculate(
        self,
        parts: Sequence[PartRequest],
        stock: StockSheet | StockBar,
        category: MaterialCategory,
    ) -> SheetNestingReport | BarNestingReport:
        """Dispatch a job to the sheet or linear nester by category.

        Raises:
            ValueError: If the stock type does not match the category.
        """
        if category is MaterialCategory.SHEET:
            if not isinstance(stock, StockSheet):
                raise ValueError("Sheet material requires sheet stock")
            return self.nest_sheets(parts, stock)

        if not isinstance(stock, StockBar):
            raise ValueError(f"Category '{category.value}' requires bar stock")
        return self.nest_bars(parts, stock, category)
