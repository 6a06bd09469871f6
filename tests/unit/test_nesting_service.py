"""Tests for the NestingService use cases.

Tests cover:
- Sheet nesting with estimate, exact layout and costs
- Linear nesting across the linear categories
- Candidate comparison and best-sheet selection
- Category dispatch and error conditions
"""

from __future__ import annotations

import pytest

from stocknest.application.services import (
    BarNestingReport,
    NestingService,
    SheetNestingReport,
)
from stocknest.domain.services import IncompatiblePiecesError
from stocknest.domain.value_objects import (
    MaterialCategory,
    PartRequest,
    StockBar,
    StockSheet,
)
from stocknest.infrastructure.bin_packing import PackingConfig


@pytest.fixture
def service() -> NestingService:
    """Service with default engine configs."""
    return NestingService()


@pytest.fixture
def priced_sheet() -> StockSheet:
    """A 2000x1250 sheet costing 180."""
    return StockSheet(width=2000.0, height=1250.0, name="MDF 18", unit_cost=180.0)


@pytest.fixture
def rail_parts() -> list[PartRequest]:
    """Four 2000 mm rails."""
    return [PartRequest(id="RAIL", description="Rail", quantity=4, length=2000.0)]


@pytest.fixture
def tube() -> StockBar:
    """A 6000 mm tube costing 100."""
    return StockBar(length=6000.0, name="Tube 6m", unit_cost=100.0)


# =============================================================================
# Sheet nesting
# =============================================================================


class TestNestSheets:
    """Tests for NestingService.nest_sheets."""

    def test_four_doors(
        self,
        service: NestingService,
        door_parts: list[PartRequest],
        priced_sheet: StockSheet,
    ) -> None:
        """Test four doors fit one sheet while the estimate asks for two."""
        report = service.nest_sheets(door_parts, priced_sheet)

        assert isinstance(report, SheetNestingReport)
        assert len(report.pieces) == 4
        assert report.packing.total_sheets == 1
        assert report.packing.mean_utilization == 87.5
        assert report.estimate.required_units == 2
        assert report.is_complete
        assert report.violations == ()
        assert report.total_weight == 0.0

    def test_costs(
        self,
        service: NestingService,
        door_parts: list[PartRequest],
        priced_sheet: StockSheet,
    ) -> None:
        """Test material and perimeter cutting cost of the exact layout."""
        report = service.nest_sheets(door_parts, priced_sheet)

        assert report.material_cost == 180.0
        assert report.cutting_cost == pytest.approx(30.0)
        assert report.total_cost == pytest.approx(210.0)

    def test_unplaceable_part_is_reported(
        self, service: NestingService, priced_sheet: StockSheet
    ) -> None:
        """Test an oversized part comes back unplaced without raising."""
        parts = [
            PartRequest(id="TOP", description="Top", width=2500.0, height=1500.0),
            PartRequest(id="DOOR", description="Door", width=900.0, height=600.0),
        ]

        report = service.nest_sheets(parts, priced_sheet)

        assert not report.is_complete
        assert [p.id for p in report.packing.unplaced] == ["TOP-1"]
        assert report.packing.total_sheets == 1
        assert report.cutting_cost == pytest.approx(7.5)

    def test_shared_part_id_priced_by_placement(
        self, service: NestingService, standard_sheet: StockSheet
    ) -> None:
        """Test BOM lines sharing an id are priced by what was cut."""
        parts = [
            PartRequest(id="A", description="Panel", width=1990.0, height=1240.0),
            PartRequest(id="A", description="Slab", width=5000.0, height=5000.0),
        ]

        report = service.nest_sheets(parts, standard_sheet)

        assert [p.description for p in report.packing.unplaced] == ["Slab"]
        assert report.cutting_cost == pytest.approx(16.15)

    def test_incompatible_part_raises(
        self, service: NestingService, priced_sheet: StockSheet
    ) -> None:
        """Test a part without height is rejected before packing."""
        parts = [PartRequest(id="STRIP", description="Strip", width=900.0)]

        with pytest.raises(IncompatiblePiecesError) as exc_info:
            service.nest_sheets(parts, priced_sheet)

        assert exc_info.value.category is MaterialCategory.SHEET
        assert len(exc_info.value.errors) == 1

    def test_packing_config_is_used(
        self, door_parts: list[PartRequest], priced_sheet: StockSheet
    ) -> None:
        """Test a service built with a sheet cap honours it."""
        service = NestingService(packing_config=PackingConfig(sheet_cap=1))
        parts = door_parts + [
            PartRequest(id="SIDE", description="Side", width=1900.0, height=1200.0)
        ]

        report = service.nest_sheets(parts, priced_sheet)

        assert report.packing.total_sheets == 1
        assert not report.is_complete


# =============================================================================
# Linear nesting
# =============================================================================


class TestNestBars:
    """Tests for NestingService.nest_bars."""

    def test_rails(
        self,
        service: NestingService,
        rail_parts: list[PartRequest],
        tube: StockBar,
    ) -> None:
        """Test four rails need three bars after the efficiency allowance."""
        report = service.nest_bars(rail_parts, tube, MaterialCategory.TUBE)

        assert isinstance(report, BarNestingReport)
        assert report.category is MaterialCategory.TUBE
        assert report.result.raw_bar_count == 2
        assert report.result.bar_count == 3
        assert report.total_cost == 312.0
        assert report.estimate.required_units == 2
        assert report.is_complete

    def test_sheet_category_rejected(
        self,
        service: NestingService,
        rail_parts: list[PartRequest],
        tube: StockBar,
    ) -> None:
        """Test sheet is not accepted as a linear category."""
        with pytest.raises(ValueError, match="not linear stock"):
            service.nest_bars(rail_parts, tube, MaterialCategory.SHEET)

    def test_part_without_length_raises(
        self, service: NestingService, tube: StockBar
    ) -> None:
        """Test a 2D part cannot be cut from bar stock."""
        parts = [PartRequest(id="PANEL", description="Panel", width=400, height=300)]

        with pytest.raises(IncompatiblePiecesError, match="incompatible with bar"):
            service.nest_bars(parts, tube)


# =============================================================================
# Candidate comparison
# =============================================================================


class TestCompareSheets:
    """Tests for NestingService.compare_sheets."""

    def test_standard_candidates(
        self, service: NestingService, door_parts: list[PartRequest]
    ) -> None:
        """Test the smaller sheet wins when both need one sheet."""
        comparison = service.compare_sheets(door_parts)

        assert len(comparison.candidates) == 2
        assert comparison.best_index == 0
        assert comparison.best.sheet.label == "2000x1250"
        assert comparison.candidates[1].packing.mean_utilization == 58.3

    def test_order_does_not_bias_utilization(
        self, service: NestingService, door_parts: list[PartRequest]
    ) -> None:
        """Test the better-utilized sheet wins wherever it is listed."""
        candidates = [
            StockSheet(width=3000.0, height=1250.0),
            StockSheet(width=2000.0, height=1250.0),
        ]

        comparison = service.compare_sheets(door_parts, candidates)

        assert comparison.best_index == 1

    def test_complete_candidate_preferred(self, service: NestingService) -> None:
        """Test only the sheet that fits everything can be best."""
        parts = [
            PartRequest(id="TOP", description="Top", width=2800.0, height=1000.0)
        ]

        comparison = service.compare_sheets(parts)

        assert not comparison.candidates[0].is_complete
        assert comparison.best_index == 1

    def test_no_complete_candidate(self, service: NestingService) -> None:
        """Test the first candidate wins when all leave the same unplaced."""
        parts = [
            PartRequest(id="SLAB", description="Slab", width=4000.0, height=4000.0)
        ]

        comparison = service.compare_sheets(parts)

        assert comparison.best_index == 0
        assert not comparison.best.is_complete

    def test_empty_candidates_raise(
        self, service: NestingService, door_parts: list[PartRequest]
    ) -> None:
        """Test at least one candidate is required."""
        with pytest.raises(ValueError, match="At least one candidate"):
            service.compare_sheets(door_parts, [])


# =============================================================================
# Dispatch
# =============================================================================


class TestCalculate:
    """Tests for category dispatch."""

    def test_sheet_dispatch(
        self,
        service: NestingService,
        door_parts: list[PartRequest],
        standard_sheet: StockSheet,
    ) -> None:
        """Test sheet category goes to the sheet nester."""
        report = service.calculate(door_parts, standard_sheet, MaterialCategory.SHEET)
        assert isinstance(report, SheetNestingReport)

    @pytest.mark.parametrize(
        "category",
        [MaterialCategory.TUBE, MaterialCategory.PROFILE, MaterialCategory.BAR],
    )
    def test_linear_dispatch(
        self,
        service: NestingService,
        rail_parts: list[PartRequest],
        tube: StockBar,
        category: MaterialCategory,
    ) -> None:
        """Test every linear category goes to the linear nester."""
        report = service.calculate(rail_parts, tube, category)

        assert isinstance(report, BarNestingReport)
        assert report.category is category

    def test_sheet_with_bar_stock_raises(
        self,
        service: NestingService,
        door_parts: list[PartRequest],
        tube: StockBar,
    ) -> None:
        """Test sheet material cannot be nested onto a bar."""
        with pytest.raises(ValueError, match="requires sheet stock"):
            service.calculate(door_parts, tube, MaterialCategory.SHEET)

    def test_bar_with_sheet_stock_raises(
        self,
        service: NestingService,
        rail_parts: list[PartRequest],
        standard_sheet: StockSheet,
    ) -> None:
        """Test linear material cannot be cut from a sheet."""
        with pytest.raises(ValueError, match="Category 'profile' requires bar"):
            service.calculate(rail_parts, standard_sheet, MaterialCategory.PROFILE)
