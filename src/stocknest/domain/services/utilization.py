"""Utilization and cost estimation for sheet and linear stock.

Two estimators live side by side and are not reconciled:

- The arithmetic estimate divides the required quantity (area or length,
  padded by the cut spacing and inflated by the cutting efficiency) by the
  usable quantity of one stock unit and rounds up.
- The exact result is whatever the packer produced; ``sheet_costs`` prices
  it.

They answer different questions and may disagree.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from stocknest.infrastructure.bin_packing import PackingResult

    from ..value_objects import Piece, StockBar, StockSheet

logger = logging.getLogger(__name__)

__all__ = [
    "EstimateConfig",
    "StockEstimate",
    "UtilizationCalculator",
    "required_stock_units",
]

MM_PER_M = 1000.0


def required_stock_units(required: float, usable_per_unit: float) -> int:
    """Number of stock units needed to cover a required quantity.

    Args:
        required: Area or length to cover.
        usable_per_unit: Usable area or length of one stock unit.

    Returns:
        ceil(required / usable_per_unit), or 0 when nothing is required.

    Raises:
        ValueError: If usable_per_unit is not positive.
    """
    if usable_per_unit <= 0:
        raise ValueError("Usable quantity per stock unit must be positive")
    if required <= 0:
        return 0
    return math.ceil(required / usable_per_unit)


@dataclass(frozen=True)
class EstimateConfig:
    """Parameters of the arithmetic estimate.

    Attributes:
        cut_spacing: Padding added to each piece dimension in mm.
        edge_loss: Unusable border on each stock edge in mm.
        cutting_efficiency: Expected efficiency in percent (0-100].
        cutting_cost_per_meter: Sheet cutting cost per metre of perimeter.
        cost_per_cut: Linear cutting cost per segment.
    """

    cut_spacing: float = 3.0
    edge_loss: float = 10.0
    cutting_efficiency: float = 85.0
    cutting_cost_per_meter: float = 2.5
    cost_per_cut: float = 3.0

    def __post_init__(self) -> None:
        if self.cut_spacing < 0:
            raise ValueError("Cut spacing must be non-negative")
        if self.edge_loss < 0:
            raise ValueError("Edge loss must be non-negative")
        if not 0 < self.cutting_efficiency <= 100:
            raise ValueError("Cutting efficiency must be between 0 and 100")
        if self.cutting_cost_per_meter < 0:
            raise ValueError("Cutting cost per meter must be non-negative")
        if self.cost_per_cut < 0:
            raise ValueError("Cost per cut must be non-negative")


@dataclass(frozen=True)
class StockEstimate:
    """Arithmetic estimate of stock needs for one stock size.

    Quantities are mm² for sheets and mm for bars.

    Attributes:
        required_units: Sheets or bars to buy.
        required_quantity: Padded, efficiency-inflated area or length.
        usable_quantity_per_unit: Usable area or length of one unit.
        utilization: required over available in percent, capped at 100.
        waste: Available quantity not required.
        material_cost: required_units times the unit cost.
        cutting_cost: Perimeter or per-cut cutting cost.
    """

    required_units: int
    required_quantity: float
    usable_quantity_per_unit: float
    utilization: float
    waste: float
    material_cost: float
    cutting_cost: float

    @property
    def available_quantity(self) -> float:
        return self.usable_quantity_per_unit * self.required_units

    @property
    def total_cost(self) -> float:
        return self.material_cost + self.cutting_cost


def _utilization(used: float, available: float) -> float:
    if available <= 0:
        return 0.0
    return min(used / available * 100, 100.0)


class UtilizationCalculator:
    """Arithmetic stock estimates and pricing of packing results."""

    def __init__(self, config: EstimateConfig | None = None) -> None:
        self.config = config or EstimateConfig()

    def _inflate(self, quantity: float) -> float:
        return quantity * 100 / self.config.cutting_efficiency

    def estimate_sheets(
        self, pieces: Sequence[Piece], sheet: StockSheet
    ) -> StockEstimate:
        """Estimate sheets needed for 2D pieces by area.

        Each piece counts as (width + cut_spacing) x (height + cut_spacing).

        Raises:
            ValueError: If the edge loss leaves no usable sheet area.
        """
        spacing = self.config.cut_spacing
        loss = self.config.edge_loss
        usable_width = sheet.width - 2 * loss
        usable_height = sheet.height - 2 * loss
        if usable_width <= 0 or usable_height <= 0:
            raise ValueError(
                f"Edge loss {loss} leaves no usable area on sheet {sheet.label}"
            )
        usable = usable_width * usable_height

        padded_area = sum(
            ((p.width or 0.0) + spacing) * ((p.height or 0.0) + spacing)
            for p in pieces
        )
        required = self._inflate(padded_area)
        units = required_stock_units(required, usable)
        available = usable * units
        perimeter_m = sum(p.perimeter for p in pieces) / MM_PER_M

        return StockEstimate(
            required_units=units,
            required_quantity=required,
            usable_quantity_per_unit=usable,
            utilization=_utilization(required, available),
            waste=max(available - required, 0.0),
            material_cost=units * sheet.unit_cost,
            cutting_cost=perimeter_m * self.config.cutting_cost_per_meter,
        )

    def estimate_bars(self, pieces: Sequence[Piece], bar: StockBar) -> StockEstimate:
        """Estimate bars needed for linear pieces by total length.

        Raises:
            ValueError: If the edge loss leaves no usable bar length.
        """
        spacing = self.config.cut_spacing
        usable = bar.length - 2 * self.config.edge_loss
        if usable <= 0:
            raise ValueError(
                f"Edge loss {self.config.edge_loss} leaves no usable length on "
                f"bar {bar.label}"
            )

        required = self._inflate(sum((p.length or 0.0) + spacing for p in pieces))
        units = required_stock_units(required, usable)
        available = usable * units

        return StockEstimate(
            required_units=units,
            required_quantity=required,
            usable_quantity_per_unit=usable,
            utilization=_utilization(required, available),
            waste=max(available - required, 0.0),
            material_cost=units * bar.unit_cost,
            cutting_cost=len(pieces) * self.config.cost_per_cut,
        )

    def sheet_costs(self, result: PackingResult) -> tuple[float, float]:
        """Price an exact packing result.

        Cutting cost follows the perimeter of the placements, so unplaced
        pieces add nothing. Rotation does not change a perimeter.

        Args:
            result: Packing result to price.

        Returns:
            (material_cost, cutting_cost)
        """
        perimeter_m = (
            sum(
                2 * (placement.width + placement.height)
                for layout in result.layouts
                for placement in layout.placements
            )
            / MM_PER_M
        )
        material_cost = result.total_sheets * result.sheet.unit_cost
        cutting_cost = perimeter_m * self.config.cutting_cost_per_meter

        logger.debug(
            "Priced %d sheets: material %.2f, cutting %.2f",
            result.total_sheets,
            material_cost,
            cutting_cost,
        )
        return material_cost, cutting_cost
