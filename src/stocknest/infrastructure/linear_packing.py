"""First-Fit-Decreasing packing for linear stock (tubes, profiles, bars).

Segments are cut from bars of a single length. Every cut consumes
``cut_spacing`` of material and both bar ends lose ``edge_loss``. After
packing, the raw bar count is inflated by the configured cutting
efficiency, a business allowance for operator and machine losses rather
than something the packing itself guarantees.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Sequence

from stocknest.domain.value_objects import Piece, StockBar

logger = logging.getLogger(__name__)

__all__ = [
    "BarLayout",
    "LinearPackingConfig",
    "LinearResult",
    "pack_linear",
]


@dataclass(frozen=True)
class LinearPackingConfig:
    """Configuration for linear stock packing.

    Attributes:
        cut_spacing: Material consumed by each cut in mm.
        edge_loss: Unusable length at each bar end in mm.
        cutting_efficiency: Expected cutting efficiency in percent (0-100].
        cost_per_cut: Cost charged per cut.
    """

    cut_spacing: float = 3.0
    edge_loss: float = 10.0
    cutting_efficiency: float = 85.0
    cost_per_cut: float = 3.0

    def __post_init__(self) -> None:
        if self.cut_spacing < 0:
            raise ValueError("Cut spacing must be non-negative")
        if self.edge_loss < 0:
            raise ValueError("Edge loss must be non-negative")
        if not 0 < self.cutting_efficiency <= 100:
            raise ValueError("Cutting efficiency must be between 0 and 100")
        if self.cost_per_cut < 0:
            raise ValueError("Cost per cut must be non-negative")

    def usable_length(self, bar: StockBar) -> float:
        """Length available for cutting after edge loss at both ends.

        Raises:
            ValueError: If the edge loss leaves no usable length.
        """
        usable = bar.length - 2 * self.edge_loss
        if usable <= 0:
            raise ValueError(
                f"Edge loss {self.edge_loss} leaves no usable length on bar "
                f"{bar.label}"
            )
        return usable


@dataclass(frozen=True)
class BarLayout:
    """Segments cut from a single bar.

    Attributes:
        bar_index: Zero-based index of the bar.
        cuts: Pieces cut from this bar, in placement order.
        used_length: Length consumed, including one cut spacing per cut.
        usable_length: Bar length after edge loss.
    """

    bar_index: int
    cuts: tuple[Piece, ...]
    used_length: float
    usable_length: float

    @property
    def waste_length(self) -> float:
        """Usable length left after all cuts."""
        return self.usable_length - self.used_length

    @property
    def utilization(self) -> float:
        """Used length over usable length in percent."""
        if self.usable_length <= 0:
            return 0.0
        return self.used_length / self.usable_length * 100


@dataclass(frozen=True)
class LinearResult:
    """Result of packing segments onto bars of one length.

    ``raw_bar_count`` is what FFD actually used; ``bar_count`` is that
    figure inflated by the cutting efficiency and is the number to buy.

    Attributes:
        bar: Bar stock packed onto.
        bars: Layout of each bar FFD opened.
        raw_bar_count: Bars used by the packing.
        bar_count: Bars required after the efficiency allowance.
        used_length: Total length consumed, cut spacing included.
        available_length: Usable length of ``bar_count`` bars.
        utilization: used over available in percent, capped at 100.
        cut_count: Number of segments cut.
        material_cost: bar_count times the bar unit cost.
        cutting_cost: cut_count times the cost per cut.
        unplaced: Segments longer than a usable bar.
    """

    bar: StockBar
    bars: tuple[BarLayout, ...]
    raw_bar_count: int
    bar_count: int
    used_length: float
    available_length: float
    utilization: float
    cut_count: int
    material_cost: float
    cutting_cost: float
    unplaced: tuple[Piece, ...] = ()

    @property
    def waste_length(self) -> float:
        """Available length not consumed by cuts."""
        return self.available_length - self.used_length

    @property
    def estimated_cost(self) -> float:
        return self.material_cost + self.cutting_cost

    @property
    def is_complete(self) -> bool:
        """True if every segment was placed."""
        return not self.unplaced


def pack_linear(
    segments: Sequence[Piece],
    bar: StockBar,
    config: LinearPackingConfig,
) -> LinearResult:
    """Pack segments onto bars with First-Fit-Decreasing.

    Segments are sorted longest first; each goes into the first open bar
    with room for it plus one cut spacing, or opens a new bar.

    Args:
        segments: Validated unit pieces carrying a length.
        bar: Bar stock to cut from.
        config: Spacing, loss, efficiency and cost configuration.

    Returns:
        LinearResult with per-bar layouts, counts, utilization and cost.
    """
    usable = config.usable_length(bar)
    spacing = config.cut_spacing

    ordered = sorted(segments, key=lambda s: s.length or 0.0, reverse=True)

    used: list[float] = []
    cuts: list[list[Piece]] = []
    unplaced: list[Piece] = []

    for segment in ordered:
        needed = (segment.length or 0.0) + spacing
        if needed > usable:
            logger.warning(
                "Segment '%s' (%s mm) exceeds usable bar length %s mm",
                segment.id,
                segment.length,
                usable,
            )
            unplaced.append(segment)
            continue

        for i in range(len(used)):
            if used[i] + needed <= usable:
                used[i] += needed
                cuts[i].append(segment)
                break
        else:
            used.append(needed)
            cuts.append([segment])

    raw_bar_count = len(used)
    # Multiply before dividing: raw / (eff / 100) rounds 17 bars at 85% up to 21.
    bar_count = math.ceil(raw_bar_count * 100 / config.cutting_efficiency)

    used_length = sum(used)
    available_length = usable * bar_count
    utilization = (
        min(used_length / available_length * 100, 100.0)
        if available_length > 0
        else 0.0
    )
    cut_count = sum(len(c) for c in cuts)

    layouts = tuple(
        BarLayout(
            bar_index=i,
            cuts=tuple(cuts[i]),
            used_length=used[i],
            usable_length=usable,
        )
        for i in range(raw_bar_count)
    )

    logger.debug(
        "Packed %d segments onto %d bars (%d after %.0f%% efficiency)",
        cut_count,
        raw_bar_count,
        bar_count,
        config.cutting_efficiency,
    )

    return LinearResult(
        bar=bar,
        bars=layouts,
        raw_bar_count=raw_bar_count,
        bar_count=bar_count,
        used_length=used_length,
        available_length=available_length,
        utilization=utilization,
        cut_count=cut_count,
        material_cost=bar_count * bar.unit_cost,
        cutting_cost=cut_count * config.cost_per_cut,
        unplaced=tuple(unplaced),
    )
