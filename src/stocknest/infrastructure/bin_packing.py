"""Bin packing data models and algorithms for sheet material nesting.

This module provides data structures for representing sheet layouts,
piece placements, and packing results, and the shelf algorithm that
produces them.

All result dataclasses are frozen (immutable) and every packing function
is a pure function of its inputs, so a single PackingConfig can be shared
across threads evaluating several candidate sheet sizes.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Sequence

from stocknest.domain.value_objects import ORIENTATION_ORDER, Piece, StockSheet

logger = logging.getLogger(__name__)

__all__ = [
    "PackingConfig",
    "PackingResult",
    "Placement",
    "SheetLayout",
    "SheetPackOutcome",
    "allocate_sheets",
    "find_layout_violations",
    "pack_sheet",
    "round_percentage",
    "sort_by_area",
]


def round_percentage(value: float) -> float:
    """Round a percentage half-up to one decimal place."""
    return math.floor(value * 10 + 0.5) / 10


@dataclass(frozen=True)
class PackingConfig:
    """Configuration for sheet nesting.

    Attributes:
        kerf: Saw or cutting-head width in mm, left between adjacent pieces.
        edge_margin: Unusable border on every side of the sheet in mm.
        sheet_cap: Maximum number of sheets a single allocation may open.
    """

    kerf: float = 5.0
    edge_margin: float = 5.0
    sheet_cap: int = 50

    def __post_init__(self) -> None:
        if self.kerf < 0:
            raise ValueError("Kerf must be non-negative")
        if self.edge_margin < 0:
            raise ValueError("Edge margin must be non-negative")
        if self.sheet_cap < 1:
            raise ValueError("Sheet cap must be at least 1")

    def usable_dimensions(self, sheet: StockSheet) -> tuple[float, float]:
        """Width and height available for placement after the edge margin.

        Raises:
            ValueError: If the margin leaves no usable area.
        """
        usable_width = sheet.width - 2 * self.edge_margin
        usable_height = sheet.height - 2 * self.edge_margin
        if usable_width <= 0 or usable_height <= 0:
            raise ValueError(
                f"Edge margin {self.edge_margin} leaves no usable area on "
                f"sheet {sheet.label}"
            )
        return usable_width, usable_height

    def usable_area(self, sheet: StockSheet) -> float:
        """Usable area of a sheet in mm²."""
        usable_width, usable_height = self.usable_dimensions(sheet)
        return usable_width * usable_height


@dataclass(frozen=True)
class Placement:
    """A piece placed at a specific position on a sheet.

    Coordinates are absolute sheet coordinates, so the first piece sits
    at (edge_margin, edge_margin).

    Attributes:
        piece_id: Id of the placed piece.
        description: Description of the placed piece.
        x: Left edge in mm.
        y: Bottom edge in mm.
        width: Width as placed (after rotation) in mm.
        height: Height as placed (after rotation) in mm.
        rotated: True if the piece is turned 90 degrees.
    """

    piece_id: str
    description: str
    x: float
    y: float
    width: float
    height: float
    rotated: bool = False

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise ValueError("Position coordinates must be non-negative")

    @property
    def right_edge(self) -> float:
        """X coordinate of the piece right edge."""
        return self.x + self.width

    @property
    def top_edge(self) -> float:
        """Y coordinate of the piece top edge."""
        return self.y + self.height

    @property
    def area(self) -> float:
        return self.width * self.height

    def overlaps(self, other: Placement) -> bool:
        """True if the two placements share any interior area."""
        return not (
            self.right_edge <= other.x
            or other.right_edge <= self.x
            or self.top_edge <= other.y
            or other.top_edge <= self.y
        )


@dataclass(frozen=True)
class SheetLayout:
    """Layout of pieces on a single sheet.

    Attributes:
        sheet_index: Zero-based index of this sheet in the packing result.
        placements: Placements in the order they were made.
        utilization: Used area over usable area in percent, one decimal.
        used_area: Area covered by placed pieces in mm².
        usable_area: Sheet area inside the edge margin in mm².
    """

    sheet_index: int
    placements: tuple[Placement, ...]
    utilization: float
    used_area: float
    usable_area: float

    def __post_init__(self) -> None:
        if self.sheet_index < 0:
            raise ValueError("Sheet index must be non-negative")

    @property
    def piece_count(self) -> int:
        """Number of pieces placed on this sheet."""
        return len(self.placements)

    @property
    def waste_area(self) -> float:
        """Usable area left uncovered in mm²."""
        return self.usable_area - self.used_area


@dataclass(frozen=True)
class SheetPackOutcome:
    """Result of packing one sheet.

    Attributes:
        layout: The sheet layout.
        unplaced: Pieces that did not fit on this sheet, in input order.
    """

    layout: SheetLayout
    unplaced: tuple[Piece, ...]


@dataclass(frozen=True)
class PackingResult:
    """Complete result of nesting pieces onto sheets of one size.

    A non-empty ``unplaced`` tuple means the layout is incomplete: some
    pieces did not fit on any sheet, or the sheet cap was reached. The
    packer never raises for this; callers must surface it.

    Attributes:
        sheet: Sheet size the pieces were packed onto.
        layouts: One layout per sheet used.
        total_sheets: Number of sheets used.
        total_pieces_placed: Number of pieces placed across all sheets.
        mean_utilization: Simple average of sheet utilizations, one decimal.
        unplaced: Pieces that could not be placed.
    """

    sheet: StockSheet
    layouts: tuple[SheetLayout, ...]
    total_sheets: int
    total_pieces_placed: int
    mean_utilization: float
    unplaced: tuple[Piece, ...] = ()

    def __post_init__(self) -> None:
        if self.mean_utilization < 0 or self.mean_utilization > 100:
            raise ValueError("Utilization must be between 0 and 100")

    @property
    def is_complete(self) -> bool:
        """True if every piece was placed."""
        return not self.unplaced

    @property
    def used_area(self) -> float:
        """Total area covered by placed pieces in mm²."""
        return sum(layout.used_area for layout in self.layouts)

    @property
    def usable_area(self) -> float:
        """Total usable area of all sheets used in mm²."""
        return sum(layout.usable_area for layout in self.layouts)

    @property
    def waste_area(self) -> float:
        """Total uncovered usable area in mm²."""
        return self.usable_area - self.used_area


@dataclass
class _Shelf:
    """Internal shelf representation for the packing algorithm.

    A horizontal band of the sheet where pieces are placed left to right.
    Its height is set by the piece that opened it; later pieces must be
    no taller.

    Attributes:
        y: Bottom Y position of the shelf.
        height: Height of the shelf.
        width_used: Width consumed so far, including one kerf per piece.
    """

    y: float
    height: float
    width_used: float = 0.0


def sort_by_area(pieces: Sequence[Piece]) -> list[Piece]:
    """Sort pieces by area, largest first.

    The sort is stable so pieces of equal area keep their input order.
    """
    return sorted(pieces, key=lambda p: p.area, reverse=True)


def _place(
    piece: Piece,
    shelf: _Shelf,
    width: float,
    height: float,
    rotated: bool,
    margin: float,
    kerf: float,
) -> Placement:
    """Place a piece at the end of a shelf and advance the shelf."""
    placement = Placement(
        piece_id=piece.id,
        description=piece.description,
        x=margin + shelf.width_used,
        y=shelf.y,
        width=width,
        height=height,
        rotated=rotated,
    )
    shelf.width_used += width + kerf

    if rotated:
        logger.debug(
            "Piece '%s' placed rotated at (%s, %s) as %sx%s",
            piece.id,
            placement.x,
            placement.y,
            width,
            height,
        )
    return placement


def _place_on_existing_shelf(
    piece: Piece,
    shelves: list[_Shelf],
    usable_width: float,
    margin: float,
    kerf: float,
) -> Placement | None:
    """Try every orientation against every open shelf, top to bottom."""
    for orientation in ORIENTATION_ORDER:
        width, height = orientation.dimensions(piece)
        for shelf in shelves:
            if usable_width - shelf.width_used >= width and height <= shelf.height:
                return _place(
                    piece, shelf, width, height, orientation.rotated, margin, kerf
                )
    return None


def _place_on_new_shelf(
    piece: Piece,
    shelves: list[_Shelf],
    usable_width: float,
    usable_height: float,
    current_y: float,
    margin: float,
    kerf: float,
) -> Placement | None:
    """Try to open a new shelf at current_y for the piece."""
    for orientation in ORIENTATION_ORDER:
        width, height = orientation.dimensions(piece)
        if width <= usable_width and usable_height + margin - current_y >= height:
            shelf = _Shelf(y=current_y, height=height)
            shelves.append(shelf)
            return _place(
                piece, shelf, width, height, orientation.rotated, margin, kerf
            )
    return None


def pack_sheet(
    pieces: Sequence[Piece],
    sheet: StockSheet,
    config: PackingConfig,
    sheet_index: int = 0,
) -> SheetPackOutcome:
    """Pack as many pieces as possible onto a single sheet.

    Uses a shelf algorithm: pieces go left to right on horizontal shelves,
    new shelves open above the previous one. For each piece both
    orientations are tried against every existing shelf before a new
    shelf is opened, always unrotated first.

    Args:
        pieces: Pieces to place, expected sorted by area descending.
        sheet: Sheet to pack.
        config: Kerf and margin configuration.
        sheet_index: Index recorded on the resulting layout.

    Returns:
        SheetPackOutcome with the layout and the pieces that did not fit.
    """
    usable_width, usable_height = config.usable_dimensions(sheet)
    margin = config.edge_margin
    kerf = config.kerf

    shelves: list[_Shelf] = []
    placements: list[Placement] = []
    unplaced: list[Piece] = []
    current_y = margin

    for piece in pieces:
        placement = _place_on_existing_shelf(
            piece, shelves, usable_width, margin, kerf
        )
        if placement is None:
            placement = _place_on_new_shelf(
                piece, shelves, usable_width, usable_height, current_y, margin, kerf
            )
            if placement is not None:
                last = shelves[-1]
                current_y = last.y + last.height + kerf

        if placement is None:
            unplaced.append(piece)
        else:
            placements.append(placement)

    usable_area = usable_width * usable_height
    used_area = sum(p.area for p in placements)
    utilization = (
        round_percentage(used_area / usable_area * 100) if usable_area > 0 else 0.0
    )

    layout = SheetLayout(
        sheet_index=sheet_index,
        placements=tuple(placements),
        utilization=utilization,
        used_area=used_area,
        usable_area=usable_area,
    )
    return SheetPackOutcome(layout=layout, unplaced=tuple(unplaced))


def allocate_sheets(
    pieces: Sequence[Piece],
    sheet: StockSheet,
    config: PackingConfig,
) -> PackingResult:
    """Nest pieces onto as many sheets of one size as needed.

    Pieces are sorted by area (largest first) and packed sheet by sheet;
    each new sheet receives the pieces the previous one left over. Stops
    when everything is placed, when a fresh sheet cannot take any of the
    remaining pieces, or when ``config.sheet_cap`` sheets exist.

    Args:
        pieces: Validated pieces with width and height.
        sheet: Sheet size to pack onto.
        config: Packing configuration.

    Returns:
        PackingResult; its ``unplaced`` tuple lists anything left over.
    """
    remaining = sort_by_area(pieces)
    layouts: list[SheetLayout] = []

    logger.debug("Packing %d pieces onto %s sheets", len(remaining), sheet.label)

    while remaining and len(layouts) < config.sheet_cap:
        outcome = pack_sheet(remaining, sheet, config, sheet_index=len(layouts))
        if not outcome.layout.placements:
            logger.warning(
                "%d piece(s) do not fit on an empty %s sheet",
                len(outcome.unplaced),
                sheet.label,
            )
            break

        layouts.append(outcome.layout)
        remaining = list(outcome.unplaced)

        logger.debug(
            "Sheet %d: %d pieces, %.1f%% utilization",
            outcome.layout.sheet_index,
            outcome.layout.piece_count,
            outcome.layout.utilization,
        )
    else:
        if remaining:
            logger.warning(
                "Sheet cap of %d reached with %d piece(s) unplaced",
                config.sheet_cap,
                len(remaining),
            )

    mean_utilization = (
        round_percentage(sum(layout.utilization for layout in layouts) / len(layouts))
        if layouts
        else 0.0
    )

    return PackingResult(
        sheet=sheet,
        layouts=tuple(layouts),
        total_sheets=len(layouts),
        total_pieces_placed=sum(layout.piece_count for layout in layouts),
        mean_utilization=mean_utilization,
        unplaced=tuple(remaining),
    )


def find_layout_violations(
    layout: SheetLayout,
    sheet: StockSheet,
    config: PackingConfig,
) -> list[str]:
    """Check a layout for overlapping or out-of-bounds placements.

    Args:
        layout: Layout to check.
        sheet: Sheet the layout was packed on.
        config: Configuration the layout was packed with.

    Returns:
        One message per violation; empty when the layout is sound.
    """
    violations: list[str] = []
    margin = config.edge_margin
    max_x = sheet.width - margin
    max_y = sheet.height - margin

    for placement in layout.placements:
        if (
            placement.x < margin
            or placement.y < margin
            or placement.right_edge > max_x
            or placement.top_edge > max_y
        ):
            violations.append(
                f"Sheet {layout.sheet_index}: piece '{placement.piece_id}' lies "
                f"outside the usable area"
            )

    placements = layout.placements
    for i, first in enumerate(placements):
        for second in placements[i + 1 :]:
            if first.overlaps(second):
                violations.append(
                    f"Sheet {layout.sheet_index}: pieces '{first.piece_id}' and "
                    f"'{second.piece_id}' overlap"
                )

    return violations
