"""Raw stock value objects (sheets and bars)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class StockSheet:
    """A sheet of raw material.

    Width runs along the x axis (the direction shelves fill), height
    along the y axis.

    Attributes:
        width: Sheet width in mm.
        height: Sheet height in mm.
        name: Display name, e.g. "2000x1250".
        unit_cost: Purchase cost of one sheet.
    """

    width: float
    height: float
    name: str = ""
    unit_cost: float = 0.0

    def __post_init__(self) -> None:
        if self.width <= 0:
            raise ValueError("Sheet width must be positive")
        if self.height <= 0:
            raise ValueError("Sheet height must be positive")
        if self.unit_cost < 0:
            raise ValueError("Sheet cost must be non-negative")

    @property
    def area(self) -> float:
        """Gross sheet area in mm²."""
        return self.width * self.height

    @property
    def label(self) -> str:
        """Name if set, else the sheet dimensions."""
        return self.name or f"{self.width:g}x{self.height:g}"


@dataclass(frozen=True)
class StockBar:
    """A length of linear stock (tube, profile or bar).

    Attributes:
        length: Bar length in mm.
        name: Display name, e.g. "Tube 50mm x 6000mm".
        unit_cost: Purchase cost of one bar.
    """

    length: float
    name: str = ""
    unit_cost: float = 0.0

    def __post_init__(self) -> None:
        if self.length <= 0:
            raise ValueError("Bar length must be positive")
        if self.unit_cost < 0:
            raise ValueError("Bar cost must be non-negative")

    @property
    def label(self) -> str:
        """Name if set, else the bar length."""
        return self.name or f"{self.length:g}mm"


# Standard sheet formats offered when no candidate list is given.
STANDARD_SHEETS: tuple[StockSheet, ...] = (
    StockSheet(width=2000.0, height=1250.0, name="2000x1250"),
    StockSheet(width=3000.0, height=1250.0, name="3000x1250"),
)
