"""Part and piece value objects."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class MaterialCategory(str, Enum):
    """Category of raw stock a set of parts is cut from.

    Sheets are nested in two dimensions; tubes, profiles and bars are
    cut along their length only.
    """

    SHEET = "sheet"
    TUBE = "tube"
    PROFILE = "profile"
    BAR = "bar"

    @property
    def is_linear(self) -> bool:
        """True for one-dimensional stock (tubes, profiles and bars)."""
        return self is not MaterialCategory.SHEET


@dataclass(frozen=True)
class PartRequest:
    """A bill-of-materials line: one part and how many of it are needed.

    Dimensions are optional because a BOM line only carries the ones that
    matter for its material; the compatibility validator decides whether
    the line can be nested.

    Attributes:
        id: Part identifier, used as the prefix of expanded piece ids.
        description: Human-readable part name.
        quantity: Number of units required. Zero or negative yields no pieces.
        width: Part width in mm (sheet parts).
        height: Part height in mm (sheet parts).
        length: Part length in mm (linear parts).
        weight: Unit weight in kg, if known.
    """

    id: str
    description: str
    quantity: int = 1
    width: float | None = None
    height: float | None = None
    length: float | None = None
    weight: float | None = None

    @property
    def area(self) -> float:
        """Area of a single unit in mm², 0 when a dimension is missing."""
        if self.width is None or self.height is None:
            return 0.0
        return self.width * self.height


@dataclass(frozen=True)
class Piece:
    """A single physical piece to be cut from stock.

    Attributes:
        id: Unique piece id, "<part id>-<n>" when produced by the expander.
        description: Human-readable part name.
        width: Width in mm (2D pieces).
        height: Height in mm (2D pieces).
        length: Length in mm (1D pieces).
        weight: Weight in kg, if known.
    """

    id: str
    description: str
    width: float | None = None
    height: float | None = None
    length: float | None = None
    weight: float | None = None

    @property
    def area(self) -> float:
        """Area in mm², 0 when a dimension is missing."""
        if self.width is None or self.height is None:
            return 0.0
        return self.width * self.height

    @property
    def perimeter(self) -> float:
        """Cut perimeter in mm, missing dimensions count as 0."""
        return 2 * ((self.width or 0.0) + (self.height or 0.0))


class Orientation(Enum):
    """Orientation a piece can be placed in on a sheet."""

    UNROTATED = "unrotated"
    ROTATED = "rotated"

    @property
    def rotated(self) -> bool:
        return self is Orientation.ROTATED

    def dimensions(self, piece: Piece) -> tuple[float, float]:
        """Return (placed width, placed height) of a piece in this orientation."""
        width = float(piece.width or 0.0)
        height = float(piece.height or 0.0)
        if self is Orientation.ROTATED:
            return height, width
        return width, height


# Evaluation order for placement; unrotated wins ties.
ORIENTATION_ORDER: tuple[Orientation, Orientation] = (
    Orientation.UNROTATED,
    Orientation.ROTATED,
)
