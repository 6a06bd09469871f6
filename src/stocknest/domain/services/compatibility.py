"""Material compatibility validation for pieces.

Sheets need a width and a height per piece; tubes, profiles and bars only
need a length. Every offending piece is reported in one batch so the user
can fix the whole BOM at once, and packing is not attempted until the
batch is clean.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from ..value_objects import MaterialCategory, Piece

__all__ = [
    "CompatibilityResult",
    "IncompatiblePiecesError",
    "validate_compatibility",
]


class IncompatiblePiecesError(ValueError):
    """Raised when pieces lack the dimensions their material requires.

    Attributes:
        category: Material category the pieces were validated against.
        errors: One message per offending piece.
    """

    def __init__(self, category: MaterialCategory, errors: list[str]) -> None:
        self.category = category
        self.errors = list(errors)
        lines = [f"{len(self.errors)} piece(s) incompatible with {category.value}:"]
        lines.extend(f"  - {error}" for error in self.errors)
        super().__init__("\n".join(lines))


@dataclass
class CompatibilityResult:
    """Outcome of validating pieces against a material category.

    Attributes:
        category: Material category checked.
        errors: One message per piece missing a required dimension.
    """

    category: MaterialCategory
    errors: list[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        """True when no piece is missing a required dimension."""
        return len(self.errors) == 0

    def raise_for_errors(self) -> None:
        """Raise IncompatiblePiecesError if the batch is not valid."""
        if not self.valid:
            raise IncompatiblePiecesError(self.category, self.errors)


def _is_missing(value: float | None) -> bool:
    return value is None or value <= 0


def validate_compatibility(
    pieces: Sequence[Piece],
    category: MaterialCategory,
) -> CompatibilityResult:
    """Check that every piece carries the dimensions its material needs.

    A dimension that is absent or not positive counts as missing.

    Args:
        pieces: Pieces to check.
        category: Material category the pieces will be cut from.

    Returns:
        CompatibilityResult with one error message per offending piece.
    """
    result = CompatibilityResult(category=category)

    for piece in pieces:
        if category is MaterialCategory.SHEET:
            if _is_missing(piece.width) or _is_missing(piece.height):
                result.errors.append(
                    f'Piece "{piece.description}" ({piece.id}) requires width '
                    f"and height for sheet material"
                )
        elif _is_missing(piece.length):
            result.errors.append(
                f'Piece "{piece.description}" ({piece.id}) requires length '
                f"for {category.value} material"
            )

    return result
