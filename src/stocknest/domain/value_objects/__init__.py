"""Value objects for the nesting domain.

This module provides immutable data types used throughout the nesting
engine. All classes are re-exported from sub-modules for convenience.
"""

from __future__ import annotations

from ._pieces import (
    ORIENTATION_ORDER,
    MaterialCategory,
    Orientation,
    PartRequest,
    Piece,
)
from ._stock import STANDARD_SHEETS, StockBar, StockSheet

__all__ = [
    "MaterialCategory",
    "ORIENTATION_ORDER",
    "Orientation",
    "PartRequest",
    "Piece",
    "STANDARD_SHEETS",
    "StockBar",
    "StockSheet",
]
