"""Domain layer - core nesting types and business rules."""

from .services import (
    CompatibilityResult,
    EstimateConfig,
    IncompatiblePiecesError,
    StockEstimate,
    UtilizationCalculator,
    expand_parts,
    required_stock_units,
    validate_compatibility,
)
from .value_objects import (
    STANDARD_SHEETS,
    MaterialCategory,
    Orientation,
    PartRequest,
    Piece,
    StockBar,
    StockSheet,
)

__all__ = [
    "CompatibilityResult",
    "EstimateConfig",
    "IncompatiblePiecesError",
    "MaterialCategory",
    "Orientation",
    "PartRequest",
    "Piece",
    "STANDARD_SHEETS",
    "StockBar",
    "StockEstimate",
    "StockSheet",
    "UtilizationCalculator",
    "expand_parts",
    "required_stock_units",
    "validate_compatibility",
]
