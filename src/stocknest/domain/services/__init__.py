"""Domain services for nesting.

This package provides the pure steps of a nesting calculation:
- Expanding BOM part requests into unit pieces
- Validating pieces against their material category
- Arithmetic stock estimates and pricing of packing results
"""

from .compatibility import (
    CompatibilityResult,
    IncompatiblePiecesError,
    validate_compatibility,
)
from .piece_expander import expand_parts, total_area, total_weight
from .utilization import (
    EstimateConfig,
    StockEstimate,
    UtilizationCalculator,
    required_stock_units,
)

__all__ = [
    "CompatibilityResult",
    "EstimateConfig",
    "IncompatiblePiecesError",
    "StockEstimate",
    "UtilizationCalculator",
    "expand_parts",
    "required_stock_units",
    "total_area",
    "total_weight",
    "validate_compatibility",
]
