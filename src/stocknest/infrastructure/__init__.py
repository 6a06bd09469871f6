"""Infrastructure layer - packing algorithms and output formatters."""

from .bin_packing import (
    PackingConfig,
    PackingResult,
    Placement,
    SheetLayout,
    allocate_sheets,
    find_layout_violations,
    pack_sheet,
)
from .formatters import (
    ComparisonFormatter,
    EstimateFormatter,
    JsonExporter,
    LinearReportFormatter,
    PackingReportFormatter,
)
from .linear_packing import BarLayout, LinearPackingConfig, LinearResult, pack_linear

__all__ = [
    "BarLayout",
    "ComparisonFormatter",
    "EstimateFormatter",
    "JsonExporter",
    "LinearPackingConfig",
    "LinearReportFormatter",
    "LinearResult",
    "PackingConfig",
    "PackingReportFormatter",
    "PackingResult",
    "Placement",
    "SheetLayout",
    "allocate_sheets",
    "find_layout_violations",
    "pack_linear",
    "pack_sheet",
]
