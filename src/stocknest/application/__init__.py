"""Application layer - use cases and orchestration."""

from .services import (
    BarNestingReport,
    NestingService,
    SheetComparison,
    SheetNestingReport,
)

__all__ = [
    "BarNestingReport",
    "NestingService",
    "SheetComparison",
    "SheetNestingReport",
]
