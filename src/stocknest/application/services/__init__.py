"""Application services for nesting jobs."""

from .nesting_service import (
    BarNestingReport,
    CandidateEvaluation,
    NestingService,
    SheetComparison,
    SheetNestingReport,
)

__all__ = [
    "BarNestingReport",
    "CandidateEvaluation",
    "NestingService",
    "SheetComparison",
    "SheetNestingReport",
]
