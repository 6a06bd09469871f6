"""Shared constants and enums for nesting job schemas."""

from stocknest.domain.value_objects import MaterialCategory

# Supported schema versions for job files
# Version 1.0: Parts, single stock, candidate sheets, packing/linear/estimate
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})

# Alias so schema modules read as configuration types
MaterialCategoryConfig = MaterialCategory

__all__ = ["MaterialCategoryConfig", "SUPPORTED_VERSIONS"]
