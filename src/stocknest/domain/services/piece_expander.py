"""Expansion of BOM part requests into unit pieces."""

from __future__ import annotations

from typing import Iterable

from ..value_objects import PartRequest, Piece

__all__ = ["expand_parts", "total_area", "total_weight"]


def expand_parts(parts: Iterable[PartRequest]) -> list[Piece]:
    """Expand part requests into individual pieces.

    Each request with quantity N becomes N pieces with ids
    "<id>-1" .. "<id>-N", in input order. Requests with a quantity of
    zero or less contribute nothing.

    Args:
        parts: BOM part requests.

    Returns:
        Flat list of unit pieces.
    """
    expanded: list[Piece] = []
    for part in parts:
        for n in range(1, part.quantity + 1):
            expanded.append(
                Piece(
                    id=f"{part.id}-{n}",
                    description=part.description,
                    width=part.width,
                    height=part.height,
                    length=part.length,
                    weight=part.weight,
                )
            )
    return expanded


def total_area(parts: Iterable[PartRequest]) -> float:
    """Total area in mm² of all requested units that have both width and height."""
    return sum(part.area * max(part.quantity, 0) for part in parts)


def total_weight(parts: Iterable[PartRequest]) -> float:
    """Total weight in kg of all requested units; unknown weights count as 0."""
    return sum((part.weight or 0.0) * max(part.quantity, 0) for part in parts)
