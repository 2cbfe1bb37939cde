"""Coordinate type alias and helpers.

Board layout: ``(x, y)`` with ``x`` growing rightward and ``y`` growing
downward, so ``(0, 0)`` is the top-left cell of the first notation row.
"""

from __future__ import annotations

from typing import TypeAlias

Coord: TypeAlias = tuple[int, int]
Vector: TypeAlias = tuple[int, int]


def is_coord(value: object) -> bool:
    """Whether *value* looks like an ``(x, y)`` pair of plain integers."""
    if not isinstance(value, (tuple, list)) or len(value) != 2:
        return False
    return all(isinstance(v, int) and not isinstance(v, bool) for v in value)
