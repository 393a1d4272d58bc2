"""Fog-of-war computation by ray casting.

240 rays are cast from the origin at evenly spaced angles. Each ray samples
the nearest grid cell at unit steps and stops after the first cell that
blocks sight. ``visible`` is rebuilt on every call; ``explored`` only ever
gains cells.
"""

from __future__ import annotations

import math
from typing import NamedTuple

from delve.models.dungeon import Position, TileGrid, TileMask


RAY_COUNT = 240

_RAY_DIRECTIONS: tuple[tuple[float, float], ...] = tuple(
    (math.cos(2 * math.pi * i / RAY_COUNT), math.sin(2 * math.pi * i / RAY_COUNT))
    for i in range(RAY_COUNT)
)


class VisibilityResult(NamedTuple):
    """Masks produced by one visibility pass."""

    visible: TileMask
    explored: TileMask


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def compute_visibility(
    grid: TileGrid,
    origin: Position,
    sight_range: int,
    explored: TileMask | None = None,
) -> VisibilityResult:
    """Compute the cells visible from ``origin``.

    Args:
        grid: Terrain to cast over.
        origin: Viewer position.
        sight_range: Maximum ray length in steps.
        explored: Explored mask to update in place. A fresh mask is created
            when omitted.

    Returns:
        The new visible mask and the (updated) explored mask.
    """
    visible = TileMask(grid.width, grid.height)
    if explored is None:
        explored = TileMask(grid.width, grid.height)

    if not grid.in_bounds(origin.x, origin.y):
        return VisibilityResult(visible, explored)

    visible.mark(origin.x, origin.y)
    explored.mark(origin.x, origin.y)

    for cos_a, sin_a in _RAY_DIRECTIONS:
        for step in range(1, sight_range + 1):
            x = _round_half_up(origin.x + cos_a * step)
            y = _round_half_up(origin.y + sin_a * step)
            if not grid.in_bounds(x, y):
                break
            visible.mark(x, y)
            explored.mark(x, y)
            if grid.get(x, y).blocks_sight:
                break

    return VisibilityResult(visible, explored)


__all__ = [
    "RAY_COUNT",
    "VisibilityResult",
    "compute_visibility",
]
