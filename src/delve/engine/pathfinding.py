"""Breadth-first path search and frontier discovery on the tile grid."""

from __future__ import annotations

from collections import deque

from delve.models.dungeon import Position, TileGrid, TileMask
from delve.models.enums import Tile


# N, S, W, E, NW, NE, SW, SE
NEIGHBOR_OFFSETS: tuple[tuple[int, int], ...] = (
    (0, -1), (0, 1), (-1, 0), (1, 0),
    (-1, -1), (1, -1), (-1, 1), (1, 1),
)

ORTHOGONAL_OFFSETS: tuple[tuple[int, int], ...] = NEIGHBOR_OFFSETS[:4]


def is_passable(grid: TileGrid, x: int, y: int) -> bool:
    """Whether a path may cross the cell. Closed doors open on contact."""
    if not grid.in_bounds(x, y):
        return False
    tile = grid.get(x, y)
    return tile.is_walkable or tile == Tile.DOOR_CLOSED


def bfs_path(grid: TileGrid, src: Position, dst: Position) -> list[Position] | None:
    """Find a shortest 8-directional path.

    The destination is always enterable, even when it is a wall, so callers
    can path onto a monster or a blocked target.

    Args:
        grid: Terrain grid.
        src: Start cell.
        dst: Target cell.

    Returns:
        Waypoints after ``src`` ending at ``dst``, ``[]`` when already there,
        or None when ``dst`` cannot be reached.
    """
    if src == dst:
        return []
    if not grid.in_bounds(dst.x, dst.y):
        return None

    previous: dict[Position, Position] = {src: src}
    queue = deque([src])

    while queue:
        current = queue.popleft()
        for dx, dy in NEIGHBOR_OFFSETS:
            nxt = current.offset(dx, dy)
            if nxt in previous or not grid.in_bounds(nxt.x, nxt.y):
                continue
            if nxt != dst and not is_passable(grid, nxt.x, nxt.y):
                continue
            previous[nxt] = current
            if nxt == dst:
                return _unwind(previous, src, dst)
            queue.append(nxt)

    return None


def _unwind(previous: dict[Position, Position], src: Position, dst: Position) -> list[Position]:
    path = [dst]
    cursor = previous[dst]
    while cursor != src:
        path.append(cursor)
        cursor = previous[cursor]
    path.reverse()
    return path


def find_nearest_unexplored(grid: TileGrid, explored: TileMask, start: Position) -> Position | None:
    """Return the closest cell whose explored bit is unset.

    The search spreads only through walkable cells and closed doors, so the
    result borders space the player can actually reach.

    Args:
        grid: Terrain grid.
        explored: Explored mask.
        start: Player position.

    Returns:
        The frontier cell, or None when everything reachable is explored.
    """
    seen = {start}
    queue = deque([start])

    while queue:
        current = queue.popleft()
        for dx, dy in NEIGHBOR_OFFSETS:
            nxt = current.offset(dx, dy)
            if nxt in seen or not grid.in_bounds(nxt.x, nxt.y):
                continue
            seen.add(nxt)
            if not explored.is_set(nxt.x, nxt.y):
                return nxt
            if is_passable(grid, nxt.x, nxt.y):
                queue.append(nxt)

    return None


__all__ = [
    "NEIGHBOR_OFFSETS",
    "ORTHOGONAL_OFFSETS",
    "is_passable",
    "bfs_path",
    "find_nearest_unexplored",
]
