"""Multi-turn movement: auto-run and path-walk.

Both advance one step per settled turn. Auto-run repeats a direction until
something worth stopping for comes up; path-walk consumes a BFS path.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable
from enum import StrEnum

from delve.engine.pathfinding import ORTHOGONAL_OFFSETS
from delve.models.dungeon import Position, TileGrid, TileMask
from delve.models.entities import Monster
from delve.models.enums import Tile
from delve.models.items import BaseItem


class InterruptReason(StrEnum):
    """Why auto-run stopped."""

    MONSTER = "monster"
    ITEM = "item"
    DOOR = "door"
    INTERSECTION = "intersection"
    STAIRS_DOWN = "stairs_down"
    STAIRS_UP = "stairs_up"

    @property
    def message(self) -> str | None:
        """Player-facing explanation, if any."""
        return _MESSAGES.get(self)


_MESSAGES: dict[InterruptReason, str] = {
    InterruptReason.MONSTER: "You see a monster!",
    InterruptReason.ITEM: "You notice something on the ground.",
    InterruptReason.DOOR: "A door blocks your path.",
    InterruptReason.STAIRS_DOWN: "You see stairs leading down.",
    InterruptReason.STAIRS_UP: "You see stairs leading up.",
}


class TravelState:
    """Active auto-run direction or path-walk waypoints.

    At most one of the two is active at a time.
    """

    def __init__(self) -> None:
        self.run_delta: tuple[int, int] | None = None
        self.path: deque[Position] = deque()

    @property
    def running(self) -> bool:
        return self.run_delta is not None

    @property
    def walking(self) -> bool:
        return bool(self.path)

    @property
    def active(self) -> bool:
        return self.running or self.walking

    def start_run(self, dx: int, dy: int) -> None:
        self.path.clear()
        self.run_delta = (dx, dy)

    def start_path(self, waypoints: Iterable[Position]) -> None:
        self.run_delta = None
        self.path = deque(waypoints)

    def stop_run(self) -> None:
        self.run_delta = None

    def clear(self) -> None:
        self.run_delta = None
        self.path.clear()


def interruption_reason(
    grid: TileGrid,
    player: Position,
    step: Position,
    visible: TileMask,
    monsters: Iterable[Monster],
    items: Iterable[BaseItem],
    stairs_down: Position | None = None,
    stairs_up: Position | None = None,
) -> InterruptReason | None:
    """Decide whether auto-run should stop before taking ``step``.

    Checks, in order: a visible monster, an item on the current or next
    tile, a door on the next tile, an intersection at the current tile and
    stairs on the next tile.

    Args:
        grid: Terrain grid.
        player: Current player position.
        step: Tile the run would enter next.
        visible: Current visible mask.
        monsters: Live monsters.
        items: Ground items.
        stairs_down: Down stairs of the level, if any.
        stairs_up: Up stairs of the level, if any.

    Returns:
        The first matching reason, or None to keep running.
    """
    if any(visible.is_set(monster.x, monster.y) for monster in monsters):
        return InterruptReason.MONSTER

    if any(item.position in (player, step) for item in items):
        return InterruptReason.ITEM

    if grid.in_bounds(step.x, step.y) and grid.get(step.x, step.y) in (Tile.DOOR_CLOSED, Tile.DOOR_OPEN):
        return InterruptReason.DOOR

    open_sides = sum(1 for dx, dy in ORTHOGONAL_OFFSETS if grid.is_walkable(player.x + dx, player.y + dy))
    if open_sides > 2:
        return InterruptReason.INTERSECTION

    if stairs_down is not None and stairs_down == step:
        return InterruptReason.STAIRS_DOWN
    if stairs_up is not None and stairs_up == step:
        return InterruptReason.STAIRS_UP

    return None


__all__ = [
    "InterruptReason",
    "TravelState",
    "interruption_reason",
]
