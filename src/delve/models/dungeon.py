"""Dungeon level structures: grid, masks, rooms, traps and secret doors.

The tile grid is indexed ``[y][x]`` and replaced wholesale on every level
change. Rooms are read-only after generation; traps only ever flip from
hidden to revealed.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import NamedTuple

from delve.models.enums import Tile


class Position(NamedTuple):
    """Grid coordinate."""

    x: int
    y: int

    def offset(self, dx: int, dy: int) -> "Position":
        return Position(self.x + dx, self.y + dy)

    def manhattan(self, other: "Position") -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)


# =============================================================================
# Rooms and Features
# =============================================================================


@dataclass(frozen=True)
class Room:
    """A generator-carved rectangle of floor.

    Attributes:
        x: Left column.
        y: Top row.
        w: Width in tiles.
        h: Height in tiles.
        secret: Whether the room is reachable only through a secret wall.
    """

    x: int
    y: int
    w: int
    h: int
    secret: bool = False

    @property
    def center(self) -> Position:
        return Position(self.x + self.w // 2, self.y + self.h // 2)

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x < self.x + self.w and self.y <= y < self.y + self.h

    def cells(self) -> Iterator[Position]:
        for y in range(self.y, self.y + self.h):
            for x in range(self.x, self.x + self.w):
                yield Position(x, y)

    def overlaps(self, other: "Room", buffer: int = 1) -> bool:
        """Check for overlap once this room is grown by ``buffer`` tiles.

        Args:
            other: Room to test against.
            buffer: Required gap in tiles between the two rooms.

        Returns:
            True if the rooms are closer than the buffer allows.
        """
        return (
            self.x - buffer < other.x + other.w
            and self.x + self.w + buffer > other.x
            and self.y - buffer < other.y + other.h
            and self.y + self.h + buffer > other.y
        )


@dataclass
class Trap:
    """A hidden hazard placed on a room floor tile."""

    x: int
    y: int
    kind: str
    revealed: bool = False

    @property
    def position(self) -> Position:
        return Position(self.x, self.y)


@dataclass(frozen=True)
class SecretDoor:
    """Entrance of a secret room, drawn as wall until discovered."""

    x: int
    y: int


# =============================================================================
# Grid and Masks
# =============================================================================


class TileGrid:
    """Mutable 2D terrain grid.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        rows: Tile rows, indexed ``rows[y][x]``.
    """

    def __init__(self, width: int, height: int, fill: Tile = Tile.WALL) -> None:
        self.width = width
        self.height = height
        self.rows: list[list[Tile]] = [[fill] * width for _ in range(height)]

    @classmethod
    def from_strings(cls, lines: list[str]) -> "TileGrid":
        """Build a grid from an ASCII sketch.

        ``#`` wall, ``.`` floor, ``+`` closed door, ``'`` open door,
        ``S`` secret wall, ``^`` hidden trap, ``!`` revealed trap,
        ``O`` portal.

        Args:
            lines: Equal-length rows of the sketch.

        Returns:
            The parsed grid.
        """
        grid = cls(len(lines[0]), len(lines))
        for y, line in enumerate(lines):
            for x, char in enumerate(line):
                grid.rows[y][x] = _SKETCH_TILES[char]
        return grid

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def in_interior(self, x: int, y: int) -> bool:
        """Whether the cell is inside the one-tile outer border."""
        return 0 < x < self.width - 1 and 0 < y < self.height - 1

    def get(self, x: int, y: int) -> Tile:
        return self.rows[y][x]

    def set(self, x: int, y: int, tile: Tile) -> None:
        self.rows[y][x] = tile

    def is_walkable(self, x: int, y: int) -> bool:
        return self.in_bounds(x, y) and self.rows[y][x].is_walkable

    def positions_of(self, tile: Tile) -> Iterator[Position]:
        for y, row in enumerate(self.rows):
            for x, cell in enumerate(row):
                if cell == tile:
                    yield Position(x, y)

    def copy(self) -> "TileGrid":
        clone = TileGrid(self.width, self.height)
        clone.rows = [list(row) for row in self.rows]
        return clone

    def to_lists(self) -> list[list[int]]:
        return [[int(cell) for cell in row] for row in self.rows]

    def __repr__(self) -> str:
        return f"TileGrid(width={self.width}, height={self.height})"


_SKETCH_TILES: dict[str, Tile] = {
    "#": Tile.WALL,
    ".": Tile.FLOOR,
    "+": Tile.DOOR_CLOSED,
    "'": Tile.DOOR_OPEN,
    "S": Tile.SECRET_WALL,
    "^": Tile.TRAP_HIDDEN,
    "!": Tile.TRAP_REVEALED,
    "O": Tile.PORTAL,
}


class TileMask:
    """Boolean layer over a grid, used for visible and explored tiles."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self._bits = [bytearray(width) for _ in range(height)]

    def mark(self, x: int, y: int) -> None:
        self._bits[y][x] = 1

    def is_set(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height and bool(self._bits[y][x])

    def __contains__(self, position: object) -> bool:
        if not isinstance(position, tuple) or len(position) != 2:
            return False
        return self.is_set(position[0], position[1])

    def clear(self) -> None:
        for row in self._bits:
            row[:] = bytes(self.width)

    def fill(self) -> None:
        for row in self._bits:
            row[:] = b"\x01" * self.width

    def count(self) -> int:
        return sum(sum(row) for row in self._bits)

    def all_set(self) -> bool:
        return all(all(row) for row in self._bits)

    def positions(self) -> Iterator[Position]:
        for y, row in enumerate(self._bits):
            for x, bit in enumerate(row):
                if bit:
                    yield Position(x, y)

    def copy(self) -> "TileMask":
        clone = TileMask(self.width, self.height)
        clone._bits = [bytearray(row) for row in self._bits]
        return clone

    def to_lists(self) -> list[list[bool]]:
        return [[bool(bit) for bit in row] for row in self._bits]


# =============================================================================
# Level
# =============================================================================


@dataclass
class DungeonLevel:
    """Output of the generator for one depth.

    Attributes:
        grid: Terrain grid.
        rooms: Rooms in generation order; secret rooms come last.
        traps: Placed traps.
        secret_doors: Secret room entrances.
        depth: Depth this level was generated for.
    """

    grid: TileGrid
    rooms: list[Room] = field(default_factory=list)
    traps: list[Trap] = field(default_factory=list)
    secret_doors: list[SecretDoor] = field(default_factory=list)
    depth: int = 1

    def trap_at(self, x: int, y: int) -> Trap | None:
        for trap in self.traps:
            if trap.x == x and trap.y == y:
                return trap
        return None


__all__ = [
    "Position",
    "Room",
    "Trap",
    "SecretDoor",
    "TileGrid",
    "TileMask",
    "DungeonLevel",
]
