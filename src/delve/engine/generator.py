"""Procedural level generation.

Builds one ``DungeonLevel`` per depth: rectangular rooms on an all-wall
grid, L-shaped corridors between them, doors where corridors meet rooms,
hidden traps, an optional secret room and optional portals. Every stage
works to a fixed attempt budget; running out of attempts yields fewer
features, never an error.

Example:
    >>> from delve.data import default_tables
    >>> from delve.engine.rng import create_rng
    >>> level = generate(60, 40, 1, rng=create_rng(7), tables=default_tables())
    >>> level.grid.width, level.grid.height
    (60, 40)
"""

from __future__ import annotations

from collections import deque

from delve.core.config import MIN_ROOM_SIZE
from delve.core.exceptions import GenerationError
from delve.core.logging import get_logger
from delve.data.tables import GameTables
from delve.engine.rng import RandomSource, chance
from delve.models.dungeon import DungeonLevel, Position, Room, SecretDoor, TileGrid, Trap
from delve.models.enums import Tile


logger = get_logger(__name__)

MIN_DIMENSION = 12
MAX_ROOMS = 12
ROOM_ATTEMPTS = 200
TRAP_ATTEMPTS = 100
SECRET_ROOM_ATTEMPTS = 20
PORTAL_ATTEMPTS = 50
FLOOR_PROBES = 1000
ROOM_FLOOR_PROBES = 50


def generate(
    width: int,
    height: int,
    depth: int,
    *,
    rng: RandomSource,
    tables: GameTables,
    ensure_connectivity: bool = False,
) -> DungeonLevel:
    """Generate the level for one depth.

    Args:
        width: Grid width in tiles.
        height: Grid height in tiles.
        depth: Dungeon depth, 1-based. Deeper levels get more rooms,
            traps and a chance of secret rooms and portals.
        rng: Random source.
        tables: Catalog providing trap kinds.
        ensure_connectivity: Carve corridors to rooms a flood fill from the
            first room cannot reach.

    Returns:
        The generated level.

    Raises:
        GenerationError: If the dimensions or depth are out of range.
    """
    if width < MIN_DIMENSION or height < MIN_DIMENSION or depth < 1:
        raise GenerationError(
            f"Cannot generate a {width}x{height} level at depth {depth}",
            width=width,
            height=height,
            depth=depth,
        )

    grid = TileGrid(width, height)
    level = DungeonLevel(grid=grid, depth=depth)

    max_room = max(MIN_ROOM_SIZE, min(MAX_ROOMS, min(width, height) // 3))
    room_count = min(MAX_ROOMS, 4 + int(depth * 0.8))

    _place_rooms(grid, level.rooms, room_count, MIN_ROOM_SIZE, max_room, rng)
    if not level.rooms:
        logger.warning("No rooms placed", width=width, height=height, depth=depth)
        return level

    _connect_rooms(grid, level.rooms, rng)
    _place_doors(grid, level.rooms, rng)
    _place_traps(grid, level, int(1 + depth * 0.6), rng, tables)

    if depth >= 2 and chance(rng, 0.3 + depth * 0.04):
        _place_secret_room(grid, level, rng)

    if depth >= 3 and chance(rng, 0.2):
        _place_portals(grid, level.rooms, 1 + depth // 5, rng)

    if ensure_connectivity:
        connect_unreachable_rooms(grid, level.rooms)

    logger.debug(
        "Level generated",
        depth=depth,
        rooms=len(level.rooms),
        traps=len(level.traps),
        secret_rooms=len(level.secret_doors),
    )
    return level


# =============================================================================
# Rooms and Corridors
# =============================================================================


def _place_rooms(
    grid: TileGrid,
    rooms: list[Room],
    count: int,
    min_size: int,
    max_size: int,
    rng: RandomSource,
) -> None:
    span = max_size - min_size + 1
    for _ in range(ROOM_ATTEMPTS):
        if len(rooms) >= count:
            break
        w = min_size + rng.randrange(span)
        h = min_size + rng.randrange(span)
        x = 1 + rng.randrange(grid.width - w - 2)
        y = 1 + rng.randrange(grid.height - h - 2)
        candidate = Room(x, y, w, h)

        if any(candidate.overlaps(room) for room in rooms):
            continue

        for cell in candidate.cells():
            if grid.in_interior(cell.x, cell.y):
                grid.set(cell.x, cell.y, Tile.FLOOR)
        rooms.append(candidate)


def carve_horizontal(grid: TileGrid, x1: int, x2: int, y: int) -> None:
    """Carve floor along a row, converting only wall tiles inside the border."""
    for x in range(min(x1, x2), max(x1, x2) + 1):
        if grid.in_interior(x, y) and grid.get(x, y) == Tile.WALL:
            grid.set(x, y, Tile.FLOOR)


def carve_vertical(grid: TileGrid, y1: int, y2: int, x: int) -> None:
    """Carve floor along a column, converting only wall tiles inside the border."""
    for y in range(min(y1, y2), max(y1, y2) + 1):
        if grid.in_interior(x, y) and grid.get(x, y) == Tile.WALL:
            grid.set(x, y, Tile.FLOOR)


def _carve_l(grid: TileGrid, a: Position, b: Position, horizontal_first: bool = True) -> None:
    if horizontal_first:
        carve_horizontal(grid, a.x, b.x, a.y)
        carve_vertical(grid, a.y, b.y, b.x)
    else:
        carve_vertical(grid, a.y, b.y, a.x)
        carve_horizontal(grid, a.x, b.x, b.y)


def _connect_rooms(grid: TileGrid, rooms: list[Room], rng: RandomSource) -> None:
    for first, second in zip(rooms, rooms[1:]):
        _carve_l(grid, first.center, second.center, horizontal_first=chance(rng, 0.5))

    # Extra loops so the layout is not a single chain
    for _ in range(int(len(rooms) * 0.3)):
        a = rooms[rng.randrange(len(rooms))]
        b = rooms[rng.randrange(len(rooms))]
        if a is b:
            continue
        _carve_l(grid, a.center, b.center)


def connect_unreachable_rooms(grid: TileGrid, rooms: list[Room]) -> int:
    """Carve corridors from unreachable rooms to the first room.

    Secret rooms are skipped; they are meant to be reached by searching.

    Args:
        grid: Grid to repair in place.
        rooms: Rooms of the level; the first is the spawn room.

    Returns:
        Number of corridors carved.
    """
    if not rooms:
        return 0

    anchor = rooms[0].center
    reached = _flood(grid, anchor)
    carved = 0
    for room in rooms[1:]:
        if room.secret or room.center in reached:
            continue
        _carve_l(grid, room.center, anchor)
        carved += 1
        reached = _flood(grid, anchor)

    if carved:
        logger.debug("Unreachable rooms connected", corridors=carved)
    return carved


def _flood(grid: TileGrid, start: Position) -> set[Position]:
    passable = (Tile.DOOR_CLOSED,)
    seen = {start}
    queue = deque([start])
    while queue:
        current = queue.popleft()
        for dx, dy in ((0, -1), (0, 1), (-1, 0), (1, 0)):
            nxt = current.offset(dx, dy)
            if nxt in seen or not grid.in_bounds(nxt.x, nxt.y):
                continue
            tile = grid.get(nxt.x, nxt.y)
            if tile.is_walkable or tile in passable:
                seen.add(nxt)
                queue.append(nxt)
    return seen


# =============================================================================
# Doors, Traps, Secret Rooms and Portals
# =============================================================================


def _place_doors(grid: TileGrid, rooms: list[Room], rng: RandomSource) -> None:
    for room in rooms:
        for x in range(room.x, room.x + room.w):
            _try_door(grid, x, room.y - 1, x, room.y, rng)
            _try_door(grid, x, room.y + room.h, x, room.y + room.h - 1, rng)
        for y in range(room.y, room.y + room.h):
            _try_door(grid, room.x - 1, y, room.x, y, rng)
            _try_door(grid, room.x + room.w, y, room.x + room.w - 1, y, rng)


def _try_door(
    grid: TileGrid,
    outside_x: int,
    outside_y: int,
    inside_x: int,
    inside_y: int,
    rng: RandomSource,
) -> None:
    if not grid.in_bounds(outside_x, outside_y) or not grid.in_bounds(inside_x, inside_y):
        return
    if grid.get(outside_x, outside_y) != Tile.FLOOR or grid.get(inside_x, inside_y) != Tile.FLOOR:
        return

    if outside_x != inside_x:
        # Corridor enters from the side: walls must sit above and below
        if not 0 < outside_y < grid.height - 1:
            return
        flanked = (
            grid.get(outside_x, outside_y - 1) == Tile.WALL
            and grid.get(outside_x, outside_y + 1) == Tile.WALL
        )
    else:
        if not 0 < outside_x < grid.width - 1:
            return
        flanked = (
            grid.get(outside_x - 1, outside_y) == Tile.WALL
            and grid.get(outside_x + 1, outside_y) == Tile.WALL
        )

    if flanked and chance(rng, 0.5):
        grid.set(outside_x, outside_y, Tile.DOOR_CLOSED)


def _place_traps(
    grid: TileGrid,
    level: DungeonLevel,
    count: int,
    rng: RandomSource,
    tables: GameTables,
) -> None:
    trap_keys = list(tables.traps)
    if not trap_keys:
        return

    for _ in range(TRAP_ATTEMPTS):
        if len(level.traps) >= count:
            break
        room = level.rooms[rng.randrange(len(level.rooms))]
        x = room.x + rng.randrange(room.w)
        y = room.y + rng.randrange(room.h)
        if grid.get(x, y) != Tile.FLOOR:
            continue
        kind = trap_keys[rng.randrange(len(trap_keys))]
        grid.set(x, y, Tile.TRAP_HIDDEN)
        level.traps.append(Trap(x, y, kind))


def _place_secret_room(grid: TileGrid, level: DungeonLevel, rng: RandomSource) -> None:
    rooms = level.rooms
    for _ in range(SECRET_ROOM_ATTEMPTS):
        room = rooms[rng.randrange(len(rooms))]
        side = rng.randrange(4)
        w = 3 + rng.randrange(3)
        h = 3 + rng.randrange(3)

        if side == 0:  # north
            sx = room.x + rng.randrange(max(1, room.w - w))
            sy = room.y - h - 1
            door = Position(sx + w // 2, room.y - 1)
        elif side == 1:  # south
            sx = room.x + rng.randrange(max(1, room.w - w))
            sy = room.y + room.h + 1
            door = Position(sx + w // 2, room.y + room.h)
        elif side == 2:  # west
            sx = room.x - w - 1
            sy = room.y + rng.randrange(max(1, room.h - h))
            door = Position(room.x - 1, sy + h // 2)
        else:  # east
            sx = room.x + room.w + 1
            sy = room.y + rng.randrange(max(1, room.h - h))
            door = Position(room.x + room.w, sy + h // 2)

        if sx < 1 or sy < 1 or sx + w >= grid.width - 1 or sy + h >= grid.height - 1:
            continue
        if not grid.in_interior(door.x, door.y):
            continue

        secret = Room(sx, sy, w, h, secret=True)
        if any(grid.get(cell.x, cell.y) != Tile.WALL for cell in secret.cells()):
            continue
        if any(secret.overlaps(other) for other in rooms):
            continue

        for cell in secret.cells():
            grid.set(cell.x, cell.y, Tile.FLOOR)
        grid.set(door.x, door.y, Tile.SECRET_WALL)
        level.secret_doors.append(SecretDoor(door.x, door.y))
        rooms.append(secret)
        return


def _place_portals(grid: TileGrid, rooms: list[Room], count: int, rng: RandomSource) -> None:
    placed = 0
    for _ in range(PORTAL_ATTEMPTS):
        if placed >= count:
            break
        room = rooms[rng.randrange(len(rooms))]
        x = room.x + rng.randrange(room.w)
        y = room.y + rng.randrange(room.h)
        if grid.get(x, y) == Tile.FLOOR:
            grid.set(x, y, Tile.PORTAL)
            placed += 1


# =============================================================================
# Floor Queries
# =============================================================================


def find_random_floor(grid: TileGrid, rng: RandomSource) -> Position:
    """Pick a random interior floor tile.

    Falls back to the first floor tile in row order, then to (1, 1).
    """
    for _ in range(FLOOR_PROBES):
        x = 1 + rng.randrange(grid.width - 2)
        y = 1 + rng.randrange(grid.height - 2)
        if grid.get(x, y) == Tile.FLOOR:
            return Position(x, y)

    for y in range(1, grid.height - 1):
        for x in range(1, grid.width - 1):
            if grid.get(x, y) == Tile.FLOOR:
                return Position(x, y)
    return Position(1, 1)


def find_floor_in_room(grid: TileGrid, room: Room, rng: RandomSource) -> Position:
    """Pick a random floor tile inside ``room``, or its corner."""
    for _ in range(ROOM_FLOOR_PROBES):
        x = room.x + rng.randrange(room.w)
        y = room.y + rng.randrange(room.h)
        if grid.get(x, y) == Tile.FLOOR:
            return Position(x, y)
    return Position(room.x, room.y)


__all__ = [
    "MIN_DIMENSION",
    "generate",
    "carve_horizontal",
    "carve_vertical",
    "connect_unreachable_rooms",
    "find_random_floor",
    "find_floor_in_room",
]
