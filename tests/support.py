"""Test doubles and builders shared across the suite."""

from __future__ import annotations

import math
from collections.abc import Iterable, MutableSequence, Sequence
from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:
    from delve.engine.context import GameContext
    from delve.engine.game import Game
    from delve.models.entities import EntityHandle, Monster


# =============================================================================
# Test Doubles
# =============================================================================


class SequenceRandom:
    """Scripted random source.

    Every draw consumes the next float from ``values``; integer draws map
    it onto the requested range. Once the script runs out, ``default`` is
    returned forever.
    """

    def __init__(self, values: Iterable[float] = (), default: float = 0.99) -> None:
        self.values = list(values)
        self.default = default
        self.draws = 0

    def random(self) -> float:
        self.draws += 1
        if self.values:
            return self.values.pop(0)
        return self.default

    def randrange(self, start: int, stop: int | None = None, step: int = 1) -> int:
        if stop is None:
            start, stop = 0, start
        span = stop - start
        return start + min(span - 1, math.floor(self.random() * span))

    def choice(self, seq: Sequence[Any]) -> Any:
        return seq[self.randrange(len(seq))]

    def choices(
        self,
        population: Sequence[Any],
        weights: Sequence[float] | None = None,
        *,
        cum_weights: Sequence[float] | None = None,
        k: int = 1,
    ) -> list[Any]:
        return [population[0] for _ in range(k)]

    def shuffle(self, x: MutableSequence[Any]) -> None:
        return None


# =============================================================================
# Builders
# =============================================================================


def add_monster(ctx: GameContext, key: str, x: int, y: int, **overrides: Any) -> tuple[EntityHandle, Monster]:
    """Spawn a catalog monster at a cell, overriding any of its fields."""
    from delve.engine.population import make_monster, spawn_monster
    from delve.models.dungeon import Position

    monster = make_monster(ctx.tables.monster(key), Position(x, y))
    for name, value in overrides.items():
        setattr(monster, name, value)
    return spawn_monster(ctx, monster), monster


def make_context(
    lines: list[str],
    *,
    player: tuple[int, int],
    rng: Any,
    race: str = "human",
    char_class: str = "warrior",
    depth: int = 1,
    max_depth: int = 15,
) -> GameContext:
    """Build an engine context over a hand-drawn map.

    Args:
        lines: Map sketch (see ``TileGrid.from_strings``).
        player: Player position.
        rng: Random source for the context.
        race: Race key of the character.
        char_class: Class key of the character.
        depth: Current depth.
        max_depth: Final depth.

    Returns:
        A context with an empty monster arena and no ground items.
    """
    from delve.core.config import Settings
    from delve.data import default_tables
    from delve.engine.context import GameContext, WorldState
    from delve.engine.itemization import ItemFactory, PotionIdentity
    from delve.engine.population import create_character
    from delve.models.dungeon import DungeonLevel, Room, TileGrid, TileMask
    from delve.models.entities import Player

    tables = default_tables()
    grid = TileGrid.from_strings(lines)
    state = WorldState(
        level=DungeonLevel(grid=grid, rooms=[Room(1, 1, grid.width - 2, grid.height - 2)], depth=depth),
        player=Player(x=player[0], y=player[1]),
        character=create_character(race, char_class, tables=tables),
        visible=TileMask(grid.width, grid.height),
        explored=TileMask(grid.width, grid.height),
        depth=depth,
        max_depth=max_depth,
        theme=tables.theme_for(depth).name,
    )
    ctx = GameContext(state, rng=rng, tables=tables, settings=Settings())
    ctx.items = ItemFactory(tables, rng, PotionIdentity(tables, rng))
    ctx.refresh_visibility()
    return ctx


def install_level(game: Game, lines: list[str], *, player: tuple[int, int]) -> None:
    """Swap a running game's level for a hand-drawn one.

    Monsters, ground items, travel and stairs are cleared; the character is
    kept as is.
    """
    from delve.models.dungeon import DungeonLevel, Room, TileGrid, TileMask

    state = game.state
    grid = TileGrid.from_strings(lines)
    state.level = DungeonLevel(grid=grid, rooms=[Room(1, 1, grid.width - 2, grid.height - 2)], depth=state.depth)
    state.monsters.clear()
    state.items = []
    state.stairs_down = None
    state.stairs_up = None
    state.visible = TileMask(grid.width, grid.height)
    state.explored = TileMask(grid.width, grid.height)
    state.player.move_to(*player)
    game.context.travel.clear()
    game.context.refresh_visibility()


# An open 10x7 room
OPEN_ROOM = [
    "##########",
    "#........#",
    "#........#",
    "#........#",
    "#........#",
    "#........#",
    "##########",
]

# A long east-west corridor
CORRIDOR = [
    "##############",
    "#............#",
    "##############",
]
