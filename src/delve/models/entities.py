"""Turn-taking actors and the arena that owns monsters.

Monsters live in an ``EntityArena``: a list of slots addressed by an
``EntityHandle(index, generation)``. Removing a monster frees its slot and
bumps the slot generation, so stale handles are detected instead of
silently pointing at a newer monster.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Generic, NamedTuple, TypeVar

from pydantic import Field, computed_field

from delve.core.exceptions import EntityNotFoundError
from delve.models.base import GameModel
from delve.models.dungeon import Position
from delve.models.enums import AbilityKind, AIState, Facing


PLAYER_REF = "player"


class Monster(GameModel):
    """A hostile actor spawned from a monster template."""

    key: str = Field(description="Monster template key")
    name: str
    symbol: str = "?"
    x: int
    y: int
    hp: int
    max_hp: int = Field(ge=1)
    atk: int = Field(ge=0)
    defense: int = Field(ge=0)
    xp: int = Field(ge=0)
    speed: int = Field(ge=0, description="Energy gained per tick")
    energy: int = 0
    ai_state: AIState = AIState.WANDER
    ability: AbilityKind | None = None
    boss: bool = False

    @computed_field(description="Whether the monster still has hit points")
    @property
    def is_alive(self) -> bool:
        return self.hp > 0

    @property
    def position(self) -> Position:
        return Position(self.x, self.y)

    def move_to(self, x: int, y: int) -> None:
        self.x = x
        self.y = y


class Player(GameModel):
    """The player's body on the map. Stats live on ``Character``."""

    x: int = 0
    y: int = 0
    facing: Facing = Facing.NORTH

    @property
    def position(self) -> Position:
        return Position(self.x, self.y)

    def move_to(self, x: int, y: int) -> None:
        self.x = x
        self.y = y

    def face(self, dx: int, dy: int) -> None:
        """Turn toward a step; vertical wins on diagonals."""
        if dx == 1:
            self.facing = Facing.EAST
        elif dx == -1:
            self.facing = Facing.WEST
        if dy == 1:
            self.facing = Facing.SOUTH
        elif dy == -1:
            self.facing = Facing.NORTH


# =============================================================================
# Arena
# =============================================================================


class EntityHandle(NamedTuple):
    """Stable reference to an arena slot."""

    index: int
    generation: int

    @property
    def ref(self) -> str:
        """String form used in event payloads."""
        return f"monster:{self.index}:{self.generation}"


T = TypeVar("T")


class EntityArena(Generic[T]):
    """Slot storage with generational handles.

    Iteration visits live entities in slot order and tolerates removals and
    insertions made by the loop body.
    """

    def __init__(self) -> None:
        self._slots: list[T | None] = []
        self._generations: list[int] = []
        self._free: list[int] = []

    def insert(self, entity: T) -> EntityHandle:
        if self._free:
            index = self._free.pop()
            self._slots[index] = entity
        else:
            index = len(self._slots)
            self._slots.append(entity)
            self._generations.append(0)
        return EntityHandle(index, self._generations[index])

    def get(self, handle: EntityHandle) -> T:
        """Resolve a handle.

        Raises:
            EntityNotFoundError: If the slot was freed or reused.
        """
        entity = self.lookup(handle)
        if entity is None:
            raise EntityNotFoundError(
                "Entity handle is stale or unknown",
                index=handle.index,
                generation=handle.generation,
            )
        return entity

    def lookup(self, handle: EntityHandle) -> T | None:
        """Resolve a handle, returning None when it is stale."""
        if not 0 <= handle.index < len(self._slots):
            return None
        if self._generations[handle.index] != handle.generation:
            return None
        return self._slots[handle.index]

    def remove(self, handle: EntityHandle) -> T:
        entity = self.get(handle)
        self._slots[handle.index] = None
        self._generations[handle.index] += 1
        self._free.append(handle.index)
        return entity

    def contains(self, handle: EntityHandle) -> bool:
        return self.lookup(handle) is not None

    def clear(self) -> None:
        for index, entity in enumerate(self._slots):
            if entity is not None:
                self._slots[index] = None
                self._generations[index] += 1
                self._free.append(index)

    def items(self) -> Iterator[tuple[EntityHandle, T]]:
        index = 0
        while index < len(self._slots):
            entity = self._slots[index]
            if entity is not None:
                yield EntityHandle(index, self._generations[index]), entity
            index += 1

    def __iter__(self) -> Iterator[T]:
        for _, entity in self.items():
            yield entity

    def __len__(self) -> int:
        return sum(1 for entity in self._slots if entity is not None)


class MonsterArena(EntityArena[Monster]):
    """Arena of monsters with positional queries."""

    def at(self, x: int, y: int) -> tuple[EntityHandle, Monster] | None:
        for handle, monster in self.items():
            if monster.x == x and monster.y == y:
                return handle, monster
        return None

    def within(self, center: Position, radius: int) -> list[tuple[EntityHandle, Monster]]:
        """Monsters within a Manhattan radius of ``center``."""
        return [
            (handle, monster)
            for handle, monster in self.items()
            if monster.position.manhattan(center) <= radius
        ]

    def nearest(self, center: Position, max_range: int) -> tuple[EntityHandle, Monster] | None:
        """Closest monster by Manhattan distance; ties keep slot order."""
        best: tuple[EntityHandle, Monster] | None = None
        best_distance = max_range + 1
        for handle, monster in self.items():
            distance = monster.position.manhattan(center)
            if distance <= max_range and distance < best_distance:
                best = (handle, monster)
                best_distance = distance
        return best


__all__ = [
    "PLAYER_REF",
    "Monster",
    "Player",
    "EntityHandle",
    "EntityArena",
    "MonsterArena",
]
