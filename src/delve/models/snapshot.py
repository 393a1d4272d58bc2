"""Read-only view of a game handed to renderers and other consumers."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from delve.models.character import Character
from delve.models.dungeon import Position
from delve.models.entities import Monster, Player
from delve.models.enums import GameStatus
from delve.models.items import Item


class GameSnapshot(BaseModel):
    """Deep copy of the observable game state.

    Holding a snapshot never aliases live engine state.
    """

    model_config = ConfigDict(frozen=True)

    width: int
    height: int
    tiles: list[list[int]] = Field(description="Tile codes indexed [y][x]")
    visible: list[list[bool]]
    explored: list[list[bool]]
    monsters: dict[str, Monster] = Field(description="Live monsters by handle reference")
    player: Player
    items: list[Item] = Field(description="Items lying on the ground")
    character: Character
    depth: int
    max_depth: int
    theme: str
    status: GameStatus
    tick: int
    stairs_down: Position | None = None
    stairs_up: Position | None = None
    messages: list[str] = Field(default_factory=list)


__all__ = ["GameSnapshot"]
