"""Delve - turn-based dungeon-crawl simulation core.

The engine owns the whole world state: procedurally generated levels,
an energy-based turn scheduler, fog of war, monster AI, combat, spells,
items and traps. Presentation layers drive it through logical actions
and observe it through events and snapshots.

Example:
    >>> from delve import Game, Action
    >>>
    >>> game = Game(race="dwarf", char_class="warrior", seed=42)
    >>> unsubscribe = game.subscribe(lambda event: print(event.kind))
    >>> game.submit_action(Action.MOVE_RIGHT)
    >>> game.auto_explore()
    >>> snapshot = game.snapshot()
    >>> print(snapshot.character.hp, snapshot.depth)

Modules:
    core: Configuration, logging, and base exceptions.
    data: Static catalog of races, classes, monsters, spells and items.
    models: Pydantic V2 schemas and level structures.
    engine: Generation, scheduling, AI and the Game session.
"""

from __future__ import annotations

# Core
from delve.core.config import Settings, get_settings
from delve.core.exceptions import DelveError
from delve.core.logging import configure_logging, get_logger

# Data
from delve.data import GameTables, default_tables

# Models
from delve.models import (
    Action,
    Character,
    GameSnapshot,
    GameStatus,
    Monster,
    Player,
    Position,
    Tile,
    parse_event,
)

# Engine
from delve.engine import Game


__version__ = "0.1.0"
__all__ = [
    # Version info
    "__version__",
    # Core
    "DelveError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Data
    "GameTables",
    "default_tables",
    # Models
    "Action",
    "Character",
    "GameSnapshot",
    "GameStatus",
    "Monster",
    "Player",
    "Position",
    "Tile",
    "parse_event",
    # Engine
    "Game",
]
