"""Mutable world state and the context object threaded through the engine.

``WorldState`` holds everything that changes during play. ``GameContext``
bundles it with the collaborators every subsystem needs (random source,
catalog, settings, event bus, message log, travel state and item factory)
so combat, spells, AI, itemization and hazards can be plain functions.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, NamedTuple

from delve.core.config import Settings
from delve.core.logging import get_logger
from delve.data.tables import GameTables
from delve.engine.events import EventBus
from delve.engine.rng import RandomSource
from delve.engine.scheduler import TurnScheduler
from delve.engine.travel import TravelState
from delve.engine.visibility import compute_visibility
from delve.models.character import Character
from delve.models.dungeon import DungeonLevel, Position, TileGrid, TileMask
from delve.models.entities import EntityHandle, Monster, MonsterArena, Player
from delve.models.enums import GameStatus
from delve.models.events import EventBase, GameOverEvent, LogEvent, TeleportEvent
from delve.models.items import Item


if TYPE_CHECKING:
    from delve.engine.itemization import ItemFactory

logger = get_logger(__name__)


@dataclass
class WorldState:
    """Everything that changes during play.

    Attributes:
        level: Current dungeon level.
        player: Player position and facing.
        character: Player stats and belongings.
        monsters: Live monsters of the current level.
        items: Items lying on the ground.
        visible: Cells visible this turn.
        explored: Cells ever seen on this level.
        depth: Current depth, 1-based.
        max_depth: Final depth.
        theme: Name of the current level theme.
        status: Session status.
        stairs_down: Down stairs, absent on the final depth.
        stairs_up: Up stairs, absent on depth 1.
    """

    level: DungeonLevel
    player: Player
    character: Character
    visible: TileMask
    explored: TileMask
    monsters: MonsterArena = field(default_factory=MonsterArena)
    items: list[Item] = field(default_factory=list)
    depth: int = 1
    max_depth: int = 15
    theme: str = ""
    status: GameStatus = GameStatus.PLAYING
    stairs_down: Position | None = None
    stairs_up: Position | None = None

    @property
    def grid(self) -> TileGrid:
        return self.level.grid


class LogEntry(NamedTuple):
    tick: int
    message: str


class MessageLog:
    """Bounded player-facing message history."""

    def __init__(self, size: int = 50) -> None:
        self._entries: deque[LogEntry] = deque(maxlen=size)

    def add(self, tick: int, message: str) -> LogEntry:
        entry = LogEntry(tick, message)
        self._entries.append(entry)
        return entry

    def messages(self) -> list[str]:
        return [entry.message for entry in self._entries]

    @property
    def last(self) -> str | None:
        return self._entries[-1].message if self._entries else None

    def __iter__(self) -> Iterator[LogEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


class GameContext:
    """Shared collaborators and helpers for engine subsystems.

    Attributes:
        state: The world state.
        rng: Session random source.
        tables: Static catalog.
        settings: Engine settings.
        bus: Event bus.
        messages: Player-facing message log.
        travel: Auto-run and path-walk state.
        scheduler: Turn scheduler, owner of the tick counter.
        items: Item factory, assigned once the factory exists.
    """

    def __init__(
        self,
        state: WorldState,
        *,
        rng: RandomSource,
        tables: GameTables,
        settings: Settings,
        bus: EventBus | None = None,
        scheduler: TurnScheduler | None = None,
    ) -> None:
        self.state = state
        self.rng = rng
        self.tables = tables
        self.settings = settings
        self.bus = bus or EventBus()
        self.messages = MessageLog(settings.engine.message_log_size)
        self.travel = TravelState()
        self.scheduler = scheduler or TurnScheduler(settings.engine.max_drain_iterations)
        self.items: ItemFactory | None = None

    @property
    def is_playing(self) -> bool:
        return self.state.status == GameStatus.PLAYING

    @property
    def tick(self) -> int:
        return self.scheduler.tick

    # =========================================================================
    # Messages and Events
    # =========================================================================

    def log(self, message: str) -> None:
        """Record a player-facing message and publish it as a ``log`` event."""
        self.messages.add(self.tick, message)
        self.bus.publish(LogEvent(message=message, tick=self.tick))

    def publish(self, event: EventBase) -> None:
        self.bus.publish(event)

    # =========================================================================
    # Spatial Queries
    # =========================================================================

    def monster_at(self, x: int, y: int) -> tuple[EntityHandle, Monster] | None:
        return self.state.monsters.at(x, y)

    def can_monster_move(self, x: int, y: int) -> bool:
        """Whether a monster may enter the cell."""
        if not self.state.grid.is_walkable(x, y):
            return False
        if self.state.player.x == x and self.state.player.y == y:
            return False
        return self.state.monsters.at(x, y) is None

    def refresh_visibility(self) -> None:
        result = compute_visibility(
            self.state.grid,
            self.state.player.position,
            self.settings.engine.sight_range,
            self.state.explored,
        )
        self.state.visible = result.visible

    def relocate_player(self, position: Position) -> None:
        """Teleport the player, cancelling any travel.

        Visibility is refreshed immediately and a ``teleport`` event is
        published.
        """
        self.state.player.move_to(position.x, position.y)
        self.travel.clear()
        self.refresh_visibility()
        self.publish(TeleportEvent(x=position.x, y=position.y))

    # =========================================================================
    # Terminal Outcomes
    # =========================================================================

    def end_game(self, status: GameStatus, message: str) -> None:
        """Move the session to a terminal status.

        Args:
            status: DEAD or WON.
            message: Final player-facing message.
        """
        if GameStatus(self.state.status).is_terminal:
            return

        character = self.state.character
        self.state.status = status
        if status == GameStatus.DEAD:
            character.hp = 0
        self.travel.clear()

        logger.info(
            "Game over",
            status=str(status),
            depth=self.state.depth,
            character_level=character.level,
            kills=character.kills,
            tick=self.tick,
        )
        self.log(message)
        self.publish(
            GameOverEvent(
                status=str(status),
                depth=self.state.depth,
                character_level=character.level,
                xp=character.xp,
                kills=character.kills,
            )
        )

    def check_player_death(self) -> bool:
        """End the game if the character has no hit points left."""
        if self.state.character.hp <= 0:
            self.end_game(GameStatus.DEAD, "You have been slain...")
            return True
        return False


__all__ = [
    "WorldState",
    "LogEntry",
    "MessageLog",
    "GameContext",
]
