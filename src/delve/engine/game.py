"""Game session: the public surface of the simulation core.

``Game`` owns the world state and wires the subsystems together. Callers
submit logical actions, start multi-turn movement, use inventory items,
subscribe to events and read snapshots; everything else happens inside.

Example:
    >>> game = Game(race="dwarf", char_class="warrior", seed=1234)
    >>> game.submit_action("wait")
    True
    >>> snapshot = game.snapshot()
    >>> snapshot.depth
    1
"""

from __future__ import annotations

from collections.abc import Callable

from delve.core.config import Settings, get_settings
from delve.core.exceptions import (
    GenerationError,
    InvalidGameStateError,
    UnknownActionError,
    ValidationError,
)
from delve.core.logging import ensure_logging, get_logger, track_session
from delve.data.catalog import default_tables
from delve.data.tables import GameTables
from delve.engine import ai, combat, hazards, itemization, spells
from delve.engine.context import GameContext, WorldState
from delve.engine.events import Listener
from delve.engine.generator import generate
from delve.engine.itemization import ItemFactory, PotionIdentity
from delve.engine.pathfinding import bfs_path, find_nearest_unexplored
from delve.engine.population import (
    create_character,
    place_stairs,
    spawn_items,
    spawn_monsters,
    spawn_player,
)
from delve.engine.rng import RandomSource, create_rng
from delve.engine.scheduler import ACTION_COST, ContinuationQueue
from delve.engine.travel import interruption_reason
from delve.models.character import Character
from delve.models.dungeon import DungeonLevel, Position, TileGrid, TileMask
from delve.models.entities import EntityHandle, Monster, Player
from delve.models.enums import Action, GameStatus, Tile
from delve.models.events import DoorOpenEvent, LevelChangeEvent, TickEvent
from delve.models.snapshot import GameSnapshot


logger = get_logger(__name__)

Defer = Callable[[Callable[[], None]], None]


class Game:
    """A single play session.

    Construction generates depth 1 and runs the scheduler until the player
    can act. Ordinary gameplay conditions never raise; they are reported in
    the message log.

    Creating a game sets up logging from its settings if the host has not
    configured structlog, and makes it the session stamped on log entries.

    Attributes:
        context: Shared engine context (state, catalog, bus, log).
    """

    def __init__(
        self,
        race: str = "human",
        char_class: str = "warrior",
        *,
        name: str = "Wanderer",
        settings: Settings | None = None,
        rng: RandomSource | None = None,
        seed: int | None = None,
        tables: GameTables | None = None,
        defer: Defer | None = None,
    ) -> None:
        """Create a session.

        Args:
            race: Race template key.
            char_class: Class template key.
            name: Character name.
            settings: Engine settings; defaults to the cached settings.
            rng: Random source; overrides ``seed``.
            seed: Seed for a fresh random source; defaults to the settings seed.
            tables: Static catalog; defaults to the built-in catalog.
            defer: Scheduler for follow-up travel steps. Defaults to an
                internal queue that runs them before the triggering call
                returns.

        Raises:
            DataTableError: If the race or class key is unknown.
        """
        self.settings = settings or get_settings()
        ensure_logging(self.settings)
        if seed is None:
            seed = self.settings.seed
        self.seed = seed
        rng = rng if rng is not None else create_rng(seed)
        tables = tables or default_tables()

        character = create_character(
            race,
            char_class,
            tables=tables,
            name=name,
            speed=self.settings.engine.player_speed,
        )
        generation = self.settings.generation
        state = WorldState(
            level=DungeonLevel(grid=TileGrid(generation.width, generation.height)),
            player=Player(),
            character=character,
            visible=TileMask(generation.width, generation.height),
            explored=TileMask(generation.width, generation.height),
            max_depth=generation.max_depth,
        )
        self.context = GameContext(state, rng=rng, tables=tables, settings=self.settings)
        self.context.items = ItemFactory(tables, rng, PotionIdentity(tables, rng))

        self._continuations = ContinuationQueue()
        self._defer: Defer = defer or self._continuations.defer
        self._continuation_pending = False

        track_session(self)
        logger.info("Game created", race=race, char_class=char_class)

        self.generate_level(1)
        self._end_turn()
        self._continuations.run()

    # =========================================================================
    # Read-only Accessors
    # =========================================================================

    @property
    def state(self) -> WorldState:
        return self.context.state

    @property
    def status(self) -> GameStatus:
        return GameStatus(self.state.status)

    @property
    def character(self) -> Character:
        return self.state.character

    @property
    def player(self) -> Player:
        return self.state.player

    @property
    def depth(self) -> int:
        return self.state.depth

    @property
    def tick(self) -> int:
        return self.context.tick

    @property
    def messages(self) -> list[str]:
        return self.context.messages.messages()

    def is_valid_move(self, x: int, y: int) -> bool:
        """Whether an actor could stand on the cell."""
        return self.state.grid.is_walkable(x, y)

    def snapshot(self) -> GameSnapshot:
        """Copy the observable state.

        Returns:
            A snapshot that shares no mutable objects with the session.
        """
        state = self.state
        return GameSnapshot(
            width=state.grid.width,
            height=state.grid.height,
            tiles=state.grid.to_lists(),
            visible=state.visible.to_lists(),
            explored=state.explored.to_lists(),
            monsters={
                handle.ref: monster.model_copy(deep=True)
                for handle, monster in state.monsters.items()
            },
            player=state.player.model_copy(deep=True),
            items=[item.model_copy(deep=True) for item in state.items],
            character=state.character.model_copy(deep=True),
            depth=state.depth,
            max_depth=state.max_depth,
            theme=state.theme,
            status=self.status,
            tick=self.tick,
            stairs_down=state.stairs_down,
            stairs_up=state.stairs_up,
            messages=self.messages,
        )

    # =========================================================================
    # Events
    # =========================================================================

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register an event listener.

        Returns:
            A callable that removes the listener again.
        """
        return self.context.bus.subscribe(listener)

    def unsubscribe(self, listener: Listener) -> None:
        self.context.bus.unsubscribe(listener)

    # =========================================================================
    # Session Control
    # =========================================================================

    def stop(self) -> None:
        """Pause the session. Actions are ignored until ``resume``."""
        if self.status == GameStatus.PLAYING:
            self.state.status = GameStatus.PAUSED
            self.context.travel.clear()
            logger.info("Game paused", tick=self.tick)

    def resume(self) -> None:
        """Resume a paused session.

        Raises:
            InvalidGameStateError: If the session has ended.
        """
        if self.status.is_terminal:
            raise InvalidGameStateError(
                "Cannot resume a finished game",
                current_state=self.status.value,
                expected_states=[GameStatus.PAUSED.value, GameStatus.PLAYING.value],
            )
        if self.status == GameStatus.PAUSED:
            self.state.status = GameStatus.PLAYING
            logger.info("Game resumed", tick=self.tick)

    # =========================================================================
    # Levels
    # =========================================================================

    def generate_level(self, depth: int) -> DungeonLevel:
        """Replace the current level with a fresh one at ``depth``.

        Monsters, ground items, travel and fog of war are reset; the
        character carries over.

        Args:
            depth: Target depth, between 1 and the final depth.

        Returns:
            The new level.

        Raises:
            GenerationError: If the depth is out of range.
        """
        ctx = self.context
        state = self.state
        generation = self.settings.generation
        if depth > state.max_depth:
            raise GenerationError(
                f"Depth {depth} is beyond the final depth {state.max_depth}",
                depth=depth,
            )

        level = generate(
            generation.width,
            generation.height,
            depth,
            rng=ctx.rng,
            tables=ctx.tables,
            ensure_connectivity=generation.ensure_connectivity,
        )
        theme = ctx.tables.theme_for(depth)

        state.level = level
        state.depth = depth
        state.theme = theme.name
        state.monsters.clear()
        state.items = []
        state.visible = TileMask(level.grid.width, level.grid.height)
        state.explored = TileMask(level.grid.width, level.grid.height)
        ctx.travel.clear()

        spawn_player(ctx)
        place_stairs(ctx)
        spawn_monsters(ctx)
        spawn_items(ctx)
        ctx.refresh_visibility()

        logger.info(
            "Level entered",
            depth=depth,
            theme=theme.name,
            rooms=len(level.rooms),
            monsters=len(state.monsters),
            items=len(state.items),
        )
        ctx.log(f"You enter {theme.name} - Depth {depth}")
        ctx.publish(LevelChangeEvent(level=depth, theme=theme.name))
        return level

    # =========================================================================
    # Actions
    # =========================================================================

    def submit_action(self, action: Action | str) -> bool:
        """Submit a manual player action.

        Manual actions cancel auto-run and path-walk. The action is ignored
        unless the game is playing and silently dropped while the player
        lacks energy.

        Args:
            action: An ``Action`` or its string tag.

        Returns:
            True if the action was resolved.

        Raises:
            UnknownActionError: If the tag is not a known action.
        """
        action = self._coerce_action(action)
        if self.status != GameStatus.PLAYING:
            return False

        self.context.travel.clear()
        performed = self._perform(action)
        self._continuations.run()
        return performed

    def start_auto_run(self, dx: int, dy: int) -> None:
        """Run in a direction until something interesting happens.

        Args:
            dx: Horizontal step, -1, 0 or 1.
            dy: Vertical step, -1, 0 or 1.

        Raises:
            ValidationError: If the direction is not a unit step.
        """
        if Action.for_delta(dx, dy) is None:
            raise ValidationError(
                "Auto-run direction must be a single step",
                field_name="direction",
                invalid_value=(dx, dy),
            )
        if self.status != GameStatus.PLAYING:
            return

        self.context.travel.start_run(dx, dy)
        self._auto_step()
        self._continuations.run()

    def start_path_to(self, x: int, y: int) -> bool:
        """Walk to a cell, one step per turn.

        Returns:
            True if a path was found and walking started.
        """
        if self.status != GameStatus.PLAYING:
            return False

        ctx = self.context
        path = bfs_path(self.state.grid, self.player.position, Position(x, y))
        if not path:
            ctx.log("No path to that location.")
            return False

        ctx.travel.start_path(path)
        self._path_step()
        self._continuations.run()
        return True

    def auto_explore(self) -> Position | None:
        """Walk toward the nearest unexplored cell.

        Returns:
            The frontier cell targeted, or None when everything reachable
            has been explored.
        """
        if self.status != GameStatus.PLAYING:
            return None

        target = self._plan_exploration()
        if target is not None:
            self._path_step()
            self._continuations.run()
        return target

    def use_inventory_item(self, index: int) -> bool:
        """Use the inventory item at ``index``. Does not cost a turn."""
        if self.status != GameStatus.PLAYING:
            return False
        return itemization.use_inventory_item(self.context, index)

    def drop_item(self, index: int) -> bool:
        """Drop the inventory item at ``index`` on the player's tile."""
        if self.status != GameStatus.PLAYING:
            return False
        return itemization.drop_item(self.context, index) is not None

    # =========================================================================
    # Turn Resolution
    # =========================================================================

    @staticmethod
    def _coerce_action(action: Action | str) -> Action:
        try:
            return Action(action)
        except ValueError:
            raise UnknownActionError(f"Unknown action: {action}", action=str(action)) from None

    def _perform(self, action: Action) -> bool:
        character = self.character
        if character.energy < ACTION_COST:
            return False

        self._resolve(action)
        character.energy -= ACTION_COST
        logger.debug("Action resolved", action=action.value, tick=self.tick)
        self._end_turn()
        return True

    def _resolve(self, action: Action) -> None:
        ctx = self.context
        delta = action.move_delta
        spell_key = action.spell_key

        if delta is not None:
            self._move(*delta)
        elif spell_key is not None:
            spells.cast_spell(ctx, spell_key)
        elif action == Action.WAIT:
            ctx.log("You wait...")
        elif action == Action.PICKUP:
            itemization.pickup(ctx)
        elif action == Action.DESCEND:
            self._descend()
        elif action == Action.ASCEND:
            self._ascend()
        elif action == Action.SEARCH:
            hazards.search(ctx)
        elif action == Action.AUTO_EXPLORE:
            self._plan_exploration()

    def _end_turn(self) -> None:
        """Drain the scheduler, refresh visibility and schedule travel.

        At most one travel continuation is outstanding at a time.
        """
        ctx = self.context
        if not ctx.is_playing:
            return

        result = ctx.scheduler.drain(
            self.character,
            self.state.monsters,
            self._monster_step,
            lambda: ctx.is_playing,
        )
        if result.aborted:
            return

        ctx.refresh_visibility()
        ctx.publish(TickEvent(tick=self.tick, depth=self.depth))
        if ctx.travel.active and ctx.is_playing and not self._continuation_pending:
            self._continuation_pending = True
            self._defer(self._continue_travel)

    def _monster_step(self, handle: EntityHandle, monster: Monster) -> None:
        ai.monster_step(self.context, handle, monster)

    # =========================================================================
    # Movement
    # =========================================================================

    def _move(self, dx: int, dy: int) -> None:
        ctx = self.context
        state = self.state
        grid = state.grid
        player = state.player
        nx, ny = player.x + dx, player.y + dy

        target = ctx.monster_at(nx, ny)
        if target is not None:
            combat.player_attack(ctx, *target)
            return

        if grid.in_bounds(nx, ny) and grid.get(nx, ny) == Tile.DOOR_CLOSED:
            grid.set(nx, ny, Tile.DOOR_OPEN)
            ctx.log("You open the door.")
            ctx.publish(DoorOpenEvent(x=nx, y=ny))

        if not grid.is_walkable(nx, ny):
            return

        player.move_to(nx, ny)
        player.face(dx, dy)

        hazards.trigger_trap(ctx, nx, ny)
        if not ctx.is_playing:
            return
        if itemization.item_at(ctx, player.x, player.y) is not None:
            itemization.pickup(ctx)
        self._stairs_hint()
        hazards.check_portal(ctx)

    def _stairs_hint(self) -> None:
        state = self.state
        position = state.player.position
        if state.stairs_down is not None and position == state.stairs_down:
            self.context.log("You stand on stairs leading down.")
        if state.stairs_up is not None and position == state.stairs_up:
            self.context.log("You stand on stairs leading up.")

    def _descend(self) -> None:
        state = self.state
        if state.stairs_down is None or state.player.position != state.stairs_down:
            self.context.log("There are no stairs here.")
            return
        if state.depth < state.max_depth:
            self.context.log("You descend deeper...")
            self.generate_level(state.depth + 1)

    def _ascend(self) -> None:
        state = self.state
        if state.stairs_up is None or state.player.position != state.stairs_up:
            self.context.log("There are no stairs here.")
            return
        if state.depth > 1:
            self.context.log("You ascend upward...")
            self.generate_level(state.depth - 1)

    # =========================================================================
    # Travel
    # =========================================================================

    def _plan_exploration(self) -> Position | None:
        ctx = self.context
        state = self.state
        target = find_nearest_unexplored(state.grid, state.explored, state.player.position)
        if target is None:
            ctx.log("The entire dungeon is explored.")
            ctx.travel.clear()
            return None

        path = bfs_path(state.grid, state.player.position, target)
        if not path:
            ctx.log("No path to that location.")
            return None
        ctx.travel.start_path(path)
        return target

    def _continue_travel(self) -> None:
        self._continuation_pending = False
        if self.status != GameStatus.PLAYING:
            return
        if self.context.travel.running:
            self._auto_step()
        elif self.context.travel.walking:
            self._path_step()

    def _auto_step(self) -> None:
        ctx = self.context
        state = self.state
        if ctx.travel.run_delta is None:
            return
        dx, dy = ctx.travel.run_delta
        step = state.player.position.offset(dx, dy)

        reason = interruption_reason(
            state.grid,
            state.player.position,
            step,
            state.visible,
            state.monsters,
            state.items,
            state.stairs_down,
            state.stairs_up,
        )
        if reason is not None:
            ctx.travel.stop_run()
            if reason.message:
                ctx.log(reason.message)
            return

        action = Action.for_delta(dx, dy)
        if action is None or not state.grid.is_walkable(step.x, step.y) or ctx.monster_at(step.x, step.y):
            ctx.travel.stop_run()
            return
        self._perform(action)

    def _path_step(self) -> None:
        ctx = self.context
        state = self.state
        travel = ctx.travel
        if not travel.walking:
            return

        waypoint = travel.path[0]
        grid = state.grid
        enterable = (
            grid.is_walkable(waypoint.x, waypoint.y)
            or (grid.in_bounds(waypoint.x, waypoint.y) and grid.get(waypoint.x, waypoint.y) == Tile.DOOR_CLOSED)
            or ctx.monster_at(waypoint.x, waypoint.y) is not None
        )
        action = Action.for_delta(waypoint.x - state.player.x, waypoint.y - state.player.y)
        if not enterable or action is None:
            travel.path.clear()
            return

        travel.path.popleft()
        self._perform(action)


__all__ = ["Game"]
