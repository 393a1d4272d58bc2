"""Character creation and level population.

Turns catalog templates into live state: the starting character, monsters
(scaled for depth), stairs, the player's spawn point and ground items.
"""

from __future__ import annotations

from delve.core.logging import get_logger
from delve.data.tables import GameTables, MonsterTemplate
from delve.engine.context import GameContext
from delve.engine.generator import find_floor_in_room, find_random_floor
from delve.models.character import Character, CharacterStats
from delve.models.dungeon import Position, Room
from delve.models.entities import EntityHandle, Monster
from delve.models.enums import AIState, Tile


logger = get_logger(__name__)

MONSTER_SPEED_FACTOR = 10
DEPTH_SCALING = 0.15
BOSS_PLACEMENT_PROBES = 50


def create_character(
    race_key: str,
    class_key: str,
    *,
    tables: GameTables,
    name: str = "Wanderer",
    speed: int = 10,
) -> Character:
    """Roll a level-1 character from a race and class.

    Pools are ``race * class multiplier * 3`` and stats
    ``race * class multiplier``, all floored.

    Args:
        race_key: Race template key.
        class_key: Class template key.
        tables: Catalog to read templates from.
        name: Character name.
        speed: Energy gained per tick.

    Returns:
        The new character at full health and mana.

    Raises:
        DataTableError: If the race or class key is unknown.
    """
    race = tables.race(race_key)
    cls = tables.char_class(class_key)

    max_hp = max(1, int(race.hp * cls.hp_mult * 3))
    max_mp = int(race.mp * cls.mp_mult * 3)

    character = Character(
        name=name,
        race_key=race.key,
        race_name=race.name,
        class_key=cls.key,
        class_name=cls.name,
        xp_to_next=tables.xp_threshold(1) or 0,
        hp=max_hp,
        max_hp=max_hp,
        mp=max_mp,
        max_mp=max_mp,
        speed=speed,
        stats=CharacterStats(
            strength=int(race.strength * cls.str_mult),
            dexterity=int(race.dexterity * cls.dex_mult),
            intelligence=int(race.intelligence * cls.int_mult),
        ),
        spell_cooldowns={key: 0 for key in tables.spells},
    )
    logger.info(
        "Character created",
        race=race.key,
        char_class=cls.key,
        max_hp=max_hp,
        max_mp=max_mp,
    )
    return character


def make_monster(
    template: MonsterTemplate,
    position: Position,
    *,
    scale: float = 1.0,
    chasing: bool = False,
) -> Monster:
    """Instantiate a monster from its template.

    Args:
        template: Monster template.
        position: Spawn cell.
        scale: Multiplier for hit points, attack and XP. Defense is never
            scaled.
        chasing: Start in CHASE regardless of the template's AI.

    Returns:
        The new monster with zero energy.
    """
    hp = max(1, int(template.hp * scale))
    return Monster(
        key=template.key,
        name=template.name,
        symbol=template.symbol,
        x=position.x,
        y=position.y,
        hp=hp,
        max_hp=hp,
        atk=int(template.atk * scale),
        defense=template.defense,
        xp=int(template.xp * scale),
        speed=template.speed * MONSTER_SPEED_FACTOR,
        ai_state=AIState.CHASE if chasing else template.ai,
        ability=template.ability,
        boss=template.boss,
    )


def spawn_monster(ctx: GameContext, monster: Monster) -> EntityHandle:
    return ctx.state.monsters.insert(monster)


# =============================================================================
# Level Population
# =============================================================================


def spawn_player(ctx: GameContext) -> Position:
    """Put the player on a floor tile of the first room."""
    state = ctx.state
    room = state.level.rooms[0] if state.level.rooms else Room(1, 1, 3, 3)
    position = find_floor_in_room(state.grid, room, ctx.rng)
    state.player.move_to(position.x, position.y)
    return position


def place_stairs(ctx: GameContext) -> None:
    """Place down stairs in the last room and up stairs in the first."""
    state = ctx.state
    rooms = state.level.rooms
    if not rooms:
        state.stairs_down = None
        state.stairs_up = None
        return

    if state.depth < state.max_depth:
        state.stairs_down = find_floor_in_room(state.grid, rooms[-1], ctx.rng)
    else:
        state.stairs_down = None

    if state.depth > 1:
        state.stairs_up = find_floor_in_room(state.grid, rooms[0], ctx.rng)
    else:
        state.stairs_up = None


def _is_free(ctx: GameContext, position: Position) -> bool:
    state = ctx.state
    return (
        position != state.player.position
        and position != state.stairs_down
        and state.monsters.at(position.x, position.y) is None
    )


def _free_floor(ctx: GameContext) -> Position | None:
    """A floor tile with no player, stairs or monster on it."""
    grid = ctx.state.grid
    for _ in range(BOSS_PLACEMENT_PROBES):
        position = find_random_floor(grid, ctx.rng)
        if _is_free(ctx, position):
            return position
    for position in grid.positions_of(Tile.FLOOR):
        if _is_free(ctx, position):
            return position
    return None


def spawn_monsters(ctx: GameContext) -> int:
    """Populate the level from its theme.

    Returns:
        Number of monsters spawned, boss included.
    """
    state = ctx.state
    depth = state.depth
    theme = ctx.tables.theme_for(depth)
    count = int(state.grid.width * state.grid.height * theme.monster_density)
    eligible = ctx.tables.eligible_monsters(depth)

    spawned = 0
    for _ in range(count):
        position = find_random_floor(state.grid, ctx.rng)
        if not _is_free(ctx, position):
            continue
        if not eligible:
            break
        template = eligible[ctx.rng.randrange(len(eligible))]
        scale = 1 + (depth - template.min_level) * DEPTH_SCALING
        spawn_monster(ctx, make_monster(template, position, scale=scale))
        spawned += 1

    if theme.boss_key is not None and theme.boss_key in ctx.tables.monsters:
        boss = ctx.tables.monster(theme.boss_key)
        position = _free_floor(ctx)
        if position is None:
            logger.warning("No free tile for boss", boss=boss.key, depth=depth)
            return spawned
        spawn_monster(ctx, make_monster(boss, position))
        spawned += 1
        ctx.log(f"You sense a terrible presence: {boss.name}...")

    return spawned


def spawn_items(ctx: GameContext) -> int:
    """Scatter ``3 + floor(depth * 0.8)`` random items on the floor."""
    state = ctx.state
    if ctx.items is None:
        return 0

    placed = 0
    for _ in range(3 + int(state.depth * 0.8)):
        position = find_random_floor(state.grid, ctx.rng)
        item = ctx.items.random_item(state.depth)
        if item is None:
            continue
        item.place(position.x, position.y)
        state.items.append(item)
        placed += 1
    return placed


__all__ = [
    "MONSTER_SPEED_FACTOR",
    "create_character",
    "make_monster",
    "spawn_monster",
    "spawn_player",
    "place_stairs",
    "spawn_monsters",
    "spawn_items",
]
