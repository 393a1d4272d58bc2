"""Enumeration types for the delve simulation core.

Terrain, monster behaviour, item categories, effects, player actions and
event tags. Tile values match the integer codes renderers consume.
"""

from __future__ import annotations

from enum import IntEnum, StrEnum


# =============================================================================
# Terrain
# =============================================================================


class Tile(IntEnum):
    """Terrain kind of a single grid cell."""

    FLOOR = 0
    WALL = 1
    DOOR_CLOSED = 2
    DOOR_OPEN = 3
    SECRET_WALL = 4
    """Looks like wall; converted to a closed door when searched."""
    TRAP_HIDDEN = 5
    """Looks like floor until triggered or found."""
    TRAP_REVEALED = 6
    PORTAL = 7

    @property
    def is_walkable(self) -> bool:
        """Whether actors may stand on this tile."""
        return self in WALKABLE_TILES

    @property
    def blocks_sight(self) -> bool:
        """Whether a ray stops after this tile."""
        return self in SIGHT_BLOCKING_TILES


WALKABLE_TILES: frozenset[Tile] = frozenset(
    {Tile.FLOOR, Tile.DOOR_OPEN, Tile.TRAP_HIDDEN, Tile.TRAP_REVEALED, Tile.PORTAL}
)

SIGHT_BLOCKING_TILES: frozenset[Tile] = frozenset(
    {Tile.WALL, Tile.SECRET_WALL, Tile.DOOR_CLOSED}
)


class Facing(StrEnum):
    """Cardinal direction the player last moved in."""

    NORTH = "north"
    EAST = "east"
    SOUTH = "south"
    WEST = "west"

    @property
    def delta(self) -> tuple[int, int]:
        """Unit step (dx, dy) in this direction."""
        return _FACING_DELTAS[self]


_FACING_DELTAS: dict[Facing, tuple[int, int]] = {
    Facing.NORTH: (0, -1),
    Facing.EAST: (1, 0),
    Facing.SOUTH: (0, 1),
    Facing.WEST: (-1, 0),
}


# =============================================================================
# Monsters
# =============================================================================


class AIState(StrEnum):
    """Monster behaviour state. CHASE never reverts to WANDER."""

    WANDER = "wander"
    CHASE = "chase"


class AbilityKind(StrEnum):
    """Special monster ability tag."""

    TELEPORT = "teleport"
    """Relocates the player at range."""

    SUMMON = "summon"
    """Spawns an eligible non-boss monster beside the summoner."""

    DRAIN = "drain"
    """Melee only: heals the attacker by part of the damage dealt."""

    PARALYZE = "paralyze"
    """Melee only: zeroes the player's energy."""

    POISON = "poison"
    """Flavour tag with no mechanical effect."""


# =============================================================================
# Items and Effects
# =============================================================================


class ItemCategory(StrEnum):
    """Item variant tag."""

    POTION = "potion"
    SCROLL = "scroll"
    EQUIPMENT = "equipment"
    LEGENDARY = "legendary"


class Rarity(StrEnum):
    """Template rarity, used to weight generation."""

    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"


class Enchantment(StrEnum):
    """Hidden quality of a piece of equipment."""

    NORMAL = "normal"
    ENCHANTED = "enchanted"
    CURSED = "cursed"


class EquipSlot(StrEnum):
    """Character equipment slot."""

    WEAPON = "weapon"
    ARMOR = "armor"
    RING = "ring"


class PotionEffect(StrEnum):
    """What drinking a potion does."""

    HEAL = "heal"
    MANA = "mana"
    STR_BOOST = "str_boost"
    DEX_BOOST = "dex_boost"
    POISON = "poison"
    SPEED = "speed"
    RESIST = "resist"


class ScrollEffect(StrEnum):
    """What reading a scroll does."""

    IDENTIFY = "identify"
    TELEPORT = "teleport"
    MAGIC_MAP = "magic_map"
    ENCHANT_WEAPON = "enchant_wep"
    SUMMON_MONSTERS = "summon_bad"


class TrapEffect(StrEnum):
    """What stepping on a hidden trap does."""

    TELEPORT = "teleport"
    PIT = "pit"
    POISON = "poison"
    ALARM = "alarm"
    FIRE = "fire"
    CONFUSION = "confusion"


class SpellKind(StrEnum):
    """Targeting shape of a spell."""

    AOE = "aoe"
    SELF = "self"
    LINE = "line"
    NOVA = "nova"


# =============================================================================
# Session
# =============================================================================


class GameStatus(StrEnum):
    """Session status. DEAD and WON are terminal."""

    PLAYING = "playing"
    PAUSED = "paused"
    DEAD = "dead"
    WON = "won"

    @property
    def is_terminal(self) -> bool:
        """Whether the session can never resume."""
        return self in (GameStatus.DEAD, GameStatus.WON)


class Action(StrEnum):
    """Logical player action submitted to the scheduler."""

    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    MOVE_UP_LEFT = "move_up_left"
    MOVE_UP_RIGHT = "move_up_right"
    MOVE_DOWN_LEFT = "move_down_left"
    MOVE_DOWN_RIGHT = "move_down_right"
    WAIT = "wait"
    PICKUP = "pickup"
    DESCEND = "descend"
    ASCEND = "ascend"
    SEARCH = "search"
    AUTO_EXPLORE = "auto_explore"
    CAST_FIREBALL = "cast_fireball"
    CAST_HEAL = "cast_heal"
    CAST_LIGHTNING = "cast_lightning"
    CAST_FROST_NOVA = "cast_frost_nova"

    @property
    def move_delta(self) -> tuple[int, int] | None:
        """Step (dx, dy) for movement actions, None otherwise."""
        return MOVE_DELTAS.get(self)

    @property
    def spell_key(self) -> str | None:
        """Spell table key for cast actions, None otherwise."""
        if self.value.startswith("cast_"):
            return self.value.removeprefix("cast_")
        return None

    @classmethod
    def for_delta(cls, dx: int, dy: int) -> "Action | None":
        """Movement action for a unit step, None if not an 8-neighbour step."""
        return _DELTA_ACTIONS.get((dx, dy))


MOVE_DELTAS: dict[Action, tuple[int, int]] = {
    Action.MOVE_UP: (0, -1),
    Action.MOVE_DOWN: (0, 1),
    Action.MOVE_LEFT: (-1, 0),
    Action.MOVE_RIGHT: (1, 0),
    Action.MOVE_UP_LEFT: (-1, -1),
    Action.MOVE_UP_RIGHT: (1, -1),
    Action.MOVE_DOWN_LEFT: (-1, 1),
    Action.MOVE_DOWN_RIGHT: (1, 1),
}

_DELTA_ACTIONS: dict[tuple[int, int], Action] = {
    delta: action for action, delta in MOVE_DELTAS.items()
}


class EventKind(StrEnum):
    """Tag carried by every published event."""

    TICK = "tick"
    LEVEL_CHANGE = "level_change"
    SPELL_CAST = "spell_cast"
    MONSTER_KILLED = "monster_killed"
    COMBAT = "combat"
    DOOR_OPEN = "door_open"
    SECRET_FOUND = "secret_found"
    TRAP_TRIGGERED = "trap_triggered"
    MAGIC_MAP = "magic_map"
    TELEPORT = "teleport"
    ITEM_PICKUP = "item_pickup"
    INVENTORY_CHANGE = "inventory_change"
    LEVEL_UP = "level_up"
    LOG = "log"
    GAME_OVER = "game_over"


__all__ = [
    "Tile",
    "WALKABLE_TILES",
    "SIGHT_BLOCKING_TILES",
    "Facing",
    "AIState",
    "AbilityKind",
    "ItemCategory",
    "Rarity",
    "Enchantment",
    "EquipSlot",
    "PotionEffect",
    "ScrollEffect",
    "TrapEffect",
    "SpellKind",
    "GameStatus",
    "Action",
    "MOVE_DELTAS",
    "EventKind",
]
