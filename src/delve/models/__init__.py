"""Domain models for the delve simulation core.

Terrain and level structures are plain classes and dataclasses; actors,
items, the character record, events and snapshots are pydantic models.
"""

from __future__ import annotations

# =============================================================================
# Enumerations
# =============================================================================
from delve.models.enums import (
    MOVE_DELTAS,
    SIGHT_BLOCKING_TILES,
    WALKABLE_TILES,
    AbilityKind,
    Action,
    AIState,
    Enchantment,
    EquipSlot,
    EventKind,
    Facing,
    GameStatus,
    ItemCategory,
    PotionEffect,
    Rarity,
    ScrollEffect,
    SpellKind,
    Tile,
    TrapEffect,
)

# =============================================================================
# Dungeon
# =============================================================================
from delve.models.dungeon import (
    DungeonLevel,
    Position,
    Room,
    SecretDoor,
    TileGrid,
    TileMask,
    Trap,
)

# =============================================================================
# Actors, Items and Character
# =============================================================================
from delve.models.base import GameModel
from delve.models.entities import (
    PLAYER_REF,
    EntityArena,
    EntityHandle,
    Monster,
    MonsterArena,
    Player,
)
from delve.models.items import (
    BaseItem,
    EquipmentItem,
    Item,
    LegendaryItem,
    PotionItem,
    ScrollItem,
    Wearable,
)
from delve.models.character import Character, CharacterStats, Equipment

# =============================================================================
# Events and Snapshot
# =============================================================================
from delve.models.events import (
    KNOWN_EVENT_KINDS,
    CombatEvent,
    DoorOpenEvent,
    EventBase,
    GameEvent,
    GameOverEvent,
    InventoryChangeEvent,
    ItemPickupEvent,
    LevelChangeEvent,
    LevelUpEvent,
    LogEvent,
    MagicMapEvent,
    MonsterKilledEvent,
    SecretFoundEvent,
    SpellCastEvent,
    TeleportEvent,
    TickEvent,
    TrapTriggeredEvent,
    UnknownEvent,
    parse_event,
)
from delve.models.snapshot import GameSnapshot


__all__ = [
    # Enumerations
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
    # Dungeon
    "Position",
    "Room",
    "Trap",
    "SecretDoor",
    "TileGrid",
    "TileMask",
    "DungeonLevel",
    # Actors
    "GameModel",
    "PLAYER_REF",
    "Monster",
    "Player",
    "EntityHandle",
    "EntityArena",
    "MonsterArena",
    # Items
    "BaseItem",
    "PotionItem",
    "ScrollItem",
    "EquipmentItem",
    "LegendaryItem",
    "Item",
    "Wearable",
    # Character
    "CharacterStats",
    "Equipment",
    "Character",
    # Events
    "EventBase",
    "TickEvent",
    "LevelChangeEvent",
    "SpellCastEvent",
    "MonsterKilledEvent",
    "CombatEvent",
    "DoorOpenEvent",
    "SecretFoundEvent",
    "TrapTriggeredEvent",
    "MagicMapEvent",
    "TeleportEvent",
    "ItemPickupEvent",
    "InventoryChangeEvent",
    "LevelUpEvent",
    "LogEvent",
    "GameOverEvent",
    "UnknownEvent",
    "GameEvent",
    "KNOWN_EVENT_KINDS",
    "parse_event",
    # Snapshot
    "GameSnapshot",
]
