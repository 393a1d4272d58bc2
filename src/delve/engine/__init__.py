"""Simulation engine for the delve dungeon crawler.

This package holds level generation, field of view, pathfinding, the
energy scheduler, monster AI, combat, spells, items, traps and the
``Game`` session that ties them together.

Submodules:
    rng: Injectable random source
    generator: Rooms-and-corridors level generation
    visibility: Ray-cast field of view
    pathfinding: BFS paths and frontier search
    scheduler: Energy-based turn scheduler and continuation queue
    travel: Auto-run and path-walk state
    context: World state, message log and shared engine context
    population: Character creation and level population
    combat: Melee, kills, loot and levelling
    spells: Spell casting
    ai: Monster behaviour
    itemization: Item generation, identification and inventory
    hazards: Traps, portals and searching
    game: The public session facade

Example:
    >>> from delve.engine import Game, Action
    >>> game = Game(race="elf", char_class="istar", seed=7)
    >>> game.submit_action(Action.CAST_FROST_NOVA)
    True
"""

from __future__ import annotations

from delve.models.enums import Action

# =============================================================================
# Randomness
# =============================================================================
from delve.engine.rng import RandomSource, below, chance, create_rng

# =============================================================================
# Level Construction
# =============================================================================
from delve.engine.generator import (
    MIN_DIMENSION,
    carve_horizontal,
    carve_vertical,
    connect_unreachable_rooms,
    find_floor_in_room,
    find_random_floor,
    generate,
)

# =============================================================================
# Spatial Queries
# =============================================================================
from delve.engine.pathfinding import (
    NEIGHBOR_OFFSETS,
    ORTHOGONAL_OFFSETS,
    bfs_path,
    find_nearest_unexplored,
    is_passable,
)
from delve.engine.visibility import RAY_COUNT, VisibilityResult, compute_visibility

# =============================================================================
# Turn Flow
# =============================================================================
from delve.engine.events import EventBus, Listener
from delve.engine.scheduler import (
    ACTION_COST,
    ContinuationQueue,
    DrainResult,
    MonsterStep,
    TurnScheduler,
)
from delve.engine.travel import InterruptReason, TravelState, interruption_reason

# =============================================================================
# Session
# =============================================================================
from delve.engine.context import GameContext, LogEntry, MessageLog, WorldState
from delve.engine.game import Game
from delve.engine.itemization import ItemFactory, PotionIdentity
from delve.engine.population import create_character, make_monster


__all__ = [
    # Randomness
    "RandomSource",
    "create_rng",
    "chance",
    "below",
    # Level construction
    "MIN_DIMENSION",
    "generate",
    "carve_horizontal",
    "carve_vertical",
    "connect_unreachable_rooms",
    "find_random_floor",
    "find_floor_in_room",
    # Spatial queries
    "NEIGHBOR_OFFSETS",
    "ORTHOGONAL_OFFSETS",
    "is_passable",
    "bfs_path",
    "find_nearest_unexplored",
    "RAY_COUNT",
    "VisibilityResult",
    "compute_visibility",
    # Turn flow
    "EventBus",
    "Listener",
    "ACTION_COST",
    "MonsterStep",
    "DrainResult",
    "TurnScheduler",
    "ContinuationQueue",
    "InterruptReason",
    "TravelState",
    "interruption_reason",
    # Session
    "Action",
    "Game",
    "GameContext",
    "WorldState",
    "LogEntry",
    "MessageLog",
    "ItemFactory",
    "PotionIdentity",
    "create_character",
    "make_monster",
]
