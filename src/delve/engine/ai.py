"""Monster behaviour.

Two states: WANDER drifts randomly until the monster stands in the
player's view within 6 tiles, then switches to CHASE for good. CHASE
attacks when adjacent, may use a ranged ability and otherwise steps
toward the player.
"""

from __future__ import annotations

from delve.core.logging import get_logger
from delve.engine.combat import monster_attack
from delve.engine.context import GameContext
from delve.engine.generator import find_random_floor
from delve.engine.pathfinding import ORTHOGONAL_OFFSETS
from delve.engine.population import make_monster, spawn_monster
from delve.engine.rng import chance
from delve.models.entities import EntityHandle, Monster
from delve.models.enums import AbilityKind, AIState


logger = get_logger(__name__)

NOTICE_DISTANCE = 6
TELEPORT_RANGE = 5
TELEPORT_CHANCE = 0.1
SUMMON_RANGE = 8
SUMMON_CHANCE = 0.05
WANDER_CHANCE = 0.3

# Spawn order around a summoner: S, N, E, W
_SUMMON_OFFSETS: tuple[tuple[int, int], ...] = ((0, 1), (0, -1), (1, 0), (-1, 0))


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def monster_step(ctx: GameContext, handle: EntityHandle, monster: Monster) -> None:
    """Run one AI action for ``monster``.

    Args:
        ctx: Game context.
        handle: Arena handle of the acting monster.
        monster: The acting monster.
    """
    player = ctx.state.player
    dx = player.x - monster.x
    dy = player.y - monster.y
    distance = abs(dx) + abs(dy)

    if monster.ai_state == AIState.WANDER:
        if distance <= NOTICE_DISTANCE and ctx.state.visible.is_set(monster.x, monster.y):
            monster.ai_state = AIState.CHASE
            logger.debug("Monster starts chasing", monster=monster.key, ref=handle.ref)
        else:
            wander(ctx, monster)
            return

    if distance <= 1:
        monster_attack(ctx, handle, monster)
        return

    if (
        monster.ability == AbilityKind.TELEPORT
        and distance <= TELEPORT_RANGE
        and chance(ctx.rng, TELEPORT_CHANCE)
    ):
        destination = find_random_floor(ctx.state.grid, ctx.rng)
        ctx.log(f"{monster.name} teleports you away!")
        ctx.relocate_player(destination)
        return

    if (
        monster.ability == AbilityKind.SUMMON
        and chance(ctx.rng, SUMMON_CHANCE)
        and distance <= SUMMON_RANGE
    ):
        summon(ctx, monster)
        return

    _step_toward(ctx, monster, dx, dy)


def _step_toward(ctx: GameContext, monster: Monster, dx: int, dy: int) -> None:
    step_x = (_sign(dx), 0)
    step_y = (0, _sign(dy))
    # Close the larger gap first; ties go to the x axis
    candidates = (step_x, step_y) if abs(dx) >= abs(dy) else (step_y, step_x)

    for sx, sy in candidates:
        if (sx, sy) == (0, 0):
            continue
        nx, ny = monster.x + sx, monster.y + sy
        if ctx.can_monster_move(nx, ny):
            monster.move_to(nx, ny)
            return

    wander(ctx, monster)


def wander(ctx: GameContext, monster: Monster) -> None:
    """Maybe take a random orthogonal step."""
    if not chance(ctx.rng, WANDER_CHANCE):
        return
    dx, dy = ORTHOGONAL_OFFSETS[ctx.rng.randrange(len(ORTHOGONAL_OFFSETS))]
    nx, ny = monster.x + dx, monster.y + dy
    if ctx.can_monster_move(nx, ny):
        monster.move_to(nx, ny)


def summon(ctx: GameContext, summoner: Monster) -> Monster | None:
    """Spawn an eligible non-boss monster next to ``summoner``.

    Returns:
        The summoned monster, or None when nothing could be placed.
    """
    eligible = ctx.tables.eligible_monsters(ctx.state.depth)
    if not eligible:
        return None
    template = eligible[ctx.rng.randrange(len(eligible))]

    for dx, dy in _SUMMON_OFFSETS:
        nx, ny = summoner.x + dx, summoner.y + dy
        if ctx.can_monster_move(nx, ny):
            summoned = make_monster(template, summoner.position.offset(dx, dy), chasing=True)
            spawn_monster(ctx, summoned)
            ctx.log(f"{summoner.name} summons a {template.name}!")
            return summoned
    return None


__all__ = [
    "monster_step",
    "wander",
    "summon",
]
