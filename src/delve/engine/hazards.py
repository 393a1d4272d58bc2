"""Traps, portals and searching for hidden features."""

from __future__ import annotations

from delve.core.logging import get_logger
from delve.engine.context import GameContext
from delve.engine.generator import find_random_floor
from delve.engine.rng import chance
from delve.models.dungeon import Trap
from delve.models.enums import AIState, Tile, TrapEffect
from delve.models.events import SecretFoundEvent, TrapTriggeredEvent


logger = get_logger(__name__)

ALARM_RADIUS = 15
TRAP_SPOT_CHANCE = 0.4


def reveal_trap(ctx: GameContext, trap: Trap) -> None:
    """Mark a trap revealed; revealed traps stay revealed."""
    trap.revealed = True
    ctx.state.grid.set(trap.x, trap.y, Tile.TRAP_REVEALED)


def trigger_trap(ctx: GameContext, x: int, y: int) -> Trap | None:
    """Spring the hidden trap at a cell, if any.

    Revealed traps are harmless and are stepped over.

    Args:
        ctx: Game context.
        x: Column entered.
        y: Row entered.

    Returns:
        The sprung trap, or None.
    """
    state = ctx.state
    trap = state.level.trap_at(x, y)
    if trap is None or trap.revealed:
        return None

    reveal_trap(ctx, trap)
    template = ctx.tables.trap(trap.kind)
    ctx.log(template.description)
    ctx.publish(TrapTriggeredEvent(x=x, y=y, trap=trap.kind))
    logger.debug("Trap triggered", trap=trap.kind, x=x, y=y)

    character = state.character
    effect = TrapEffect(template.effect)
    if effect == TrapEffect.TELEPORT:
        destination = find_random_floor(state.grid, ctx.rng)
        ctx.log("You are teleported!")
        ctx.relocate_player(destination)
    elif effect in (TrapEffect.PIT, TrapEffect.FIRE):
        character.take_damage(template.damage)
        ctx.log(f"You take {template.damage} damage!")
        ctx.check_player_death()
    elif effect == TrapEffect.POISON:
        character.take_damage(template.damage)
        ctx.log(f"Poison! You take {template.damage} damage!")
        ctx.check_player_death()
    elif effect == TrapEffect.ALARM:
        ctx.log("Monsters are alerted!")
        for monster in state.monsters:
            distance = abs(monster.x - x) + abs(monster.y - y)
            if monster.ai_state == AIState.WANDER and distance < ALARM_RADIUS:
                monster.ai_state = AIState.CHASE
    elif effect == TrapEffect.CONFUSION:
        ctx.log("You feel confused!")

    return trap


def search(ctx: GameContext) -> bool:
    """Search the player's tile and its eight neighbours.

    Secret walls always turn into closed doors. Each hidden trap is spotted
    with a 40% chance.

    Returns:
        True if anything was found.
    """
    state = ctx.state
    grid = state.grid
    player = state.player
    found = False

    for dy in (-1, 0, 1):
        for dx in (-1, 0, 1):
            x, y = player.x + dx, player.y + dy
            if not grid.in_bounds(x, y):
                continue

            if grid.get(x, y) == Tile.SECRET_WALL:
                grid.set(x, y, Tile.DOOR_CLOSED)
                ctx.log("You discover a secret door!")
                ctx.publish(SecretFoundEvent(x=x, y=y))
                found = True

            trap = state.level.trap_at(x, y)
            if trap is not None and not trap.revealed and chance(ctx.rng, TRAP_SPOT_CHANCE):
                reveal_trap(ctx, trap)
                ctx.log(f"You notice a {ctx.tables.trap(trap.kind).name}!")
                found = True

    if not found:
        ctx.log("You search but find nothing.")
    return found


def check_portal(ctx: GameContext) -> bool:
    """Warp the player if they stand on a portal."""
    state = ctx.state
    player = state.player
    if state.grid.get(player.x, player.y) != Tile.PORTAL:
        return False

    ctx.log("You step into the portal... Everything warps!")
    ctx.relocate_player(find_random_floor(state.grid, ctx.rng))
    return True


__all__ = [
    "ALARM_RADIUS",
    "reveal_trap",
    "trigger_trap",
    "search",
    "check_portal",
]
