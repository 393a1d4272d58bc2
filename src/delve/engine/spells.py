"""Spell casting.

Four targeting shapes: self (heal), area around the nearest monster in
range, a line along the player's facing and a nova around the player. All
distances are Manhattan.
"""

from __future__ import annotations

from delve.core.logging import get_logger
from delve.data.tables import SpellTemplate
from delve.engine.combat import kill_monster
from delve.engine.context import GameContext
from delve.models.dungeon import Position
from delve.models.entities import EntityHandle, Monster
from delve.models.enums import Facing, SpellKind
from delve.models.events import SpellCastEvent


logger = get_logger(__name__)


def spell_damage(spell: SpellTemplate, intelligence: int) -> int:
    """Damage of an offensive spell, never below 1."""
    return max(1, spell.damage + int(intelligence * spell.int_scale))


def cast_spell(ctx: GameContext, spell_key: str) -> bool:
    """Cast a spell by key.

    Cooldown and mana are checked first. Offensive casts that find nothing
    to hit refund both.

    Args:
        ctx: Game context.
        spell_key: Spell table key.

    Returns:
        True if the spell took effect.
    """
    spell = ctx.tables.spells.get(spell_key)
    if spell is None:
        logger.warning("Unknown spell ignored", spell=spell_key)
        return False

    character = ctx.state.character
    remaining = character.spell_cooldowns.get(spell.key, 0)
    if remaining > 0:
        ctx.log(f"{spell.name} is on cooldown ({remaining} turns)")
        return False
    if character.mp < spell.mp_cost:
        ctx.log(f"Not enough mana for {spell.name}!")
        return False

    character.mp -= spell.mp_cost
    character.spell_cooldowns[spell.key] = spell.cooldown

    kind = SpellKind(spell.kind)
    if kind == SpellKind.SELF:
        return _cast_heal(ctx, spell)
    if kind == SpellKind.AOE:
        return _cast_area(ctx, spell)
    if kind == SpellKind.LINE:
        return _cast_line(ctx, spell)
    return _cast_nova(ctx, spell)


def _cast_heal(ctx: GameContext, spell: SpellTemplate) -> bool:
    character = ctx.state.character
    player = ctx.state.player
    amount = spell.heal_amount + int(character.stats.intelligence * spell.int_scale)
    character.heal(amount)
    ctx.log(f"You cast {spell.name} and restore {amount} HP!")
    ctx.publish(SpellCastEvent(spell=spell.key, x=player.x, y=player.y))
    return True


def _refund(ctx: GameContext, spell: SpellTemplate) -> None:
    character = ctx.state.character
    character.mp += spell.mp_cost
    character.spell_cooldowns[spell.key] = 0


def _cast_area(ctx: GameContext, spell: SpellTemplate) -> bool:
    state = ctx.state
    character = state.character
    found = state.monsters.nearest(state.player.position, spell.range)
    if found is None:
        ctx.log(f"No target in range for {spell.name}!")
        _refund(ctx, spell)
        return False

    _, target = found
    damage = spell_damage(spell, character.stats.intelligence)
    ctx.log(f"You cast {spell.name}!")
    ctx.publish(SpellCastEvent(spell=spell.key, x=target.x, y=target.y, radius=spell.radius))
    _damage_all(ctx, state.monsters.within(target.position, spell.radius), damage, spell)
    return True


def _cast_line(ctx: GameContext, spell: SpellTemplate) -> bool:
    state = ctx.state
    grid = state.grid
    player = state.player
    dx, dy = Facing(player.facing).delta

    tiles: list[tuple[int, int]] = []
    targets: list[tuple[EntityHandle, Monster]] = []
    cursor = player.position
    for _ in range(spell.range):
        cursor = cursor.offset(dx, dy)
        if not grid.in_bounds(cursor.x, cursor.y) or grid.get(cursor.x, cursor.y).blocks_sight:
            break
        tiles.append((cursor.x, cursor.y))
        found = state.monsters.at(cursor.x, cursor.y)
        if found is not None:
            targets.append(found)

    if not targets:
        ctx.log(f"No target in line for {spell.name}!")
        _refund(ctx, spell)
        return False

    damage = spell_damage(spell, state.character.stats.intelligence)
    ctx.log(f"You cast {spell.name}!")
    ctx.publish(SpellCastEvent(spell=spell.key, x=player.x, y=player.y, tiles=tuple(tiles)))
    _damage_all(ctx, targets, damage, spell)
    return True


def _cast_nova(ctx: GameContext, spell: SpellTemplate) -> bool:
    state = ctx.state
    player = state.player
    targets = state.monsters.within(Position(player.x, player.y), spell.radius)
    if not targets:
        ctx.log("No enemies nearby...")
        _refund(ctx, spell)
        return False

    damage = spell_damage(spell, state.character.stats.intelligence)
    ctx.log(f"You cast {spell.name}!")
    ctx.publish(SpellCastEvent(spell=spell.key, x=player.x, y=player.y, radius=spell.radius))
    _damage_all(ctx, targets, damage, spell)
    return True


def _damage_all(
    ctx: GameContext,
    targets: list[tuple[EntityHandle, Monster]],
    damage: int,
    spell: SpellTemplate,
) -> None:
    for handle, monster in targets:
        if not ctx.is_playing:
            return
        monster.hp -= damage
        ctx.log(f"{monster.name} takes {damage} {spell.element} damage!")
        if monster.hp <= 0:
            kill_monster(ctx, handle, monster)


__all__ = [
    "spell_damage",
    "cast_spell",
]
