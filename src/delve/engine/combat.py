"""Melee resolution, monster death and character progression.

Damage is always at least 1. Monster deaths grant XP, may drop loot, free
the arena slot and can win the game when the final boss falls.
"""

from __future__ import annotations

import math

from delve.core.logging import get_logger
from delve.engine.context import GameContext
from delve.engine.rng import below, chance
from delve.models.entities import PLAYER_REF, EntityHandle, Monster
from delve.models.enums import AbilityKind, GameStatus
from delve.models.events import CombatEvent, LevelUpEvent, MonsterKilledEvent


logger = get_logger(__name__)

BOSS_DROP_CHANCE = 0.9
DROP_CHANCE = 0.35
DRAIN_CHANCE = 0.3
PARALYZE_CHANCE = 0.2


def player_damage(strength: int, weapon_attack: int, roll: int, defense: int) -> int:
    """Damage of a player hit before any randomness is applied."""
    return max(1, strength + weapon_attack + roll - defense)


def monster_damage(attack: int, roll: int, dexterity: int, armor_defense: int) -> int:
    """Damage of a monster hit after dexterity and armor mitigation."""
    return max(1, attack + roll - int(dexterity * 0.3) - armor_defense)


def player_attack(ctx: GameContext, handle: EntityHandle, monster: Monster) -> int:
    """Resolve a player bump attack.

    Args:
        ctx: Game context.
        handle: Arena handle of the target.
        monster: The target.

    Returns:
        Damage dealt.
    """
    character = ctx.state.character
    strength = character.stats.strength
    damage = player_damage(
        strength,
        character.weapon_attack,
        below(ctx.rng, strength),
        monster.defense,
    )
    monster.hp -= damage
    ctx.log(f"You hit {monster.name} for {damage} damage!")
    ctx.publish(
        CombatEvent(combat_kind="melee", attacker=PLAYER_REF, defender=handle.ref, damage=damage)
    )
    if monster.hp <= 0:
        kill_monster(ctx, handle, monster)
    return damage


def monster_attack(ctx: GameContext, handle: EntityHandle, monster: Monster) -> int:
    """Resolve a monster melee hit on the player, including on-hit abilities.

    Returns:
        Damage dealt.
    """
    character = ctx.state.character
    damage = monster_damage(
        monster.atk,
        ctx.rng.randrange(3),
        character.stats.dexterity,
        character.armor_defense,
    )
    character.take_damage(damage)
    ctx.log(f"{monster.name} hits you for {damage} damage!")
    ctx.publish(
        CombatEvent(
            combat_kind="monster_attack",
            attacker=handle.ref,
            defender=PLAYER_REF,
            damage=damage,
        )
    )

    if monster.ability == AbilityKind.DRAIN and chance(ctx.rng, DRAIN_CHANCE):
        monster.hp = min(monster.max_hp, monster.hp + int(damage * 0.5))
        ctx.log(f"{monster.name} drains your life!")
    if monster.ability == AbilityKind.PARALYZE and chance(ctx.rng, PARALYZE_CHANCE):
        ctx.log(f"{monster.name}'s gaze paralyzes you!")
        character.energy = 0

    ctx.check_player_death()
    return damage


def kill_monster(ctx: GameContext, handle: EntityHandle, monster: Monster) -> None:
    """Handle a monster's death.

    Grants XP, may drop an item on the monster's tile, frees the arena slot
    and runs level-ups. Killing a boss on the final depth wins the game.
    """
    state = ctx.state
    character = state.character
    character.xp += monster.xp
    character.kills += 1
    ctx.log(f"{monster.name} is destroyed! (+{monster.xp} XP)")
    ctx.publish(MonsterKilledEvent(monster=handle.ref, monster_key=monster.key, xp=monster.xp))
    logger.info(
        "Monster killed",
        monster=monster.key,
        xp=monster.xp,
        boss=monster.boss,
        depth=state.depth,
    )

    drop_chance = BOSS_DROP_CHANCE if monster.boss else DROP_CHANCE
    if ctx.items is not None and chance(ctx.rng, drop_chance):
        item = ctx.items.random_item(state.depth)
        if item is not None:
            item.place(monster.x, monster.y)
            state.items.append(item)
            ctx.log(f"{monster.name} dropped {item.display_name}!")

    state.monsters.remove(handle)
    check_level_up(ctx)

    if monster.boss and state.depth == state.max_depth:
        ctx.end_game(GameStatus.WON, f"Victory! You have vanquished {monster.name}!")


def check_level_up(ctx: GameContext) -> int:
    """Apply every level-up the character's XP allows.

    Returns:
        Number of levels gained.
    """
    character = ctx.state.character
    tables = ctx.tables
    race = tables.race(character.race_key)
    cls = tables.char_class(character.class_key)

    gained = 0
    while character.xp >= character.xp_to_next and character.level < len(tables.xp_table):
        character.level += 1
        character.max_hp += int(race.hp * cls.hp_mult * 0.5)
        character.max_mp += int(race.mp * cls.mp_mult * 0.4)
        character.stats.strength += math.ceil(cls.str_mult * 0.5)
        character.stats.dexterity += math.ceil(cls.dex_mult * 0.5)
        character.stats.intelligence += math.ceil(cls.int_mult * 0.5)
        character.hp = character.max_hp
        character.mp = character.max_mp
        character.xp_to_next = tables.xp_threshold(character.level) or character.xp_to_next * 2
        gained += 1

        ctx.log(f"LEVEL UP! You are now level {character.level}!")
        ctx.publish(LevelUpEvent(level=character.level))
        logger.info("Level up", level=character.level, max_hp=character.max_hp)

    return gained


__all__ = [
    "player_damage",
    "monster_damage",
    "player_attack",
    "monster_attack",
    "kill_monster",
    "check_level_up",
]
