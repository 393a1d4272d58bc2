"""Tests for melee, monster death and progression."""

from __future__ import annotations

from support import OPEN_ROOM, SequenceRandom, add_monster, make_context

from delve.engine.combat import (
    check_level_up,
    kill_monster,
    monster_attack,
    monster_damage,
    player_attack,
    player_damage,
)
from delve.engine.context import GameContext
from delve.models.enums import AbilityKind, GameStatus
from delve.models.events import (
    CombatEvent,
    EventBase,
    GameOverEvent,
    LevelUpEvent,
    MonsterKilledEvent,
)


def collect(ctx: GameContext) -> list[EventBase]:
    events: list[EventBase] = []
    ctx.bus.subscribe(events.append)
    return events


class TestDamageFormulas:
    """Tests for the damage formulas."""

    def test_player_damage(self) -> None:
        """Test strength, weapon and roll add up against defense."""
        assert player_damage(7, 2, 3, 1) == 11

    def test_monster_damage(self) -> None:
        """Test dexterity and armor reduce monster damage."""
        assert monster_damage(6, 2, 10, 2) == 3

    def test_minimum_damage(self) -> None:
        """Test hits always deal at least 1."""
        assert player_damage(1, 0, 0, 50) == 1
        assert monster_damage(0, 0, 30, 10) == 1


class TestPlayerAttack:
    """Tests for player bump attacks."""

    def test_hit(self, room_context: GameContext) -> None:
        """Test a non-lethal hit."""
        events = collect(room_context)
        handle, goblin = add_monster(room_context, "goblin", 5, 3)

        damage = player_attack(room_context, handle, goblin)

        # 7 strength + 6 roll - 1 defense
        assert damage == 12
        assert goblin.hp == 3
        assert room_context.messages.last == "You hit Goblin for 12 damage!"
        combat = [event for event in events if isinstance(event, CombatEvent)]
        assert combat[0].combat_kind == "melee"
        assert combat[0].defender == handle.ref

    def test_kill(self, room_context: GameContext) -> None:
        """Test a lethal hit grants XP and frees the slot."""
        events = collect(room_context)
        handle, goblin = add_monster(room_context, "goblin", 5, 3, hp=5)

        player_attack(room_context, handle, goblin)

        character = room_context.state.character
        assert character.xp == 12
        assert character.kills == 1
        assert len(room_context.state.monsters) == 0
        assert room_context.state.items == []
        assert any(isinstance(event, MonsterKilledEvent) for event in events)


class TestKillMonster:
    """Tests for death handling."""

    def test_drop(self) -> None:
        """Test a successful drop roll leaves an item on the monster's tile."""
        ctx = make_context(OPEN_ROOM, player=(4, 3), rng=SequenceRandom([0.1, 0.1]))
        handle, goblin = add_monster(ctx, "goblin", 6, 2)

        kill_monster(ctx, handle, goblin)

        assert len(ctx.state.items) == 1
        assert ctx.state.items[0].position == (6, 2)
        assert "Goblin dropped Bubbly Potion!" in ctx.messages.messages()

    def test_level_up(self, room_context: GameContext) -> None:
        """Test crossing an XP threshold raises level and refills pools."""
        events = collect(room_context)
        character = room_context.state.character
        character.xp = 15
        character.hp = 10
        handle, goblin = add_monster(room_context, "goblin", 5, 3)

        kill_monster(room_context, handle, goblin)

        assert character.level == 2
        assert character.max_hp == character.hp == 52
        assert character.max_mp == 7
        assert (character.stats.strength, character.stats.dexterity, character.stats.intelligence) == (8, 6, 3)
        assert character.xp_to_next == 50
        assert [event.level for event in events if isinstance(event, LevelUpEvent)] == [2]

    def test_multiple_levels_at_once(self, room_context: GameContext) -> None:
        """Test a large XP gain applies every level it covers."""
        room_context.state.character.xp = 60

        assert check_level_up(room_context) == 2
        assert room_context.state.character.level == 3

    def test_final_boss_wins(self) -> None:
        """Test slaying a boss on the final depth wins the game."""
        ctx = make_context(OPEN_ROOM, player=(4, 3), rng=SequenceRandom(), depth=15, max_depth=15)
        events = collect(ctx)
        handle, boss = add_monster(ctx, "morgoth", 5, 3)

        kill_monster(ctx, handle, boss)

        assert ctx.state.status == GameStatus.WON
        assert ctx.messages.last == f"Victory! You have vanquished {boss.name}!"
        game_over = [event for event in events if isinstance(event, GameOverEvent)]
        assert len(game_over) == 1
        assert game_over[0].status == "won"

    def test_boss_above_final_depth(self) -> None:
        """Test bosses on earlier depths do not end the game."""
        ctx = make_context(OPEN_ROOM, player=(4, 3), rng=SequenceRandom(), depth=3)
        handle, boss = add_monster(ctx, "orc_king", 5, 3)

        kill_monster(ctx, handle, boss)

        assert ctx.state.status == GameStatus.PLAYING


class TestMonsterAttack:
    """Tests for monster melee."""

    def test_hit(self, room_context: GameContext) -> None:
        """Test a monster hit reduces hit points."""
        events = collect(room_context)
        handle, goblin = add_monster(room_context, "goblin", 5, 3)

        damage = monster_attack(room_context, handle, goblin)

        # 4 attack + 2 roll - 1 from dexterity
        assert damage == 5
        assert room_context.state.character.hp == 40
        assert room_context.messages.last == "Goblin hits you for 5 damage!"
        combat = [event for event in events if isinstance(event, CombatEvent)]
        assert combat[0].combat_kind == "monster_attack"

    def test_drain_heals_attacker(self) -> None:
        """Test a draining hit heals the monster by half the damage."""
        ctx = make_context(OPEN_ROOM, player=(4, 3), rng=SequenceRandom([0.99, 0.1]))
        handle, monster = add_monster(ctx, "goblin", 5, 3, hp=5, ability=AbilityKind.DRAIN)

        monster_attack(ctx, handle, monster)

        assert monster.hp == 7
        assert ctx.messages.last == "Goblin drains your life!"

    def test_paralyze_empties_energy(self) -> None:
        """Test a paralysing hit resets the player's energy."""
        ctx = make_context(OPEN_ROOM, player=(4, 3), rng=SequenceRandom([0.0, 0.1]))
        ctx.state.character.energy = 100
        handle, monster = add_monster(ctx, "goblin", 5, 3, ability=AbilityKind.PARALYZE)

        monster_attack(ctx, handle, monster)

        assert ctx.state.character.energy == 0
        assert ctx.state.character.hp == 42

    def test_lethal_hit(self, room_context: GameContext) -> None:
        """Test the player dies at zero hit points."""
        room_context.state.character.hp = 3
        handle, goblin = add_monster(room_context, "goblin", 5, 3)

        monster_attack(room_context, handle, goblin)

        assert room_context.state.status == GameStatus.DEAD
        assert room_context.state.character.hp == 0
        assert room_context.messages.last == "You have been slain..."
