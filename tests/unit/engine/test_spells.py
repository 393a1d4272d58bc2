"""Tests for spell casting."""

from __future__ import annotations

import pytest

from support import SequenceRandom, add_monster, make_context

from delve.data.tables import GameTables, SpellTemplate
from delve.engine.context import GameContext
from delve.engine.spells import cast_spell, spell_damage
from delve.models.enums import Facing, SpellKind
from delve.models.events import EventBase, SpellCastEvent


@pytest.fixture
def caster(room_context: GameContext) -> GameContext:
    """Room context with a full mana pool and the player facing east."""
    room_context.state.character.mp = 40
    room_context.state.character.max_mp = 40
    room_context.state.player.facing = Facing.EAST
    return room_context


def collect(ctx: GameContext) -> list[EventBase]:
    events: list[EventBase] = []
    ctx.bus.subscribe(events.append)
    return events


class TestSpellDamage:
    """Tests for spell damage scaling."""

    def test_intelligence_scaling(self, tables: GameTables) -> None:
        """Test intelligence adds a scaled bonus."""
        assert spell_damage(tables.spell("fireball"), 10) == 23

    def test_floor_of_one(self) -> None:
        """Test harmless spells still deal 1 damage."""
        spell = SpellTemplate(key="spark", name="Spark", kind=SpellKind.AOE, mp_cost=0, cooldown=0)
        assert spell_damage(spell, 0) == 1


class TestCastGuards:
    """Tests for cooldown and mana checks."""

    def test_unknown_spell(self, caster: GameContext) -> None:
        """Test unknown keys are ignored."""
        assert cast_spell(caster, "meteor") is False

    def test_not_enough_mana(self, room_context: GameContext) -> None:
        """Test a cast needs the full mana cost."""
        assert cast_spell(room_context, "fireball") is False
        assert room_context.state.character.mp == 7
        assert room_context.messages.last == "Not enough mana for Fireball!"

    def test_on_cooldown(self, caster: GameContext) -> None:
        """Test a spell on cooldown cannot be cast."""
        caster.state.character.spell_cooldowns["heal"] = 2

        assert cast_spell(caster, "heal") is False
        assert caster.messages.last == "Heal is on cooldown (2 turns)"
        assert caster.state.character.mp == 40


class TestHeal:
    """Tests for the self-targeted heal."""

    def test_heal(self, caster: GameContext) -> None:
        """Test heal restores hit points and starts the cooldown."""
        character = caster.state.character
        character.hp = 20

        assert cast_spell(caster, "heal") is True

        # 20 base + int(2 intelligence * 1.5)
        assert character.hp == 43
        assert character.mp == 34
        assert character.spell_cooldowns["heal"] == 2
        assert caster.messages.last == "You cast Heal and restore 23 HP!"


class TestFireball:
    """Tests for the area spell."""

    def test_no_target_refunds(self, caster: GameContext) -> None:
        """Test casting with nothing in range costs nothing."""
        assert cast_spell(caster, "fireball") is False

        character = caster.state.character
        assert character.mp == 40
        assert character.spell_cooldowns["fireball"] == 0
        assert caster.messages.last == "No target in range for Fireball!"

    def test_splash_around_nearest(self, caster: GameContext) -> None:
        """Test the blast centres on the nearest monster."""
        events = collect(caster)
        _, target = add_monster(caster, "goblin", 6, 3, hp=30)
        _, neighbour = add_monster(caster, "goblin", 7, 3, hp=30)
        _, bystander = add_monster(caster, "goblin", 6, 5, hp=30)

        assert cast_spell(caster, "fireball") is True

        # 15 base + int(2 intelligence * 0.8)
        assert target.hp == 14
        assert neighbour.hp == 14
        assert bystander.hp == 30
        cast = [event for event in events if isinstance(event, SpellCastEvent)]
        assert (cast[0].x, cast[0].y, cast[0].radius) == (6, 3, 1)

    def test_kills_grant_xp(self, caster: GameContext) -> None:
        """Test spell kills count like melee kills."""
        add_monster(caster, "rat", 5, 3)

        cast_spell(caster, "fireball")

        assert caster.state.character.kills == 1
        assert len(caster.state.monsters) == 0


class TestLightning:
    """Tests for the line spell."""

    def test_line_hits_every_monster(self, caster: GameContext) -> None:
        """Test the bolt passes through monsters until a wall."""
        events = collect(caster)
        _, first = add_monster(caster, "goblin", 6, 3, hp=40)
        _, second = add_monster(caster, "goblin", 8, 3, hp=40)

        assert cast_spell(caster, "lightning") is True

        assert first.hp == 16
        assert second.hp == 16
        cast = [event for event in events if isinstance(event, SpellCastEvent)]
        assert cast[0].tiles == ((5, 3), (6, 3), (7, 3), (8, 3))

    def test_walls_stop_the_bolt(self) -> None:
        """Test the bolt ends at the first sight blocker."""
        ctx = make_context(
            ["##########", "#...#....#", "##########"],
            player=(1, 1),
            rng=SequenceRandom(),
        )
        ctx.state.character.mp = 40
        ctx.state.player.facing = Facing.EAST
        _, hidden = add_monster(ctx, "goblin", 6, 1)

        assert cast_spell(ctx, "lightning") is False

        assert hidden.hp == hidden.max_hp
        assert ctx.state.character.mp == 40

    def test_empty_line_refunds(self, caster: GameContext) -> None:
        """Test a bolt with nothing in its path costs nothing."""
        assert cast_spell(caster, "lightning") is False

        character = caster.state.character
        assert character.mp == 40
        assert character.spell_cooldowns["lightning"] == 0
        assert caster.messages.last == "No target in line for Lightning Bolt!"

    def test_follows_facing(self, caster: GameContext) -> None:
        """Test the bolt travels the way the player faces."""
        caster.state.player.facing = Facing.NORTH
        _, east = add_monster(caster, "goblin", 6, 3, hp=40)
        _, north = add_monster(caster, "goblin", 4, 1, hp=40)

        cast_spell(caster, "lightning")

        assert east.hp == 40
        assert north.hp == 16


class TestFrostNova:
    """Tests for the nova spell."""

    def test_radius(self, caster: GameContext) -> None:
        """Test the nova reaches two tiles around the player."""
        _, near = add_monster(caster, "goblin", 5, 4, hp=30)
        _, far = add_monster(caster, "goblin", 7, 3, hp=30)

        assert cast_spell(caster, "frost_nova") is True

        # 12 base + int(2 intelligence * 0.6)
        assert near.hp == 17
        assert far.hp == 30

    def test_no_enemies_refunds(self, caster: GameContext) -> None:
        """Test an empty nova costs neither mana nor cooldown."""
        events = collect(caster)

        assert cast_spell(caster, "frost_nova") is False

        character = caster.state.character
        assert character.mp == 40
        assert character.spell_cooldowns["frost_nova"] == 0
        assert caster.messages.last == "No enemies nearby..."
        assert not any(isinstance(event, SpellCastEvent) for event in events)
