"""Tests for monster behaviour."""

from __future__ import annotations

from support import CORRIDOR, OPEN_ROOM, SequenceRandom, add_monster, make_context

from delve.engine.ai import monster_step, summon
from delve.engine.context import GameContext
from delve.models.enums import AIState


class TestWander:
    """Tests for wandering monsters."""

    def test_notices_visible_player(self, room_context: GameContext) -> None:
        """Test a wanderer in view and in range starts chasing at once."""
        handle, rat = add_monster(room_context, "rat", 6, 3)

        monster_step(room_context, handle, rat)

        assert rat.ai_state == AIState.CHASE
        assert rat.position == (5, 3)

    def test_far_wanderer_may_stay_put(self) -> None:
        """Test a failed wander roll keeps the monster in place."""
        ctx = make_context(CORRIDOR, player=(1, 1), rng=SequenceRandom())
        handle, rat = add_monster(ctx, "rat", 10, 1)

        monster_step(ctx, handle, rat)

        assert rat.ai_state == AIState.WANDER
        assert rat.position == (10, 1)

    def test_far_wanderer_steps(self) -> None:
        """Test a successful wander roll takes an orthogonal step."""
        ctx = make_context(CORRIDOR, player=(1, 1), rng=SequenceRandom([0.1, 0.99]))
        handle, rat = add_monster(ctx, "rat", 10, 1)

        monster_step(ctx, handle, rat)

        assert rat.ai_state == AIState.WANDER
        assert rat.position == (11, 1)

    def test_unseen_wanderer_ignores_player(self) -> None:
        """Test a nearby wanderer outside the visible area keeps wandering."""
        ctx = make_context(
            ["##########", "#...#....#", "##########"],
            player=(1, 1),
            rng=SequenceRandom(),
        )
        handle, rat = add_monster(ctx, "rat", 5, 1)

        monster_step(ctx, handle, rat)

        assert rat.ai_state == AIState.WANDER


class TestChase:
    """Tests for chasing monsters."""

    def test_adjacent_attacks(self, room_context: GameContext) -> None:
        """Test an adjacent chaser attacks instead of moving."""
        handle, goblin = add_monster(room_context, "goblin", 5, 3)

        monster_step(room_context, handle, goblin)

        assert goblin.position == (5, 3)
        assert room_context.state.character.hp == 40

    def test_closes_larger_gap_first(self, room_context: GameContext) -> None:
        """Test the step follows the axis with the larger distance."""
        handle, goblin = add_monster(room_context, "goblin", 5, 1)

        monster_step(room_context, handle, goblin)

        assert goblin.position == (5, 2)

    def test_ties_go_to_x(self, room_context: GameContext) -> None:
        """Test equal gaps step horizontally."""
        handle, goblin = add_monster(room_context, "goblin", 6, 5)

        monster_step(room_context, handle, goblin)

        assert goblin.position == (5, 5)

    def test_blocked_axis_falls_back(self, room_context: GameContext) -> None:
        """Test a blocked primary step tries the other axis."""
        handle, goblin = add_monster(room_context, "goblin", 6, 5)
        add_monster(room_context, "kobold", 5, 5)

        monster_step(room_context, handle, goblin)

        assert goblin.position == (6, 4)

    def test_never_steps_onto_player(self) -> None:
        """Test chasers in a dead end stay put."""
        ctx = make_context(CORRIDOR, player=(3, 1), rng=SequenceRandom())
        handle, goblin = add_monster(ctx, "goblin", 5, 1)
        add_monster(ctx, "kobold", 4, 1)

        monster_step(ctx, handle, goblin)

        assert goblin.position == (5, 1)


class TestAbilities:
    """Tests for ranged monster abilities."""

    def test_teleport_player(self) -> None:
        """Test a teleporter can send the player away."""
        ctx = make_context(OPEN_ROOM, player=(4, 3), rng=SequenceRandom([0.05]))
        ctx.travel.start_run(1, 0)
        handle, elf = add_monster(ctx, "dark_elf", 6, 3)

        monster_step(ctx, handle, elf)

        assert ctx.state.player.position == (8, 5)
        assert not ctx.travel.active
        assert "Dark Elf teleports you away!" in ctx.messages.messages()

    def test_summon(self) -> None:
        """Test a summoner calls a chasing ally to its side."""
        ctx = make_context(OPEN_ROOM, player=(4, 3), rng=SequenceRandom([0.01]))
        handle, imp = add_monster(ctx, "demon_imp", 7, 3)

        monster_step(ctx, handle, imp)

        assert len(ctx.state.monsters) == 2
        found = ctx.state.monsters.at(7, 4)
        assert found is not None
        assert found[1].key == "goblin"
        assert found[1].ai_state == AIState.CHASE
        assert ctx.messages.last == "Demon Imp summons a Goblin!"

    def test_summon_with_no_room(self) -> None:
        """Test a surrounded summoner summons nothing."""
        ctx = make_context(CORRIDOR, player=(1, 1), rng=SequenceRandom())
        _, imp = add_monster(ctx, "demon_imp", 6, 1)
        add_monster(ctx, "rat", 5, 1)
        add_monster(ctx, "rat", 7, 1)

        assert summon(ctx, imp) is None
        assert len(ctx.state.monsters) == 3
