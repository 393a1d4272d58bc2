"""Tests for energy scheduling and deferred continuations."""

from __future__ import annotations

import pytest

from delve.data.tables import GameTables
from delve.engine.population import create_character
from delve.engine.scheduler import ACTION_COST, ContinuationQueue, TurnScheduler
from delve.models.character import Character
from delve.models.entities import EntityHandle, Monster, MonsterArena


def make_monster(name: str, speed: int) -> Monster:
    return Monster(
        key=name, name=name, x=1, y=1,
        hp=5, max_hp=5, atk=1, defense=0, xp=1, speed=speed,
    )


@pytest.fixture
def character(tables: GameTables) -> Character:
    return create_character("human", "warrior", tables=tables)


class TestTurnScheduler:
    """Tests for TurnScheduler.drain."""

    def test_player_speed_sets_tick_count(self, character: Character) -> None:
        """Test a speed-10 player waits ten ticks between actions."""
        scheduler = TurnScheduler()

        result = scheduler.drain(character, MonsterArena(), lambda h, m: None, lambda: True)

        assert result.ticks == 10
        assert not result.aborted
        assert scheduler.tick == 10
        assert character.energy == ACTION_COST

    def test_monster_speed_sets_action_count(self, character: Character) -> None:
        """Test faster monsters act more often."""
        arena = MonsterArena()
        arena.insert(make_monster("slow", 10))
        arena.insert(make_monster("fast", 20))
        acted: list[str] = []

        TurnScheduler().drain(character, arena, lambda h, m: acted.append(m.name), lambda: True)

        assert acted.count("slow") == 1
        assert acted.count("fast") == 2

    def test_slot_order_within_a_tick(self, character: Character) -> None:
        """Test monsters act in arena slot order."""
        arena = MonsterArena()
        arena.insert(make_monster("first", 10))
        arena.insert(make_monster("second", 10))
        acted: list[str] = []

        TurnScheduler().drain(character, arena, lambda h, m: acted.append(m.name), lambda: True)

        assert acted == ["first", "second"]

    def test_cooldowns_tick_down(self, character: Character) -> None:
        """Test cooldowns drop by one per tick."""
        character.spell_cooldowns["fireball"] = 3

        TurnScheduler().drain(character, MonsterArena(), lambda h, m: None, lambda: True)

        assert character.spell_cooldowns["fireball"] == 0

    def test_abort_when_game_stops(self, character: Character) -> None:
        """Test the drain stops as soon as the game is no longer running."""
        arena = MonsterArena()
        arena.insert(make_monster("killer", 10))
        arena.insert(make_monster("late", 10))
        acted: list[str] = []

        result = TurnScheduler().drain(
            character,
            arena,
            lambda h, m: acted.append(m.name),
            lambda: not acted,
        )

        assert result.aborted
        assert acted == ["killer"]

    def test_removal_during_drain(self, character: Character) -> None:
        """Test a monster removed by another's action does not act."""
        arena = MonsterArena()
        arena.insert(make_monster("killer", 10))
        victim = arena.insert(make_monster("victim", 10))
        acted: list[str] = []

        def step(handle: EntityHandle, monster: Monster) -> None:
            acted.append(monster.name)
            if arena.contains(victim):
                arena.remove(victim)

        TurnScheduler().drain(character, arena, step, lambda: True)

        assert "victim" not in acted

    def test_iteration_cap(self, character: Character) -> None:
        """Test a stalled player cannot hang the drain."""
        character.speed = 0
        scheduler = TurnScheduler(max_iterations=25)

        result = scheduler.drain(character, MonsterArena(), lambda h, m: None, lambda: True)

        assert result.ticks == 25
        assert character.energy == 0


class TestContinuationQueue:
    """Tests for ContinuationQueue."""

    def test_runs_in_order(self) -> None:
        """Test steps run first in, first out."""
        queue = ContinuationQueue()
        seen: list[int] = []
        queue.defer(lambda: seen.append(1))
        queue.defer(lambda: seen.append(2))

        assert queue.run() == 2
        assert seen == [1, 2]
        assert len(queue) == 0

    def test_steps_may_enqueue_more(self) -> None:
        """Test steps deferred by a running step also run."""
        queue = ContinuationQueue()
        seen: list[int] = []

        def countdown(n: int) -> None:
            seen.append(n)
            if n > 0:
                queue.defer(lambda: countdown(n - 1))

        queue.defer(lambda: countdown(3))

        assert queue.run() == 4
        assert seen == [3, 2, 1, 0]

    def test_nested_run_is_a_no_op(self) -> None:
        """Test only the outermost run drains the queue."""
        queue = ContinuationQueue()
        nested: list[int] = []
        queue.defer(lambda: nested.append(queue.run()))

        queue.run()

        assert nested == [0]

    def test_failure_resets_running_flag(self) -> None:
        """Test a failing step does not wedge the queue."""
        queue = ContinuationQueue()

        def boom() -> None:
            raise RuntimeError("boom")

        queue.defer(boom)
        with pytest.raises(RuntimeError):
            queue.run()

        queue.defer(lambda: None)
        assert queue.run() == 1

    def test_clear(self) -> None:
        """Test clear drops pending steps."""
        queue = ContinuationQueue()
        queue.defer(lambda: None)
        queue.clear()
        assert queue.run() == 0
