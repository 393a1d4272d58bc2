"""Tests for actor models and the monster arena."""

from __future__ import annotations

import pytest

from delve.core.exceptions import EntityNotFoundError
from delve.models import (
    AIState,
    EntityArena,
    EntityHandle,
    Facing,
    Monster,
    MonsterArena,
    Player,
    Position,
)


def make_goblin(x: int = 0, y: int = 0, **overrides: object) -> Monster:
    data: dict[str, object] = {
        "key": "goblin",
        "name": "Goblin",
        "symbol": "g",
        "x": x,
        "y": y,
        "hp": 15,
        "max_hp": 15,
        "atk": 4,
        "defense": 1,
        "xp": 12,
        "speed": 10,
    }
    data.update(overrides)
    return Monster(**data)


class TestMonster:
    """Tests for the Monster model."""

    def test_defaults(self) -> None:
        """Test a fresh monster wanders with no energy."""
        monster = make_goblin()
        assert monster.ai_state == AIState.WANDER
        assert monster.energy == 0
        assert monster.ability is None
        assert monster.is_alive

    def test_enum_values_stored_as_strings(self) -> None:
        """Test enum fields serialise as plain values."""
        monster = make_goblin(ai_state=AIState.CHASE)
        assert monster.model_dump()["ai_state"] == "chase"

    def test_position_and_move(self) -> None:
        """Test moving updates the position."""
        monster = make_goblin(2, 3)
        monster.move_to(4, 5)
        assert monster.position == Position(4, 5)

    def test_dead_when_out_of_hp(self) -> None:
        """Test is_alive tracks hit points."""
        monster = make_goblin(hp=0)
        assert not monster.is_alive


class TestPlayer:
    """Tests for the Player model."""

    @pytest.mark.parametrize(
        "dx,dy,facing",
        [
            (1, 0, Facing.EAST),
            (-1, 0, Facing.WEST),
            (0, 1, Facing.SOUTH),
            (0, -1, Facing.NORTH),
            (1, 1, Facing.SOUTH),
            (-1, -1, Facing.NORTH),
        ],
    )
    def test_face(self, dx: int, dy: int, facing: Facing) -> None:
        """Test facing follows the step, vertical winning on diagonals."""
        player = Player(facing=Facing.WEST if facing != Facing.WEST else Facing.EAST)
        player.face(dx, dy)
        assert player.facing == facing

    def test_face_ignores_zero_step(self) -> None:
        """Test a zero step keeps the current facing."""
        player = Player(facing=Facing.EAST)
        player.face(0, 0)
        assert player.facing == Facing.EAST

    def test_facing_delta(self) -> None:
        """Test facing deltas."""
        assert Facing(Facing.NORTH).delta == (0, -1)
        assert Facing(Facing.EAST).delta == (1, 0)


class TestEntityArena:
    """Tests for generational arena storage."""

    def test_insert_and_get(self) -> None:
        """Test inserting returns a resolvable handle."""
        arena: EntityArena[str] = EntityArena()
        handle = arena.insert("a")
        assert handle == EntityHandle(0, 0)
        assert arena.get(handle) == "a"
        assert len(arena) == 1

    def test_stale_handle_detected(self) -> None:
        """Test reused slots reject old handles."""
        arena: EntityArena[str] = EntityArena()
        old = arena.insert("a")
        arena.remove(old)
        new = arena.insert("b")

        assert new.index == old.index
        assert new.generation == old.generation + 1
        assert arena.lookup(old) is None
        with pytest.raises(EntityNotFoundError):
            arena.get(old)

    def test_remove_twice_raises(self) -> None:
        """Test removing a freed slot raises."""
        arena: EntityArena[str] = EntityArena()
        handle = arena.insert("a")
        arena.remove(handle)
        with pytest.raises(EntityNotFoundError):
            arena.remove(handle)

    def test_iteration_tolerates_removal(self) -> None:
        """Test removing during iteration skips the removed entity."""
        arena: EntityArena[str] = EntityArena()
        handles = [arena.insert(name) for name in "abc"]
        seen = []
        for handle, name in arena.items():
            seen.append(name)
            if name == "a":
                arena.remove(handles[1])
        assert seen == ["a", "c"]

    def test_clear(self) -> None:
        """Test clear frees every slot and invalidates handles."""
        arena: EntityArena[str] = EntityArena()
        handle = arena.insert("a")
        arena.clear()
        assert len(arena) == 0
        assert not arena.contains(handle)

    def test_handle_ref(self) -> None:
        """Test the string form of a handle."""
        assert EntityHandle(3, 2).ref == "monster:3:2"


class TestMonsterArena:
    """Tests for positional monster queries."""

    @pytest.fixture
    def arena(self) -> MonsterArena:
        arena = MonsterArena()
        arena.insert(make_goblin(5, 5))
        arena.insert(make_goblin(7, 5, name="Far"))
        arena.insert(make_goblin(5, 6, name="Near"))
        return arena

    def test_at(self, arena: MonsterArena) -> None:
        """Test lookup by cell."""
        found = arena.at(7, 5)
        assert found is not None
        assert found[1].name == "Far"
        assert arena.at(0, 0) is None

    def test_within(self, arena: MonsterArena) -> None:
        """Test Manhattan radius query."""
        names = [monster.name for _, monster in arena.within(Position(5, 5), 1)]
        assert names == ["Goblin", "Near"]

    def test_nearest(self, arena: MonsterArena) -> None:
        """Test nearest monster in range."""
        found = arena.nearest(Position(5, 8), 4)
        assert found is not None
        assert found[1].name == "Near"

    def test_nearest_out_of_range(self, arena: MonsterArena) -> None:
        """Test nothing is returned beyond the range."""
        assert arena.nearest(Position(20, 20), 3) is None
