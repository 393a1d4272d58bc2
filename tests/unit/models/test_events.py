"""Tests for event models and parsing."""

from __future__ import annotations

import pytest
from pydantic import ValidationError as PydanticValidationError

from delve.models import (
    KNOWN_EVENT_KINDS,
    CombatEvent,
    DoorOpenEvent,
    EventKind,
    GameOverEvent,
    TickEvent,
    UnknownEvent,
    parse_event,
)


class TestParseEvent:
    """Tests for parse_event."""

    def test_known_kind(self) -> None:
        """Test known tags produce typed events."""
        event = parse_event({"kind": "door_open", "x": 4, "y": 7})

        assert isinstance(event, DoorOpenEvent)
        assert (event.x, event.y) == (4, 7)

    def test_combat_kind_field(self) -> None:
        """Test the combat sub-kind does not clash with the event tag."""
        event = parse_event(
            {
                "kind": "combat",
                "combat_kind": "melee",
                "attacker": "player",
                "defender": "monster:0:0",
                "damage": 6,
            }
        )

        assert isinstance(event, CombatEvent)
        assert event.kind == "combat"
        assert event.combat_kind == "melee"

    def test_unknown_kind(self) -> None:
        """Test unrecognised tags are preserved as UnknownEvent."""
        event = parse_event({"kind": "weather", "rain": True})

        assert isinstance(event, UnknownEvent)
        assert event.kind == "weather"
        assert event.payload == {"rain": True}

    def test_missing_kind(self) -> None:
        """Test a mapping without a tag is unknown."""
        event = parse_event({"x": 1})

        assert isinstance(event, UnknownEvent)
        assert event.kind == ""

    def test_bad_payload_raises(self) -> None:
        """Test known tags still validate their payload."""
        with pytest.raises(PydanticValidationError):
            parse_event({"kind": "tick", "tick": "soon"})


class TestEventModels:
    """Tests for event model behaviour."""

    def test_events_are_frozen(self) -> None:
        """Test published events cannot be mutated."""
        event = TickEvent(tick=3, depth=1)
        with pytest.raises(PydanticValidationError):
            event.tick = 4  # type: ignore[misc]

    def test_game_over_summary(self) -> None:
        """Test the game-over event carries the run summary."""
        event = GameOverEvent(status="won", depth=15, character_level=9, xp=800, kills=40)
        assert event.model_dump()["kind"] == "game_over"

    def test_known_kinds_match_enum(self) -> None:
        """Test every event kind is registered."""
        assert KNOWN_EVENT_KINDS == {kind.value for kind in EventKind}
        assert "combat" in KNOWN_EVENT_KINDS
