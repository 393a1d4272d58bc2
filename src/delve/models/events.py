"""Published game events.

Every event is a frozen pydantic model tagged by ``kind``. ``GameEvent`` is
the closed union of known kinds; ``parse_event`` maps unrecognised tags to
``UnknownEvent`` so consumers written against a newer event set keep
working.

Example:
    >>> event = parse_event({"kind": "door_open", "x": 4, "y": 7})
    >>> event.kind
    'door_open'
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from delve.models.enums import EventKind


class EventBase(BaseModel):
    """Base class for all events."""

    model_config = ConfigDict(frozen=True, extra="ignore")


class TickEvent(EventBase):
    """A turn settled; state is consistent and visibility is fresh."""

    kind: Literal["tick"] = "tick"
    tick: int
    depth: int


class LevelChangeEvent(EventBase):
    kind: Literal["level_change"] = "level_change"
    level: int
    theme: str


class SpellCastEvent(EventBase):
    """A spell resolved. ``tiles`` is filled for line spells."""

    kind: Literal["spell_cast"] = "spell_cast"
    spell: str
    x: int
    y: int
    radius: int = 0
    tiles: tuple[tuple[int, int], ...] = ()


class MonsterKilledEvent(EventBase):
    kind: Literal["monster_killed"] = "monster_killed"
    monster: str = Field(description="Handle reference of the dead monster")
    monster_key: str
    xp: int


class CombatEvent(EventBase):
    """One melee hit in either direction."""

    kind: Literal["combat"] = "combat"
    combat_kind: Literal["melee", "monster_attack"]
    attacker: str
    defender: str
    damage: int


class DoorOpenEvent(EventBase):
    kind: Literal["door_open"] = "door_open"
    x: int
    y: int


class SecretFoundEvent(EventBase):
    kind: Literal["secret_found"] = "secret_found"
    x: int
    y: int


class TrapTriggeredEvent(EventBase):
    kind: Literal["trap_triggered"] = "trap_triggered"
    x: int
    y: int
    trap: str


class MagicMapEvent(EventBase):
    kind: Literal["magic_map"] = "magic_map"


class TeleportEvent(EventBase):
    kind: Literal["teleport"] = "teleport"
    x: int
    y: int


class ItemPickupEvent(EventBase):
    kind: Literal["item_pickup"] = "item_pickup"
    item: str
    uid: int


class InventoryChangeEvent(EventBase):
    kind: Literal["inventory_change"] = "inventory_change"
    size: int = 0


class LevelUpEvent(EventBase):
    kind: Literal["level_up"] = "level_up"
    level: int


class LogEvent(EventBase):
    kind: Literal["log"] = "log"
    message: str
    tick: int = 0


class GameOverEvent(EventBase):
    """Terminal outcome with a summary of the run."""

    kind: Literal["game_over"] = "game_over"
    status: Literal["dead", "won"]
    depth: int
    character_level: int
    xp: int
    kills: int


class UnknownEvent(EventBase):
    """Fallback for tags this version does not know."""

    kind: str
    payload: dict[str, Any] = Field(default_factory=dict)


GameEvent = Annotated[
    TickEvent
    | LevelChangeEvent
    | SpellCastEvent
    | MonsterKilledEvent
    | CombatEvent
    | DoorOpenEvent
    | SecretFoundEvent
    | TrapTriggeredEvent
    | MagicMapEvent
    | TeleportEvent
    | ItemPickupEvent
    | InventoryChangeEvent
    | LevelUpEvent
    | LogEvent
    | GameOverEvent,
    Field(discriminator="kind"),
]

KNOWN_EVENT_KINDS: frozenset[str] = frozenset(kind.value for kind in EventKind)

_event_adapter: TypeAdapter[Any] = TypeAdapter(GameEvent)


def parse_event(data: Mapping[str, Any]) -> EventBase:
    """Build an event from a plain mapping.

    Args:
        data: Mapping with a ``kind`` tag and payload fields.

    Returns:
        The typed event, or an UnknownEvent for unrecognised tags.
    """
    kind = str(data.get("kind", ""))
    if kind not in KNOWN_EVENT_KINDS:
        payload = {key: value for key, value in data.items() if key != "kind"}
        return UnknownEvent(kind=kind, payload=payload)
    return _event_adapter.validate_python(dict(data))


__all__ = [
    "EventBase",
    "TickEvent",
    "LevelChangeEvent",
    "SpellCastEvent",
    "MonsterKilledEvent",
    "CombatEvent",
    "DoorOpenEvent",
    "SecretFoundEvent",
    "TrapTriggeredEvent",
    "MagicMapEvent",
    "TeleportEvent",
    "ItemPickupEvent",
    "InventoryChangeEvent",
    "LevelUpEvent",
    "LogEvent",
    "GameOverEvent",
    "UnknownEvent",
    "GameEvent",
    "KNOWN_EVENT_KINDS",
    "parse_event",
]
