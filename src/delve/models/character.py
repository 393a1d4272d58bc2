"""The player's persistent character record."""

from __future__ import annotations

from pydantic import Field, computed_field

from delve.models.base import GameModel
from delve.models.enums import EquipSlot
from delve.models.items import Item, Wearable


class CharacterStats(GameModel):
    """Base combat stats."""

    strength: int = Field(default=5, ge=0)
    dexterity: int = Field(default=5, ge=0)
    intelligence: int = Field(default=5, ge=0)


class Equipment(GameModel):
    """Worn items, one per slot."""

    weapon: Wearable | None = None
    armor: Wearable | None = None
    ring: Wearable | None = None

    def in_slot(self, slot: EquipSlot | str) -> Wearable | None:
        return getattr(self, EquipSlot(slot).value)

    def put(self, slot: EquipSlot | str, item: Wearable | None) -> Wearable | None:
        """Place ``item`` in ``slot`` and return whatever was there."""
        slot_name = EquipSlot(slot).value
        previous = getattr(self, slot_name)
        setattr(self, slot_name, item)
        return previous

    def worn(self) -> list[Wearable]:
        return [item for item in (self.weapon, self.armor, self.ring) if item is not None]


class Character(GameModel):
    """Stats, pools, progression and belongings of the player.

    Created once per session from a race and class; mutated throughout play.
    """

    name: str = "Wanderer"
    race_key: str
    race_name: str
    class_key: str
    class_name: str

    level: int = Field(default=1, ge=1)
    xp: int = Field(default=0, ge=0)
    xp_to_next: int = Field(ge=0)
    kills: int = Field(default=0, ge=0)

    hp: int
    max_hp: int = Field(ge=1)
    mp: int = Field(ge=0)
    max_mp: int = Field(ge=0)

    energy: int = 0
    speed: int = Field(default=10, ge=0)

    stats: CharacterStats = Field(default_factory=CharacterStats)
    spell_cooldowns: dict[str, int] = Field(default_factory=dict)
    inventory: list[Item] = Field(default_factory=list)
    equipment: Equipment = Field(default_factory=Equipment)

    @computed_field(description="Whether the character has died")
    @property
    def is_dead(self) -> bool:
        return self.hp <= 0

    @property
    def weapon_attack(self) -> int:
        weapon = self.equipment.weapon
        return weapon.atk if weapon is not None else 0

    @property
    def armor_defense(self) -> int:
        """Defense from worn armor and ring."""
        total = 0
        for item in (self.equipment.armor, self.equipment.ring):
            if item is not None:
                total += item.defense
        return total

    def heal(self, amount: int) -> int:
        """Restore hit points up to the maximum and return the amount gained."""
        if amount <= 0:
            return 0
        gained = min(amount, max(0, self.max_hp - self.hp))
        self.hp += gained
        return gained

    def restore_mana(self, amount: int) -> int:
        if amount <= 0:
            return 0
        gained = min(amount, max(0, self.max_mp - self.mp))
        self.mp += gained
        return gained

    def take_damage(self, amount: int) -> int:
        """Subtract hit points; may drop below zero until death is resolved."""
        self.hp -= amount
        return amount

    def tick_cooldowns(self) -> None:
        for key, remaining in self.spell_cooldowns.items():
            if remaining > 0:
                self.spell_cooldowns[key] = remaining - 1


__all__ = [
    "CharacterStats",
    "Equipment",
    "Character",
]
