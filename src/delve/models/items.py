"""Item variants: potions, scrolls, equipment and legendary uniques.

Items are a pydantic discriminated union on ``category``. An item lives in
exactly one place at a time: the ground list (with a position), a
character's inventory, or an equipment slot (both without a position).
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import Field, computed_field

from delve.models.base import GameModel
from delve.models.dungeon import Position
from delve.models.enums import (
    Enchantment,
    EquipSlot,
    PotionEffect,
    Rarity,
    ScrollEffect,
)


class BaseItem(GameModel):
    """Fields shared by every item.

    Attributes:
        uid: Session-unique item id.
        key: Template key.
        x: Column while on the ground, else None.
        y: Row while on the ground, else None.
        identified: Whether the true nature is known.
    """

    uid: int = Field(ge=0)
    key: str
    x: int | None = None
    y: int | None = None
    identified: bool = True

    @property
    def position(self) -> Position | None:
        if self.x is None or self.y is None:
            return None
        return Position(self.x, self.y)

    def place(self, x: int, y: int) -> None:
        self.x = x
        self.y = y

    def lift(self) -> None:
        self.x = None
        self.y = None


class PotionItem(BaseItem):
    """A potion; shows its cosmetic appearance until its type is identified."""

    category: Literal["potion"] = "potion"
    true_name: str
    appearance: str
    color: int = 0
    effect: PotionEffect
    value: int
    identified: bool = False

    @computed_field(description="Name shown to the player")
    @property
    def display_name(self) -> str:
        if self.identified:
            return self.true_name
        return f"{self.appearance} Potion"


class ScrollItem(BaseItem):
    """A scroll. Scrolls are always identified."""

    category: Literal["scroll"] = "scroll"
    name: str
    effect: ScrollEffect

    @computed_field(description="Name shown to the player")
    @property
    def display_name(self) -> str:
        return self.name


class EquipmentItem(BaseItem):
    """Wearable gear with a hidden bonus revealed on first equip."""

    category: Literal["equipment"] = "equipment"
    base_name: str
    slot: EquipSlot
    atk: int = 0
    defense: int = 0
    bonus: int = 0
    enchantment: Enchantment = Enchantment.NORMAL
    rarity: Rarity = Rarity.COMMON
    identified: bool = False

    @computed_field(description="Name shown to the player")
    @property
    def display_name(self) -> str:
        if self.identified and self.bonus != 0:
            return f"{self.base_name} ({self.bonus:+d})"
        return self.base_name


class LegendaryItem(BaseItem):
    """A named unique. Always identified, never enchanted or cursed."""

    category: Literal["legendary"] = "legendary"
    name: str
    slot: EquipSlot
    atk: int = 0
    defense: int = 0
    bonus: int = 0
    enchantment: Enchantment = Enchantment.NORMAL
    rarity: Rarity = Rarity.LEGENDARY
    special: str | None = None
    description: str = ""

    @computed_field(description="Name shown to the player")
    @property
    def display_name(self) -> str:
        return f"★ {self.name}"


Item = Annotated[
    PotionItem | ScrollItem | EquipmentItem | LegendaryItem,
    Field(discriminator="category"),
]

Wearable = EquipmentItem | LegendaryItem


__all__ = [
    "BaseItem",
    "PotionItem",
    "ScrollItem",
    "EquipmentItem",
    "LegendaryItem",
    "Item",
    "Wearable",
]
