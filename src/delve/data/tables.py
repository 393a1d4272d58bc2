"""Immutable catalog models for races, classes, spells, monsters and items.

Every table row is a frozen pydantic model keyed by a snake_case template
key. ``GameTables`` bundles the whole catalog; it is built once and passed
by reference into the generator, AI and itemization code.

Example:
    >>> from delve.data import default_tables
    >>> tables = default_tables()
    >>> tables.race("dwarf").hp
    14
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from delve.core.exceptions import DataTableError
from delve.models.enums import (
    AbilityKind,
    AIState,
    EquipSlot,
    PotionEffect,
    Rarity,
    ScrollEffect,
    SpellKind,
    TrapEffect,
)


class TableRow(BaseModel):
    """Base class for immutable catalog rows."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    key: str = Field(description="Template key")
    name: str = Field(description="Display name")


# =============================================================================
# Character Templates
# =============================================================================


class RaceTemplate(TableRow):
    """Base pools and stats contributed by a race."""

    hp: int
    mp: int
    strength: int
    dexterity: int
    intelligence: int
    description: str = ""


class ClassTemplate(TableRow):
    """Multipliers a class applies to racial pools and stats."""

    hp_mult: float
    mp_mult: float
    str_mult: float
    dex_mult: float
    int_mult: float
    description: str = ""


class SpellTemplate(TableRow):
    """A castable spell.

    Damage and healing scale with intelligence by ``int_scale``.
    """

    kind: SpellKind
    mp_cost: int = Field(ge=0)
    cooldown: int = Field(ge=0)
    damage: int = 0
    heal_amount: int = 0
    int_scale: float = 0.0
    range: int = 0
    radius: int = 0
    element: str = ""
    description: str = ""


# =============================================================================
# Monster and Level Templates
# =============================================================================


class MonsterTemplate(TableRow):
    """Base statistics of a monster kind before depth scaling."""

    symbol: str
    hp: int = Field(ge=1)
    atk: int = Field(ge=0)
    defense: int = Field(ge=0)
    xp: int = Field(ge=0)
    speed: int = Field(ge=0, description="Multiplied by 10 to get energy per tick")
    min_level: int = Field(ge=1)
    ai: AIState = AIState.CHASE
    ability: AbilityKind | None = None
    boss: bool = False
    description: str = ""


class LevelTheme(BaseModel):
    """Name, population density and optional boss of one depth."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    monster_density: float = Field(ge=0.0, le=1.0)
    description: str = ""
    boss_key: str | None = None


class TrapTemplate(TableRow):
    """A trap kind."""

    effect: TrapEffect
    damage: int = 0
    description: str = ""


# =============================================================================
# Item Templates
# =============================================================================


class PotionTemplate(TableRow):
    """A potion type; its true name is hidden until identified."""

    effect: PotionEffect
    value: int
    rarity: Rarity
    min_level: int = 1


class ScrollTemplate(TableRow):
    """A scroll type; scrolls are always identified."""

    effect: ScrollEffect
    rarity: Rarity
    min_level: int = 1


class EquipmentTemplate(TableRow):
    """A wearable item. Legendary items use the same shape."""

    slot: EquipSlot
    atk: int = 0
    defense: int = 0
    rarity: Rarity
    min_level: int = 1
    special: str | None = None
    description: str = ""


# =============================================================================
# Catalog
# =============================================================================


class GameTables(BaseModel):
    """The full immutable catalog.

    Attributes:
        races: Race templates by key.
        classes: Class templates by key.
        spells: Spell templates by key.
        monsters: Monster templates by key, bosses included.
        themes: Level themes, index ``depth - 1``.
        potions: Potion templates by key.
        scrolls: Scroll templates by key.
        equipment: Regular equipment templates by key.
        legendaries: Unique legendary items by key.
        traps: Trap templates by key.
        potion_appearances: Cosmetic potion descriptors.
        potion_colors: Cosmetic potion colors (RGB ints).
        xp_table: XP needed to reach each level, index = current level.
        rarity_weights: Relative generation weight per rarity.
    """

    model_config = ConfigDict(frozen=True)

    races: dict[str, RaceTemplate]
    classes: dict[str, ClassTemplate]
    spells: dict[str, SpellTemplate]
    monsters: dict[str, MonsterTemplate]
    themes: tuple[LevelTheme, ...]
    potions: dict[str, PotionTemplate]
    scrolls: dict[str, ScrollTemplate]
    equipment: dict[str, EquipmentTemplate]
    legendaries: dict[str, EquipmentTemplate]
    traps: dict[str, TrapTemplate]
    potion_appearances: tuple[str, ...]
    potion_colors: tuple[int, ...]
    xp_table: tuple[int, ...]
    rarity_weights: dict[Rarity, int]

    def race(self, key: str) -> RaceTemplate:
        return self._lookup(self.races, "races", key)

    def char_class(self, key: str) -> ClassTemplate:
        return self._lookup(self.classes, "classes", key)

    def spell(self, key: str) -> SpellTemplate:
        return self._lookup(self.spells, "spells", key)

    def monster(self, key: str) -> MonsterTemplate:
        return self._lookup(self.monsters, "monsters", key)

    def trap(self, key: str) -> TrapTemplate:
        return self._lookup(self.traps, "traps", key)

    def theme_for(self, depth: int) -> LevelTheme:
        """Theme of a depth; depths past the table reuse the first theme."""
        if 1 <= depth <= len(self.themes):
            return self.themes[depth - 1]
        return self.themes[0]

    def eligible_monsters(self, depth: int) -> list[MonsterTemplate]:
        """Non-boss monsters that may appear at ``depth``, in table order."""
        return [
            template
            for template in self.monsters.values()
            if template.min_level <= depth and not template.boss
        ]

    def rarity_weight(self, rarity: Rarity) -> int:
        return self.rarity_weights.get(rarity, 1)

    def xp_threshold(self, level: int) -> int | None:
        """XP needed to leave ``level``, or None past the end of the table."""
        if 0 <= level < len(self.xp_table):
            return self.xp_table[level]
        return None

    @staticmethod
    def _lookup(table: dict, table_name: str, key: str):
        try:
            return table[key]
        except KeyError:
            raise DataTableError(
                f"Unknown {table_name} key: {key}",
                table=table_name,
                key=key,
            ) from None


__all__ = [
    "TableRow",
    "RaceTemplate",
    "ClassTemplate",
    "SpellTemplate",
    "MonsterTemplate",
    "LevelTheme",
    "TrapTemplate",
    "PotionTemplate",
    "ScrollTemplate",
    "EquipmentTemplate",
    "GameTables",
]
