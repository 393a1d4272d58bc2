"""Static data tables for the delve simulation core.

Example:
    >>> from delve.data import default_tables
    >>> tables = default_tables()
    >>> [t.key for t in tables.eligible_monsters(1)]
    ['floating_eye', 'rat', 'kobold', 'goblin']
"""

from __future__ import annotations

from delve.data.catalog import default_tables
from delve.data.tables import (
    ClassTemplate,
    EquipmentTemplate,
    GameTables,
    LevelTheme,
    MonsterTemplate,
    PotionTemplate,
    RaceTemplate,
    ScrollTemplate,
    SpellTemplate,
    TrapTemplate,
)


__all__ = [
    "GameTables",
    "RaceTemplate",
    "ClassTemplate",
    "SpellTemplate",
    "MonsterTemplate",
    "LevelTheme",
    "TrapTemplate",
    "PotionTemplate",
    "ScrollTemplate",
    "EquipmentTemplate",
    "default_tables",
]
