"""Built-in catalog content.

Declarative data only. ``default_tables()`` validates it into a
``GameTables`` instance once per process.
"""

from __future__ import annotations

from functools import lru_cache

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
    TableRow,
    TrapTemplate,
)
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


# =============================================================================
# Races and Classes
# =============================================================================


RACES = [
    RaceTemplate(key="human", name="Human", hp=10, mp=8, strength=5, dexterity=5, intelligence=5,
                 description="Allrounders with no weaknesses"),
    RaceTemplate(key="half_elf", name="Half-Elf", hp=9, mp=10, strength=4, dexterity=6, intelligence=6,
                 description="Smarter and faster than humans"),
    RaceTemplate(key="elf", name="Elf", hp=8, mp=12, strength=3, dexterity=6, intelligence=7,
                 description="Immortal and magical, resist light"),
    RaceTemplate(key="hobbit", name="Hobbit", hp=8, mp=6, strength=3, dexterity=8, intelligence=5,
                 description="Excellent rogues, stealthy"),
    RaceTemplate(key="gnome", name="Gnome", hp=9, mp=10, strength=4, dexterity=7, intelligence=7,
                 description="Protected from paralysis"),
    RaceTemplate(key="dwarf", name="Dwarf", hp=14, mp=4, strength=7, dexterity=3, intelligence=3,
                 description="Headstrong miners and fighters"),
    RaceTemplate(key="half_orc", name="Half-Orc", hp=13, mp=4, strength=7, dexterity=5, intelligence=4,
                 description="Great constitution"),
    RaceTemplate(key="half_troll", name="Half-Troll", hp=16, mp=3, strength=9, dexterity=2, intelligence=2,
                 description="Strong, regenerate, but slow"),
    RaceTemplate(key="dunadan", name="Dunadan", hp=12, mp=8, strength=6, dexterity=7, intelligence=7,
                 description="Elder hardy men"),
    RaceTemplate(key="high_elf", name="High-Elf", hp=10, mp=14, strength=6, dexterity=8, intelligence=8,
                 description="See invisible, master skills"),
    RaceTemplate(key="dark_elf", name="Dark-Elf", hp=10, mp=10, strength=5, dexterity=8, intelligence=7,
                 description="Resist darkness"),
    RaceTemplate(key="draconian", name="Draconian", hp=14, mp=10, strength=9, dexterity=6, intelligence=7,
                 description="Breathe elements"),
]

CLASSES = [
    ClassTemplate(key="warrior", name="Warrior", hp_mult=1.5, mp_mult=0.3, str_mult=1.5, dex_mult=1.0,
                  int_mult=0.4, description="Hack-and-slash fighter"),
    ClassTemplate(key="istar", name="Istar", hp_mult=0.6, mp_mult=2.0, str_mult=0.5, dex_mult=0.8,
                  int_mult=1.6, description="Devastating spells"),
    ClassTemplate(key="priest", name="Priest", hp_mult=0.9, mp_mult=1.5, str_mult=0.8, dex_mult=0.7,
                  int_mult=1.2, description="Holy devotion"),
    ClassTemplate(key="rogue", name="Rogue", hp_mult=0.9, mp_mult=1.0, str_mult=0.9, dex_mult=1.5,
                  int_mult=1.0, description="Master of traps and stealth"),
    ClassTemplate(key="paladin", name="Paladin", hp_mult=1.3, mp_mult=0.8, str_mult=1.3, dex_mult=0.9,
                  int_mult=0.8, description="Holy knight"),
    ClassTemplate(key="ranger", name="Ranger", hp_mult=1.1, mp_mult=1.2, str_mult=1.0, dex_mult=1.2,
                  int_mult=1.1, description="Bow and magic"),
    ClassTemplate(key="archer", name="Archer", hp_mult=0.8, mp_mult=0.6, str_mult=0.8, dex_mult=1.6,
                  int_mult=0.7, description="Ranged damage"),
    ClassTemplate(key="druid", name="Druid", hp_mult=0.9, mp_mult=1.4, str_mult=0.9, dex_mult=0.8,
                  int_mult=1.3, description="Nature powers"),
    ClassTemplate(key="mindcrafter", name="Mindcrafter", hp_mult=1.1, mp_mult=1.2, str_mult=1.1, dex_mult=1.0,
                  int_mult=1.2, description="Psychic powers"),
    ClassTemplate(key="adventurer", name="Adventurer", hp_mult=1.0, mp_mult=1.0, str_mult=1.0, dex_mult=1.0,
                  int_mult=1.0, description="Jack-of-all-trades"),
]


# =============================================================================
# Spells
# =============================================================================


SPELLS = [
    SpellTemplate(key="fireball", name="Fireball", kind=SpellKind.AOE, mp_cost=8, cooldown=3, damage=15,
                  int_scale=0.8, range=4, radius=1, element="fire", description="Explosive ball of fire"),
    SpellTemplate(key="heal", name="Heal", kind=SpellKind.SELF, mp_cost=6, cooldown=2, heal_amount=20,
                  int_scale=1.5, element="holy", description="Restores health"),
    SpellTemplate(key="lightning", name="Lightning Bolt", kind=SpellKind.LINE, mp_cost=10, cooldown=4,
                  damage=22, int_scale=1.0, range=6, element="lightning",
                  description="Crackling bolt of electricity"),
    SpellTemplate(key="frost_nova", name="Frost Nova", kind=SpellKind.NOVA, mp_cost=12, cooldown=5, damage=12,
                  int_scale=0.6, radius=2, element="ice", description="Freezes all nearby enemies"),
]


# =============================================================================
# Monsters
# =============================================================================


def _monster(key: str, name: str, symbol: str, hp: int, atk: int, defense: int, xp: int, speed: int,
             min_level: int, **extra) -> MonsterTemplate:
    return MonsterTemplate(key=key, name=name, symbol=symbol, hp=hp, atk=atk, defense=defense, xp=xp,
                           speed=speed, min_level=min_level, **extra)


MONSTERS = [
    # Depth 1-3
    _monster("floating_eye", "Floating Eye", "e", 5, 0, 0, 3, 1, 1, ai=AIState.WANDER,
             ability=AbilityKind.PARALYZE, description="Paralyzing gaze"),
    _monster("rat", "Giant Rat", "r", 8, 2, 0, 5, 1, 1, ai=AIState.WANDER),
    _monster("kobold", "Kobold", "k", 10, 3, 0, 8, 1, 1),
    _monster("goblin", "Goblin", "g", 15, 4, 1, 12, 1, 1),
    _monster("giant_spider", "Giant Spider", "S", 12, 5, 0, 14, 2, 2, ability=AbilityKind.POISON),
    _monster("skeleton", "Skeleton", "s", 20, 6, 2, 20, 1, 2),
    _monster("warg", "Warg", "C", 22, 7, 1, 25, 2, 2),
    # Depth 3-5
    _monster("hill_orc", "Hill Orc", "o", 30, 8, 3, 35, 1, 3),
    _monster("wight", "Wight", "W", 35, 10, 3, 45, 1, 3, ability=AbilityKind.DRAIN, description="Drains life"),
    _monster("naga", "Naga", "n", 40, 9, 4, 50, 1, 3),
    _monster("dark_elf", "Dark Elf", "h", 32, 11, 3, 55, 1, 4, ability=AbilityKind.TELEPORT),
    _monster("cave_troll", "Cave Troll", "T", 55, 14, 5, 70, 1, 4),
    # Depth 5-8
    _monster("shade", "Shade", "G", 45, 11, 2, 55, 2, 5, description="Nether damage"),
    _monster("vampire", "Vampire", "V", 50, 13, 4, 80, 1, 5, ability=AbilityKind.DRAIN,
             description="Drains life force"),
    _monster("golem", "Stone Golem", "g", 80, 16, 8, 100, 1, 6),
    _monster("wraith", "Wraith", "W", 55, 14, 3, 90, 2, 6, ability=AbilityKind.PARALYZE),
    _monster("hydra", "Multi-Headed Hydra", "M", 90, 18, 5, 120, 1, 7),
    # Depth 8-11
    _monster("demon_imp", "Demon Imp", "u", 40, 15, 3, 85, 2, 8, ability=AbilityKind.SUMMON),
    _monster("ancient_dragon", "Ancient Dragon", "D", 120, 22, 8, 200, 1, 9),
    _monster("lich", "Lich", "L", 80, 20, 6, 180, 1, 9, ability=AbilityKind.SUMMON, description="Summons undead"),
    _monster("death_knight", "Death Knight", "p", 100, 24, 9, 220, 1, 10, ability=AbilityKind.DRAIN),
    # Depth 11-15
    _monster("great_wyrm", "Great Wyrm", "D", 160, 28, 10, 350, 1, 11),
    _monster("pit_fiend", "Pit Fiend", "U", 140, 26, 9, 300, 1, 12, ability=AbilityKind.SUMMON),
    _monster("arch_lich", "Arch-Lich", "L", 120, 24, 7, 280, 1, 13, ability=AbilityKind.TELEPORT),
    # Zone bosses
    _monster("orc_king", "Azog the Orc King", "O", 100, 16, 6, 150, 1, 3, boss=True,
             description="King of the Orcs"),
    _monster("witch_king", "The Witch-King", "W", 160, 22, 8, 250, 1, 6, boss=True,
             ability=AbilityKind.PARALYZE, description="Lord of the Nazgul"),
    _monster("smaug", "Smaug the Golden", "D", 250, 30, 12, 500, 1, 9, boss=True,
             description="The last great dragon"),
    _monster("sauron", "Sauron", "P", 400, 35, 14, 800, 1, 12, boss=True, ability=AbilityKind.SUMMON,
             description="The Dark Lord"),
    _monster("morgoth", "Morgoth, Lord of Darkness", "P", 600, 45, 18, 1500, 1, 15, boss=True,
             description="He who arises in might"),
]


# =============================================================================
# Level Themes
# =============================================================================


THEMES = (
    LevelTheme(name="Barrow-Downs", monster_density=0.015, description="Ancient burial mounds"),
    LevelTheme(name="Goblin Tunnels", monster_density=0.02, description="Twisting goblin warrens"),
    LevelTheme(name="Orc Stronghold", monster_density=0.05, description="Stronghold of the orcs",
               boss_key="orc_king"),
    LevelTheme(name="Trollshaws", monster_density=0.04, description="Troll-infested forest caves"),
    LevelTheme(name="Paths of the Dead", monster_density=0.06, description="Haunted by spirits"),
    LevelTheme(name="Minas Morgul", monster_density=0.06, description="Tower of dark sorcery",
               boss_key="witch_king"),
    LevelTheme(name="Shelob's Lair", monster_density=0.05, description="Webs and darkness"),
    LevelTheme(name="Cirith Ungol", monster_density=0.06, description="Stairs of shadow"),
    LevelTheme(name="Angband - Upper", monster_density=0.07, description="The Iron Fortress",
               boss_key="smaug"),
    LevelTheme(name="Angband - Deep", monster_density=0.07, description="Deeper into darkness"),
    LevelTheme(name="Angband - Abyss", monster_density=0.08, description="Where the fires burn"),
    LevelTheme(name="Morgoth's Domain", monster_density=0.08, description="Domain of the enemy",
               boss_key="sauron"),
    LevelTheme(name="The Void Gate", monster_density=0.07, description="Between worlds"),
    LevelTheme(name="Throne of Iron", monster_density=0.06, description="The Iron Crown awaits"),
    LevelTheme(name="Morgoth's Fortress", monster_density=0.05, description="Seat of the Dark Lord",
               boss_key="morgoth"),
)


# =============================================================================
# Items
# =============================================================================


POTION_APPEARANCES = (
    "Bubbly", "Shimmering", "Murky", "Glowing", "Smoky",
    "Sparkling", "Thick", "Fizzing", "Oily", "Crystalline",
    "Swirling", "Luminous", "Dark", "Golden", "Silver",
)

POTION_COLORS = (
    0xFF3366, 0x3366FF, 0x33FF66, 0xFFCC00, 0xFF6600,
    0xCC33FF, 0x33CCCC, 0xFF3333, 0x66FF66, 0x6633FF,
    0xCCCC33, 0xFF66CC, 0x33FFCC, 0xCC6633, 0x9999FF,
)

POTIONS = [
    PotionTemplate(key="heal_potion", name="Potion of Healing", effect=PotionEffect.HEAL, value=30,
                   rarity=Rarity.COMMON),
    PotionTemplate(key="big_heal_potion", name="Potion of *Healing*", effect=PotionEffect.HEAL, value=80,
                   rarity=Rarity.UNCOMMON, min_level=4),
    PotionTemplate(key="mana_potion", name="Potion of Restore Mana", effect=PotionEffect.MANA, value=25,
                   rarity=Rarity.COMMON),
    PotionTemplate(key="strength_potion", name="Potion of Strength", effect=PotionEffect.STR_BOOST, value=1,
                   rarity=Rarity.RARE, min_level=5),
    PotionTemplate(key="dexterity_potion", name="Potion of Dexterity", effect=PotionEffect.DEX_BOOST, value=1,
                   rarity=Rarity.RARE, min_level=5),
    PotionTemplate(key="poison_potion", name="Potion of Poison", effect=PotionEffect.POISON, value=-15,
                   rarity=Rarity.COMMON),
    PotionTemplate(key="speed_potion", name="Potion of Speed", effect=PotionEffect.SPEED, value=5,
                   rarity=Rarity.UNCOMMON, min_level=3),
    PotionTemplate(key="resist_potion", name="Potion of Resistance", effect=PotionEffect.RESIST, value=10,
                   rarity=Rarity.UNCOMMON, min_level=6),
]

SCROLLS = [
    ScrollTemplate(key="identify", name="Scroll of Identify", effect=ScrollEffect.IDENTIFY,
                   rarity=Rarity.COMMON),
    ScrollTemplate(key="teleport", name="Scroll of Teleportation", effect=ScrollEffect.TELEPORT,
                   rarity=Rarity.UNCOMMON, min_level=2),
    ScrollTemplate(key="magic_mapping", name="Scroll of Magic Mapping", effect=ScrollEffect.MAGIC_MAP,
                   rarity=Rarity.RARE, min_level=3),
    ScrollTemplate(key="enchant", name="Scroll of Enchant Weapon", effect=ScrollEffect.ENCHANT_WEAPON,
                   rarity=Rarity.RARE, min_level=5),
    ScrollTemplate(key="summon", name="Scroll of Summon Monster", effect=ScrollEffect.SUMMON_MONSTERS,
                   rarity=Rarity.COMMON),
]

EQUIPMENT = [
    # Weapons
    EquipmentTemplate(key="dagger", name="Dagger", slot=EquipSlot.WEAPON, atk=2, rarity=Rarity.COMMON),
    EquipmentTemplate(key="short_sword", name="Short Sword", slot=EquipSlot.WEAPON, atk=4,
                      rarity=Rarity.COMMON, min_level=2),
    EquipmentTemplate(key="long_sword", name="Long Sword", slot=EquipSlot.WEAPON, atk=7,
                      rarity=Rarity.UNCOMMON, min_level=4),
    EquipmentTemplate(key="battle_axe", name="Battle Axe", slot=EquipSlot.WEAPON, atk=10,
                      rarity=Rarity.UNCOMMON, min_level=6),
    EquipmentTemplate(key="mace", name="Mace", slot=EquipSlot.WEAPON, atk=8, defense=1,
                      rarity=Rarity.UNCOMMON, min_level=5),
    EquipmentTemplate(key="warhammer", name="War Hammer", slot=EquipSlot.WEAPON, atk=12,
                      rarity=Rarity.RARE, min_level=8),
    # Armor
    EquipmentTemplate(key="leather_armor", name="Leather Armor", slot=EquipSlot.ARMOR, defense=2,
                      rarity=Rarity.COMMON),
    EquipmentTemplate(key="chain_mail", name="Chain Mail", slot=EquipSlot.ARMOR, defense=4,
                      rarity=Rarity.UNCOMMON, min_level=3),
    EquipmentTemplate(key="plate_mail", name="Plate Mail", slot=EquipSlot.ARMOR, defense=7,
                      rarity=Rarity.RARE, min_level=6),
    EquipmentTemplate(key="dragon_armor", name="Dragon Scale Mail", slot=EquipSlot.ARMOR, defense=10,
                      rarity=Rarity.EPIC, min_level=10),
    # Rings
    EquipmentTemplate(key="ring_protect", name="Ring of Protection", slot=EquipSlot.RING, defense=2,
                      rarity=Rarity.UNCOMMON, min_level=3),
    EquipmentTemplate(key="ring_power", name="Ring of Power", slot=EquipSlot.RING, atk=3,
                      rarity=Rarity.RARE, min_level=7),
    EquipmentTemplate(key="ring_regen", name="Ring of Regeneration", slot=EquipSlot.RING,
                      rarity=Rarity.RARE, min_level=5, special="regen"),
]

LEGENDARIES = [
    EquipmentTemplate(key="glamdring", name="Glamdring, Foe-hammer", slot=EquipSlot.WEAPON, atk=18, defense=2,
                      rarity=Rarity.LEGENDARY, min_level=8, description="Glows blue near orcs"),
    EquipmentTemplate(key="sting", name="Sting", slot=EquipSlot.WEAPON, atk=12, rarity=Rarity.LEGENDARY,
                      min_level=5, special="see_invisible", description="Glows blue near orcs"),
    EquipmentTemplate(key="mithril_coat", name="Mithril Coat", slot=EquipSlot.ARMOR, defense=14,
                      rarity=Rarity.LEGENDARY, min_level=10,
                      description="As light as a feather, as hard as dragon scales"),
    EquipmentTemplate(key="one_ring", name="The One Ring", slot=EquipSlot.RING, atk=5, defense=5,
                      rarity=Rarity.LEGENDARY, min_level=14, special="invisible",
                      description="One ring to rule them all"),
    EquipmentTemplate(key="anduril", name="Anduril, Flame of the West", slot=EquipSlot.WEAPON, atk=25,
                      defense=3, rarity=Rarity.LEGENDARY, min_level=12,
                      description="Reforged from the shards of Narsil"),
]


# =============================================================================
# Traps and Progression
# =============================================================================


TRAPS = [
    TrapTemplate(key="teleport", name="Teleport Trap", effect=TrapEffect.TELEPORT,
                 description="Teleports you randomly!"),
    TrapTemplate(key="pit", name="Pit Trap", effect=TrapEffect.PIT, damage=15,
                 description="You fall into a pit!"),
    TrapTemplate(key="poison", name="Poison Trap", effect=TrapEffect.POISON, damage=8,
                 description="A cloud of poison gas!"),
    TrapTemplate(key="alarm", name="Alarm Trap", effect=TrapEffect.ALARM,
                 description="An alarm sounds! Monsters rush toward you!"),
    TrapTemplate(key="fire", name="Fire Trap", effect=TrapEffect.FIRE, damage=20,
                 description="Flames erupt beneath you!"),
    TrapTemplate(key="confusion", name="Confusion Trap", effect=TrapEffect.CONFUSION,
                 description="You feel disoriented!"),
]

XP_TABLE = (
    0, 20, 50, 100, 180, 300, 500, 800, 1200, 1800,
    2500, 3500, 5000, 7000, 10000, 15000, 22000, 30000, 40000, 55000,
)

RARITY_WEIGHTS = {
    Rarity.COMMON: 60,
    Rarity.UNCOMMON: 25,
    Rarity.RARE: 10,
    Rarity.EPIC: 4,
    Rarity.LEGENDARY: 1,
}


def _by_key(rows: list[TableRow]) -> dict[str, TableRow]:
    return {row.key: row for row in rows}


@lru_cache(maxsize=1)
def default_tables() -> GameTables:
    """Build the built-in catalog.

    Returns:
        The shared, immutable GameTables instance.
    """
    return GameTables(
        races=_by_key(RACES),
        classes=_by_key(CLASSES),
        spells=_by_key(SPELLS),
        monsters=_by_key(MONSTERS),
        themes=THEMES,
        potions=_by_key(POTIONS),
        scrolls=_by_key(SCROLLS),
        equipment=_by_key(EQUIPMENT),
        legendaries=_by_key(LEGENDARIES),
        traps=_by_key(TRAPS),
        potion_appearances=POTION_APPEARANCES,
        potion_colors=POTION_COLORS,
        xp_table=XP_TABLE,
        rarity_weights=RARITY_WEIGHTS,
    )


__all__ = [
    "RACES",
    "CLASSES",
    "SPELLS",
    "MONSTERS",
    "THEMES",
    "POTIONS",
    "SCROLLS",
    "EQUIPMENT",
    "LEGENDARIES",
    "TRAPS",
    "POTION_APPEARANCES",
    "POTION_COLORS",
    "XP_TABLE",
    "RARITY_WEIGHTS",
    "default_tables",
]
