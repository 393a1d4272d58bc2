"""Item generation, identification and inventory operations.

Potions hide their type behind a per-session cosmetic appearance until the
type is identified. Equipment hides its bonus until first equipped.
Generation is banded by category, gated by depth and weighted by rarity.

Example:
    >>> from delve.data import default_tables
    >>> from delve.engine.rng import create_rng
    >>> rng = create_rng(3)
    >>> factory = ItemFactory(default_tables(), rng, PotionIdentity(default_tables(), rng))
    >>> factory.random_item(1) is not None
    True
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TypeVar

from delve.core.logging import get_logger
from delve.data.tables import (
    EquipmentTemplate,
    GameTables,
    PotionTemplate,
    ScrollTemplate,
)
from delve.engine.context import GameContext
from delve.engine.generator import find_random_floor
from delve.engine.population import make_monster, spawn_monster
from delve.engine.rng import RandomSource
from delve.models.enums import Enchantment, PotionEffect, Rarity, ScrollEffect
from delve.models.events import InventoryChangeEvent, ItemPickupEvent, MagicMapEvent
from delve.models.items import (
    EquipmentItem,
    Item,
    LegendaryItem,
    PotionItem,
    ScrollItem,
    Wearable,
)


logger = get_logger(__name__)

CURSE_CHANCE = 0.08
SUMMONED_BY_SCROLL = 3
ENCHANT_BONUS = 2

TemplateT = TypeVar("TemplateT", PotionTemplate, ScrollTemplate, EquipmentTemplate)


# =============================================================================
# Identification
# =============================================================================


class PotionIdentity:
    """Per-session mapping from potion type to cosmetic appearance.

    Appearances and colors are shuffled independently, so neither reveals
    the other.
    """

    def __init__(self, tables: GameTables, rng: RandomSource) -> None:
        appearances = list(tables.potion_appearances)
        colors = list(tables.potion_colors)
        rng.shuffle(appearances)
        rng.shuffle(colors)

        self._appearance: dict[str, str] = {}
        self._color: dict[str, int] = {}
        for index, key in enumerate(tables.potions):
            self._appearance[key] = appearances[index % len(appearances)]
            self._color[key] = colors[index % len(colors)]
        self.identified: set[str] = set()

    def appearance(self, key: str) -> str:
        return self._appearance[key]

    def color(self, key: str) -> int:
        return self._color[key]

    def is_identified(self, key: str) -> bool:
        return key in self.identified

    def identify(self, key: str, *collections: Iterable[Item]) -> bool:
        """Mark a potion type known and flip every matching item.

        Args:
            key: Potion template key.
            *collections: Item collections to update (inventory, ground).

        Returns:
            True if the type was not identified before.
        """
        newly = key not in self.identified
        self.identified.add(key)
        for collection in collections:
            for item in collection:
                if isinstance(item, PotionItem) and item.key == key:
                    item.identified = True
        return newly


# =============================================================================
# Generation
# =============================================================================


class ItemFactory:
    """Creates items for a session.

    Attributes:
        tables: Catalog of item templates.
        identity: Potion identity shared with the rest of the session.
    """

    def __init__(self, tables: GameTables, rng: RandomSource, identity: PotionIdentity) -> None:
        self.tables = tables
        self.identity = identity
        self._rng = rng
        self._next_uid = 1

    def _uid(self) -> int:
        uid = self._next_uid
        self._next_uid += 1
        return uid

    def random_item(self, depth: int) -> Item | None:
        """Generate one item suitable for ``depth``.

        Category bands: potion below 0.35, scroll below 0.55, equipment below
        0.80, legendary below 0.85 from depth 5, otherwise potion.

        Returns:
            The item, or None if no template of the chosen category fits.
        """
        roll = self._rng.random()
        if roll < 0.35:
            return self.random_potion(depth)
        if roll < 0.55:
            return self.random_scroll(depth)
        if roll < 0.80:
            return self.random_equipment(depth)
        if roll < 0.85 and depth >= 5:
            return self.random_legendary(depth)
        return self.random_potion(depth)

    def _pick(self, templates: Iterable[TemplateT], depth: int) -> TemplateT | None:
        eligible: Sequence[TemplateT] = [t for t in templates if t.min_level <= depth]
        if not eligible:
            return None
        weights = [self.tables.rarity_weight(Rarity(t.rarity)) for t in eligible]
        return self._rng.choices(eligible, weights=weights)[0]

    def random_potion(self, depth: int) -> PotionItem | None:
        template = self._pick(self.tables.potions.values(), depth)
        return self.potion(template) if template is not None else None

    def random_scroll(self, depth: int) -> ScrollItem | None:
        template = self._pick(self.tables.scrolls.values(), depth)
        return self.scroll(template) if template is not None else None

    def random_equipment(self, depth: int) -> EquipmentItem | None:
        template = self._pick(self.tables.equipment.values(), depth)
        if template is None:
            return None

        curse_roll = self._rng.random()
        bonus = int(self._rng.random() * depth / 3)
        enchantment = Enchantment.NORMAL
        if curse_roll < CURSE_CHANCE:
            bonus = -(self._rng.randrange(3) + 1)
            enchantment = Enchantment.CURSED
        elif bonus > 0:
            enchantment = Enchantment.ENCHANTED
        return self.equipment(template, bonus=bonus, enchantment=enchantment)

    def random_legendary(self, depth: int) -> LegendaryItem | None:
        eligible = [t for t in self.tables.legendaries.values() if t.min_level <= depth]
        if not eligible:
            return None
        return self.legendary(eligible[self._rng.randrange(len(eligible))])

    def potion(self, template: PotionTemplate) -> PotionItem:
        return PotionItem(
            uid=self._uid(),
            key=template.key,
            true_name=template.name,
            appearance=self.identity.appearance(template.key),
            color=self.identity.color(template.key),
            effect=template.effect,
            value=template.value,
            identified=self.identity.is_identified(template.key),
        )

    def scroll(self, template: ScrollTemplate) -> ScrollItem:
        return ScrollItem(uid=self._uid(), key=template.key, name=template.name, effect=template.effect)

    def equipment(
        self,
        template: EquipmentTemplate,
        *,
        bonus: int = 0,
        enchantment: Enchantment = Enchantment.NORMAL,
    ) -> EquipmentItem:
        """Build a piece of equipment with a hidden bonus."""
        return EquipmentItem(
            uid=self._uid(),
            key=template.key,
            base_name=template.name,
            slot=template.slot,
            atk=template.atk + bonus,
            defense=template.defense + bonus,
            bonus=bonus,
            enchantment=enchantment,
            rarity=template.rarity,
        )

    def legendary(self, template: EquipmentTemplate) -> LegendaryItem:
        return LegendaryItem(
            uid=self._uid(),
            key=template.key,
            name=template.name,
            slot=template.slot,
            atk=template.atk,
            defense=template.defense,
            special=template.special,
            description=template.description,
        )


# =============================================================================
# Inventory Operations
# =============================================================================


def item_at(ctx: GameContext, x: int, y: int) -> int | None:
    """Index of the first ground item at a cell."""
    for index, item in enumerate(ctx.state.items):
        if item.x == x and item.y == y:
            return index
    return None


def pickup(ctx: GameContext) -> Item | None:
    """Move the first item under the player into the inventory."""
    state = ctx.state
    index = item_at(ctx, state.player.x, state.player.y)
    if index is None:
        ctx.log("Nothing to pick up here.")
        return None

    item = state.items.pop(index)
    item.lift()
    state.character.inventory.append(item)
    ctx.log(f"{item.display_name} added to inventory")
    ctx.publish(ItemPickupEvent(item=item.display_name, uid=item.uid))
    return item


def drop_item(ctx: GameContext, index: int) -> Item | None:
    """Drop an inventory item onto the player's tile. Bad indices are ignored."""
    state = ctx.state
    inventory = state.character.inventory
    if not 0 <= index < len(inventory):
        return None

    item = inventory.pop(index)
    item.place(state.player.x, state.player.y)
    state.items.append(item)
    ctx.log(f"You drop {item.display_name}")
    ctx.publish(InventoryChangeEvent(size=len(inventory)))
    return item


def use_inventory_item(ctx: GameContext, index: int) -> bool:
    """Use an inventory item.

    Potions and scrolls are consumed. Equipment is worn; whatever the slot
    held takes the item's place in the inventory.

    Args:
        ctx: Game context.
        index: Inventory index.

    Returns:
        True if an item was used. Out-of-range indices are ignored.
    """
    inventory = ctx.state.character.inventory
    if not 0 <= index < len(inventory):
        return False

    item = inventory[index]
    if isinstance(item, PotionItem):
        _drink(ctx, item)
        del inventory[index]
    elif isinstance(item, ScrollItem):
        _read(ctx, item)
        del inventory[index]
    else:
        _equip(ctx, index, item)

    ctx.publish(InventoryChangeEvent(size=len(inventory)))
    return True


def _equip(ctx: GameContext, index: int, item: Wearable) -> None:
    character = ctx.state.character
    inventory = character.inventory

    if not item.identified:
        item.identified = True
        if item.enchantment == Enchantment.CURSED:
            ctx.log(f"You equip {item.display_name}. It feels cursed!")
        elif item.enchantment == Enchantment.ENCHANTED:
            ctx.log(f"You equip {item.display_name}. It glows with power!")
        else:
            ctx.log(f"You equip {item.display_name}")
    else:
        ctx.log(f"You equip {item.display_name}")

    previous = character.equipment.put(item.slot, item)
    if previous is not None:
        inventory[index] = previous
        ctx.log(f"{previous.display_name} moved to inventory")
    else:
        del inventory[index]


def _drink(ctx: GameContext, potion: PotionItem) -> None:
    state = ctx.state
    character = state.character
    identity = ctx.items.identity if ctx.items is not None else None

    if not potion.identified:
        potion.identified = True
        if identity is not None:
            identity.identify(potion.key, character.inventory, state.items)
        ctx.log(f"It was a {potion.true_name}!")

    effect = PotionEffect(potion.effect)
    if effect == PotionEffect.HEAL:
        ctx.log(f"Restored {character.heal(potion.value)} HP")
    elif effect == PotionEffect.MANA:
        ctx.log(f"Restored {character.restore_mana(potion.value)} MP")
    elif effect == PotionEffect.STR_BOOST:
        character.stats.strength += potion.value
        ctx.log(f"Your strength increases by {potion.value}!")
    elif effect == PotionEffect.DEX_BOOST:
        character.stats.dexterity += potion.value
        ctx.log(f"Your dexterity increases by {potion.value}!")
    elif effect == PotionEffect.POISON:
        character.take_damage(abs(potion.value))
        ctx.log(f"Poison! You lose {abs(potion.value)} HP!")
        ctx.check_player_death()
    elif effect == PotionEffect.SPEED:
        character.speed += potion.value
        ctx.log("You feel faster!")
    elif effect == PotionEffect.RESIST:
        ctx.log("You feel resistant to the elements.")


def identify_potions(ctx: GameContext) -> list[str]:
    """Identify every potion type carried or lying in view.

    Returns:
        True names of the types newly identified, in discovery order.
    """
    state = ctx.state
    character = state.character
    identity = ctx.items.identity if ctx.items is not None else None

    candidates: list[PotionItem] = [
        item for item in character.inventory if isinstance(item, PotionItem) and not item.identified
    ]
    candidates.extend(
        item
        for item in state.items
        if isinstance(item, PotionItem)
        and not item.identified
        and item.x is not None
        and item.y is not None
        and state.visible.is_set(item.x, item.y)
    )

    names: list[str] = []
    seen: set[str] = set()
    for potion in candidates:
        if potion.key in seen:
            continue
        seen.add(potion.key)
        if identity is not None:
            identity.identify(potion.key, character.inventory, state.items)
        else:
            potion.identified = True
        names.append(potion.true_name)
    return names


def _read(ctx: GameContext, scroll: ScrollItem) -> None:
    state = ctx.state
    effect = ScrollEffect(scroll.effect)

    if effect == ScrollEffect.IDENTIFY:
        ctx.log("The scroll reveals knowledge...")
        for name in identify_potions(ctx):
            ctx.log(f"Identified: {name}")

    elif effect == ScrollEffect.TELEPORT:
        destination = find_random_floor(state.grid, ctx.rng)
        ctx.log("You are teleported!")
        ctx.relocate_player(destination)

    elif effect == ScrollEffect.MAGIC_MAP:
        ctx.log("A map materializes in your mind!")
        state.explored.fill()
        ctx.publish(MagicMapEvent())

    elif effect == ScrollEffect.ENCHANT_WEAPON:
        weapon = state.character.equipment.weapon
        if weapon is None:
            ctx.log("The scroll fizzles... you have no weapon equipped.")
        else:
            weapon.atk += ENCHANT_BONUS
            ctx.log(f"Your {weapon.display_name} glows brightly! ATK +{ENCHANT_BONUS}")

    elif effect == ScrollEffect.SUMMON_MONSTERS:
        ctx.log("Oh no! Monsters appear!")
        eligible = ctx.tables.eligible_monsters(state.depth)
        for _ in range(SUMMONED_BY_SCROLL):
            if not eligible:
                break
            template = eligible[ctx.rng.randrange(len(eligible))]
            position = find_random_floor(state.grid, ctx.rng)
            if not ctx.can_monster_move(position.x, position.y):
                continue
            spawn_monster(ctx, make_monster(template, position, chasing=True))


__all__ = [
    "PotionIdentity",
    "ItemFactory",
    "item_at",
    "pickup",
    "drop_item",
    "use_inventory_item",
    "identify_potions",
]
