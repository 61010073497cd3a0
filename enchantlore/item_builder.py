"""
Fluent item construction.

    sword = (
        ItemBuilder(Material.DIAMOND_SWORD)
        .set_name("Excalibur")
        .add_lore("Forged in dragonfire")
        .add_custom_enchant(lifesteal, 2)
        .build()
    )
"""
from __future__ import annotations

from typing import Optional

from enchantlore import item_utils
from enchantlore.enchant import CustomEnchant
from enchantlore.item import Item, Material


class ItemBuilder:
    """Wraps an Item; every method returns a new builder."""

    def __init__(self, material: Optional[Material] = None, amount: int = 1, item: Optional[Item] = None):
        if item is None:
            if material is None:
                raise ValueError("ItemBuilder needs a material or an existing item")
            item = Item(type=material, amount=amount)
        self._item = item

    @classmethod
    def of(cls, item: Item) -> ItemBuilder:
        return cls(item=item)

    def build(self) -> Item:
        return self._item

    def add_enchant(self, enchant: str, level: int) -> ItemBuilder:
        return ItemBuilder.of(item_utils.add_enchant(self._item, enchant, level))

    def add_custom_enchant(self, enchant: CustomEnchant, level: int) -> ItemBuilder:
        return ItemBuilder.of(enchant.apply(self._item, level))

    def set_lore(self, *lore: str) -> ItemBuilder:
        return ItemBuilder.of(item_utils.set_lore(self._item, list(lore)))

    def add_lore(self, line: str) -> ItemBuilder:
        return ItemBuilder.of(item_utils.add_lore(self._item, line))

    def set_name(self, name: str) -> ItemBuilder:
        return ItemBuilder.of(item_utils.rename(self._item, name))

    def set_durability(self, damage: int) -> ItemBuilder:
        return ItemBuilder.of(item_utils.set_durability(self._item, damage))
