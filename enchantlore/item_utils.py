"""
Convenience helpers for building items.

Each helper returns a new Item and leaves its argument untouched.
"""
from __future__ import annotations

from typing import Sequence, Union

from enchantlore.item import Item


def rename(item: Item, name: str) -> Item:
    """Return a copy of item with a custom display name."""
    meta = item.get_item_meta().model_copy(update={"display_name": name})
    return item.with_meta(meta)


def set_lore(item: Item, lore: Union[str, Sequence[str]]) -> Item:
    """
    Replace an item's lore.

    Args:
        item: The item to give lore to.
        lore: A single line or a sequence of lines.
    """
    if isinstance(lore, str):
        lore = [lore]
    return item.with_lines(lore)


def add_lore(item: Item, line: str) -> Item:
    """Append one line to an item's lore."""
    lines = item.get_lines()
    lines.append(line)
    return item.with_lines(lines)


def add_enchant(item: Item, enchant: str, level: int) -> Item:
    """
    Add a vanilla enchantment by key. Level 0 removes it.

    Unlike custom enchants, vanilla enchantments are stored in the item
    metadata rather than in lore.
    """
    meta = item.get_item_meta()
    enchants = dict(meta.enchants)
    if level == 0:
        enchants.pop(enchant, None)
    else:
        enchants[enchant] = level
    return item.with_meta(meta.model_copy(update={"enchants": enchants}))


def set_durability(item: Item, damage: int) -> Item:
    """
    Set the durability damage an item has taken.

    Raises:
        ValueError: If damage is negative.
    """
    if damage < 0:
        raise ValueError(f"Durability damage can't be negative: {damage}")
    return item.model_copy(update={"damage": damage})
