"""
Immutable item representation.

Items are frozen pydantic models. Nothing here mutates in place: every
change (new lore, new name, new vanilla enchant) goes through a ``with_*``
method that returns a fresh Item, so a snapshot handed to one caller can
never be altered by another.

The lore list is where custom enchantments live; see enchantlore.enchant.
"""
from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, FrozenSet, List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field


class Material(str, Enum):
    """Item types that enchantments can be checked against."""

    WOODEN_SWORD = "wooden_sword"
    STONE_SWORD = "stone_sword"
    IRON_SWORD = "iron_sword"
    GOLDEN_SWORD = "golden_sword"
    DIAMOND_SWORD = "diamond_sword"
    NETHERITE_SWORD = "netherite_sword"

    WOODEN_AXE = "wooden_axe"
    STONE_AXE = "stone_axe"
    IRON_AXE = "iron_axe"
    GOLDEN_AXE = "golden_axe"
    DIAMOND_AXE = "diamond_axe"
    NETHERITE_AXE = "netherite_axe"

    WOODEN_PICKAXE = "wooden_pickaxe"
    STONE_PICKAXE = "stone_pickaxe"
    IRON_PICKAXE = "iron_pickaxe"
    GOLDEN_PICKAXE = "golden_pickaxe"
    DIAMOND_PICKAXE = "diamond_pickaxe"
    NETHERITE_PICKAXE = "netherite_pickaxe"

    WOODEN_SHOVEL = "wooden_shovel"
    IRON_SHOVEL = "iron_shovel"
    DIAMOND_SHOVEL = "diamond_shovel"

    WOODEN_HOE = "wooden_hoe"
    IRON_HOE = "iron_hoe"
    DIAMOND_HOE = "diamond_hoe"

    BOW = "bow"
    CROSSBOW = "crossbow"
    TRIDENT = "trident"
    FISHING_ROD = "fishing_rod"
    SHIELD = "shield"

    LEATHER_HELMET = "leather_helmet"
    IRON_HELMET = "iron_helmet"
    DIAMOND_HELMET = "diamond_helmet"
    LEATHER_CHESTPLATE = "leather_chestplate"
    IRON_CHESTPLATE = "iron_chestplate"
    DIAMOND_CHESTPLATE = "diamond_chestplate"
    ELYTRA = "elytra"
    LEATHER_LEGGINGS = "leather_leggings"
    IRON_LEGGINGS = "iron_leggings"
    DIAMOND_LEGGINGS = "diamond_leggings"
    LEATHER_BOOTS = "leather_boots"
    IRON_BOOTS = "iron_boots"
    DIAMOND_BOOTS = "diamond_boots"

    BOOK = "book"
    ENCHANTED_BOOK = "enchanted_book"
    STICK = "stick"
    STONE = "stone"
    DIRT = "dirt"

    def __str__(self) -> str:
        return self.value

    @property
    def is_sword(self) -> bool:
        return self.value.endswith("_sword")

    @property
    def is_axe(self) -> bool:
        return self.value.endswith("_axe") and not self.value.endswith("_pickaxe")

    @property
    def is_tool(self) -> bool:
        """Pickaxes, axes, shovels and hoes."""
        return self.value.endswith(("_pickaxe", "_shovel", "_hoe")) or self.is_axe

    @property
    def is_ranged(self) -> bool:
        return self in (Material.BOW, Material.CROSSBOW, Material.TRIDENT)

    @property
    def is_helmet(self) -> bool:
        return self.value.endswith("_helmet")

    @property
    def is_chestplate(self) -> bool:
        return self.value.endswith("_chestplate") or self is Material.ELYTRA

    @property
    def is_leggings(self) -> bool:
        return self.value.endswith("_leggings")

    @property
    def is_boots(self) -> bool:
        return self.value.endswith("_boots")

    @property
    def is_armor(self) -> bool:
        return self.is_helmet or self.is_chestplate or self.is_leggings or self.is_boots


def materials_where(predicate: Callable[[Material], bool]) -> FrozenSet[Material]:
    """All materials for which predicate(material) is true."""
    return frozenset(m for m in Material if predicate(m))


# Max durability for damageable items; anything absent can't take damage
MAX_DURABILITY: Dict[Material, int] = {
    Material.WOODEN_SWORD: 59,
    Material.STONE_SWORD: 131,
    Material.IRON_SWORD: 250,
    Material.GOLDEN_SWORD: 32,
    Material.DIAMOND_SWORD: 1561,
    Material.NETHERITE_SWORD: 2031,
    Material.WOODEN_AXE: 59,
    Material.STONE_AXE: 131,
    Material.IRON_AXE: 250,
    Material.GOLDEN_AXE: 32,
    Material.DIAMOND_AXE: 1561,
    Material.NETHERITE_AXE: 2031,
    Material.WOODEN_PICKAXE: 59,
    Material.STONE_PICKAXE: 131,
    Material.IRON_PICKAXE: 250,
    Material.GOLDEN_PICKAXE: 32,
    Material.DIAMOND_PICKAXE: 1561,
    Material.NETHERITE_PICKAXE: 2031,
    Material.WOODEN_SHOVEL: 59,
    Material.IRON_SHOVEL: 250,
    Material.DIAMOND_SHOVEL: 1561,
    Material.WOODEN_HOE: 59,
    Material.IRON_HOE: 250,
    Material.DIAMOND_HOE: 1561,
    Material.BOW: 384,
    Material.CROSSBOW: 465,
    Material.TRIDENT: 250,
    Material.FISHING_ROD: 64,
    Material.SHIELD: 336,
    Material.LEATHER_HELMET: 55,
    Material.IRON_HELMET: 165,
    Material.DIAMOND_HELMET: 363,
    Material.LEATHER_CHESTPLATE: 80,
    Material.IRON_CHESTPLATE: 240,
    Material.DIAMOND_CHESTPLATE: 528,
    Material.ELYTRA: 432,
    Material.LEATHER_LEGGINGS: 75,
    Material.IRON_LEGGINGS: 225,
    Material.DIAMOND_LEGGINGS: 495,
    Material.LEATHER_BOOTS: 65,
    Material.IRON_BOOTS: 195,
    Material.DIAMOND_BOOTS: 429,
}


class ItemMeta(BaseModel):
    """Display metadata attached to an item."""

    model_config = ConfigDict(frozen=True)

    display_name: Optional[str] = Field(
        None, description="Custom item name", examples=["Excalibur"]
    )
    lore: Optional[Tuple[str, ...]] = Field(
        None,
        description="Lore lines shown under the item name; None when the item has no lore",
        examples=[("§7Lifesteal III", "Forged in dragonfire")],
    )
    enchants: Dict[str, int] = Field(
        default_factory=dict,
        description="Vanilla enchantments by key",
        examples=[{"sharpness": 5}],
    )

    def has_lore(self) -> bool:
        return bool(self.lore)

    def with_lore(self, lines: Optional[Sequence[str]]) -> ItemMeta:
        """Return a copy with new lore. An empty sequence clears the lore."""
        lore = tuple(lines) if lines else None
        return self.model_copy(update={"lore": lore})


class Item(BaseModel):
    """
    An immutable item stack.

    ``meta`` is None for a plain item that has never been renamed,
    given lore or enchanted.
    """

    model_config = ConfigDict(frozen=True)

    type: Material = Field(..., description="Item type", examples=[Material.DIAMOND_SWORD])
    amount: int = Field(default=1, description="Stack size", ge=1, le=64)
    damage: int = Field(default=0, description="Durability damage taken", ge=0)
    meta: Optional[ItemMeta] = Field(None, description="Display metadata")

    def has_item_meta(self) -> bool:
        return self.meta is not None

    def get_item_meta(self) -> ItemMeta:
        """Return this item's metadata, or a fresh empty ItemMeta."""
        return self.meta if self.meta is not None else ItemMeta()

    def has_lore(self) -> bool:
        return self.meta is not None and self.meta.has_lore()

    def get_lines(self) -> List[str]:
        """Return a new list of this item's lore lines (empty if none)."""
        if self.meta is None or self.meta.lore is None:
            return []
        return list(self.meta.lore)

    def with_lines(self, lines: Sequence[str]) -> Item:
        """Return a copy of this item carrying the given lore lines."""
        return self.with_meta(self.get_item_meta().with_lore(lines))

    def with_meta(self, meta: Optional[ItemMeta]) -> Item:
        return self.model_copy(update={"meta": meta})

    @property
    def max_durability(self) -> int:
        """Max durability of this item type, 0 if it can't be damaged."""
        return MAX_DURABILITY.get(self.type, 0)

    def to_json(self) -> str:
        return self.model_dump_json(exclude_none=True)

    @classmethod
    def from_json(cls, text: str) -> Item:
        return cls.model_validate_json(text)
