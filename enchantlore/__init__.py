"""
enchantlore - custom enchantments stored as item lore.

Core pieces:
- level_codec: level <-> Roman numeral / decimal suffix
- line_manager: replace / insert / remove of enchant lines in a lore list
- enchant.CustomEnchant: per-item apply / remove / get_level / can_apply
- registry.EnchantRegistry: creates, names and recognizes enchants
"""

from .enchant import CustomEnchant
from .item import Item, ItemMeta, Material
from .item_builder import ItemBuilder
from .level_codec import MalformedLevelError, decode, encode
from .registry import (
    DisplayNameCollisionError,
    DoubleRegistrationError,
    EnchantRegistry,
    UnknownEnchantError,
)
from .trigger import EnchantTrigger, TriggerKind

__all__ = [
    "CustomEnchant",
    "DisplayNameCollisionError",
    "DoubleRegistrationError",
    "EnchantRegistry",
    "EnchantTrigger",
    "Item",
    "ItemBuilder",
    "ItemMeta",
    "MalformedLevelError",
    "Material",
    "TriggerKind",
    "UnknownEnchantError",
    "decode",
    "encode",
]
