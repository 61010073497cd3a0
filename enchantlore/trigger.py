"""
Enchant triggers.

A trigger names the kind of game event an enchant reacts to and decides
which item types the enchant may be put on by default. Triggers are plain
values; the per-enchant behaviour lives in an IEnchantHandler and the
registry dispatches events to handlers by trigger kind.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet

from enchantlore.item import Material, materials_where


class TriggerKind(Enum):
    """Event kinds an enchant can be activated by."""
    ATTACK_ENTITY = "attack_entity"
    KILL_ENTITY = "kill_entity"
    MINE_BLOCK = "mine_block"
    SHOOT_ARROW = "shoot_arrow"
    TAKE_DAMAGE = "take_damage"
    EQUIP_ARMOR = "equip_armor"
    HOLD_ITEM = "hold_item"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class EnchantTrigger:
    """
    Event kind plus default applicability.

    Attributes:
        kind: Event kind dispatched to enchants using this trigger.
        applies_to: Materials an enchant with this trigger may be applied
            to unless the enchant overrides it.
        has_deactivation: Whether the opposite event (unequip, switch
            away) is dispatched as a deactivation.
    """
    kind: TriggerKind
    applies_to: FrozenSet[Material]
    has_deactivation: bool = False

    def default_applies_to(self, material: Material) -> bool:
        return material in self.applies_to


_WEAPONS = materials_where(lambda m: m.is_sword or m.is_axe or m is Material.TRIDENT)

ATTACK_ENTITY = EnchantTrigger(TriggerKind.ATTACK_ENTITY, _WEAPONS)
KILL_ENTITY = EnchantTrigger(TriggerKind.KILL_ENTITY, _WEAPONS | materials_where(lambda m: m.is_ranged))
MINE_BLOCK = EnchantTrigger(TriggerKind.MINE_BLOCK, materials_where(lambda m: m.is_tool))
SHOOT_ARROW = EnchantTrigger(TriggerKind.SHOOT_ARROW, frozenset({Material.BOW, Material.CROSSBOW}))
TAKE_DAMAGE = EnchantTrigger(TriggerKind.TAKE_DAMAGE, materials_where(lambda m: m.is_armor))
EQUIP_ARMOR = EnchantTrigger(
    TriggerKind.EQUIP_ARMOR,
    materials_where(lambda m: m.is_armor),
    has_deactivation=True,
)
HOLD_ITEM = EnchantTrigger(TriggerKind.HOLD_ITEM, frozenset(Material), has_deactivation=True)

DEFAULT_TRIGGERS = {
    trigger.kind: trigger
    for trigger in (
        ATTACK_ENTITY,
        KILL_ENTITY,
        MINE_BLOCK,
        SHOOT_ARROW,
        TAKE_DAMAGE,
        EQUIP_ARMOR,
        HOLD_ITEM,
    )
}
