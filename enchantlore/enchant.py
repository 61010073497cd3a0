"""
Custom enchantments stored as item lore.

A CustomEnchant owns one line of an item's lore: its display name, or its
display name followed by a space and the level ("§7Lifesteal III"). The
operations here read the item's current lore, rewrite that one line and
return a new item. Unrelated lore lines are left alone.

Enchants are created through EnchantRegistry.create(), which assigns the
display name and makes the enchant recognizable to every other enchant
in the same registry.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Tuple

from enchantlore import line_manager
from enchantlore.interfaces import IEnchantHandler, IEnchantRegistry
from enchantlore.item import Item, Material
from enchantlore.trigger import EnchantTrigger

logger = logging.getLogger(__name__)


def enchant_id(name: str) -> str:
    """Stable key for an enchant name: lowercase, spaces -> underscores."""
    return name.lower().replace(" ", "_")


class CustomEnchant:
    """
    A named, leveled enchantment encoded in lore.

    Instances are immutable and compared by identity. Use
    EnchantRegistry.create() rather than constructing directly.
    """

    __slots__ = (
        "_name",
        "_max_level",
        "_trigger",
        "_registry",
        "_handler",
        "_applies_to",
    )

    def __init__(
        self,
        registry: IEnchantRegistry,
        name: str,
        max_level: int,
        trigger: EnchantTrigger,
        handler: Optional[IEnchantHandler] = None,
        applies_to: Optional[Callable[[Material], bool]] = None,
    ) -> None:
        self._registry = registry
        self._name = name
        self._max_level = max_level
        self._trigger = trigger
        self._handler = handler
        self._applies_to = applies_to

    def __repr__(self) -> str:
        return f"CustomEnchant({self._name!r}, max_level={self._max_level})"

    # ------------------------------------------------------------------
    # Definition
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def id(self) -> str:
        return enchant_id(self._name)

    @property
    def max_level(self) -> int:
        return self._max_level

    @property
    def trigger(self) -> EnchantTrigger:
        return self._trigger

    @property
    def registry(self) -> IEnchantRegistry:
        return self._registry

    @property
    def handler(self) -> Optional[IEnchantHandler]:
        return self._handler

    @property
    def display_name(self) -> str:
        """Display name assigned by the registry's namer."""
        return self._registry.get_display_name(self)

    def get_incompatible(self) -> Tuple[CustomEnchant, ...]:
        """
        Enchants that can't share an item with this one.

        Resolved through the registry on every call, so incompatibilities
        declared after this enchant was created are included.
        """
        return self._registry.get_incompatible(self)

    def applies_to(self, material: Material) -> bool:
        """Whether this enchant may be put on items of the given type."""
        if self._applies_to is not None:
            return self._applies_to(material)
        return self._trigger.default_applies_to(material)

    def is_compatible(self, other: CustomEnchant) -> bool:
        return not any(ench is other for ench in self.get_incompatible())

    # ------------------------------------------------------------------
    # Lore operations
    # ------------------------------------------------------------------

    def get_lore(self, level: int) -> str:
        """
        The lore line this enchant writes at a level.

        Single-level enchants render as the bare display name.
        """
        return line_manager.format_line(self.display_name, level, self._max_level)

    def apply(self, item: Optional[Item], level: int) -> Optional[Item]:
        """
        Apply this enchant at a level, replacing any existing line.

        A level of 0 removes the enchant. A new line is placed right after
        the last existing enchant line, or at the end of the lore if there
        are none.

        Args:
            item: The item to enchant. None is returned unchanged.
            level: Level to apply.

        Returns:
            A new item carrying the enchant.
        """
        if item is None:
            return None
        if level == 0:
            return self.remove(item)
        if level > self._max_level:
            logger.debug(f"Applying {self.id} at level {level} above max {self._max_level}")
        lines = line_manager.write_line(
            item.get_lines(),
            self.display_name,
            self.get_lore(level),
            self._registry.recognizes,
        )
        return item.with_lines(lines)

    def remove(self, item: Optional[Item]) -> Optional[Item]:
        """
        Remove this enchant from an item.

        Items without metadata or lore are returned as-is.
        """
        if item is None or not item.has_item_meta() or not item.has_lore():
            return item
        lines = line_manager.strip_lines(item.get_lines(), self.display_name)
        return item.with_lines(lines)

    def get_level(self, item: Optional[Item]) -> int:
        """
        Level of this enchant on an item.

        Returns:
            The level, or 0 if the item is None or doesn't carry the enchant.

        Raises:
            MalformedLevelError: If the enchant's line has an unreadable level.
        """
        if item is None or not item.has_item_meta() or not item.has_lore():
            return 0
        return line_manager.read_level(item.get_lines(), self.display_name)

    def can_apply(self, item: Optional[Item]) -> bool:
        """
        Whether this enchant can be put on an item.

        False if the item type isn't supported, or an enchant this one is
        incompatible with is already present.
        """
        if item is None or not self.applies_to(item.type):
            return False
        enchants = self._registry.get_enchants(item)
        for ench in self.get_incompatible():
            if ench in enchants:
                return False
        return True

    # ------------------------------------------------------------------
    # Behaviour
    # ------------------------------------------------------------------

    def activate(self, event: Any, level: int) -> None:
        if self._handler is not None:
            self._handler.activate(event, level)

    def deactivate(self, event: Any, level: int) -> None:
        if self._handler is not None:
            self._handler.deactivate(event, level)
