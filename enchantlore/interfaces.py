"""
Protocol definitions shared between enchants and the registry.

CustomEnchant needs a handful of registry capabilities (display names,
line recognition, enchant maps) but the registry also constructs
CustomEnchant instances. Depending on these Protocols instead of the
concrete EnchantRegistry keeps the import graph one-directional.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Tuple, runtime_checkable

from enchantlore.item import Item


@runtime_checkable
class ILoreRecognizer(Protocol):
    """Anything that can tell whether a lore line encodes some enchant."""

    def recognizes(self, line: str) -> bool:
        """Return True if line is the encoded form of any registered enchant."""
        ...


@runtime_checkable
class IEnchantRegistry(ILoreRecognizer, Protocol):
    """Registry capabilities consumed by CustomEnchant."""

    def get_display_name(self, enchant: Any) -> str:
        """Return the display name assigned to an enchant."""
        ...

    def get_enchants(self, item: Optional[Item]) -> Mapping[Any, int]:
        """Map every custom enchant present on item to its level."""
        ...

    def get_incompatible(self, enchant: Any) -> Tuple[Any, ...]:
        """Enchants that can't share an item with the given one."""
        ...


@runtime_checkable
class IEnchantHandler(Protocol):
    """
    Behaviour attached to an enchant.

    activate() is called when the enchant's trigger fires for an item
    carrying the enchant; deactivate() when the trigger's opposite event
    fires (e.g. armor taken off).
    """

    def activate(self, event: Any, level: int) -> None:
        ...

    def deactivate(self, event: Any, level: int) -> None:
        ...
