"""
Enchant registry.

The registry is the only way to create CustomEnchants. It assigns each
enchant a display name, refuses duplicates, and answers the questions
enchants ask about lore they don't own: does a line belong to *some*
enchant, and which enchants does an item carry.

Usage:
    registry = EnchantRegistry()
    lifesteal = registry.create("Lifesteal", 3, trigger=ATTACK_ENTITY)
    sword = lifesteal.apply(Item(type=Material.IRON_SWORD), 2)
    registry.get_enchants(sword)   # {lifesteal: 2}
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, Tuple

from enchantlore import line_manager
from enchantlore.config import Config
from enchantlore.enchant import CustomEnchant, enchant_id
from enchantlore.interfaces import IEnchantHandler
from enchantlore.item import Item, Material
from enchantlore.level_codec import is_level_token
from enchantlore.trigger import HOLD_ITEM, EnchantTrigger, TriggerKind

logger = logging.getLogger(__name__)

Namer = Callable[[CustomEnchant], str]


class DoubleRegistrationError(RuntimeError):
    """Raised when an enchant id is registered twice in one registry"""

    def __init__(self, enchant_id: str):
        self.enchant_id = enchant_id
        super().__init__(f"Enchant {enchant_id!r} is already registered")


class DisplayNameCollisionError(ValueError):
    """Raised when a display name would be ambiguous with an existing one"""

    def __init__(self, display_name: str, existing: str):
        self.display_name = display_name
        self.existing = existing
        super().__init__(
            f"Display name {display_name!r} collides with existing display name {existing!r}"
        )


class UnknownEnchantError(KeyError):
    """Raised when looking up an enchant id that isn't registered"""
    pass


class EnchantRegistry:
    """
    Creates, names and looks up CustomEnchants.

    Display names must be prefix-disjoint: lore lines are matched by
    display-name prefix, so "Sharp" and "Sharpness" can't coexist. This is
    checked at creation time unless disabled in config.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        namer: Optional[Namer] = None,
    ) -> None:
        """
        Args:
            config: Library config. When omitted, built-in defaults are used
                    and nothing is read from or written to disk.
            namer: Assigns display names. Defaults to the configured lore
                   prefix followed by the enchant name.
        """
        if config is not None:
            self._prefix = config.lore_prefix
            self._enforce_prefix_disjoint = config.enforce_prefix_disjoint
        else:
            self._prefix = Config.DEFAULT_CONFIG["lore"]["prefix"]
            self._enforce_prefix_disjoint = Config.DEFAULT_CONFIG["registry"]["enforce_prefix_disjoint"]
        self._namer: Namer = namer or self._default_namer

        self._by_id: Dict[str, CustomEnchant] = {}
        self._by_display_name: Dict[str, CustomEnchant] = {}
        self._display_names: Dict[CustomEnchant, str] = {}
        self._incompatible: Dict[CustomEnchant, List[CustomEnchant]] = {}

    def _default_namer(self, enchant: CustomEnchant) -> str:
        return f"{self._prefix}{enchant.name}"

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    def create(
        self,
        name: str,
        max_level: int,
        trigger: EnchantTrigger = HOLD_ITEM,
        handler: Optional[IEnchantHandler] = None,
        incompatible: Sequence[CustomEnchant] = (),
        applies_to: Optional[Callable[[Material], bool]] = None,
    ) -> CustomEnchant:
        """
        Create and register a new enchant.

        Args:
            name: Human-readable name. Its id (lowercase, underscores) must
                  be unique in this registry.
            max_level: Highest level the enchant is meant to reach (>= 1).
            trigger: Event kind the enchant reacts to; also decides default
                     item applicability.
            handler: Optional activate/deactivate behaviour.
            incompatible: Enchants this one can't be added alongside. The
                          relation is one-way; use set_incompatible() to
                          block both directions.
            applies_to: Overrides the trigger's material check.

        Returns:
            The registered enchant.

        Raises:
            ValueError: Empty name or max_level below 1.
            DoubleRegistrationError: The id is already registered.
            DisplayNameCollisionError: The assigned display name is
                ambiguous with an existing one.
        """
        if not name or not name.strip():
            raise ValueError("Enchant name must not be empty")
        if max_level < 1:
            raise ValueError(f"max_level must be at least 1, got {max_level}")

        key = enchant_id(name)
        if key in self._by_id:
            logger.error(f"Refusing to register {key!r} twice")
            raise DoubleRegistrationError(key)

        for ench in incompatible:
            if ench.registry is not self:
                raise ValueError(f"Incompatible enchant {ench.id!r} belongs to another registry")

        enchant = CustomEnchant(
            self,
            name,
            max_level,
            trigger,
            handler=handler,
            applies_to=applies_to,
        )
        display_name = self._namer(enchant)
        if not display_name:
            raise ValueError(f"Namer returned an empty display name for {key!r}")
        self._check_display_name(display_name)

        self._by_id[key] = enchant
        self._by_display_name[display_name] = enchant
        self._display_names[enchant] = display_name
        self._incompatible[enchant] = list(incompatible)
        logger.info(f"Registered enchant {key!r} as {display_name!r} (max level {max_level})")
        return enchant

    def _check_display_name(self, display_name: str) -> None:
        existing = self._by_display_name
        if display_name in existing:
            logger.error(f"Display name {display_name!r} is already in use")
            raise DisplayNameCollisionError(display_name, display_name)
        if not self._enforce_prefix_disjoint:
            return
        for other in existing:
            if other.startswith(display_name) or display_name.startswith(other):
                logger.error(f"Display name {display_name!r} overlaps {other!r}")
                raise DisplayNameCollisionError(display_name, other)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._by_id)

    def __iter__(self) -> Iterator[CustomEnchant]:
        return iter(list(self._by_id.values()))

    def __contains__(self, enchant: object) -> bool:
        return isinstance(enchant, CustomEnchant) and enchant in self._display_names

    def find(self, key: str) -> Optional[CustomEnchant]:
        """Enchant by id (or name), or None."""
        return self._by_id.get(enchant_id(key))

    def get(self, key: str) -> CustomEnchant:
        """
        Enchant by id (or name).

        Raises:
            UnknownEnchantError: Nothing registered under that id.
        """
        enchant = self.find(key)
        if enchant is None:
            raise UnknownEnchantError(key)
        return enchant

    def get_display_name(self, enchant: Any) -> str:
        try:
            return self._display_names[enchant]
        except KeyError:
            raise UnknownEnchantError(repr(enchant)) from None

    # ------------------------------------------------------------------
    # Incompatibility
    # ------------------------------------------------------------------

    def get_incompatible(self, enchant: Any) -> Tuple[CustomEnchant, ...]:
        """Enchants that block the given one from being added to an item."""
        return tuple(self._incompatible.get(enchant, ()))

    def set_incompatible(self, first: CustomEnchant, second: CustomEnchant) -> None:
        """
        Declare two enchants mutually incompatible.

        Either one's can_apply() is False for items carrying the other.
        Declaring the same pair again is a no-op.

        Raises:
            UnknownEnchantError: Either enchant isn't registered here.
            ValueError: Both arguments are the same enchant.
        """
        for ench in (first, second):
            if ench not in self:
                raise UnknownEnchantError(repr(ench))
        if first is second:
            raise ValueError(f"Enchant {first.id!r} can't be incompatible with itself")

        for ench, other in ((first, second), (second, first)):
            blocked = self._incompatible[ench]
            if not any(existing is other for existing in blocked):
                blocked.append(other)
        logger.debug(f"Marked {first.id!r} and {second.id!r} incompatible")

    # ------------------------------------------------------------------
    # Lore recognition
    # ------------------------------------------------------------------

    def from_lore_line(self, line: str) -> Optional[CustomEnchant]:
        """
        Identify the enchant a lore line encodes.

        Accepts both the bare display name and display name + space +
        level. Returns None for unrelated lines.
        """
        enchant = self._by_display_name.get(line)
        if enchant is not None:
            return enchant
        head, sep, tail = line.rpartition(line_manager.LEVEL_SEPARATOR)
        if not sep:
            return None
        enchant = self._by_display_name.get(head)
        if enchant is not None and is_level_token(tail):
            return enchant
        return None

    def recognizes(self, line: str) -> bool:
        return self.from_lore_line(line) is not None

    def get_enchants(self, item: Optional[Item]) -> Dict[CustomEnchant, int]:
        """
        Map every custom enchant on an item to its level.

        When an enchant appears on more than one line, the line nearest
        the end of the lore wins.
        """
        enchants: Dict[CustomEnchant, int] = {}
        if item is None or not item.has_lore():
            return enchants
        for line in item.get_lines():
            enchant = self.from_lore_line(line)
            if enchant is None:
                continue
            level = line_manager.parse_level(line, self._display_names[enchant])
            if level > 0:
                enchants[enchant] = level
            else:
                enchants.pop(enchant, None)
        return enchants

    def strip_all(self, item: Optional[Item]) -> Optional[Item]:
        """Remove every registered enchant's lore from an item."""
        if item is None or not item.has_lore():
            return item
        lines = [line for line in item.get_lines() if not self.recognizes(line)]
        return item.with_lines(lines)

    # ------------------------------------------------------------------
    # Trigger dispatch
    # ------------------------------------------------------------------

    def fire(
        self,
        kind: TriggerKind,
        event: Any,
        item: Optional[Item],
        deactivate: bool = False,
    ) -> List[CustomEnchant]:
        """
        Dispatch an event to every enchant on an item using a trigger kind.

        Args:
            kind: Event kind that occurred.
            event: Arbitrary event payload passed through to handlers.
            item: The item involved in the event.
            deactivate: Dispatch as a deactivation instead. Ignored by
                        triggers without a deactivation event.

        Returns:
            The enchants that were activated (or deactivated).
        """
        fired: List[CustomEnchant] = []
        for enchant, level in self.get_enchants(item).items():
            if enchant.trigger.kind is not kind:
                continue
            if deactivate:
                if not enchant.trigger.has_deactivation:
                    continue
                enchant.deactivate(event, level)
            else:
                enchant.activate(event, level)
            fired.append(enchant)
        logger.debug(f"Fired {kind} ({'deactivate' if deactivate else 'activate'}) for {len(fired)} enchant(s)")
        return fired
