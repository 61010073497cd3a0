"""Tests for enchantlore/registry.py - EnchantRegistry."""

import logging

import pytest

from enchantlore.config import Config
from enchantlore.enchant import CustomEnchant
from enchantlore.interfaces import IEnchantRegistry, ILoreRecognizer
from enchantlore.item import Item, Material
from enchantlore.level_codec import MalformedLevelError
from enchantlore.registry import (
    DisplayNameCollisionError,
    DoubleRegistrationError,
    EnchantRegistry,
    UnknownEnchantError,
)
from enchantlore.trigger import ATTACK_ENTITY, EQUIP_ARMOR, HOLD_ITEM, TriggerKind


class TestCreate:
    """Tests for EnchantRegistry.create()."""

    def test_returns_registered_enchant(self, registry):
        ench = registry.create("Frost", 3)
        assert isinstance(ench, CustomEnchant)
        assert ench in registry
        assert ench.registry is registry
        assert len(registry) == 1

    def test_default_trigger_is_hold_item(self, registry):
        assert registry.create("Frost", 3).trigger is HOLD_ITEM

    def test_duplicate_id_rejected(self, registry):
        registry.create("Life Steal", 3)
        with pytest.raises(DoubleRegistrationError) as exc_info:
            registry.create("life steal", 2)
        assert exc_info.value.enchant_id == "life_steal"
        assert len(registry) == 1

    def test_duplicate_is_logged(self, registry, caplog):
        registry.create("Frost", 3)
        with caplog.at_level(logging.ERROR, logger="enchantlore.registry"):
            with pytest.raises(DoubleRegistrationError):
                registry.create("Frost", 3)
        assert "frost" in caplog.text

    def test_same_name_in_other_registry_is_fine(self, registry):
        registry.create("Frost", 3)
        other = EnchantRegistry()
        assert other.create("Frost", 3) is not registry.find("frost")

    def test_empty_name_rejected(self, registry):
        with pytest.raises(ValueError):
            registry.create("  ", 3)

    def test_max_level_must_be_positive(self, registry):
        with pytest.raises(ValueError):
            registry.create("Frost", 0)

    def test_incompatible_from_other_registry_rejected(self, registry):
        foreign = EnchantRegistry().create("Frost", 3)
        with pytest.raises(ValueError):
            registry.create("Flame", 3, incompatible=[foreign])


class TestDisplayNames:
    """Tests for namer and prefix-collision checks."""

    def test_default_namer_uses_config_prefix(self, temp_config):
        temp_config.lore_prefix = "§9"
        registry = EnchantRegistry(config=temp_config)
        assert registry.create("Frost", 3).display_name == "§9Frost"

    def test_registry_without_config_uses_default_prefix(self):
        assert EnchantRegistry().create("Frost", 3).display_name == "§7Frost"

    def test_custom_namer(self):
        registry = EnchantRegistry(namer=lambda e: f"[{e.id}]")
        assert registry.create("Fire Aspect", 2).display_name == "[fire_aspect]"

    def test_prefix_collision_rejected(self, registry):
        registry.create("Sharp", 3)
        with pytest.raises(DisplayNameCollisionError) as exc_info:
            registry.create("Sharpness", 5)
        assert exc_info.value.existing == "§7Sharp"

    def test_reverse_prefix_collision_rejected(self, registry):
        registry.create("Sharpness", 5)
        with pytest.raises(DisplayNameCollisionError):
            registry.create("Sharp", 3)

    def test_rejected_enchant_not_registered(self, registry):
        registry.create("Sharp", 3)
        with pytest.raises(DisplayNameCollisionError):
            registry.create("Sharpness", 5)
        assert registry.find("sharpness") is None

    def test_prefix_check_can_be_disabled(self, temp_config):
        temp_config.enforce_prefix_disjoint = False
        registry = EnchantRegistry(config=temp_config)
        registry.create("Sharp", 3)
        assert registry.create("Sharpness", 5).display_name == "§7Sharpness"

    def test_identical_display_name_always_rejected(self, temp_config):
        temp_config.enforce_prefix_disjoint = False
        registry = EnchantRegistry(config=temp_config, namer=lambda e: "Same")
        registry.create("One", 1)
        with pytest.raises(DisplayNameCollisionError):
            registry.create("Two", 1)

    def test_empty_display_name_rejected(self):
        registry = EnchantRegistry(namer=lambda e: "")
        with pytest.raises(ValueError):
            registry.create("Frost", 3)

    def test_unknown_enchant_display_name(self, registry):
        foreign = EnchantRegistry().create("Frost", 3)
        with pytest.raises(UnknownEnchantError):
            registry.get_display_name(foreign)


class TestLookup:
    """Tests for find(), get() and iteration."""

    def test_find_by_id_or_name(self, registry):
        ench = registry.create("Fire Aspect", 2)
        assert registry.find("fire_aspect") is ench
        assert registry.find("Fire Aspect") is ench
        assert registry.find("frost") is None

    def test_get_unknown_raises(self, registry):
        with pytest.raises(UnknownEnchantError):
            registry.get("frost")

    def test_iterates_in_creation_order(self, registry):
        a = registry.create("Frost", 3)
        b = registry.create("Venom", 3)
        assert list(registry) == [a, b]

    def test_satisfies_protocols(self, registry):
        assert isinstance(registry, IEnchantRegistry)
        assert isinstance(registry, ILoreRecognizer)


class TestIncompatibility:
    """Tests for get_incompatible() and set_incompatible()."""

    def test_declared_at_creation_is_one_way(self, registry, sword):
        frost = registry.create("Frost", 3, trigger=ATTACK_ENTITY)
        flame = registry.create("Flame", 3, trigger=ATTACK_ENTITY, incompatible=[frost])

        assert registry.get_incompatible(flame) == (frost,)
        assert registry.get_incompatible(frost) == ()
        assert frost.can_apply(flame.apply(sword, 1)) is True

    def test_set_incompatible_blocks_both_directions(self, registry, sword):
        frost = registry.create("Frost", 3, trigger=ATTACK_ENTITY)
        flame = registry.create("Flame", 3, trigger=ATTACK_ENTITY)

        registry.set_incompatible(frost, flame)

        assert flame.can_apply(frost.apply(sword, 2)) is False
        assert frost.can_apply(flame.apply(sword, 2)) is False
        assert frost.is_compatible(flame) is False
        assert flame.is_compatible(frost) is False

    def test_earlier_enchant_sees_later_declaration(self, registry, sword):
        frost = registry.create("Frost", 3, trigger=ATTACK_ENTITY)
        flame = registry.create("Flame", 3, trigger=ATTACK_ENTITY, incompatible=[frost])

        registry.set_incompatible(frost, flame)

        assert frost.get_incompatible() == (flame,)
        assert flame.get_incompatible() == (frost,)
        assert frost.can_apply(flame.apply(sword, 1)) is False

    def test_repeated_declaration_is_noop(self, registry):
        frost = registry.create("Frost", 3)
        flame = registry.create("Flame", 3)

        registry.set_incompatible(frost, flame)
        registry.set_incompatible(flame, frost)

        assert frost.get_incompatible() == (flame,)
        assert flame.get_incompatible() == (frost,)

    def test_unregistered_enchant_rejected(self, registry):
        frost = registry.create("Frost", 3)
        stranger = EnchantRegistry().create("Flame", 3)

        with pytest.raises(UnknownEnchantError):
            registry.set_incompatible(frost, stranger)
        assert frost.get_incompatible() == ()

    def test_self_incompatibility_rejected(self, registry):
        frost = registry.create("Frost", 3)
        with pytest.raises(ValueError):
            registry.set_incompatible(frost, frost)


class TestLoreRecognition:
    """Tests for from_lore_line(), recognizes() and get_enchants()."""

    def test_from_lore_line(self, registry):
        frost = registry.create("Frost", 3)
        telepathy = registry.create("Telepathy", 1)

        assert registry.from_lore_line("§7Frost II") is frost
        assert registry.from_lore_line("§7Frost 14") is frost
        assert registry.from_lore_line("§7Telepathy") is telepathy

    def test_unrelated_lines_not_recognized(self, registry):
        registry.create("Frost", 3)
        assert registry.recognizes("Frost II") is False
        assert registry.recognizes("§7Frost bite") is False
        assert registry.recognizes("") is False

    def test_display_name_with_spaces(self, registry):
        ench = registry.create("Fire Aspect", 2)
        assert registry.from_lore_line("§7Fire Aspect II") is ench

    def test_get_enchants(self, registry):
        frost = registry.create("Frost", 3)
        venom = registry.create("Venom", 3)
        item = venom.apply(frost.apply(Item(type=Material.IRON_SWORD), 2), 1)

        assert registry.get_enchants(item) == {frost: 2, venom: 1}

    def test_get_enchants_empty(self, registry):
        assert registry.get_enchants(None) == {}
        assert registry.get_enchants(Item(type=Material.STONE)) == {}

    def test_get_enchants_ignores_unrelated_lore(self, registry, sword):
        frost = registry.create("Frost", 3)
        item = sword.with_lines(["A cold blade", "§7Frost III"])
        assert registry.get_enchants(item) == {frost: 3}

    def test_get_enchants_skips_non_positive_levels(self, registry, sword):
        registry.create("Frost", 3)
        item = sword.with_lines(["§7Frost -1"])
        assert registry.get_enchants(item) == {}

    def test_strip_all(self, registry, sword):
        frost = registry.create("Frost", 3)
        item = frost.apply(sword.with_lines(["flavor"]), 2)
        assert registry.strip_all(item).get_lines() == ["flavor"]
        assert registry.strip_all(sword) is sword

    def test_recognition_never_raises_on_garbage_suffix(self, registry, sword):
        frost = registry.create("Frost", 3)
        item = sword.with_lines(["§7Frost ???"])
        assert registry.get_enchants(item) == {}
        with pytest.raises(MalformedLevelError):
            frost.get_level(item)


class RecordingHandler:
    def __init__(self):
        self.calls = []

    def activate(self, event, level):
        self.calls.append(("activate", event, level))

    def deactivate(self, event, level):
        self.calls.append(("deactivate", event, level))


class TestFire:
    """Tests for trigger dispatch."""

    def test_activates_enchants_with_matching_trigger(self, registry, sword):
        handler = RecordingHandler()
        frost = registry.create("Frost", 3, trigger=ATTACK_ENTITY, handler=handler)
        item = frost.apply(sword, 2)

        fired = registry.fire(TriggerKind.ATTACK_ENTITY, "hit", item)

        assert fired == [frost]
        assert handler.calls == [("activate", "hit", 2)]

    def test_other_trigger_kinds_ignored(self, registry, sword):
        handler = RecordingHandler()
        frost = registry.create("Frost", 3, trigger=ATTACK_ENTITY, handler=handler)
        item = frost.apply(sword, 2)

        assert registry.fire(TriggerKind.MINE_BLOCK, "dig", item) == []
        assert handler.calls == []

    def test_item_without_enchant_does_nothing(self, registry, sword):
        handler = RecordingHandler()
        registry.create("Frost", 3, trigger=ATTACK_ENTITY, handler=handler)
        assert registry.fire(TriggerKind.ATTACK_ENTITY, "hit", sword) == []
        assert registry.fire(TriggerKind.ATTACK_ENTITY, "hit", None) == []

    def test_deactivation(self, registry):
        handler = RecordingHandler()
        regrowth = registry.create("Regrowth", 2, trigger=EQUIP_ARMOR, handler=handler)
        helmet = regrowth.apply(Item(type=Material.IRON_HELMET), 1)

        registry.fire(TriggerKind.EQUIP_ARMOR, "off", helmet, deactivate=True)

        assert handler.calls == [("deactivate", "off", 1)]

    def test_deactivation_skipped_without_deactivation_event(self, registry, sword):
        handler = RecordingHandler()
        frost = registry.create("Frost", 3, trigger=ATTACK_ENTITY, handler=handler)
        item = frost.apply(sword, 1)

        assert registry.fire(TriggerKind.ATTACK_ENTITY, "x", item, deactivate=True) == []
        assert handler.calls == []


class TestConfigIntegration:
    """Registry settings come from Config."""

    def test_reads_persisted_settings(self, tmp_path):
        path = tmp_path / "config.json"
        cfg = Config(path)
        cfg.lore_prefix = ""

        registry = EnchantRegistry(config=Config(path))
        assert registry.create("Frost", 3).get_lore(2) == "Frost II"
