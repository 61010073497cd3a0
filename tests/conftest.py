import time
from pathlib import Path

import pytest

from enchantlore.config import Config
from enchantlore.item import Item, Material
from enchantlore.registry import EnchantRegistry
from enchantlore.trigger import ATTACK_ENTITY


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keep config and log files written under Path.home() inside tmp_path."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: home))
    return home


@pytest.fixture
def temp_config(tmp_path):
    """
    Provide a fresh Config.

    This fixture GUARANTEES a clean config or fails loudly.
    """
    config_path = tmp_path / f"config_{id(tmp_path)}_{time.time_ns()}.json"
    config = Config(config_file=config_path)

    assert config.lore_prefix == "§7", \
        f"FIXTURE CONTAMINATED! prefix={config.lore_prefix}, file={config.config_file}"
    assert config.enforce_prefix_disjoint is True, \
        f"FIXTURE CONTAMINATED! enforce={config.enforce_prefix_disjoint}, file={config.config_file}"

    return config


@pytest.fixture
def registry(temp_config):
    return EnchantRegistry(config=temp_config)


@pytest.fixture
def lifesteal(registry):
    return registry.create("Lifesteal", 3, trigger=ATTACK_ENTITY)


@pytest.fixture
def sword():
    return Item(type=Material.IRON_SWORD)


def pytest_collection_modifyitems(config, items):
    """Assign tier markers based on test location."""
    for item in items:
        path = Path(str(item.fspath)).as_posix()
        if "/tests/integration/" in path:
            item.add_marker(pytest.mark.integration)
            continue

        if "/tests/unit/" in path:
            item.add_marker(pytest.mark.unit)
