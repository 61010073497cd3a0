"""
Configuration management for enchantlore.
Handles registry settings, lore formatting and persistence.
"""

import json
import logging
import copy
from pathlib import Path
from typing import Optional, Dict, Any

logger = logging.getLogger(__name__)


def get_config_dir() -> Path:
    """
    Get the library config directory.

    Returns:
        Path to the config directory (~/.enchantlore/)
    """
    config_dir = Path.home() / ".enchantlore"
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


class Config:
    """
    Library configuration with JSON persistence.

    Settings are grouped in sections ("lore", "registry", "logging"). The
    backing store is a JSON file on disk; every setter saves immediately.
    """

    # NOTE: This structure is treated as immutable. Always use
    # _default_config_deepcopy() when you need a fresh copy of defaults.
    DEFAULT_CONFIG: Dict[str, Any] = {
        "lore": {
            # Prepended to the enchant name by the default namer.
            # "§7" is the gray formatting code vanilla enchant lines use.
            "prefix": "§7",
        },
        "registry": {
            # Reject display names that are a prefix of another one
            "enforce_prefix_disjoint": True,
        },
        "logging": {
            "debug": False,
        },
    }

    def __init__(self, config_file: Optional[Path] = None) -> None:
        """
        Initialize configuration.

        Args:
            config_file: Optional path to config JSON file. When omitted,
                         ~/.enchantlore/config.json is used.
        """
        self.config_file: Path = self._resolve_config_path(config_file)
        self.config_file.parent.mkdir(parents=True, exist_ok=True)

        self.data: Dict[str, Any] = self._load()
        logger.info(f"Config loaded from {self.config_file}")

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _resolve_config_path(config_file: Optional[Path]) -> Path:
        if config_file is not None:
            return config_file
        return get_config_dir() / "config.json"

    def _load(self) -> Dict[str, Any]:
        """Load configuration from JSON file, merging with defaults."""
        if self.config_file.exists():
            try:
                with self.config_file.open("r", encoding="utf-8") as f:
                    raw = json.load(f)

                merged = self._merge_with_defaults(raw)
                logger.info("Configuration loaded successfully")
                return merged
            except (OSError, ValueError) as exc:
                logger.error(f"Failed to load config: {exc}. Using defaults.")
                return self._default_config_deepcopy()
        else:
            logger.info("No config file found, using defaults")
            return self._default_config_deepcopy()

    @classmethod
    def _default_config_deepcopy(cls) -> Dict[str, Any]:
        return copy.deepcopy(cls.DEFAULT_CONFIG)

    def _merge_with_defaults(self, user_config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Merge user config with defaults so newly added keys show up
        without discarding user-provided values.
        """
        merged = self._default_config_deepcopy()

        for key, value in user_config.items():
            if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
                merged[key].update(value)
            else:
                merged[key] = value

        return merged

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self) -> None:
        """Persist the current configuration to the config file."""
        try:
            with self.config_file.open("w", encoding="utf-8") as f:
                json.dump(self.data, f, indent=2, ensure_ascii=False)
            logger.info("Configuration saved")
        except OSError as exc:
            logger.error(f"Failed to save config: {exc}")

    # ------------------------------------------------------------------
    # Lore
    # ------------------------------------------------------------------

    @property
    def lore_prefix(self) -> str:
        lore = self.data.get("lore", {}) or {}
        return str(lore.get("prefix", self.DEFAULT_CONFIG["lore"]["prefix"]))

    @lore_prefix.setter
    def lore_prefix(self, value: str) -> None:
        self.data.setdefault("lore", {})["prefix"] = value
        self.save()

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------

    @property
    def enforce_prefix_disjoint(self) -> bool:
        registry = self.data.get("registry", {}) or {}
        return bool(registry.get("enforce_prefix_disjoint", True))

    @enforce_prefix_disjoint.setter
    def enforce_prefix_disjoint(self, enabled: bool) -> None:
        self.data.setdefault("registry", {})["enforce_prefix_disjoint"] = bool(enabled)
        self.save()

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------

    @property
    def debug_logging(self) -> bool:
        section = self.data.get("logging", {}) or {}
        return bool(section.get("debug", False))

    @debug_logging.setter
    def debug_logging(self, enabled: bool) -> None:
        self.data.setdefault("logging", {})["debug"] = bool(enabled)
        self.save()
