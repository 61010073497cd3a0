# enchantlore/logging_setup.py
from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from enchantlore.config import Config, get_config_dir

LOG_FILE_NAME = "enchantlore.log"


def setup_logging(
    config: Optional[Config] = None,
    debug: bool = False,
    log_dir: Optional[Path] = None,
) -> Path:
    """
    Configure logging for a program embedding enchantlore.

    Library modules only create loggers; the host application calls this
    once at startup.

    - Logs to <config dir>/enchantlore.log (rotating, max ~1 MB, 3 backups)
    - Also logs to console (stderr)

    Args:
        config: When given, its logging.debug setting turns on DEBUG level.
        debug: Force DEBUG level regardless of config.
        log_dir: Directory for the log file. Defaults to the config directory.

    Returns:
        Path of the log file.
    """
    if config is not None:
        debug = debug or config.debug_logging
    if log_dir is None:
        log_dir = get_config_dir()
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    level = logging.DEBUG if debug else logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Re-running replaces handlers instead of stacking them
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=1_000_000,
        backupCount=3,
        encoding="utf-8",
    )
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s [%(levelname)s] %(name)s - %(message)s")
    )
    file_handler.setLevel(level)
    root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s - %(message)s"))
    console_handler.setLevel(level)
    root_logger.addHandler(console_handler)

    source = f" (config: {config.config_file})" if config is not None else ""
    root_logger.info(f"enchantlore logging at {logging.getLevelName(level)}{source}")
    root_logger.info(f"Log file: {log_file}")
    return log_file
