"""
Lore line transforms for custom enchantments.

Every function here works on a plain list of lore lines and never touches
an item directly. CustomEnchant fetches the lines from an item, runs one
of these transforms, and writes the result back as a new item snapshot.

Lines are matched by display-name prefix. Scans run from the end of the
lore toward the start, so when two lines share a prefix the one nearest
the tail wins.
"""
from __future__ import annotations

import logging
from typing import Callable, List, Sequence, Tuple

from enchantlore.level_codec import decode, encode

logger = logging.getLogger(__name__)

# Separates the display name from the level suffix
LEVEL_SEPARATOR = " "

Recognizer = Callable[[str], bool]


def format_line(display_name: str, level: int, max_level: int) -> str:
    """
    Build the lore line for an enchant at a level.

    Single-level enchants (max_level == 1) render as the bare display
    name at level 1 so they read as present/absent rather than leveled.
    """
    if level == 1 and max_level == 1:
        return display_name
    return f"{display_name}{LEVEL_SEPARATOR}{encode(level)}"


def find_slot(
    lines: Sequence[str],
    display_name: str,
    recognizes: Recognizer,
) -> Tuple[int, bool]:
    """
    Locate where an enchant's line should be written.

    Scans once from the end. An existing line for this enchant takes
    priority and stops the scan; until one is found, the position just
    after the last recognized enchant line is remembered as the insertion
    boundary.

    Args:
        lines: Current lore lines.
        display_name: Display name of the enchant being written.
        recognizes: Returns True for lines that belong to any registered
                    enchant.

    Returns:
        (index, replace). When replace is True the line at index is the
        existing line to overwrite; otherwise index is where a new line
        is inserted (len(lines) if no recognized line exists).
    """
    where = -1
    for i in range(len(lines) - 1, -1, -1):
        line = lines[i]
        if where == -1 and recognizes(line):
            where = i + 1
        if line.startswith(display_name):
            return i, True
    if where == -1:
        where = len(lines)
    return where, False


def write_line(
    lines: Sequence[str],
    display_name: str,
    line: str,
    recognizes: Recognizer,
) -> List[str]:
    """Return a copy of lines with the enchant's line replaced or inserted."""
    updated = list(lines)
    index, replace = find_slot(updated, display_name, recognizes)
    if replace:
        logger.debug(f"Replacing lore line {index}: {updated[index]!r} -> {line!r}")
        updated[index] = line
    else:
        logger.debug(f"Inserting lore line at {index}: {line!r}")
        updated.insert(index, line)
    return updated


def strip_lines(lines: Sequence[str], display_name: str) -> List[str]:
    """Return a copy of lines without any line starting with display_name."""
    return [line for line in lines if not line.startswith(display_name)]


def read_level(lines: Sequence[str], display_name: str) -> int:
    """
    Read an enchant's level from lore lines.

    Returns:
        The level from the matching line nearest the end, or 0 if no line
        starts with display_name.

    Raises:
        MalformedLevelError: If the matching line's suffix can't be decoded.
    """
    for i in range(len(lines) - 1, -1, -1):
        line = lines[i]
        if line.startswith(display_name):
            return parse_level(line, display_name)
    return 0


def parse_level(line: str, display_name: str) -> int:
    """Decode the level of a line already known to start with display_name."""
    if len(line) == len(display_name):
        return 1
    return decode(line[len(display_name) + len(LEVEL_SEPARATOR):])
