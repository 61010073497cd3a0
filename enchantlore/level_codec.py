"""
Level codec for enchantment lore lines.

Converts an integer enchantment level to the suffix shown after the
enchant's display name ("Sharpness IV"), and back again.

Levels 1-10 use a fixed table of Roman numerals. Everything else,
including 11+ and non-positive values, is written as a plain decimal
number. The table is closed: there is no extended numeral construction
beyond X.
"""
from __future__ import annotations

import logging
import re
from typing import Dict

logger = logging.getLogger(__name__)

NUMERALS: Dict[int, str] = {
    1: "I",
    2: "II",
    3: "III",
    4: "IV",
    5: "V",
    6: "VI",
    7: "VII",
    8: "VIII",
    9: "IX",
    10: "X",
}

_NUMERAL_VALUES: Dict[str, int] = {token: value for value, token in NUMERALS.items()}

# ASCII digits only, optional sign; no whitespace or "_" separators
DECIMAL_RE = re.compile(r"[+-]?[0-9]+")


class MalformedLevelError(ValueError):
    """Raised when a level suffix is neither a known numeral nor an integer"""

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"Malformed enchantment level: {token!r}")


def encode(level: int) -> str:
    """
    Encode a level as its lore suffix.

    Args:
        level: Enchantment level. Callers treat 0 as "remove" and should
               not encode it.

    Returns:
        Roman numeral for 1-10, decimal string otherwise.
    """
    return NUMERALS.get(level, str(level))


def decode(token: str) -> int:
    """
    Decode a lore suffix back into a level.

    Args:
        token: Text following the display name and its separating space.

    Returns:
        The integer level.

    Raises:
        MalformedLevelError: If the token is not a numeral from the table
            and not a decimal integer.
    """
    value = _NUMERAL_VALUES.get(token)
    if value is not None:
        return value
    if not DECIMAL_RE.fullmatch(token):
        logger.debug(f"Could not decode level token {token!r}")
        raise MalformedLevelError(token)
    return int(token)


def is_level_token(token: str) -> bool:
    """Return True if decode() would accept the token."""
    return token in _NUMERAL_VALUES or DECIMAL_RE.fullmatch(token) is not None
