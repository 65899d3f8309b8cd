"""
namedlog/core/levels.py
-----------------------
Severity levels, file split policies and output kinds, plus the built-in
defaults used whenever a configured value is missing or invalid.
"""

from __future__ import annotations
import logging
from enum import Enum, IntEnum
from typing import Any, FrozenSet, Optional


class Level(IntEnum):
    DEBUG = 1
    INFO = 2
    WARNING = 3
    ERROR = 4

    @property
    def stdlib(self) -> int:
        """Matching level number of the standard ``logging`` module."""
        return _STDLIB_LEVELS[self]


_STDLIB_LEVELS = {
    Level.DEBUG: logging.DEBUG,
    Level.INFO: logging.INFO,
    Level.WARNING: logging.WARNING,
    Level.ERROR: logging.ERROR,
}


class SplitPolicy(IntEnum):
    NONE = 1
    DAY = 2
    MONTH = 3


class Output(Enum):
    CONSOLE = "CONSOLE"
    FILE = "FILE"


DEFAULT_LEVEL = Level.DEBUG
DEFAULT_SPLIT = SplitPolicy.NONE
DEFAULT_LOG_DIR = "./log/"
DEFAULT_OUTPUTS: FrozenSet[Output] = frozenset({Output.FILE})


def _as_int(value: Any) -> Optional[int]:
    # JSON booleans decode to bool, which is an int subclass
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def coerce_level(value: Any) -> Optional[Level]:
    """Return the Level for an integer in range, else None."""
    raw = _as_int(value)
    if raw is None:
        return None
    try:
        return Level(raw)
    except ValueError:
        return None


def coerce_split(value: Any) -> Optional[SplitPolicy]:
    """Return the SplitPolicy for an integer in range, else None."""
    raw = _as_int(value)
    if raw is None:
        return None
    try:
        return SplitPolicy(raw)
    except ValueError:
        return None


def parse_outputs(value: Any) -> FrozenSet[Output]:
    """
    Read the ``Out`` token string. Tokens are matched case-insensitively and
    may be combined in any way ("file|console", "CONSOLE,FILE"). Anything
    that names no known output yields the file-only default.
    """
    if not isinstance(value, str):
        return DEFAULT_OUTPUTS
    text = value.upper()
    found = frozenset(o for o in Output if o.value in text)
    return found or DEFAULT_OUTPUTS
