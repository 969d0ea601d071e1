from __future__ import annotations

"""
Level Registry.

Maps the five well-known severity names to their numeric ranks and back.
Ranks are spaced by ten so that they line up with the stdlib logging
constants, which keeps the diagnostics channel and user records comparable.
"""

from enum import IntEnum
from typing import Dict, List, Union

from rotalog.errors import InvalidLevelError


class LogLevel(IntEnum):
    """
    Severity levels in increasing order of importance.

    IntEnum keeps threshold checks a plain integer comparison.
    """

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50


LevelLike = Union[LogLevel, int, str]

LEVEL_NAMES: List[str] = [level.name for level in LogLevel]

_RANK_BY_NAME: Dict[str, int] = {level.name: int(level) for level in LogLevel}
_NAME_BY_RANK: Dict[int, str] = {int(level): level.name for level in LogLevel}


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def get_level_by_name(name: str) -> int:
    """
    Resolve a level name to its numeric rank.

    Args:
        name: Level name; surrounding whitespace and case are ignored.

    Returns:
        int: The rank of the level.

    Raises:
        InvalidLevelError: If the name is not registered.
    """
    key = str(name).strip().upper()
    try:
        return _RANK_BY_NAME[key]
    except KeyError:
        raise InvalidLevelError(f"Unknown log level name: {name!r}") from None


def get_level_name(rank: int) -> str:
    """
    Resolve a numeric rank to its canonical level name.

    Raises:
        InvalidLevelError: If the rank is not registered.
    """
    if isinstance(rank, bool) or not isinstance(rank, int):
        raise InvalidLevelError(f"Unknown log level rank: {rank!r}")
    try:
        return _NAME_BY_RANK[rank]
    except KeyError:
        raise InvalidLevelError(f"Unknown log level rank: {rank!r}") from None


def resolve_level(level: LevelLike) -> LogLevel:
    """
    Normalize a level given as a LogLevel, a name or a rank.

    Args:
        level: Any accepted level representation.

    Returns:
        LogLevel: The matching registered level.

    Raises:
        InvalidLevelError: If the value does not denote a registered level.
    """
    if isinstance(level, LogLevel):
        return level
    if isinstance(level, bool):
        raise InvalidLevelError(f"Unknown log level: {level!r}")
    if isinstance(level, int):
        get_level_name(level)
        return LogLevel(level)
    if isinstance(level, str):
        return LogLevel(get_level_by_name(level))
    raise InvalidLevelError(f"Unknown log level: {level!r}")
