from __future__ import annotations

"""
Log Record Model.

One immutable value per log call. Handlers that buffer keep the formatted
string rather than the record itself, so records are never shared across
threads after formatting.
"""

from dataclasses import dataclass, field
from datetime import datetime as _datetime
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple

from rotalog.levels import LevelLike, LogLevel, resolve_level


@dataclass(frozen=True)
class LogRecord:
    """
    Immutable description of a single log event.

    Attributes:
        msg: The log message.
        args: Positional arguments supplied alongside the message.
        level: Severity of the event.
        datetime: Creation instant; defaults to now.
        logger_name: Optional name of the emitting component.
        extra: Custom values exposed to template formatters.
    """
    msg: str
    args: Tuple[Any, ...] = ()
    level: LevelLike = LogLevel.INFO
    datetime: Optional[_datetime] = None
    logger_name: str = ""
    extra: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        # Frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "args", tuple(self.args))
        object.__setattr__(self, "level", resolve_level(self.level))
        if self.datetime is None:
            object.__setattr__(self, "datetime", _datetime.now())
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))

    @property
    def level_name(self) -> str:
        """Canonical name of the record level."""
        return self.level.name
