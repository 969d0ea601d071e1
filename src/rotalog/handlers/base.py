from __future__ import annotations

"""
Base Handler Contract.

A handler owns a minimum level and a formatter. handle() drops records
below the threshold, formats the rest and passes the string to the
sink-specific log() primitive. setup() and destroy() bracket any external
resource the sink needs.
"""

from abc import ABC, abstractmethod

from rotalog.formatter import Formatter, FormatterLike, as_formatter
from rotalog.levels import LevelLike, LogLevel, resolve_level
from rotalog.record import LogRecord


class BaseHandler(ABC):
    """
    Threshold filtering and formatting shared by every sink.

    Args:
        level: Minimum level, as a LogLevel, a name or a rank.
        formatter: Template string, callable or Formatter.

    Raises:
        InvalidLevelError: If the level is not registered.
    """

    def __init__(self, level: LevelLike, formatter: FormatterLike = None) -> None:
        self._level: LogLevel = resolve_level(level)
        self._formatter: Formatter = as_formatter(formatter)

    @property
    def level(self) -> LogLevel:
        return self._level

    @property
    def level_name(self) -> str:
        return self._level.name

    @property
    def formatter(self) -> Formatter:
        return self._formatter

    def handle(self, record: LogRecord) -> None:
        """
        Format and emit a record if it passes the level threshold.

        Records below the threshold are dropped silently.
        """
        if record.level < self._level:
            return
        self.log(self.format(record))

    def format(self, record: LogRecord) -> str:
        return self._formatter.format(record)

    @abstractmethod
    def log(self, msg: str) -> None:
        """Emit an already formatted message to the sink."""

    def setup(self) -> None:
        """Acquire external resources. No-op by default."""

    def destroy(self) -> None:
        """Release external resources. No-op by default."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(level={self.level_name})"
