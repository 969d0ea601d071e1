from __future__ import annotations

"""
rotalog: leveled log handlers with asynchronous buffered file writes and
size-triggered rotation into numbered backups.
"""

from .config import HandlerConfig, build_config_from_dict, create_handler, validate_config
from .diagnostics import configure_diagnostics, reset_diagnostics
from .errors import ConfigurationError, InvalidLevelError
from .formatter import DEFAULT_FORMAT, Formatter
from .handlers import (
    BaseHandler,
    BufferHandler,
    ConsoleHandler,
    FileHandler,
    RotatingFileHandler,
    RotationPolicy,
)
from .levels import LEVEL_NAMES, LogLevel, get_level_by_name, get_level_name, resolve_level
from .record import LogRecord

__version__ = "0.1.0"

__all__ = [
    "BaseHandler",
    "BufferHandler",
    "ConfigurationError",
    "ConsoleHandler",
    "DEFAULT_FORMAT",
    "FileHandler",
    "Formatter",
    "HandlerConfig",
    "InvalidLevelError",
    "LEVEL_NAMES",
    "LogLevel",
    "LogRecord",
    "RotatingFileHandler",
    "RotationPolicy",
    "build_config_from_dict",
    "configure_diagnostics",
    "create_handler",
    "get_level_by_name",
    "get_level_name",
    "reset_diagnostics",
    "resolve_level",
    "validate_config",
]
