from __future__ import annotations

"""
Handler Configuration Models.

Defines the immutable configuration of a file handler, a tolerant loader
for plain dictionaries (e.g. parsed JSON or TOML) and a factory that turns
a validated configuration into the matching handler instance.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from rotalog.errors import ConfigurationError
from rotalog.formatter import FormatterFn
from rotalog.handlers.file import FileHandler, RotatingFileHandler
from rotalog.handlers.writer import OPEN_MODES, ErrorCallback, check_encoding
from rotalog.levels import LevelLike, resolve_level

logger = logging.getLogger(__name__)

DEFAULT_LEVEL: str = "INFO"
DEFAULT_MODE: str = "a"
DEFAULT_MAX_BACKUP_COUNT: int = 3


@dataclass(frozen=True)
class HandlerConfig:
    """
    Immutable description of a file or rotating file handler.

    Attributes:
        filename: Path of the live log file.
        level: Minimum severity, as a name or rank.
        mode: Open mode: "a", "w" or "x".
        formatter: Optional template string or callable.
        max_bytes: Rotation threshold; None disables rotation.
        max_backup_count: Backups kept when rotation is enabled.
        encoding: Encoding of written lines.
    """
    filename: str
    level: LevelLike = DEFAULT_LEVEL
    mode: str = DEFAULT_MODE
    formatter: Union[str, FormatterFn, None] = None

    max_bytes: Optional[int] = None
    max_backup_count: int = DEFAULT_MAX_BACKUP_COUNT

    encoding: str = "utf-8"

    @property
    def rotating(self) -> bool:
        return self.max_bytes is not None


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_config_from_dict(d: Dict[str, Any]) -> HandlerConfig:
    """
    Build a HandlerConfig from a dict.

    Accepted keys (tolerant):
      - filename / file / log_file
      - level
      - mode
      - formatter / format
      - max_bytes / maxBytes
      - max_backup_count / maxBackupCount / backup_count
      - encoding

    Raises:
        ConfigurationError: If no filename is given or a limit is not an integer.
    """
    filename = d.get("filename") or d.get("file") or d.get("log_file")
    if not filename:
        raise ConfigurationError("Handler configuration requires a filename.")

    max_bytes = _first_present(d, "max_bytes", "maxBytes")
    backups = _first_present(d, "max_backup_count", "maxBackupCount", "backup_count")

    return HandlerConfig(
        filename=str(filename),
        level=d.get("level") or DEFAULT_LEVEL,
        mode=str(d.get("mode") or DEFAULT_MODE).strip().lower(),
        formatter=d.get("formatter") or d.get("format"),
        max_bytes=None if max_bytes is None else _as_int(max_bytes, "max_bytes"),
        max_backup_count=(
            DEFAULT_MAX_BACKUP_COUNT if backups is None else _as_int(backups, "max_backup_count")
        ),
        encoding=str(d.get("encoding") or "utf-8"),
    )


def validate_config(cfg: HandlerConfig) -> HandlerConfig:
    """
    Check a configuration before any handler is built.

    Returns:
        HandlerConfig: The same configuration, for chaining.

    Raises:
        ConfigurationError: On a missing filename, an unknown mode or encoding, or bad limits.
        InvalidLevelError: On an unregistered level.
    """
    if not cfg.filename:
        raise ConfigurationError("Handler configuration requires a filename.")
    if cfg.mode not in OPEN_MODES:
        raise ConfigurationError(
            f"Unsupported open mode {cfg.mode!r}; expected one of {', '.join(OPEN_MODES)}."
        )
    resolve_level(cfg.level)
    check_encoding(cfg.encoding)
    if cfg.max_bytes is not None:
        if cfg.max_bytes < 1:
            raise ConfigurationError("maxBytes cannot be less than 1")
        if cfg.max_backup_count < 1:
            raise ConfigurationError("maxBackupCount cannot be less than 1")
    return cfg


def create_handler(
        cfg: HandlerConfig,
        *,
        on_error: Optional[ErrorCallback] = None,
) -> FileHandler:
    """
    Instantiate the handler described by a configuration.

    A RotatingFileHandler is returned when max_bytes is set, a plain
    FileHandler otherwise. setup() is left to the caller.

    Args:
        cfg: Validated or raw configuration.
        on_error: Optional background I/O error callback.

    Returns:
        FileHandler: The handler, not yet set up.
    """
    validate_config(cfg)

    if cfg.max_bytes is not None:
        logger.debug(
            f"Creating rotating handler for {cfg.filename} "
            f"(max_bytes={cfg.max_bytes}, backups={cfg.max_backup_count})"
        )
        return RotatingFileHandler(
            cfg.level,
            cfg.filename,
            max_bytes=cfg.max_bytes,
            max_backup_count=cfg.max_backup_count,
            mode=cfg.mode,
            formatter=cfg.formatter,
            encoding=cfg.encoding,
            on_error=on_error,
        )

    logger.debug(f"Creating file handler for {cfg.filename}")
    return FileHandler(
        cfg.level,
        cfg.filename,
        mode=cfg.mode,
        formatter=cfg.formatter,
        encoding=cfg.encoding,
        on_error=on_error,
    )


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _first_present(d: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if d.get(key) is not None:
            return d[key]
    return None


def _as_int(value: Any, field: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"Field '{field}' must be an integer, got bool.")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(
            f"Field '{field}' must be an integer, got {type(value).__name__}."
        ) from None
