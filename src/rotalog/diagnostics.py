from __future__ import annotations

"""
Library Diagnostics Channel.

rotalog reports its own lifecycle events (writer start/stop, rotations,
formatter fallbacks, background I/O failures) through the stdlib logging
hierarchy under the "rotalog" logger. Nothing is attached by default;
applications opt in with configure_diagnostics() or their own handlers.
"""

import logging
import sys

# Internal attribute used to tag and identify our own handlers
_HANDLER_TAG_ATTR: str = "_rotalog_diagnostics_handler"

DIAGNOSTICS_LOGGER_NAME: str = "rotalog"
DIAGNOSTICS_FORMAT: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DIAGNOSTICS_DATEFMT: str = "%Y-%m-%d %H:%M:%S"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def configure_diagnostics(level: str = "WARNING", *, force: bool = False) -> logging.Logger:
    """
    Attach a single stderr handler to the rotalog diagnostics logger.

    Repeated calls keep exactly one tagged handler; the level is updated in
    place unless force is set, in which case the handler is rebuilt.

    Args:
        level: Stdlib level name for the diagnostics channel.
        force: If True, replace the existing tagged handler.

    Returns:
        logging.Logger: The diagnostics logger.
    """
    diag = logging.getLogger(DIAGNOSTICS_LOGGER_NAME)
    level_int = logging.getLevelName(str(level).strip().upper())
    if not isinstance(level_int, int):
        level_int = logging.WARNING
    diag.setLevel(level_int)

    ours = [h for h in diag.handlers if _is_our_handler(h)]
    if ours and not force:
        for h in ours:
            h.setLevel(level_int)
        return diag

    for h in ours:
        diag.removeHandler(h)
        h.close()

    sh = logging.StreamHandler(sys.stderr)
    sh.setLevel(level_int)
    sh.setFormatter(logging.Formatter(DIAGNOSTICS_FORMAT, datefmt=DIAGNOSTICS_DATEFMT))
    setattr(sh, _HANDLER_TAG_ATTR, True)
    diag.addHandler(sh)
    return diag


def reset_diagnostics() -> None:
    """Detach and close every handler added by configure_diagnostics()."""
    diag = logging.getLogger(DIAGNOSTICS_LOGGER_NAME)
    for h in list(diag.handlers):
        if _is_our_handler(h):
            diag.removeHandler(h)
            h.close()
    diag.setLevel(logging.NOTSET)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _is_our_handler(handler: logging.Handler) -> bool:
    """Check whether a handler was created by configure_diagnostics()."""
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))
