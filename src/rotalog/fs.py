from __future__ import annotations

"""
FileSystem Helpers.

Thin wrappers over the os module for the on-disk layout of a rotating log:
the live file at <filename> and numbered backups at <filename>.<N>, with
larger N holding older content.
"""

import logging
import os
from typing import List

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def backup_path(filename: str, index: int) -> str:
    """
    Build the path of a numbered backup.

    Args:
        filename: Path of the live log file.
        index: Backup number, starting at 1 for the most recent generation.

    Returns:
        str: The backup path.
    """
    return f"{filename}.{index}"


def backup_paths(filename: str, count: int) -> List[str]:
    """Return backup paths 1..count, most recent first."""
    return [backup_path(filename, i) for i in range(1, count + 1)]


def ensure_parent_dir(path: str) -> None:
    """
    Create the parent directory hierarchy of a file if it is missing.

    Args:
        path: Target file path.
    """
    parent = os.path.dirname(os.path.abspath(path))
    if parent and not os.path.exists(parent):
        os.makedirs(parent, exist_ok=True)
        logger.debug(f"Created log directory {parent}")

# -----------------------------------------------------------------------------
# FILESYSTEM MUTATION API
# -----------------------------------------------------------------------------

def remove_if_exists(path: str) -> bool:
    """
    Delete a file if present.

    Returns:
        bool: True if a file was removed.
    """
    try:
        os.remove(path)
        return True
    except FileNotFoundError:
        return False
