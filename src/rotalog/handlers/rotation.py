from __future__ import annotations

"""
Size-Based Rotation Policy.

Holds the rotation limits and performs the numbered-backup ladder shift.
The policy is passed to the buffered writer core; it never owns the open
file, it only decides when to rotate and moves files around on disk.
"""

import errno
import logging
import os
from dataclasses import dataclass

from rotalog.errors import ConfigurationError
from rotalog.fs import backup_path, backup_paths, remove_if_exists

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RotationPolicy:
    """
    Rotation limits for a live log file.

    Attributes:
        max_bytes: Size threshold of the live file.
        max_backup_count: Number of numbered backups to keep.
    """
    max_bytes: int
    max_backup_count: int

    def validate(self) -> None:
        """
        Enforce the lower bounds on both limits.

        Raises:
            ConfigurationError: If either limit is below 1.
        """
        if self.max_bytes < 1:
            raise ConfigurationError("maxBytes cannot be less than 1")
        if self.max_backup_count < 1:
            raise ConfigurationError("maxBackupCount cannot be less than 1")

    def prepare(self, filename: str, mode: str) -> None:
        """
        Apply the open-mode policy to the backup ladder before opening.

        Mode "w" deletes every in-range backup. Mode "x" refuses to start if
        the live file or any in-range backup exists.

        Raises:
            FileExistsError: Under mode "x", naming the first conflict found.
        """
        if mode == "w":
            for path in backup_paths(filename, self.max_backup_count):
                if remove_if_exists(path):
                    logger.debug(f"Removed stale backup {path}")
        elif mode == "x":
            if os.path.exists(filename):
                raise FileExistsError(errno.EEXIST, f"Log file {filename} already exists", filename)
            for path in backup_paths(filename, self.max_backup_count):
                if os.path.exists(path):
                    raise FileExistsError(
                        errno.EEXIST, f"Backup log file {path} already exists", path
                    )

    def should_rotate(self, current_size: int, incoming: int) -> bool:
        """
        Decide whether a write of `incoming` bytes must be preceded by a rotation.

        Rotation normally triggers as soon as current + incoming exceeds
        max_bytes. An empty live file is the exception: it is never rotated,
        because doing so would only produce an empty backup. A single line
        larger than max_bytes is therefore written to it as is.
        """
        return current_size > 0 and current_size + incoming > self.max_bytes

    def rotate(self, filename: str) -> None:
        """
        Shift the backup ladder by one and move the live file to backup 1.

        Backup max_backup_count is overwritten. The caller must have closed
        the live file and is responsible for reopening it.
        """
        for i in range(self.max_backup_count - 1, 0, -1):
            src = backup_path(filename, i)
            if os.path.exists(src):
                os.replace(src, backup_path(filename, i + 1))
        if os.path.exists(filename):
            os.replace(filename, backup_path(filename, 1))
