from __future__ import annotations

"""
File Handlers.

FileHandler persists formatted lines through a BufferedFileWriter so that
handle() never waits on disk I/O. RotatingFileHandler is the same handler
with a RotationPolicy plugged into the writer; it adds no state of its own.
"""

import atexit
from typing import Optional

from rotalog.formatter import FormatterLike
from rotalog.handlers.base import BaseHandler
from rotalog.handlers.rotation import RotationPolicy
from rotalog.handlers.writer import BufferedFileWriter, ErrorCallback
from rotalog.levels import LevelLike

LINE_TERMINATOR: str = "\n"


class FileHandler(BaseHandler):
    """
    Asynchronous, ordered, buffered persistence of records to one file.

    Args:
        level: Minimum level to persist.
        filename: Path of the log file.
        mode: "a" append (default), "w" truncate, "x" exclusive create.
        formatter: Template string, callable or Formatter.
        encoding: Encoding of the written lines.
        on_error: Receives I/O failures raised on the writer thread.
        rotation: Optional rotation policy for the writer.
    """

    def __init__(
            self,
            level: LevelLike,
            filename: str,
            mode: str = "a",
            formatter: FormatterLike = None,
            encoding: str = "utf-8",
            on_error: Optional[ErrorCallback] = None,
            rotation: Optional[RotationPolicy] = None,
    ) -> None:
        super().__init__(level, formatter)
        self._writer = BufferedFileWriter(
            filename,
            mode=mode,
            encoding=encoding,
            rotation=rotation,
            on_error=on_error,
        )

    @property
    def filename(self) -> str:
        return self._writer.filename

    @property
    def mode(self) -> str:
        return self._writer.mode

    @property
    def is_running(self) -> bool:
        return self._writer.is_running

    @property
    def dropped_records(self) -> int:
        """Records accepted by the threshold but refused while not running."""
        return self._writer.dropped

    @property
    def last_error(self) -> Optional[BaseException]:
        """Most recent I/O failure seen by the writer thread, if any."""
        return self._writer.last_error

    def setup(self) -> None:
        """
        Open the file and start the background writer.

        Calling it on a running handler is a no-op.

        Raises:
            ConfigurationError: On an invalid mode or rotation limits.
            FileExistsError: Under mode "x" when the target already exists.
            OSError: If the file cannot be opened.
        """
        if self._writer.open():
            atexit.register(self.destroy)

    def log(self, msg: str) -> None:
        self._writer.submit(msg + LINE_TERMINATOR)

    def flush(self) -> None:
        """Wait until every record handled so far is written to the file."""
        self._writer.flush()

    def destroy(self) -> None:
        """
        Drain pending records, flush and close the file.

        Blocks until the writer has finished. Safe to call repeatedly.
        """
        atexit.unregister(self.destroy)
        self._writer.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(level={self.level_name}, filename={self.filename!r}, mode={self.mode!r})"


class RotatingFileHandler(FileHandler):
    """
    FileHandler bounded by size, with a fixed ladder of numbered backups.

    The limits are validated at setup(), not at construction, so that a
    misconfigured handler fails before accepting records.

    Args:
        level: Minimum level to persist.
        filename: Path of the live log file.
        max_bytes: Size threshold of the live file; must be >= 1.
        max_backup_count: Number of backups kept; must be >= 1.
        mode: "a" append (default), "w" truncate and drop backups,
            "x" refuse if the live file or any backup exists.
    """

    def __init__(
            self,
            level: LevelLike,
            filename: str,
            max_bytes: int,
            max_backup_count: int,
            mode: str = "a",
            formatter: FormatterLike = None,
            encoding: str = "utf-8",
            on_error: Optional[ErrorCallback] = None,
    ) -> None:
        self._policy = RotationPolicy(max_bytes=max_bytes, max_backup_count=max_backup_count)
        super().__init__(
            level,
            filename,
            mode=mode,
            formatter=formatter,
            encoding=encoding,
            on_error=on_error,
            rotation=self._policy,
        )

    @property
    def max_bytes(self) -> int:
        return self._policy.max_bytes

    @property
    def max_backup_count(self) -> int:
        return self._policy.max_backup_count
