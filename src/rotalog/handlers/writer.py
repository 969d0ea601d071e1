from __future__ import annotations

"""
Buffered Writer Core.

Owns one open log file, an unbounded FIFO of pending lines and a single
background thread that drains the FIFO. Producers only enqueue; every touch
of the file object after open() happens on the writer thread. Each drain
cycle takes every entry currently available, writes them with one call and
flushes. An optional RotationPolicy is consulted line by line before the
bytes reach the live file.
"""

import codecs
import logging
import os
import queue
import threading
from typing import Any, BinaryIO, Callable, List, Optional

from rotalog.errors import ConfigurationError
from rotalog.fs import ensure_parent_dir
from rotalog.handlers.rotation import RotationPolicy

logger = logging.getLogger(__name__)

ErrorCallback = Callable[[BaseException], None]

OPEN_MODES = ("a", "w", "x")


def check_encoding(encoding: str) -> None:
    """
    Ensure a text encoding is known to the codec registry.

    Raises:
        ConfigurationError: If the codec cannot be found.
    """
    try:
        codecs.lookup(encoding)
    except (LookupError, TypeError):
        raise ConfigurationError(f"Unknown encoding: {encoding!r}") from None


class _FlushRequest:
    """Queue marker released once everything enqueued before it is on disk."""

    __slots__ = ("done",)

    def __init__(self) -> None:
        self.done = threading.Event()


# Queue marker ending the writer loop once everything before it is written
_STOP = object()


class BufferedFileWriter:
    """
    Single-consumer asynchronous appender for one log file.

    Args:
        filename: Path of the live log file.
        mode: "a" append, "w" truncate, "x" exclusive create.
        encoding: Text encoding applied to queued lines.
        rotation: Optional size-based rotation policy.
        on_error: Callback for I/O failures on the writer thread.
    """

    def __init__(
            self,
            filename: str,
            mode: str = "a",
            encoding: str = "utf-8",
            rotation: Optional[RotationPolicy] = None,
            on_error: Optional[ErrorCallback] = None,
    ) -> None:
        self._filename = os.fspath(filename)
        self._mode = mode
        self._encoding = encoding
        self._rotation = rotation
        self._on_error = on_error

        # Producer-side state
        self._lock = threading.Lock()
        self._running = False
        self._queue: "queue.Queue[Any]" = queue.Queue()
        self._thread: Optional[threading.Thread] = None
        self._dropped = 0

        # Writer-side state
        self._file: Optional[BinaryIO] = None
        self._current_size = 0
        self.last_error: Optional[BaseException] = None

    # -------------------------------------------------------------------------
    # PROPERTIES
    # -------------------------------------------------------------------------

    @property
    def filename(self) -> str:
        return self._filename

    @property
    def mode(self) -> str:
        return self._mode

    @property
    def rotation(self) -> Optional[RotationPolicy]:
        return self._rotation

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def dropped(self) -> int:
        """Number of lines refused because the writer was not running."""
        return self._dropped

    @property
    def current_size(self) -> int:
        """Bytes accounted to the live file. Exact once the writer is idle."""
        return self._current_size

    # -------------------------------------------------------------------------
    # LIFECYCLE
    # -------------------------------------------------------------------------

    def open(self) -> bool:
        """
        Open the live file and start the writer thread.

        Configuration errors are raised before the filesystem is touched.

        Returns:
            bool: False if the writer was already running.

        Raises:
            ConfigurationError: On an unknown mode or encoding, or invalid rotation limits.
            FileExistsError: Under mode "x" when the target already exists.
            OSError: If the file cannot be opened.
        """
        with self._lock:
            if self._running:
                return False

            if self._mode not in OPEN_MODES:
                raise ConfigurationError(
                    f"Unsupported open mode {self._mode!r}; expected one of {', '.join(OPEN_MODES)}."
                )
            check_encoding(self._encoding)
            if self._rotation is not None:
                self._rotation.validate()

            ensure_parent_dir(self._filename)
            if self._rotation is not None:
                self._rotation.prepare(self._filename, self._mode)

            self._file = open(self._filename, self._mode + "b")
            # Resync with the real size so accounting survives restarts
            self._current_size = os.fstat(self._file.fileno()).st_size
            self.last_error = None

            self._queue = queue.Queue()
            self._thread = threading.Thread(
                target=self._run,
                name=f"rotalog-writer[{os.path.basename(self._filename)}]",
                daemon=True,
            )
            self._running = True
            self._thread.start()

        logger.debug(f"Writer started for {self._filename} (mode={self._mode!r}, size={self._current_size})")
        return True

    def submit(self, line: str) -> bool:
        """
        Enqueue a fully terminated line without blocking.

        Returns:
            bool: False if the writer is not running and the line was dropped.
        """
        with self._lock:
            if not self._running:
                self._dropped += 1
                return False
            self._queue.put(line)
            return True

    def flush(self) -> None:
        """Block until every line enqueued before this call is written and flushed."""
        with self._lock:
            if not self._running:
                return
            request = _FlushRequest()
            self._queue.put(request)
        request.done.wait()

    def close(self) -> None:
        """
        Stop accepting lines, drain the queue, flush and close the file.

        Waits without timeout. Calling it on a stopped writer is a no-op.
        """
        with self._lock:
            if not self._running:
                return
            self._running = False
            self._queue.put(_STOP)
            thread = self._thread

        if thread is not None:
            thread.join()
        self._thread = None
        logger.debug(f"Writer stopped for {self._filename}")

    # -------------------------------------------------------------------------
    # WRITER THREAD
    # -------------------------------------------------------------------------

    def _run(self) -> None:
        batch: List[Any] = []
        try:
            stop = False
            while not stop:
                batch = [self._queue.get()]
                while True:
                    try:
                        batch.append(self._queue.get_nowait())
                    except queue.Empty:
                        break
                stop = self._drain(batch)
                batch = []
        except Exception as e:
            self._report(e)
            self._abandon(batch)
        finally:
            self._close_file()

    def _drain(self, batch: List[Any]) -> bool:
        """Write one drain cycle; returns True once the stop marker is seen."""
        stop = any(item is _STOP for item in batch)
        try:
            lines = [
                item.encode(self._encoding, errors="replace")
                for item in batch
                if isinstance(item, str)
            ]
            self._write_lines(lines)
            if self._file is not None:
                self._file.flush()
        except Exception as e:
            self._report(e)
            self._resync_size()
        finally:
            for item in batch:
                if isinstance(item, _FlushRequest):
                    item.done.set()
        return stop

    def _write_lines(self, lines: List[bytes]) -> None:
        if not lines:
            return

        if self._rotation is None:
            data = b"".join(lines)
            self._ensure_open().write(data)
            self._current_size += len(data)
            return

        # current_size already counts the pending segment
        segment: List[bytes] = []
        for data in lines:
            if self._rotation.should_rotate(self._current_size, len(data)):
                if segment:
                    self._ensure_open().write(b"".join(segment))
                    segment = []
                self._rotate(self._rotation)
            segment.append(data)
            self._current_size += len(data)
        if segment:
            self._ensure_open().write(b"".join(segment))

    def _rotate(self, policy: RotationPolicy) -> None:
        if self._file is not None:
            self._file.flush()
            self._file.close()
            self._file = None
        try:
            policy.rotate(self._filename)
        finally:
            # Fresh live file after a rotation, the old one if the shift failed
            self._ensure_open()
        logger.debug(f"Rotated {self._filename} (backups={policy.max_backup_count})")

    def _ensure_open(self) -> BinaryIO:
        """Return the live file, reopening it for append after a rotation or failure."""
        if self._file is None:
            self._file = open(self._filename, "ab")
            self._current_size = os.fstat(self._file.fileno()).st_size
        return self._file

    def _resync_size(self) -> None:
        if self._file is None:
            return
        try:
            self._current_size = os.fstat(self._file.fileno()).st_size
        except (OSError, ValueError):
            # Unusable handle; the next cycle reopens the file
            self._file = None

    def _abandon(self, in_flight: List[Any]) -> None:
        """Stop accepting lines after the loop died and release blocked flush() callers."""
        with self._lock:
            self._running = False
        pending = list(in_flight)
        while True:
            try:
                pending.append(self._queue.get_nowait())
            except queue.Empty:
                break
        lost = 0
        for item in pending:
            if isinstance(item, _FlushRequest):
                item.done.set()
            elif isinstance(item, str):
                lost += 1
        with self._lock:
            self._dropped += lost
        logger.error(f"Writer for {self._filename} stopped unexpectedly")

    def _close_file(self) -> None:
        if self._file is None:
            return
        try:
            self._file.flush()
            self._file.close()
        except (OSError, ValueError) as e:
            self._report(e)
        finally:
            self._file = None

    def _report(self, exc: BaseException) -> None:
        self.last_error = exc
        if self._on_error is None:
            logger.error(f"Background write to {self._filename} failed", exc_info=exc)
            return
        try:
            self._on_error(exc)
        except Exception:
            logger.exception(f"Error callback for {self._filename} raised")
