from __future__ import annotations

"""
Integration tests for the buffered FileHandler.

Verifies the open-mode policies, the asynchronous queue/writer
architecture, explicit flushing and the drain guarantee on destroy().
"""

import threading
from pathlib import Path
from typing import Callable, List

import pytest

from rotalog.errors import ConfigurationError
from rotalog.handlers import FileHandler
from rotalog.levels import LogLevel
from rotalog.record import LogRecord

RecordFactory = Callable[..., LogRecord]

# -----------------------------------------------------------------------------
# OPEN MODES
# -----------------------------------------------------------------------------

def test_mode_w_wipes_existing_file(log_file: Path, make_record: RecordFactory) -> None:
    """TC-01: Re-opening with mode 'w' truncates, so both cycles leave equal sizes."""
    handler = FileHandler("WARNING", str(log_file), mode="w")

    handler.setup()
    handler.handle(make_record("Hello World", level=LogLevel.WARNING))
    handler.destroy()
    first_size = log_file.stat().st_size

    handler.setup()
    handler.handle(make_record("Hello World", level=LogLevel.WARNING))
    handler.destroy()
    second_size = log_file.stat().st_size

    assert first_size == second_size == len("WARNING Hello World\n")


def test_mode_x_fails_if_file_exists(log_file: Path) -> None:
    """TC-02: Exclusive creation refuses an existing file."""
    log_file.write_text("hello world")
    handler = FileHandler("WARNING", str(log_file), mode="x")

    with pytest.raises(FileExistsError, match="ile exists"):
        handler.setup()
    assert not handler.is_running


def test_mode_x_creates_missing_file(log_file: Path, make_record: RecordFactory) -> None:
    """TC-03: Exclusive creation succeeds on a fresh path."""
    handler = FileHandler("WARNING", str(log_file), mode="x")
    handler.setup()
    handler.handle(make_record())
    handler.destroy()
    assert log_file.read_text() == "ERROR AAA\n"


def test_mode_a_appends(log_file: Path, make_record: RecordFactory) -> None:
    """TC-04: Append mode keeps existing content."""
    log_file.write_text("previous\n")
    handler = FileHandler("WARNING", str(log_file))
    handler.setup()
    handler.handle(make_record())
    handler.destroy()
    assert log_file.read_text() == "previous\nERROR AAA\n"


def test_unknown_mode_is_configuration_error(log_file: Path) -> None:
    """TC-05: Unsupported modes fail at setup without creating the file."""
    handler = FileHandler("WARNING", str(log_file), mode="r+")
    with pytest.raises(ConfigurationError):
        handler.setup()
    assert not log_file.exists()


def test_setup_creates_parent_directories(tmp_path: Path, make_record: RecordFactory) -> None:
    """TC-06: Missing parent directories are created on setup."""
    target = tmp_path / "nested" / "logs" / "app.log"
    handler = FileHandler("INFO", str(target))
    handler.setup()
    handler.handle(make_record())
    handler.destroy()
    assert target.read_text() == "ERROR AAA\n"

# -----------------------------------------------------------------------------
# QUEUE AND WRITER BEHAVIOUR
# -----------------------------------------------------------------------------

def test_flush_makes_records_visible(log_file: Path, make_record: RecordFactory) -> None:
    """TC-07: flush() blocks until queued records are on disk."""
    handler = FileHandler("WARNING", str(log_file), mode="w")
    handler.setup()
    try:
        handler.handle(make_record())
        handler.flush()
        assert log_file.stat().st_size == 10

        handler.handle(make_record())
        handler.flush()
        assert log_file.stat().st_size == 20
    finally:
        handler.destroy()


def test_records_below_threshold_are_not_written(log_file: Path, make_record: RecordFactory) -> None:
    """TC-08: The threshold applies before anything is queued."""
    handler = FileHandler("ERROR", str(log_file), mode="w")
    handler.setup()
    handler.handle(make_record("skip", level=LogLevel.WARNING))
    handler.handle(make_record("keep", level=LogLevel.CRITICAL))
    handler.destroy()
    assert log_file.read_text() == "CRITICAL keep\n"


def test_destroy_drains_queue(log_file: Path, make_record: RecordFactory) -> None:
    """TC-09: destroy() waits for every queued record to be written."""
    handler = FileHandler("WARNING", str(log_file), mode="w")
    handler.setup()
    for _ in range(10000):
        handler.handle(make_record())
    handler.destroy()
    assert log_file.stat().st_size == 10 * 10000


def test_concurrent_producers_keep_per_thread_order(log_file: Path) -> None:
    """TC-10: Many producers lose nothing and each thread's records stay ordered."""
    handler = FileHandler("DEBUG", str(log_file), mode="w", formatter="{msg}")
    handler.setup()

    def produce(tag: str) -> None:
        for i in range(500):
            handler.handle(LogRecord(f"{tag}:{i}", level=LogLevel.INFO))

    threads = [threading.Thread(target=produce, args=(f"t{n}",)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    handler.destroy()

    lines = log_file.read_text().splitlines()
    assert len(lines) == 4 * 500
    for n in range(4):
        seq = [int(line.split(":")[1]) for line in lines if line.startswith(f"t{n}:")]
        assert seq == list(range(500))


def test_handle_before_setup_and_after_destroy_is_dropped(
        log_file: Path, make_record: RecordFactory
) -> None:
    """TC-11: handle() never raises on a stopped handler; records are counted as dropped."""
    handler = FileHandler("WARNING", str(log_file), mode="w")
    handler.handle(make_record())
    assert handler.dropped_records == 1

    handler.setup()
    handler.handle(make_record())
    handler.destroy()

    handler.handle(make_record())
    assert handler.dropped_records == 2
    assert log_file.read_text() == "ERROR AAA\n"


def test_setup_and_destroy_are_idempotent(log_file: Path, make_record: RecordFactory) -> None:
    """TC-12: A second setup() keeps the running writer; a second destroy() is a no-op."""
    handler = FileHandler("WARNING", str(log_file), mode="w")
    handler.setup()
    handler.setup()
    assert handler.is_running
    handler.handle(make_record())
    handler.destroy()
    handler.destroy()
    assert not handler.is_running
    assert log_file.stat().st_size == 10


def test_flush_on_stopped_handler_returns(log_file: Path) -> None:
    """TC-13: flush() outside the running window does not block."""
    handler = FileHandler("WARNING", str(log_file))
    handler.flush()


def test_write_failure_reaches_error_callback(log_file: Path, make_record: RecordFactory) -> None:
    """TC-14: Background I/O failures go to on_error and are kept as last_error."""
    errors: List[BaseException] = []
    handler = FileHandler("WARNING", str(log_file), mode="w", on_error=errors.append)
    handler.setup()

    # Swap the writer's file for one that cannot be written
    writer = handler._writer
    handler.flush()
    writer._file.close()
    writer._file = open(str(log_file), "rb")

    handler.handle(make_record())
    handler.flush()
    handler.destroy()

    assert errors
    assert handler.last_error is errors[0]
    assert isinstance(errors[0], OSError)


def test_writer_recovers_after_failure(log_file: Path, make_record: RecordFactory) -> None:
    """TC-15: After a failed cycle, later records are written to a reopened file."""
    errors: List[BaseException] = []
    handler = FileHandler("WARNING", str(log_file), mode="w", on_error=errors.append)
    handler.setup()

    writer = handler._writer
    handler.flush()
    writer._file.close()

    handler.handle(make_record("lost"))
    handler.flush()
    handler.handle(make_record("kept"))
    handler.destroy()

    assert errors
    assert log_file.read_text() == "ERROR kept\n"


def test_unknown_encoding_is_configuration_error(log_file: Path) -> None:
    """TC-16: An unregistered codec fails setup before the file is created."""
    handler = FileHandler("WARNING", str(log_file), encoding="no-such-codec")
    with pytest.raises(ConfigurationError, match="Unknown encoding"):
        handler.setup()
    assert not handler.is_running
    assert not log_file.exists()


def _flush_in_thread(handler: FileHandler) -> threading.Thread:
    worker = threading.Thread(target=handler.flush, daemon=True)
    worker.start()
    worker.join(5)
    return worker


def test_encoding_failure_reaches_error_callback(log_file: Path, make_record: RecordFactory) -> None:
    """TC-17: A non-OS failure while encoding is reported and flush() still returns."""
    errors: List[BaseException] = []
    handler = FileHandler("WARNING", str(log_file), mode="w", on_error=errors.append)
    handler.setup()

    writer = handler._writer
    writer._encoding = "no-such-codec"
    handler.handle(make_record("lost"))

    assert not _flush_in_thread(handler).is_alive()
    assert isinstance(handler.last_error, LookupError)
    assert errors == [handler.last_error]
    assert handler.is_running

    writer._encoding = "utf-8"
    handler.handle(make_record("kept"))
    handler.destroy()

    assert log_file.read_text() == "ERROR kept\n"


def test_dead_writer_loop_releases_flush(log_file: Path, make_record: RecordFactory) -> None:
    """TC-18: If the writer loop dies, flush() returns and the handler stops accepting."""
    errors: List[BaseException] = []
    handler = FileHandler("WARNING", str(log_file), mode="w", on_error=errors.append)
    handler.setup()

    def broken_drain(batch: list) -> bool:
        raise RuntimeError("writer loop crashed")

    handler._writer._drain = broken_drain  # type: ignore[method-assign]
    handler.handle(make_record())

    assert not _flush_in_thread(handler).is_alive()
    assert isinstance(handler.last_error, RuntimeError)
    assert not handler.is_running

    dropped = handler.dropped_records
    handler.handle(make_record())
    assert handler.dropped_records == dropped + 1
    handler.destroy()
