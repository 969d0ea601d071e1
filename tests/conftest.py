from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures for log file paths and record construction.
"""

import os
import sys
from pathlib import Path
from typing import Callable

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from rotalog.levels import LogLevel  # noqa: E402
from rotalog.record import LogRecord  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def log_file(tmp_path: Path) -> Path:
    """Return the path of a not-yet-existing log file inside tmp_path."""
    return tmp_path / "test_log.file"


@pytest.fixture
def make_record() -> Callable[..., LogRecord]:
    """
    Return a factory for records.

    The default record, "AAA" at ERROR, formats to 'ERROR AAA' and is
    written as 10 bytes once the line terminator is added.
    """
    def _factory(msg: str = "AAA", level: LogLevel = LogLevel.ERROR, **kwargs) -> LogRecord:
        return LogRecord(msg, level=level, **kwargs)

    return _factory
