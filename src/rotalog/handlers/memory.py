from __future__ import annotations

"""In-memory sink, mainly for tests and for inspecting handler output."""

import threading
from typing import List

from rotalog.formatter import FormatterLike
from rotalog.handlers.base import BaseHandler
from rotalog.levels import LevelLike


class BufferHandler(BaseHandler):
    """Collect formatted messages in order."""

    def __init__(self, level: LevelLike, formatter: FormatterLike = None) -> None:
        super().__init__(level, formatter)
        self._lock = threading.Lock()
        self._messages: List[str] = []

    @property
    def messages(self) -> List[str]:
        """Snapshot of the collected messages."""
        with self._lock:
            return list(self._messages)

    def log(self, msg: str) -> None:
        with self._lock:
            self._messages.append(msg)

    def clear(self) -> None:
        with self._lock:
            self._messages.clear()
