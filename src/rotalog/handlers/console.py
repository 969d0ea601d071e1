from __future__ import annotations

"""Console sink writing one formatted line per record to a text stream."""

import sys
from typing import Optional, TextIO

from rotalog.formatter import FormatterLike
from rotalog.handlers.base import BaseHandler
from rotalog.levels import LevelLike


class ConsoleHandler(BaseHandler):
    """
    Write formatted records to a stream, sys.stderr unless told otherwise.

    The stream is resolved at emit time so that redirected or captured
    streams are honoured.
    """

    def __init__(
            self,
            level: LevelLike,
            formatter: FormatterLike = None,
            stream: Optional[TextIO] = None,
    ) -> None:
        super().__init__(level, formatter)
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stderr

    def log(self, msg: str) -> None:
        stream = self.stream
        try:
            stream.write(msg + "\n")
            stream.flush()
        except (OSError, ValueError):
            # Closed or broken stream; logging must not crash the caller
            pass
