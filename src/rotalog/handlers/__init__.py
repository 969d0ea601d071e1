from __future__ import annotations

from .base import BaseHandler
from .console import ConsoleHandler
from .file import FileHandler, RotatingFileHandler
from .memory import BufferHandler
from .rotation import RotationPolicy
from .writer import BufferedFileWriter

__all__ = [
    "BaseHandler",
    "BufferHandler",
    "BufferedFileWriter",
    "ConsoleHandler",
    "FileHandler",
    "RotatingFileHandler",
    "RotationPolicy",
]
