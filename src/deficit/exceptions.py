"""Exception types raised outside the pure computation paths."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class DeficitError(Exception):
    """Base class for errors raised by the deficit package."""


class DataFileError(DeficitError):
    """A profile or log file could not be read.

    Attributes:
        path: File that failed to load
        reason: What was wrong with it
    """

    def __init__(self, path: Path, reason: str, line: Optional[int] = None):
        self.path = path
        self.reason = reason
        self.line = line
        location = f"{path}:{line}" if line is not None else str(path)
        super().__init__(f"{location}: {reason}")
