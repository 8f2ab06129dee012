"""Exception hierarchy shared by the game core and the persistence layer."""
from __future__ import annotations

from pathlib import Path


class MemoryMatchError(Exception):
    """Base class for every error raised by the game."""


class ConfigError(MemoryMatchError, ValueError):
    """Board parameters that cannot produce a valid paired board."""


class ParseError(MemoryMatchError, ValueError):
    """A save file that does not follow the save grammar."""

    def __init__(self, message: str, *, line: int | None = None) -> None:
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class StorageError(MemoryMatchError, OSError):
    """Filesystem failure while reading or writing a save file."""

    def __init__(self, message: str, *, path: Path | str | None = None) -> None:
        self.path = Path(path) if path is not None else None
        super().__init__(message)


class IllegalTransition(MemoryMatchError, RuntimeError):
    """A state mutation whose precondition does not hold (programming error)."""
