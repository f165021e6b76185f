"""Exception hierarchy for kdef.

Every error raised by the library derives from `KdefError` so callers can
catch the whole family at once.
"""

from __future__ import annotations

from pathlib import Path
from typing import Union


class KdefError(Exception):
    """Base class for all kdef errors."""


class InvalidValue(KdefError, ValueError):
    """Raised when an entry factory receives a value outside its kind's domain."""


class ParseError(KdefError):
    """Raised when a parse fails as a whole.

    Individual malformed lines never raise; they are kept as comments.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidConfig(KdefError):
    """A config failed validation.

    Attributes:
        index: 0-based position of the first invalid entry.
        reason: Human-readable description of the failure.
    """

    def __init__(self, index: int, reason: str):
        super().__init__(f"Invalid entry at index {index}: {reason}")
        self.index = index
        self.reason = reason


class FileReadError(KdefError, OSError):
    """A Kconfig file could not be read."""

    def __init__(self, path: Union[str, Path], reason: str):
        super().__init__(f"Failed to read file {path}: {reason}")
        self.path = str(path)
        self.reason = reason


class ProfileError(KdefError, ValueError):
    """A profile in kdef.yaml is missing or malformed."""
