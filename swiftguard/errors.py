"""Exception hierarchy for swiftguard."""

from __future__ import annotations

from pathlib import Path
from typing import Union


class SwiftGuardError(Exception):
    """Base class for every failure raised by the engine."""


class SourceReadError(SwiftGuardError):
    """A source file could not be read or decoded."""

    def __init__(self, path: Union[str, Path], reason: str) -> None:
        super().__init__(f"Failed to read {path}: {reason}")
        self.path = Path(path)
        self.reason = reason


class SourceWriteError(SwiftGuardError):
    """A corrected buffer could not be written back."""

    def __init__(self, path: Union[str, Path], reason: str) -> None:
        super().__init__(f"Failed to write {path}: {reason}")
        self.path = Path(path)
        self.reason = reason


class ConfigurationError(SwiftGuardError):
    """The configuration file is missing or malformed."""


class CorrectionError(SwiftGuardError):
    """A correction could not be applied without altering the buffer length."""
