"""Exceptions raised while building and recording API changelogs."""

from __future__ import annotations
from pathlib import Path
from typing import Optional


class ChangelogError(Exception):
    """Base exception for changelog generation errors."""
    pass


class MissingInputError(ChangelogError):
    """Raised when a tracked category's source document does not exist."""
    def __init__(self, category: str, path: Path):
        super().__init__(f"Source document for '{category}' not found: {path}")
        self.category = category
        self.path = path


class MalformedDocumentError(ChangelogError):
    """Raised when a source document is not JSON or has the wrong shape."""
    def __init__(self, category: str, reason: str):
        super().__init__(f"Malformed document for '{category}': {reason}")
        self.category = category
        self.reason = reason


class MissingVersionError(ChangelogError):
    """Raised when the dump text carries no ClientVersion line."""
    def __init__(self, message: Optional[str] = None):
        super().__init__(message or "No ClientVersion=<digits> line found in dump")


class StoreCorruptError(ChangelogError):
    """Raised when an existing history store cannot be read."""
    def __init__(self, path: Path, reason: str):
        super().__init__(f"History store {path} is unreadable: {reason}")
        self.path = path
        self.reason = reason


class ConfigError(ChangelogError):
    """Raised when a configuration file cannot be loaded."""
    def __init__(self, path: Path, reason: str):
        super().__init__(f"Invalid configuration {path}: {reason}")
        self.path = path
        self.reason = reason
