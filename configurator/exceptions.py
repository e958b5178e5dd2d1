"""
Exception hierarchy for the configurator package.

Every error raised on purpose by the package derives from
:class:`ConfiguratorError`, so callers can catch the whole family at once.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


class ConfiguratorError(Exception):
    """Base class for all configurator errors."""

    pass


class InvalidPathError(ConfiguratorError, ValueError):
    """Raised for an empty path or a path with the wrong extension."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None) -> None:
        super().__init__(message)
        self.path = path


class ConfigNotFoundError(ConfiguratorError, FileNotFoundError):
    """Raised when a required directory, template, or configuration is missing."""

    pass


class RegistryConflictError(ConfiguratorError):
    """Raised when a configuration name is already registered."""

    def __init__(self, name: str, existing: Path) -> None:
        super().__init__(
            f"Configuration '{name}' is already registered at {existing}"
        )
        self.name = name
        self.existing = existing


class StoreIOError(ConfiguratorError):
    """Raised when a settings store cannot be read, written or deleted."""

    pass
