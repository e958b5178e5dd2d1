"""
Configurator - Named Configuration Set Manager.

This package contains the core logic for:
- Registry: discovery and bookkeeping of named ``.config`` files.
- Manager: load/save/delete of configurations and the active pointer.
- Store: key-value settings files (appSettings XML documents).
- JSON I/O: fail-soft JSON document helpers.
"""

from configurator.exceptions import (
    ConfigNotFoundError,
    ConfiguratorError,
    InvalidPathError,
    RegistryConflictError,
    StoreIOError,
)
from configurator.manager import ConfigManager
from configurator.registry import ConfigEntry, ConfigRegistry

__version__ = "0.1.0"

__all__ = [
    "ConfigEntry",
    "ConfigManager",
    "ConfigNotFoundError",
    "ConfigRegistry",
    "ConfiguratorError",
    "InvalidPathError",
    "RegistryConflictError",
    "StoreIOError",
]
