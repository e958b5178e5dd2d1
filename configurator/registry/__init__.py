"""
Configuration Registry Package.

Discovers configuration files and maps their names to file locations
and settings stores.
"""

from configurator.registry.entry import ConfigEntry
from configurator.registry.registry import ConfigRegistry, ConflictPolicy, StoreFactory

__all__ = [
    "ConfigEntry",
    "ConfigRegistry",
    "ConflictPolicy",
    "StoreFactory",
]
