"""Configuration entry value object."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

from configurator.store.base import SettingsStore


@dataclass(frozen=True)
class ConfigEntry:
    """
    A named configuration bound to its file and settings store.

    Attributes:
        name: Configuration name (file stem), unique within a registry.
        location: Absolute path of the configuration file.
        store: Settings store used to read and write the file.
    """

    name: str
    location: Path
    store: SettingsStore = field(compare=False, repr=False)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a dictionary for listings and reports."""
        return {
            "name": self.name,
            "location": str(self.location),
            "exists": self.store.exists(),
        }
