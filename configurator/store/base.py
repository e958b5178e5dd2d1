"""
Abstract Base Class for Settings Stores.

Defines the key-value interface every settings file backend implements.
The registry and the manager only ever talk to a store through this
interface, so the on-disk format stays the backend's concern.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Iterable, Mapping, Optional, Union


class SettingsStore(ABC):
    """
    Abstract key-value settings store bound to one location.

    Keys and values are plain strings. ``write_all`` is an upsert:
    keys present in the store are overwritten, missing keys are added,
    and keys not mentioned are left untouched.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None) -> None:
        self._path = Path(path) if path is not None else None

    @property
    def path(self) -> Optional[Path]:
        """Location of the backing file (None for in-memory stores)."""
        return self._path

    @abstractmethod
    def exists(self) -> bool:
        """Return True if the backing file exists."""
        ...

    @abstractmethod
    def read_all(self) -> Dict[str, str]:
        """Read every key-value pair. Returns a fresh dict."""
        ...

    @abstractmethod
    def write_all(self, values: Mapping[str, str]) -> None:
        """Upsert the given pairs and persist the store."""
        ...

    @abstractmethod
    def delete(self) -> bool:
        """Delete the backing file. Returns False if it was already gone."""
        ...

    def refresh(self) -> None:
        """Drop any cached content so the next read hits the backing file."""
        return None

    def key_exists(self, key: str) -> bool:
        return key in self.read_all()

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.read_all().get(key, default)

    def read_keys(self, keys: Iterable[str]) -> Dict[str, str]:
        """Read only the requested keys; keys missing from the store are omitted."""
        values = self.read_all()
        return {key: values[key] for key in keys if key in values}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(path={str(self._path)!r})"
