"""
Settings Store Package.

Key-value settings file backends and the factory that picks one
for a given path.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Type, Union

from loguru import logger

from configurator.exceptions import InvalidPathError
from configurator.store.base import SettingsStore
from configurator.store.memory_store import MemorySettingsStore
from configurator.store.xml_store import XmlSettingsStore

# Mapping: file extension -> store class
STORE_TYPES: Dict[str, Type[SettingsStore]] = {
    ".config": XmlSettingsStore,
}


def open_store(path: Union[str, Path], encoding: str = "utf-8") -> SettingsStore:
    """
    Factory function to open the settings store for a file.

    Args:
        path: Path of the settings file (need not exist yet).
        encoding: Encoding used when the store writes the file.

    Returns:
        A SettingsStore bound to ``path``.

    Raises:
        InvalidPathError: If no store handles the file's extension.
    """
    suffix = Path(path).suffix
    store_cls = STORE_TYPES.get(suffix)
    if store_cls is None:
        raise InvalidPathError(
            f"No settings store for extension '{suffix}'. "
            f"Supported: {sorted(STORE_TYPES)}",
            path,
        )
    logger.debug(f"Opening {store_cls.__name__} for {path}")
    return store_cls(path, encoding=encoding)  # type: ignore[call-arg]


__all__ = [
    "MemorySettingsStore",
    "STORE_TYPES",
    "SettingsStore",
    "XmlSettingsStore",
    "open_store",
]
