"""
Configuration Registry Module.

Keeps the ordered, name-unique collection of configuration entries
known to a manager. Handles:
- Discovery of configuration files under a directory (optionally recursive).
- Manual registration and removal of individual files.
- Lookup by configuration name.

The registry only ever touches the filesystem to scan directories and to
check that a file being added exists. It never creates or deletes files.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Callable, Iterable, Iterator, List, Optional, Union

from loguru import logger

from configurator.exceptions import (
    ConfigNotFoundError,
    ConfiguratorError,
    RegistryConflictError,
)
from configurator.paths import DEFAULT_EXTENSION, config_name
from configurator.registry.entry import ConfigEntry
from configurator.store import open_store
from configurator.store.base import SettingsStore

StoreFactory = Callable[[Path], SettingsStore]


class ConflictPolicy(Enum):
    """What ``add`` does when the name is already registered."""

    IGNORE = "ignore"
    RAISE = "raise"
    REPLACE = "replace"


class ConfigRegistry:
    """
    Ordered collection of ConfigEntry objects keyed by unique name.

    Usage::

        registry = ConfigRegistry()
        registry.discover("configs", recursive=True)

        entry = registry.lookup("Production")
        if entry is not None:
            print(entry.store.read_all())

    Thread Safety:
        None. Callers that share a registry between threads must serialize
        access themselves (ConfigManager does).
    """

    def __init__(
        self,
        extension: str = DEFAULT_EXTENSION,
        store_factory: Optional[StoreFactory] = None,
    ) -> None:
        """
        Initialize an empty registry.

        Args:
            extension: File suffix recognized as a configuration file.
            store_factory: Callable building the SettingsStore for a path.
                           Defaults to :func:`configurator.store.open_store`.
        """
        self.extension = extension
        self._store_factory: StoreFactory = store_factory or open_store
        self._entries: List[ConfigEntry] = []

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------

    def discover(self, root: Union[str, Path], recursive: bool = False) -> int:
        """
        Register every configuration file found under ``root``.

        Discovery is best-effort: unreadable directories and files that
        cannot be registered are logged and skipped, never raised.

        Args:
            root: Directory to scan.
            recursive: Also scan every subdirectory.

        Returns:
            Number of entries newly added to the registry.
        """
        root = Path(root)
        if not root.is_dir():
            logger.warning(f"Discovery skipped, not a directory: {root}")
            return 0

        added = 0
        try:
            children = sorted(root.iterdir())
        except OSError as e:
            logger.warning(f"Discovery skipped unreadable directory {root}: {e}")
            return 0

        subdirectories: List[Path] = []
        for child in children:
            try:
                if child.is_dir():
                    subdirectories.append(child)
                    continue
                if child.suffix != self.extension or not child.is_file():
                    continue
                name = config_name(child, self.extension)
                if self.lookup(name) is not None:
                    logger.warning(
                        f"Discovery skipped {child}: configuration '{name}' "
                        f"already registered"
                    )
                    continue
                self._entries.append(self._build_entry(name, child))
                added += 1
            except (OSError, ConfiguratorError) as e:
                logger.warning(f"Discovery skipped {child}: {e}")

        if recursive:
            for directory in subdirectories:
                added += self.discover(directory, recursive=True)

        logger.debug(f"Discovered {added} configuration(s) under {root}")
        return added

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add(
        self,
        path: Union[str, Path],
        on_conflict: Union[ConflictPolicy, str] = ConflictPolicy.IGNORE,
    ) -> ConfigEntry:
        """
        Register a single configuration file.

        Args:
            path: Path of an existing configuration file.
            on_conflict: Policy when another file with the same name is
                         already registered (ignore, raise or replace).

        Returns:
            The entry registered under the file's name after the call.

        Raises:
            InvalidPathError: If the path is empty or has the wrong extension.
            ConfigNotFoundError: If the file does not exist.
            RegistryConflictError: On a name clash with ``on_conflict="raise"``.
        """
        policy = ConflictPolicy(on_conflict)
        name = config_name(path, self.extension)
        location = Path(path).absolute()

        for entry in self._entries:
            if entry.location == location:
                logger.debug(f"Already registered: {location}")
                return entry

        if not location.is_file():
            raise ConfigNotFoundError(f"Configuration file not found: {location}")

        existing = self.lookup(name)
        if existing is not None:
            if policy is ConflictPolicy.RAISE:
                raise RegistryConflictError(name, existing.location)
            if policy is ConflictPolicy.IGNORE:
                logger.debug(
                    f"Ignoring {location}: '{name}' already registered at "
                    f"{existing.location}"
                )
                return existing

            entry = self._build_entry(name, location)
            index = self._entries.index(existing)
            self._entries[index] = entry
            logger.info(f"Configuration '{name}' replaced: {location}")
            return entry

        entry = self._build_entry(name, location)
        self._entries.append(entry)
        logger.debug(f"Configuration '{name}' registered: {location}")
        return entry

    def add_many(
        self,
        paths: Iterable[Union[str, Path]],
        recursive: bool = False,
        on_conflict: Union[ConflictPolicy, str] = ConflictPolicy.IGNORE,
    ) -> int:
        """
        Register several files and/or directories.

        Directories are discovered (best-effort, ``recursive`` applies);
        files go through :meth:`add` and raise on invalid input.

        Returns:
            Number of entries newly added to the registry.
        """
        added = 0
        for path in paths:
            if str(path).strip() and Path(path).is_dir():
                added += self.discover(path, recursive=recursive)
                continue
            before = len(self._entries)
            self.add(path, on_conflict=on_conflict)
            added += len(self._entries) - before
        return added

    def replace(self, path: Union[str, Path]) -> ConfigEntry:
        """Register ``path``, overwriting any entry that has the same name."""
        return self.add(path, on_conflict=ConflictPolicy.REPLACE)

    def remove(self, name: str) -> bool:
        """
        Forget the entry with ``name``. The file itself is not touched.

        Returns:
            True if an entry was removed.
        """
        before = len(self._entries)
        self._entries = [entry for entry in self._entries if entry.name != name]
        removed = len(self._entries) != before
        if removed:
            logger.debug(f"Configuration '{name}' unregistered")
        return removed

    def remove_many(self, names: Iterable[str]) -> int:
        """Remove every listed name. Returns how many entries were removed."""
        return sum(1 for name in names if self.remove(name))

    def clear(self) -> None:
        self._entries.clear()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def lookup(self, name: str) -> Optional[ConfigEntry]:
        """Return the entry named ``name``, or None."""
        for entry in self._entries:
            if entry.name == name:
                return entry
        return None

    def names(self) -> List[str]:
        return [entry.name for entry in self._entries]

    def entries(self) -> List[ConfigEntry]:
        return list(self._entries)

    def locations(self) -> List[Path]:
        return [entry.location for entry in self._entries]

    def stores(self) -> List[SettingsStore]:
        return [entry.store for entry in self._entries]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ConfigEntry]:
        return iter(list(self._entries))

    def __contains__(self, name: object) -> bool:
        return any(entry.name == name for entry in self._entries)

    def _build_entry(self, name: str, location: Path) -> ConfigEntry:
        location = location.absolute()
        return ConfigEntry(name=name, location=location, store=self._store_factory(location))
