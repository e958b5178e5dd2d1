"""
Configuration Manager Module.

Implements the ConfigManager class that ties the configuration registry
to settings file I/O and to the persisted "active configuration" pointer.
Handles:
- Discovery of the configuration set under a root directory.
- Loading a configuration by name, optionally falling back to the active one.
- Saving key-value pairs, bootstrapping new files from the template.
- Deleting configurations and keeping the active pointer consistent.

Usage::

    manager = ConfigManager("configs")

    manager.save({"Theme": "Dark"}, "configs/Work.config", mark_active=True)
    values = manager.load("Work")
    current = manager.active_pointer()   # "Work"

    manager.delete("Work")
    manager.active_pointer()             # ""
"""

from __future__ import annotations

import shutil
import threading
from functools import partial
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Union

from loguru import logger

from configurator.exceptions import (
    ConfigNotFoundError,
    InvalidPathError,
    StoreIOError,
)
from configurator.paths import config_name, validate_name
from configurator.registry import ConfigEntry, ConfigRegistry, StoreFactory
from configurator.settings import ConfiguratorSettings
from configurator.store import open_store
from configurator.store.base import SettingsStore


class ActivePointer:
    """
    Accessor for the persisted name of the active configuration.

    The value lives under one key of the host settings store. The key is
    created with an empty value the first time it is read.
    """

    def __init__(self, store: SettingsStore, key: str = "UsingConfig") -> None:
        self.store = store
        self.key = key

    def get(self) -> str:
        self.store.refresh()
        values = self.store.read_all()
        if self.key not in values:
            logger.debug(f"Active pointer key '{self.key}' missing, creating it")
            self.store.write_all({self.key: ""})
            return ""
        return values[self.key]

    def set(self, value: Optional[str]) -> None:
        value = value or ""
        self.store.write_all({self.key: value})
        self.store.refresh()
        logger.info(f"Active configuration set to '{value}'")


class ConfigManager:
    """
    Manages a set of named configuration files and the active pointer.

    One manager is constructed per configuration root and passed to the
    code that needs it; there is no global instance.

    Thread Safety:
        Designed for single-threaded use. The compound sequences
        (lookup + load, lookup + save-with-create, lookup + delete + pointer
        clear) run under an internal re-entrant lock so that concurrent
        callers cannot observe them half done. Direct use of ``registry``
        bypasses that lock.
    """

    def __init__(
        self,
        root_path: Union[str, Path],
        settings: Optional[ConfiguratorSettings] = None,
        host_store: Optional[SettingsStore] = None,
        store_factory: Optional[StoreFactory] = None,
    ) -> None:
        """
        Initialize the manager and discover the configuration set.

        Args:
            root_path: Directory containing the configuration files.
            settings: Manager settings (defaults if not provided).
            host_store: Store holding the active pointer. Defaults to the
                        settings file named by ``settings.host_store_path``.
            store_factory: Callable building a SettingsStore for a file path.

        Raises:
            InvalidPathError: If ``root_path`` is empty.
            ConfigNotFoundError: If ``root_path`` is not an existing directory.
        """
        self.settings = settings or ConfiguratorSettings()
        self._lock = threading.RLock()
        self._store_factory: StoreFactory = store_factory or partial(
            open_store, encoding=self.settings.encoding
        )
        self._host_store_override = host_store
        self._root_path: Optional[Path] = None
        self._registry: Optional[ConfigRegistry] = None
        self._active: Optional[ActivePointer] = None

        self.initialize(root_path)

    def initialize(self, root_path: Union[str, Path]) -> None:
        """
        (Re)discover the configuration set under ``root_path``.

        Replaces the current registry and reads the active pointer,
        creating its key in the host store if absent.
        """
        if root_path is None or not str(root_path).strip():
            raise InvalidPathError("Root path must not be empty", root_path)

        root = Path(root_path)
        if not root.is_dir():
            logger.error(f"Configuration directory not found: {root}")
            raise ConfigNotFoundError(f"Configuration directory not found: {root}")

        with self._lock:
            registry = ConfigRegistry(
                extension=self.settings.extension,
                store_factory=self._store_factory,
            )
            registry.discover(root, recursive=self.settings.recursive)

            host_store = self._host_store_override
            if host_store is None:
                host_store = open_store(
                    self.settings.resolve_host_store_path(root),
                    encoding=self.settings.encoding,
                )
            active = ActivePointer(host_store, self.settings.active_key)
            current = active.get()

            self._root_path = root
            self._registry = registry
            self._active = active

        logger.info(
            f"ConfigManager initialized — root={root}, "
            f"configurations={len(registry)}, active='{current}'"
        )

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def root_path(self) -> Path:
        return self._root_path  # type: ignore[return-value]

    @property
    def registry(self) -> ConfigRegistry:
        return self._registry  # type: ignore[return-value]

    @property
    def host_store(self) -> SettingsStore:
        return self._active.store  # type: ignore[union-attr]

    def names(self) -> List[str]:
        return self.registry.names()

    def entries(self) -> List[ConfigEntry]:
        return self.registry.entries()

    def lookup(self, name: str) -> Optional[ConfigEntry]:
        return self.registry.lookup(name)

    def add(self, path: Union[str, Path]) -> ConfigEntry:
        """Register an existing configuration file without touching it."""
        with self._lock:
            return self.registry.add(path)

    def remove(self, name: str) -> bool:
        """Unregister a configuration; the file stays on disk."""
        with self._lock:
            return self.registry.remove(name)

    # ------------------------------------------------------------------
    # Active pointer
    # ------------------------------------------------------------------

    def active_pointer(self) -> str:
        """Return the active configuration name ("" when none is selected)."""
        with self._lock:
            return self._active.get()  # type: ignore[union-attr]

    def set_active_pointer(self, value: Optional[str]) -> None:
        """Persist ``value`` as the active configuration name, unchecked."""
        with self._lock:
            self._active.set(value)  # type: ignore[union-attr]

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def load(
        self,
        name: str,
        keys: Optional[Iterable[str]] = None,
        *,
        fall_back_to_active: bool = False,
        mark_active: bool = False,
    ) -> Optional[Dict[str, str]]:
        """
        Load the settings of a configuration.

        Args:
            name: Configuration name.
            keys: Restrict the result to these keys. Keys absent from the
                  store are silently omitted.
            fall_back_to_active: If ``name`` is unknown, load the active
                                 configuration instead (one hop only).
            mark_active: Make the loaded configuration the active one.

        Returns:
            Mapping of key to value, or None if no configuration resolved.

        Raises:
            InvalidPathError: If ``name`` is empty.
            ConfigNotFoundError: If the resolved configuration's file is gone.
            StoreIOError: If the settings file cannot be read.
        """
        validate_name(name)

        with self._lock:
            entry = self.registry.lookup(name)
            if entry is None and fall_back_to_active:
                active = self._active.get()  # type: ignore[union-attr]
                if active and active != name:
                    logger.warning(
                        f"Configuration '{name}' not found, "
                        f"falling back to active '{active}'"
                    )
                    entry = self.registry.lookup(active)

            if entry is None:
                logger.debug(f"Configuration '{name}' not found")
                return None

            entry.store.refresh()
            if not entry.store.exists():
                raise ConfigNotFoundError(
                    f"Configuration '{entry.name}' is registered but its file "
                    f"is missing: {entry.location}"
                )

            if keys is None:
                values = entry.store.read_all()
            else:
                values = entry.store.read_keys(keys)

            if mark_active:
                self._active.set(entry.name)  # type: ignore[union-attr]

        logger.debug(f"Configuration '{entry.name}' loaded ({len(values)} key(s))")
        return values

    def save(
        self,
        key_values: Mapping[str, str],
        path: Union[str, Path],
        *,
        mark_active: bool = False,
    ) -> ConfigEntry:
        """
        Save key-value pairs into a configuration, creating it if needed.

        The configuration is resolved by the stem of ``path``. An unknown
        configuration is created by copying the template file
        (``Default.config``) found next to ``path`` and registering it.
        Listed keys are overwritten or inserted; all others are kept.

        Returns:
            The entry that was written.

        Raises:
            InvalidPathError: If ``path`` is empty or has the wrong extension.
            ConfigNotFoundError: If a new file is needed and the template is missing.
            StoreIOError: If copying the template or writing the store fails.
        """
        name = config_name(path, self.settings.extension)
        if key_values is None:
            raise ValueError("key_values must be a mapping, got None")
        values = {str(key): str(value) for key, value in key_values.items()}

        with self._lock:
            entry = self.registry.lookup(name)
            if entry is None:
                entry = self._create_from_template(Path(path).absolute())
            elif entry.location != Path(path).absolute():
                logger.debug(
                    f"Saving '{name}' to registered location {entry.location} "
                    f"instead of {path}"
                )

            entry.store.write_all(values)
            entry.store.refresh()

            if mark_active:
                self._active.set(name)  # type: ignore[union-attr]

        logger.info(f"Configuration '{name}' saved ({len(values)} key(s))")
        return entry

    def delete(self, name: str) -> bool:
        """
        Delete a configuration's file and unregister it.

        A file that is already missing is not an error. If the deleted
        configuration was active, the active pointer is cleared.

        Returns:
            True if a registered configuration was deleted.
        """
        validate_name(name)

        with self._lock:
            entry = self.registry.lookup(name)
            if entry is None:
                logger.debug(f"Delete skipped, configuration '{name}' not registered")
                return False

            if not entry.store.delete():
                logger.warning(f"Configuration file already missing: {entry.location}")
            self.registry.remove(name)

            if self._active.get() == name:  # type: ignore[union-attr]
                self._active.set("")  # type: ignore[union-attr]

        logger.info(f"Configuration '{name}' deleted")
        return True

    def _create_from_template(self, target: Path) -> ConfigEntry:
        """Copy the template next to ``target`` (unless it exists) and register it."""
        if not target.exists():
            template = target.parent / self.settings.template_filename
            if not template.is_file():
                logger.error(f"Template configuration not found: {template}")
                raise ConfigNotFoundError(
                    f"Template configuration not found: {template}"
                )
            try:
                shutil.copyfile(template, target)
            except OSError as e:
                raise StoreIOError(
                    f"Failed to create {target} from template {template}: {e}"
                ) from e
            logger.info(f"Configuration file created from template: {target}")

        return self.registry.add(target)
