"""
Configurator Settings Module.

Loads the manager's own settings (recognized extension, template name,
active pointer key, host store location) from an optional YAML file and
validates them against a JSON schema before use.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import jsonschema
import yaml
from loguru import logger

from configurator.exceptions import ConfiguratorError


class SettingsError(ConfiguratorError):
    """Raised when the settings file is unreadable or fails validation."""

    def __init__(self, message: str, errors: Optional[List[str]] = None) -> None:
        super().__init__(message)
        self.errors = errors or []


SETTINGS_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "extension": {"type": "string", "pattern": r"^\.[^./\\]+$"},
        "template_name": {"type": "string", "minLength": 1},
        "active_key": {"type": "string", "minLength": 1},
        "recursive": {"type": "boolean"},
        "host_store_path": {"type": ["string", "null"]},
        "encoding": {"type": "string", "minLength": 1},
    },
}


@dataclass
class ConfiguratorSettings:
    """
    Runtime settings for a ConfigManager.

    Attributes:
        extension: Suffix of configuration files.
        template_name: Stem of the template copied to bootstrap new files.
        active_key: Key holding the active configuration name in the host store.
        recursive: Whether discovery descends into subdirectories.
        host_store_path: Settings file holding the active pointer.
                         None means ``App<extension>`` beside the root directory.
        encoding: Encoding used when writing settings files.
    """

    extension: str = ".config"
    template_name: str = "Default"
    active_key: str = "UsingConfig"
    recursive: bool = False
    host_store_path: Optional[str] = None
    encoding: str = "utf-8"

    @property
    def template_filename(self) -> str:
        return f"{self.template_name}{self.extension}"

    def resolve_host_store_path(self, root_path: Path) -> Path:
        """Return the host store location for a given configuration root."""
        if self.host_store_path:
            return Path(self.host_store_path)
        return Path(root_path).absolute().parent / f"App{self.extension}"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConfiguratorSettings":
        """Validate a raw mapping and build settings from it."""
        _validate(data)
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})


def load_settings(path: Union[str, Path, None] = None) -> ConfiguratorSettings:
    """
    Load settings from a YAML file.

    A missing path or file yields the defaults. An empty file is treated
    as an empty mapping.

    Raises:
        SettingsError: If the file cannot be read, parsed, or validated.
    """
    if path is None:
        return ConfiguratorSettings()

    settings_path = Path(path)
    if not settings_path.exists():
        logger.debug(f"Settings file not found, using defaults: {settings_path}")
        return ConfiguratorSettings()

    try:
        content = settings_path.read_text(encoding="utf-8")
    except OSError as e:
        raise SettingsError(f"Failed to read settings file {settings_path}: {e}") from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise SettingsError(f"Failed to parse {settings_path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise SettingsError(
            f"Settings file must contain a mapping (dict), "
            f"got {type(data).__name__}: {settings_path}"
        )

    settings = ConfiguratorSettings.from_dict(data)
    logger.info(f"Settings loaded: {settings_path}")
    return settings


def _validate(data: Dict[str, Any]) -> None:
    validator = jsonschema.Draft7Validator(SETTINGS_SCHEMA)
    errors = sorted(validator.iter_errors(data), key=lambda e: list(e.path))
    if not errors:
        return

    error_messages = []
    for error in errors:
        location = " -> ".join(str(p) for p in error.absolute_path) or "(root)"
        error_messages.append(f"  [{location}] {error.message}")

    all_errors = "\n".join(error_messages)
    raise SettingsError(
        f"Settings validation failed ({len(errors)} error(s)):\n{all_errors}",
        errors=error_messages,
    )
