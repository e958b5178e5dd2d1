"""
Root conftest.py — Shared Pytest fixtures.

Provides fixtures for:
- Writing appSettings XML documents.
- A configuration root with a template and one configuration.
- An in-memory host store for the active pointer.
- A ConfigManager wired to both.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, Optional

import pytest

from configurator.manager import ConfigManager
from configurator.store.memory_store import MemorySettingsStore

ConfigWriter = Callable[[Path, Dict[str, str]], Path]


def render_config(values: Dict[str, str], extra_sections: str = "") -> str:
    """Render an appSettings document with the given pairs."""
    entries = "\n".join(
        f'    <add key="{key}" value="{value}"/>' for key, value in values.items()
    )
    return (
        '<?xml version="1.0" encoding="utf-8"?>\n'
        "<configuration>\n"
        f"{extra_sections}"
        "  <appSettings>\n"
        f"{entries}\n"
        "  </appSettings>\n"
        "</configuration>\n"
    )


@pytest.fixture
def write_config() -> ConfigWriter:
    """Return a helper that writes an appSettings document to a path."""

    def _write(path: Path, values: Dict[str, str], extra_sections: str = "") -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(render_config(values, extra_sections), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def config_root(tmp_path: Path, write_config: ConfigWriter) -> Path:
    """Create a root with Default.config (template) and A.config."""
    root = tmp_path / "configs"
    write_config(
        root / "Default.config",
        {"x": "0", "theme": "light"},
        extra_sections="  <connectionStrings/>\n",
    )
    write_config(root / "A.config", {"x": "1"})
    return root


@pytest.fixture
def host_store() -> MemorySettingsStore:
    """In-memory host store holding the active pointer."""
    return MemorySettingsStore()


@pytest.fixture
def manager(config_root: Path, host_store: MemorySettingsStore) -> ConfigManager:
    """ConfigManager over config_root with an in-memory host store."""
    return ConfigManager(config_root, host_store=host_store)
