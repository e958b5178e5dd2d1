"""
In-memory Settings Store - simulation layer for running without files.

Used as the host store in tests and by embedders that keep the active
pointer somewhere other than a settings file.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Mapping, Optional, Union

from loguru import logger

from configurator.store.base import SettingsStore


class MemorySettingsStore(SettingsStore):
    """Settings store backed by a plain dict."""

    def __init__(
        self,
        initial: Optional[Mapping[str, str]] = None,
        path: Optional[Union[str, Path]] = None,
    ) -> None:
        super().__init__(path)
        self._values: Dict[str, str] = dict(initial or {})
        self._deleted = False
        self.write_count = 0

    def exists(self) -> bool:
        return not self._deleted

    def read_all(self) -> Dict[str, str]:
        return dict(self._values)

    def write_all(self, values: Mapping[str, str]) -> None:
        self._values.update({str(k): str(v) for k, v in values.items()})
        self._deleted = False
        self.write_count += 1
        logger.debug(f"MemorySettingsStore updated — {len(values)} key(s)")

    def delete(self) -> bool:
        existed = not self._deleted
        self._values.clear()
        self._deleted = True
        return existed
