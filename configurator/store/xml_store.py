"""
XML Settings Store.

Reads and writes application configuration documents of the form::

    <?xml version='1.0' encoding='UTF-8'?>
    <configuration>
      <appSettings>
        <add key="Theme" value="Dark"/>
      </appSettings>
    </configuration>

Only the ``appSettings`` section is interpreted. Every other element in
the document (``configSections``, ``connectionStrings``, comments, ...)
is preserved untouched on write, which is what lets a template file
carry structural sections into newly created configurations.
"""

from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path
from typing import Dict, Mapping, Optional, Tuple, Union

from lxml import etree as ET
from loguru import logger

from configurator.exceptions import StoreIOError
from configurator.store.base import SettingsStore

ROOT_TAG = "configuration"
SECTION_TAG = "appSettings"
ENTRY_TAG = "add"


class XmlSettingsStore(SettingsStore):
    """
    Settings store backed by an appSettings XML document.

    Parsed values are cached per file identity (inode, mtime, size); a
    file changed by another store or process is re-read on the next access.
    Writes go to a temporary sibling that replaces the file in one step.

    Attributes:
        encoding: Encoding used when serialising the document.
    """

    def __init__(self, path: Union[str, Path], encoding: str = "utf-8") -> None:
        super().__init__(path)
        self.encoding = encoding
        self._cache: Optional[Dict[str, str]] = None
        self._cache_signature: Optional[Tuple[int, int, int]] = None

    @property
    def path(self) -> Path:
        return self._path  # type: ignore[return-value]

    def exists(self) -> bool:
        return self.path.is_file()

    def read_all(self) -> Dict[str, str]:
        signature = self._signature()
        if self._cache is None or self._cache_signature != signature:
            self._cache = self._read_document()
            self._cache_signature = signature
        return dict(self._cache)

    def write_all(self, values: Mapping[str, str]) -> None:
        if self.exists():
            tree = self._parse()
            root = tree.getroot()
        else:
            logger.debug(f"Creating settings document: {self.path}")
            root = ET.Element(ROOT_TAG)
            tree = ET.ElementTree(root)

        section = root.find(SECTION_TAG)
        if section is None:
            section = ET.SubElement(root, SECTION_TAG)

        existing = {
            element.get("key"): element
            for element in section.iterfind(ENTRY_TAG)
            if element.get("key") is not None
        }
        try:
            for key, value in values.items():
                element = existing.get(key)
                if element is None:
                    element = ET.SubElement(section, ENTRY_TAG, key=str(key))
                    existing[key] = element
                element.set("value", str(value))
        except ValueError as e:
            logger.error(f"Invalid setting for {self.path}: {e}")
            raise StoreIOError(f"Invalid setting for {self.path}: {e}") from e

        self._write_tree(tree)
        self.refresh()
        logger.debug(f"Settings written: {self.path} ({len(values)} key(s))")

    def delete(self) -> bool:
        self.refresh()
        try:
            self.path.unlink()
        except FileNotFoundError:
            logger.debug(f"Settings file already missing: {self.path}")
            return False
        except OSError as e:
            raise StoreIOError(f"Failed to delete settings file {self.path}: {e}") from e
        return True

    def refresh(self) -> None:
        self._cache = None
        self._cache_signature = None

    def _signature(self) -> Optional[Tuple[int, int, int]]:
        """Identity of the file on disk; None when it does not exist."""
        try:
            stat = self.path.stat()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StoreIOError(f"Failed to stat settings file {self.path}: {e}") from e
        return (stat.st_ino, stat.st_mtime_ns, stat.st_size)

    def _write_tree(self, tree: "ET._ElementTree") -> None:
        """Write to a sibling temp file, then swap it over the target."""
        tmp_name: Optional[str] = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=str(self.path.parent)
            )
            os.close(fd)
            if self.path.exists():
                shutil.copymode(self.path, tmp_name)
            tree.write(
                tmp_name,
                pretty_print=True,
                xml_declaration=True,
                encoding=self.encoding.upper(),
            )
            os.replace(tmp_name, self.path)
            tmp_name = None
        except OSError as e:
            logger.error(f"Failed to write settings file {self.path}: {e}")
            raise StoreIOError(f"Failed to write settings file {self.path}: {e}") from e
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)

    def _read_document(self) -> Dict[str, str]:
        """Parse the appSettings section into a dict; a missing file is empty."""
        if not self.exists():
            logger.debug(f"Settings file not found, reading as empty: {self.path}")
            return {}

        root = self._parse().getroot()
        section = root.find(SECTION_TAG)
        if section is None:
            return {}

        values: Dict[str, str] = {}
        for element in section.iterfind(ENTRY_TAG):
            key = element.get("key")
            if key is None:
                continue
            values[key] = element.get("value", "")
        return values

    def _parse(self) -> "ET._ElementTree":
        try:
            parser = ET.XMLParser(remove_blank_text=True, resolve_entities=False)
            tree = ET.parse(str(self.path), parser)
        except ET.XMLSyntaxError as e:
            raise StoreIOError(f"XML syntax error in {self.path}: {e}") from e
        except OSError as e:
            raise StoreIOError(f"Failed to read settings file {self.path}: {e}") from e

        if tree.getroot().tag != ROOT_TAG:
            raise StoreIOError(
                f"Unexpected root element <{tree.getroot().tag}> in {self.path}, "
                f"expected <{ROOT_TAG}>"
            )
        return tree
