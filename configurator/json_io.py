"""
JSON document helpers.

``load_json`` fails soft: a missing, empty or malformed file yields a
result carrying the caller's default instead of raising, so callers can
always fall back to a default configuration. ``save_json`` raises.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Generic, Optional, TypeVar, Union

from loguru import logger

T = TypeVar("T")


class CreateMode(Enum):
    """How ``save_json`` treats an existing file."""

    CREATE = "w"        # create or overwrite
    CREATE_NEW = "x"    # fail if the file exists
    TRUNCATE = "r+"     # fail if the file does not exist


@dataclass
class JsonLoadResult(Generic[T]):
    """
    Outcome of :func:`load_json`.

    Attributes:
        value: Parsed document, or the default when loading failed.
        ok: True if the document was read and parsed.
        error: Why loading failed (None on success).
    """

    value: Optional[T]
    ok: bool
    error: Optional[str] = None

    def __bool__(self) -> bool:
        return self.ok


def load_json(
    path: Union[str, Path], default: Optional[T] = None, encoding: str = "utf-8"
) -> JsonLoadResult[T]:
    """Read a JSON document, degrading to ``default`` on any failure."""
    json_path = Path(path)
    if not json_path.is_file():
        return JsonLoadResult(default, False, f"File not found: {json_path}")

    try:
        content = json_path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Failed to read JSON file {json_path}: {e}")
        return JsonLoadResult(default, False, str(e))

    if not content.strip():
        return JsonLoadResult(default, False, f"File is empty: {json_path}")

    try:
        value = json.loads(content)
    except json.JSONDecodeError as e:
        logger.warning(f"Failed to parse JSON file {json_path}: {e}")
        return JsonLoadResult(default, False, str(e))

    return JsonLoadResult(value, True)


def save_json(
    path: Union[str, Path],
    value: Any,
    encoding: str = "utf-8",
    mode: CreateMode = CreateMode.CREATE,
    indent: Optional[int] = 4,
) -> None:
    """
    Serialize ``value`` to a JSON file.

    Raises:
        ValueError: If ``value`` is None.
        FileExistsError: If ``mode`` is CREATE_NEW and the file exists.
        FileNotFoundError: If ``mode`` is TRUNCATE and the file is missing.
        TypeError: If ``value`` is not JSON serializable.
    """
    if value is None:
        raise ValueError("Cannot save None as a JSON document")

    # Serialized before opening: the file is untouched if encoding fails.
    content = json.dumps(value, indent=indent, ensure_ascii=False)

    json_path = Path(path)
    with open(json_path, mode.value, encoding=encoding) as f:
        f.write(content)
        f.truncate()
    logger.debug(f"JSON document saved: {json_path}")
