"""
Path validation for configuration files.

A single validation function classifies a candidate path so the registry
and the manager apply the same rules everywhere.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional, Union

from configurator.exceptions import InvalidPathError

PathLike = Union[str, Path]

DEFAULT_EXTENSION = ".config"


class PathCheck(Enum):
    """Outcome of validating a configuration path."""

    VALID = "valid"
    INVALID_PATH = "invalid_path"
    INVALID_EXTENSION = "invalid_extension"


def check_path(
    path: Optional[PathLike], extension: str = DEFAULT_EXTENSION
) -> PathCheck:
    """
    Classify a configuration file path.

    Args:
        path: Candidate path (file does not need to exist).
        extension: Required suffix, including the leading dot.

    Returns:
        PathCheck.INVALID_PATH for a missing/empty path or an empty stem,
        PathCheck.INVALID_EXTENSION for a suffix other than ``extension``,
        PathCheck.VALID otherwise.
    """
    if path is None or not str(path).strip():
        return PathCheck.INVALID_PATH

    candidate = Path(path)
    if candidate.suffix != extension:
        return PathCheck.INVALID_EXTENSION
    if not candidate.stem:
        return PathCheck.INVALID_PATH
    return PathCheck.VALID


def config_name(
    path: Optional[PathLike], extension: str = DEFAULT_EXTENSION
) -> str:
    """
    Return the configuration name (file stem) for a path.

    Raises:
        InvalidPathError: If the path fails :func:`check_path`.
    """
    result = check_path(path, extension)
    if result is PathCheck.INVALID_PATH:
        raise InvalidPathError(
            "Path to a configuration file must not be empty", path
        )
    if result is PathCheck.INVALID_EXTENSION:
        raise InvalidPathError(
            f"Configuration file must have the '{extension}' extension: {path}",
            path,
        )
    return Path(path).stem  # type: ignore[arg-type]


def validate_name(name: Optional[str]) -> str:
    """Reject empty configuration names; return the name unchanged."""
    if name is None or not name.strip():
        raise InvalidPathError("Configuration name must not be empty", name)
    return name
