"""
Tests for configuration path validation.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from configurator.exceptions import InvalidPathError
from configurator.paths import PathCheck, check_path, config_name, validate_name


class TestCheckPath:
    """Tests for check_path()."""

    @pytest.mark.parametrize("path", [None, "", "   "])
    def test_empty_path_is_invalid(self, path) -> None:
        """Test that empty or missing paths are INVALID_PATH."""
        assert check_path(path) is PathCheck.INVALID_PATH

    def test_wrong_extension(self) -> None:
        """Test that another suffix is INVALID_EXTENSION."""
        assert check_path("configs/A.json") is PathCheck.INVALID_EXTENSION
        assert check_path("configs/A") is PathCheck.INVALID_EXTENSION

    def test_extension_is_case_sensitive(self) -> None:
        """Test that '.CONFIG' does not match '.config'."""
        assert check_path("A.CONFIG") is PathCheck.INVALID_EXTENSION

    def test_valid_path(self, tmp_path: Path) -> None:
        """Test that a .config path is VALID whether or not it exists."""
        assert check_path(tmp_path / "A.config") is PathCheck.VALID
        assert check_path("relative/B.config") is PathCheck.VALID

    def test_custom_extension(self) -> None:
        """Test validation against a non-default extension."""
        assert check_path("A.settings", extension=".settings") is PathCheck.VALID
        assert check_path("A.config", extension=".settings") is PathCheck.INVALID_EXTENSION


class TestConfigName:
    """Tests for config_name() and validate_name()."""

    def test_name_is_stem(self) -> None:
        """Test that the configuration name is the file stem."""
        assert config_name("/etc/app/Production.config") == "Production"
        assert config_name("My.Settings.config") == "My.Settings"

    def test_empty_path_raises(self) -> None:
        """Test that an empty path raises InvalidPathError."""
        with pytest.raises(InvalidPathError, match="must not be empty"):
            config_name("")

    def test_wrong_extension_raises(self) -> None:
        """Test that a wrong extension raises InvalidPathError."""
        with pytest.raises(InvalidPathError, match="'.config' extension"):
            config_name("settings.ini")

    def test_invalid_path_error_is_value_error(self) -> None:
        """Test that InvalidPathError can be caught as ValueError."""
        with pytest.raises(ValueError):
            config_name(None)

    def test_validate_name(self) -> None:
        """Test configuration name validation."""
        assert validate_name("A") == "A"
        with pytest.raises(InvalidPathError):
            validate_name("")
