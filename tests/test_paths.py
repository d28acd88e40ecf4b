"""Tests for config path resolution."""

from pathlib import Path
from unittest.mock import patch

import pytest

from gmcli.config.paths import CONFIG_DIR_ENV, StorePaths, default_paths


class TestStorePaths:
    """Tests for StorePaths file layout."""

    def test_file_names(self, tmp_path: Path):
        """Managed files live directly in the config directory."""
        paths = StorePaths(tmp_path)

        assert paths.accounts_file == tmp_path / "accounts.json"
        assert paths.credentials_file == tmp_path / "credentials.json"
        assert paths.default_file == tmp_path / "default.json"

    def test_managed_files(self, tmp_path: Path):
        """managed_files lists all three records."""
        paths = StorePaths(tmp_path)

        assert paths.managed_files == (
            paths.accounts_file,
            paths.credentials_file,
            paths.default_file,
        )


class TestDefaultPaths:
    """Tests for default_paths."""

    def test_home_directory(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        """Defaults to ~/.gmcli."""
        monkeypatch.delenv(CONFIG_DIR_ENV, raising=False)

        with patch("gmcli.config.paths.Path.home", return_value=tmp_path):
            paths = default_paths()

        assert paths.config_dir == tmp_path / ".gmcli"

    def test_env_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        """GMCLI_CONFIG_DIR replaces the home-derived location."""
        monkeypatch.setenv(CONFIG_DIR_ENV, str(tmp_path / "custom"))

        assert default_paths().config_dir == tmp_path / "custom"

    def test_env_override_expands_user(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ):
        """A leading ~ in GMCLI_CONFIG_DIR is expanded."""
        monkeypatch.setenv("HOME", str(tmp_path))
        monkeypatch.setenv(CONFIG_DIR_ENV, "~/gmcli-config")

        assert default_paths().config_dir == tmp_path / "gmcli-config"

    def test_empty_env_is_ignored(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ):
        """An empty GMCLI_CONFIG_DIR falls back to the home directory."""
        monkeypatch.setenv(CONFIG_DIR_ENV, "")

        with patch("gmcli.config.paths.Path.home", return_value=tmp_path):
            assert default_paths().config_dir == tmp_path / ".gmcli"
