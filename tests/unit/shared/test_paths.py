"""Unit tests for gwirian_cli.shared.paths module."""

import stat
from pathlib import Path

import pytest

from gwirian_cli.shared.paths import ensure_config_dir, get_config_dir, get_config_file


@pytest.mark.cli_unit
class TestConfigDir:
    """Tests for config directory resolution."""

    def test_honors_xdg_config_home(self, config_home):
        assert get_config_dir() == config_home / "gwirian-cli"

    def test_falls_back_to_dot_config(self, monkeypatch, tmp_path):
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setattr(Path, "home", lambda: tmp_path)

        assert get_config_dir() == tmp_path / ".config" / "gwirian-cli"

    def test_empty_xdg_value_falls_back(self, monkeypatch, tmp_path):
        monkeypatch.setenv("XDG_CONFIG_HOME", "")
        monkeypatch.setattr(Path, "home", lambda: tmp_path)

        assert get_config_dir() == tmp_path / ".config" / "gwirian-cli"

    def test_config_file_name(self, config_home):
        assert get_config_file() == config_home / "gwirian-cli" / "config.json"


@pytest.mark.cli_unit
class TestEnsureConfigDir:
    """Tests for ensure_config_dir function."""

    def test_creates_user_only_directory(self, config_home):
        path = ensure_config_dir()

        assert path.is_dir()
        assert stat.S_IMODE(path.stat().st_mode) == 0o700

    def test_idempotent(self, config_home):
        first = ensure_config_dir()
        second = ensure_config_dir()

        assert first == second
        assert second.is_dir()
