"""Unit tests for the root command group."""

import sys

import pytest
from click.testing import CliRunner

from gwirian_cli.main import cli


@pytest.fixture
def runner():
    """Create CLI runner."""
    return CliRunner()


@pytest.mark.cli_unit
class TestRootGroup:
    def test_no_args_without_terminal_prints_help(self, runner, monkeypatch):
        called = []
        monkeypatch.setattr("gwirian_cli.tui.run_tui", lambda: called.append(True) or 0)

        result = runner.invoke(cli, [])

        assert result.exit_code == 0
        assert "Usage:" in result.output
        assert "projects" in result.output
        assert called == []

    def test_no_args_on_terminal_opens_tui(self, runner, monkeypatch):
        monkeypatch.setattr(sys.modules["gwirian_cli.main"], "stdin_is_tty", lambda: True)
        monkeypatch.setattr(sys.modules["gwirian_cli.main"], "stdout_is_tty", lambda: True)
        monkeypatch.setattr("gwirian_cli.tui.run_tui", lambda: 0)

        result = runner.invoke(cli, [])

        assert result.exit_code == 0
        assert "Usage:" not in result.output

    def test_tui_failure_exit_code(self, runner, monkeypatch):
        monkeypatch.setattr(sys.modules["gwirian_cli.main"], "stdin_is_tty", lambda: True)
        monkeypatch.setattr(sys.modules["gwirian_cli.main"], "stdout_is_tty", lambda: True)
        monkeypatch.setattr("gwirian_cli.tui.run_tui", lambda: 1)

        assert runner.invoke(cli, []).exit_code == 1

    def test_ctrl_c_in_tui(self, runner, monkeypatch):
        def interrupted():
            raise KeyboardInterrupt

        monkeypatch.setattr(sys.modules["gwirian_cli.main"], "stdin_is_tty", lambda: True)
        monkeypatch.setattr(sys.modules["gwirian_cli.main"], "stdout_is_tty", lambda: True)
        monkeypatch.setattr("gwirian_cli.tui.run_tui", interrupted)

        assert runner.invoke(cli, []).exit_code == 130

    def test_help_lists_commands(self, runner):
        result = runner.invoke(cli, ["--help"])

        for name in ["auth", "logout", "config", "install", "features", "scenario-executions"]:
            assert name in result.output
