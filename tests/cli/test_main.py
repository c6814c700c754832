"""Tests for the main CLI entry point and lazy command loading."""

from unittest import mock

import click
import pytest
from click.testing import CliRunner

from patternsmith import __version__
from patternsmith.cli.main import LazyGroup, cli, main


@pytest.fixture
def runner():
    """Provide a Click CLI runner for testing."""
    return CliRunner()


class TestLazyGroup:
    """Test the LazyGroup command loading mechanism."""

    def test_list_commands(self):
        group = LazyGroup(name="test")
        assert group.list_commands(mock.Mock()) == [
            "presets",
            "generate",
            "test",
            "session",
            "health",
        ]

    def test_unknown_command_returns_none(self):
        group = LazyGroup(name="test")
        assert group.get_command(mock.Mock(), "nonexistent_command") is None

    @pytest.mark.parametrize("name", list(LazyGroup.commands_map))
    def test_every_command_loads(self, name):
        command = LazyGroup(name="test").get_command(mock.Mock(), name)
        assert isinstance(command, click.Command)

    def test_test_command_keeps_public_name(self):
        command = LazyGroup(name="test").get_command(mock.Mock(), "test")
        assert command.name == "test"

    def test_commands_are_imported_lazily(self):
        group = LazyGroup(name="test")
        with mock.patch("importlib.import_module") as mock_import:
            group.get_command(mock.Mock(), "health")
        mock_import.assert_called_once_with("patternsmith.cli.health_cmd")


class TestCliGroup:
    def test_help_lists_commands(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for name in ("presets", "generate", "test", "session", "health"):
            assert name in result.output

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestMain:
    def test_keyboard_interrupt_exits_130(self):
        with mock.patch("patternsmith.cli.main.cli", side_effect=KeyboardInterrupt):
            with pytest.raises(SystemExit) as exc_info:
                main()
        assert exc_info.value.code == 130

    def test_unexpected_error_exits_1(self, capsys):
        with mock.patch("patternsmith.cli.main.cli", side_effect=RuntimeError("boom")):
            with pytest.raises(SystemExit) as exc_info:
                main()
        assert exc_info.value.code == 1
        assert "Error: boom" in capsys.readouterr().err
