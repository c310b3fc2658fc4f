"""Unit tests for the main CLI application."""

from delresolve import __version__
from delresolve.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


class TestMainApp:
    """Tests for global options."""

    def test_version(self) -> None:
        """--version prints the version and exits."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_help_lists_commands(self) -> None:
        """--help lists all commands."""
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        for command in ("rm", "classify", "index", "config", "history"):
            assert command in result.stdout

    def test_no_args_shows_help(self) -> None:
        """Running without arguments shows usage."""
        result = runner.invoke(app, [])

        assert "Usage" in result.output
