"""Unit tests for the config commands."""

from pathlib import Path

from delresolve.cli.main import app
from delresolve.core.config import load_config
from typer.testing import CliRunner

runner = CliRunner()


class TestConfigCommands:
    """Tests for delresolve config show/init."""

    def test_show(self, config_file: Path) -> None:
        """show lists every setting."""
        result = runner.invoke(app, ["--config", str(config_file), "config", "show"])

        assert result.exit_code == 0
        for key in ("sandbox_root", "index_path", "owner", "require_confirmation"):
            assert key in result.stdout
        assert "delresolve" in result.stdout

    def test_show_defaults_without_file(self) -> None:
        """Without a config file, defaults are shown."""
        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0
        assert "256" in result.stdout

    def test_show_invalid_config(self, tmp_path: Path) -> None:
        """An invalid config file is reported."""
        bad = tmp_path / "bad.toml"
        bad.write_text("owner = [unclosed\n")

        result = runner.invoke(app, ["--config", str(bad), "config", "show"])

        assert result.exit_code == 1
        assert "Error" in result.output

    def test_init_writes_defaults(self, tmp_path: Path) -> None:
        """init writes a loadable default config."""
        path = tmp_path / "new" / "config.toml"

        result = runner.invoke(app, ["--config", str(path), "config", "init"])

        assert result.exit_code == 0
        assert path.exists()
        assert load_config(path).owner == "delresolve"

    def test_init_keeps_existing(self, config_file: Path) -> None:
        """init does not overwrite without --force."""
        before = config_file.read_text()

        result = runner.invoke(app, ["--config", str(config_file), "config", "init"])

        assert result.exit_code == 0
        assert "Config already exists" in result.stdout
        assert config_file.read_text() == before

    def test_init_force(self, config_file: Path) -> None:
        """init --force replaces the existing file."""
        result = runner.invoke(app, ["--config", str(config_file), "config", "init", "--force"])

        assert result.exit_code == 0
        assert load_config(config_file).sandbox_root is None
