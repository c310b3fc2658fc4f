"""Unit tests for console theme loading."""

from pathlib import Path

import pytest
from delresolve.core.theme import ThemeColors, get_rich_theme, load_theme
from pydantic import ValidationError


class TestThemeColors:
    """Tests for colour validation."""

    @pytest.mark.parametrize("color", ["#fff", "#03b971", " #ABCDEF "])
    def test_valid_colors(self, color: str) -> None:
        """Short and long hex codes are accepted and stripped."""
        assert ThemeColors(success=color).success == color.strip()

    @pytest.mark.parametrize("color", ["03b971", "#12", "#gggggg", "red"])
    def test_invalid_colors(self, color: str) -> None:
        """Anything other than #RGB or #RRGGBB is rejected."""
        with pytest.raises(ValidationError):
            ThemeColors(success=color)

    def test_unknown_style_rejected(self) -> None:
        """Only styles the CLI prints with can be set."""
        with pytest.raises(ValidationError):
            ThemeColors.model_validate({"tier_cloud": "#ffffff"})


class TestLoadTheme:
    """Tests for user theme overrides."""

    def test_defaults_without_file(self, tmp_path: Path) -> None:
        """A missing theme file gives the defaults."""
        assert load_theme(tmp_path / "theme.toml") == ThemeColors()

    def test_override(self, tmp_path: Path) -> None:
        """Colours from the [colors] table replace the defaults."""
        path = tmp_path / "theme.toml"
        path.write_text('[colors]\ntier_index = "#123456"\n')

        colors = load_theme(path)

        assert colors.tier_index == "#123456"
        assert colors.tier_sandbox == ThemeColors().tier_sandbox

    @pytest.mark.parametrize(
        "content",
        ['[colors]\nsuccess = "green"\n', "[colors\n", 'colors = "#fff"\n'],
    )
    def test_bad_file_falls_back(self, tmp_path: Path, content: str) -> None:
        """Invalid theme files are ignored."""
        path = tmp_path / "theme.toml"
        path.write_text(content)

        assert load_theme(path) == ThemeColors()

    def test_default_location(self, isolated_xdg: Path) -> None:
        """Without a path, theme.toml in the config dir is read."""
        config_dir = isolated_xdg / "config" / "delresolve"
        config_dir.mkdir(parents=True)
        (config_dir / "theme.toml").write_text('[colors]\nerror = "#000"\n')

        assert load_theme().error == "#000"


class TestRichTheme:
    """Tests for the Rich style mapping."""

    def test_styles_used_by_commands(self) -> None:
        """Every style name used in markup and tables is defined."""
        theme = get_rich_theme(ThemeColors())

        for name in (
            "success",
            "warning",
            "error",
            "info",
            "muted",
            "border",
            "bold_header",
            "tier_sandbox",
            "tier_index",
            "tier_external",
        ):
            assert name in theme.styles

    def test_error_is_bold(self) -> None:
        """Errors are rendered bold."""
        assert get_rich_theme(ThemeColors()).styles["error"].bold is True
