"""Console colours for the delresolve CLI.

Only the styles the commands print with are defined: message levels,
table chrome and one colour per deletion tier. Any of them can be
overridden from the ``[colors]`` table of ``theme.toml`` in the config
directory.
"""

import logging
import re
import tomllib
from functools import cache
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.theme import Theme

from delresolve.core.paths import get_config_dir

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"#(?:[0-9a-fA-F]{3}){1,2}")


class ThemeColors(BaseModel):
    """Hex colours keyed by the style they feed."""

    model_config = ConfigDict(extra="forbid")

    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"
    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"
    tier_sandbox: str = "#c1ff62"
    tier_index: str = "#0e8ac8"
    tier_external: str = "#d44ebc"

    @field_validator("*")
    @classmethod
    def validate_hex_color(cls, v: str) -> str:
        color = v.strip()
        if not _HEX_COLOR.fullmatch(color):
            msg = f"invalid hex color {v!r}, expected #RGB or #RRGGBB"
            raise ValueError(msg)
        return color


def load_theme(path: Path | None = None) -> ThemeColors:
    """Load theme colours, falling back to defaults on any problem.

    Args:
        path: Theme file to read. Defaults to theme.toml in the config dir.

    Returns:
        Colours with user overrides applied.
    """
    theme_path = path or get_config_dir() / "theme.toml"
    try:
        with theme_path.open("rb") as f:
            overrides = tomllib.load(f).get("colors", {})
        return ThemeColors.model_validate(overrides)
    except FileNotFoundError:
        return ThemeColors()
    except (OSError, tomllib.TOMLDecodeError, ValidationError) as e:
        logger.warning("Ignoring theme file %s: %s", theme_path, e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors) -> Theme:
    """Map colours to the style names used in markup and tables."""
    styles = colors.model_dump()
    styles["error"] = f"bold {colors.error}"
    styles["bold_header"] = f"bold {colors.header}"
    return Theme(styles)


@cache
def get_theme() -> Theme:
    """Get the Rich theme, loading it on first use."""
    return get_rich_theme(load_theme())
