"""Color theme for dotlink's terminal output.

The bundled ``data/theme.toml`` supplies defaults; a user file at
``~/.config/dotlink/theme.toml`` may override any subset of colors.
"""

import logging
import tomllib
from importlib import resources
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.theme import Theme

from dotlink.core.paths import get_config_dir

logger = logging.getLogger(__name__)


class ThemeColors(BaseModel):
    """Hex colors (#RGB or #RRGGBB) used by the CLI."""

    model_config = ConfigDict(extra="forbid")

    text: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"

    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"

    # Install states
    linked: str = "#c1ff62"
    unlinked: str = "#f53263"
    partial: str = "#faf870"

    @field_validator("*", mode="before")
    @classmethod
    def validate_hex_color(cls, v: object, info: Any) -> str:
        """Reject anything that is not a #RGB or #RRGGBB string."""
        if not isinstance(v, str):
            msg = f"{info.field_name}: color must be a string"
            raise ValueError(msg)
        color = v.strip()
        digits = color[1:]
        valid = color.startswith("#") and len(digits) in (3, 6)
        if valid:
            try:
                int(digits, 16)
            except ValueError:
                valid = False
        if not valid:
            msg = f"{info.field_name}: invalid hex color '{color}'"
            raise ValueError(msg)
        return color


def get_user_theme_path() -> Path:
    """Return the path of the user's theme override file."""
    return get_config_dir() / "theme.toml"


def _read_colors(path: Path) -> dict[str, str] | None:
    """Read the [colors] table of a theme file.

    Returns:
        Mapping of color name to value, or None if the file is missing
        or unreadable.
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return None
    except (tomllib.TOMLDecodeError, OSError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return None

    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        logger.warning("Invalid 'colors' section in %s", path)
        return None
    return {k: v for k, v in colors.items() if isinstance(v, str)}


def load_theme() -> ThemeColors:
    """Load bundled colors and apply user overrides on top.

    Falls back to built-in defaults if the merged colors are invalid.
    """
    bundled = resources.files("dotlink.data").joinpath("theme.toml")
    colors = _read_colors(Path(str(bundled))) or {}

    overrides = _read_colors(get_user_theme_path())
    if overrides:
        logger.debug("Applying user theme overrides")
        colors = {**colors, **overrides}

    try:
        return ThemeColors(**colors)
    except ValidationError as e:
        logger.warning("Theme validation failed, using defaults: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build a Rich Theme from theme colors.

    Args:
        colors: Colors to use. Loaded from disk if None.

    Returns:
        Rich Theme with one style per color plus a few composite styles.
    """
    colors = colors or load_theme()
    styles: dict[str, str] = dict(colors.model_dump())
    styles.update(
        {
            "error": f"bold {colors.error}",
            "bold_header": f"bold {colors.header}",
            "dim": colors.muted,
            "component.name": f"bold {colors.text}",
            "component.path": colors.muted,
        }
    )
    return Theme(styles)


_cached_theme: Theme | None = None


def get_theme() -> Theme:
    """Return the Rich theme, loading it on first use."""
    global _cached_theme
    if _cached_theme is None:
        _cached_theme = get_rich_theme()
    return _cached_theme
