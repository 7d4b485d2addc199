"""Render configuration: load and validate render.toml."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from rich.color import Color, ColorParseError

from eval_reports.markup.parser import DEFAULT_BULLET
from eval_reports.markup.styles import STYLE_TAGS, StyleSpec, style_table


class ConfigError(Exception):
    """Raised when render.toml is malformed or has invalid values."""


@dataclass
class RenderConfig:
    """User overrides for report rendering."""

    bullet: str = DEFAULT_BULLET
    colors: dict[str, str] = field(default_factory=dict)  # tag name -> color

    def styles(self) -> dict[str, StyleSpec]:
        """Return the effective style table."""
        return style_table(self.colors)


def get_config_path() -> Path:
    """Return the path to render.toml, respecting XDG_CONFIG_HOME."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / "eval-reports" / "render.toml"


def load_render_config(path: Path) -> RenderConfig:
    """Load and validate render settings from a TOML file.

    Returns the defaults if the file does not exist.
    Raises ConfigError on parse errors or invalid values.
    """
    if not path.exists():
        return RenderConfig()

    try:
        data = tomllib.loads(path.read_text())
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {path}: {e}"
        raise ConfigError(msg) from e

    bullet = data.get("bullet", DEFAULT_BULLET)
    if not isinstance(bullet, str):
        msg = f"'bullet' in {path} must be a string"
        raise ConfigError(msg)

    raw_colors = data.get("colors", {})
    if not isinstance(raw_colors, dict):
        msg = f"'colors' in {path} must be a table"
        raise ConfigError(msg)

    colors: dict[str, str] = {}
    for tag, color in raw_colors.items():
        if tag not in STYLE_TAGS:
            msg = f"Unknown style '{tag}' in {path}; expected one of {', '.join(STYLE_TAGS)}"
            raise ConfigError(msg)
        if not isinstance(color, str):
            msg = f"Color for '{tag}' in {path} must be a string"
            raise ConfigError(msg)
        try:
            Color.parse(color)
        except ColorParseError as e:
            msg = f"Invalid color {color!r} for '{tag}' in {path}"
            raise ConfigError(msg) from e
        colors[tag] = color

    return RenderConfig(bullet=bullet, colors=colors)
