"""Fixed visual styles for the style tags produced by the transcoder."""

from __future__ import annotations

from dataclasses import dataclass, replace

from rich.style import Style

STYLE_TAGS = ("h1", "h2", "h3", "strong", "em")


@dataclass(frozen=True)
class StyleSpec:
    """Declarative style for one tag name.

    ``scale`` is the font size relative to body text. Terminals cannot
    change font size, so it is kept as data for other surfaces.
    ``color=None`` inherits the surrounding color.
    """

    bold: bool = False
    italic: bool = False
    underline: bool = False
    scale: float = 1.0
    color: str | None = None

    def to_rich(self) -> Style:
        """Map this spec onto a Rich style."""
        return Style(
            bold=self.bold or None,
            italic=self.italic or None,
            underline=self.underline or None,
            color=self.color,
        )

    def with_color(self, color: str | None) -> StyleSpec:
        """Return a copy with a different color."""
        return replace(self, color=color)


PRIMARY_FOREGROUND = "#FFFFFF"
ACCENT_A = "#8BB8FF"
ACCENT_B = "#9FCFFF"
MUTED = "#CCCCCC"

STYLES: dict[str, StyleSpec] = {
    "h1": StyleSpec(bold=True, scale=1.6, color=PRIMARY_FOREGROUND),
    "h2": StyleSpec(bold=True, scale=1.33, color=ACCENT_A),
    "h3": StyleSpec(bold=True, scale=1.13, color=ACCENT_B),
    "strong": StyleSpec(bold=True),
    "em": StyleSpec(italic=True, color=MUTED),
}


def style_table(colors: dict[str, str] | None = None) -> dict[str, StyleSpec]:
    """Return the style table with optional per-tag color overrides applied.

    The module-level ``STYLES`` table is never mutated.
    """
    table = dict(STYLES)
    for tag, color in (colors or {}).items():
        table[tag] = table[tag].with_color(color)
    return table
