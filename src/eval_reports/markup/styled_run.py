"""StyledRun: plain text plus style annotations over character ranges."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from rich.text import Text

from eval_reports.markup.styles import STYLES

if TYPE_CHECKING:
    from eval_reports.markup.styles import StyleSpec


@dataclass(frozen=True)
class Annotation:
    """A style tag applied to ``text[start:end]`` of the owning run."""

    tag: str
    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class StyledRun:
    """Rendered report body.

    ``annotations`` are kept in the order their tags were closed. Ranges may
    overlap, e.g. bold text inside a heading.
    """

    text: str = ""
    annotations: tuple[Annotation, ...] = field(default_factory=tuple)

    def spans(self) -> list[Annotation]:
        """Annotations sorted by start offset, outer (longer) ranges first on ties."""
        return sorted(self.annotations, key=lambda a: (a.start, -a.length))

    def to_triples(self) -> list[tuple[str, int, int]]:
        """Return ``(tag, start, end)`` triples in ``spans()`` order."""
        return [(a.tag, a.start, a.end) for a in self.spans()]

    def to_dict(self) -> dict[str, object]:
        """Return a dict suitable for JSON serialization."""
        return {
            "text": self.text,
            "spans": [{"style": tag, "start": s, "end": e} for tag, s, e in self.to_triples()],
        }

    def to_rich_text(self, styles: dict[str, StyleSpec] | None = None) -> Text:
        """Build a Rich ``Text`` with one span per annotation, in close order."""
        table = styles if styles is not None else STYLES
        text = Text(self.text)
        for annotation in self.annotations:
            text.stylize(table[annotation.tag].to_rich(), annotation.start, annotation.end)
        return text
