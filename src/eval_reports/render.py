"""Markdown-to-StyledRun pipeline and the per-document render cache."""

from __future__ import annotations

import logging

from eval_reports.markup.parser import DEFAULT_BULLET, parse
from eval_reports.markup.styled_run import StyledRun
from eval_reports.markup.transcoder import transcode

logger = logging.getLogger(__name__)


def render_markdown(raw: str, *, bullet: str = DEFAULT_BULLET) -> StyledRun:
    """Render agent markdown into plain text plus style annotations."""
    return parse(transcode(raw), bullet=bullet)


class RenderCache:
    """Memoizes ``render_markdown`` by exact input text.

    Owned by the caller displaying the document; drop or ``clear()`` it when
    the document goes away.
    """

    def __init__(self, *, bullet: str = DEFAULT_BULLET) -> None:
        self._bullet = bullet
        self._runs: dict[str, StyledRun] = {}
        self.hits = 0
        self.misses = 0

    def get(self, raw: str) -> StyledRun:
        """Return the rendered run for ``raw``, computing it at most once."""
        run = self._runs.get(raw)
        if run is not None:
            self.hits += 1
            return run
        self.misses += 1
        logger.debug("Rendering report body (%d chars)", len(raw))
        run = render_markdown(raw, bullet=self._bullet)
        self._runs[raw] = run
        return run

    def clear(self) -> None:
        self._runs.clear()

    def __len__(self) -> int:
        return len(self._runs)

    def __contains__(self, raw: object) -> bool:
        return raw in self._runs
