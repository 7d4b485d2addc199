"""Tagged-text parser: resolves style tags into a StyledRun.

Structural tags are flattened to plain text first. Style tags are then
matched in one left-to-right scan with an explicit stack. A closing tag
matches the nearest open frame with the same name, not necessarily the top
one, so badly nested markup still styles what it can. Unmatched tags are
dropped and their text is kept unstyled.
"""

from __future__ import annotations

import html
import logging
import re
from dataclasses import dataclass

from eval_reports.markup.styled_run import Annotation, StyledRun

logger = logging.getLogger(__name__)

DEFAULT_BULLET = "• "

_STYLE_TAG = re.compile(r"<(/?)(h[123]|strong|em)>")
_ENTITY = re.compile(r"&(amp|lt|gt|quot|#39);")
_ENTITIES = {"amp": "&", "lt": "<", "gt": ">", "quot": '"', "#39": "'"}
_EXCESS_NEWLINES = re.compile(r"\n{3,}")


@dataclass(frozen=True)
class TagFrame:
    """An open style tag and the output offset where it began."""

    tag: str
    start: int


def decode_entities(text: str) -> str:
    """Decode the entities produced by the transcoder's escaping step."""
    return _ENTITY.sub(lambda m: _ENTITIES[m.group(1)], text)


def flatten_structure(tagged: str, bullet: str = DEFAULT_BULLET) -> str:
    """Rewrite paragraph, break and list tags as plain text.

    Entities are left encoded; the style scan decodes literal text itself.
    The bullet is escaped the same way, so a glyph such as ``<em>`` stays
    literal text instead of turning into a style marker.
    """
    glyph = html.escape(bullet, quote=False)
    text = (
        tagged.replace("<p>", "")
        .replace("</p>", "\n\n")
        .replace("<br>", "\n")
        .replace("<ul>", "")
        .replace("</ul>", "")
        .replace("<li>", glyph)
        .replace("</li>", "")
    )
    return _EXCESS_NEWLINES.sub("\n\n", text).strip()


def parse(tagged: str, *, bullet: str = DEFAULT_BULLET) -> StyledRun:
    """Parse tagged text into plain text and style annotations. Never raises."""
    source = flatten_structure(tagged, bullet)

    chunks: list[str] = []
    length = 0
    stack: list[TagFrame] = []
    annotations: list[Annotation] = []
    last_end = 0

    for match in _STYLE_TAG.finditer(source):
        if match.start() > last_end:
            literal = decode_entities(source[last_end : match.start()])
            chunks.append(literal)
            length += len(literal)
        last_end = match.end()

        closing, tag = match.group(1) == "/", match.group(2)
        if not closing:
            stack.append(TagFrame(tag, length))
            continue

        for index in range(len(stack) - 1, -1, -1):
            if stack[index].tag == tag:
                frame = stack.pop(index)
                if length > frame.start:
                    annotations.append(Annotation(tag, frame.start, length))
                break
        else:
            logger.debug("Ignoring unmatched closing tag </%s> at offset %d", tag, length)

    if last_end < len(source):
        chunks.append(decode_entities(source[last_end:]))

    if stack:
        logger.debug("Discarding %d unclosed tag(s): %s", len(stack), [f.tag for f in stack])

    return StyledRun(text="".join(chunks), annotations=tuple(annotations))
