"""Markdown-to-tagged-text transcoder.

Rewrites the markdown subset used by the analysis agents into a small tag
vocabulary: ``h1 h2 h3 strong em`` for inline styles and ``p br ul li`` for
structure. The rewrite is an ordered list of whole-text rules; later rules
see the output of earlier ones, so the order in ``RULES`` is part of the
contract.

Handles: headings (# to ###), bold, italic, bullet and numbered lists,
paragraph and line breaks.
Does NOT handle: links, code, tables, images, nested lists.
"""

from __future__ import annotations

import html
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable


@dataclass(frozen=True)
class Rule:
    """A named ``str -> str`` rewrite step."""

    name: str
    apply: Callable[[str], str]


_EXCESS_NEWLINES = re.compile(r"\n{3,}")
_H3 = re.compile(r"^### (.+)$", re.MULTILINE)
_H2 = re.compile(r"^## (.+)$", re.MULTILINE)
_H1 = re.compile(r"^# (.+)$", re.MULTILINE)
_BOLD = re.compile(r"\*\*(.+?)\*\*")
_ITALIC = re.compile(r"\*(.+?)\*")
_DASH_ITEM = re.compile(r"^- (.+)$", re.MULTILINE)
_STAR_ITEM = re.compile(r"^\* (.+)$", re.MULTILINE)
_NUMBERED_ITEM = re.compile(r"^\d+\. (.+)$", re.MULTILINE)
_ITEM = r"<li>(?:(?!</li>).)*</li>"
# Items on consecutive lines are separated by a single <br> once breaks are converted.
_ITEM_RUN = re.compile(rf"{_ITEM}(?:(?:<br>)?{_ITEM})*")


def normalize_newlines(text: str) -> str:
    """Use ``\\n`` line endings and allow at most one blank line in a row."""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return _EXCESS_NEWLINES.sub("\n\n", text)


def escape_html(text: str) -> str:
    """Escape ``&``, ``<`` and ``>`` so authored text never looks like a tag."""
    return html.escape(text, quote=False)


def convert_headings(text: str) -> str:
    # Longest marker first: "### x" must not be read as "#" + "## x".
    text = _H3.sub(r"<h3>\1</h3>", text)
    text = _H2.sub(r"<h2>\1</h2>", text)
    return _H1.sub(r"<h1>\1</h1>", text)


def convert_bold(text: str) -> str:
    return _BOLD.sub(r"<strong>\1</strong>", text)


def convert_italic(text: str) -> str:
    return _ITALIC.sub(r"<em>\1</em>", text)


def convert_list_items(text: str) -> str:
    """Turn ``- x``, ``* x`` and ``1. x`` lines into list items."""
    text = _DASH_ITEM.sub(r"<li>\1</li>", text)
    text = _STAR_ITEM.sub(r"<li>\1</li>", text)
    return _NUMBERED_ITEM.sub(r"<li>\1</li>", text)


def convert_breaks(text: str) -> str:
    """Blank lines become paragraph boundaries, other newlines line breaks."""
    return text.replace("\n\n", "</p><p>").replace("\n", "<br>")


def group_list_items(text: str) -> str:
    """Wrap each run of neighbouring list items in a single ``<ul>``."""
    return _ITEM_RUN.sub(lambda m: f"<ul>{m.group(0)}</ul>", text)


def wrap_document(text: str) -> str:
    """Wrap non-blank output in a top-level paragraph."""
    if not text.strip():
        return text
    return f"<p>{text}</p>"


RULES: tuple[Rule, ...] = (
    Rule("normalize_newlines", normalize_newlines),
    Rule("escape_html", escape_html),
    Rule("headings", convert_headings),
    Rule("bold", convert_bold),
    Rule("italic", convert_italic),
    Rule("list_items", convert_list_items),
    Rule("breaks", convert_breaks),
    Rule("group_lists", group_list_items),
    Rule("wrap_document", wrap_document),
)


def transcode(raw: str) -> str:
    """Convert agent markdown to tagged text. Never raises."""
    text = raw
    for rule in RULES:
        text = rule.apply(text)
    return text
