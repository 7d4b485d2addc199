"""Help screen — modal overlay listing the viewer's keys."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from rich.text import Text
from textual.screen import ModalScreen
from textual.widgets import Static

if TYPE_CHECKING:
    from textual.app import ComposeResult
    from textual.binding import BindingType

# (section, ((textual key names, description), ...))
HELP_SECTIONS: tuple[tuple[str, tuple[tuple[tuple[str, ...], str], ...]], ...] = (
    (
        "Agents",
        (
            (("n", "p"), "Next / previous agent"),
            (("tab", "shift+tab"), "Move focus: agent list, report, link lists"),
        ),
    ),
    (
        "Report",
        (
            (("j", "k"), "Scroll down / up, or move in the agent list"),
            (("g", "G"), "Jump to top / bottom"),
            (("enter",), "Open the highlighted source or search result"),
        ),
    ),
    (
        "",
        (
            (("question_mark",), "Toggle this help"),
            (("q",), "Quit"),
        ),
    ),
)

_KEY_LABELS = {
    "question_mark": "?",
    "tab": "Tab",
    "shift+tab": "Shift+Tab",
    "enter": "Enter",
    "escape": "Escape",
}


def help_keys() -> set[str]:
    """Textual key names documented on the help screen."""
    return {key for _, rows in HELP_SECTIONS for keys, _ in rows for key in keys}


def help_text() -> Text:
    """Lay out HELP_SECTIONS as aligned key / description lines."""
    labels = {
        keys: " / ".join(_KEY_LABELS.get(k, k) for k in keys)
        for _, rows in HELP_SECTIONS
        for keys, _ in rows
    }
    width = max(len(label) for label in labels.values()) + 2
    text = Text()
    for title, rows in HELP_SECTIONS:
        if title:
            text.append(f"{title}\n", style="bold underline")
        for keys, description in rows:
            text.append(f"  {labels[keys]:<{width}}", style="bold")
            text.append(f"{description}\n")
        text.append("\n")
    text.append("? or Escape to close", style="dim")
    return text


class HelpScreen(ModalScreen[None]):
    """Keybinding overlay for the report viewer."""

    BINDINGS: ClassVar[list[BindingType]] = [
        ("escape", "dismiss", "Close"),
        ("question_mark", "dismiss", "Close"),
    ]

    DEFAULT_CSS = """
    HelpScreen {
        align: center middle;
    }
    #help {
        width: auto;
        max-width: 80%;
        height: auto;
        padding: 1 3;
        background: $surface;
        border: round $accent;
        border-title-style: bold;
    }
    """

    def compose(self) -> ComposeResult:
        """Create the key list."""
        help_box = Static(help_text(), id="help")
        help_box.border_title = "Report Viewer Keys"
        yield help_box
