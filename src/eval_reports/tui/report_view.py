"""Report view — styled report body followed by sources and search results."""

from __future__ import annotations

import logging
import webbrowser
from typing import TYPE_CHECKING, ClassVar

from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.css.query import NoMatches
from textual.widgets import OptionList, Static
from textual.widgets.option_list import Option

from eval_reports.report import (
    SEARCH_RESULTS_HEADING,
    SOURCES_HEADING,
    citation_entry,
    search_result_entry,
)

if TYPE_CHECKING:
    from textual.app import ComposeResult
    from textual.binding import BindingType

    from eval_reports.markup.styles import StyleSpec
    from eval_reports.render import RenderCache
    from eval_reports.report import AgentReport

logger = logging.getLogger(__name__)

NO_ANALYSIS = "No analysis available"


def open_url(url: str) -> bool:
    """Open ``url`` in the external browser. Failures are logged, not raised."""
    try:
        return webbrowser.open(url)
    except webbrowser.Error:
        logger.warning("Could not open %s", url, exc_info=True)
        return False


class ReportView(VerticalScroll):
    """Scrollable view of one agent's report."""

    BINDINGS: ClassVar[list[BindingType]] = [
        Binding("j", "scroll_down", "Scroll down", show=False),
        Binding("k", "scroll_up", "Scroll up", show=False),
        Binding("g", "scroll_home", "Top", show=False),
        Binding("G", "scroll_end", "Bottom", show=False),
    ]

    DEFAULT_CSS = """
    ReportView {
        padding: 0 2;
    }
    #report-body {
        margin-bottom: 1;
    }
    ReportView OptionList {
        height: auto;
        margin-bottom: 1;
        background: $surface;
    }
    """

    def __init__(
        self,
        cache: RenderCache,
        styles: dict[str, StyleSpec],
        *,
        id: str | None = None,  # noqa: A002
    ) -> None:
        super().__init__(id=id)
        self._cache = cache
        self._styles = styles
        self._source_urls: list[str] = []
        self._result_urls: list[str] = []
        self._body_text = ""
        self._pending: AgentReport | None = None

    def compose(self) -> ComposeResult:
        """Create the body and the two link lists."""
        yield Static("", id="report-body")
        yield OptionList(id="sources")
        yield OptionList(id="search-results")

    def on_mount(self) -> None:
        """Show a report that arrived before the children were composed."""
        if self._pending is not None:
            self.show_report(self._pending)

    def show_report(self, report: AgentReport | None) -> None:
        """Render ``report``, or the empty-state message when it has no analysis."""
        try:
            body = self.query_one("#report-body", Static)
            sources = self.query_one("#sources", OptionList)
            results = self.query_one("#search-results", OptionList)
        except NoMatches:
            self._pending = report
            return
        self._pending = None
        sources.clear_options()
        results.clear_options()
        self._source_urls = []
        self._result_urls = []

        if report is None or report.analysis is None:
            self._body_text = NO_ANALYSIS
            body.update(f"[dim]{NO_ANALYSIS}[/dim]")
        else:
            run = self._cache.get(report.analysis)
            self._body_text = run.text
            body.update(run.to_rich_text(self._styles))

            if report.citations:
                sources.add_option(Option(SOURCES_HEADING, disabled=True))
                for index, url in enumerate(report.citations, start=1):
                    sources.add_option(Option(citation_entry(index, url)))
                    self._source_urls.append(url)

            if report.displayable_results:
                results.add_option(Option(SEARCH_RESULTS_HEADING, disabled=True))
                for index, result in enumerate(report.search_results, start=1):
                    if result.url is None:
                        continue
                    results.add_option(Option(search_result_entry(index, result)))
                    self._result_urls.append(result.url)

        sources.display = bool(self._source_urls)
        results.display = bool(self._result_urls)
        self.scroll_home(animate=False)

    @property
    def body_text(self) -> str:
        """Plain text of the rendered body."""
        return self._body_text

    @property
    def source_urls(self) -> list[str]:
        return list(self._source_urls)

    @property
    def result_urls(self) -> list[str]:
        return list(self._result_urls)

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        """Open the selected source or search result in the browser."""
        event.stop()
        urls = self._source_urls if event.option_list.id == "sources" else self._result_urls
        # Option 0 is the disabled section heading.
        index = event.option_index - 1
        if 0 <= index < len(urls):
            open_url(urls[index])
