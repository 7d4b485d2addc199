"""Textual App — report viewer entry point."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, ClassVar

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.css.query import NoMatches
from textual.widgets import DataTable, Footer, Header, Static

from eval_reports.config import RenderConfig
from eval_reports.render import RenderCache
from eval_reports.report import successful_reports
from eval_reports.tui.agent_list import AgentList
from eval_reports.tui.help_screen import HelpScreen
from eval_reports.tui.report_view import ReportView

if TYPE_CHECKING:
    from textual.binding import BindingType

    from eval_reports.report import AgentReport

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "View Reports"
NO_REPORTS = "No successful reports to display"


class ReportsApp(App[None]):
    """Viewer for AI agent analysis reports."""

    TITLE = DEFAULT_TITLE

    CSS = """
    #main-container {
        height: 1fr;
    }
    #agent-list {
        height: auto;
        max-height: 8;
        border-bottom: solid $primary;
    }
    #report-view {
        height: 1fr;
    }
    #empty-message {
        width: 100%;
        height: 100%;
        content-align: center middle;
        text-style: dim;
    }
    """

    BINDINGS: ClassVar[list[BindingType]] = [
        Binding("q", "quit", "Quit", show=True),
        Binding("question_mark", "show_help", "Help", show=True),
        Binding("n", "next_agent", "Next", show=True),
        Binding("p", "previous_agent", "Previous", show=True),
        Binding("tab", "focus_next", "Next pane", show=False),
        Binding("shift+tab", "focus_previous", "Previous pane", show=False),
    ]

    def __init__(
        self,
        reports: list[AgentReport],
        config: RenderConfig | None = None,
        initial_agent_id: str | None = None,
    ) -> None:
        super().__init__()
        self._config = config if config is not None else RenderConfig()
        self._reports = successful_reports(reports)
        for report in reports:
            if not report.is_success:
                logger.warning("Skipping report from %s: %s", report.name, report.error)
        # One cache per viewer; it lives exactly as long as the displayed reports.
        self._cache = RenderCache(bullet=self._config.bullet)
        ids = [r.agent_id for r in self._reports]
        if initial_agent_id in ids:
            self._selected_id: str | None = initial_agent_id
        else:
            self._selected_id = ids[0] if ids else None

    @property
    def render_cache(self) -> RenderCache:
        return self._cache

    def compose(self) -> ComposeResult:
        """Create the agent list above the report view."""
        yield Header()
        with Vertical(id="main-container"):
            if not self._reports:
                yield Static(NO_REPORTS, id="empty-message")
            else:
                yield AgentList(self._reports, selected=self._selected_id, id="agent-list")
                yield ReportView(self._cache, self._config.styles(), id="report-view")
        yield Footer()

    def on_mount(self) -> None:
        """Show the initially selected report."""
        agents = self._get_agent_list()
        if agents is not None:
            self.set_focus(agents)
        self._show_selected()

    def _get_agent_list(self) -> AgentList | None:
        try:
            return self.query_one(AgentList)
        except NoMatches:
            return None

    def _get_report_view(self) -> ReportView | None:
        try:
            return self.query_one(ReportView)
        except NoMatches:
            return None

    @property
    def selected_report(self) -> AgentReport | None:
        """Return the report of the selected agent."""
        if self._selected_id is None:
            return None
        return self._report_by_id(self._selected_id)

    def select_agent(self, agent_id: str) -> None:
        """Switch the view to ``agent_id``'s report."""
        if agent_id == self._selected_id or self._report_by_id(agent_id) is None:
            return
        self._selected_id = agent_id
        self._show_selected()

    def _report_by_id(self, agent_id: str) -> AgentReport | None:
        return next((r for r in self._reports if r.agent_id == agent_id), None)

    def _show_selected(self) -> None:
        report = self.selected_report
        self.title = report.header_title if report is not None else DEFAULT_TITLE
        view = self._get_report_view()
        if view is not None:
            view.show_report(report)

    def on_data_table_row_highlighted(self, event: DataTable.RowHighlighted) -> None:
        """Follow the agent list cursor."""
        if event.row_key.value is not None:
            self.select_agent(event.row_key.value)

    # === Actions ===

    def _step(self, delta: int) -> None:
        ids = [r.agent_id for r in self._reports]
        if self._selected_id is None:
            return
        index = (ids.index(self._selected_id) + delta) % len(ids)
        self.select_agent(ids[index])
        agents = self._get_agent_list()
        if agents is not None:
            agents.select_agent(ids[index])

    def action_next_agent(self) -> None:
        """Select the next agent, wrapping around."""
        self._step(1)

    def action_previous_agent(self) -> None:
        """Select the previous agent, wrapping around."""
        self._step(-1)

    def action_show_help(self) -> None:
        """Show the help overlay."""
        self.push_screen(HelpScreen())
