"""Agent list widget — DataTable of agents with a successful report."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from rich.text import Text
from textual.binding import Binding
from textual.widgets import DataTable

if TYPE_CHECKING:
    from textual.binding import BindingType

    from eval_reports.report import AgentReport


def _analysis_icon(report: AgentReport) -> Text:
    if report.analysis:
        return Text("●", style="green")
    return Text("○", style="dim")


class AgentList(DataTable[str | Text]):
    """A DataTable listing agents, one row per successful report."""

    BINDINGS: ClassVar[list[BindingType]] = [
        Binding("j", "cursor_down", "Cursor down", show=False),
        Binding("k", "cursor_up", "Cursor up", show=False),
    ]

    def __init__(
        self,
        reports: list[AgentReport],
        *,
        selected: str | None = None,
        id: str | None = None,  # noqa: A002
    ) -> None:
        super().__init__(cursor_type="row", id=id)
        self._reports = reports
        self._initial = selected
        self._agent_ids: list[str] = []

    def on_mount(self) -> None:
        """Set up columns and rows on mount."""
        self.add_columns("", "Agent", "Provider", "Model")
        for report in self._reports:
            self.add_row(
                _analysis_icon(report),
                report.name,
                report.provider,
                report.model,
                key=report.agent_id,
            )
            self._agent_ids.append(report.agent_id)
        if self._initial is not None:
            self.select_agent(self._initial)

    @property
    def selected_agent_id(self) -> str | None:
        """Return the agent_id of the currently highlighted row."""
        if self.cursor_row < 0 or self.cursor_row >= len(self._agent_ids):
            return None
        return self._agent_ids[self.cursor_row]

    def select_agent(self, agent_id: str) -> None:
        """Move the cursor to the given agent, if listed."""
        if agent_id in self._agent_ids:
            self.move_cursor(row=self._agent_ids.index(agent_id))
