"""Agent reports: loading and the citation / search-result side lists."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from rich.style import Style
from rich.text import Text

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

LINK_COLOR = "#64B5F6"
INDEX_COLOR = "#AAAAAA"
SOURCES_COLOR = "#8B5CF6"
SEARCH_RESULTS_COLOR = "#FF9800"
URL_COLOR = "#888888"
SNIPPET_COLOR = "#BBBBBB"


class ReportError(Exception):
    """Raised when a reports file cannot be read or is malformed."""


@dataclass
class SearchResult:
    """A search hit returned alongside a report."""

    url: str | None
    name: str | None = None
    snippet: str | None = None

    @property
    def title(self) -> str:
        return self.name or self.url or ""

    @property
    def show_url(self) -> bool:
        """Whether the URL needs its own line under the title."""
        return self.name is not None and self.name != self.url


@dataclass
class AgentReport:
    """One agent's analysis result."""

    agent_id: str
    name: str
    provider: str = ""
    model: str = ""
    analysis: str | None = None
    citations: list[str] = field(default_factory=list)
    search_results: list[SearchResult] = field(default_factory=list)
    error: str | None = None

    @property
    def is_success(self) -> bool:
        return self.error is None

    @property
    def header_title(self) -> str:
        return f"{self.provider} - {self.model}"

    @property
    def displayable_results(self) -> list[SearchResult]:
        """Search results that carry a URL to open."""
        return [r for r in self.search_results if r.url is not None]


def _optional_str(value: object, key: str, where: str) -> str | None:
    if value is not None and not isinstance(value, str):
        msg = f"{where}: field '{key}' must be a string"
        raise ReportError(msg)
    return value


def _parse_search_result(entry: object, where: str) -> SearchResult:
    if not isinstance(entry, dict):
        msg = f"{where}: each search result must be an object"
        raise ReportError(msg)
    return SearchResult(
        url=_optional_str(entry.get("url"), "url", where),
        name=_optional_str(entry.get("name"), "name", where),
        snippet=_optional_str(entry.get("snippet"), "snippet", where),
    )


def _parse_report(i: int, entry: object, path: Path) -> AgentReport:
    where = f"Report {i} in {path}"
    if not isinstance(entry, dict):
        msg = f"{where} must be an object"
        raise ReportError(msg)
    for key in ("id", "name"):
        if key not in entry:
            msg = f"{where} is missing required field '{key}'"
            raise ReportError(msg)
    if not isinstance(entry["id"], str | int) or isinstance(entry["id"], bool):
        msg = f"{where}: field 'id' must be a string or integer"
        raise ReportError(msg)
    if not isinstance(entry["name"], str):
        msg = f"{where}: field 'name' must be a string"
        raise ReportError(msg)

    citations = entry.get("citations") or []
    if not isinstance(citations, list) or not all(isinstance(c, str) for c in citations):
        msg = f"{where}: field 'citations' must be a list of strings"
        raise ReportError(msg)
    search_results = entry.get("search_results") or []
    if not isinstance(search_results, list):
        msg = f"{where}: field 'search_results' must be a list"
        raise ReportError(msg)

    return AgentReport(
        agent_id=str(entry["id"]),
        name=entry["name"],
        provider=_optional_str(entry.get("provider"), "provider", where) or "",
        model=_optional_str(entry.get("model"), "model", where) or "",
        analysis=_optional_str(entry.get("analysis"), "analysis", where),
        citations=list(citations),
        search_results=[_parse_search_result(r, where) for r in search_results],
        error=_optional_str(entry.get("error"), "error", where),
    )


def load_reports(path: Path) -> list[AgentReport]:
    """Load agent reports from a JSON file of the form ``{"reports": [...]}``.

    Raises ReportError if the file is missing, is not valid JSON, an entry
    lacks an ``id`` or ``name`` or has a field of the wrong type, or two
    entries share an ``id``.
    """
    try:
        data = json.loads(path.read_text())
    except FileNotFoundError as e:
        msg = f"Reports file not found: {path}"
        raise ReportError(msg) from e
    except json.JSONDecodeError as e:
        msg = f"Invalid JSON in {path}: {e}"
        raise ReportError(msg) from e

    if not isinstance(data, dict) or not isinstance(data.get("reports"), list):
        msg = f"{path} must contain a top-level 'reports' list"
        raise ReportError(msg)

    reports: list[AgentReport] = []
    seen: set[str] = set()
    for i, entry in enumerate(data["reports"]):
        report = _parse_report(i, entry, path)
        if report.agent_id in seen:
            msg = f"Duplicate agent id '{report.agent_id}' in {path}"
            raise ReportError(msg)
        seen.add(report.agent_id)
        reports.append(report)
    return reports


def successful_reports(reports: Iterable[AgentReport]) -> list[AgentReport]:
    """Reports without an error, sorted by agent name (case-insensitive)."""
    return sorted((r for r in reports if r.is_success), key=lambda r: r.name.lower())


def _link_style(url: str, *, bold: bool = False) -> Style:
    return Style(color=LINK_COLOR, underline=True, bold=bold or None, link=url)


SOURCES_HEADING = Text("Sources", style=Style(bold=True, color=SOURCES_COLOR))
SEARCH_RESULTS_HEADING = Text("Search Results", style=Style(bold=True, color=SEARCH_RESULTS_COLOR))


def citation_entry(index: int, url: str) -> Text:
    """Render one numbered citation line."""
    text = Text(f"{index}. ", style=INDEX_COLOR)
    text.append(url, style=_link_style(url))
    return text


def search_result_entry(index: int, result: SearchResult) -> Text:
    """Render one numbered search result with optional URL and snippet lines."""
    text = Text(f"{index}. ", style=INDEX_COLOR)
    text.append(result.title, style=_link_style(result.url or "", bold=True))
    if result.show_url:
        text.append(f"\n   {result.url}", style=URL_COLOR)
    if result.snippet and result.snippet.strip():
        text.append(f"\n   {result.snippet}", style=SNIPPET_COLOR)
    return text


def sources_text(citations: list[str]) -> Text:
    """Render the numbered "Sources" list."""
    return Text("\n").join(
        [SOURCES_HEADING, *(citation_entry(i, url) for i, url in enumerate(citations, start=1))]
    )


def search_results_text(results: list[SearchResult]) -> Text:
    """Render the numbered "Search Results" list; results without a URL are skipped."""
    entries = [
        search_result_entry(i, r) for i, r in enumerate(results, start=1) if r.url is not None
    ]
    return Text("\n").join([SEARCH_RESULTS_HEADING, *entries])
