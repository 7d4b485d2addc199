"""Tests for report loading and the sources / search results lists."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from eval_reports.report import (
    AgentReport,
    ReportError,
    SearchResult,
    load_reports,
    search_results_text,
    sources_text,
    successful_reports,
)

if TYPE_CHECKING:
    from pathlib import Path

# === load_reports() ===


def test_load_reports(reports_file: Path) -> None:
    """All entries are loaded with their side lists."""
    reports = load_reports(reports_file)
    assert [r.agent_id for r in reports] == ["openai", "perplexity", "anthropic", "broken"]
    assert reports[0].citations == ["https://lichess.org/study/abc", "https://chess.com/openings"]
    assert reports[1].search_results[1] == SearchResult(
        url="https://en.wikipedia.org/wiki/Najdorf",
        name="Najdorf Variation",
        snippet="A popular Sicilian line.",
    )
    assert reports[2].analysis is None
    assert reports[3].error == "HTTP 500"


def test_load_reports_missing_file(tmp_path: Path) -> None:
    """A missing file raises ReportError."""
    with pytest.raises(ReportError, match="not found"):
        load_reports(tmp_path / "missing.json")


def test_load_reports_invalid_json(tmp_path: Path) -> None:
    """Invalid JSON raises ReportError."""
    path = tmp_path / "reports.json"
    path.write_text("{not json")
    with pytest.raises(ReportError, match="Invalid JSON"):
        load_reports(path)


@pytest.mark.parametrize("data", [[], {"reports": {}}, {"other": []}])
def test_load_reports_wrong_shape(tmp_path: Path, data: object) -> None:
    """The document must hold a 'reports' list."""
    path = tmp_path / "reports.json"
    path.write_text(json.dumps(data))
    with pytest.raises(ReportError):
        load_reports(path)


def test_load_reports_missing_required_field(tmp_path: Path) -> None:
    """An entry without a name raises ReportError."""
    path = tmp_path / "reports.json"
    path.write_text(json.dumps({"reports": [{"id": "a"}]}))
    with pytest.raises(ReportError, match="'name'"):
        load_reports(path)


def test_load_reports_duplicate_id(tmp_path: Path) -> None:
    """Two entries with the same id are rejected."""
    path = tmp_path / "reports.json"
    path.write_text(
        json.dumps({"reports": [{"id": "a", "name": "A"}, {"id": "a", "name": "Again"}]})
    )
    with pytest.raises(ReportError, match="Duplicate agent id 'a'"):
        load_reports(path)


def test_load_reports_duplicate_id_after_str_conversion(tmp_path: Path) -> None:
    """Ids are compared after conversion to string, so 1 and "1" collide."""
    path = tmp_path / "reports.json"
    path.write_text(json.dumps({"reports": [{"id": 1, "name": "A"}, {"id": "1", "name": "B"}]}))
    with pytest.raises(ReportError, match="Duplicate"):
        load_reports(path)


@pytest.mark.parametrize(
    ("_bad_field", "entry"),
    [
        ("entry", "not an object"),
        ("entry", None),
        ("id", {"id": None, "name": "A"}),
        ("id", {"id": True, "name": "A"}),
        ("name", {"id": "a", "name": None}),
        ("name", {"id": "a", "name": 42}),
        ("provider", {"id": "a", "name": "A", "provider": 1}),
        ("analysis", {"id": "a", "name": "A", "analysis": ["text"]}),
        ("error", {"id": "a", "name": "A", "error": {"code": 500}}),
        ("citations", {"id": "a", "name": "A", "citations": "https://x"}),
        ("citations", {"id": "a", "name": "A", "citations": [1, 2]}),
        ("search_results", {"id": "a", "name": "A", "search_results": {"url": "https://x"}}),
        ("search_results", {"id": "a", "name": "A", "search_results": ["https://x"]}),
        ("search_results", {"id": "a", "name": "A", "search_results": [{"url": 5}]}),
    ],
)
def test_load_reports_wrong_field_type(tmp_path: Path, _bad_field: str, entry: object) -> None:
    """Entries and fields of the wrong JSON type raise ReportError."""
    path = tmp_path / "reports.json"
    path.write_text(json.dumps({"reports": [entry]}))
    with pytest.raises(ReportError, match="Report 0"):
        load_reports(path)


def test_load_reports_null_optional_fields(tmp_path: Path) -> None:
    """Null optional fields fall back to their defaults."""
    path = tmp_path / "reports.json"
    entry = {
        "id": 7,
        "name": "A",
        "provider": None,
        "model": None,
        "citations": None,
        "search_results": None,
    }
    path.write_text(json.dumps({"reports": [entry]}))
    [report] = load_reports(path)
    assert report.agent_id == "7"
    assert report.provider == ""
    assert report.citations == []
    assert report.search_results == []


# === AgentReport / SearchResult ===


def test_successful_reports_sorted_case_insensitively(sample_reports: list[AgentReport]) -> None:
    """Failures are dropped; the rest are sorted by lowercase name."""
    names = [r.name for r in successful_reports(sample_reports)]
    assert names == ["ChatGPT", "Claude", "perplexity"]


def test_header_title(sample_reports: list[AgentReport]) -> None:
    """The header shows provider and model."""
    assert sample_reports[0].header_title == "OpenAI - gpt-4o"


def test_displayable_results_need_url(sample_reports: list[AgentReport]) -> None:
    """Results without a URL are not displayed."""
    assert [r.name for r in sample_reports[1].displayable_results] == ["Najdorf Variation"]


@pytest.mark.parametrize(
    ("result", "title", "show_url"),
    [
        (SearchResult(url="https://a", name="A"), "A", True),
        (SearchResult(url="https://a", name="https://a"), "https://a", False),
        (SearchResult(url="https://a"), "https://a", False),
    ],
)
def test_search_result_title(result: SearchResult, title: str, *, show_url: bool) -> None:
    """The title falls back to the URL; the URL line is shown only when it adds information."""
    assert result.title == title
    assert result.show_url is show_url


# === Rich rendering ===


def test_sources_text() -> None:
    """Citations are numbered in order and passed through unchanged."""
    text = sources_text(["https://a.example/x?y=1", "https://b.example"])
    assert text.plain == "Sources\n1. https://a.example/x?y=1\n2. https://b.example"
    links = [span.style.link for span in text.spans if not isinstance(span.style, str)]
    assert "https://a.example/x?y=1" in links


def test_search_results_text_keeps_original_numbering() -> None:
    """Results without a URL are skipped but keep their position number."""
    text = search_results_text(
        [
            SearchResult(url=None, name="gone"),
            SearchResult(url="https://b", name="B", snippet="snip"),
            SearchResult(url="https://c", snippet="   "),
        ]
    )
    assert text.plain == "Search Results\n2. B\n   https://b\n   snip\n3. https://c"
