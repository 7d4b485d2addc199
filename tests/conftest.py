"""Shared fixtures: sample agent reports and a reports JSON file."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import pytest

from eval_reports.report import AgentReport, SearchResult

if TYPE_CHECKING:
    from pathlib import Path

SAMPLE_ANALYSIS = """\
# Game Review

## Opening
White played the **Sicilian Defence**, *Najdorf variation*.


Key moments:
- 12. Nxe5 was a *blunder*
- 18. Qh5 kept the initiative

### Verdict
Accuracy 87% & no missed mates.
"""

SAMPLE_REPORTS_JSON: dict[str, Any] = {
    "reports": [
        {
            "id": "openai",
            "name": "ChatGPT",
            "provider": "OpenAI",
            "model": "gpt-4o",
            "analysis": SAMPLE_ANALYSIS,
            "citations": ["https://lichess.org/study/abc", "https://chess.com/openings"],
        },
        {
            "id": "perplexity",
            "name": "perplexity",
            "provider": "Perplexity",
            "model": "sonar",
            "analysis": "The **Najdorf** is sharp.",
            "search_results": [
                {"url": None, "name": "dead link"},
                {
                    "url": "https://en.wikipedia.org/wiki/Najdorf",
                    "name": "Najdorf Variation",
                    "snippet": "A popular Sicilian line.",
                },
            ],
        },
        {
            "id": "anthropic",
            "name": "Claude",
            "provider": "Anthropic",
            "model": "sonnet",
            "analysis": None,
        },
        {
            "id": "broken",
            "name": "Broken",
            "provider": "Acme",
            "model": "x1",
            "error": "HTTP 500",
        },
    ]
}


@pytest.fixture
def reports_file(tmp_path: Path) -> Path:
    """Write the sample reports to a JSON file."""
    path = tmp_path / "reports.json"
    path.write_text(json.dumps(SAMPLE_REPORTS_JSON))
    return path


@pytest.fixture
def sample_reports() -> list[AgentReport]:
    """Sample reports as objects, including one failure and one without analysis."""
    return [
        AgentReport(
            agent_id="openai",
            name="ChatGPT",
            provider="OpenAI",
            model="gpt-4o",
            analysis=SAMPLE_ANALYSIS,
            citations=["https://lichess.org/study/abc", "https://chess.com/openings"],
        ),
        AgentReport(
            agent_id="perplexity",
            name="perplexity",
            provider="Perplexity",
            model="sonar",
            analysis="The **Najdorf** is sharp.",
            search_results=[
                SearchResult(url=None, name="dead link"),
                SearchResult(
                    url="https://en.wikipedia.org/wiki/Najdorf",
                    name="Najdorf Variation",
                    snippet="A popular Sicilian line.",
                ),
            ],
        ),
        AgentReport(
            agent_id="anthropic",
            name="Claude",
            provider="Anthropic",
            model="sonnet",
            analysis=None,
        ),
        AgentReport(
            agent_id="broken",
            name="Broken",
            provider="Acme",
            model="x1",
            error="HTTP 500",
        ),
    ]
