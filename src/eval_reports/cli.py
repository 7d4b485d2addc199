"""CLI entry point and subcommand definitions."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from rich.console import Console

from eval_reports.config import ConfigError, RenderConfig, get_config_path, load_render_config
from eval_reports.markup.transcoder import transcode
from eval_reports.render import render_markdown
from eval_reports.report import (
    AgentReport,
    ReportError,
    load_reports,
    search_results_text,
    sources_text,
)

COL_NAME_MAX = 28


def _load_config(args: argparse.Namespace) -> RenderConfig:
    path: Path = args.config if args.config is not None else get_config_path()
    try:
        return load_render_config(path)
    except ConfigError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)


def _load_reports(path: Path) -> list[AgentReport]:
    try:
        return load_reports(path)
    except ReportError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)


def _read_markdown(source: str) -> str:
    """Read markdown from a file path, or stdin for ``-``."""
    if source == "-":
        return sys.stdin.read()
    try:
        return Path(source).read_text()
    except OSError as e:
        print(f"Cannot read {source}: {e}", file=sys.stderr)
        sys.exit(1)


def _cmd_render(args: argparse.Namespace) -> None:
    """Render a markdown file to the terminal, JSON, or tagged text."""
    raw = _read_markdown(args.file)
    if args.tagged:
        print(transcode(raw))
        return

    config = _load_config(args)
    run = render_markdown(raw, bullet=config.bullet)
    if args.json:
        print(json.dumps(run.to_dict(), indent=2, ensure_ascii=False))
        return
    Console().print(run.to_rich_text(config.styles()))


def _status(report: AgentReport) -> str:
    if not report.is_success:
        return "error"
    if report.analysis is None:
        return "empty"
    return "ok"


def _cmd_ls(args: argparse.Namespace) -> None:
    """List the agents in a reports file."""
    reports = sorted(_load_reports(args.reports), key=lambda r: r.name.lower())
    if not reports:
        print("No reports.")
        return
    if args.json:
        print(
            json.dumps(
                [
                    {
                        "id": r.agent_id,
                        "name": r.name,
                        "provider": r.provider,
                        "model": r.model,
                        "status": _status(r),
                    }
                    for r in reports
                ],
                indent=2,
            )
        )
        return

    print(f"{'Agent':<30} {'Provider - Model':<40} {'Status':<6}")
    print("─" * 78)
    for report in reports:
        name = report.name
        if len(name) > COL_NAME_MAX:
            name = name[: COL_NAME_MAX - 1] + "…"
        print(f"{name:<30} {report.header_title:<40} {_status(report):<6}")


def _cmd_show(args: argparse.Namespace) -> None:
    """Print one agent's report with its sources, without the TUI."""
    config = _load_config(args)
    reports = _load_reports(args.reports)
    report = next((r for r in reports if r.agent_id == args.agent), None)
    if report is None:
        print(f"No report for agent '{args.agent}'", file=sys.stderr)
        sys.exit(1)

    console = Console()
    console.rule(report.header_title)
    if report.analysis is None:
        console.print("No analysis available", style="dim")
        return
    console.print(render_markdown(report.analysis, bullet=config.bullet).to_rich_text(config.styles()))
    if report.citations:
        console.print()
        console.print(sources_text(report.citations))
    if report.displayable_results:
        console.print()
        console.print(search_results_text(report.search_results))


def _cmd_view(args: argparse.Namespace) -> None:
    """Launch the Textual report viewer.

    The import is deferred to avoid loading Textual for CLI-only commands.
    """
    from eval_reports.tui.app import ReportsApp  # noqa: PLC0415

    config = _load_config(args)
    reports = _load_reports(args.reports)
    ReportsApp(reports, config=config, initial_agent_id=args.agent).run()


def main(argv: list[str] | None = None) -> None:
    """Parse arguments and dispatch to the appropriate subcommand."""
    parser = argparse.ArgumentParser(
        prog="eval-reports",
        description="Render AI chess analysis reports in the terminal",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"Render settings file (default: {get_config_path()})",
    )
    subparsers = parser.add_subparsers(dest="command")

    # render
    render_parser = subparsers.add_parser("render", help="Render a markdown file")
    render_parser.add_argument("file", help="Markdown file, or - for stdin")
    output = render_parser.add_mutually_exclusive_group()
    output.add_argument("--json", action="store_true", help="Output plain text and spans as JSON")
    output.add_argument("--tagged", action="store_true", help="Output the intermediate tagged text")

    # ls
    ls_parser = subparsers.add_parser("ls", help="List agents in a reports file")
    ls_parser.add_argument("reports", type=Path, help="Reports JSON file")
    ls_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # show
    show_parser = subparsers.add_parser("show", help="Print one agent's report")
    show_parser.add_argument("reports", type=Path, help="Reports JSON file")
    show_parser.add_argument("agent", help="Agent id")

    # view
    view_parser = subparsers.add_parser("view", help="Browse reports in the TUI")
    view_parser.add_argument("reports", type=Path, help="Reports JSON file")
    view_parser.add_argument("--agent", help="Agent id to show first")

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    if args.command is None:
        parser.print_help()
        sys.exit(2)

    dispatch = {
        "render": _cmd_render,
        "ls": _cmd_ls,
        "show": _cmd_show,
        "view": _cmd_view,
    }
    dispatch[args.command](args)
