import logging
from collections.abc import Sequence
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from golayout.config import load_config
from golayout.core.analysis import analyze_paths
from golayout.models import FileReport
from golayout.rules import select_rules

console = Console()


def _render_reports(reports: Sequence[FileReport]) -> None:
    table = Table(show_lines=False)
    for header in ("file", "line:col", "category", "rule", "message"):
        table.add_column(header)
    for report in reports:
        for diagnostic in report.diagnostics:
            table.add_row(
                escape(report.path),
                f"{diagnostic.start.line + 1}:{diagnostic.start.column + 1}",
                str(diagnostic.category),
                diagnostic.rule,
                diagnostic.message,
            )
    console.print(table)


def check(
    paths: Annotated[list[str], typer.Argument(help="Go files or directories to check.")],
    rule: Annotated[list[str] | None, typer.Option("--rule", "-r", help="Only run the named rule(s).")] = None,
    separator_width: Annotated[int | None, typer.Option(help="Width of the separator comment.")] = None,
    test_prefix: Annotated[str | None, typer.Option(help="Name prefix marking test functions.")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
) -> None:
    """Check Go sources for layout violations."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)

    try:
        config = load_config(separator_width=separator_width, test_prefix=test_prefix)
        selected = select_rules(rule)
    except (ValidationError, ValueError) as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(2) from None

    reports = analyze_paths(paths, config, selected)
    failed = [r for r in reports if r.error is not None]
    diagnostics = sum(len(r.diagnostics) for r in reports)

    if diagnostics:
        _render_reports(reports)
    for report in failed:
        console.print(f"[red]{escape(report.error or '')}[/red]")

    summary = f"{len(reports)} file(s) checked, {diagnostics} problem(s)"
    if failed:
        console.print(f"[red]{summary}, {len(failed)} unreadable file(s)[/red]")
        raise typer.Exit(2)
    if diagnostics:
        console.print(f"[yellow]{summary}[/yellow]")
        raise typer.Exit(1)
    console.print(f"[green]{summary}[/green]")
