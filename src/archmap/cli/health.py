"""Health CLI command -- summarize component health and critical components."""

import json
from pathlib import Path
from typing import List, Optional

import typer
from rich.markup import escape
from rich.table import Table

from ..insights import find_critical_components, summarize_health
from . import app
from ._common import console, prepare, run_analysis


@app.command()
def health(
    path: Path = typer.Argument(
        Path("."),
        help="Path to the codebase directory",
        file_okay=False,
        dir_okay=True,
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in machine-readable JSON format",
    ),
    top: int = typer.Option(
        10,
        "--top",
        "-t",
        help="Number of critical components to list",
        min=1,
        max=200,
    ),
    exclude: Optional[List[str]] = typer.Option(
        None,
        "--exclude",
        "-e",
        help="Directory-name prefix to skip (repeatable; replaces the defaults)",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Also append log records to this file",
        dir_okay=False,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """
    Show the health summary and the components that need attention.

    [bold cyan]Examples:[/bold cyan]

      archmap health

      archmap health ./web --json
    """
    settings = prepare(
        log_file=log_file,
        config=config,
        exclude=exclude,
        verbose=verbose,
        quiet=json_output and not verbose,
    )
    result = run_analysis(path, settings)

    summary = summarize_health(result)
    critical = find_critical_components(result.levels, settings.thresholds)[:top]

    if json_output:
        print(
            json.dumps(
                {
                    "health": summary.to_dict(),
                    "criticalComponents": [c.to_dict() for c in critical],
                },
                indent=2,
            )
        )
        return

    console.print()
    console.print(
        f"[bold cyan]CODEBASE HEALTH[/bold cyan] -- {summary.overall.value} "
        f"(score {summary.score})"
    )
    for tier, count in summary.components.items():
        console.print(f"  {tier:<10} {count}")
    for recommendation in summary.recommendations:
        console.print(f"  [yellow]•[/yellow] {recommendation}")
    console.print()

    if not critical:
        console.print("[green]No critical components.[/green]")
        return

    table = Table(show_header=True, show_lines=False, pad_edge=True)
    table.add_column("Component", min_width=24)
    table.add_column("Category")
    table.add_column("Health")
    table.add_column("Imports", justify="right")
    table.add_column("Reason")
    for component in critical:
        table.add_row(
            escape(component.name),
            component.category,
            component.health,
            str(component.imports),
            component.reason,
        )
    console.print(table)
