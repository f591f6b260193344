"""Main analysis command: scan, build levels, print or export."""

from pathlib import Path
from typing import List, Optional

import typer

from ..formatters import JsonFormatter, get_formatter
from . import app
from ._common import ExitCode, console, prepare, run_analysis


@app.command()
def analyze(
    path: Path = typer.Argument(
        Path("."),
        help="Path to the codebase directory to analyze",
        exists=False,
        file_okay=False,
        dir_okay=True,
    ),
    fmt: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help="Output format: rich (human-readable) or json (graph UI contract)",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write JSON to this file instead of stdout",
        dir_okay=False,
    ),
    exclude: Optional[List[str]] = typer.Option(
        None,
        "--exclude",
        "-e",
        help="Directory-name prefix to skip (repeatable; replaces the defaults)",
    ),
    max_depth: Optional[int] = typer.Option(
        None,
        "--max-depth",
        help="Maximum directory depth to descend",
        min=0,
    ),
    workers: Optional[int] = typer.Option(
        None,
        "--workers",
        "-w",
        help="File-read threads per directory",
        min=1,
        max=32,
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Abort the scan after this many seconds",
        min=0.1,
    ),
    include_structure: bool = typer.Option(
        False,
        "--structure",
        help="Include the raw directory tree in JSON output",
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
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress logging"),
):
    """
    Analyze a codebase into the four-level architecture graph.

    [bold cyan]Examples:[/bold cyan]

      archmap analyze .

      archmap analyze ./web --format json -o architecture.json

      archmap analyze . --exclude node_modules --exclude coverage
    """
    settings = prepare(
        log_file=log_file,
        config=config,
        exclude=exclude,
        max_depth=max_depth,
        workers=workers,
        timeout=timeout,
        verbose=verbose,
        quiet=quiet,
    )
    result = run_analysis(path, settings)

    if output is not None:
        text = JsonFormatter(include_structure=include_structure).format(result)
        output.write_text(text + "\n", encoding="utf-8")
        if settings.verbosity != "quiet":
            console.print(f"Wrote [green]{output}[/green]")
        return

    if fmt == "json":
        JsonFormatter(include_structure=include_structure).render(result)
        return

    try:
        formatter = get_formatter(fmt, verbose=settings.verbosity == "verbose")
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(ExitCode.CONFIG_ERROR)
    formatter.render(result)
