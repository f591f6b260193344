"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from ..config import AnalyzerConfig, load_config
from ..core import AnalysisResult, CodebaseAnalyzer
from ..exceptions import AnalysisError, ArchmapError
from ..logging_config import setup_logging

console = Console()


class ExitCode:
    """Semantic exit codes.

    Ranges:
      0: Success
      80-89: User errors (bad input)
      100+: Internal errors
    """

    SUCCESS = 0
    CONFIG_ERROR = 81
    INTERNAL_ERROR = 100


def resolve_config(
    config: Optional[Path] = None,
    exclude: Optional[list[str]] = None,
    max_depth: Optional[int] = None,
    workers: Optional[int] = None,
    timeout: Optional[float] = None,
    verbose: bool = False,
    quiet: bool = False,
) -> AnalyzerConfig:
    """Build analyzer config from CLI options."""
    overrides = {
        "max_depth": max_depth,
        "workers": workers,
        "timeout_seconds": timeout,
        "verbose": verbose,
        "quiet": quiet,
    }
    if exclude:
        overrides["exclude_paths"] = tuple(exclude)
    return load_config(config_file=config, **overrides)


def prepare(log_file: Optional[Path] = None, **options) -> AnalyzerConfig:
    """Resolve config from CLI options, then configure logging from it.

    Exits with CONFIG_ERROR when the configuration is invalid.
    """
    try:
        settings = resolve_config(**options)
    except ArchmapError as e:
        console.print(f"[red]Error:[/red] {e}", highlight=False)
        raise typer.Exit(ExitCode.CONFIG_ERROR)

    setup_logging(settings.verbosity, log_file=log_file)
    return settings


def run_analysis(path: Path, settings: AnalyzerConfig) -> AnalysisResult:
    """Analyze ``path``, turning failures into semantic exit codes."""
    try:
        return CodebaseAnalyzer(path, config=settings).analyze_codebase()
    except AnalysisError as e:
        console.print(f"[red]Error:[/red] {e}", highlight=False)
        raise typer.Exit(ExitCode.INTERNAL_ERROR)
    except ArchmapError as e:
        console.print(f"[red]Error:[/red] {e}", highlight=False)
        raise typer.Exit(ExitCode.CONFIG_ERROR)
    except Exception as e:
        console.print(f"[red]Unexpected error:[/red] {e}", highlight=False)
        if settings.verbosity == "verbose":
            console.print_exception()
        raise typer.Exit(ExitCode.INTERNAL_ERROR)
