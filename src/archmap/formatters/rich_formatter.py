"""Rich terminal formatter for archmap."""

import math

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..core import AnalysisResult
from ..graph.models import GraphLevel, Health
from ..insights import summarize_health
from .base import BaseFormatter

console = Console()

_HEALTH_STYLE = {
    Health.EXCELLENT: "green",
    Health.GOOD: "cyan",
    Health.MONITOR: "yellow",
    Health.REFACTOR: "red",
}


def _health_label(health) -> str:
    if health is None:
        return "[dim]-[/dim]"
    style = _HEALTH_STYLE[health]
    return f"[{style}]{health.value}[/{style}]"


def _instability_label(value: float) -> str:
    # Truncated so a value just below 1 never displays as 1.00
    return f"{math.floor(value * 100) / 100:.2f}"


class RichFormatter(BaseFormatter):
    """Summary panel followed by one table per graph level."""

    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def render(self, result: AnalysisResult) -> None:
        self._print_summary(result)
        for level in result.levels:
            self._print_level(level)
        if result.warnings:
            console.print(f"[yellow]{len(result.warnings)} paths could not be read[/yellow]")
            if self.verbose:
                for warning in result.warnings:
                    console.print(f"  [dim]{warning.path}[/dim]: {warning.reason}", markup=False)

    def format(self, result: AnalysisResult) -> str:
        # Rich output goes directly to console; return empty string
        self.render(result)
        return ""

    def _print_summary(self, result: AnalysisResult) -> None:
        stats = result.stats
        summary = summarize_health(result)
        lines = [
            f"[bold]{stats.total_files}[/bold] files, "
            f"[bold]{stats.total_dependencies}[/bold] dependency links, "
            f"[bold]{stats.circular_dependencies}[/bold] import cycles",
            f"Grade [bold]{stats.architecture_grade}[/bold], "
            f"quality score [bold]{stats.quality_score}[/bold], "
            f"overall {_health_label(summary.overall)}",
            f"Files: [green]{stats.healthy_components} healthy[/green], "
            f"[yellow]{stats.monitor_components} monitor[/yellow], "
            f"[red]{stats.refactor_components} refactor[/red]",
        ]
        for recommendation in summary.recommendations:
            lines.append(f"[yellow]•[/yellow] {recommendation}")
        console.print(
            Panel("\n".join(lines), title="[bold cyan]ARCHMAP[/bold cyan]", expand=False)
        )

    def _print_level(self, level: GraphLevel) -> None:
        console.print()
        console.print(
            f"[bold cyan]Level {level.level}: {level.title}[/bold cyan] "
            f"[dim]({level.stats.total_files} files, "
            f"{level.stats.total_dependencies} dependencies, "
            f"quality {level.stats.quality_score})[/dim]"
        )
        if not level.vertices:
            console.print("  [dim]no components[/dim]")
            return

        table = Table(show_header=True, show_lines=False, pad_edge=True)
        table.add_column("Component", min_width=24)
        table.add_column("Ca", justify="right")
        table.add_column("Ce", justify="right")
        table.add_column("I", justify="right")
        table.add_column("Health")
        table.add_column("Depends on")

        for vertex in level.vertices:
            m = vertex.metrics
            table.add_row(
                escape(vertex.name),
                str(m.afferent_coupling) if m else "-",
                str(m.efferent_coupling) if m else "-",
                _instability_label(m.instability) if m else "-",
                _health_label(vertex.health),
                escape(", ".join(vertex.dependencies)) or "[dim]-[/dim]",
            )
        console.print(table)
