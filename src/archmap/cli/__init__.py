"""CLI entry point; registers all subcommands."""

from typing import Optional

import typer

from .. import __version__
from ._common import console

app = typer.Typer(
    name="archmap",
    help="archmap - Codebase Dependency and Coupling Analyzer",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"archmap {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """Map a codebase into a four-level dependency graph."""


# Import subcommands to register them
from .analyze import analyze as _analyze  # noqa: F401, E402
from .health import health as _health  # noqa: F401, E402
