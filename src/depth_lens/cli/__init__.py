"""CLI entry point: registers all subcommands."""

from typing import Optional

import typer

from .. import __version__
from ._common import console

app = typer.Typer(
    name="depth-lens",
    help="depth-lens - Structural complexity analysis and refactor planning",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold cyan]depth-lens[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(0)


@app.callback()
def _root(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
):
    """Find shallow modules, leaked abstractions and wrong state boundaries."""


# Import subcommands to register them
from .analyze import analyze as _analyze  # noqa: F401, E402
from .compare import compare as _compare  # noqa: F401, E402
from .detectors import detectors as _detectors  # noqa: F401, E402
from .plan import plan as _plan  # noqa: F401, E402


def main() -> None:
    app()
