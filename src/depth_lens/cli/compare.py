"""Compare command: rank competing interface designs."""

from pathlib import Path
from typing import Optional

import typer

from ..api import coerce_options
from ..design import evaluate
from ..formatters import get_formatter
from ..logging_config import setup_logging
from . import app
from ._common import FORMAT_CHOICE, guarded, resolve_config


@app.command()
def compare(
    designs: Path = typer.Argument(
        ...,
        help="Design options file (JSON or TOML) with an 'options' list",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    output_format: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help="Output format: rich | json",
        click_type=FORMAT_CHOICE,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
):
    """
    Score two or more designs for a module that is not built yet.

    Conflicting axis scores are reported as a tie, never broken silently.

    [bold cyan]Examples:[/bold cyan]

      depth-lens compare designs.json
    """
    logger = setup_logging(verbose=verbose, quiet=quiet)

    with guarded(logger, verbose):
        settings = resolve_config(config, verbose, quiet)
        comparison = evaluate(*coerce_options(designs), config=settings.evaluator)
        get_formatter(output_format.lower()).render(comparison)
