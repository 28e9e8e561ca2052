"""Plan command: ordered refactor steps for a module model."""

from pathlib import Path
from typing import Optional

import typer

from ..api import coerce_model
from ..formatters import get_formatter
from ..insights import InsightKernel
from ..logging_config import setup_logging
from ..planning import plan as build_plan
from . import app
from ._common import FORMAT_CHOICE, guarded, resolve_config


@app.command()
def plan(
    model: Path = typer.Argument(
        ...,
        help="Module model file (JSON or TOML)",
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
    include_minor: Optional[bool] = typer.Option(
        None,
        "--include-minor/--no-minor",
        help="Append optional steps for MINOR findings (default: from config)",
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
    Turn a model's findings into independently shippable refactor steps.

    [bold cyan]Examples:[/bold cyan]

      depth-lens plan model.json

      depth-lens plan model.json --no-minor --format json
    """
    logger = setup_logging(verbose=verbose, quiet=quiet)

    with guarded(logger, verbose):
        settings = resolve_config(config, verbose, quiet)
        report = InsightKernel(settings).analyze(coerce_model(model))
        if include_minor is None:
            include_minor = settings.include_minor_steps
        refactor_plan = build_plan(report.findings, include_minor=include_minor)
        get_formatter(output_format.lower()).render(refactor_plan)
