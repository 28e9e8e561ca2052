"""Analyze command: findings for a module model."""

from pathlib import Path
from typing import Optional

import click
import typer

from ..api import coerce_model
from ..formatters import get_formatter
from ..insights import InsightKernel
from ..insights.report import AnalysisReport
from ..logging_config import setup_logging
from . import app
from ._common import EXIT_FINDINGS, FORMAT_CHOICE, guarded, resolve_config


def _should_fail(fail_on: str, report: AnalysisReport) -> bool:
    s = report.summary
    if fail_on == "structural":
        return s.structural > 0
    if fail_on == "moderate":
        return s.structural + s.moderate > 0
    return s.total > 0


@app.command()
def analyze(
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
    fail_on: Optional[str] = typer.Option(
        None,
        "--fail-on",
        help="Exit 1 if findings meet threshold: structural | moderate | any",
        click_type=click.Choice(["structural", "moderate", "any"], case_sensitive=False),
    ),
    max_findings: Optional[int] = typer.Option(
        None,
        "--max-findings",
        "-n",
        help="Findings shown in the terminal table",
        min=1,
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
    workers: Optional[int] = typer.Option(
        None,
        "-w",
        "--workers",
        help="Run detectors on this many threads",
        min=1,
        max=32,
        hidden=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
):
    """
    Analyze a module model and rank its structural complexity.

    [bold cyan]Examples:[/bold cyan]

      depth-lens analyze model.json

      depth-lens analyze model.toml --format json

      depth-lens analyze model.json --fail-on structural
    """
    logger = setup_logging(verbose=verbose, quiet=quiet)

    with guarded(logger, verbose):
        settings = resolve_config(config, verbose, quiet, workers, max_findings)
        report = InsightKernel(settings).analyze(coerce_model(model))
        get_formatter(output_format.lower(), settings.max_findings).render(report)

        if fail_on is not None and _should_fail(fail_on.lower(), report):
            raise typer.Exit(EXIT_FINDINGS)
