"""Shared CLI helpers."""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import click
import typer
from rich.console import Console
from rich.markup import escape

from ..config import AnalysisConfig, load_config
from ..exceptions import DepthLensError, ValidationError

console = Console()

# Exit codes: 1 = --fail-on threshold met, 2 = bad input or config
EXIT_FINDINGS = 1
EXIT_USAGE = 2

FORMAT_CHOICE = click.Choice(["rich", "json"], case_sensitive=False)


def resolve_config(
    config: Optional[Path] = None,
    verbose: bool = False,
    quiet: bool = False,
    workers: Optional[int] = None,
    max_findings: Optional[int] = None,
) -> AnalysisConfig:
    """Build configuration from CLI options."""
    overrides: dict = {}
    if workers is not None:
        overrides["workers"] = workers
    if max_findings is not None:
        overrides["max_findings"] = max_findings
    if verbose:
        overrides["verbose"] = True
    if quiet:
        overrides["quiet"] = True
    return load_config(config_file=config, **overrides)


@contextmanager
def guarded(logger: logging.Logger, verbose: bool = False) -> Iterator[None]:
    """Map depth-lens errors and interrupts onto exit codes."""
    try:
        yield
    except typer.Exit:
        raise
    except ValidationError as e:
        logger.error(f"{e.__class__.__name__}: {e.message}")
        console.print(f"[red]Invalid {escape(e.subject)}:[/red]")
        for problem in e.problems:
            console.print(f"  - {escape(problem)}")
        raise typer.Exit(EXIT_USAGE)
    except DepthLensError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(EXIT_USAGE)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        console.print("\n[yellow]Interrupted[/yellow]")
        raise typer.Exit(130)
    except Exception as e:
        logger.exception("Unexpected error")
        console.print(f"[red]Unexpected error:[/red] {escape(str(e))}")
        if verbose:
            console.print_exception()
        raise typer.Exit(1)
