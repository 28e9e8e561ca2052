"""Detectors command: list the built-in detector registry."""

import json

import typer
from rich.table import Table

from ..insights.detectors import get_default_registry
from . import app
from ._common import FORMAT_CHOICE, console


@app.command()
def detectors(
    output_format: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help="Output format: rich | json",
        click_type=FORMAT_CHOICE,
    ),
):
    """List registered detectors in execution order."""
    registry = get_default_registry()

    if output_format.lower() == "json":
        print(
            json.dumps(
                [
                    {"name": d.name, "category": d.category.value, "description": d.description}
                    for d in registry.detectors
                ],
                indent=2,
            )
        )
        return

    table = Table(show_header=True, show_lines=False, pad_edge=True)
    table.add_column("Detector", style="bold")
    table.add_column("Category")
    table.add_column("Description")
    for d in registry.detectors:
        table.add_row(d.name, d.category.value, d.description)
    console.print(table)
