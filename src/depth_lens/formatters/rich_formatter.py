"""Rich terminal formatter for depth-lens."""

import io
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..design import DesignComparison
from ..design.options import AXES, Level
from ..insights.models import Severity, ordered_symptoms
from ..insights.report import AnalysisReport
from ..planning import RefactorPlan
from .base import BaseFormatter, Result

console = Console()

_SEVERITY_STYLE = {
    Severity.STRUCTURAL: "[red bold]STRUCTURAL[/red bold]",
    Severity.MODERATE: "[yellow]MODERATE[/yellow]",
    Severity.MINOR: "[dim]MINOR[/dim]",
}

_LEVEL_STYLE = {
    Level.HIGH: "[green]high[/green]",
    Level.MEDIUM: "[yellow]medium[/yellow]",
    Level.LOW: "[red]low[/red]",
}

_ISSUE_STYLE = {"error": "red", "warning": "yellow", "info": "dim"}


def _severity_label(severity: Optional[Severity]) -> str:
    if severity is None:
        return "[dim]-[/dim]"
    return _SEVERITY_STYLE[severity]


class RichFormatter(BaseFormatter):
    """Rich terminal output: summary panel, tables, diagnostics."""

    def __init__(self, max_findings: int = 50, out: Optional[Console] = None):
        self.max_findings = max_findings
        self.console = out or console

    def render(self, result: Result) -> None:
        if isinstance(result, AnalysisReport):
            self._print_report(result)
        elif isinstance(result, RefactorPlan):
            self._print_plan(result)
        elif isinstance(result, DesignComparison):
            self._print_comparison(result)
        else:
            raise TypeError(f"Cannot render {type(result).__name__}")

    def format(self, result: Result) -> str:
        buffer = io.StringIO()
        plain = Console(file=buffer, width=120, force_terminal=False, color_system=None)
        RichFormatter(self.max_findings, plain).render(result)
        return buffer.getvalue()

    # -- analysis report --

    def _print_report(self, report: AnalysisReport) -> None:
        s = report.summary
        top = s.top_priority
        lines = [
            f"[red bold]{s.structural}[/red bold] structural   "
            f"[yellow]{s.moderate}[/yellow] moderate   "
            f"[dim]{s.minor}[/dim] minor",
        ]
        if top is not None:
            lines.append(f"Top priority: [bold]{escape(top.target)}[/bold] ({top.category.value})")
        self.console.print(
            Panel("\n".join(lines), title="[bold cyan]depth-lens[/bold cyan]", expand=False)
        )

        if not report.findings:
            self.console.print("[green]No structural complexity found.[/green]")
        else:
            table = Table(show_header=True, show_lines=False, pad_edge=True)
            table.add_column("#", justify="right", style="dim")
            table.add_column("Severity")
            table.add_column("Module", style="bold")
            table.add_column("Category")
            table.add_column("Symptoms", style="dim")
            table.add_column("Rationale")

            shown = report.findings[: self.max_findings]
            for i, f in enumerate(shown, 1):
                table.add_row(
                    str(i),
                    _severity_label(f.severity),
                    Text(f.target),
                    f.category.value,
                    ", ".join(sym.value for sym in ordered_symptoms(f.symptoms)),
                    Text(f.rationale),
                )
            self.console.print(table)
            hidden = len(report.findings) - len(shown)
            if hidden > 0:
                self.console.print(f"[dim]... and {hidden} more (use --format json for all)[/dim]")

        self._print_diagnostics(report)

    def _print_diagnostics(self, report: AnalysisReport) -> None:
        if not report.diagnostics.has_issues:
            return
        self.console.print()
        self.console.print("[bold]Diagnostics[/bold]")
        for issue in report.diagnostics.issues:
            style = _ISSUE_STYLE.get(issue.severity, "white")
            self.console.print(f"  [{style}]{issue.severity}[/{style}] {escape(issue.message)}")

    # -- refactor plan --

    def _print_plan(self, refactor_plan: RefactorPlan) -> None:
        if not refactor_plan.steps:
            self.console.print("[green]Nothing to refactor.[/green]")
            return

        table = Table(show_header=True, show_lines=True, pad_edge=True)
        table.add_column("Step", justify="right")
        table.add_column("Severity")
        table.add_column("Module", style="bold")
        table.add_column("Change")
        table.add_column("Resolves", style="dim")

        for step in refactor_plan.steps:
            label = f"{step.index}" + (" [dim](optional)[/dim]" if step.optional else "")
            table.add_row(
                label,
                _severity_label(step.severity),
                Text(step.target),
                Text(step.description),
                Text("\n".join(f.key for f in step.resolves)),
            )
        self.console.print(table)
        optional = len(refactor_plan.optional_steps)
        summary = f"{len(refactor_plan.mandatory_steps)} step(s)"
        if optional:
            summary += f", plus {optional} optional MINOR step(s)"
        self.console.print(summary)
        self.console.print(
            "[dim]Each step is meant to ship on its own. Run your tests between steps;"
            " behavior preservation is not verified.[/dim]"
        )

    # -- design comparison --

    def _print_comparison(self, comparison: DesignComparison) -> None:
        table = Table(show_header=True, show_lines=False, pad_edge=True)
        table.add_column("Rank", justify="right")
        table.add_column("Option", style="bold")
        for axis in AXES:
            table.add_column(axis.replace("_", " "))
        table.add_column("Total", justify="right")

        for rank, entry in enumerate(comparison.ranked, 1):
            levels = entry.scores.axes()
            table.add_row(
                str(rank),
                Text(entry.option.name),
                *(_LEVEL_STYLE[levels[axis]] for axis in AXES),
                str(entry.scores.total),
            )
        self.console.print(table)

        if comparison.tie:
            conflicts = ", ".join(a.replace("_", " ") for a in comparison.conflicts)
            detail = f" (trade-offs on: {conflicts})" if conflicts else ""
            self.console.print(
                f"[yellow bold]Tie:[/yellow bold] no option wins on every axis{detail}."
                " Decide on the trade-off explicitly."
            )
        elif comparison.leader is not None:
            self.console.print(
                f"[green]{escape(comparison.leader.option.name)}[/green] is at least as good on every axis."
            )
