"""Analysis result contract handed to presentation layers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from .diagnostics import DiagnosticReport
from .models import Finding, Severity
from .ranking import severity_counts


@dataclass(frozen=True)
class AnalysisSummary:
    structural: int = 0
    moderate: int = 0
    minor: int = 0
    top_priority: Optional[Finding] = None

    @property
    def total(self) -> int:
        return self.structural + self.moderate + self.minor

    def to_dict(self) -> dict[str, Any]:
        return {
            "structural": self.structural,
            "moderate": self.moderate,
            "minor": self.minor,
            "topPriority": self.top_priority.key if self.top_priority is not None else None,
        }


@dataclass
class AnalysisReport:
    """Ordered findings, severity summary and diagnostics for one request."""

    findings: list[Finding]
    summary: AnalysisSummary
    diagnostics: DiagnosticReport = field(default_factory=DiagnosticReport)

    def to_dict(self) -> dict[str, Any]:
        return {
            "findings": [f.to_dict() for f in self.findings],
            "summary": self.summary.to_dict(),
            "diagnostics": [i.to_dict() for i in self.diagnostics.issues],
        }


def assemble_report(
    prioritized: Sequence[Finding], diagnostics: Optional[DiagnosticReport] = None
) -> AnalysisReport:
    """Package already-prioritized findings into the result contract.

    ``topPriority`` refers to the first finding, by its stable key.
    """
    counts = severity_counts(prioritized)
    summary = AnalysisSummary(
        structural=counts[Severity.STRUCTURAL],
        moderate=counts[Severity.MODERATE],
        minor=counts[Severity.MINOR],
        top_priority=prioritized[0] if prioritized else None,
    )
    return AnalysisReport(
        findings=list(prioritized),
        summary=summary,
        diagnostics=diagnostics or DiagnosticReport(total_findings=len(prioritized)),
    )
