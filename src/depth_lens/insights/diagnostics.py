"""Self-diagnostics: surface non-fatal problems with an analysis.

Every detector failure becomes a diagnostic, so nothing that went wrong
during a run disappears. Quality checks flag noisy detectors and model
data that makes findings less trustworthy.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Sequence

if TYPE_CHECKING:
    from ..exceptions import DetectorFailure
    from ..model import ModuleModel
    from .models import Finding

# A detector producing more than this share of findings is reported as noisy
_NOISY_SHARE = 0.3
_NOISY_MIN_FINDINGS = 5


@dataclass
class DiagnosticIssue:
    """A detected quality issue in the analysis."""

    category: str  # "detector" | "data"
    severity: str  # "info" | "warning" | "error"
    message: str
    detail: str = ""
    detector_id: str = ""

    def to_dict(self) -> dict[str, Any]:
        data = {
            "category": self.category,
            "severity": self.severity,
            "message": self.message,
            "detail": self.detail,
        }
        if self.detector_id:
            data["detectorId"] = self.detector_id
        return data


@dataclass
class DiagnosticReport:
    """Summary of analysis quality issues."""

    issues: list[DiagnosticIssue] = field(default_factory=list)
    total_modules: int = 0
    total_findings: int = 0

    @property
    def has_issues(self) -> bool:
        return len(self.issues) > 0

    @property
    def failed_detectors(self) -> list[str]:
        return [i.detector_id for i in self.issues if i.severity == "error"]

    def summary(self) -> str:
        if not self.issues:
            return "No analysis quality issues detected."
        counts = Counter(i.severity for i in self.issues)
        parts = [f"{counts[s]} {s}(s)" for s in ("error", "warning", "info") if counts[s]]
        return f"Analysis quality: {', '.join(parts)}"


def run_diagnostics(
    model: ModuleModel,
    findings: Sequence[Finding],
    failures: Sequence[DetectorFailure] = (),
    quality_checks: bool = True,
) -> DiagnosticReport:
    """Run all diagnostic checks on the analysis output.

    Args:
        model: The analyzed module model
        findings: All findings that survived the run
        failures: Detector failures recorded by the registry
        quality_checks: Also run the noise/data checks (failures are always reported)

    Returns:
        DiagnosticReport with detected issues
    """
    report = DiagnosticReport(total_modules=len(model), total_findings=len(findings))

    _report_failures(failures, report)
    if quality_checks:
        _check_detector_noise(findings, report)
        _check_empty_modules(model, report)

    return report


def _report_failures(failures: Sequence[DetectorFailure], report: DiagnosticReport) -> None:
    for failure in failures:
        report.issues.append(
            DiagnosticIssue(
                category="detector",
                severity="error",
                message=f"Detector '{failure.detector_id}' failed; its findings were dropped",
                detail=f"{type(failure.error).__name__}: {failure.error}",
                detector_id=failure.detector_id,
            )
        )


def _check_detector_noise(findings: Sequence[Finding], report: DiagnosticReport) -> None:
    """Check if any single detector produces > 30% of findings."""
    total = len(findings)
    if total < _NOISY_MIN_FINDINGS:
        return

    counts = Counter(f.detector_id for f in findings)
    for detector_id, count in sorted(counts.items()):
        share = count / total
        if share > _NOISY_SHARE:
            report.issues.append(
                DiagnosticIssue(
                    category="detector",
                    severity="warning",
                    message=f"Detector '{detector_id}' is noisy: {count}/{total} findings ({share:.0%})",
                    detail="This detector dominates output. Consider adjusting its thresholds.",
                    detector_id=detector_id,
                )
            )


def _check_empty_modules(model: ModuleModel, report: DiagnosticReport) -> None:
    """Modules with zero line count make depth-based detectors unreliable."""
    empty = [m.id for m in model if m.line_count == 0]
    if empty:
        shown = ", ".join(empty[:5]) + (f" (+{len(empty) - 5} more)" if len(empty) > 5 else "")
        report.issues.append(
            DiagnosticIssue(
                category="data",
                severity="info",
                message=f"{len(empty)} module(s) report zero lines: {shown}",
                detail="Shallow-module and duplicate detection treat these as empty.",
            )
        )
