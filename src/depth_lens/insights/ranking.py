"""Finding prioritization and severity counts."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Optional

from .classifier import classify_finding
from .models import Severity

if TYPE_CHECKING:
    from .models import Finding


def priority_key(finding: Finding) -> tuple:
    """Sort key: severity desc, symptom count desc, target lines desc,
    detector id asc, target asc.

    The trailing keys make the order total, so equal-looking findings
    always come out in the same sequence.

    Raises:
        ValueError: If the finding has not been classified
    """
    if finding.severity is None:
        raise ValueError(f"Finding {finding.key} has no severity; classify it first")
    return (
        -finding.severity.value,
        -len(finding.symptoms),
        -finding.target_lines,
        finding.detector_id,
        finding.target,
    )


def prioritize(findings: Iterable[Finding]) -> list[Finding]:
    """Order findings into a single actionable ranking.

    Never drops a finding. Unclassified findings are classified with the
    default thresholds first.
    """
    classified = [f if f.classified else classify_finding(f) for f in findings]
    return sorted(classified, key=priority_key)


def top_priority(findings: Iterable[Finding]) -> Optional[Finding]:
    """First element of the priority order, or None when there are no findings."""
    ordered = prioritize(findings)
    return ordered[0] if ordered else None


def severity_counts(findings: Iterable[Finding]) -> dict[Severity, int]:
    """Count findings per severity tier (every tier present, zero or not)."""
    counts = {tier: 0 for tier in Severity}
    for f in findings:
        if f.severity is not None:
            counts[f.severity] += 1
    return counts

