"""Severity and symptom classification.

Table-driven by category: a new detector only declares a category and emits
a raw weight, it never picks its own severity. A finding gets its category's
default severity unless the raw weight exceeds the category's escalation
threshold, in which case it is promoted exactly one tier.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Optional

from ..config import DEFAULT_THRESHOLDS, ThresholdConfig
from .models import Category, Finding, Severity, Symptom


@dataclass(frozen=True)
class CategoryRule:
    default: Severity
    symptoms: frozenset[Symptom]


CATEGORY_TABLE: dict[Category, CategoryRule] = {
    Category.WRONG_STATE_BOUNDARY: CategoryRule(
        Severity.STRUCTURAL,
        frozenset({Symptom.COGNITIVE_LOAD, Symptom.UNKNOWN_UNKNOWNS}),
    ),
    Category.LEAKED_ABSTRACTION: CategoryRule(
        Severity.STRUCTURAL,
        frozenset({Symptom.CHANGE_AMPLIFICATION, Symptom.UNKNOWN_UNKNOWNS}),
    ),
    Category.SHALLOW_MODULE: CategoryRule(
        Severity.MODERATE,
        frozenset({Symptom.CHANGE_AMPLIFICATION}),
    ),
    Category.MIXED_CONCERNS: CategoryRule(
        Severity.STRUCTURAL,
        frozenset({Symptom.COGNITIVE_LOAD}),
    ),
    Category.RE_RENDER_CASCADE: CategoryRule(
        Severity.MODERATE,
        frozenset({Symptom.COGNITIVE_LOAD}),
    ),
    # Escalates to MODERATE once duplication count >= 3 (escalate_tactical_debt = 2)
    Category.TACTICAL_DEBT: CategoryRule(
        Severity.MINOR,
        frozenset({Symptom.CHANGE_AMPLIFICATION}),
    ),
}


def classify(
    finding: Finding, thresholds: Optional[ThresholdConfig] = None
) -> tuple[Severity, frozenset[Symptom]]:
    """Return (severity, symptoms) for a finding.

    Always computed from the category table and the raw weight, so
    classifying an already-classified finding gives the same answer and
    never promotes twice.
    """
    thresholds = thresholds or DEFAULT_THRESHOLDS
    rule = CATEGORY_TABLE[finding.category]

    severity = rule.default
    if finding.raw_weight > thresholds.escalation_threshold(finding.category.value):
        severity = severity.promote()

    return severity, rule.symptoms


def classify_finding(finding: Finding, thresholds: Optional[ThresholdConfig] = None) -> Finding:
    """Return a copy of the finding with severity and symptoms set."""
    severity, symptoms = classify(finding, thresholds)
    return replace(finding, severity=severity, symptoms=symptoms)


def classify_findings(
    findings: Iterable[Finding], thresholds: Optional[ThresholdConfig] = None
) -> list[Finding]:
    return [classify_finding(f, thresholds) for f in findings]
