"""Data models for the insight engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Optional


class Category(Enum):
    """Kind of structural complexity a finding reports."""

    SHALLOW_MODULE = "shallow-module"
    LEAKED_ABSTRACTION = "leaked-abstraction"
    WRONG_STATE_BOUNDARY = "wrong-state-boundary"
    MIXED_CONCERNS = "mixed-concerns"
    RE_RENDER_CASCADE = "re-render-cascade"
    TACTICAL_DEBT = "tactical-debt"


class Severity(IntEnum):
    """Total order STRUCTURAL > MODERATE > MINOR, used for sorting and gating."""

    MINOR = 1
    MODERATE = 2
    STRUCTURAL = 3

    def promote(self) -> Severity:
        """One tier up, capped at STRUCTURAL."""
        return Severity(min(self.value + 1, Severity.STRUCTURAL.value))


class Symptom(Enum):
    CHANGE_AMPLIFICATION = "change-amplification"
    COGNITIVE_LOAD = "cognitive-load"
    UNKNOWN_UNKNOWNS = "unknown-unknowns"


# Fixed order for serialization so symptom sets render identically every run
SYMPTOM_ORDER: tuple[Symptom, ...] = tuple(Symptom)


def ordered_symptoms(symptoms: frozenset[Symptom]) -> list[Symptom]:
    return [s for s in SYMPTOM_ORDER if s in symptoms]


@dataclass(frozen=True)
class Evidence:
    signal: str  # "depth", "leaked_count", "similarity", etc.
    value: float  # the raw value
    description: str  # "depth 0.40 < threshold 1.00"


@dataclass(frozen=True)
class Finding:
    """Result of one detector firing on one module. Immutable.

    Raw findings come out of detectors with ``severity`` unset; the
    classifier returns copies with severity and symptoms filled in.
    """

    detector_id: str  # "shallow_module", "synced_state", etc.
    category: Category
    target: str  # module id
    rationale: str  # "CheckoutForm exposes 7 members over 30 lines"
    raw_weight: float  # detector-defined magnitude, drives escalation
    target_lines: int = 0  # line count of the target module
    related: tuple[str, ...] = ()  # other modules involved (sync partner, duplicates)
    evidence: tuple[Evidence, ...] = ()
    suggestion: str = ""
    severity: Optional[Severity] = None
    symptoms: frozenset[Symptom] = field(default_factory=frozenset)

    @property
    def key(self) -> str:
        """Stable identity: detector_id:target."""
        return f"{self.detector_id}:{self.target}"

    @property
    def classified(self) -> bool:
        return self.severity is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "detectorId": self.detector_id,
            "category": self.category.value,
            "target": self.target,
            "rationale": self.rationale,
            "rawWeight": self.raw_weight,
            "targetLines": self.target_lines,
            "related": list(self.related),
            "severity": self.severity.name if self.severity is not None else None,
            "symptoms": [s.value for s in ordered_symptoms(self.symptoms)],
            "evidence": [
                {"signal": e.signal, "value": e.value, "description": e.description}
                for e in self.evidence
            ],
            "suggestion": self.suggestion,
        }
