"""Refactor plan generation.

Turns a prioritized finding list into an ordered sequence of refactor steps.
Each step targets exactly one module, resolves the highest-priority finding
still open on it, and absorbs any other open finding on that module whose
category the same structural change also removes (co-resolution).

Steps are meant to ship one at a time with the test suite green in between.
The generator assumes behavior preservation; it never verifies it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional, Sequence

from ..insights.models import Category, Finding, Severity
from ..insights.ranking import prioritize
from ..logging_config import get_logger

logger = get_logger(__name__)


# Lead category -> categories the same structural change also removes.
# Every category co-resolves itself.
CO_RESOLUTION: dict[Category, frozenset[Category]] = {
    Category.WRONG_STATE_BOUNDARY: frozenset(
        {Category.WRONG_STATE_BOUNDARY, Category.RE_RENDER_CASCADE}
    ),
    Category.LEAKED_ABSTRACTION: frozenset(
        {
            Category.LEAKED_ABSTRACTION,
            Category.SHALLOW_MODULE,
            Category.RE_RENDER_CASCADE,
            Category.TACTICAL_DEBT,
        }
    ),
    Category.MIXED_CONCERNS: frozenset(
        {
            Category.MIXED_CONCERNS,
            Category.RE_RENDER_CASCADE,
            Category.LEAKED_ABSTRACTION,
            Category.SHALLOW_MODULE,
            Category.TACTICAL_DEBT,
        }
    ),
    Category.SHALLOW_MODULE: frozenset({Category.SHALLOW_MODULE, Category.TACTICAL_DEBT}),
    Category.RE_RENDER_CASCADE: frozenset({Category.RE_RENDER_CASCADE}),
    Category.TACTICAL_DEBT: frozenset({Category.TACTICAL_DEBT}),
}

REMEDIATION: dict[Category, str] = {
    Category.WRONG_STATE_BOUNDARY: (
        "Move state in {target} to a single owner and derive every other copy from it"
    ),
    Category.LEAKED_ABSTRACTION: (
        "Wrap the leaked dependencies of {target} behind an interface it owns"
    ),
    Category.MIXED_CONCERNS: (
        "Split {target} so each resulting module serves one concern"
    ),
    Category.SHALLOW_MODULE: (
        "Deepen {target}: fold it into its caller or pull more behavior behind its interface"
    ),
    Category.RE_RENDER_CASCADE: (
        "Narrow the re-render scope of state in {target} to the modules that read it"
    ),
    Category.TACTICAL_DEBT: (
        "Consolidate tactical shortcuts in {target} (duplicated structure, untyped escape hatches)"
    ),
}


def co_resolves(lead: Finding, other: Finding) -> bool:
    """Whether the change that fixes ``lead`` also fixes ``other``.

    Only findings on the same module, of equal or lower severity, qualify.
    """
    if other.target != lead.target:
        return False
    if lead.severity is None or other.severity is None or other.severity > lead.severity:
        return False
    return other.category in CO_RESOLUTION[lead.category]


@dataclass(frozen=True)
class RefactorStep:
    """One atomic, independently shippable change to one module.

    ``shippable`` is a contract the caller must uphold by running their own
    tests after each step; the engine assumes it and never checks it.
    """

    index: int
    target: str
    description: str
    resolves: tuple[Finding, ...]
    severity: Severity
    optional: bool = False
    shippable: bool = True

    @property
    def categories(self) -> tuple[Category, ...]:
        seen: list[Category] = []
        for f in self.resolves:
            if f.category not in seen:
                seen.append(f.category)
        return tuple(seen)

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "target": self.target,
            "description": self.description,
            "resolves": [f.key for f in self.resolves],
            "categories": [c.value for c in self.categories],
            "severity": self.severity.name,
            "optional": self.optional,
            "shippable": self.shippable,
        }


@dataclass(frozen=True)
class RefactorPlan:
    steps: tuple[RefactorStep, ...] = ()

    @property
    def mandatory_steps(self) -> tuple[RefactorStep, ...]:
        return tuple(s for s in self.steps if not s.optional)

    @property
    def optional_steps(self) -> tuple[RefactorStep, ...]:
        return tuple(s for s in self.steps if s.optional)

    @property
    def resolved_keys(self) -> set[str]:
        return {f.key for s in self.steps for f in s.resolves}

    def to_dict(self) -> dict[str, Any]:
        return {"steps": [s.to_dict() for s in self.steps]}


def _describe(lead: Finding, bundled: Sequence[Finding]) -> str:
    text = REMEDIATION[lead.category].format(target=lead.target)
    extra = []
    for f in bundled:
        if f.category != lead.category and f.category.value not in extra:
            extra.append(f.category.value)
    if extra:
        text += f" (also resolves {', '.join(extra)})"
    return text


def plan(findings: Iterable[Finding], include_minor: bool = True) -> RefactorPlan:
    """Build an ordered refactor plan from findings.

    Findings are (re)prioritized first, so raw or unordered input is
    accepted. STRUCTURAL and MODERATE leads produce mandatory steps; once
    they are all covered, leftover MINOR findings become optional trailing
    steps, omitted entirely when ``include_minor`` is False.

    Args:
        findings: Findings, ideally already prioritized
        include_minor: Whether to append optional steps for MINOR findings

    Returns:
        RefactorPlan whose steps never bundle findings across modules
    """
    ordered = prioritize(findings)
    resolved: set[str] = set()
    steps: list[RefactorStep] = []

    for i, lead in enumerate(ordered):
        if lead.key in resolved:
            continue
        optional = lead.severity == Severity.MINOR
        if optional and not include_minor:
            # Everything after the first open MINOR lead is MINOR too
            break

        bundle = [lead]
        for other in ordered[i + 1:]:
            if other.key not in resolved and co_resolves(lead, other):
                bundle.append(other)
        resolved.update(f.key for f in bundle)

        steps.append(
            RefactorStep(
                index=len(steps) + 1,
                target=lead.target,
                description=_describe(lead, bundle),
                resolves=tuple(bundle),
                severity=lead.severity,
                optional=optional,
            )
        )

    logger.debug(
        f"Planned {len(steps)} steps covering {len(resolved)} of {len(ordered)} findings"
    )
    return RefactorPlan(steps=tuple(steps))


def step_for(plan_: RefactorPlan, finding: Finding) -> Optional[RefactorStep]:
    """The step resolving ``finding``, or None when it was left out."""
    for step in plan_.steps:
        if any(f.key == finding.key for f in step.resolves):
            return step
    return None
