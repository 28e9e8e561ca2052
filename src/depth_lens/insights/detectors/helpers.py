"""Shared helpers for detector rules and evidence builders."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from ..models import Category, Evidence, Finding

if TYPE_CHECKING:
    from ...config import ThresholdConfig
    from ...model import Module


def module_depth(module: Module, thresholds: ThresholdConfig) -> float:
    """Hidden functionality per interface member.

    Functionality is approximated by implementation size (in units of
    ``lines_per_unit`` lines) plus the dependencies kept behind the
    interface. A module with no interface has infinite depth.
    """
    if module.interface_size <= 0:
        return float("inf")
    functionality = module.line_count / thresholds.lines_per_unit + len(module.hidden_dependencies)
    return functionality / module.interface_size


def join_names(names: Iterable[str], limit: int = 4) -> str:
    """'a, b, c' or 'a, b, c, d (+2 more)'."""
    items = list(names)
    shown = ", ".join(items[:limit])
    if len(items) > limit:
        shown += f" (+{len(items) - limit} more)"
    return shown


def build_finding(
    detector_id: str,
    category: Category,
    module: Module,
    rationale: str,
    raw_weight: float,
    evidence: Iterable[Evidence] = (),
    related: Iterable[str] = (),
    suggestion: str = "",
) -> Finding:
    return Finding(
        detector_id=detector_id,
        category=category,
        target=module.id,
        rationale=rationale,
        raw_weight=float(raw_weight),
        target_lines=module.line_count,
        related=tuple(sorted(set(related))),
        evidence=tuple(evidence),
        suggestion=suggestion,
    )
