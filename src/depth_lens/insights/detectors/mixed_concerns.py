"""MIXED_CONCERNS — one module spanning unrelated domains.

Category: mixed-concerns
Default severity: STRUCTURAL

Responsibilities are approximated by dependency clustering: each external
dependency has a domain (explicit, or the first segment of its target).
Ambient domains are ignored, domains listed together in
``related_domains`` merge into one cluster, and the module fires when at
least ``mixed_concerns_min_domains`` clusters remain.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..models import Category, Evidence, Finding
from .helpers import build_finding, join_names

if TYPE_CHECKING:
    from ...config import ThresholdConfig
    from ...model import Module, ModuleModel


def dependency_clusters(module: Module, thresholds: ThresholdConfig) -> dict[str, list[str]]:
    """Map cluster label -> sorted dependency targets in that cluster."""
    ambient = {d.lower() for d in thresholds.ambient_domains}
    group_of: dict[str, str] = {}
    for group in thresholds.related_domains:
        members = [d.lower() for d in group]
        if not members:
            continue
        label = min(members)
        for member in members:
            group_of.setdefault(member, label)

    clusters: dict[str, set[str]] = {}
    for dep in module.dependencies:
        if dep.internal:
            continue
        domain = dep.concern
        if not domain or domain in ambient:
            continue
        label = group_of.get(domain, domain)
        clusters.setdefault(label, set()).add(dep.target)

    return {label: sorted(targets) for label, targets in sorted(clusters.items())}


class MixedConcernsDetector:
    """Detects modules whose dependencies fall into unrelated clusters."""

    name = "mixed_concerns"
    category = Category.MIXED_CONCERNS
    description = "Dependencies cluster into two or more unrelated domains"

    def find(self, model: ModuleModel, thresholds: ThresholdConfig) -> list[Finding]:
        findings: list[Finding] = []

        for module in model:
            clusters = dependency_clusters(module, thresholds)
            if len(clusters) < thresholds.mixed_concerns_min_domains:
                continue

            findings.append(
                build_finding(
                    self.name,
                    self.category,
                    module,
                    rationale=(
                        f"{module.id} mixes {len(clusters)} unrelated concerns: "
                        f"{join_names(clusters)}"
                    ),
                    raw_weight=len(clusters),
                    evidence=[
                        Evidence("domain", len(targets), f"{label}: {join_names(targets)}")
                        for label, targets in clusters.items()
                    ],
                    suggestion=(
                        "Split the module along its dependency clusters so each part "
                        "owns one concern."
                    ),
                )
            )

        return findings
