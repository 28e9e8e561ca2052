"""DUPLICATE_MODULE — near-duplicate modules.

Category: tactical-debt
Default severity: MINOR (MODERATE when duplication count >= 3)

Modules are compared by structural fingerprint (see math.similarity).
Pairs at or above ``duplicate_similarity_threshold`` are linked, linked
modules form clusters, and every module in a cluster gets a finding whose
weight is the cluster size, i.e. how many copies exist.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ...math import StructuralSimilarity, connected_groups
from ..models import Category, Evidence, Finding
from .helpers import build_finding, join_names

if TYPE_CHECKING:
    from ...config import ThresholdConfig
    from ...model import Module, ModuleModel

# Fingerprints smaller than this (kind token included) are too generic to compare
_MIN_TOKENS = 3


def fingerprint(module: Module) -> set[str]:
    """Structural tokens describing a module, independent of its name."""
    tokens = {f"kind:{module.kind.value}"}
    tokens.update(f"if:{name}" for name in module.interface or ())
    tokens.update(f"state:{item.name}:{item.origin.value}" for item in module.state)
    tokens.update(f"dep:{dep.target}" for dep in module.dependencies)
    tokens.update(f"child:{child}" for child in module.children)
    return tokens


class DuplicateModuleDetector:
    """Detects clusters of structurally near-identical modules."""

    name = "duplicate_module"
    category = Category.TACTICAL_DEBT
    description = "Module is a near-duplicate of one or more other modules"

    def find(self, model: ModuleModel, thresholds: ThresholdConfig) -> list[Finding]:
        candidates = [
            m
            for m in model
            if m.line_count >= thresholds.duplicate_min_lines and len(fingerprint(m)) >= _MIN_TOKENS
        ]
        if len(candidates) < 2:
            return []

        labels = [m.id for m in candidates]
        matrix = StructuralSimilarity.similarity_matrix(
            [fingerprint(m) for m in candidates],
            [m.line_count for m in candidates],
        )
        pairs = StructuralSimilarity.similar_pairs(
            labels, matrix, thresholds.duplicate_similarity_threshold
        )
        if not pairs:
            return []

        best: dict[str, float] = {}
        for a, b, sim in pairs:
            best[a] = max(best.get(a, 0.0), sim)
            best[b] = max(best.get(b, 0.0), sim)

        findings: list[Finding] = []
        for group in connected_groups(pairs):
            for module_id in group:
                module = model.get(module_id)
                peers = [g for g in group if g != module_id]
                findings.append(
                    build_finding(
                        self.name,
                        self.category,
                        module,
                        rationale=(
                            f"{module_id} is one of {len(group)} near-duplicate modules "
                            f"(also {join_names(peers)})"
                        ),
                        raw_weight=len(group),
                        related=peers,
                        evidence=[
                            Evidence(
                                "similarity",
                                best[module_id],
                                f"structural similarity {best[module_id]:.2f} "
                                f"(>= {thresholds.duplicate_similarity_threshold:.2f})",
                            ),
                            Evidence("duplication_count", len(group), f"{len(group)} copies"),
                        ],
                        suggestion=(
                            "Extract the shared structure into one module and "
                            "parameterize the differences."
                        ),
                    )
                )

        return sorted(findings, key=lambda f: f.target)
