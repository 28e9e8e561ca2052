"""ESCAPE_HATCH — dependencies typed as any/unknown.

Category: tactical-debt
Default severity: MINOR

Weight = number of escape-hatch-typed dependencies on the module.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..models import Category, Evidence, Finding
from .helpers import build_finding, join_names

if TYPE_CHECKING:
    from ...config import ThresholdConfig
    from ...model import ModuleModel


class EscapeHatchDetector:
    name = "escape_hatch"
    category = Category.TACTICAL_DEBT
    description = "Dependency is typed with an escape-hatch type such as any/unknown"

    def find(self, model: ModuleModel, thresholds: ThresholdConfig) -> list[Finding]:
        escape_types = {t.lower() for t in thresholds.escape_hatch_types}
        findings: list[Finding] = []

        for module in model:
            hatches = sorted(
                {
                    (d.target, d.type_name)
                    for d in module.dependencies
                    if d.type_name is not None and d.type_name.strip().lower() in escape_types
                }
            )
            if not hatches:
                continue

            findings.append(
                build_finding(
                    self.name,
                    self.category,
                    module,
                    rationale=(
                        f"{module.id} holds {len(hatches)} dependency reference(s) typed as "
                        f"escape hatches: {join_names(f'{t}: {ty}' for t, ty in hatches)}"
                    ),
                    raw_weight=len(hatches),
                    evidence=[
                        Evidence("escape_hatch", 1, f"{target} typed '{type_name}'")
                        for target, type_name in hatches
                    ],
                    suggestion="Replace the escape-hatch types with the resource's real type.",
                )
            )

        return findings
