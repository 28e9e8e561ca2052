"""RERENDER_CASCADE — state changes re-render modules that never read it.

Category: re-render-cascade
Default severity: MODERATE

For each state item, non-readers = re-render scope minus readers minus the
owner. Fires when any item has at least ``rerender_min_non_readers``;
weight = number of distinct non-reading modules across the module's state.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..models import Category, Evidence, Finding
from .helpers import build_finding, join_names

if TYPE_CHECKING:
    from ...config import ThresholdConfig
    from ...model import ModuleModel


class RerenderCascadeDetector:
    name = "rerender_cascade"
    category = Category.RE_RENDER_CASCADE
    description = "State re-renders modules that do not read it"

    def find(self, model: ModuleModel, thresholds: ThresholdConfig) -> list[Finding]:
        findings: list[Finding] = []

        for module in model:
            per_item: list[tuple[str, list[str]]] = []
            for item in module.state:
                non_readers = sorted(
                    set(item.rerender_scope) - set(item.readers) - {module.id}
                )
                if len(non_readers) >= thresholds.rerender_min_non_readers:
                    per_item.append((item.name, non_readers))

            if not per_item:
                continue

            affected = sorted({m for _name, mods in per_item for m in mods})
            findings.append(
                build_finding(
                    self.name,
                    self.category,
                    module,
                    rationale=(
                        f"Changes to {join_names(name for name, _ in per_item)} in "
                        f"{module.id} re-render {len(affected)} module(s) that never read it: "
                        f"{join_names(affected)}"
                    ),
                    raw_weight=len(affected),
                    related=affected,
                    evidence=[
                        Evidence("non_readers", len(mods), f"{name} -> {join_names(mods)}")
                        for name, mods in per_item
                    ],
                    suggestion=(
                        "Move the state down to the modules that read it, or split "
                        "the provider so unrelated subscribers stop re-rendering."
                    ),
                )
            )

        return findings
