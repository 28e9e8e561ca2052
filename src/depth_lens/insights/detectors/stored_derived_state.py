"""STORED_DERIVED_STATE — a computed value stored as if it were a source.

Category: wrong-state-boundary
Default severity: STRUCTURAL

Flagged when a state item is marked ``owned`` but lists inputs in
``derived_from``: its value is a pure function of other visible state or
props, so storing it creates a second copy that can drift.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ...model import StateOrigin
from ..models import Category, Evidence, Finding
from .helpers import build_finding, join_names

if TYPE_CHECKING:
    from ...config import ThresholdConfig
    from ...model import ModuleModel


class StoredDerivedStateDetector:
    name = "stored_derived_state"
    category = Category.WRONG_STATE_BOUNDARY
    description = "Derived value is stored as owned state instead of computed"

    def find(self, model: ModuleModel, thresholds: ThresholdConfig) -> list[Finding]:
        findings: list[Finding] = []

        for module in model:
            stored = [
                s for s in module.state if s.origin is StateOrigin.OWNED and s.derived_from
            ]
            if not stored:
                continue

            findings.append(
                build_finding(
                    self.name,
                    self.category,
                    module,
                    rationale=(
                        f"{module.id} stores {join_names(s.name for s in stored)} although "
                        f"each is computed from other values"
                    ),
                    raw_weight=len(stored),
                    evidence=[
                        Evidence(
                            "stored_derived",
                            len(s.derived_from),
                            f"{s.name} = f({join_names(s.derived_from)})",
                        )
                        for s in stored
                    ],
                    suggestion="Compute these values on read instead of storing them.",
                )
            )

        return findings
