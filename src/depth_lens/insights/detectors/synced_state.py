"""SYNCED_STATE — one value kept in step across two modules.

Category: wrong-state-boundary
Default severity: STRUCTURAL

Any state item with origin ``synced``. The finding targets the owner and
names every sync partner in ``related``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ...model import StateOrigin
from ..models import Category, Evidence, Finding
from .helpers import build_finding, join_names

if TYPE_CHECKING:
    from ...config import ThresholdConfig
    from ...model import ModuleModel


class SyncedStateDetector:
    """Detects state copied between modules instead of lifted to one owner."""

    name = "synced_state"
    category = Category.WRONG_STATE_BOUNDARY
    description = "State is synchronized between modules instead of having one owner"

    def find(self, model: ModuleModel, thresholds: ThresholdConfig) -> list[Finding]:
        findings: list[Finding] = []

        for module in model:
            synced = [s for s in module.state if s.origin is StateOrigin.SYNCED]
            if not synced:
                continue

            partners = sorted({p for s in synced for p in s.synced_with if p != module.id})
            names = [s.name for s in synced]

            findings.append(
                build_finding(
                    self.name,
                    self.category,
                    module,
                    rationale=(
                        f"{module.id} keeps {join_names(names)} in sync with "
                        f"{join_names(partners)}"
                    ),
                    raw_weight=len(synced),
                    related=partners,
                    evidence=[
                        Evidence(
                            "synced_items",
                            len(synced),
                            f"{s.name} <-> {join_names(p for p in s.synced_with if p != module.id)}",
                        )
                        for s in synced
                    ],
                    suggestion=(
                        "Give each synced value a single owner (lift it to the closest "
                        "common parent or a store) and pass it down instead of copying it."
                    ),
                )
            )

        return findings
