"""LEAKED_ABSTRACTION — dependency types crossing the public interface.

Category: leaked-abstraction
Default severity: STRUCTURAL

One finding per module, weight = number of leaked dependencies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..models import Category, Evidence, Finding
from .helpers import build_finding, join_names

if TYPE_CHECKING:
    from ...config import ThresholdConfig
    from ...model import ModuleModel


class LeakedAbstractionDetector:
    """Detects modules whose interface exposes the resources they use."""

    name = "leaked_abstraction"
    category = Category.LEAKED_ABSTRACTION
    description = "A dependency's type crosses the module's public interface"

    def find(self, model: ModuleModel, thresholds: ThresholdConfig) -> list[Finding]:
        findings: list[Finding] = []

        for module in model:
            leaked = sorted({d.target for d in module.leaked_dependencies})
            if not leaked:
                continue

            total = len(module.dependencies)
            findings.append(
                build_finding(
                    self.name,
                    self.category,
                    module,
                    rationale=(
                        f"{module.id} exposes {len(leaked)} of {total} dependencies "
                        f"through its interface: {join_names(leaked)}"
                    ),
                    raw_weight=len(leaked),
                    evidence=[
                        Evidence("leaked_count", len(leaked), join_names(leaked)),
                        Evidence(
                            "information_hiding",
                            round(1 - len(leaked) / total, 4),
                            f"{total - len(leaked)}/{total} dependencies hidden",
                        ),
                    ],
                    suggestion=(
                        "Wrap the leaked types in domain types owned by this module "
                        "so callers never import them."
                    ),
                )
            )

        return findings
