"""PASS_THROUGH — module whose public surface equals a child's.

Category: shallow-module
Default severity: MODERATE

When both modules declare member names the sets must be equal. Otherwise
the interface sizes must match and the outer module must own no state and
no dependencies of its own, i.e. it adds nothing on the way through.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from ..models import Category, Evidence, Finding
from .helpers import build_finding

if TYPE_CHECKING:
    from ...config import ThresholdConfig
    from ...model import Module, ModuleModel


class PassThroughDetector:
    """Detects wrappers that forward a child's interface unchanged."""

    name = "pass_through"
    category = Category.SHALLOW_MODULE
    description = "Public surface is identical to a child's public surface"

    def find(self, model: ModuleModel, thresholds: ThresholdConfig) -> list[Finding]:
        findings: list[Finding] = []

        for module in model:
            child = self._forwarded_child(module, model)
            if child is None:
                continue

            findings.append(
                build_finding(
                    self.name,
                    self.category,
                    module,
                    rationale=(
                        f"{module.id} re-exposes the {child.interface_size}-member "
                        f"surface of {child.id} without adding anything"
                    ),
                    raw_weight=1.0,
                    related=[child.id],
                    evidence=[
                        Evidence(
                            "interface_size",
                            module.interface_size,
                            f"same surface as {child.id}",
                        )
                    ],
                    suggestion=(
                        f"Let callers use {child.id} directly, or give {module.id} "
                        "a different abstraction than the one it wraps."
                    ),
                )
            )

        return findings

    @staticmethod
    def _forwarded_child(module: Module, model: ModuleModel) -> Optional[Module]:
        if module.interface_size == 0:
            return None

        for child_id in sorted(set(module.children)):
            child = model.get(child_id)
            if child is None:
                continue
            if module.interface is not None and child.interface is not None:
                if set(module.interface) == set(child.interface):
                    return child
            elif (
                child.interface_size == module.interface_size
                and not module.state
                and not module.dependencies
            ):
                return child
        return None
