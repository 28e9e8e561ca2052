"""SHALLOW_MODULE — interface nearly as large as what it hides.

Category: shallow-module
Default severity: MODERATE

depth = (line_count / lines_per_unit + hidden dependencies) / interface_size

Fires when a module exposes at least ``shallow_min_interface`` members and
its depth is below ``shallow_depth_threshold``. Weight is how many times
deeper the module would need to be to pass.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..models import Category, Evidence, Finding
from .helpers import build_finding, module_depth

if TYPE_CHECKING:
    from ...config import ThresholdConfig
    from ...model import ModuleModel


class ShallowModuleDetector:
    """Detects modules whose interface costs about as much as they hide."""

    name = "shallow_module"
    category = Category.SHALLOW_MODULE
    description = "Interface size is high relative to the functionality it hides"

    MAX_WEIGHT = 10.0

    def find(self, model: ModuleModel, thresholds: ThresholdConfig) -> list[Finding]:
        findings: list[Finding] = []
        threshold = thresholds.shallow_depth_threshold

        for module in model:
            if module.interface_size < thresholds.shallow_min_interface:
                continue

            depth = module_depth(module, thresholds)
            if depth >= threshold:
                continue

            weight = self.MAX_WEIGHT if depth <= 0 else min(self.MAX_WEIGHT, threshold / depth)

            findings.append(
                build_finding(
                    self.name,
                    self.category,
                    module,
                    rationale=(
                        f"{module.id} exposes {module.interface_size} members over "
                        f"{module.line_count} lines and {len(module.hidden_dependencies)} "
                        f"hidden dependencies (depth {depth:.2f} < {threshold:.2f})"
                    ),
                    raw_weight=weight,
                    evidence=[
                        Evidence("depth", round(depth, 4), f"depth {depth:.2f}"),
                        Evidence(
                            "interface_size",
                            module.interface_size,
                            f"{module.interface_size} public members",
                        ),
                    ],
                    suggestion=(
                        "Fold the exposed members into fewer, more powerful operations "
                        "or merge this module into its caller."
                    ),
                )
            )

        return findings
