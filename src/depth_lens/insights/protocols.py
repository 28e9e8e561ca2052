"""Protocol for detector plugins.

Detectors read the module model (NEVER write) and return findings. Their
only inputs are the model and the static thresholds, so no detector can
depend on another detector's output within one run.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..config import ThresholdConfig
    from ..model import ModuleModel
    from .models import Category, Finding


class Detector(Protocol):
    """Detector protocol.

    Attributes:
        name: Unique detector id, the registry key
        category: Finding category every finding of this detector carries
        description: One-line summary of the rule
    """

    name: str
    category: Category
    description: str

    def find(self, model: ModuleModel, thresholds: ThresholdConfig) -> list[Finding]:
        """Return findings for the model. Never mutate it.

        Must be deterministic and total: any well-formed model yields the
        same (possibly empty) list every time.
        """
        ...
