"""Built-in detectors, one or more per finding category."""

from .duplicate_module import DuplicateModuleDetector
from .escape_hatch import EscapeHatchDetector
from .leaked_abstraction import LeakedAbstractionDetector
from .mixed_concerns import MixedConcernsDetector
from .pass_through import PassThroughDetector
from .registry import DetectorRegistry, RegistryRun, build_registry, get_default_registry
from .rerender_cascade import RerenderCascadeDetector
from .shallow_module import ShallowModuleDetector
from .stored_derived_state import StoredDerivedStateDetector
from .synced_state import SyncedStateDetector


def get_default_detectors() -> list:
    """Return one instance of every built-in detector."""
    return [
        ShallowModuleDetector(),
        PassThroughDetector(),
        LeakedAbstractionDetector(),
        SyncedStateDetector(),
        StoredDerivedStateDetector(),
        MixedConcernsDetector(),
        RerenderCascadeDetector(),
        DuplicateModuleDetector(),
        EscapeHatchDetector(),
    ]


__all__ = [
    "DetectorRegistry",
    "RegistryRun",
    "build_registry",
    "get_default_registry",
    "get_default_detectors",
    "ShallowModuleDetector",
    "PassThroughDetector",
    "LeakedAbstractionDetector",
    "SyncedStateDetector",
    "StoredDerivedStateDetector",
    "MixedConcernsDetector",
    "RerenderCascadeDetector",
    "DuplicateModuleDetector",
    "EscapeHatchDetector",
]
