"""Exception hierarchy for depth-lens."""

from .analysis import (
    AnalysisCancelled,
    AnalysisError,
    ConflictError,
    DetectorFailure,
    ModelLoadError,
    ValidationError,
)
from .base import DepthLensError
from .config import ConfigFileError, ConfigurationError, InvalidConfigError
from .taxonomy import ErrorCode

__all__ = [
    "DepthLensError",
    "ErrorCode",
    "AnalysisError",
    "ValidationError",
    "ModelLoadError",
    "ConflictError",
    "DetectorFailure",
    "AnalysisCancelled",
    "ConfigurationError",
    "InvalidConfigError",
    "ConfigFileError",
]
