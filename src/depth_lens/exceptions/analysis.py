"""Analysis-related exceptions: model validation, registry, detector runs."""

from typing import List, Sequence

from .base import DepthLensError
from .taxonomy import ErrorCode


class AnalysisError(DepthLensError):
    """Base class for analysis-related errors."""

    pass


class ValidationError(AnalysisError):
    """Raised when a module model or design option set is malformed.

    Fatal: the request is rejected before any detector runs. All problems
    found are collected so the caller can fix them in one pass.
    """

    code = ErrorCode.DL100

    def __init__(self, problems: Sequence[str], subject: str = "module model"):
        self.problems: List[str] = list(problems)
        self.subject = subject
        shown = "; ".join(self.problems[:5])
        more = f" (+{len(self.problems) - 5} more)" if len(self.problems) > 5 else ""
        super().__init__(
            f"Invalid {subject}: {shown}{more}",
            details={"problem_count": str(len(self.problems))},
            code=ErrorCode.DL400 if subject == "design options" else ErrorCode.DL100,
        )


class ModelLoadError(AnalysisError):
    """Raised when a model file cannot be read or parsed."""

    code = ErrorCode.DL101

    def __init__(self, path: str, reason: str):
        super().__init__(
            f"Cannot load model file: {path}",
            details={"path": path, "reason": reason},
        )
        self.path = path
        self.reason = reason


class ConflictError(AnalysisError):
    """Raised when a detector id is registered twice or the registry is frozen."""

    code = ErrorCode.DL200

    def __init__(self, detector_id: str, reason: str = "already registered"):
        super().__init__(
            f"Cannot register detector '{detector_id}': {reason}",
            details={"detector": detector_id, "reason": reason},
            code=ErrorCode.DL201 if reason == "registry is frozen" else ErrorCode.DL200,
        )
        self.detector_id = detector_id
        self.reason = reason


class DetectorFailure(AnalysisError):
    """A single detector raised during evaluation.

    Never propagated out of a registry run: the failing detector's findings
    are dropped and this record is attached to the result as a diagnostic.
    """

    code = ErrorCode.DL300

    def __init__(self, detector_id: str, error: BaseException):
        super().__init__(
            f"Detector '{detector_id}' failed: {error}",
            details={"detector": detector_id, "error_type": type(error).__name__},
        )
        self.detector_id = detector_id
        self.error = error


class AnalysisCancelled(AnalysisError):
    """Raised when the caller cancels a run between detector invocations."""

    code = ErrorCode.DL301

    def __init__(self, completed: int, total: int):
        super().__init__(
            f"Analysis cancelled after {completed}/{total} detectors",
            details={"completed": str(completed), "total": str(total)},
        )
        self.completed = completed
        self.total = total
