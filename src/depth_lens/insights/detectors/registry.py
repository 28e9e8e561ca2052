"""Detector registry.

Maps detector id -> detector. The process-wide default registry is built
once, frozen, and read-only afterwards. ``run`` invokes every detector on
the model and concatenates results in registration order; since detectors
only see the model, neither execution order nor concurrency can change the
finding set.
"""

from __future__ import annotations

import concurrent.futures
import threading
from dataclasses import dataclass, field
from functools import lru_cache
from typing import TYPE_CHECKING, Callable, Iterable, Optional

from ...config import DEFAULT_THRESHOLDS, ThresholdConfig
from ...exceptions import AnalysisCancelled, ConflictError, DetectorFailure
from ...logging_config import get_logger
from ..models import Finding

if TYPE_CHECKING:
    from ...model import ModuleModel
    from ..protocols import Detector

ProgressCallback = Optional[Callable[[str], None]]

logger = get_logger(__name__)


@dataclass
class RegistryRun:
    """Output of one registry run."""

    findings: list[Finding] = field(default_factory=list)
    failures: list[DetectorFailure] = field(default_factory=list)
    detectors_run: int = 0


class DetectorRegistry:
    """Named detectors, write-once."""

    def __init__(self, detectors: Iterable[Detector] = ()):
        self._detectors: dict[str, Detector] = {}
        self._frozen = False
        for detector in detectors:
            self.register(detector)

    def register(self, detector: Detector) -> None:
        """Add a detector under its ``name``.

        Raises:
            ConflictError: If the id is taken or the registry is frozen
        """
        if self._frozen:
            raise ConflictError(detector.name, "registry is frozen")
        if detector.name in self._detectors:
            raise ConflictError(detector.name)
        self._detectors[detector.name] = detector
        logger.debug(f"Registered detector {detector.name} ({detector.category.value})")

    def freeze(self) -> DetectorRegistry:
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def detectors(self) -> list[Detector]:
        return list(self._detectors.values())

    @property
    def names(self) -> list[str]:
        return list(self._detectors)

    def get(self, name: str) -> Detector:
        try:
            return self._detectors[name]
        except KeyError:
            raise KeyError(f"Unknown detector: {name!r}") from None

    def __len__(self) -> int:
        return len(self._detectors)

    def __contains__(self, name: object) -> bool:
        return name in self._detectors

    def run(
        self,
        model: ModuleModel,
        thresholds: Optional[ThresholdConfig] = None,
        workers: int = 1,
        cancel: Optional[threading.Event] = None,
        on_progress: ProgressCallback = None,
    ) -> RegistryRun:
        """Run every detector against the model.

        A detector that raises (or returns something other than findings of
        its own category on modules of this model) is isolated: its output
        is dropped and a DetectorFailure is recorded. Cancellation is
        checked between detector invocations.

        Raises:
            AnalysisCancelled: If ``cancel`` is set before all detectors ran
        """
        thresholds = thresholds or DEFAULT_THRESHOLDS
        detectors = self.detectors
        total = len(detectors)
        outcomes: list[tuple[list[Finding], Optional[DetectorFailure]]] = []

        def _progress(msg: str) -> None:
            if on_progress is not None:
                on_progress(msg)

        if workers <= 1 or total <= 1:
            for i, detector in enumerate(detectors):
                if cancel is not None and cancel.is_set():
                    raise AnalysisCancelled(i, total)
                _progress(f"Running {detector.name}...")
                outcomes.append(self._invoke(detector, model, thresholds))
        else:
            with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as pool:
                futures = [
                    pool.submit(self._invoke, detector, model, thresholds)
                    for detector in detectors
                ]
                for i, (detector, future) in enumerate(zip(detectors, futures)):
                    if cancel is not None and cancel.is_set():
                        for pending in futures[i:]:
                            pending.cancel()
                        raise AnalysisCancelled(i, total)
                    outcomes.append(future.result())
                    _progress(f"Finished {detector.name}")

        result = RegistryRun(detectors_run=total)
        for findings, failure in outcomes:
            if failure is not None:
                result.failures.append(failure)
            else:
                result.findings.extend(findings)

        logger.info(
            f"Ran {total} detectors: {len(result.findings)} findings, "
            f"{len(result.failures)} failure(s)"
        )
        return result

    @staticmethod
    def _invoke(
        detector: Detector, model: ModuleModel, thresholds: ThresholdConfig
    ) -> tuple[list[Finding], Optional[DetectorFailure]]:
        try:
            findings = list(detector.find(model, thresholds))
            for f in findings:
                if not isinstance(f, Finding):
                    raise TypeError(f"returned {type(f).__name__}, expected Finding")
                if f.detector_id != detector.name or f.category is not detector.category:
                    raise ValueError(
                        f"returned finding for {f.detector_id}/{f.category.value}, expected "
                        f"{detector.name}/{detector.category.value}"
                    )
                if f.target not in model:
                    raise ValueError(f"returned finding for unknown module '{f.target}'")
        except Exception as e:
            failure = DetectorFailure(detector.name, e)
            logger.warning(str(failure))
            return [], failure

        logger.debug(f"Detector {detector.name} produced {len(findings)} finding(s)")
        return findings, None


def build_registry(extra: Iterable[Detector] = ()) -> DetectorRegistry:
    """Fresh (unfrozen) registry holding the built-in detectors plus ``extra``."""
    from . import get_default_detectors

    registry = DetectorRegistry(get_default_detectors())
    for detector in extra:
        registry.register(detector)
    return registry


@lru_cache(maxsize=1)
def get_default_registry() -> DetectorRegistry:
    """The process-wide registry: built-in detectors, built once and frozen."""
    return build_registry().freeze()
