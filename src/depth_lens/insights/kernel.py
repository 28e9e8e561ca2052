"""InsightKernel — validate, detect, classify, rank, report."""

from __future__ import annotations

import threading
from typing import Callable, Optional

from ..config import DEFAULT_CONFIG, AnalysisConfig
from ..logging_config import get_logger
from ..model import ModuleModel, validate_model
from .classifier import classify_findings
from .detectors import DetectorRegistry, get_default_registry
from .diagnostics import run_diagnostics
from .ranking import prioritize
from .report import AnalysisReport, assemble_report

ProgressCallback = Optional[Callable[[str], None]]

logger = get_logger(__name__)


class InsightKernel:
    """Orchestrate analysis: validate -> detect -> classify -> prioritize -> report.

    Holds no per-request state; one kernel can serve any number of models.
    """

    def __init__(
        self,
        config: Optional[AnalysisConfig] = None,
        registry: Optional[DetectorRegistry] = None,
    ):
        self.config = config or DEFAULT_CONFIG
        self.registry = registry if registry is not None else get_default_registry()

    def analyze(
        self,
        model: ModuleModel,
        cancel: Optional[threading.Event] = None,
        on_progress: ProgressCallback = None,
    ) -> AnalysisReport:
        """Execute the full analysis pipeline on one model.

        Parameters
        ----------
        model : ModuleModel
            Read-only structure to analyze.
        cancel : threading.Event, optional
            When set, the run stops before the next detector invocation.
        on_progress : callable, optional
            Called with a status message at each phase transition.

        Raises
        ------
        ValidationError
            If the model is malformed; no detector runs.
        AnalysisCancelled
            If ``cancel`` was set mid-run.
        """

        def _progress(msg: str) -> None:
            if on_progress is not None:
                on_progress(msg)

        # Phase 1: reject malformed input before any detector sees it
        _progress("Validating model...")
        validate_model(model)
        logger.info(f"Analyzing {len(model)} modules with {len(self.registry)} detectors")

        # Phase 2: detectors
        _progress("Detecting issues...")
        run = self.registry.run(
            model,
            thresholds=self.config.thresholds,
            workers=self.config.workers,
            cancel=cancel,
            on_progress=on_progress,
        )

        # Phase 3: classify and rank
        _progress("Ranking findings...")
        findings = prioritize(classify_findings(run.findings, self.config.thresholds))

        # Phase 4: diagnostics. Failures are always reported, quality checks are optional
        diagnostics = run_diagnostics(
            model, findings, run.failures, quality_checks=self.config.enable_diagnostics
        )
        if diagnostics.has_issues:
            logger.info(f"Diagnostics: {diagnostics.summary()}")
            for issue in diagnostics.issues:
                logger.debug(f"  [{issue.severity}] {issue.message}")

        return assemble_report(findings, diagnostics)
