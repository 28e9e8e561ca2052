"""Public API for depth-lens.

Callers should use these functions instead of wiring kernels, registries
and configs by hand.

Example:
    >>> from depth_lens import analyze
    >>>
    >>> report = analyze({
    ...     "CheckoutForm": {
    ...         "kind": "component",
    ...         "line_count": 240,
    ...         "interface_size": 7,
    ...         "dependencies": [{"target": "stripe.Client", "leak": True}],
    ...     }
    ... })
    >>> report.summary.top_priority.category.value
    'leaked-abstraction'
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Union

from .config import AnalysisConfig, load_config
from .design import DesignComparison, DesignOption, evaluate, parse_design_options
from .insights import InsightKernel
from .insights.detectors import DetectorRegistry
from .insights.report import AnalysisReport
from .logging_config import get_logger, setup_logging
from .model import ModuleModel, load_model_file, parse_model
from .model.loader import read_structured_file
from .planning import RefactorPlan, plan

logger = get_logger(__name__)

ModelInput = Union[ModuleModel, Mapping[str, Any], str, Path]
DesignInput = Union[Iterable[DesignOption], Mapping[str, Any], str, Path]


def _configure(config_file: Optional[Path], overrides: dict) -> AnalysisConfig:
    # Only touch logging when the caller asked for a verbosity
    if "verbose" in overrides or "quiet" in overrides:
        setup_logging(
            verbose=bool(overrides.get("verbose")), quiet=bool(overrides.get("quiet"))
        )
    config = load_config(config_file=config_file, **overrides)
    logger.debug(f"Configuration loaded: {config.verbosity} mode, {config.workers} workers")
    return config


def coerce_model(source: ModelInput) -> ModuleModel:
    """Accept a ModuleModel, its serialized mapping, or a JSON/TOML file path."""
    if isinstance(source, ModuleModel):
        return source
    if isinstance(source, (str, Path)):
        return load_model_file(Path(source))
    return parse_model(source)


def coerce_options(source: DesignInput) -> list[DesignOption]:
    """Accept DesignOptions, their serialized form, or a JSON/TOML file path."""
    if isinstance(source, (str, Path)):
        return parse_design_options(read_structured_file(Path(source)))
    if isinstance(source, Mapping):
        return parse_design_options(source)
    options = list(source)
    if all(isinstance(o, DesignOption) for o in options):
        return options
    return parse_design_options(options)


def analyze(
    source: ModelInput,
    config_file: Optional[Path] = None,
    registry: Optional[DetectorRegistry] = None,
    cancel: Optional[threading.Event] = None,
    **overrides,
) -> AnalysisReport:
    """Analyze a module model and return the prioritized report.

    Pipeline:
    1. Load configuration (auto-discover TOML, env vars, overrides)
    2. Parse and validate the model
    3. Run every detector, classify, prioritize
    4. Attach diagnostics and assemble the report

    Args:
        source: ModuleModel, serialized model mapping, or model file path
        config_file: Optional explicit config file path
        registry: Custom detector registry (default: built-in detectors)
        cancel: Event checked between detector invocations
        **overrides: Configuration overrides (e.g., workers=4, verbose=True)

    Returns:
        AnalysisReport with findings, summary and diagnostics

    Raises:
        ValidationError: If the model is malformed (before any detector runs)
        ConfigurationError: If configuration is invalid
        AnalysisCancelled: If ``cancel`` was set mid-run
    """
    config = _configure(config_file, overrides)
    model = coerce_model(source)
    report = InsightKernel(config, registry).analyze(model, cancel=cancel)
    logger.info(
        f"Analysis complete: {report.summary.total} findings "
        f"({report.summary.structural} structural)"
    )
    return report


def plan_refactor(
    source: Union[ModelInput, AnalysisReport],
    config_file: Optional[Path] = None,
    include_minor: Optional[bool] = None,
    **overrides,
) -> RefactorPlan:
    """Analyze a model (or reuse a report) and turn its findings into steps.

    Args:
        source: Anything ``analyze`` accepts, or an existing AnalysisReport
        config_file: Optional explicit config file path
        include_minor: Append optional MINOR steps (default: config value)
        **overrides: Configuration overrides

    Returns:
        RefactorPlan with mandatory steps first, optional MINOR steps last
    """
    config = _configure(config_file, overrides)
    if isinstance(source, AnalysisReport):
        report = source
    else:
        report = InsightKernel(config).analyze(coerce_model(source))
    if include_minor is None:
        include_minor = config.include_minor_steps
    return plan(report.findings, include_minor=include_minor)


def compare_designs(
    source: DesignInput,
    config_file: Optional[Path] = None,
    **overrides,
) -> DesignComparison:
    """Score and rank competing designs for a module that is not built yet.

    Returns:
        DesignComparison with the ranked options and an explicit tie flag

    Raises:
        ValidationError: Fewer than two options, duplicate names, bad records
    """
    config = _configure(config_file, overrides)
    return evaluate(*coerce_options(source), config=config.evaluator)
