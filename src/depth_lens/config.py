"""Configuration loading and management for depth-lens.

This module provides configuration discovery and validation. Configuration
sources are merged in priority order:
    1. Defaults (defined in AnalysisConfig)
    2. Global config (~/.depth-lens.toml)
    3. Project config (./depth-lens.toml)
    4. Explicit config file
    5. Environment variables (DEPTH_LENS_* prefix)
    6. Keyword overrides (typically CLI flags)

Example:
    >>> config = load_config(verbose=True, workers=4)
    >>> config.verbosity
    'verbose'
    >>> config.workers
    4
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigFileError, ConfigurationError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]


def _as_tuple(value: Any) -> tuple:
    if isinstance(value, (list, tuple)):
        return tuple(_as_tuple(v) if isinstance(v, (list, tuple)) else v for v in value)
    return value


@dataclass(frozen=True)
class ThresholdConfig:
    """Detector parameters and per-category escalation thresholds.

    None of these values come from a published standard; the rule checklists
    this engine mechanizes speak of "~5 props" or "~150 lines" at most. They
    are starting points meant to be tuned per codebase:
    - Lower detection thresholds -> more findings (higher recall)
    - Higher detection thresholds -> fewer findings (higher precision)

    Attributes:
        Shallow modules:
            lines_per_unit: Lines of implementation counted as one unit of functionality
            shallow_min_interface: Modules exposing fewer members are never shallow
            shallow_depth_threshold: Depth (functionality per interface member) below this fires

        Mixed concerns:
            mixed_concerns_min_domains: Unrelated dependency clusters needed to fire
            ambient_domains: Domains every module may touch (ignored when clustering)
            related_domains: Groups of domains that count as one concern

        Re-render cascade:
            rerender_min_non_readers: Non-reading modules in scope needed to fire

        Tactical debt:
            duplicate_similarity_threshold: Blended similarity at or above this = duplicate
            duplicate_min_lines: Modules smaller than this are skipped
            escape_hatch_types: Declared types treated as escape hatches (case-insensitive)

        Escalation (raw weight strictly above threshold promotes one tier):
            escalate_<category>: one threshold per finding category
    """

    # === Shallow modules ===
    lines_per_unit: float = 10.0
    shallow_min_interface: int = 3
    shallow_depth_threshold: float = 1.0

    # === Mixed concerns ===
    mixed_concerns_min_domains: int = 2
    ambient_domains: tuple = ("logging", "logger", "config", "typing", "react", "utils", "i18n")
    related_domains: tuple = (
        ("http", "fetch", "axios", "api", "requests", "httpx"),
        ("db", "sql", "orm", "prisma", "sqlalchemy", "repository"),
        ("store", "redux", "zustand", "state", "context"),
        ("router", "navigation", "history"),
    )

    # === Re-render cascade ===
    rerender_min_non_readers: int = 1

    # === Tactical debt ===
    duplicate_similarity_threshold: float = 0.85
    duplicate_min_lines: int = 10
    escape_hatch_types: tuple = ("any", "unknown", "object", "interface{}", "dynamic", "mixed")

    # === Escalation thresholds ===
    # tactical-debt: duplication count >= 3 escalates MINOR -> MODERATE
    escalate_shallow_module: float = 3.0
    escalate_leaked_abstraction: float = 3.0
    escalate_wrong_state_boundary: float = 3.0
    escalate_mixed_concerns: float = 3.0
    escalate_re_render_cascade: float = 5.0
    escalate_tactical_debt: float = 2.0

    def __post_init__(self) -> None:
        """Validate threshold configuration."""
        for name in ("ambient_domains", "related_domains", "escape_hatch_types"):
            object.__setattr__(self, name, _as_tuple(getattr(self, name)))

        if self.lines_per_unit <= 0:
            raise ValueError("lines_per_unit must be positive")
        if self.shallow_min_interface < 1:
            raise ValueError("shallow_min_interface must be at least 1")
        if self.shallow_depth_threshold <= 0:
            raise ValueError("shallow_depth_threshold must be positive")
        if self.mixed_concerns_min_domains < 2:
            raise ValueError("mixed_concerns_min_domains must be at least 2")
        if self.rerender_min_non_readers < 1:
            raise ValueError("rerender_min_non_readers must be at least 1")
        if not 0.0 < self.duplicate_similarity_threshold <= 1.0:
            raise ValueError("duplicate_similarity_threshold must be in (0.0, 1.0]")
        if self.duplicate_min_lines < 0:
            raise ValueError("duplicate_min_lines must be non-negative")

        for f in fields(self):
            if f.name.startswith("escalate_") and getattr(self, f.name) < 0:
                raise ValueError(f"{f.name} must be non-negative")

    def escalation_threshold(self, category: str) -> float:
        """Escalation threshold for a category value like ``re-render-cascade``."""
        return float(getattr(self, "escalate_" + category.replace("-", "_")))


@dataclass(frozen=True)
class EvaluatorConfig:
    """Ordinal cut-offs for the design comparison axes.

    Each axis maps a structural proxy onto low/medium/high. Values at or
    above the ``*_high`` cut-off score high, at or above ``*_medium`` score
    medium. Re-render scope is inverted: small scopes score high.
    """

    depth_high: float = 2.0
    depth_medium: float = 1.0
    generality_high: int = 3
    generality_medium: int = 2
    hiding_high: float = 0.9
    hiding_medium: float = 0.6
    rerender_high_max: int = 1
    rerender_medium_max: int = 3

    def __post_init__(self) -> None:
        if self.depth_medium > self.depth_high:
            raise ValueError("depth_medium must not exceed depth_high")
        if self.generality_medium > self.generality_high:
            raise ValueError("generality_medium must not exceed generality_high")
        if not 0.0 <= self.hiding_medium <= self.hiding_high <= 1.0:
            raise ValueError("hiding cut-offs must satisfy 0 <= medium <= high <= 1")
        if not 0 <= self.rerender_high_max <= self.rerender_medium_max:
            raise ValueError("rerender cut-offs must satisfy 0 <= high_max <= medium_max")


DEFAULT_THRESHOLDS = ThresholdConfig()
DEFAULT_EVALUATOR = EvaluatorConfig()


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for analysis execution.

    Attributes:
        workers: Threads used to fan detectors out (1 = run in order)
        include_minor_steps: Append optional MINOR-only steps to refactor plans
        enable_diagnostics: Attach quality diagnostics to analysis reports
        max_findings: Findings shown by the terminal renderer (reports keep all)
        verbosity: Logging verbosity level
        thresholds: Detector thresholds (nested config)
        evaluator: Design comparison cut-offs (nested config)
    """

    workers: int = 1
    include_minor_steps: bool = True
    enable_diagnostics: bool = True
    max_findings: int = 50
    verbosity: Verbosity = "normal"

    thresholds: ThresholdConfig = field(default_factory=ThresholdConfig)
    evaluator: EvaluatorConfig = field(default_factory=EvaluatorConfig)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.workers < 1:
            raise ValueError("workers must be at least 1")
        if self.max_findings < 1:
            raise ValueError("max_findings must be at least 1")
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise ValueError(f"verbosity must be quiet/normal/verbose, got '{self.verbosity}'")


DEFAULT_CONFIG = AnalysisConfig()


def load_config(config_file: Optional[Path] = None, **overrides) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags)

    Returns:
        Validated AnalysisConfig instance

    Raises:
        ConfigurationError: If a config file, env var or value is invalid
    """
    merged: dict = {}

    global_config = Path.home() / ".depth-lens.toml"
    if global_config.exists():
        merged.update(_load_toml_file(global_config))

    project_config = Path.cwd() / "depth-lens.toml"
    if project_config.exists():
        merged.update(_load_toml_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigFileError(config_file, "file not found")
        merged.update(_load_toml_file(config_file))

    merged.update(_load_env_vars())

    # Convert verbosity boolean flags to string
    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    merged.update(overrides)

    for section, section_cls in (("thresholds", ThresholdConfig), ("evaluator", EvaluatorConfig)):
        value = merged.pop(section, None)
        if value is None:
            continue
        if isinstance(value, dict):
            try:
                merged[section] = section_cls(**value)
            except (TypeError, ValueError) as e:
                raise ConfigurationError(f"Invalid [{section}] config: {e}")
        elif isinstance(value, section_cls):
            merged[section] = value
        else:
            raise ConfigurationError(f"Invalid [{section}] config: expected a table")

    try:
        return AnalysisConfig(**merged)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid configuration: {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from DEPTH_LENS_* environment variables.

    Supported environment variables:
        DEPTH_LENS_WORKERS: int
        DEPTH_LENS_INCLUDE_MINOR_STEPS: bool (true/false/1/0)
        DEPTH_LENS_ENABLE_DIAGNOSTICS: bool
        DEPTH_LENS_MAX_FINDINGS: int
        DEPTH_LENS_VERBOSITY: quiet/normal/verbose

    Returns:
        Dict of field_name -> parsed_value for any DEPTH_LENS_* vars found.
    """
    type_hints = get_type_hints(AnalysisConfig)

    result: dict[str, Any] = {}

    for field_name in AnalysisConfig.__dataclass_fields__:
        env_key = f"DEPTH_LENS_{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Returns None for types that cannot be expressed as a single variable
    (nested configs).

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        ConfigFileError: If the file cannot be parsed
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        import tomli as tomllib  # type: ignore[no-redef]

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigFileError(path, str(e))
