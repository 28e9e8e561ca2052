"""Comparative design evaluation ("design it twice").

Scores competing interface designs for a module that is not built yet on
four fixed axes, each derived from a structural proxy:

    depth               hidden dependencies / interface size
    generality          distinct call-site shapes served unmodified
    information_hiding  1 - leaked dependencies / all dependencies
    rerender_impact     inverse of re-render scope size (small scope = high)

Options are ranked by summed ordinal score, then by submission order. The
engine never breaks a real conflict on its own: ``tie`` is set whenever the
first-ranked option does not dominate every other option on all axes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from ..config import DEFAULT_EVALUATOR, EvaluatorConfig
from ..exceptions import ValidationError
from ..logging_config import get_logger
from .options import AXES, DesignOption, Level, ScoreVector

logger = get_logger(__name__)


@dataclass(frozen=True)
class RankedOption:
    option: DesignOption
    scores: ScoreVector

    def to_dict(self) -> dict[str, Any]:
        return {"option": self.option.to_dict(), "scores": self.scores.to_dict()}


@dataclass
class DesignComparison:
    """Ranked options plus an explicit tie flag.

    Attributes:
        ranked: Options in rank order
        tie: True when no option wins on every axis
        axis_leaders: Per axis, names of the options holding the best level
        conflicts: Axes on which some other option beats the first-ranked one
    """

    ranked: list[RankedOption]
    tie: bool
    axis_leaders: dict[str, list[str]] = field(default_factory=dict)
    conflicts: tuple[str, ...] = ()

    @property
    def leader(self) -> Optional[RankedOption]:
        return self.ranked[0] if self.ranked else None

    def to_dict(self) -> dict[str, Any]:
        return {
            "ranked": [r.to_dict() for r in self.ranked],
            "tie": self.tie,
            "axisLeaders": {axis: list(names) for axis, names in self.axis_leaders.items()},
            "conflicts": list(self.conflicts),
        }


def _at_least(value: float, high: float, medium: float) -> Level:
    if value >= high:
        return Level.HIGH
    if value >= medium:
        return Level.MEDIUM
    return Level.LOW


def score_option(option: DesignOption, config: Optional[EvaluatorConfig] = None) -> ScoreVector:
    """Score one option on the four axes."""
    config = config or DEFAULT_EVALUATOR

    hidden = len(option.dependencies) - option.leaked_count
    depth_value = hidden / max(option.size, 1)

    total_deps = len(option.dependencies)
    hiding_value = 1.0 - option.leaked_count / total_deps if total_deps else 1.0

    scope = len(set(option.rerender_scope))
    if scope <= config.rerender_high_max:
        rerender = Level.HIGH
    elif scope <= config.rerender_medium_max:
        rerender = Level.MEDIUM
    else:
        rerender = Level.LOW

    return ScoreVector(
        depth=_at_least(depth_value, config.depth_high, config.depth_medium),
        generality=_at_least(
            option.call_site_shapes, config.generality_high, config.generality_medium
        ),
        information_hiding=_at_least(hiding_value, config.hiding_high, config.hiding_medium),
        rerender_impact=rerender,
        raw={
            "depth": round(depth_value, 4),
            "call_site_shapes": float(option.call_site_shapes),
            "information_hiding": round(hiding_value, 4),
            "rerender_scope": float(scope),
        },
    )


def _validate(options: tuple[DesignOption, ...]) -> None:
    problems = []
    if len(options) < 2:
        problems.append(f"at least two options are needed for a comparison, got {len(options)}")
    names = [o.name for o in options]
    duplicates = sorted({n for n in names if names.count(n) > 1})
    if duplicates:
        problems.append(f"option names must be unique: {', '.join(duplicates)}")
    for o in options:
        if o.size < 0:
            problems.append(f"{o.name}: interface size must be non-negative")
        if o.call_site_shapes < 0:
            problems.append(f"{o.name}: call_site_shapes must be non-negative")
    if problems:
        raise ValidationError(problems, subject="design options")


def evaluate(*options: DesignOption, config: Optional[EvaluatorConfig] = None) -> DesignComparison:
    """Rank competing designs; report a tie instead of forcing a winner.

    Raises:
        ValidationError: Fewer than two options, or duplicate names
    """
    _validate(options)

    scored = [RankedOption(o, score_option(o, config)) for o in options]
    # sorted() is stable: equal totals keep submission order
    ranked = sorted(scored, key=lambda r: -r.scores.total)

    leader = ranked[0].scores
    tie = not all(leader.dominates(r.scores) for r in ranked[1:])

    axis_leaders: dict[str, list[str]] = {}
    conflicts = []
    for axis in AXES:
        best = max(getattr(r.scores, axis) for r in ranked)
        axis_leaders[axis] = [r.option.name for r in ranked if getattr(r.scores, axis) == best]
        if getattr(leader, axis) < best:
            conflicts.append(axis)

    logger.debug(
        f"Compared {len(ranked)} designs: leader={ranked[0].option.name} tie={tie} "
        f"conflicts={conflicts}"
    )
    return DesignComparison(
        ranked=ranked, tie=tie, axis_leaders=axis_leaders, conflicts=tuple(conflicts)
    )
