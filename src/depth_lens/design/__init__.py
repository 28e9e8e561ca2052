"""Comparative design evaluation."""

from .evaluator import DesignComparison, RankedOption, evaluate, score_option
from .options import AXES, DesignOption, Level, ScoreVector, parse_design_options

__all__ = [
    "AXES",
    "DesignComparison",
    "DesignOption",
    "Level",
    "RankedOption",
    "ScoreVector",
    "evaluate",
    "parse_design_options",
    "score_option",
]
