"""Refactor plan generation."""

from .planner import CO_RESOLUTION, REMEDIATION, RefactorPlan, RefactorStep, co_resolves, plan, step_for

__all__ = [
    "CO_RESOLUTION",
    "REMEDIATION",
    "RefactorPlan",
    "RefactorStep",
    "co_resolves",
    "plan",
    "step_for",
]
