"""
depth-lens - Structural complexity analysis and refactor planning

Inspects an abstract model of a program's modules (interfaces, state,
dependencies, composition) and reports structural complexity: shallow
modules, leaked abstractions, wrong state boundaries, mixed concerns,
re-render cascades and tactical debt. Findings are classified, ranked,
and turned into incremental refactor plans.
"""

__version__ = "0.3.0"

from .api import analyze, compare_designs, plan_refactor
from .design import DesignComparison, DesignOption, evaluate
from .insights import Finding, InsightKernel, Severity
from .insights.report import AnalysisReport
from .model import ModuleModel
from .planning import RefactorPlan, plan

__all__ = [
    "analyze",  # Main entry point
    "plan_refactor",
    "compare_designs",
    "InsightKernel",  # Advanced usage (direct kernel access)
    "AnalysisReport",
    "Finding",
    "Severity",
    "ModuleModel",
    "DesignOption",
    "DesignComparison",
    "evaluate",
    "RefactorPlan",
    "plan",
]
