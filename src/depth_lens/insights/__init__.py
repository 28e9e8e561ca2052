"""Insight engine — detectors, classification, prioritization, reporting."""

from .classifier import CATEGORY_TABLE, classify, classify_finding, classify_findings
from .kernel import InsightKernel
from .models import Category, Evidence, Finding, Severity, Symptom
from .ranking import prioritize, top_priority
from .report import AnalysisReport, AnalysisSummary

__all__ = [
    "Category",
    "Evidence",
    "Finding",
    "Severity",
    "Symptom",
    "CATEGORY_TABLE",
    "classify",
    "classify_finding",
    "classify_findings",
    "prioritize",
    "top_priority",
    "AnalysisReport",
    "AnalysisSummary",
    "InsightKernel",
]
