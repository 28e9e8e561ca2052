"""Base formatter interface for depth-lens output rendering."""

from abc import ABC, abstractmethod
from typing import Union

from ..design import DesignComparison
from ..insights.report import AnalysisReport
from ..planning import RefactorPlan

Result = Union[AnalysisReport, RefactorPlan, DesignComparison]


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def render(self, result: Result) -> None:
        """Write the rendered result to the terminal."""

    @abstractmethod
    def format(self, result: Result) -> str:
        """Return formatted string representation of a result."""
