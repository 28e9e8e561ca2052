"""Output formatters for depth-lens."""

from .base import BaseFormatter
from .json_formatter import JsonFormatter
from .rich_formatter import RichFormatter


def get_formatter(name: str, max_findings: int = 50) -> BaseFormatter:
    """Get a formatter instance by name.

    Args:
        name: One of "rich", "json"
        max_findings: Rows shown by the terminal renderer (JSON keeps all)

    Raises:
        ValueError: If name is not recognized
    """
    if name == "rich":
        return RichFormatter(max_findings=max_findings)
    if name == "json":
        return JsonFormatter()
    raise ValueError(f"Unknown formatter: {name!r}. Choose from: json, rich")


__all__ = [
    "BaseFormatter",
    "RichFormatter",
    "JsonFormatter",
    "get_formatter",
]
