"""Base exception for depth-lens."""

from typing import Any, Dict, Optional

from .taxonomy import ErrorCode


class DepthLensError(Exception):
    """Base exception for all depth-lens errors."""

    code: Optional[ErrorCode] = None

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, str]] = None,
        code: Optional[ErrorCode] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        if code is not None:
            self.code = code

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message

    def to_json(self) -> Dict[str, Any]:
        """Structured logging format."""
        return {
            "error_code": self.code.value if self.code else None,
            "message": self.message,
            "details": dict(self.details),
        }
