"""Error taxonomy with structured error codes.

Error Code Convention:
    DL1xx - Module model errors
    DL2xx - Detector registry errors
    DL3xx - Detector execution errors
    DL4xx - Design evaluation errors
    DL5xx - Configuration errors
"""

from enum import Enum


class ErrorCode(Enum):
    """Structured error codes for observability and debugging."""

    # Module model errors (DL1xx)
    DL100 = "DL100"  # Malformed or inconsistent module model
    DL101 = "DL101"  # Model file unreadable or unparseable

    # Registry errors (DL2xx)
    DL200 = "DL200"  # Duplicate detector registration
    DL201 = "DL201"  # Registration into a frozen registry

    # Detector execution errors (DL3xx)
    DL300 = "DL300"  # Detector raised during evaluation
    DL301 = "DL301"  # Analysis cancelled between detectors

    # Design evaluation errors (DL4xx)
    DL400 = "DL400"  # Invalid design option set

    # Configuration errors (DL5xx)
    DL500 = "DL500"  # Invalid configuration value
    DL501 = "DL501"  # Config file missing or unparseable
