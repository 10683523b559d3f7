"""Shared types for errorwire.

Import from here rather than submodules:
    from errorwire.types import LogLevel, ValidationResult
"""

from .enums import LogFormat, LogLevel
from .validation import ValidationIssue, ValidationResult

__all__ = [
    # Enums
    "LogLevel",
    "LogFormat",
    # Validation
    "ValidationIssue",
    "ValidationResult",
]
