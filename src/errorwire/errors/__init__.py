"""errorwire error handling - Structured errors with context."""

from .errors import (
    ConfigError,
    DuplicateConstructorError,
    ErrorCategory,
    ErrorTemplate,
    IncompatibleConstructorError,
    WireError,
)
from .factory import ErrorFactory, create_error, get_error_factory
from .templates import ErrorTemplateRegistry

__all__ = [
    # Core error types
    "WireError",
    "ErrorCategory",
    "ErrorTemplate",
    "DuplicateConstructorError",
    "IncompatibleConstructorError",
    "ConfigError",
    # Templates and factory
    "ErrorTemplateRegistry",
    "ErrorFactory",
    # Convenience functions
    "get_error_factory",
    "create_error",
]
