"""errorwire Constructor Registry - error name to exception class lookup."""

from .registry import (
    ConstructorRegistry,
    ErrorConstructor,
    get_constructor_registry,
    register_error_constructor,
)
from .seeds import HOST_ERROR_KINDS, builtin_error_kinds, host_error_kinds, import_dotted

__all__ = [
    # Registry
    "ConstructorRegistry",
    "ErrorConstructor",
    "get_constructor_registry",
    "register_error_constructor",
    # Seeds
    "HOST_ERROR_KINDS",
    "builtin_error_kinds",
    "host_error_kinds",
    "import_dotted",
]
