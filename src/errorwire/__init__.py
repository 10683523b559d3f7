"""errorwire - Move exceptions across process, log and network boundaries.

Serialize any exception (or arbitrary object) into plain JSON-safe data and
rebuild a live exception of the right class on the other side.

Usage:
    from errorwire import deserialize, serialize

    payload = serialize(exc)            # dicts, lists and primitives
    error = deserialize(payload)        # live exception again
"""

from errorwire.codec import ErrorCodec
from errorwire.errors import (
    ConfigError,
    DuplicateConstructorError,
    IncompatibleConstructorError,
    WireError,
)
from errorwire.registry import (
    ConstructorRegistry,
    get_constructor_registry,
    register_error_constructor,
)
from errorwire.serde import NonError, deserialize, is_error_like, serialize

__version__ = "1.0.0"
__all__ = [
    "__version__",
    # Operations
    "serialize",
    "deserialize",
    "is_error_like",
    "register_error_constructor",
    # Types
    "NonError",
    "ErrorCodec",
    "ConstructorRegistry",
    "get_constructor_registry",
    # Errors
    "WireError",
    "DuplicateConstructorError",
    "IncompatibleConstructorError",
    "ConfigError",
]
