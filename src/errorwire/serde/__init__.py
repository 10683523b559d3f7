"""errorwire serde - circular-safe error serialization."""

from .deserializer import deserialize
from .non_error import NonError
from .serializer import serialize
from .shapes import (
    BUFFER_MARKER,
    CIRCULAR_MARKER,
    ERROR_FIELDS,
    STREAM_MARKER,
    get_field,
    is_error_like,
    is_minimum_viable_error,
)
from .walker import DEFAULT_HOOK_NAME, WalkOptions

__all__ = [
    # Operations
    "serialize",
    "deserialize",
    "is_error_like",
    "is_minimum_viable_error",
    "get_field",
    # Types
    "NonError",
    "WalkOptions",
    # Constants
    "ERROR_FIELDS",
    "CIRCULAR_MARKER",
    "BUFFER_MARKER",
    "STREAM_MARKER",
    "DEFAULT_HOOK_NAME",
]
