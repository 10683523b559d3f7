"""Structural predicates and field readers.

Values are recognized by shape, not by class: a mapping carrying string
``name``, ``message`` and ``stack`` entries is as error-like as a live
exception. Exceptions expose the six error fields through readers that map
Python's exception model onto the wire vocabulary:

- ``name``: an explicit ``name`` attribute, else the class name
- ``message``: an explicit ``message``, else the single string argument
- ``stack``: an explicit ``stack``, else the formatted traceback
- ``code``: an explicit ``code``, else the errno symbol for ``OSError``
- ``cause``: an explicit ``cause``, else ``__cause__``
- ``errors``: the sub-exceptions of an exception group
"""

import array
import dataclasses
import errno
import io
import traceback
import types
from collections.abc import Callable, Iterator, Mapping
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from pathlib import PurePath
from typing import Any
from uuid import UUID

ERROR_FIELDS = ("name", "message", "stack", "code", "cause", "errors")

BUFFER_MARKER = "[object Buffer]"
STREAM_MARKER = "[object Stream]"
CIRCULAR_MARKER = "[Circular]"

_PRIMITIVE_TYPES = (str, int, float, complex)
_ARRAY_TYPES = (list, tuple, set, frozenset)
_BUFFER_TYPES = (bytes, bytearray, memoryview, array.array)
_STREAM_TYPES = (io.IOBase, types.GeneratorType, types.AsyncGeneratorType)
_LEAF_TYPES = (datetime, date, time, Enum, UUID, Decimal, PurePath)


def is_primitive(value: Any) -> bool:
    """Return True for values copied verbatim (None, bool, numbers, str)."""
    return value is None or isinstance(value, _PRIMITIVE_TYPES)


def is_array_like(value: Any) -> bool:
    """Return True for sequence containers that serialize to a list."""
    return isinstance(value, _ARRAY_TYPES)


def is_buffer_like(value: Any) -> bool:
    """Return True for binary payloads."""
    return isinstance(value, _BUFFER_TYPES)


def is_stream_like(value: Any) -> bool:
    """Return True for file objects, generators and instances with a callable ``pipe``."""
    if isinstance(value, _STREAM_TYPES):
        return True
    if is_primitive(value) or isinstance(value, (Mapping, type)):
        return False
    return callable(_safe_getattr(value, "pipe"))


def is_leaf_convertible(value: Any) -> bool:
    """Return True for values that carry their own JSON form."""
    return isinstance(value, _LEAF_TYPES)


def coerce_leaf(value: Any) -> Any:
    """Convert a leaf value to its JSON form.

    Dates and times become ISO 8601 text, enums their value, and UUIDs,
    decimals and paths their string form.
    """
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, Enum):
        inner = value.value
        return inner if is_primitive(inner) else str(inner)
    return str(value)


def function_name(value: Callable[..., Any]) -> str:
    """Return the display name of a callable, or "anonymous"."""
    name = getattr(value, "__name__", None)
    if not isinstance(name, str) or not name or name == "<lambda>":
        return "anonymous"
    return name


def _safe_getattr(value: Any, name: str) -> Any:
    try:
        return getattr(value, name, None)
    except Exception:  # noqa: BLE001 - properties may raise anything
        return None


def _own(exc: BaseException, name: str) -> Any:
    return getattr(exc, "__dict__", {}).get(name)


def _exception_name(exc: BaseException) -> str:
    own = _own(exc, "name")
    return own if isinstance(own, str) else type(exc).__name__


def _exception_message(exc: BaseException) -> str:
    own = _own(exc, "message")
    if isinstance(own, str):
        return own
    if isinstance(exc, BaseExceptionGroup):
        return exc.message
    if len(exc.args) == 1 and isinstance(exc.args[0], str):
        return exc.args[0]
    try:
        return str(exc)
    except Exception:  # noqa: BLE001
        return ""


def _exception_stack(exc: BaseException) -> str:
    own = _own(exc, "stack")
    if isinstance(own, str):
        return own
    try:
        return "".join(traceback.format_exception(exc, chain=False))
    except Exception:  # noqa: BLE001
        return f"{type(exc).__name__}: {_exception_message(exc)}\n"


def _exception_code(exc: BaseException) -> Any:
    code = _safe_getattr(exc, "code")
    if code is None and isinstance(exc, OSError) and exc.errno is not None:
        return errno.errorcode.get(exc.errno, exc.errno)
    return code


def _exception_cause(exc: BaseException) -> Any:
    own = _own(exc, "cause")
    return own if own is not None else exc.__cause__


def _exception_errors(exc: BaseException) -> Any:
    if isinstance(exc, BaseExceptionGroup):
        return list(exc.exceptions)
    return _own(exc, "errors")


_EXCEPTION_READERS: dict[str, Callable[[BaseException], Any]] = {
    "name": _exception_name,
    "message": _exception_message,
    "stack": _exception_stack,
    "code": _exception_code,
    "cause": _exception_cause,
    "errors": _exception_errors,
}


def get_field(value: Any, name: str) -> Any:
    """Read an error field from a mapping, an exception or a plain object.

    Never raises; unreadable fields read as None.
    """
    if is_primitive(value) or is_array_like(value):
        return None
    if isinstance(value, Mapping):
        try:
            return value.get(name)
        except Exception:  # noqa: BLE001
            return None
    if isinstance(value, BaseException):
        reader = _EXCEPTION_READERS.get(name)
        if reader is not None:
            return reader(value)
    return _safe_getattr(value, name)


def is_error_like(value: Any) -> bool:
    """Return True when ``value`` exposes string ``name``, ``message`` and ``stack``."""
    if isinstance(value, BaseException):
        return True
    return all(isinstance(get_field(value, key), str) for key in ("name", "message", "stack"))


def is_minimum_viable_error(value: Any) -> bool:
    """Return True for non-sequence objects exposing a string ``message``."""
    if is_primitive(value) or is_array_like(value):
        return False
    return isinstance(get_field(value, "message"), str)


def iter_own_items(value: Any) -> Iterator[tuple[Any, Any]]:
    """Yield the own public key/value pairs of ``value``.

    Mappings yield their items, sequences their positions, other objects
    their public instance attributes (or dataclass fields when slotted).
    """
    if isinstance(value, Mapping):
        yield from list(value.items())
        return
    if is_array_like(value):
        yield from enumerate(list(value))
        return

    own = getattr(value, "__dict__", None)
    if isinstance(own, dict):
        for key, item in list(own.items()):
            if isinstance(key, str) and not key.startswith("_"):
                yield key, item
        return

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        for f in dataclasses.fields(value):
            yield f.name, _safe_getattr(value, f.name)
