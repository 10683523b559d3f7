"""Circular-safe tree walk shared by serialize and deserialize.

``seen`` holds the ancestors of the node being walked, compared by
identity. Each branch gets its own copy, so two siblings that point at the
same object both receive a full copy and only true back-references become
the circular marker.
"""

import logging
import threading
from collections.abc import MutableMapping
from dataclasses import dataclass
from typing import Any

from errorwire.registry import ConstructorRegistry

from .non_error import NonError
from .shapes import (
    BUFFER_MARKER,
    CIRCULAR_MARKER,
    ERROR_FIELDS,
    STREAM_MARKER,
    coerce_leaf,
    get_field,
    is_array_like,
    is_buffer_like,
    is_error_like,
    is_leaf_convertible,
    is_primitive,
    is_stream_like,
    iter_own_items,
)

logger = logging.getLogger(__name__)

DEFAULT_HOOK_NAME = "to_dict"

_DROP = object()

# ids of objects whose conversion hook is currently running
_hook_state = threading.local()

# Exception attributes with special setters; payload keys never overwrite them
_PROTECTED_EXCEPTION_ATTRIBUTES = frozenset(
    {"__class__"}
    | {name for name, attr in vars(BaseException).items() if hasattr(attr, "__set__")}
)


@dataclass(frozen=True)
class WalkOptions:
    """Settings that stay fixed for a whole walk."""

    serialize: bool
    max_depth: int | None = None
    use_custom_conversion: bool = False
    hook_name: str = DEFAULT_HOOK_NAME
    registry: ConstructorRegistry | None = None


def _running_hooks() -> set[int]:
    running = getattr(_hook_state, "ids", None)
    if running is None:
        running = _hook_state.ids = set()
    return running


def _custom_hook(source: Any, hook_name: str) -> Any:
    if id(source) in _running_hooks():
        return None
    try:
        hook = getattr(source, hook_name, None)
    except Exception:  # noqa: BLE001
        return None
    return hook if callable(hook) else None


def _call_hook(source: Any, hook: Any) -> Any:
    running = _running_hooks()
    running.add(id(source))
    try:
        return hook()
    finally:
        running.discard(id(source))


def _is_ancestor(value: Any, seen: list[Any]) -> bool:
    return any(ancestor is value for ancestor in seen)


def _assign(target: Any, key: Any, value: Any) -> None:
    """Store ``value`` under ``key``; failures skip the key."""
    try:
        if isinstance(target, list):
            target.append(value)
        elif isinstance(target, MutableMapping):
            target[key if isinstance(key, str) else str(key)] = value
        elif isinstance(target, BaseException):
            if key in _PROTECTED_EXCEPTION_ATTRIBUTES:
                logger.debug("Skipped protected attribute %r on %s", key, type(target).__name__)
                return
            setattr(target, key, value)
            _link_exception_field(target, key, value)
        else:
            setattr(target, key, value)
    except (AttributeError, TypeError, ValueError) as e:
        logger.debug("Skipped %r on %s: %s", key, type(target).__name__, e)


def _link_exception_field(target: BaseException, key: str, value: Any) -> None:
    if key == "cause" and isinstance(value, BaseException):
        target.__cause__ = value
    elif key == "message" and isinstance(value, str) and not target.args:
        target.args = (value,)


def _convert(value: Any, seen: list[Any], depth: int, options: WalkOptions) -> Any:
    """Convert one child value; returns ``_DROP`` for callables."""
    if is_buffer_like(value):
        return BUFFER_MARKER
    if is_stream_like(value):
        return STREAM_MARKER
    if callable(value):
        return _DROP
    if is_leaf_convertible(value):
        return coerce_leaf(value)
    if is_primitive(value):
        return value
    if _is_ancestor(value, seen):
        return CIRCULAR_MARKER
    return walk(value, seen=list(seen), depth=depth + 1, options=options)


def new_error(
    source: Any,
    *,
    seen: list[Any],
    depth: int,
    options: WalkOptions,
    message: str | None = None,
) -> BaseException:
    """Build the destination exception for an error-shaped ``source``.

    Exception groups cannot exist without members, so their sub-errors are
    rebuilt first and handed to the constructor.
    """
    registry = options.registry
    if registry is None:
        msg = "A constructor registry is required to rebuild errors"
        raise ValueError(msg)

    name = get_field(source, "name")
    name = name if isinstance(name, str) else None

    errors = None
    within_depth = options.max_depth is None or depth < options.max_depth
    if within_depth and registry.is_aggregate(name):
        raw_errors = get_field(source, "errors")
        if is_array_like(raw_errors):
            rebuilt = walk(raw_errors, seen=[*seen, source], depth=depth + 1, options=options)
            errors = [item if isinstance(item, BaseException) else NonError(item) for item in rebuilt]

    return registry.create(name, message, errors)


def walk(
    source: Any,
    *,
    seen: list[Any],
    depth: int,
    options: WalkOptions,
    target: Any = None,
) -> Any:
    """Copy ``source`` into ``target``, breaking cycles.

    Args:
        source: Object to walk (mapping, sequence, exception or plain object)
        seen: Ancestors of ``source`` on the current path
        depth: Depth of ``source`` below the walk root
        options: Walk settings
        target: Destination container; allocated from ``source`` when None

    Returns:
        The filled destination, or the conversion hook's result as returned
        by the hook (not walked further)
    """
    if target is None:
        if is_array_like(source):
            target = []
        elif not options.serialize and is_error_like(source):
            target = new_error(source, seen=seen, depth=depth, options=options)
        else:
            target = {}

    seen.append(source)

    if options.max_depth is not None and depth >= options.max_depth:
        logger.debug("Depth limit %d reached at %s", options.max_depth, type(source).__name__)
        return target

    if options.use_custom_conversion:
        hook = _custom_hook(source, options.hook_name)
        if hook is not None:
            return _call_hook(source, hook)

    installs_fields = options.serialize or isinstance(target, BaseException)

    for key, value in iter_own_items(source):
        if installs_fields and key in ERROR_FIELDS and get_field(source, key) is not None:
            continue

        converted = _convert(value, seen, depth, options)
        if converted is _DROP:
            if not isinstance(target, list):
                continue
            converted = None
        _assign(target, key, converted)

    if installs_fields:
        for field_name in ERROR_FIELDS:
            if field_name == "errors" and isinstance(target, BaseExceptionGroup):
                continue
            value = get_field(source, field_name)
            if value is None:
                continue
            converted = _convert(value, seen, depth, options)
            if converted is not _DROP:
                _assign(target, field_name, converted)

    return target
