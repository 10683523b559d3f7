"""serialize: any value to a plain, JSON-safe structure."""

from typing import Any

from .shapes import (
    BUFFER_MARKER,
    STREAM_MARKER,
    coerce_leaf,
    function_name,
    is_buffer_like,
    is_leaf_convertible,
    is_primitive,
    is_stream_like,
)
from .walker import DEFAULT_HOOK_NAME, WalkOptions, walk


def serialize(
    value: Any,
    *,
    max_depth: int | None = None,
    use_custom_conversion: bool = True,
    hook_name: str = DEFAULT_HOOK_NAME,
) -> Any:
    """Convert ``value`` into plain dicts, lists and primitives.

    Exceptions and error-shaped objects keep ``name``, ``message``,
    ``stack``, ``code``, ``cause`` and ``errors`` next to their public
    attributes. Back-references to an ancestor become ``"[Circular]"``,
    binary payloads ``"[object Buffer]"``, streams ``"[object Stream]"``;
    callables are dropped.

    Args:
        value: Anything
        max_depth: Levels to keep below the root; None keeps everything
        use_custom_conversion: Honor a ``to_dict``-style hook on objects
        hook_name: Attribute name of the conversion hook

    Returns:
        A structure ``json.dumps`` can encode. A conversion hook's result is
        returned as the hook built it, so the hook is responsible for keeping
        it JSON-safe.

    Example:
        >>> serialize(lambda: None)
        '[Function: anonymous]'
    """
    if is_primitive(value):
        return value
    if is_leaf_convertible(value):
        return coerce_leaf(value)
    if is_buffer_like(value):
        return BUFFER_MARKER
    if is_stream_like(value):
        return STREAM_MARKER
    if callable(value):
        return f"[Function: {function_name(value)}]"

    options = WalkOptions(
        serialize=True,
        max_depth=max_depth,
        use_custom_conversion=use_custom_conversion,
        hook_name=hook_name,
    )
    return walk(value, seen=[], depth=0, options=options)
