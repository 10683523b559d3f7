"""deserialize: plain structures back to live exceptions."""

from typing import Any

from errorwire.registry import ConstructorRegistry, get_constructor_registry

from .non_error import NonError
from .shapes import get_field, is_minimum_viable_error
from .walker import WalkOptions, new_error, walk


def deserialize(
    value: Any,
    *,
    max_depth: int | None = None,
    registry: ConstructorRegistry | None = None,
) -> BaseException:
    """Rebuild an exception from a serialized value.

    Live exceptions are returned as is. Objects with a string ``message``
    become an instance of the class registered under their ``name`` (plain
    ``Exception`` when unknown), with nested error-shaped values rebuilt too.
    Anything else becomes a :class:`NonError`. Never raises.

    Args:
        value: Output of ``serialize`` (or any value)
        max_depth: Levels to rebuild below the root; None rebuilds everything
        registry: Constructor registry (defaults to the shared one)

    Returns:
        An exception instance
    """
    if isinstance(value, BaseException):
        return value

    if not is_minimum_viable_error(value):
        return NonError(value)

    options = WalkOptions(
        serialize=False,
        max_depth=max_depth,
        registry=registry or get_constructor_registry(),
    )
    target = new_error(value, seen=[], depth=0, options=options, message=get_field(value, "message"))
    return walk(value, seen=[], depth=0, options=options, target=target)
