"""Constructor Registry - maps error names to exception classes."""

from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator, Sequence

from errorwire.errors import create_error
from errorwire.logging import get_logger

from .seeds import builtin_error_kinds, host_error_kinds

ErrorConstructor = type[BaseException]

logger = get_logger("registry")


def _try_build(constructor: ErrorConstructor) -> object:
    """Instantiate ``constructor`` the way a zero-argument check would."""
    if isinstance(constructor, type) and issubclass(constructor, BaseExceptionGroup):
        return constructor("", [Exception()])
    return constructor()


class ConstructorRegistry:
    """Registry of exception classes, keyed by class name.

    Consulted by deserialization to rebuild the right exception kind from a
    serialized ``name``. Entries are only ever added; a name resolves to at
    most one class.
    """

    def __init__(self, seed: bool = True):
        """Initialize the registry.

        Args:
            seed: If True, preload the built-in and host exception kinds
        """
        self._constructors: dict[str, ErrorConstructor] = {}
        self._lock = threading.RLock()
        if seed:
            self._seed(builtin_error_kinds())
            self._seed(host_error_kinds())

    def _seed(self, kinds: Iterable[ErrorConstructor]) -> None:
        for constructor in kinds:
            name = constructor.__name__
            if name in self._constructors:
                continue
            try:
                _try_build(constructor)
            except Exception:  # noqa: BLE001 - incompatible kinds are skipped
                logger.debug("Skipping seed error kind", constructor=name)
                continue
            self._constructors[name] = constructor

    def lookup(self, name: str) -> ErrorConstructor | None:
        """Get the class registered under ``name``.

        Returns:
            The exception class, or None when unknown
        """
        return self._constructors.get(name)

    def register(self, constructor: ErrorConstructor) -> None:
        """Add an exception class, keyed by its ``__name__``.

        Args:
            constructor: Exception class that can be built without arguments

        Raises:
            DuplicateConstructorError: If the name is already registered
            IncompatibleConstructorError: If the class cannot be instantiated
                without arguments, or does not build an exception
        """
        name = getattr(constructor, "__name__", None) or repr(constructor)

        with self._lock:
            if name in self._constructors:
                raise create_error("CONSTRUCTOR_DUPLICATE", name=name)

            if not isinstance(constructor, type):
                raise create_error("CONSTRUCTOR_INCOMPATIBLE", name=name)

            try:
                instance = _try_build(constructor)
            except Exception as e:
                raise create_error("CONSTRUCTOR_INCOMPATIBLE", cause=e, name=name) from e

            if not isinstance(instance, BaseException):
                raise create_error("CONSTRUCTOR_INCOMPATIBLE", name=name)

            self._constructors[name] = constructor

        logger.debug("Registered error constructor", constructor=name)

    def is_aggregate(self, name: str | None) -> bool:
        """Check whether ``name`` resolves to an exception group kind."""
        constructor = self.lookup(name) if name else None
        return constructor is not None and issubclass(constructor, BaseExceptionGroup)

    def create(
        self,
        name: str | None,
        message: str | None = None,
        errors: Sequence[BaseException] | None = None,
    ) -> BaseException:
        """Build a fresh exception of the kind registered under ``name``.

        Unknown names build a plain ``Exception``. Exception groups need at
        least one sub-exception; without one the plain kind is used too.

        Args:
            name: Serialized error name
            message: Optional message
            errors: Already rebuilt sub-exceptions, for exception groups

        Returns:
            New exception instance
        """
        constructor = (self.lookup(name) if name else None) or Exception

        if issubclass(constructor, BaseExceptionGroup):
            if errors:
                try:
                    return constructor(message or "", list(errors))
                except (TypeError, ValueError):
                    logger.debug("Cannot build exception group", constructor=name)
            constructor = Exception

        if message is not None:
            try:
                return constructor(message)
            except Exception:  # noqa: BLE001
                logger.debug("Constructor rejected a message argument", constructor=name)

        try:
            return constructor()
        except Exception:  # noqa: BLE001
            logger.debug("Constructor failed, using Exception", constructor=name)
            return Exception() if message is None else Exception(message)

    def names(self) -> list[str]:
        """List all registered names."""
        return list(self._constructors.keys())

    def items(self) -> list[tuple[str, ErrorConstructor]]:
        """List all (name, class) pairs."""
        return list(self._constructors.items())

    def __contains__(self, name: object) -> bool:
        return name in self._constructors

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self._constructors)


# Convenience singleton
_default_registry: ConstructorRegistry | None = None
_default_lock = threading.Lock()


def get_constructor_registry() -> ConstructorRegistry:
    """Get default constructor registry singleton."""
    global _default_registry  # noqa: PLW0603
    if _default_registry is None:
        with _default_lock:
            if _default_registry is None:
                _default_registry = ConstructorRegistry()
    return _default_registry


def register_error_constructor(constructor: ErrorConstructor) -> None:
    """Register an exception class on the default registry.

    Args:
        constructor: Exception class that can be built without arguments
    """
    get_constructor_registry().register(constructor)
