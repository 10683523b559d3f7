"""Discovery of the exception kinds a fresh registry starts with."""

import builtins
import importlib
import logging
from collections.abc import Iterator

logger = logging.getLogger(__name__)

# Host kinds are optional: missing modules or kinds that need arguments are skipped.
HOST_ERROR_KINDS = (
    "asyncio.CancelledError",
    "asyncio.InvalidStateError",
    "asyncio.IncompleteReadError",
    "concurrent.futures.BrokenExecutor",
    "subprocess.SubprocessError",
    "subprocess.CalledProcessError",
    "json.JSONDecodeError",
    "http.client.HTTPException",
    "ssl.SSLError",
    "socket.herror",
    "socket.gaierror",
    "zipfile.BadZipFile",
    "xml.parsers.expat.ExpatError",
)


def import_dotted(path: str) -> object:
    """Import ``package.module.Attribute`` and return the attribute.

    Raises:
        ImportError: If the module cannot be imported
        AttributeError: If the module has no such attribute
    """
    module_name, _, attribute = path.rpartition(".")
    if not module_name:
        msg = f"Not a dotted path: {path}"
        raise ImportError(msg)
    module = importlib.import_module(module_name)
    return getattr(module, attribute)


def builtin_error_kinds() -> Iterator[type[BaseException]]:
    """Yield every exception class exposed by ``builtins``, in name order.

    Aliases such as ``IOError`` (bound to ``OSError``) are skipped.
    """
    for name in sorted(dir(builtins)):
        candidate = getattr(builtins, name)
        if not isinstance(candidate, type) or candidate.__name__ != name:
            continue
        if issubclass(candidate, BaseException):
            yield candidate


def host_error_kinds(paths: tuple[str, ...] = HOST_ERROR_KINDS) -> Iterator[type[BaseException]]:
    """Yield the host-specific exception classes that exist in this interpreter."""
    for path in paths:
        try:
            candidate = import_dotted(path)
        except (ImportError, AttributeError):
            logger.debug("Skipping unavailable error kind %s", path)
            continue
        if isinstance(candidate, type) and issubclass(candidate, BaseException):
            yield candidate
