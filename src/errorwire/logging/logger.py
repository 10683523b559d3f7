"""errorwire Logging - Structured logging with trace context.

Core modules log through ``logging.getLogger(__name__)`` or :func:`get_logger`;
nothing is printed until a host calls :func:`configure_logging`.

Usage:
    from errorwire.logging import configure_logging, get_logger

    configure_logging(LoggingConfig(level=LogLevel.DEBUG))
    logger = get_logger("codec")
    logger.debug("Decoded payload", size=42)
"""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any, TextIO

from opentelemetry import trace

from errorwire.config.models import LoggingConfig
from errorwire.types import LogFormat, LogLevel

from .colors import CYAN, LIGHT_BLUE, MAGENTA, RED, RESET, YELLOW

ROOT_LOGGER_NAME = "errorwire"

_RESERVED_RECORD_FIELDS = frozenset(
    {
        "name", "msg", "args", "created", "filename", "funcName",
        "levelname", "levelno", "lineno", "module", "msecs",
        "pathname", "process", "processName", "relativeCreated",
        "stack_info", "exc_info", "exc_text", "thread", "threadName",
        "message", "taskName",
    }
)

_LEVELS = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _RESERVED_RECORD_FIELDS
    }


class StructuredLogFormatter(logging.Formatter):
    """JSON formatter with trace context injection.

    Formats log records as JSON with:
    - timestamp (ISO 8601)
    - level
    - component (logger name)
    - message
    - trace_id / span_id (when a span is recording)
    - additional fields from extra
    """

    def __init__(self, include_trace_context: bool = True):
        """Initialize formatter.

        Args:
            include_trace_context: Whether to add trace_id/span_id
        """
        super().__init__()
        self.include_trace_context = include_trace_context

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "component": record.name,
            "message": record.getMessage(),
        }

        if self.include_trace_context:
            span = trace.get_current_span()
            if span and span.is_recording():
                ctx = span.get_span_context()
                if ctx.is_valid:
                    log_data["trace_id"] = format(ctx.trace_id, "032x")
                    log_data["span_id"] = format(ctx.span_id, "016x")

        log_data.update(_extra_fields(record))

        if record.exc_info:
            log_data["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class ColoredLogFormatter(logging.Formatter):
    """Terminal formatter: ``[COMPONENT] message {extra}`` in ANSI colors."""

    _level_colors = {
        logging.DEBUG: LIGHT_BLUE,
        logging.INFO: CYAN,
        logging.WARNING: YELLOW,
        logging.ERROR: RED,
        logging.CRITICAL: RED,
    }

    def __init__(self, truncate_at: int = 200):
        super().__init__()
        self.truncate_at = truncate_at

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as a colored line."""
        color = self._level_colors.get(record.levelno, RESET)
        component = record.name.removeprefix(f"{ROOT_LOGGER_NAME}.").upper()
        output = f"{MAGENTA}[{component}]{RESET} {color}{record.getMessage()}{RESET}"

        extra = _extra_fields(record)
        if extra:
            context_str = str(extra)
            if len(context_str) > self.truncate_at:
                context_str = context_str[: self.truncate_at] + "..."
            output += f" {LIGHT_BLUE}{context_str}{RESET}"

        if record.exc_info:
            output += "\n" + self.formatException(record.exc_info)

        return output


class WireLogger:
    """Structured logger wrapper.

    Wraps Python logging so extra fields are passed as keyword arguments.
    """

    def __init__(self, name: str):
        """Initialize logger.

        Args:
            name: Component name, nested under the ``errorwire`` logger
        """
        self._logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")

    def _log(self, level: int, message: str, **kwargs: Any) -> None:
        if self._logger.isEnabledFor(level):
            self._logger.log(level, message, extra=kwargs)

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log debug message."""
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        """Log info message."""
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log warning message."""
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        """Log error message."""
        self._log(logging.ERROR, message, **kwargs)

    def exception(self, message: str, **kwargs: Any) -> None:
        """Log exception with traceback."""
        self._logger.exception(message, extra=kwargs)


# Logger cache
_loggers: dict[str, WireLogger] = {}


def get_logger(name: str) -> WireLogger:
    """Get or create a structured logger.

    Args:
        name: Logger name (component name)

    Returns:
        WireLogger instance
    """
    if name not in _loggers:
        _loggers[name] = WireLogger(name)
    return _loggers[name]


def reset_loggers() -> None:
    """Reset logger cache (for testing)."""
    _loggers.clear()


def configure_logging(
    config: LoggingConfig | None = None,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Attach a single handler to the ``errorwire`` logger.

    Calling it again replaces the previous handler.

    Args:
        config: Logging configuration (defaults to LoggingConfig())
        stream: Output stream (defaults to stderr)

    Returns:
        The configured ``errorwire`` logger
    """
    config = config or LoggingConfig()

    handler = logging.StreamHandler(stream or sys.stderr)
    if config.format == LogFormat.JSON:
        handler.setFormatter(
            StructuredLogFormatter(include_trace_context=config.include_trace_context)
        )
    else:
        handler.setFormatter(ColoredLogFormatter(truncate_at=config.truncate_at))

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(_LEVELS.get(config.level, logging.INFO))
    root.propagate = False
    return root
