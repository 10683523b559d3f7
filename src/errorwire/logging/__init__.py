"""errorwire Logging - structured and colored log output."""

from .colors import CYAN, LIGHT_BLUE, MAGENTA, RED, RESET, YELLOW
from .logger import (
    ROOT_LOGGER_NAME,
    ColoredLogFormatter,
    StructuredLogFormatter,
    WireLogger,
    configure_logging,
    get_logger,
    reset_loggers,
)

__all__ = [
    # Logger classes
    "WireLogger",
    "StructuredLogFormatter",
    "ColoredLogFormatter",
    "ROOT_LOGGER_NAME",
    # Functions
    "configure_logging",
    "get_logger",
    "reset_loggers",
    # Colors
    "RESET",
    "RED",
    "YELLOW",
    "LIGHT_BLUE",
    "CYAN",
    "MAGENTA",
]
