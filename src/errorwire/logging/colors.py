"""ANSI color codes for terminal log output.

All colors use the 256-color palette.
"""

RESET = "\033[0m"

RED = "\033[38;5;196m"
YELLOW = "\033[38;5;226m"
LIGHT_BLUE = "\033[38;5;153m"
CYAN = "\033[38;5;51m"
MAGENTA = "\033[38;5;201m"

__all__ = [
    "RESET",
    "RED",
    "YELLOW",
    "LIGHT_BLUE",
    "CYAN",
    "MAGENTA",
]
