"""errorwire error types."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Error source categories."""

    REGISTRY = "REGISTRY"
    CONFIG = "CONFIG"


@dataclass(eq=False)
class WireError(Exception):
    """Structured error with context. Base exception for all errorwire errors."""

    # Identity
    code: str  # e.g., "CONSTRUCTOR_DUPLICATE"
    category: ErrorCategory

    # Messages
    message: str  # Human-readable summary
    detail: str | None = None  # Extended explanation

    # Underlying exception, if any
    cause: BaseException | None = None

    # Metadata
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        """Set Exception message and link the cause."""
        super().__init__(self.message)
        if self.cause is not None:
            self.__cause__ = self.cause

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Serialize for logs and wire payloads.

        Returns:
            Dictionary representation of the error
        """
        return {
            "name": type(self).__name__,
            "code": self.code,
            "category": self.category.value,
            "message": self.message,
            "detail": self.detail,
            "timestamp": self.timestamp.isoformat(),
            "cause": _cause_to_dict(self.cause),
        }


def _cause_to_dict(cause: BaseException | None) -> dict[str, Any] | None:
    if cause is None:
        return None
    if isinstance(cause, WireError):
        return cause.to_dict()
    return {"name": type(cause).__name__, "message": str(cause)}


class DuplicateConstructorError(WireError):
    """An error constructor with the same name is already registered."""


class IncompatibleConstructorError(WireError):
    """An error constructor cannot be instantiated without arguments."""


class ConfigError(WireError):
    """Configuration is missing or invalid."""


@dataclass
class ErrorTemplate:
    """Template for creating errors."""

    code: str
    category: ErrorCategory
    message_template: str  # 'The error constructor "{name}" is already known.'
    detail_template: str | None = None
    error_class: type[WireError] = WireError
