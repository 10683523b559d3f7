"""Error factory for creating WireErrors from codes."""

from typing import Any

from .errors import WireError
from .templates import ErrorTemplateRegistry


class ErrorFactory:
    """Creates WireErrors from template codes."""

    def __init__(self, templates: ErrorTemplateRegistry | None = None):
        """Initialize error factory.

        Args:
            templates: Template registry (defaults to new ErrorTemplateRegistry())
        """
        self.templates = templates or ErrorTemplateRegistry()

    def create(
        self,
        code: str,
        context: dict[str, Any] | None = None,
        cause: BaseException | None = None,
        **kwargs: Any,
    ) -> WireError:
        """Create WireError directly from code.

        Args:
            code: Error code
            context: Context variables for template interpolation
            cause: Optional underlying exception
            **kwargs: Additional context variables

        Returns:
            WireError instance
        """
        merged_context = dict(context or {})
        merged_context.update(kwargs)

        return self.templates.create(code=code, context=merged_context, cause=cause)


# Convenience singleton
_default_factory: ErrorFactory | None = None


def get_error_factory() -> ErrorFactory:
    """Get default error factory singleton."""
    global _default_factory  # noqa: PLW0603
    if _default_factory is None:
        _default_factory = ErrorFactory()
    return _default_factory


def create_error(code: str, cause: BaseException | None = None, **context: Any) -> WireError:
    """Convenience function to create error.

    Args:
        code: Error code
        cause: Optional underlying exception
        **context: Context variables for template interpolation

    Returns:
        WireError instance
    """
    return get_error_factory().create(code, context, cause=cause)
