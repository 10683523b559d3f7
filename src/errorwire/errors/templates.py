"""Error template table for creating errors from codes."""

from typing import Any

from .errors import (
    ConfigError,
    DuplicateConstructorError,
    ErrorCategory,
    ErrorTemplate,
    IncompatibleConstructorError,
    WireError,
)


class ErrorTemplateRegistry:
    """Registry of error templates. Creates errors from templates + context."""

    def __init__(self) -> None:
        """Initialize template registry with built-in templates."""
        self._templates: dict[str, ErrorTemplate] = {}
        self._load_builtin_templates()

    def get_template(self, code: str) -> ErrorTemplate | None:
        """Get template by error code.

        Args:
            code: Error code to look up

        Returns:
            ErrorTemplate if found, None otherwise
        """
        return self._templates.get(code)

    def list_codes(self) -> list[str]:
        """List all registered error codes."""
        return list(self._templates.keys())

    def create(
        self,
        code: str,
        context: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> WireError:
        """Create error instance from template + context.

        Args:
            code: Error code
            context: Context variables for template interpolation
            cause: Optional underlying exception

        Returns:
            WireError (or subclass) instance

        Raises:
            ValueError: If error code not found
        """
        template = self.get_template(code)
        if not template:
            msg = f"Unknown error code: {code}"
            raise ValueError(msg)

        context = context or {}

        message = self._interpolate(template.message_template, context)
        detail = self._interpolate(template.detail_template, context)
        if "detail" in context and context["detail"] is not None:
            detail = str(context["detail"])

        if message is None:
            message = f"Error {code}"

        return template.error_class(
            code=template.code,
            category=template.category,
            message=message,
            detail=detail,
            cause=cause,
        )

    def _interpolate(
        self,
        template: str | None,
        context: dict[str, Any],
    ) -> str | None:
        """Safe string interpolation.

        Missing context variables leave the template untouched.
        """
        if template is None:
            return None

        try:
            return template.format(**context)
        except KeyError:
            return template

    def _load_builtin_templates(self) -> None:
        """Load hardcoded built-in templates."""
        # REGISTRY Errors
        self._templates["CONSTRUCTOR_DUPLICATE"] = ErrorTemplate(
            code="CONSTRUCTOR_DUPLICATE",
            category=ErrorCategory.REGISTRY,
            message_template='The error constructor "{name}" is already known.',
            detail_template="Each error name can only map to one constructor",
            error_class=DuplicateConstructorError,
        )

        self._templates["CONSTRUCTOR_INCOMPATIBLE"] = ErrorTemplate(
            code="CONSTRUCTOR_INCOMPATIBLE",
            category=ErrorCategory.REGISTRY,
            message_template='The error constructor "{name}" is not compatible.',
            detail_template="Error constructors must build an exception when called without arguments",
            error_class=IncompatibleConstructorError,
        )

        # CONFIG Errors
        self._templates["CONFIG_INVALID"] = ErrorTemplate(
            code="CONFIG_INVALID",
            category=ErrorCategory.CONFIG,
            message_template="Invalid errorwire configuration: {detail}",
            error_class=ConfigError,
        )
