"""errorwire configuration loader."""

import logging
import os
import re
import typing
from dataclasses import fields
from pathlib import Path
from typing import Any

import yaml

from errorwire.errors import create_error
from errorwire.types import LogFormat, LogLevel, ValidationIssue, ValidationResult

from .models import WireConfig

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "ERRORWIRE_CONFIG_PATH"
DEFAULT_CONFIG_FILE = "errorwire.yaml"


def resolve_env_vars(value: str) -> str:
    """Resolve environment variable references in string.

    Supports:
    - ${VAR} - Required, error if not set
    - ${VAR:-default} - With default value
    - ${VAR:?error message} - Required with custom error

    Args:
        value: String with potential env var references

    Returns:
        String with env vars resolved

    Raises:
        ConfigError: If required var not set
    """
    # Pattern: ${VAR}, ${VAR:-default}, ${VAR:?error}
    pattern = r"\$\{([^}:]+)(?::([?-])([^}]*))?\}"

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        operator = match.group(2)  # '-' or '?' or None
        operand = match.group(3)  # default value or error message

        env_value = os.environ.get(var_name)

        if env_value is not None:
            return env_value

        if operator == "-":
            return operand or ""
        elif operator == "?":
            error_msg = operand or f"Required environment variable {var_name} not set"
            raise create_error("CONFIG_INVALID", detail=error_msg)
        else:
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Required environment variable {var_name} not set",
            )

    return re.sub(pattern, replacer, value)


def _resolve_env_vars_recursive(data: Any) -> Any:
    """Recursively resolve env vars in data structure."""
    if isinstance(data, dict):
        return {k: _resolve_env_vars_recursive(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [_resolve_env_vars_recursive(item) for item in data]
    elif isinstance(data, str):
        return resolve_env_vars(data)
    else:
        return data


def _is_non_negative_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


class ConfigLoader:
    """Load and validate errorwire configuration."""

    def __init__(self) -> None:
        """Initialize config loader."""
        self._config: WireConfig | None = None
        self._config_path: Path | None = None

    def load(self, path: str | Path | None = None, use_defaults: bool = True) -> WireConfig:
        """Load configuration from file.

        Resolution order if path not specified:
        1. ERRORWIRE_CONFIG_PATH environment variable
        2. ./errorwire.yaml
        3. If use_defaults=True and no file found, use default configuration

        Args:
            path: Optional path to config file
            use_defaults: If True, use default config when no file found

        Returns:
            Loaded WireConfig instance

        Raises:
            ConfigError: If file not found (when use_defaults=False) or invalid
        """
        if path is None:
            path = self._resolve_config_path()

        config_path = Path(path)

        if not config_path.exists():
            if use_defaults:
                logger.debug("No config file at %s, using defaults", config_path)
                return self.load_defaults()
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Configuration file not found: {config_path}",
            )

        try:
            with config_path.open() as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise create_error(
                "CONFIG_INVALID",
                cause=e,
                detail=f"Invalid YAML in config file: {e}",
            ) from e

        if not isinstance(data, dict):
            raise create_error(
                "CONFIG_INVALID",
                detail="Configuration root must be a mapping",
            )

        data = _resolve_env_vars_recursive(data)

        return self.load_from_dict(data, config_path)

    def load_defaults(self) -> WireConfig:
        """Load default configuration without a file."""
        return self.load_from_dict({})

    def load_from_dict(self, data: dict[str, Any], config_path: Path | None = None) -> WireConfig:
        """Load configuration from dictionary.

        Args:
            data: Configuration dictionary
            config_path: Optional path to config file (for tracking)

        Returns:
            Loaded WireConfig instance

        Raises:
            ConfigError: If configuration is invalid
        """
        validation = self.validate(data)
        if not validation.valid:
            error_messages = [f"- {issue.message}" for issue in validation.errors]
            raise create_error(
                "CONFIG_INVALID",
                detail="Configuration validation failed:\n" + "\n".join(error_messages),
            )
        for issue in validation.warnings:
            logger.warning("%s", issue.message)

        try:
            config = self._dict_to_config(data)
        except (TypeError, ValueError) as e:
            raise create_error(
                "CONFIG_INVALID",
                cause=e,
                detail=f"Failed to parse configuration: {e}",
            ) from e

        self._config = config
        self._config_path = config_path
        logger.debug("Configuration loaded (path=%s)", config_path)
        return config

    def validate(self, data: dict[str, Any]) -> ValidationResult:
        """Validate config data without loading.

        Args:
            data: Configuration dictionary

        Returns:
            ValidationResult with errors and warnings
        """
        errors: list[ValidationIssue] = []
        warnings: list[ValidationIssue] = []

        valid_keys = {"serde", "json", "logging", "error_constructors"}

        for key in data:
            if key not in valid_keys:
                warnings.append(
                    ValidationIssue(
                        path=key,
                        message=f"Unknown configuration key: {key}",
                        severity="warning",
                    )
                )

        for section in ("serde", "json", "logging"):
            if section in data and not isinstance(data[section], dict):
                errors.append(
                    ValidationIssue(path=section, message=f"{section} must be a dictionary")
                )

        serde = data.get("serde")
        if isinstance(serde, dict):
            max_depth = serde.get("max_depth")
            if max_depth is not None and not _is_non_negative_int(max_depth):
                errors.append(
                    ValidationIssue(
                        path="serde.max_depth",
                        message="max_depth must be a non-negative integer or null",
                    )
                )
            if "use_custom_conversion" in serde and not isinstance(
                serde["use_custom_conversion"], bool
            ):
                errors.append(
                    ValidationIssue(
                        path="serde.use_custom_conversion",
                        message="use_custom_conversion must be a boolean",
                    )
                )
            hook_name = serde.get("hook_name", "to_dict")
            if not isinstance(hook_name, str) or not hook_name.isidentifier():
                errors.append(
                    ValidationIssue(
                        path="serde.hook_name",
                        message="hook_name must be a valid attribute name",
                    )
                )

        json_section = data.get("json")
        if isinstance(json_section, dict):
            indent = json_section.get("indent")
            if indent is not None and not _is_non_negative_int(indent):
                errors.append(
                    ValidationIssue(
                        path="json.indent",
                        message="indent must be a non-negative integer or null",
                    )
                )
            for flag in ("ensure_ascii", "sort_keys"):
                if flag in json_section and not isinstance(json_section[flag], bool):
                    errors.append(
                        ValidationIssue(path=f"json.{flag}", message=f"{flag} must be a boolean")
                    )

        logging_section = data.get("logging")
        if isinstance(logging_section, dict):
            level = logging_section.get("level", LogLevel.INFO.value)
            if level not in {member.value for member in LogLevel}:
                errors.append(
                    ValidationIssue(
                        path="logging.level",
                        message=f"Unknown log level: {level}",
                    )
                )
            log_format = logging_section.get("format", LogFormat.COLORED.value)
            if log_format not in {member.value for member in LogFormat}:
                errors.append(
                    ValidationIssue(
                        path="logging.format",
                        message=f"Unknown log format: {log_format}",
                    )
                )

        if "error_constructors" in data:
            constructors = data["error_constructors"]
            if not isinstance(constructors, list) or not all(
                isinstance(item, str) for item in constructors
            ):
                errors.append(
                    ValidationIssue(
                        path="error_constructors",
                        message="error_constructors must be a list of dotted paths",
                    )
                )

        return ValidationResult(valid=True, errors=errors, warnings=warnings)

    def get(self) -> WireConfig:
        """Get current configuration.

        Raises:
            ConfigError: If configuration not loaded
        """
        if self._config is None:
            raise create_error("CONFIG_INVALID", detail="Configuration not loaded")
        return self._config

    def _resolve_config_path(self) -> Path:
        """Resolve config file path using resolution order."""
        env_path = os.environ.get(CONFIG_PATH_ENV)
        if env_path:
            return Path(env_path)
        return Path(DEFAULT_CONFIG_FILE)

    def _dict_to_config(self, data: dict[str, Any]) -> WireConfig:
        """Convert dictionary to WireConfig, keeping dataclass defaults for missing sections."""
        kwargs: dict[str, Any] = {}

        for field in fields(WireConfig):
            if field.name in data:
                kwargs[field.name] = self._convert_field(field.type, data[field.name])

        return WireConfig(**kwargs)

    def _convert_field(self, field_type: Any, value: Any) -> Any:
        """Convert field value to appropriate type.

        Args:
            field_type: Expected field type
            value: Value to convert

        Returns:
            Converted value
        """
        if value is None:
            return None

        origin = typing.get_origin(field_type)

        if origin is list:
            if not isinstance(value, list):
                return value
            args = typing.get_args(field_type)
            if args:
                return [self._convert_field(args[0], item) for item in value]
            return value

        # Handle dataclasses
        if hasattr(field_type, "__dataclass_fields__"):
            if isinstance(value, dict):
                kwargs = {}
                for f in fields(field_type):
                    if f.name in value:
                        kwargs[f.name] = self._convert_field(f.type, value[f.name])
                return field_type(**kwargs)
            return value

        # Handle enums
        if hasattr(field_type, "__mro__") and any(
            base.__name__ == "Enum" for base in field_type.__mro__
        ):
            if isinstance(value, str):
                return field_type(value)
            return value

        return value


# Convenience singleton
_default_loader: ConfigLoader | None = None


def get_config_loader() -> ConfigLoader:
    """Get default config loader singleton."""
    global _default_loader  # noqa: PLW0603
    if _default_loader is None:
        _default_loader = ConfigLoader()
    return _default_loader


def load_config(path: str | Path | None = None) -> WireConfig:
    """Convenience function to load config.

    Args:
        path: Optional path to config file

    Returns:
        Loaded WireConfig instance
    """
    return get_config_loader().load(path)
