"""errorwire Configuration - Config loading and models."""

from .loader import (
    CONFIG_PATH_ENV,
    ConfigLoader,
    get_config_loader,
    load_config,
    resolve_env_vars,
)
from .models import JSONConfig, LoggingConfig, SerdeConfig, WireConfig

__all__ = [
    # Config models
    "WireConfig",
    "SerdeConfig",
    "JSONConfig",
    "LoggingConfig",
    # Loader
    "ConfigLoader",
    "CONFIG_PATH_ENV",
    "get_config_loader",
    "load_config",
    # Utilities
    "resolve_env_vars",
]
