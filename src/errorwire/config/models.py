"""errorwire configuration data models."""

from dataclasses import dataclass, field

from errorwire.types import LogFormat, LogLevel


@dataclass
class SerdeConfig:
    """Serializer / deserializer defaults."""

    max_depth: int | None = None  # None = unbounded
    use_custom_conversion: bool = True
    hook_name: str = "to_dict"


@dataclass
class JSONConfig:
    """JSON text encoding options."""

    indent: int | None = None
    ensure_ascii: bool = False
    sort_keys: bool = False


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.COLORED
    include_trace_context: bool = True
    truncate_at: int = 200


@dataclass
class WireConfig:
    """Root errorwire configuration."""

    serde: SerdeConfig = field(default_factory=SerdeConfig)
    json: JSONConfig = field(default_factory=JSONConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    # Dotted paths of exception classes registered at startup
    error_constructors: list[str] = field(default_factory=list)
