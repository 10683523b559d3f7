"""ErrorCodec - config-driven JSON text encoding of errors."""

from __future__ import annotations

import json
from typing import Any

from errorwire.config.models import WireConfig
from errorwire.logging import get_logger
from errorwire.registry import (
    ConstructorRegistry,
    get_constructor_registry,
    import_dotted,
)
from errorwire.serde import NonError, deserialize, serialize

logger = get_logger("codec")


class ErrorCodec:
    """Serialize errors to JSON text and back using one configuration.

    Usage:
        codec = ErrorCodec.from_config(load_config())
        text = codec.dumps(exc)          # in the worker
        error = codec.loads(text)        # in the parent process
    """

    def __init__(
        self,
        config: WireConfig | None = None,
        registry: ConstructorRegistry | None = None,
    ):
        """Initialize codec.

        Args:
            config: errorwire configuration (defaults to WireConfig())
            registry: Constructor registry (defaults to the shared one)
        """
        self.config = config or WireConfig()
        self.registry = registry or get_constructor_registry()

    @classmethod
    def from_config(
        cls,
        config: WireConfig,
        registry: ConstructorRegistry | None = None,
    ) -> ErrorCodec:
        """Create a codec and register the configured error constructors.

        Constructors already registered under the same name with the same
        class are left alone.

        Raises:
            ImportError: If a dotted path cannot be imported
            DuplicateConstructorError: If a name is taken by another class
            IncompatibleConstructorError: If a class cannot be instantiated
        """
        codec = cls(config, registry)
        for path in config.error_constructors:
            constructor = import_dotted(path)
            name = getattr(constructor, "__name__", None)
            if name is not None and codec.registry.lookup(name) is constructor:
                continue
            codec.registry.register(constructor)  # type: ignore[arg-type]
            logger.debug("Registered configured error constructor", path=path)
        return codec

    def serialize(self, value: Any) -> Any:
        """Serialize with the configured depth and hook settings."""
        serde = self.config.serde
        return serialize(
            value,
            max_depth=serde.max_depth,
            use_custom_conversion=serde.use_custom_conversion,
            hook_name=serde.hook_name,
        )

    def deserialize(self, value: Any) -> BaseException:
        """Deserialize with the configured depth and this codec's registry."""
        return deserialize(value, max_depth=self.config.serde.max_depth, registry=self.registry)

    def dumps(self, value: Any) -> str:
        """Serialize ``value`` and encode it as JSON text.

        Values a conversion hook returns unconverted are encoded with ``str``.
        """
        options = self.config.json
        return json.dumps(
            self.serialize(value),
            indent=options.indent,
            ensure_ascii=options.ensure_ascii,
            sort_keys=options.sort_keys,
            default=str,
        )

    def loads(self, text: str | bytes) -> BaseException:
        """Decode JSON text and rebuild the error.

        Text that is not valid JSON becomes a NonError wrapping the text.
        """
        try:
            data = json.loads(text)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.debug("Payload is not valid JSON", error=str(e))
            return NonError(text if isinstance(text, str) else text.decode("utf-8", "replace"))
        return self.deserialize(data)
