"""Fallback exception for values that cannot be rebuilt as errors."""

import json
from typing import Any


class NonError(Exception):
    """Stand-in exception for a deserialized value that was not an error.

    The message is the compact JSON text of the value, or ``str(value)``
    when the value is not JSON-encodable. The value itself is kept on
    ``.value``.
    """

    name = "NonError"

    def __init__(self, value: Any = None):
        self.value = value
        super().__init__(self._prepare_message(value))

    @staticmethod
    def _prepare_message(value: Any) -> str:
        try:
            return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
        except (TypeError, ValueError):
            return str(value)
