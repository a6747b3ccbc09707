"""Error taxonomy for the LightBnB data access layer."""

from typing import Any, Optional, Sequence


class InvalidFilterValue(ValueError):
    """Raised when a recognized filter (or the limit) carries a malformed value.

    Raised synchronously, before any statement is assembled.
    """

    def __init__(self, key: str, value: Any, reason: str = "invalid value"):
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid value for filter '{key}': {value!r} ({reason})")


class QueryExecutionError(RuntimeError):
    """Raised by the executor when the store rejects a statement."""

    def __init__(
        self,
        message: str,
        statement: str = "",
        params: Optional[Sequence[Any]] = None,
    ):
        self.message = message
        self.statement = statement
        self.params = list(params) if params is not None else []
        super().__init__(self.message)
