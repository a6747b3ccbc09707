"""Core application wiring and error types."""

from .exceptions import InvalidFilterValue, QueryExecutionError

__all__ = ["InvalidFilterValue", "QueryExecutionError"]
