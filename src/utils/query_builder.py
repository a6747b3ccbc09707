"""
Secure query building utilities with positional parameter binding.

Values never reach statement text: every value is appended to an ordered
parameter list and referenced from the SQL by a positional placeholder
(``$1``, ``$2``, ...), the native syntax of both PostgreSQL and DuckDB.
"""

from typing import Any, List, Optional
from enum import Enum
import re


class FilterOperator(Enum):
    """Supported filter operators."""
    EQUALS = "="
    ILIKE = "ILIKE"
    GREATER_EQUAL = ">="
    LESS_EQUAL = "<="


class SecureQueryBuilder:
    """Positional parameter binder and statement assembler.

    The placeholder index of a value is its 1-based position in the parameter
    list, so indices follow bind order and never skip or repeat.

    Example:
        builder = SecureQueryBuilder()
        cond = builder.build_filter_condition("city", FilterOperator.ILIKE, "%van%")
        sql = builder.build_secure_query("*", "properties", where_conditions=[cond], limit=10)
        params = builder.get_parameters()   # ['%van%', 10]
    """

    # Driver-specific token format; the single place to change for `?` drivers.
    PLACEHOLDER_FORMAT = "${index}"

    def __init__(self):
        self.params: List[Any] = []

    @property
    def placeholder_count(self) -> int:
        """Number of values bound so far."""
        return len(self.params)

    def add_parameter(self, value: Any) -> str:
        """
        Bind a value and return its placeholder token.

        Args:
            value: The parameter value

        Returns:
            Placeholder string referencing the value (e.g., "$3")
        """
        self.params.append(value)
        return self.PLACEHOLDER_FORMAT.format(index=len(self.params))

    def build_filter_condition(
        self,
        column: str,
        operator: FilterOperator,
        value: Any,
    ) -> str:
        """
        Build a filter condition with its value bound as a parameter.

        Args:
            column: Column name or aggregate expression
            operator: Filter operator
            value: Value to bind

        Returns:
            SQL condition string with a placeholder
        """
        if not isinstance(operator, FilterOperator):
            raise ValueError(f"Unsupported operator: {operator}")
        if value is None:
            raise ValueError(f"Value required for {operator.value} operator")

        safe_column = validate_column_expression(column)
        placeholder = self.add_parameter(value)
        return f"{safe_column} {operator.value} {placeholder}"

    def build_secure_query(
        self,
        select_clause: str,
        from_clause: str,
        where_conditions: Optional[List[str]] = None,
        group_by: Optional[str] = None,
        having_conditions: Optional[List[str]] = None,
        order_by: Optional[str] = None,
        limit: Optional[int] = None
    ) -> str:
        """
        Assemble a complete SQL statement.

        Empty condition groups are omitted together with their keyword. The
        limit, when given, is bound after every other parameter.

        Args:
            select_clause: SELECT projection
            from_clause: FROM clause with JOINs
            where_conditions: Conditions joined by AND under WHERE
            group_by: GROUP BY expression list
            having_conditions: Conditions joined by AND under HAVING
            order_by: ORDER BY expression list
            limit: LIMIT value

        Returns:
            Complete SQL statement
        """
        query_parts = [
            f"SELECT {select_clause}",
            f"FROM {from_clause}"
        ]

        if where_conditions:
            query_parts.append(f"WHERE {' AND '.join(where_conditions)}")

        if group_by:
            query_parts.append(f"GROUP BY {group_by}")

        if having_conditions:
            query_parts.append(f"HAVING {' AND '.join(having_conditions)}")

        if order_by:
            query_parts.append(f"ORDER BY {order_by}")

        if limit is not None:
            limit_param = self.add_parameter(limit)
            query_parts.append(f"LIMIT {limit_param}")

        return "\n".join(query_parts)

    def get_parameters(self) -> List[Any]:
        """Get all accumulated parameters in placeholder order."""
        return list(self.params)


_COLUMN_EXPRESSION = re.compile(
    r'^(?:[a-zA-Z_][a-zA-Z0-9_]*\(\s*[a-zA-Z0-9_."]+\s*\)|[a-zA-Z0-9_."]+)$'
)


def validate_column_expression(column: str) -> str:
    """
    Validate a column name or single-argument aggregate such as AVG(t.col).

    Args:
        column: Column expression to validate

    Returns:
        The column expression unchanged

    Raises:
        ValueError: If the expression contains anything else
    """
    if not _COLUMN_EXPRESSION.match(column):
        raise ValueError(f"Invalid column name: {column}")

    return column
