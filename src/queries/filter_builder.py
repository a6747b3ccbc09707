"""Filtered property query builder.

Turns an arbitrary subset of optional search filters into one parameterized
statement. Filters are visited in a fixed canonical order, each active filter
contributes exactly one clause and one bound value, and the limit is always
bound last, so for a given input the statement text and parameter list are
always the same.

Example:
    sql, params = build_property_filter_query({"city": "van", "minimum_rating": 4}, limit=5)
    # params == ["%van%", 4, 5]
"""

from __future__ import annotations

import numbers
from decimal import Decimal, InvalidOperation
from typing import Any, List, Optional, Tuple, Union

from config.settings import Settings
from core.exceptions import InvalidFilterValue
from queries.sql_templates import SQLTemplates
from queries.types import BuiltQuery, Clause, ClauseGroup, FilterCriteria, FilterSpec
from utils.query_builder import FilterOperator, SecureQueryBuilder

MINOR_UNITS_PER_MAJOR = 100


def is_provided(value: Any) -> bool:
    """Return True when a filter value should activate its clause.

    ``None`` and blank strings mean "not provided". Every other value counts,
    including numeric zero, so a price bound of 0 is never dropped. Whether the
    value is well-formed is checked afterwards by the filter's coercer.
    """
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip() != ""
    return True


def is_provided_nonzero(value: Any) -> bool:
    """Like :func:`is_provided`, but numeric zero also means "not provided".

    Used for filters where zero is never a meaningful bound: no owner has id 0,
    and a minimum rating of 0 would only exclude properties without reviews.
    Values that do not parse as numbers count as provided so the coercer can
    reject them.
    """
    if not is_provided(value):
        return False
    if isinstance(value, bool) or not isinstance(value, (numbers.Real, Decimal, str)):
        return True
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        return True
    return number.is_nan() or number != 0


def _as_plain_number(number: Decimal) -> Union[int, float]:
    if number == number.to_integral_value():
        return int(number)
    return float(number)


def _parse_number(key: str, value: Any) -> Decimal:
    if isinstance(value, bool):
        raise InvalidFilterValue(key, value, "expected a number, got a boolean")
    if not isinstance(value, (numbers.Real, Decimal, str)):
        raise InvalidFilterValue(key, value, "expected a number")
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        raise InvalidFilterValue(key, value, "expected a number") from None
    if not number.is_finite():
        raise InvalidFilterValue(key, value, "expected a finite number")
    return number


def coerce_text(key: str, value: Any) -> str:
    if not isinstance(value, str):
        raise InvalidFilterValue(key, value, "expected text")
    return value


def coerce_substring_pattern(key: str, value: Any) -> str:
    """Wrap the raw substring in wildcards for a case-insensitive match."""
    return f"%{coerce_text(key, value)}%"


def coerce_identifier(key: str, value: Any) -> int:
    number = _parse_number(key, value)
    if number != number.to_integral_value():
        raise InvalidFilterValue(key, value, "expected an integer identifier")
    return int(number)


def coerce_price_to_minor_units(key: str, value: Any) -> Union[int, float]:
    """Convert a price in major units (dollars) to the stored minor units (cents)."""
    return _as_plain_number(_parse_number(key, value) * MINOR_UNITS_PER_MAJOR)


def coerce_rating(key: str, value: Any) -> Union[int, float, Decimal]:
    number = _parse_number(key, value)
    if isinstance(value, str):
        return _as_plain_number(number)
    return value


def coerce_limit(limit: Any) -> int:
    """Validate a result limit: a positive integer (integral strings accepted)."""
    number = _parse_number("limit", limit)
    if number != number.to_integral_value():
        raise InvalidFilterValue("limit", limit, "expected an integer")
    if number <= 0:
        raise InvalidFilterValue("limit", limit, "must be positive")
    return int(number)


# Canonical order: determines placeholder numbering.
FILTER_SPECS: Tuple[FilterSpec, ...] = (
    FilterSpec(
        "city",
        "properties.city",
        FilterOperator.ILIKE,
        ClauseGroup.WHERE,
        coerce_substring_pattern,
        is_provided,
    ),
    FilterSpec(
        "owner_id",
        "properties.owner_id",
        FilterOperator.EQUALS,
        ClauseGroup.WHERE,
        coerce_identifier,
        is_provided_nonzero,
    ),
    FilterSpec(
        "minimum_price_per_night",
        "properties.cost_per_night",
        FilterOperator.GREATER_EQUAL,
        ClauseGroup.WHERE,
        coerce_price_to_minor_units,
        is_provided,
    ),
    FilterSpec(
        "maximum_price_per_night",
        "properties.cost_per_night",
        FilterOperator.LESS_EQUAL,
        ClauseGroup.WHERE,
        coerce_price_to_minor_units,
        is_provided,
    ),
    FilterSpec(
        "minimum_rating",
        SQLTemplates.AVERAGE_RATING,
        FilterOperator.GREATER_EQUAL,
        ClauseGroup.HAVING,
        coerce_rating,
        is_provided_nonzero,
    ),
)

FILTER_KEYS: Tuple[str, ...] = tuple(spec.key for spec in FILTER_SPECS)


def normalize_criteria(criteria: Optional[FilterCriteria]) -> List[Tuple[FilterSpec, Any]]:
    """
    Select the active filters in canonical order.

    Args:
        criteria: Mapping of filter name to value; unknown keys are ignored

    Returns:
        List of (filter spec, raw value) pairs for every provided filter
    """
    if criteria is None:
        return []
    if not hasattr(criteria, "get"):
        raise TypeError(f"Filter criteria must be a mapping, got {type(criteria).__name__}")

    active = []
    for spec in FILTER_SPECS:
        value = criteria.get(spec.key)
        if spec.is_provided(value):
            active.append((spec, value))
    return active


def compile_clauses(
    active_filters: List[Tuple[FilterSpec, Any]],
    builder: SecureQueryBuilder,
) -> List[Clause]:
    """
    Emit one clause per active filter, binding its value through the builder.

    Every value is coerced before anything is bound, so a malformed filter
    leaves the builder untouched.

    Raises:
        InvalidFilterValue: If a provided value cannot be coerced
    """
    coerced = [(spec, spec.coerce(spec.key, value)) for spec, value in active_filters]

    clauses = []
    for spec, bound_value in coerced:
        text = builder.build_filter_condition(spec.column, spec.operator, bound_value)
        clauses.append(Clause(key=spec.key, text=text, group=spec.group, index=builder.placeholder_count))
    return clauses


def build_property_filter_query(
    criteria: Optional[FilterCriteria] = None,
    limit: Any = Settings.DEFAULT_RESULT_LIMIT,
) -> BuiltQuery:
    """
    Build the property search statement for a set of optional filters.

    Args:
        criteria: Any subset of city, owner_id, minimum_price_per_night,
            maximum_price_per_night and minimum_rating
        limit: Maximum number of rows to return

    Returns:
        BuiltQuery unpacking to (statement text, parameter list)

    Raises:
        InvalidFilterValue: If the limit or a provided filter is malformed
    """
    limit_value = coerce_limit(limit)
    active_filters = normalize_criteria(criteria)

    builder = SecureQueryBuilder()
    clauses = compile_clauses(active_filters, builder)

    sql = builder.build_secure_query(
        select_clause=SQLTemplates.PROPERTY_SELECT,
        from_clause=SQLTemplates.PROPERTY_FROM,
        where_conditions=[c.text for c in clauses if c.group is ClauseGroup.WHERE],
        group_by=SQLTemplates.PROPERTY_GROUP_BY,
        having_conditions=[c.text for c in clauses if c.group is ClauseGroup.HAVING],
        order_by=SQLTemplates.PROPERTY_ORDER_BY,
        limit=limit_value,
    )
    return BuiltQuery(sql=sql, params=builder.get_parameters(), clauses=tuple(clauses))
