"""Queries package.

This package contains query-related utilities:
- filter_builder: builds the filtered property search statement
- sql_templates: base SQL text and the fixed-shape statements
- types: typed contracts shared by the builder and its callers
"""

from .filter_builder import build_property_filter_query, is_provided
from .types import BuiltQuery, Clause, ClauseGroup

__all__ = ['build_property_filter_query', 'is_provided', 'BuiltQuery', 'Clause', 'ClauseGroup']
