"""Property search and creation."""

from __future__ import annotations

from typing import Any, List, Mapping, Optional

from config.settings import Settings
from data.repositories.database_repository import DatabaseRepository, Row
from queries.filter_builder import build_property_filter_query
from queries.sql_templates import PROPERTY_INSERT_COLUMNS, SQLTemplates
from queries.types import FilterCriteria


class PropertyRepository(DatabaseRepository):
    """Filtered property listings and property creation."""

    def get_all_properties(
        self,
        criteria: Optional[FilterCriteria] = None,
        limit: Any = Settings.DEFAULT_RESULT_LIMIT,
    ) -> List[Row]:
        """
        Get properties matching the given filters, cheapest first.

        Args:
            criteria: Optional search filters (see queries.filter_builder)
            limit: The number of results to return

        Returns:
            Matching properties with their average_rating, or [] on failure

        Raises:
            InvalidFilterValue: If a filter or the limit is malformed
        """
        sql, params = build_property_filter_query(criteria, limit)
        return self.fetch_all(sql, params)

    def add_property(self, property_details: Mapping[str, Any]) -> Optional[Row]:
        """Add a property; returns the stored row, or None if the insert failed."""
        params = [property_details.get(column) for column in PROPERTY_INSERT_COLUMNS]
        return self.fetch_one(SQLTemplates.INSERT_PROPERTY, params, read_only=False)
