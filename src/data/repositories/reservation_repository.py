"""Guest reservation listings."""

from __future__ import annotations

from typing import Any, List

from config.settings import Settings
from data.repositories.database_repository import DatabaseRepository, Row
from queries.filter_builder import coerce_limit
from queries.sql_templates import SQLTemplates


class ReservationRepository(DatabaseRepository):

    def get_all_reservations(self, guest_id: Any, limit: Any = Settings.DEFAULT_RESULT_LIMIT) -> List[Row]:
        """
        Get the upcoming reservations of one guest, earliest first.

        Args:
            guest_id: The id of the user
            limit: The maximum number of reservations to retrieve

        Returns:
            Reservations joined to their property and its average_rating,
            or [] on failure
        """
        return self.fetch_all(SQLTemplates.GUEST_RESERVATIONS, [guest_id, coerce_limit(limit)])
