"""User lookups and registration."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from data.repositories.database_repository import DatabaseRepository, Row
from queries.sql_templates import SQLTemplates, USER_INSERT_COLUMNS


class UserRepository(DatabaseRepository):
    """Users by email or id, and user creation."""

    def get_user_with_email(self, email: str) -> Optional[Row]:
        """Get a single user given their email, or None."""
        return self.fetch_one(SQLTemplates.USER_BY_EMAIL, [email])

    def get_user_with_id(self, user_id: Any) -> Optional[Row]:
        """Get a single user given their id, or None."""
        return self.fetch_one(SQLTemplates.USER_BY_ID, [user_id])

    def add_user(self, user: Mapping[str, Any]) -> Optional[Row]:
        """
        Add a new user.

        Args:
            user: Mapping with name, email and password

        Returns:
            The stored user row, or None if the insert failed
        """
        params = [user.get(column) for column in USER_INSERT_COLUMNS]
        return self.fetch_one(SQLTemplates.INSERT_USER, params, read_only=False)
