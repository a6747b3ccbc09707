"""Database configuration and connection settings."""

from typing import List


class DatabaseConfig:
    """Database-specific configuration."""

    # LightBnB schema, in foreign-key order
    TABLES = [
        "users",
        "properties",
        "reservations",
        "property_reviews",
    ]

    # Connection settings
    READ_ONLY_DEFAULT = True

    @classmethod
    def get_all_tables(cls) -> List[str]:
        """Get all table names."""
        return list(cls.TABLES)

    @classmethod
    def is_known_table(cls, table_name: str) -> bool:
        """Check if a table belongs to the LightBnB schema."""
        return table_name in cls.TABLES
