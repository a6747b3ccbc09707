"""
SQL text for the LightBnB store.

The property projection lists its columns explicitly and groups by all of
them, which both PostgreSQL and DuckDB accept alongside the AVG() aggregate.

Usage:
    from queries.sql_templates import SQLTemplates

    builder.build_secure_query(
        select_clause=SQLTemplates.PROPERTY_SELECT,
        from_clause=SQLTemplates.PROPERTY_FROM,
        group_by=SQLTemplates.PROPERTY_GROUP_BY,
        ...
    )
"""

from typing import Tuple

PROPERTY_COLUMNS: Tuple[str, ...] = (
    "id",
    "owner_id",
    "title",
    "description",
    "thumbnail_photo_url",
    "cover_photo_url",
    "cost_per_night",
    "parking_spaces",
    "number_of_bathrooms",
    "number_of_bedrooms",
    "country",
    "street",
    "city",
    "province",
    "post_code",
    "active",
)

# Insert order of the original add-property form
PROPERTY_INSERT_COLUMNS: Tuple[str, ...] = (
    "owner_id",
    "title",
    "description",
    "thumbnail_photo_url",
    "cover_photo_url",
    "cost_per_night",
    "street",
    "city",
    "province",
    "post_code",
    "country",
    "parking_spaces",
    "number_of_bathrooms",
    "number_of_bedrooms",
)

USER_INSERT_COLUMNS: Tuple[str, ...] = ("name", "email", "password")


def _qualified(table: str, columns: Tuple[str, ...]) -> str:
    return ", ".join(f"{table}.{column}" for column in columns)


def _placeholders(count: int) -> str:
    return ", ".join(f"${index}" for index in range(1, count + 1))


class SQLTemplates:
    """Base text for the filtered property query and the fixed-shape statements."""

    AVERAGE_RATING = "AVG(property_reviews.rating)"

    # Filtered property search (clauses are added by queries.filter_builder)
    PROPERTY_SELECT = f"{_qualified('properties', PROPERTY_COLUMNS)}, {AVERAGE_RATING} AS average_rating"
    PROPERTY_FROM = (
        "properties\n"
        "LEFT JOIN property_reviews ON properties.id = property_reviews.property_id"
    )
    PROPERTY_GROUP_BY = _qualified("properties", PROPERTY_COLUMNS)
    PROPERTY_ORDER_BY = "properties.cost_per_night"

    # Users
    USER_BY_EMAIL = "SELECT * FROM users WHERE email = $1"
    USER_BY_ID = "SELECT * FROM users WHERE id = $1"
    INSERT_USER = (
        f"INSERT INTO users ({', '.join(USER_INSERT_COLUMNS)})\n"
        f"VALUES ({_placeholders(len(USER_INSERT_COLUMNS))})\n"
        "RETURNING *"
    )

    # Properties
    INSERT_PROPERTY = (
        f"INSERT INTO properties ({', '.join(PROPERTY_INSERT_COLUMNS)})\n"
        f"VALUES ({_placeholders(len(PROPERTY_INSERT_COLUMNS))})\n"
        "RETURNING *"
    )

    # Upcoming reservations of one guest, with the reserved property
    GUEST_RESERVATIONS = f"""SELECT
    reservations.id AS reservation_id,
    reservations.start_date,
    reservations.end_date,
    reservations.property_id,
    reservations.guest_id,
    {_qualified('properties', PROPERTY_COLUMNS)},
    {AVERAGE_RATING} AS average_rating
FROM reservations
JOIN properties ON reservations.property_id = properties.id
LEFT JOIN property_reviews ON properties.id = property_reviews.property_id
WHERE reservations.guest_id = $1
AND reservations.end_date >= CURRENT_DATE
GROUP BY reservations.id, reservations.start_date, reservations.end_date, reservations.property_id, reservations.guest_id,
    {_qualified('properties', PROPERTY_COLUMNS)}
ORDER BY reservations.start_date
LIMIT $2"""
