# tests/conftest.py
import os
import sys
from datetime import date, timedelta
from pathlib import Path
from unittest.mock import MagicMock

import duckdb
import pytest

# Make sure `src/` is on the import path:
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
sys.path.insert(0, os.path.join(ROOT, "src"))


LIGHTBNB_SCHEMA = [
    "CREATE SEQUENCE users_id_seq START 100",
    "CREATE SEQUENCE properties_id_seq START 100",
    """
    CREATE TABLE users (
        id INTEGER PRIMARY KEY DEFAULT nextval('users_id_seq'),
        name VARCHAR NOT NULL,
        email VARCHAR NOT NULL,
        password VARCHAR NOT NULL
    )
    """,
    """
    CREATE TABLE properties (
        id INTEGER PRIMARY KEY DEFAULT nextval('properties_id_seq'),
        owner_id INTEGER NOT NULL,
        title VARCHAR NOT NULL,
        description VARCHAR,
        thumbnail_photo_url VARCHAR NOT NULL,
        cover_photo_url VARCHAR NOT NULL,
        cost_per_night INTEGER NOT NULL DEFAULT 0,
        parking_spaces INTEGER NOT NULL DEFAULT 0,
        number_of_bathrooms INTEGER NOT NULL DEFAULT 0,
        number_of_bedrooms INTEGER NOT NULL DEFAULT 0,
        country VARCHAR NOT NULL,
        street VARCHAR NOT NULL,
        city VARCHAR NOT NULL,
        province VARCHAR NOT NULL,
        post_code VARCHAR NOT NULL,
        active BOOLEAN NOT NULL DEFAULT TRUE
    )
    """,
    """
    CREATE TABLE reservations (
        id INTEGER PRIMARY KEY,
        start_date DATE NOT NULL,
        end_date DATE NOT NULL,
        property_id INTEGER NOT NULL,
        guest_id INTEGER NOT NULL
    )
    """,
    """
    CREATE TABLE property_reviews (
        id INTEGER PRIMARY KEY,
        guest_id INTEGER NOT NULL,
        property_id INTEGER NOT NULL,
        reservation_id INTEGER NOT NULL,
        rating SMALLINT NOT NULL DEFAULT 0,
        message VARCHAR
    )
    """,
]

SEED_USERS = [
    (1, "Alice Owner", "alice@example.com", "hashed-a"),
    (2, "Bob Host", "bob@example.com", "hashed-b"),
    (3, "Carol Guest", "carol@example.com", "hashed-c"),
]

# (id, owner_id, title, city, cost_per_night in cents)
SEED_PROPERTIES = [
    (1, 1, "Cozy Loft", "Vancouver", 8000),
    (2, 1, "Harbour View", "North Vancouver", 15000),
    (3, 2, "Lake Cabin", "Kelowna", 5000),
    (4, 2, "Downtown Studio", "Toronto", 12000),
    (5, 3, "Empty Nest", "Vancouver", 0),
]

# property_id -> ratings; property 5 has no reviews
SEED_RATINGS = {1: [5, 4], 2: [3], 3: [4, 5], 4: [2]}


def seed_average_rating(property_id):
    ratings = SEED_RATINGS.get(property_id)
    return sum(ratings) / len(ratings) if ratings else None


def _insert_property(con, property_id, owner_id, title, city, cost):
    con.execute(
        """
        INSERT INTO properties (
            id, owner_id, title, description, thumbnail_photo_url, cover_photo_url,
            cost_per_night, parking_spaces, number_of_bathrooms, number_of_bedrooms,
            country, street, city, province, post_code
        ) VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10, $11, $12, $13, $14, $15)
        """,
        [
            property_id, owner_id, title, f"{title} description",
            f"https://img.example.com/{property_id}/thumb.jpg",
            f"https://img.example.com/{property_id}/cover.jpg",
            cost, 1, 1, 2, "Canada", f"{property_id} Main St", city, "BC", "V5K 0A1",
        ],
    )


@pytest.fixture
def lightbnb_db(tmp_path):
    """Provide a seeded LightBnB DuckDB file; the setup connection is closed before yielding."""
    db_path = tmp_path / "lightbnb.duckdb"
    today = date.today()

    con = duckdb.connect(str(db_path))
    for statement in LIGHTBNB_SCHEMA:
        con.execute(statement)

    con.executemany("INSERT INTO users VALUES ($1, $2, $3, $4)", [list(u) for u in SEED_USERS])
    for row in SEED_PROPERTIES:
        _insert_property(con, *row)

    reservations = [
        # (id, start, end, property_id, guest_id)
        (1, today + timedelta(days=10), today + timedelta(days=15), 1, 3),
        (2, today - timedelta(days=40), today - timedelta(days=30), 3, 3),
        (3, today + timedelta(days=40), today + timedelta(days=45), 2, 3),
        (4, today + timedelta(days=5), today + timedelta(days=7), 1, 2),
    ]
    con.executemany("INSERT INTO reservations VALUES ($1, $2, $3, $4, $5)", [list(r) for r in reservations])

    review_id = 0
    for property_id, ratings in SEED_RATINGS.items():
        for rating in ratings:
            review_id += 1
            con.execute(
                "INSERT INTO property_reviews VALUES ($1, $2, $3, $4, $5, $6)",
                [review_id, 3, property_id, 2, rating, "stayed here"],
            )
    con.close()

    yield db_path


@pytest.fixture
def mock_logger():
    """Provide a mock logger."""
    return MagicMock()
