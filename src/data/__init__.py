"""Data layer modules."""

from .repositories.database_repository import DatabaseRepository
from .repositories.property_repository import PropertyRepository
from .repositories.reservation_repository import ReservationRepository
from .repositories.user_repository import UserRepository

__all__ = [
    "DatabaseRepository",
    "PropertyRepository",
    "ReservationRepository",
    "UserRepository",
]
