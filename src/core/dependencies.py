"""Dependency injection container for the application."""

from pathlib import Path
from typing import Optional
import logging

from config.settings import Settings
from data.repositories.database_repository import DatabaseRepository
from data.repositories.property_repository import PropertyRepository
from data.repositories.reservation_repository import ReservationRepository
from data.repositories.user_repository import UserRepository
from utils.logger_setup import setup_logging


class DependencyContainer:
    """Container for managing application dependencies."""

    def __init__(
        self,
        db_path: Optional[Path] = None,
        logger_name: str = Settings.LOGGER_NAME,
        logger: Optional[logging.Logger] = None,
    ):
        self.db_path = Settings.get_db_path(db_path)
        self.logger = logger or setup_logging(logger_name)

        self._database_repository = None
        self._user_repository = None
        self._property_repository = None
        self._reservation_repository = None

    @property
    def database_repository(self) -> DatabaseRepository:
        """Get or create the schema-level repository."""
        if self._database_repository is None:
            self._database_repository = DatabaseRepository(self.db_path, self.get_logger("repositories.database"))
        return self._database_repository

    @property
    def user_repository(self) -> UserRepository:
        """Get or create the user repository."""
        if self._user_repository is None:
            self._user_repository = UserRepository(self.db_path, self.get_logger("repositories.users"))
        return self._user_repository

    @property
    def property_repository(self) -> PropertyRepository:
        """Get or create the property repository."""
        if self._property_repository is None:
            self._property_repository = PropertyRepository(self.db_path, self.get_logger("repositories.properties"))
        return self._property_repository

    @property
    def reservation_repository(self) -> ReservationRepository:
        """Get or create the reservation repository."""
        if self._reservation_repository is None:
            self._reservation_repository = ReservationRepository(
                self.db_path, self.get_logger("repositories.reservations")
            )
        return self._reservation_repository

    def get_logger(self, name: Optional[str] = None) -> logging.Logger:
        """Get a child of the application logger."""
        if name:
            return self.logger.getChild(name)
        return self.logger
