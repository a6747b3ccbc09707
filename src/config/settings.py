"""Application-wide settings and configuration."""

from pathlib import Path
from typing import Optional


class Settings:
    """Centralized application settings."""

    # Project paths
    PROJECT_ROOT = Path(__file__).parent.parent.parent
    DATA_DIR = PROJECT_ROOT / "data"
    LOGS_DIR = PROJECT_ROOT / "logs"

    # Default database settings
    DEFAULT_DB_PATH = DATA_DIR / "lightbnb.duckdb"

    # Query settings
    DEFAULT_RESULT_LIMIT = 10
    MAX_RESULT_LIMIT = 1000

    # Logging
    LOGGER_NAME = "lightbnb"
    LOG_FILE_MAX_BYTES = 10 * 1024 * 1024  # 10 MB
    LOG_FILE_BACKUP_COUNT = 5

    @classmethod
    def get_db_path(cls, custom_path: Optional[Path] = None) -> Path:
        """Get the database path, with optional override."""
        return Path(custom_path) if custom_path else cls.DEFAULT_DB_PATH
