import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from config.settings import Settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(module)s.%(funcName)s:%(lineno)d] - %(message)s"


def setup_logging(
    logger_name: str = Settings.LOGGER_NAME,
    log_level: int = logging.INFO,
    log_dir: Optional[Path] = None,
    console_output: bool = True,
    file_output: bool = True,
) -> logging.Logger:
    """
    Configures and returns a logger instance.

    Args:
        logger_name: The name for the logger; child loggers such as
            "lightbnb.repositories" inherit its handlers.
        log_level: The minimum log level to capture.
        log_dir: Directory for the rotating log file (defaults to Settings.LOGS_DIR).
        console_output: Whether to output logs to stdout.
        file_output: Whether to write a rotating log file.

    Returns:
        A configured logger instance.
    """
    logger = logging.getLogger(logger_name)

    # Configure once; later calls only adjust the level
    if logger.handlers:
        logger.setLevel(log_level)
        return logger

    logger.setLevel(log_level)
    formatter = logging.Formatter(LOG_FORMAT)

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if file_output:
        log_dir = log_dir or Settings.LOGS_DIR
        log_dir.mkdir(parents=True, exist_ok=True)
        sanitized_logger_name = "".join(c if c.isalnum() or c in ['_', '-'] else '_' for c in logger_name)
        file_handler = RotatingFileHandler(
            log_dir / f"{sanitized_logger_name}.log",
            maxBytes=Settings.LOG_FILE_MAX_BYTES,
            backupCount=Settings.LOG_FILE_BACKUP_COUNT,
            encoding='utf-8'
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
