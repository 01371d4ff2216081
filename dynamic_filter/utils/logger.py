import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler

from ..config import settings


def setup_logger(name: str, log_file: str = None, level=None):
    """Configure logger with console and file handlers"""

    # Create logger
    logger = logging.getLogger(name)
    logger.setLevel(level or settings.logging.LOG_LEVEL)

    # Modules call this at import time; attach handlers only once
    if logger.handlers:
        return logger

    # Create formatter
    formatter = logging.Formatter(settings.logging.LOG_FORMAT)

    # Create console handler
    if settings.logging.ENABLE_CONSOLE_LOGGING:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    # Create file handler if log_file specified
    if log_file and settings.logging.ENABLE_FILE_LOGGING:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=settings.logging.MAX_LOG_FILE_SIZE,
            backupCount=settings.logging.MAX_LOG_FILE_COUNT
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
