"""
Logging configuration
"""

import logging
import sys
from pathlib import Path
from typing import Optional
from src.config.settings import settings
from src.config.constants import LOG_FORMAT, LOG_DATE_FORMAT

LOG_FILE_NAME = "task_dashboard.log"


def _file_handler(log_dir: Optional[str]) -> Optional[logging.Handler]:
    """
    Build the DEBUG file handler

    Args:
        log_dir: Directory for the log file; empty disables file logging

    Returns:
        Handler, or None when file logging is off or the directory is unusable
    """
    if not log_dir:
        return None

    log_path = Path(log_dir) / LOG_FILE_NAME
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_path, encoding="utf-8")
    except OSError as e:
        sys.stderr.write(f"Cannot write log file {log_path}: {e}\n")
        return None

    handler.setLevel(logging.DEBUG)
    return handler


def setup_logger(name: str = "task_dashboard") -> logging.Logger:
    """
    Setup and configure logger

    Console gets INFO and above, the optional file under LOG_DIR gets
    everything from the configured level.

    Args:
        name: Logger name

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
    for old_handler in logger.handlers:
        old_handler.close()
    logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    handlers = [console_handler]

    file_handler = _file_handler(settings.LOG_DIR)
    if file_handler is not None:
        handlers.append(file_handler)

    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    if file_handler is None:
        logger.debug("File logging disabled")
    else:
        logger.debug(f"Logging to {file_handler.baseFilename}")

    return logger


# Global logger instance
logger = setup_logger()
