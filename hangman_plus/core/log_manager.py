# hangman_plus/core/log_manager.py
"""
Application-wide logger.

Every module imports `logger` from here instead of configuring its own.
A console handler is always attached; a rotating file handler is added
when HANGMAN_LOG_DIR is set.
"""
import logging
import logging.handlers
import os
from typing import Optional

from hangman_plus.config import LOG_LEVEL, LOG_DIR

LOGGER_NAME = "hangman_plus"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(module)s: %(message)s"


def setup_logging(log_level: str = LOG_LEVEL, log_dir: Optional[str] = LOG_DIR) -> logging.Logger:
    """
    Configure the application logger.

    Args:
        log_level: Logging level name (DEBUG, INFO, WARNING, ERROR).
        log_dir: Directory for the rotating log file. None disables file logging.

    Returns:
        The configured logger.
    """
    level = getattr(logging, str(log_level).upper(), logging.INFO)

    configured = logging.getLogger(LOGGER_NAME)
    configured.setLevel(level)
    configured.handlers.clear()
    configured.propagate = False

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    configured.addHandler(console_handler)

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            os.path.join(log_dir, "hangman.log"),
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        configured.addHandler(file_handler)

    return configured


logger = setup_logging()
