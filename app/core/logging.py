"""Centralized logging configuration."""

import logging
import sys


LOGGER_NAME = "vitareach"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Configure and return the application logger."""

    level = level.upper()

    # Create logger
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level, logging.INFO))

    # Prevent duplicate handlers
    if not logger.handlers:
        # Console handler
        console_handler = logging.StreamHandler(sys.stdout)

        # Format
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )
        console_handler.setFormatter(formatter)

        logger.addHandler(console_handler)

    for handler in logger.handlers:
        handler.setLevel(getattr(logging, level, logging.INFO))

    logger.debug(f"Logging configured with level: {level}")

    return logger


# Shared logger; handlers are attached by setup_logging() at startup
logger = logging.getLogger(LOGGER_NAME)
