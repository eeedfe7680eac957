"""
Centralized logging configuration for the Instrument Data module.
"""
import logging
import sys
from typing import Optional

from instrument_data.config import Config

PACKAGE_LOGGER = "instrument_data"


def setup_logger(
    name: str,
    level: str = "INFO",
    log_format: Optional[str] = None
) -> logging.Logger:
    """
    Set up a logger with consistent formatting.

    Args:
        name: Logger name (usually __name__)
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Custom log format string

    Returns:
        logging.Logger: Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(getattr(logging, level.upper()))

    if log_format is None:
        log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    handler.setFormatter(logging.Formatter(log_format))
    logger.addHandler(handler)

    return logger


def setup_logging(config: Config) -> logging.Logger:
    """Configure the package root logger from the logging section of the config."""
    return setup_logger(
        PACKAGE_LOGGER,
        level=config.logging.level,
        log_format=config.logging.format,
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with default configuration.

    Args:
        name: Logger name (usually __name__)

    Returns:
        logging.Logger: Logger instance
    """
    return logging.getLogger(name)
