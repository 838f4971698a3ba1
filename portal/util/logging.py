"""Logging configuration for the application."""

import logging
import sys

from portal.config import Settings


def setup_logging(settings: Settings) -> None:
    """Configure application logging.

    Sets up structured logging with appropriate levels based on environment.

    Args:
        settings: Application settings
    """
    # Determine log level based on environment
    if settings.debug:
        level = logging.DEBUG
    elif settings.environment == "test":
        level = logging.WARNING
    else:
        level = logging.INFO

    # Configure root logger
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,  # Override any existing configuration
    )

    # Set third-party loggers to WARNING to reduce noise
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    # Our application loggers stay at the configured level
    logging.getLogger("portal").setLevel(level)

    logger = logging.getLogger(__name__)
    logger.info(
        f"Logging configured: environment={settings.environment}, level={logging.getLevelName(level)}"
    )
