"""Logging configuration for the application."""

import logging
import sys

# Configure logging format
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVEL = logging.INFO


def setup_logging(level: str | int = LOG_LEVEL) -> None:
    """
    Configure application logging.

    Sets up a stdout handler on the root logger and quiets noisy libraries.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = LOG_LEVEL

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )

    # Set specific log levels for noisy libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("watchdog").setLevel(logging.WARNING)

    logging.getLogger("dynamic_catalog").setLevel(level)
    logging.getLogger("catalog_server").setLevel(level)

    logger = logging.getLogger(__name__)
    logger.info("Logging configured")

