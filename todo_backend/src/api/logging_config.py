"""
Logging configuration for the todo backend.

Sets up one consistent format for the application and uvicorn.
Logging must not change program behavior and never logs todo text.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


# PUBLIC_INTERFACE
def configure_logging(level: str = "INFO") -> None:
    """Configure root logging.

    Args:
        level: The log level string (DEBUG, INFO, WARNING, ERROR). Unknown
            values fall back to INFO.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )

    # Request lines are noise at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
