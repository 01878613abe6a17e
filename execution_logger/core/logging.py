import logging
import sys
from typing import Optional

from execution_logger.core.config import settings

PACKAGE_LOGGER = "execution_logger"


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Route the execution logger's diagnostics to stdout.

    Only the package logger is touched; the application's root
    logger is left alone.

    Args:
        level: Log level name. Defaults to settings.log_level.

    Returns:
        The configured package logger.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level or settings.log_level)

    # Replace handlers from a previous call
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] [%(name)s] %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z"
    ))
    package_logger.addHandler(handler)
    package_logger.propagate = False
    return package_logger
