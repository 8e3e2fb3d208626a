"""Process-level logging setup for applications embedding kvconnector."""

import logging

from .config import get_config

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str | int | None = None) -> None:
    """
    Configure root logging with the standard kvconnector format.

    Args:
        level: Log level name or number (default: LOG_LEVEL from configuration)
    """
    if level is None:
        level = get_config().log_level
    if isinstance(level, str):
        level = level.upper()

    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger(__name__).debug("Logging configured", extra={"level": level})
