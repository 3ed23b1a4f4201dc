"""
Logging setup for the user backend.

Every module logs through ``logging.getLogger(__name__)``; this module only
decides the level and the format once, at application start.
"""
# Standard library imports
import logging

# Local application imports
from .config import Settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def configure_logging(settings: Settings) -> None:
    """
    Configure the root logger from settings

    Args:
        settings: Application settings (LOG_LEVEL)
    """
    level = logging.getLevelName(settings.log_level)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
    # Motor/pymongo are chatty at DEBUG
    logging.getLogger("pymongo").setLevel(max(level, logging.INFO))
