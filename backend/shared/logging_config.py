"""
Logging setup for the Gavel backend.

Modules log through ``logging.getLogger(__name__)``; this only installs
the root handler and level once per process.
"""

import logging

from .config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """
    Configure the root logger.

    Args:
        level: Log level name; defaults to the GAVEL_LOG_LEVEL setting
    """
    level_name = (level or get_settings().log_level).upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO), format=LOG_FORMAT)
