"""Logging setup for Photo Sync."""

import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
ROOT_LOGGER = "src"
HANDLER_NAME = "photo-sync"


def setup_logging(level: str = "info") -> logging.Logger:
    """Configure the application logger.

    Args:
        level: Level name as found in ``Config.log_level``. Case-insensitive;
               unknown names fall back to INFO.
    """
    logger = logging.getLogger(ROOT_LOGGER)

    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        resolved = logging.INFO
    logger.setLevel(resolved)

    # Reconfiguring only changes the level
    if not any(h.get_name() == HANDLER_NAME for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler.set_name(HANDLER_NAME)
        logger.addHandler(handler)

    logger.debug("Logging initialized at %s level", logging.getLevelName(resolved))
    return logger
