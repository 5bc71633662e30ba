"""Logging configuration helpers."""

import logging

LOG_FORMAT = "%(levelname)s: %(name)s: %(message)s"


def configure_logging(level_name: str = "INFO") -> None:
    """Attach one stream handler to the package logger at the given level.

    Unknown level names fall back to INFO. Repeated calls only adjust the
    level, so the API factory can run more than once per process.
    """
    logger = logging.getLogger("photo_deleter")
    level = logging.getLevelName(level_name.upper())
    logger.setLevel(level if isinstance(level, int) else logging.INFO)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
