"""Logging configuration helpers."""

import logging

LOGGER_NAME = "friends_united_admin"


def configure_logging(level: str | int = logging.INFO) -> None:
    """Configure the dashboard logger with a single stream handler.

    Repeated calls only adjust the level, so tests and reloads never stack
    handlers.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s: %(name)s: %(message)s")
    )
    logger.addHandler(handler)
    logger.propagate = False
