"""Logging configuration helpers."""

import logging

LOGGER_NAME = "abstract_portal"


def configure_logging(level: str = "INFO") -> None:
    """Attach one stream handler to the portal logger and set its level.

    Repeated calls only adjust the level.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper())
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    )
    logger.addHandler(handler)
    logger.propagate = False
