# File: app/core/logging_config.py

"""
Logging setup for the API.

Modules log through ``logging.getLogger(__name__)``; this installs a single
stream handler on the ``app`` logger so those records share one format.
"""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logger = logging.getLogger("app")
    logger.setLevel(level.upper())

    # create_application() may run more than once (tests)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
