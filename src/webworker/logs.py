"""
Logging setup.

Every module logs through ``logging.getLogger(__name__)``; access lines
go to the ``webworker.access`` logger so they can be routed separately:

    logging.getLogger("webworker.access").addHandler(file_handler)
"""

import logging


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

access_logger = logging.getLogger("webworker.access")


def setup_logging(log_level: str = "INFO") -> None:
    """Configure the root logger and the webworker logger level."""
    level = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
    )

    logging.getLogger("webworker").setLevel(level)
