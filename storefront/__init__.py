"""Storefront: users and their orders on top of SQLAlchemy."""

import logging

__version__ = "0.1.0"

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level="INFO") -> logging.Logger:
    """Attach a single stream handler to the `storefront` logger."""
    logger = logging.getLogger("storefront")
    logger.setLevel(level)
    if not any(getattr(handler, "_storefront", False) for handler in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._storefront = True
        logger.addHandler(handler)
    return logger
