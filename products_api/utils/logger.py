"""
Logging configuration
"""
import logging
import sys
from typing import Optional

from products_api.config import get_settings

settings = get_settings()

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Loggers that are too chatty at INFO for a small CRUD service
NOISY_LOGGERS = ("uvicorn.access", "sqlalchemy.engine")


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """Get a stdout logger; level follows DEBUG unless given explicitly"""
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False

    if level is None:
        level = logging.DEBUG if settings.DEBUG else logging.INFO
    logger.setLevel(level)
    return logger


def quiet_third_party_loggers() -> None:
    """Raise noisy library loggers to WARNING (left alone in DEBUG mode)"""
    if settings.DEBUG:
        return
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
