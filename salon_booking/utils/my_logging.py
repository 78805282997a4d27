# salon_booking/utils/my_logging.py
"""Logging configuration for the API process and the Celery worker"""
import logging
import sys
from salon_booking.config.settings import get_settings

# Request lines come from core.middleware, so uvicorn's access log is redundant
ALWAYS_QUIET = {
    "uvicorn.access": logging.WARNING,
    "kombu": logging.WARNING,
    "celery.worker.strategy": logging.WARNING,
}

# SQL echo and pool chatter are only useful while debugging a query
DEBUG_ONLY = [
    "sqlalchemy.engine",
    "sqlalchemy.pool",
]


def setup_logging(verbose=True):
    """Configure application logging"""
    settings = get_settings()

    if verbose:
        level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)]
    )

    for name, quiet_level in ALWAYS_QUIET.items():
        logging.getLogger(name).setLevel(quiet_level)

    sql_level = logging.INFO if settings.DEBUG and verbose else logging.WARNING
    for name in DEBUG_ONLY:
        logging.getLogger(name).setLevel(sql_level)

    if not verbose:
        # Silence everything but errors from libraries
        noisy_loggers = [
            "sqlalchemy",
            "sqlalchemy.orm",
            "alembic",
            "celery",
            "uvicorn",
            "uvicorn.error",
        ]
        for name in noisy_loggers:
            logger = logging.getLogger(name)
            logger.setLevel(logging.ERROR)
            logger.propagate = False
