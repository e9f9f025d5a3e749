"""Logging setup for the wardrobe import workflow.

Every logger writes to the console. When LOG_DIR is set, two rotating files
are added: wardrobe_import.log (everything) and wardrobe_import_errors.log.

These loggers do not propagate to the root logger. Their handlers are the only
output, so a host app or Celery worker that configures root logging does not
print each record a second time.

Context travels through `extra`:
    logger = get_logger(__name__)
    logger.info("Parsed email", extra={'import_job_id': job_id, 'retailer': 'Nike'})
"""

import logging
import os
from logging.handlers import RotatingFileHandler

# Unset means console only
LOG_DIR = os.getenv("LOG_DIR")

LOG_LEVEL = os.getenv("WARDROBE_LOG_LEVEL", "INFO").upper()

LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 30

CONTEXT_FIELDS = ("import_job_id", "retailer", "parse_method", "message_id")

CONSOLE_FORMAT = "[%(levelname)s] [job:%(import_job_id)s] %(message)s"
FILE_FORMAT = (
    "%(asctime)s %(levelname)-7s %(name)s "
    "job=%(import_job_id)s retailer=%(retailer)s method=%(parse_method)s "
    "msg=%(message_id)s | %(message)s"
)


class StructuredFormatter(logging.Formatter):
    """Fills missing context fields with None so format strings never fail."""

    def format(self, record):
        for name in CONTEXT_FIELDS:
            if not hasattr(record, name):
                setattr(record, name, None)
        return super().format(record)


def _rotating_handler(filename: str, level: int) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        os.path.join(LOG_DIR, filename),
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUPS,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(StructuredFormatter(FILE_FORMAT))
    return handler


def get_logger(name: str) -> logging.Logger:
    """
    Return a logger wired to the console (and log files when LOG_DIR is set).

    Handlers are attached once per logger name; later calls return the same
    logger untouched.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    console = logging.StreamHandler()
    console.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
    console.setFormatter(StructuredFormatter(CONSOLE_FORMAT))
    logger.addHandler(console)

    if LOG_DIR:
        os.makedirs(LOG_DIR, exist_ok=True)
        logger.addHandler(_rotating_handler("wardrobe_import.log", logging.DEBUG))
        logger.addHandler(_rotating_handler("wardrobe_import_errors.log", logging.ERROR))

    return logger
