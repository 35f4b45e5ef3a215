# logger.py
"""
Logging for the service.

Records go to stdout under the ``employee_service`` logger; the level comes
from ``LOG_LEVEL``. Modules call ``get_logger(__name__)``.
"""

import logging
import os
import sys

SERVICE_LOGGER = "employee_service"

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_handler: logging.Handler | None = None


def configure_logging(level: str | None = None) -> logging.Logger:
    """Attach the stdout handler to the service logger and set its level.

    Safe to call repeatedly: the handler is added once, the level is
    re-applied on every call.
    """
    global _handler
    service_logger = logging.getLogger(SERVICE_LOGGER)
    if _handler is None:
        _handler = logging.StreamHandler(sys.stdout)
        _handler.setFormatter(logging.Formatter(_LOG_FORMAT, _DATE_FORMAT))
        service_logger.addHandler(_handler)
    service_logger.setLevel((level or os.getenv("LOG_LEVEL", "INFO")).upper())
    return service_logger


def get_logger(name: str) -> logging.Logger:
    if _handler is None:
        configure_logging()
    return logging.getLogger(name)
