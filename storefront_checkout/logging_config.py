"""
Logging setup for the checkout API.

Every record written by the application handler carries the ID of the HTTP
request that produced it, so the shipping, tax and geolocation lines of one
checkout can be grepped out together:

    2026-10-19 12:00:00 - storefront_checkout.services.tax_utils - DEBUG - [9f1c...] Tax for QC: ...

RequestIDMiddleware in main.py binds the ID with ``bind_request_id`` for the
duration of a request; outside a request the field reads "-".

Usage:
    from storefront_checkout.logging_config import setup_logging
    setup_logging()  # once, at application startup

Environment variables:
    LOG_LEVEL: DEBUG, INFO, WARNING, ERROR or CRITICAL (default: INFO).
        Client IPs and addresses are only ever logged at DEBUG.
"""
import contextvars
import logging
import os
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Libraries whose INFO output is per-request noise (connection pool, SQL echo)
NOISY_LOGGERS = ("urllib3", "sqlalchemy.engine")

_HANDLER_NAME = "storefront_checkout"

_request_id = contextvars.ContextVar("request_id", default="-")


def bind_request_id(request_id: str) -> contextvars.Token:
    """Tag log records from the current context with ``request_id``."""
    return _request_id.set(request_id)


def unbind_request_id(token: contextvars.Token) -> None:
    _request_id.reset(token)


def current_request_id() -> str:
    return _request_id.get()


class RequestIdFilter(logging.Filter):
    """Copies the bound request ID onto each record as ``record.request_id``."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = _request_id.get()
        return True


def _resolve_level(level: Optional[str]) -> str:
    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO")
    level = level.strip().upper()
    if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        return "INFO"
    return level


def setup_logging(level: str = None) -> None:
    """
    Configure application logging.

    Installs one stdout handler on the root logger with the request-ID
    format. Calling it again only adjusts levels, so it is safe to run from
    both the app module and the launcher.

    Args:
        level: Log level name; defaults to LOG_LEVEL, and unknown names fall
               back to INFO.
    """
    level = _resolve_level(level)
    numeric_level = getattr(logging, level)

    root = logging.getLogger()
    if not any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        handler.addFilter(RequestIdFilter())
        root.addHandler(handler)
    if root.level == logging.NOTSET or root.level > numeric_level:
        root.setLevel(numeric_level)

    logging.getLogger("storefront_checkout").setLevel(numeric_level)

    noisy_level = logging.DEBUG if level == "DEBUG" else logging.WARNING
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(noisy_level)

    logging.getLogger(__name__).debug("Logging configured at %s level", level)
