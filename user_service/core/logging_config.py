"""
Logging setup for the user service.

All modules log through ``logging.getLogger(__name__)``; this module only
configures the root handler once at startup and stamps every record with the
request ID of the HTTP request being served (``-`` outside of a request).
"""
import logging
import sys
from contextvars import ContextVar

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(request_id)s] %(name)s: %(message)s"
NO_REQUEST_ID = "-"

# Context variable to store the request ID across async boundaries
request_id_var: ContextVar[str] = ContextVar("request_id", default=NO_REQUEST_ID)


class RequestIdFilter(logging.Filter):
    """Logging filter to add the current request ID to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        return True


class SafeFormatter(logging.Formatter):
    """Formatter that ensures request_id always exists."""

    def format(self, record: logging.LogRecord) -> str:
        if not hasattr(record, "request_id"):
            record.request_id = NO_REQUEST_ID
        return super().format(record)


_configured = False


def setup_logging(level: str = "INFO") -> None:
    global _configured
    root = logging.getLogger()
    root.setLevel(level)
    if _configured:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(SafeFormatter(LOG_FORMAT))
    handler.addFilter(RequestIdFilter())
    root.addHandler(handler)
    _configured = True

    # psycopg_pool logs every connection attempt at INFO
    logging.getLogger("psycopg.pool").setLevel(logging.WARNING)
    logging.info("Logging is set up.")
