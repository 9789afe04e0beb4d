import logging
import sys
from contextvars import ContextVar
from typing import Optional

from pythonjsonlogger import jsonlogger

# X-Trace-Id of the request in flight; the middleware in main.py sets it
TRACE_ID_CTX: ContextVar[Optional[str]] = ContextVar("trace_id", default=None)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s %(trace_id)s"

# chatty third-party loggers kept at WARNING unless the root level is stricter
QUIET_LOGGERS = ("aiosqlite", "passlib", "multipart")


class TraceIdFilter(logging.Filter):
    def filter(self, record):
        record.trace_id = TRACE_ID_CTX.get()
        return True


def setup_logging(service: str, level: str = "INFO", stream=None) -> logging.Handler:
    """Send every log record to stdout as one JSON object.

    Each line carries ``service`` and the current ``trace_id``. Returns the
    installed handler.
    """
    numeric_level = logging.getLevelName(level.upper()) if isinstance(level, str) else level
    handler = logging.StreamHandler(sys.stdout if stream is None else stream)
    handler.setFormatter(
        jsonlogger.JsonFormatter(
            LOG_FORMAT,
            rename_fields={"levelname": "level"},
            static_fields={"service": service},
        )
    )
    handler.addFilter(TraceIdFilter())

    root = logging.getLogger()
    root.setLevel(numeric_level)
    root.handlers = [handler]
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(logging.WARNING, numeric_level))
    return handler
