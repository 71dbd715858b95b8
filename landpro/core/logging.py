# File: landpro/core/logging.py

"""
Logging setup for the LandPro API.

Every record is stamped with the id of the request it was emitted under, so
an upstream LLM or Stripe failure can be traced back to the call that
triggered it.
"""

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone

# Set by RequestTimingMiddleware for the duration of a request
request_id_var: ContextVar[str] = ContextVar("request_id", default="-")

# Extra attributes copied into JSON output when a log call passes them
CONTEXT_FIELDS = (
    "duration_ms",
    "http_method",
    "http_path",
    "http_status",
    "upstream",
    "upstream_status",
    "invoice_number",
    "event_id",
)

TEXT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] [%(request_id)s] %(message)s"


class RequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        return True


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "request_id": getattr(record, "request_id", "-"),
            "message": record.getMessage(),
        }
        entry.update(
            {key: getattr(record, key) for key in CONTEXT_FIELDS if hasattr(record, key)}
        )
        if record.levelno >= logging.WARNING:
            entry["where"] = f"{record.module}.{record.funcName}:{record.lineno}"
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def setup_logging(level: str = "INFO", json_output: bool = True) -> None:
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIdFilter())
    handler.setFormatter(JSONFormatter() if json_output else logging.Formatter(TEXT_FORMAT))

    root = logging.getLogger()
    root.setLevel(level.upper())
    root.handlers = [handler]

    # Client libraries log every HTTP exchange at INFO
    for name in ("uvicorn.access", "httpcore", "httpx", "stripe"):
        logging.getLogger(name).setLevel(logging.WARNING)
