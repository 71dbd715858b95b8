# File: landpro/core/middleware.py

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from landpro.core.logging import request_id_var

logger = logging.getLogger("landpro.access")

SKIP_LOG_PATHS = {"/healthz"}


class RequestTimingMiddleware(BaseHTTPMiddleware):
    """
    Tags each request with an id (the caller's ``X-Request-ID`` when sent)
    that every log line emitted while handling it carries, and reports the
    handling time in ``X-Process-Time``.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        token = request_id_var.set(request_id)
        request.state.request_id = request_id
        started = time.perf_counter()
        try:
            response = await call_next(request)
            duration_ms = round((time.perf_counter() - started) * 1000, 2)
            response.headers["X-Request-ID"] = request_id
            response.headers["X-Process-Time"] = str(duration_ms)

            if request.url.path not in SKIP_LOG_PATHS:
                logger.log(
                    logging.WARNING if response.status_code >= 500 else logging.INFO,
                    "%s %s -> %s (%.1f ms)",
                    request.method,
                    request.url.path,
                    response.status_code,
                    duration_ms,
                    extra={
                        "http_method": request.method,
                        "http_path": request.url.path,
                        "http_status": response.status_code,
                        "duration_ms": duration_ms,
                    },
                )
            return response
        finally:
            request_id_var.reset(token)
