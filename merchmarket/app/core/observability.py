"""
Observability middleware and logging setup.

Adds correlation IDs and a one-line access log to every request.
"""

import time
import uuid
import logging
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("merchmarket.requests")

REQUEST_LOG_FORMAT = "%s %s %s %.2fms cid=%s ip=%s"


def configure_logging(level: str = "INFO") -> None:
    """Configure the merchmarket logger namespace once per process."""
    root = logging.getLogger("merchmarket")
    root.setLevel(level.upper())
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s"
        ))
        root.addHandler(handler)


class ObservabilityMiddleware(BaseHTTPMiddleware):
    """Tags each request with a correlation ID and logs method, path, status and timing."""

    async def dispatch(self, request: Request, call_next) -> Response:
        correlation_id = request.headers.get("X-Correlation-ID") or str(uuid.uuid4())
        start_time = time.perf_counter()

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        response.headers["X-Correlation-ID"] = correlation_id
        response.headers["X-Process-Time"] = str(round(duration_ms, 2))

        if response.status_code >= 500:
            level = logging.ERROR
        elif response.status_code >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO

        logger.log(
            level,
            REQUEST_LOG_FORMAT,
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            correlation_id,
            request.client.host if request.client else "unknown",
            extra={
                "correlation_id": correlation_id,
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )
        return response
