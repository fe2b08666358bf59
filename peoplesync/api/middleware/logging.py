"""Request/response logging middleware."""

from __future__ import annotations

import logging
import time
from typing import Callable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from peoplesync.utils.monitoring import observe_request

logger = logging.getLogger("peoplesync.api")

# Metric label for requests that match no route.
UNMATCHED_PATH = "unmatched"


class LoggingMiddleware(BaseHTTPMiddleware):
    """Structured logging and Prometheus accounting for inbound HTTP requests."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()
        response = await call_next(request)
        duration = time.perf_counter() - start_time

        route = request.scope.get("route")
        path = getattr(route, "path", None) or UNMATCHED_PATH
        observe_request(request.method, path, response.status_code, duration)

        logger.info(
            "request.completed",
            extra={
                "path": request.url.path,
                "method": request.method,
                "status": response.status_code,
                "duration_ms": round(duration * 1000, 2),
                "client": request.client.host if request.client else None,
            },
        )

        return response
