"""
Kacchi Likhavat Backend — Request Logging Middleware
=====================================================

What:  One access-log line per HTTP request on the `likhavat.access` logger.

Log line:
    GET /api/notes 200 12.4ms [a1b2c3d4] from 127.0.0.1

Level by status class:
    5xx → ERROR, 4xx → WARNING, everything else → INFO

What we log vs what we don't:
    Logged:     method, path, status, duration, client IP, request id
    Not logged: bodies (journal text is private) and the Authorization header
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from likhavat.middleware.request_id import request_id_var

logger = logging.getLogger("likhavat.access")

# Probes hit these every few seconds
QUIET_PATHS = {"/health", "/"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        method = request.method
        path = request.url.path

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        rid = request_id_var.get("")
        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )
        return response
