"""
AP Exam Sync: Request Logging Middleware
=========================================

What:  One access log line per HTTP request, with status and duration.
How:   Times the downstream call and logs on the `apsync.access` logger.
When:  Inside RequestIDMiddleware, so the request ID is already set.

Log line:
    PUT /api/notes/3f2a... 403 2.4ms [a1b2c3d4] from 127.0.0.1

Level by status:
    5xx → ERROR, 4xx → WARNING, otherwise INFO

Request bodies are never logged: they carry plaintext demo passwords.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from apsync.middleware.request_id import request_id_var

logger = logging.getLogger("apsync.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs method, path, status, duration, request ID and client address.

    Health probes are passed through without a log line.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path == "/health":
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        method = request.method
        rid = request_id_var.get("")

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

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
