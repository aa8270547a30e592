"""
AP Exam Sync: Request ID Middleware
====================================

What:  Tags every request with a short ID and echoes it in `X-Request-ID`.
How:   Uses the caller's `X-Request-ID` header when present, otherwise the
       first 8 characters of a UUID4. The ID is stored in a ContextVar for
       loggers and on `request.state` for handlers.
When:  Runs before request logging so access lines carry the ID.

The ID travels only in the response header; error bodies stay `{"error": ...}`.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests share a thread but not this value
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Assigns a correlation ID to each request and returns it to the caller."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
