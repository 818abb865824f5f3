"""
BlackPeopleEats Backend — Request Context & Access Logging Middleware
=======================================================================

What:  Gives every request a correlation id and writes one access line
       per request: method, path, status, duration, request id.
Why:   uvicorn's access log has no request id and no duration, and the
       error handlers need the id to put in every error body.

Request id:
    A client-supplied X-Request-ID is reused; otherwise 8 hex chars of a
    fresh UUID. It is published three ways: request_id_var for code running
    inside the request, request.state.request_id for the exception handlers
    (the catch-all runs outside this middleware), and the X-Request-ID
    response header.

Level by status class:
    5xx → ERROR, 4xx → WARNING, everything else → INFO

Request bodies are never logged: posts and profile updates can carry
inline data-URI images several megabytes long.
"""

import logging
import time
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("blackpeopleeats.access")

REQUEST_ID_HEADER = "X-Request-ID"

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def _status_log_level(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestContextMiddleware(BaseHTTPMiddleware):

    # Probed every few seconds by Docker; tagged but not logged
    QUIET_PATHS = {"/health"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]
        request_id_var.set(rid)
        request.state.request_id = rid

        start_time = time.perf_counter()
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid

        if request.url.path not in self.QUIET_PATHS:
            self._log_access(request, response.status_code, start_time, rid)
        return response

    @staticmethod
    def _log_access(request: Request, status: int, start_time: float, rid: str) -> None:
        duration_ms = (time.perf_counter() - start_time) * 1000
        client_ip = request.client.host if request.client else "unknown"
        logger.log(
            _status_log_level(status),
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            request.url.path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": request.url.path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )
