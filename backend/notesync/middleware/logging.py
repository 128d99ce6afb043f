"""
NoteSync: Request Logging Middleware
====================================

What:  One access-log line per request: method, path, status, duration,
       request ID, the note id the route acted on, and client address.
       Also the barrier that turns any fault escaping the routes into the
       generic 500.
Why:   The notes table is small and unpersisted; the access log is the only
       record of which note a client created, toggled or deleted.
How:   Times the downstream call and picks the log level from the status
       (5xx → ERROR, 4xx → WARNING, otherwise INFO). The note id comes from
       the matched route's path parameters, which the router writes into the
       shared ASGI scope.
When:  Inside RequestIDMiddleware and CORSMiddleware, so the request ID is
       already set and the generic 500 still gets both sets of headers.

Why catch faults here and not only in an `Exception` handler:
    Starlette serves `Exception` handlers from ServerErrorMiddleware, which
    wraps the whole middleware stack. A response built there never passes
    back through CORS or the request ID middleware, so a browser on another
    origin would see a network failure instead of a 500.

Request bodies are never logged; note content stays out of the access log.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from notesync.middleware.request_id import internal_error_response, request_id_var

logger = logging.getLogger("notesync.access")

# Probes hit this every few seconds; logging them drowns real traffic
QUIET_PATHS = frozenset({"/health"})


def _level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each notes request and converts uncaught faults to a 500."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()
        rid = request_id_var.get("")

        try:
            response = await call_next(request)
        except Exception:
            logger.error(
                "[%s] Unexpected error on %s %s",
                rid,
                request.method,
                request.url.path,
                exc_info=True,
            )
            response = internal_error_response(rid)

        if request.url.path in QUIET_PATHS:
            return response

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        note_id = request.scope.get("path_params", {}).get("note_id")
        client_ip = request.client.host if request.client else "unknown"

        logger.log(
            _level_for(status),
            "%s %s %d %.1fms [%s] note=%s from %s",
            request.method,
            request.url.path,
            status,
            duration_ms,
            rid,
            note_id if note_id is not None else "-",
            client_ip,
            extra={
                "request_id": rid,
                "note_id": note_id,
                "status": status,
                "duration_ms": round(duration_ms, 2),
            },
        )

        return response
