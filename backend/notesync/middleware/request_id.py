"""
NoteSync: Request ID Middleware
===============================

What:  Assigns a short correlation ID to each request and echoes it back.
Why:   A user who saw "Failed to update note" can quote the ID from the
       response header, and every server log line of that request carries it.
How:   Reuses a client-supplied X-Request-ID header or generates one, stores
       it in a ContextVar for loggers and error handlers, and sets it on the
       response headers.
When:  Outermost middleware, so CORS preflights and generic 500s get the
       header as well.

Alternative considered:
    Full 36-character UUIDs. Eight hex characters are enough to tell apart
    the requests of one process and short enough to read out loud.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

# Coroutine-local: concurrent requests on the same loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def internal_error_response(rid: str) -> JSONResponse:
    """The only body a client ever sees for an uncaught fault."""
    return JSONResponse(
        status_code=500,
        content={"error": "Internal Server Error", "request_id": rid},
    )


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tags each request with an ID, visible to handlers and in the response."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
