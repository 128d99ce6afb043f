"""
NoteSync: Custom Exception Hierarchy
====================================

What:  Application-specific exceptions for both halves of the system.
How:   Each exception carries a message and an optional context dict.
       On the server, global exception handlers (registered in main.py)
       turn them into HTTP responses. On the client, the transport raises
       them and the synchronization controller turns them into transient
       notifications or local prunes.
Why:   Business code raises domain errors and never builds HTTP responses,
       so NoteStore stays usable without FastAPI.

Exception Hierarchy:
    NoteSyncError (base)
    ├── ValidationError            → 400 Bad Request (missing content)
    ├── NotFoundError              → 404 Not Found (empty body)
    └── TransportError             → client side: request never completed
        ├── RequestRejectedError   → server answered 400
        ├── RemoteNotFoundError    → server answered 404
        ├── ServerFaultError       → server answered 5xx / unexpected status
        └── MalformedResponseError → 2xx with a payload of the wrong shape
"""

from typing import Any, Dict, Optional


class NoteSyncError(Exception):
    """
    Base exception for all NoteSync errors.

    Attributes:
        message:  Human-readable description (safe to show or return)
        context:  Additional debug info (logged, never returned to clients)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


# ══════════════════════════════════════════════════════════════════════════
# Server-side errors
# ══════════════════════════════════════════════════════════════════════════


class ValidationError(NoteSyncError):
    """
    Raised when client input fails validation.

    When:    POST /notes without content, PUT/PATCH with empty content,
             request bodies of the wrong shape.
    HTTP:    400 Bad Request, body {"error": <message>, ...}
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(NoteSyncError):
    """
    Raised when a requested note does not exist.

    When:    GET/PUT/PATCH /notes/{id} with an id the store does not hold.
    HTTP:    404 Not Found, empty body.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id is not None:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


# ══════════════════════════════════════════════════════════════════════════
# Client-side errors (raised by notesync.client.transport)
# ══════════════════════════════════════════════════════════════════════════


class TransportError(NoteSyncError):
    """
    A round trip to the note server failed.

    The base class is raised directly for network-level failures (connection
    refused, DNS, reset). Subclasses describe failures where the server did
    answer but the answer is not a success.
    """

    def __init__(
        self,
        message: str = "Request to the note server failed",
        status_code: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if status_code is not None:
            ctx["status_code"] = status_code
        super().__init__(message=message, context=ctx)
        self.status_code = status_code


class RequestRejectedError(TransportError):
    """Server answered 400: the request failed validation."""


class RemoteNotFoundError(TransportError):
    """Server answered 404: the target note does not exist (any more)."""


class ServerFaultError(TransportError):
    """Server answered 5xx or another non-2xx status the client does not expect."""


class MalformedResponseError(TransportError):
    """Server answered 2xx but the payload could not be decoded into notes."""
