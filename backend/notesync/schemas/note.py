"""
NoteSync: Pydantic Request/Response Schemas
===========================================

What:  Pydantic models defining the API contract between client and server.
How:   FastAPI uses these models to validate request bodies and serialize
       responses; the client transport uses `Note` / `NOTE_LIST_ADAPTER` to
       decode what the server sends back.
Who:   Route handlers, NoteStore, NoteTransport, NoteSyncController.
Why:   One set of models on both sides of the wire, so a field added to
       Note cannot drift between what the server sends and what the client
       accepts.

Every request-body field is optional. The "content missing" rule is enforced
by NoteStore and surfaces as a 400 with that message.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, TypeAdapter


# ══════════════════════════════════════════════════════════════════════════
# Domain / Response Models
# ══════════════════════════════════════════════════════════════════════════


class Note(BaseModel):
    """
    What:  The sole domain record.
    Who:   Returned by every notes endpoint; held in the client's local view.

    Instances are treated as values: the store and the controller replace
    records with modified copies (`model_copy`) instead of mutating them.
    """
    id: int = Field(description="Server-assigned identifier, immutable")
    content: str = Field(description="Note text (non-empty)")
    important: bool = Field(default=False, description="Importance flag")

    model_config = {"from_attributes": True}


# Decodes GET /notes payloads; raises pydantic.ValidationError on any other shape
NOTE_LIST_ADAPTER = TypeAdapter(List[Note])


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class NoteCreate(BaseModel):
    """
    Body of POST /notes.

    `important` falls back to False when omitted or null.
    """
    content: Optional[str] = Field(default=None, description="Note text (required, non-empty)")
    important: Optional[bool] = Field(default=None, description="Importance flag (default false)")


class NoteUpdate(BaseModel):
    """
    Body of PUT/PATCH /notes/{id}.

    Clients usually send the full note back (including `id`); the path id
    wins and the body id is ignored. Omitted fields keep their value.
    """
    id: Optional[int] = Field(default=None, description="Ignored, the path id is authoritative")
    content: Optional[str] = Field(default=None, description="Replacement text (non-empty)")
    important: Optional[bool] = Field(default=None, description="Replacement importance flag")


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Error body for 400 and 500 responses.

    Example:
        {"error": "content missing", "details": {"field": "content"}, "request_id": "1f2e3d4c"}
    """
    error: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring probes."""
    status: str = Field(description="Overall service status")
    version: str = Field(description="Application version")
    note_count: int = Field(description="Number of notes currently held in memory")
    uptime_seconds: float = Field(description="Seconds since service started")
