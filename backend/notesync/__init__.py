"""
NoteSync: Package Initializer
=============================

What: Marks the `notesync` directory as a Python package.
Who:  Used by uvicorn (`notesync.main:app`), pytest, and the client package.

Architecture Note:
    The server half follows a layered layout:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Services (NoteStore, in-memory) │  ← exclusive mutation methods
    ├─────────────────────────────────────┤
    │          Schemas (Pydantic)         │  ← API contract, shared with client
    └─────────────────────────────────────┘

    The client half (`notesync.client`) sits on the other side of the wire:

    ┌─────────────────────────────────────┐
    │   NoteSyncController + Notifier     │  ← local view, reconciliation
    ├─────────────────────────────────────┤
    │          NoteTransport (httpx)      │  ← one coroutine per operation
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
